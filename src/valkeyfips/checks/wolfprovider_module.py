from pathlib import Path

from ..exceptions import (
    EnvironmentMisconfigured,
    MissingArtifact,
    ERROR_ENV_NOT_SET,
    ERROR_PROVIDER_MODULE_MISSING,
)
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        paths = self._configuration.paths
        modules_dir = self._environ.get(paths.modules_env, "")
        if not modules_dir:
            raise EnvironmentMisconfigured(
                ERROR_ENV_NOT_SET.format(name=paths.modules_env)
            )
        module = Path(modules_dir) / paths.provider_module
        if not module.is_file():
            self.fail(
                MissingArtifact(ERROR_PROVIDER_MODULE_MISSING.format(path=module))
            )
            self._list_modules(Path(modules_dir))
            return

        self.passed(f"wolfProvider module: {module}")
        self.passed(f"Module size: {module.stat().st_size} bytes")

    def _list_modules(self, modules_dir: Path):
        try:
            available = sorted(entry.name for entry in modules_dir.iterdir())
        except OSError:
            self.info("(directory listing failed)")
            return
        self.info(
            f"Available modules in {modules_dir}: {', '.join(available) or '(none)'}"
        )
