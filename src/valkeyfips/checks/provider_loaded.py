from .. import util
from ..exceptions import (
    EnvironmentMisconfigured,
    MissingArtifact,
    ToolFailed,
    ERROR_OPENSSL_MISSING,
    ERROR_PROVIDER_NOT_LOADED,
    ERROR_TOOL_EXIT,
)
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        paths = self._configuration.paths
        if not util.is_executable(paths.openssl_bin):
            raise MissingArtifact(ERROR_OPENSSL_MISSING.format(path=paths.openssl_bin))
        proc = util.run_command(
            [paths.openssl_bin, "list", "-providers"],
            timeout=self._configuration.defaults.command_timeout,
            env=self._environ,
        )
        if proc.returncode != 0:
            raise ToolFailed(
                ERROR_TOOL_EXIT.format(
                    command=f"{paths.openssl_bin} list -providers",
                    returncode=proc.returncode,
                ),
                returncode=proc.returncode,
                output=proc.stderr,
            )
        if paths.provider_name not in proc.stdout:
            raise EnvironmentMisconfigured(
                ERROR_PROVIDER_NOT_LOADED.format(name=paths.provider_name)
            )
        self.passed(f"Provider loaded: {paths.provider_name}")
