from pathlib import Path

from ..exceptions import MissingArtifact, ERROR_WOLFSSL_MISSING
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        paths = self._configuration.paths
        lib_dir = Path(paths.wolfssl_lib_dir)
        preferred = lib_dir / "libwolfssl.so"
        if preferred.is_file():
            library = preferred
        else:
            candidates = sorted(
                candidate
                for candidate in lib_dir.glob(paths.wolfssl_lib_pattern)
                if candidate.is_file()
            )
            if not candidates:
                raise MissingArtifact(
                    ERROR_WOLFSSL_MISSING.format(directory=paths.wolfssl_lib_dir)
                )
            library = candidates[0]
        self.passed(f"wolfSSL library: {library}")
