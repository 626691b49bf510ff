from .. import util
from ..exceptions import (
    MissingArtifact,
    ToolFailed,
    ERROR_OPENSSL_MISSING,
    ERROR_OPENSSL_VERSION,
    ERROR_TOOL_EXIT,
)
from ..models import FailureReason
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        openssl_bin = self._configuration.paths.openssl_bin
        defaults = self._configuration.defaults
        if not util.is_executable(openssl_bin):
            raise MissingArtifact(ERROR_OPENSSL_MISSING.format(path=openssl_bin))

        proc = util.run_command(
            [openssl_bin, "version"],
            timeout=defaults.command_timeout,
            env=self._environ,
        )
        # openssl prints load errors for a broken provider config on stderr
        version = util.first_line(proc.stdout) or util.first_line(proc.stderr)
        if proc.returncode != 0:
            raise ToolFailed(
                ERROR_TOOL_EXIT.format(
                    command=f"{openssl_bin} version", returncode=proc.returncode
                ),
                returncode=proc.returncode,
                output=version,
            )
        self.passed(f"OpenSSL found: {version}")

        if not version.startswith(defaults.openssl_version_prefix):
            message = ERROR_OPENSSL_VERSION.format(
                prefix=defaults.openssl_version_prefix, version=version
            )
            if defaults.strict_openssl_version:
                self.error(message, FailureReason.TOOL_FAILED)
            else:
                self.warn(message)
