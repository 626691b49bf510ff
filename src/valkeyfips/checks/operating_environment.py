import platform

from .. import util
from ..exceptions import (
    UnsupportedPlatform,
    ERROR_UNSUPPORTED_ARCH,
    ERROR_KERNEL_TOO_OLD,
)
from ..models import FailureReason
from . import BaseCheckTask


class CheckTask(BaseCheckTask):
    def run(self):
        defaults = self._configuration.defaults
        kernel = platform.release()
        self.info(f"Detected kernel: {kernel}")
        if defaults.min_kernel_version:
            if util.parse_version(kernel) < util.parse_version(
                defaults.min_kernel_version
            ):
                self.fail(
                    UnsupportedPlatform(
                        ERROR_KERNEL_TOO_OLD.format(
                            kernel=kernel, minimum=defaults.min_kernel_version
                        )
                    )
                )
            else:
                self.passed(f"Kernel version: {kernel} (validated range)")

        arch = platform.machine()
        if arch not in defaults.architectures:
            self.error(
                ERROR_UNSUPPORTED_ARCH.format(arch=arch),
                FailureReason.UNSUPPORTED_PLATFORM,
            )
            self.info(
                f"wolfSSL FIPS CMVP validation requires {' or '.join(defaults.architectures)} architecture"
            )
        else:
            self.passed(f"CPU architecture: {arch}")

        flags = util.read_cpu_flags(self._configuration.paths.cpuinfo)
        if flags is None:
            self.warn(f"Cannot read {self._configuration.paths.cpuinfo}")
            return
        for feature in self._configuration.cpu_features:
            if feature.flag in flags:
                self.passed(f"{feature.label}: {feature.available}")
            else:
                self.warn(f"{feature.label}: {feature.missing}")
