from typing import Union

from .models import FailureReason

__module__ = "valkeyfips.exceptions"

ERROR_UNSUPPORTED_ARCH = "Unsupported CPU architecture: {arch}"
ERROR_KERNEL_TOO_OLD = "Kernel version {kernel} is below minimum validated version ({minimum})"
ERROR_ENV_NOT_SET = "{name} is not set"
ERROR_ENV_FILE_MISSING = "{name} file does not exist: {value}"
ERROR_ENV_DIRECTORY_MISSING = "{name} directory does not exist: {value}"
ERROR_OPENSSL_MISSING = "OpenSSL binary not found or not executable: {path}"
ERROR_OPENSSL_VERSION = "Expected {prefix}x, got: {version}"
ERROR_TOOL_EXIT = "{command} exited with status {returncode}"
ERROR_WOLFSSL_MISSING = "wolfSSL library not found in {directory}/"
ERROR_PROVIDER_MODULE_MISSING = "wolfProvider module not found: {path}"
ERROR_PROVIDER_NOT_LOADED = "Provider {name} is not listed by openssl list -providers"
ERROR_SYSTEM_LIBRARY_MISSING = "Expected FIPS OpenSSL library not found: {path}"
ERROR_REFERENCE_LIBRARY_MISSING = "FIPS OpenSSL library not found: {path}"
ERROR_DIGEST_MISMATCH = "Library at {system} does not match FIPS OpenSSL (system SHA256: {system_hash}, FIPS SHA256: {reference_hash})"
ERROR_UNEXPECTED_LIBRARY = "Unexpected system OpenSSL library found: {path} (different from {target})"
ERROR_UNEXPECTED_LIBRARY_NO_TARGET = "Unexpected system OpenSSL library found: {path} (no matching FIPS library)"
ERROR_SELF_TEST_MISSING = "FIPS check utility not found: {path}"
ERROR_SELF_TEST_FAILED = "FIPS self-test {path} exited with status {returncode}"
ERROR_COMMAND_TIMEOUT = "{command} did not finish within {timeout:g} seconds"
ERROR_ENTRYPOINT_MISSING = "Entrypoint not found or not executable: {path}"


class ValidationFailure(Exception):
    """Raised by a check task when the environment cannot be positively confirmed"""

    reason: FailureReason = FailureReason.CONFIGURATION

    def __init__(self, message: str, reason: Union[FailureReason, None] = None):
        super().__init__(message)
        if reason is not None:
            self.reason = reason


class UnsupportedPlatform(ValidationFailure):
    reason = FailureReason.UNSUPPORTED_PLATFORM


class EnvironmentMisconfigured(ValidationFailure):
    reason = FailureReason.ENVIRONMENT


class MissingArtifact(ValidationFailure):
    reason = FailureReason.MISSING_ARTIFACT


class IntegrityViolation(ValidationFailure):
    reason = FailureReason.INTEGRITY


class ToolFailed(ValidationFailure):
    reason = FailureReason.TOOL_FAILED

    def __init__(self, message: str, returncode: int = None, output: str = None):
        super().__init__(message)
        self.returncode = returncode
        self.output = output


class SelfTestFailed(ToolFailed):
    reason = FailureReason.SELF_TEST


class CommandTimeout(ValidationFailure):
    reason = FailureReason.TIMEOUT

    def __init__(self, command: str, timeout: float):
        super().__init__(ERROR_COMMAND_TIMEOUT.format(command=command, timeout=timeout))
        self.command = command
        self.timeout = timeout


class CheckNotRelevant(Exception):
    pass


class ConfigurationError(ValueError):
    """The validator configuration could not be resolved, the container must not start"""


class HandoffError(OSError):
    pass
