from enum import Enum
from typing import Union, Optional

from pydantic import (
    BaseModel,
    Field,
    PositiveFloat,
    field_validator,
)


class FailureReason(str, Enum):
    UNSUPPORTED_PLATFORM = "unsupported_platform"
    ENVIRONMENT = "environment_misconfigured"
    MISSING_ARTIFACT = "missing_artifact"
    INTEGRITY = "integrity_violation"
    TOOL_FAILED = "tool_failed"
    SELF_TEST = "self_test_failed"
    TIMEOUT = "command_timeout"
    CONFIGURATION = "configuration_error"


class OutputType(str, Enum):
    JSON = "json"
    CONSOLE = "console"


class VariableKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"
    SEARCH_PATH = "search_path"
    VALUE = "value"


class ConfigDefaults(BaseModel):
    command_timeout: PositiveFloat = Field(
        default=30, description="seconds allowed for openssl invocations"
    )
    self_test_timeout: PositiveFloat = Field(
        default=120, description="seconds allowed for the FIPS self-test binary"
    )
    skip_self_test_env: str = Field(default="SKIP_FIPS_CHECK")
    skip_self_test_value: str = Field(default="true")
    openssl_version_prefix: str = Field(default="OpenSSL 3.")
    strict_openssl_version: bool = Field(default=False)
    architectures: list[str] = Field(default=["x86_64"])
    min_kernel_version: Optional[str] = Field(default=None)

    @field_validator("architectures")
    @classmethod
    def architectures_not_empty(cls, value: list[str]) -> list[str]:
        if not value:
            raise ValueError("at least one supported architecture is required")
        return value


class EnvironmentVariable(BaseModel):
    name: str
    kind: VariableKind = Field(default=VariableKind.VALUE)


class CpuFeature(BaseModel):
    flag: str
    label: str
    available: str = Field(default="Available")
    missing: str = Field(default="Not available")


class LibraryPair(BaseModel):
    system: str = Field(description="library path the dynamic linker resolves")
    reference: str = Field(description="trusted FIPS build of the same library")


class HardlinkPair(BaseModel):
    path: str = Field(description="path that should not hold a separate library")
    target: str = Field(description="file it must be the same inode as")


class PathsConfig(BaseModel):
    openssl_bin: str
    wolfssl_lib_dir: str
    wolfssl_lib_pattern: str = Field(default="libwolfssl.so*")
    modules_env: str = Field(default="OPENSSL_MODULES")
    provider_module: str = Field(default="libwolfprov.so")
    provider_name: str = Field(default="wolfprov")
    fips_libraries: list[LibraryPair] = Field(default=[])
    hardlinked_libraries: list[HardlinkPair] = Field(default=[])
    other_crypto_libraries: list[str] = Field(default=[])
    self_test_bin: str = Field(default="/usr/local/bin/fips-startup-check")
    entrypoint: str = Field(default="/opt/bitnami/scripts/valkey/entrypoint.sh")
    cpuinfo: str = Field(default="/proc/cpuinfo")


class CheckMetadata(BaseModel):
    key: str
    label_as: str
    probe_info: Union[str, None] = Field(default=None)
    failure_summary: str = Field(default="FIPS validation step failed")


class ConfigOutput(BaseModel):
    type: OutputType
    use_icons: Union[bool, None] = Field(default=None)
    path: Union[str, None] = Field(default=None)


class ValidatorConfig(BaseModel):
    variant: Union[str, None] = Field(default=None)
    defaults: ConfigDefaults = Field(default_factory=ConfigDefaults)
    environment: list[EnvironmentVariable]
    cpu_features: list[CpuFeature] = Field(default=[])
    paths: PathsConfig
    checks: list[CheckMetadata]
    outputs: list[ConfigOutput] = Field(default=[])

    @field_validator("checks")
    @classmethod
    def checks_not_empty(cls, value: list[CheckMetadata]) -> list[CheckMetadata]:
        if not value:
            raise ValueError("the validation checklist cannot be empty")
        keys = [check.key for check in value]
        if len(set(keys)) != len(keys):
            raise ValueError(f"duplicate check keys in {keys}")
        return value

    def use_icons(self) -> bool:
        return any(
            n.type == OutputType.CONSOLE and n.use_icons for n in self.outputs
        )
