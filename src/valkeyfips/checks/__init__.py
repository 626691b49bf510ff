import logging
from dataclasses import dataclass, field
from typing import Mapping, Union

from rich.console import Console

from .. import cli, constants
from ..exceptions import ValidationFailure
from ..models import FailureReason, ValidatorConfig, CheckMetadata

logger = logging.getLogger(__name__)


@dataclass
class CheckDetail:
    level: str
    message: str


@dataclass
class CheckFailure:
    reason: FailureReason
    message: str


class BaseCheckTask:
    """
    One item of the startup checklist.

    Subclasses implement `run()`. Problems that should still let the rest of
    the step be reported are recorded with `error()`, anything that makes the
    remainder of the step meaningless is raised as a ValidationFailure.
    """

    metadata: CheckMetadata
    details: list[CheckDetail]
    failures: list[CheckFailure]

    def __init__(
        self,
        metadata: CheckMetadata,
        configuration: ValidatorConfig,
        environ: Mapping[str, str],
        console: Union[Console, None] = None,
        step: str = "",
    ) -> None:
        self.metadata = metadata
        self._configuration = configuration
        self._environ = environ
        self._console = console
        self._step = step
        self.details = []
        self.failures = []

    @property
    def key(self) -> str:
        return self.metadata.key

    @property
    def name(self) -> str:
        return self.metadata.label_as

    def run(self) -> None:
        raise NotImplementedError

    def _record(self, level: str, message: str, **kwargs):
        self.details.append(CheckDetail(level=level, message=message))
        cli.outputln(
            message,
            result_level=level,
            aside=self.key,
            step=self._step,
            con=self._console,
            use_icons=self._configuration.use_icons(),
            **kwargs,
        )

    def passed(self, message: str):
        self._record(constants.RESULT_LEVEL_PASS, message)

    def info(self, message: str):
        self._record(constants.RESULT_LEVEL_INFO, message)

    def warn(self, message: str):
        logger.warning(message)
        self._record(constants.RESULT_LEVEL_WARN, message)

    def error(self, message: str, reason: FailureReason):
        logger.error(message)
        self.failures.append(CheckFailure(reason=reason, message=message))
        self._record(constants.RESULT_LEVEL_FAIL, message)

    def fail(self, err: ValidationFailure):
        self.error(str(err), err.reason)


@dataclass
class CheckResult:
    key: str
    name: str
    step: int
    status: str
    summary: str
    reason: Union[str, None] = None
    details: list[dict[str, str]] = field(default_factory=list)
    duration_seconds: float = 0.0

    @property
    def failed(self) -> bool:
        return self.status == constants.CHECK_STATUS_FAIL


@dataclass
class ValidationReport:
    variant: Union[str, None]
    started: str
    passed: bool = False
    failed_check: Union[str, None] = None
    reason: Union[str, None] = None
    duration_seconds: float = 0.0
    results: list[CheckResult] = field(default_factory=list)
