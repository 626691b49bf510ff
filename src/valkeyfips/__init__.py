import sys
import logging
from os import environ as os_environ
from datetime import datetime, timezone
from importlib import import_module
from time import monotonic
from typing import Union, Mapping

from rich.console import Console

from . import cli, constants
from .exceptions import CheckNotRelevant, ValidationFailure
from .models import FailureReason, ValidatorConfig, CheckMetadata
from .checks import BaseCheckTask, CheckResult, ValidationReport

__module__ = "valkeyfips"

assert sys.version_info >= (3, 9), "Requires Python 3.9 or newer"
logger = logging.getLogger(__name__)


class FipsValidator:
    _console: Console = None
    config: ValidatorConfig

    def __init__(
        self,
        config: ValidatorConfig,
        console: Console = None,
        environ: Union[Mapping[str, str], None] = None,
    ) -> None:
        self.config = config
        self._console = console
        self._environ = dict(os_environ if environ is None else environ)
        self._use_icons = config.use_icons()

    def _check_task(self, metadata: CheckMetadata, step: str) -> BaseCheckTask:
        logger.info(f"checks.{metadata.key}")
        _cls = getattr(
            import_module(f".checks.{metadata.key}", package="valkeyfips"),
            "CheckTask",
        )
        return _cls(
            metadata,
            self.config,
            self._environ,
            console=self._console,
            step=step,
        )

    def run_check(self, metadata: CheckMetadata, number: int) -> CheckResult:
        total = len(self.config.checks)
        step = f"[{number}/{total}]"
        result = CheckResult(
            key=metadata.key,
            name=metadata.label_as,
            step=number,
            status=constants.CHECK_STATUS_PASS,
            summary=metadata.label_as,
        )
        if self._console:
            self._console.print()
        cli.outputln(
            metadata.probe_info or metadata.label_as,
            result_text=step,
            bold_result=True,
            con=self._console,
            use_icons=False,
        )
        started = monotonic()
        try:
            task = self._check_task(metadata, step)
        except ImportError as err:
            # only the check module itself missing means the key is unknown
            unknown = (
                isinstance(err, ModuleNotFoundError)
                and err.name == f"valkeyfips.checks.{metadata.key}"
            )
            logger.error(err, exc_info=not unknown)
            result.status = constants.CHECK_STATUS_FAIL
            if unknown:
                result.reason = FailureReason.CONFIGURATION.value
                result.summary = f"Unknown check {metadata.key}"
                message = result.summary
            else:
                result.reason = FailureReason.TOOL_FAILED.value
                result.summary = metadata.failure_summary
                message = f"{type(err).__name__}: {err}"
            result.details = [{"level": constants.RESULT_LEVEL_FAIL, "message": message}]
            cli.failln(
                message,
                result_text=type(err).__name__,
                aside=metadata.key,
                con=self._console,
                use_icons=self._use_icons,
            )
            return result
        try:
            task.run()
        except CheckNotRelevant as err:
            result.status = constants.CHECK_STATUS_SKIP
            result.summary = str(err)
            cli.warnln(
                str(err),
                result_text="SKIP!",
                aside=metadata.key,
                con=self._console,
                use_icons=self._use_icons,
            )
        except ValidationFailure as err:
            task.fail(err)
        except Exception as ex:  # pylint: disable=broad-except
            logger.error(ex, exc_info=True)
            task.error(f"{type(ex).__name__}: {ex}", FailureReason.TOOL_FAILED)

        result.duration_seconds = round(monotonic() - started, 3)
        result.details = [
            {"level": detail.level, "message": detail.message}
            for detail in task.details
        ]
        if task.failures:
            result.status = constants.CHECK_STATUS_FAIL
            result.reason = task.failures[0].reason.value
            result.summary = metadata.failure_summary
        return result

    def run_checks(self) -> ValidationReport:
        """
        Executes the checklist in order, stopping at the first failed step.
        The report only passes when every step passed or was skipped.
        """
        run_start = monotonic()
        report = ValidationReport(
            variant=self.config.variant,
            started=datetime.now(timezone.utc).replace(microsecond=0).isoformat(),
        )
        for number, metadata in enumerate(self.config.checks, start=1):
            result = self.run_check(metadata, number)
            report.results.append(result)
            if result.failed:
                report.failed_check = result.key
                report.reason = result.reason
                break
        else:
            report.passed = True
        report.duration_seconds = round(monotonic() - run_start, 3)

        if self._console:
            self._console.print()
        if report.passed:
            cli.banner(
                ["✓ ALL FIPS CHECKS PASSED"],
                con=self._console,
                style=constants.CLI_COLOR_PASS,
            )
        else:
            failed = report.results[-1]
            cli.banner(
                ["✗ FIPS VALIDATION FAILED", failed.summary],
                con=self._console,
                style=constants.CLI_COLOR_FAIL,
            )
            logger.error(
                f"FIPS validation failed at {failed.key} ({failed.reason}): {failed.summary}"
            )
        return report


def validate(
    config: ValidatorConfig,
    console: Console = None,
    environ: Union[Mapping[str, str], None] = None,
) -> ValidationReport:
    return FipsValidator(config, console=console, environ=environ).run_checks()
