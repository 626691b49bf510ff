import logging
from typing import Union, Mapping

from rich.console import Console

from .. import cli, constants, validate
from ..checks import ValidationReport
from ..config import get_config
from ..exceptions import ConfigurationError
from ..models import FailureReason, ValidatorConfig
from ..outputs.json import report_data, report_paths, save_to

__module__ = "valkeyfips.cli.check"

logger = logging.getLogger(__name__)


def resolve_config(
    con: Union[Console, None],
    environ: Mapping[str, str],
    config_file: Union[str, None] = None,
    variant: Union[str, None] = None,
) -> Union[ValidatorConfig, None]:
    try:
        return get_config(filename=config_file, variant=variant, environ=environ)
    except ConfigurationError as err:
        logger.error(err)
        cli.failln(str(err), result_text="CONFIG", aside="core", con=con)
        cli.banner(
            ["✗ FIPS VALIDATION FAILED", "Validator configuration is invalid"],
            con=con,
            style=constants.CLI_COLOR_FAIL,
        )
        return None


def check(
    con: Union[Console, None],
    environ: Mapping[str, str],
    config_file: Union[str, None] = None,
    variant: Union[str, None] = None,
    json_file: Union[str, None] = None,
) -> tuple[Union[ValidatorConfig, None], Union[ValidationReport, None]]:
    cli.banner(
        ["Valkey FIPS Container Startup", "Ubuntu 22.04 + Bitnami Scripts"],
        con=con,
        style=constants.CLI_COLOR_PRIMARY,
    )
    config = resolve_config(con, environ, config_file, variant)
    if config is None:
        return None, None
    cli.outputln(
        config.variant or "custom paths",
        result_text="VARIANT",
        aside="core",
        con=con,
    )
    report = validate(config, console=con, environ=environ)
    status = "passed" if report.passed else "failed"
    data = report_data(report)
    unwritten = []
    for report_file in report_paths(
        config, extra_paths=[json_file or environ.get(constants.ENV_REPORT_FILE)]
    ):
        try:
            log_file = save_to(
                template_filename=report_file,
                data=data,
                variant=config.variant or "custom",
                status=status,
            )
        except (OSError, KeyError, ValueError) as err:
            logger.error(f"Unable to save report {report_file}: {err!r}")
            cli.failln(
                f"Unable to save report {report_file}: {err!r}",
                aside="outputs",
                con=con,
                use_icons=config.use_icons(),
            )
            unwritten.append(report_file)
            continue
        cli.outputln(
            log_file,
            aside="core",
            result_text="SAVED",
            result_icon=":floppy_disk:",
            con=con,
            use_icons=config.use_icons(),
        )
    if unwritten and report.passed:
        # a requested report that cannot be written blocks the handoff
        report.passed = False
        report.failed_check = "outputs"
        report.reason = FailureReason.CONFIGURATION.value
        cli.banner(
            ["✗ FIPS VALIDATION FAILED", "Validation report could not be saved"],
            con=con,
            style=constants.CLI_COLOR_FAIL,
        )
    return config, report
