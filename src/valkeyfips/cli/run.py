import logging
from typing import Union, Mapping, Sequence

from rich.console import Console

from .. import cli, handoff
from ..exceptions import HandoffError
from .check import check

__module__ = "valkeyfips.cli.run"

logger = logging.getLogger(__name__)


def run(
    args: Sequence[str],
    con: Union[Console, None],
    environ: Mapping[str, str],
    config_file: Union[str, None] = None,
    variant: Union[str, None] = None,
    json_file: Union[str, None] = None,
) -> int:
    """
    Validates the container and, only when every check passed, replaces this
    process with the configured entrypoint. Returns 1 on any failure.
    """
    config, report = check(
        con,
        environ,
        config_file=config_file,
        variant=variant,
        json_file=json_file,
    )
    if report is None or not report.passed:
        return 1

    cli.infoln(
        f"Handing control to {config.paths.entrypoint}",
        aside="core",
        result_text="EXEC",
        con=con,
    )
    try:
        handoff.exec_entrypoint(config.paths.entrypoint, args)
    except HandoffError as err:
        logger.error(err)
        cli.failln(str(err), aside="handoff", con=con)
    return 1
