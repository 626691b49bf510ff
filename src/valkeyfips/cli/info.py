import logging
from typing import Union, Mapping

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from .. import constants
from .check import resolve_config

__module__ = "valkeyfips.cli.info"

logger = logging.getLogger(__name__)


def info(
    con: Console,
    environ: Mapping[str, str],
    config_file: Union[str, None] = None,
    variant: Union[str, None] = None,
) -> int:
    config = resolve_config(con, environ, config_file, variant)
    if config is None:
        return 1
    logger.debug(config)

    table = Table(title=f"Build variant: {config.variant or 'custom paths'}")
    table.add_column(
        "Setting", justify="right", style=constants.CLI_COLOR_PRIMARY, no_wrap=True
    )
    table.add_column("Value")
    for key, value in config.paths.model_dump().items():
        if isinstance(value, list):
            value = "\n".join(
                " -> ".join(item.values()) if isinstance(item, dict) else item
                for item in value
            )
        table.add_row(key, escape(str(value)) if value else "[dim]none[/dim]")
    for key, value in config.defaults.model_dump().items():
        table.add_row(key, escape(str(value)))
    for variable in config.environment:
        current = environ.get(variable.name)
        table.add_row(
            f"${variable.name} ({variable.kind.value})",
            escape(current)
            if current
            else f"[{constants.CLI_COLOR_FAIL}]not set[/{constants.CLI_COLOR_FAIL}]",
        )
    con.print(table)

    checks = Table(title="Checklist")
    checks.add_column("Step", justify="right", no_wrap=True)
    checks.add_column("Check", style=constants.CLI_COLOR_INFO, no_wrap=True)
    checks.add_column("Label")
    for number, metadata in enumerate(config.checks, start=1):
        checks.add_row(str(number), metadata.key, escape(metadata.label_as))
    con.print(checks)
    return 0
