import logging
from pathlib import Path
from typing import Union

import yaml
from rich.console import Console
from rich.prompt import Prompt, Confirm

from .. import cli, constants
from ..config import variants_config, DEFAULT_CONFIG

__module__ = "valkeyfips.cli.generate"

logger = logging.getLogger(__name__)


def generate(
    con: Console,
    variant: Union[str, None] = None,
    output: Union[str, None] = None,
    force: bool = False,
) -> int:
    """Writes a config file holding the paths of one build variant, ready to edit."""
    variants = variants_config()
    try:
        if not variant:
            variant = Prompt.ask(
                f"Select a build variant [{constants.CLI_COLOR_INFO}](Ctrl+C to exit)[/{constants.CLI_COLOR_INFO}]",
                choices=sorted(variants),
                console=con,
            )
        if variant not in variants:
            cli.failln(
                f"Unknown build variant '{variant}', expected one of {', '.join(sorted(variants))}",
                aside="core",
                con=con,
            )
            return 1
        conf_path = output or DEFAULT_CONFIG
        config_file = Path(conf_path)
        if (
            config_file.is_file()
            and not force
            and not Confirm.ask(
                f"Do you want to over write {conf_path}?", default=False, console=con
            )
        ):
            return 1
        conf = {"variant": variant, **variants[variant]}
        config_file.parent.mkdir(parents=True, exist_ok=True)
        config_file.write_text(
            yaml.safe_dump(conf, default_flow_style=False, sort_keys=False),
            encoding="utf-8",
        )
        cli.outputln(
            conf_path,
            aside="core",
            result_text="SAVED",
            result_icon=":floppy_disk:",
            con=con,
        )
    except KeyboardInterrupt:
        return 1
    return 0
