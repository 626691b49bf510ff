import os
import sys
import logging
import argparse
from typing import Union, Mapping, Sequence

from rich.console import Console
from rich.logging import RichHandler
from art import text2art

from .. import constants
from ..config import DEFAULT_CONFIG
from .check import check
from .generate import generate
from .info import info
from .run import run

__module__ = "valkeyfips.cli"
__version__ = "1.0.0"

APP_BANNER = text2art("valkey-fips", font="tarty4")
LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

assert sys.version_info >= (3, 9), "Requires Python 3.9 or newer"
logger = logging.getLogger(__name__)


class _HelpAction(argparse._HelpAction):
    def __call__(self, parser, namespace, values, option_string=None):
        parser.print_help()
        parser.exit()


def _console() -> Console:
    if sys.stdout.isatty():
        return Console()
    # container logs, keep digests and paths on one line
    return Console(width=200, highlight=False)


def configure_logging(log_level: int, quiet: bool = False):
    handlers = []
    log_format = "%(asctime)s - %(name)s - [%(levelname)s] %(message)s"
    if not quiet and sys.stderr.isatty():
        log_format = "%(message)s"
        handlers.append(RichHandler(rich_tracebacks=True))
    logging.basicConfig(format=log_format, level=log_level, handlers=handlers or None)


def _options() -> argparse.ArgumentParser:
    options = argparse.ArgumentParser(add_help=False)
    options.add_argument("--version", dest="show_version", action="store_true")
    options.add_argument("--no-banner", dest="hide_banner", action="store_true")
    options.add_argument(
        "-q",
        "--quiet",
        help="show no stdout (useful in automation when producing structured data outputs)",
        dest="quiet",
        action="store_true",
    )
    options.add_argument(
        "-c",
        "--config",
        help=f"Provide the path to a configuration file (Default: ${constants.ENV_CONFIG_FILE} or {DEFAULT_CONFIG})",
        dest="config_file",
        default=None,
    )
    options.add_argument(
        "-V",
        "--variant",
        help=f"Build variant whose install paths are validated (Default: ${constants.ENV_VARIANT})",
        dest="variant",
        default=None,
    )
    group = options.add_mutually_exclusive_group()
    group.add_argument(
        "-v",
        "--errors-only",
        help="set logging level to ERROR (default CRITICAL)",
        dest="log_level_error",
        action="store_true",
    )
    group.add_argument(
        "-vv",
        "--warning",
        help="set logging level to WARNING (default CRITICAL)",
        dest="log_level_warning",
        action="store_true",
    )
    group.add_argument(
        "-vvv",
        "--info",
        help="set logging level to INFO (default CRITICAL)",
        dest="log_level_info",
        action="store_true",
    )
    group.add_argument(
        "-vvvv",
        "--debug",
        help="set logging level to DEBUG (default CRITICAL)",
        dest="log_level_debug",
        action="store_true",
    )
    return options


def _parser() -> argparse.ArgumentParser:
    options = _options()
    cli = argparse.ArgumentParser(
        prog="valkey-fips",
        description=f"Release {__version__} FIPS 140-3 startup validation for Valkey containers",
        add_help=False,
        parents=[options],
    )
    cli.add_argument("-h", "--help", action=_HelpAction)
    sub_parsers = cli.add_subparsers()
    check_parser = sub_parsers.add_parser(
        "check",
        prog="valkey-fips check",
        description=cli.description,
        add_help=False,
        help="Run the FIPS startup checklist without starting the server",
        parents=[options],
    )
    check_parser.set_defaults(subcommand="check")
    check_parser.add_argument("-h", "--help", action=_HelpAction)
    check_parser.add_argument(
        "-O",
        "--json-file",
        help="Store the validation report to file as JSON",
        dest="json_file",
        default=None,
    )
    run_parser = sub_parsers.add_parser(
        "run",
        prog="valkey-fips run",
        description=cli.description,
        add_help=False,
        help="Run the FIPS startup checklist then exec the entrypoint with ARGS",
        parents=[options],
    )
    run_parser.set_defaults(subcommand="run")
    run_parser.add_argument("-h", "--help", action=_HelpAction)
    run_parser.add_argument(
        "-O",
        "--json-file",
        help="Store the validation report to file as JSON",
        dest="json_file",
        default=None,
    )
    run_parser.add_argument("args", nargs=argparse.REMAINDER)
    info_parser = sub_parsers.add_parser(
        "info",
        prog="valkey-fips info",
        description=cli.description,
        add_help=False,
        help="Show the resolved configuration and checklist",
        parents=[options],
    )
    info_parser.set_defaults(subcommand="info")
    info_parser.add_argument("-h", "--help", action=_HelpAction)
    generate_parser = sub_parsers.add_parser(
        "generate",
        prog="valkey-fips generate",
        description=cli.description,
        add_help=False,
        help="Generate a configuration file for a build variant",
        parents=[options],
    )
    generate_parser.set_defaults(subcommand="generate")
    generate_parser.add_argument("-h", "--help", action=_HelpAction)
    generate_parser.add_argument(
        "-o",
        "--output",
        help="File to write (Default: the --config value)",
        dest="output",
        default=None,
    )
    generate_parser.add_argument(
        "-f", "--force", help="Overwrite an existing file", dest="force", action="store_true"
    )
    return cli


def main(argv: Union[Sequence[str], None] = None) -> int:
    cli = _parser()
    args = cli.parse_args(argv)
    console = _console()
    if args.show_version:
        if args.hide_banner:
            console.print(f"valkey-fips=={__version__}")
        else:
            console.print(
                f"[bold][{constants.CLI_COLOR_PRIMARY}]{APP_BANNER}[/{constants.CLI_COLOR_PRIMARY}][/bold]\nvalkey-fips=={__version__}"
            )
        return 0

    try:
        logger.info(f"subcommand {args.subcommand}")
    except AttributeError:
        cli.print_help()
        return 0

    log_level = logging.CRITICAL
    if args.log_level_error:
        log_level = logging.ERROR
    if args.log_level_warning:
        log_level = logging.WARNING
    if args.log_level_info:
        log_level = logging.INFO
    if args.log_level_debug:
        log_level = logging.DEBUG
    configure_logging(log_level, quiet=args.quiet)
    con = None if args.quiet else console

    if args.subcommand == "generate":
        return generate(
            console,
            variant=args.variant,
            output=args.output or args.config_file,
            force=args.force,
        )
    if args.subcommand == "info":
        return info(
            console, os.environ, config_file=args.config_file, variant=args.variant
        )
    if args.subcommand == "check":
        _, report = check(
            con,
            os.environ,
            config_file=args.config_file,
            variant=args.variant,
            json_file=args.json_file,
        )
        return 0 if report is not None and report.passed else 1
    forwarded = list(args.args)
    if forwarded[:1] == ["--"]:
        forwarded = forwarded[1:]
    return run(
        forwarded,
        con,
        os.environ,
        config_file=args.config_file,
        variant=args.variant,
        json_file=args.json_file,
    )


def entrypoint(
    argv: Union[Sequence[str], None] = None,
    environ: Union[Mapping[str, str], None] = None,
    con: Union[Console, None] = None,
) -> int:
    """
    Container ENTRYPOINT. Every argument belongs to the wrapped program, so
    the validator takes its own settings from the environment only.
    """
    environ = os.environ if environ is None else environ
    args = sys.argv[1:] if argv is None else list(argv)
    configure_logging(
        LOG_LEVELS.get(
            environ.get(constants.ENV_LOG_LEVEL, "").strip().upper(), logging.WARNING
        )
    )
    return run(args, con if con is not None else _console(), environ)


def entrypoint_main():
    sys.exit(entrypoint())


if __name__ == "__main__":
    sys.exit(main())
