import os
import sys
import logging

from typing import Optional

from . import (
    cli,
    const,
    plugins,
    vt100,
)
from .errors import ParseError
from .option import Option, OptionType
from .parser import Parser, ParseResult, Values
from .registry import Registry

__all__ = [
    "Option",
    "OptionType",
    "Parser",
    "ParseError",
    "ParseResult",
    "Registry",
    "Values",
    "main",
]


ROOT_OPTIONS = [
    Option("verbose", OptionType.BOOLEAN, description="Enable verbose logging"),
    Option("safemode", OptionType.BOOLEAN, description="Disable plugin loading"),
    Option(
        "plugin",
        OptionType.ARRAY,
        description="Extra plugins to load, as module:attr references",
    ),
]


LOG_DATEFMT = "%H:%M:%S"


def setupLogging(verbose: bool):
    """
    Logs to stderr at debug level when verbose, to the log file otherwise.
    """
    if verbose:
        level = f"{vt100.YELLOW}%(levelname)-7s{vt100.RESET}"
        logging.basicConfig(
            level=logging.DEBUG,
            format=f"{vt100.CYAN}%(asctime)s{vt100.RESET} {level} %(name)s: %(message)s",
            datefmt=LOG_DATEFMT,
        )
        return

    os.makedirs(os.path.dirname(const.GLOBAL_LOG_FILE), exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        filename=const.GLOBAL_LOG_FILE,
        filemode="a",
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def builtins(table: cli.TaskTable):
    @table.task("help", "Describe available tasks or one specific task", "help [TASK]")
    def _(args: ParseResult):
        table.help(args.positionals[0] if args.positionals else None)

    @table.task("version", "Show current version")
    def _(args: ParseResult):
        print(f"Switchkit v{const.VERSION_STR}")

    for alias in ("-h", "-?", "--help"):
        table.map(alias, "help")
    table.map("--version", "version")


def setup(values: Values) -> cli.TaskTable:
    table = cli.TaskTable()
    builtins(table)

    if values.get("safemode") or os.environ.get(const.SAFEMODE_ENV):
        return table

    plugins.loadAll(table)
    for ref in values.get("plugin", []):
        plugins.load(table, ref)

    return table


def main(argv: Optional[list[str]] = None) -> int:
    try:
        extra = os.environ.get(const.EXTRA_ARGS_ENV, None)
        args = (extra.split(" ") if extra else []) + (
            sys.argv[1:] if argv is None else argv
        )

        root = Parser(ROOT_OPTIONS).parse(args, skipLeading=False)
        setupLogging(bool(root.values.get("verbose")))
        table = setup(root.values)
        return table.invoke(list(root.trailing))

    except ParseError as e:
        vt100.error(str(e))
        print(f"Usage: {const.ARGV0} {Parser(ROOT_OPTIONS).usage()} TASK [ARGS...]")
        return 1

    except RuntimeError as e:
        logging.exception(e)
        vt100.error(str(e))
        return 1

    except KeyboardInterrupt:
        print()
        return 1
