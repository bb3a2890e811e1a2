"""
`skiperror` command line: run batch conversions that skip the items that fail.

Each subcommand lives in `skiperror.cli.commands` and exposes ``add_subparser()``
and ``run()``. Reporting of skipped items is configured by ``--severity``, the
``SKIPERROR_*`` environment variables, or a ``skiperror.yaml`` file.
"""

from __future__ import annotations

import argparse
from collections.abc import Callable, Sequence
from types import ModuleType

from skiperror.cli.commands import parse
from skiperror.version import __version__

CommandModule = ModuleType
CommandRunner = Callable[[argparse.Namespace], None]

_COMMANDS: dict[str, CommandModule] = {
    "parse": parse,
}

_EPILOG = (
    "Skipped items are reported at the configured severity "
    "(trace, debug, info, warn, error, none; default warn). "
    "Environment: SKIPERROR_SEVERITY, SKIPERROR_LOG_DIR, SKIPERROR_WRITE_JSONL."
)


def build_arg_parser() -> argparse.ArgumentParser:
    """Top-level parser with one subparser per registered command."""
    parser = argparse.ArgumentParser(
        prog="skiperror",
        description="Convert input items one by one, keep those that succeed and report the ones skipped.",
        epilog=_EPILOG,
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    subparsers = parser.add_subparsers(dest="command", required=True, metavar="<command>")

    for name, module in _COMMANDS.items():
        add_subparser = getattr(module, "add_subparser", None)
        if add_subparser is None:
            raise RuntimeError(f"CLI command module '{name}' is missing add_subparser().")
        add_subparser(subparsers)

    return parser


def main(argv: Sequence[str] | None = None) -> None:
    """Parse args and dispatch to the selected command implementation."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    command_name = str(args.command)

    module = _COMMANDS.get(command_name)
    if module is None:
        raise RuntimeError(f"Unknown command: {command_name}")

    runner: CommandRunner | None = getattr(module, "run", None)
    if runner is None:
        raise RuntimeError(f"CLI command module '{command_name}' is missing run().")
    runner(args)


if __name__ == "__main__":
    main()
