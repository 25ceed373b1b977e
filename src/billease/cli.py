"""Command line entry point for the billing tools."""

from __future__ import annotations

import argparse
import sys
from dataclasses import dataclass
from typing import Callable, Iterable, Mapping, Sequence

from .commands import delete, listing, report, show, validate

CommandCallable = Callable[[list[str] | None], int | None]


@dataclass(frozen=True)
class CommandSpec:
    """Metadata describing a CLI command exposed by :mod:`billease.cli`."""

    name: str
    summary: str
    handler: CommandCallable

    def run(self, argv: list[str] | None) -> int:
        """Execute the command and normalise the resulting exit code."""

        try:
            result = self.handler(argv)
        except SystemExit as exc:  # argparse exits on --help and usage errors
            code = exc.code
            if code is None:
                return 0
            if isinstance(code, int):
                return code
            print(str(code), file=sys.stderr)
            return 1
        if result is None:
            return 0
        return int(result)


_COMMANDS: tuple[CommandSpec, ...] = (
    CommandSpec(name="list", summary="List saved invoices.", handler=listing.main),
    CommandSpec(name="show", summary="Show a saved invoice with its totals.", handler=show.main),
    CommandSpec(name="delete", summary="Delete a saved invoice.", handler=delete.main),
    CommandSpec(
        name="validate",
        summary="Check saved invoices and optionally export the issues to Excel.",
        handler=validate.main,
    ),
    CommandSpec(
        name="report",
        summary="Excel report with per-invoice and per-customer totals.",
        handler=report.main,
    ),
)

_COMMAND_INDEX: Mapping[str, CommandSpec] = {spec.name: spec for spec in _COMMANDS}


def available_commands() -> Iterable[CommandSpec]:
    """Return the commands registered in the CLI."""

    return _COMMANDS


def build_parser() -> argparse.ArgumentParser:
    """Return the base argument parser shared across commands."""

    parser = argparse.ArgumentParser(prog="billease", description="Billing tools")
    subparsers = parser.add_subparsers(dest="command", metavar="command")
    subparsers.required = True

    for spec in _COMMANDS:
        subparser = subparsers.add_parser(
            spec.name,
            help=spec.summary,
            description=spec.summary,
            add_help=False,
        )
        subparser.add_argument("args", nargs=argparse.REMAINDER, help=argparse.SUPPRESS)

    return parser


def run(command: str, argv: Sequence[str] | None = None) -> int:
    """Execute *command* forwarding ``argv`` to the underlying handler."""

    spec = _COMMAND_INDEX.get(command)
    if spec is None:
        raise ValueError(f"Unknown command: {command}")
    return spec.run(list(argv or []))


def main(argv: Sequence[str] | None = None) -> int:
    """Execute the command line interface.

    The first argument selects the command; everything after it is handed to
    the command's own parser untouched.
    """

    args = list(sys.argv[1:] if argv is None else argv)
    if not args or args[0] not in _COMMAND_INDEX:
        # Prints usage (or the top-level help) and exits.
        build_parser().parse_args(args)
    return run(args[0], args[1:])


if __name__ == "__main__":  # pragma: no cover - direct execution
    raise SystemExit(main())
