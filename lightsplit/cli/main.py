#!/usr/bin/env python3

import argparse
from collections.abc import Callable, Sequence

from lightsplit import __version__


def _coerce_exit_code(code: object) -> int:
    if code is None:
        return 0
    if isinstance(code, int):
        return code
    return 1


def _run_command(command: Callable[[argparse.Namespace], None], args: argparse.Namespace) -> int:
    """
    Run a command handler that may call sys.exit().

    This keeps process termination centralized in this module's entrypoint.
    """
    try:
        command(args)
    except SystemExit as exc:
        return _coerce_exit_code(exc.code)
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main entry point for the CLI."""
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--config", default=None, help="Settings TOML file (default: config/lightsplit.toml)")
    common.add_argument("--json", action="store_true", help="Print machine-readable JSON")

    parser = argparse.ArgumentParser(
        prog="lightsplit",
        description="Receipt reconciliation and bill splitting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Commands:
  parse <text>               Extract items and totals from receipt text
  reconcile <receipt>        Check items against printed totals (.json or text)
  split <split.json>         Preview what each participant owes
  serve [--host] [--port]    Start the HTTP API

Use '-' as the file name to read from stdin.
""",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    parse_parser = subparsers.add_parser("parse", parents=[common], help="Extract items and totals from receipt text")
    parse_parser.add_argument("text", help="Receipt text file")
    parse_parser.add_argument(
        "--ignore-phrase",
        action="append",
        default=[],
        help="Extra phrase marking non-item lines (repeatable)",
    )

    reconcile_parser = subparsers.add_parser("reconcile", parents=[common], help="Reconcile a receipt")
    reconcile_parser.add_argument("receipt", help="Receipt JSON payload or receipt text file")
    reconcile_parser.add_argument(
        "--ignore-phrase",
        action="append",
        default=[],
        help="Extra phrase marking non-item lines when parsing text (repeatable)",
    )

    split_parser = subparsers.add_parser("split", parents=[common], help="Preview a split")
    split_parser.add_argument("split", help="Split document: receipt, participants and claims")

    serve_parser = subparsers.add_parser("serve", parents=[common], help="Start the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Host to bind to (default: 127.0.0.1)")
    serve_parser.add_argument("--port", type=int, default=8000, help="Port to bind to (default: 8000)")

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    if args.command == "parse":
        from lightsplit.cli.receipt import cmd_parse

        return _run_command(cmd_parse, args)
    elif args.command == "reconcile":
        from lightsplit.cli.receipt import cmd_reconcile

        return _run_command(cmd_reconcile, args)
    elif args.command == "split":
        from lightsplit.cli.split import cmd_split

        return _run_command(cmd_split, args)
    elif args.command == "serve":
        from lightsplit.cli.receipt import cmd_serve

        return _run_command(cmd_serve, args)

    return 1


if __name__ == "__main__":
    raise SystemExit(main())
