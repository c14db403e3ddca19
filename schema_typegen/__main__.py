#!/usr/bin/env python3
"""
Command line interface for the schema type generator.

Usage:
    python -m schema_typegen <command> [options]

Commands:
    generate    Regenerate the types section of the target file
    check       Fail if the target file is out of date
    print       Print the generated declarations to stdout

Examples:
    python -m schema_typegen generate
    python -m schema_typegen generate --target web/src/db.ts
    python -m schema_typegen check --database-url postgresql://localhost/app
    python -m schema_typegen print --schema app
"""

from __future__ import annotations

import sys


def _run_generator(args: list[str]) -> int:
    from schema_typegen.type_codegen.main import main as codegen_main
    try:
        codegen_main(args)
        return 0
    except SystemExit as e:
        if e.code is None or isinstance(e.code, int):
            return e.code or 0
        print(e.code, file=sys.stderr)
        return 1


def cmd_generate(args: list[str]) -> int:
    """Regenerate the target file."""
    return _run_generator(args)


def cmd_check(args: list[str]) -> int:
    """Check that the target file is up to date."""
    return _run_generator(["--check"] + args)


def cmd_print(args: list[str]) -> int:
    """Print generated declarations."""
    return _run_generator(["--stdout"] + args)


COMMANDS = {
    "generate": (cmd_generate, "Regenerate the types section of the target file"),
    "check": (cmd_check, "Fail if the target file is out of date"),
    "print": (cmd_print, "Print the generated declarations to stdout"),
}


def main() -> int:
    if len(sys.argv) < 2 or sys.argv[1] in ("-h", "--help"):
        print(__doc__)
        print("Available commands:")
        for name, (_, desc) in COMMANDS.items():
            print(f"  {name:12} {desc}")
        print("\nUse '<command> --help' for command-specific options.")
        return 0

    command = sys.argv[1]
    args = sys.argv[2:]

    if command not in COMMANDS:
        print(f"Unknown command: {command}")
        print(f"Available commands: {', '.join(COMMANDS.keys())}")
        return 1

    handler, _ = COMMANDS[command]
    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
