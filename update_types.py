#!/usr/bin/env python3
"""
Wrapper for the schema type generator.

This is a convenience wrapper that forwards to the schema_typegen module.
Run with --help to see available commands.

Usage:
    python update_types.py <command> [options]
    ./update_types.py <command> [options]  (on Unix with execute permission)

Commands:
    generate    Regenerate the types section of the target file
    check       Fail if the target file is out of date
    print       Print the generated declarations to stdout

Examples:
    python update_types.py generate
    python update_types.py check --target src/db.ts
"""

import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parent


def main() -> int:
    """Forward all arguments to the schema_typegen module."""
    return subprocess.call(
        [sys.executable, "-m", "schema_typegen"] + sys.argv[1:],
        cwd=ROOT,
    )


if __name__ == "__main__":
    sys.exit(main())
