#!/usr/bin/env python3
"""
Management script for developer operations.

Commands:
  - upgrade: apply Alembic migrations up to head (or a given revision)
  - downgrade: roll migrations back to a revision
  - makemigration: autogenerate a new Alembic revision
  - test: run the pytest suite against a throwaway SQLite database
"""

import argparse
import os
import subprocess
import sys

PROJECT_ROOT = os.path.dirname(os.path.abspath(__file__))
ALEMBIC_INI = os.path.join(PROJECT_ROOT, "api", "alembic.ini")


def run_command(command: list[str]) -> None:
    """Run a shell command and raise on failure."""
    result = subprocess.run(command, check=False, cwd=PROJECT_ROOT)
    if result.returncode != 0:
        raise SystemExit(result.returncode)


def _alembic(*args: str) -> list[str]:
    return [sys.executable, "-m", "alembic", "-c", ALEMBIC_INI, *args]


def cmd_upgrade(args: argparse.Namespace) -> None:
    """Apply Alembic migrations (DATABASE_URL or POSTGRES_* must be set)."""
    run_command(_alembic("upgrade", args.revision))


def cmd_downgrade(args: argparse.Namespace) -> None:
    """Roll Alembic migrations back to the given revision."""
    run_command(_alembic("downgrade", args.revision))


def cmd_makemigration(args: argparse.Namespace) -> None:
    """Create a new Alembic migration with autogenerate."""
    run_command(_alembic("revision", "--autogenerate", "-m", args.message))


def cmd_test(args: argparse.Namespace) -> None:
    """Run pytest; extra arguments are passed through."""
    run_command([sys.executable, "-m", "pytest", *args.pytest_args])


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Project management utility")
    subparsers = parser.add_subparsers(dest="command", required=True)

    upgrade = subparsers.add_parser(
        "upgrade",
        help="Apply Alembic migrations up to head",
    )
    upgrade.add_argument("revision", nargs="?", default="head", help="Target revision")
    upgrade.set_defaults(func=cmd_upgrade)

    downgrade = subparsers.add_parser(
        "downgrade",
        help="Roll Alembic migrations back",
    )
    downgrade.add_argument("revision", help="Target revision, e.g. -1 or base")
    downgrade.set_defaults(func=cmd_downgrade)

    makemigration = subparsers.add_parser(
        "makemigration",
        help="Create a new Alembic migration with autogenerate",
    )
    makemigration.add_argument("-m", "--message", required=True, help="Migration message")
    makemigration.set_defaults(func=cmd_makemigration)

    test = subparsers.add_parser(
        "test",
        help="Run the test suite",
    )
    test.add_argument("pytest_args", nargs=argparse.REMAINDER, help="Arguments for pytest")
    test.set_defaults(func=cmd_test)

    return parser


def main(argv: list[str]) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    args.func(args)
    return 0


if __name__ == "__main__":
    raise SystemExit(main(sys.argv[1:]))
