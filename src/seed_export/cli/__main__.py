"""
Unified CLI entry point for Seed Export.

Usage:
    python -m seed_export.cli <command> [options]

Available commands:
    export       - Compile registry tables into the seed SQL file
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="seed_export.cli",
        description="Seed Export CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m seed_export.cli export
  python -m seed_export.cli export --tables alpaca_stocks --dry-run
        """,
    )

    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        help="Command to execute",
    )

    # Delegate all argument parsing to the export module
    subparsers.add_parser(
        "export",
        help="Compile registry tables into the seed SQL file",
        add_help=False,
    )

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "export":
        from seed_export.cli.export import main as export_main

        return export_main(remaining_args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
