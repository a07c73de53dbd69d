"""
CLI for the seed-data export.

Usage:
    # Export every registry table from the configured Supabase project
    python -m seed_export.cli export

    # Use a custom registry and output location
    python -m seed_export.cli export --registry config/seed_tables.yml --output seed.sql

    # Compile from captured <table>.json files instead of the REST API
    python -m seed_export.cli export --source-dir ./dumps

    # Print the SQL instead of writing it
    python -m seed_export.cli export --tables alpaca_stocks,sports_teams --dry-run
"""

from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from pydantic import ValidationError

from seed_export.config.settings import get_settings
from seed_export.config.table_registry import TableRegistryError, load_table_registry
from seed_export.io.connectors import (
    JsonDirectoryRowSource,
    RowSource,
    SourceConfigurationError,
    SupabaseRowSource,
)
from seed_export.orchestration.export_job import (
    AllTablesFailedError,
    ExportReport,
    run_export,
)
from seed_export.utils.logging import get_logger

logger = get_logger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="seed_export.cli export",
        description="Compile table rows into an idempotent seed SQL file",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--registry",
        help="YAML table registry (default: SEED_EXPORT_REGISTRY_PATH or the built-in registry)",
    )
    parser.add_argument(
        "--output",
        help="Output SQL file (default: SEED_EXPORT_OUTPUT_PATH)",
    )
    parser.add_argument(
        "--source-dir",
        help="Read rows from <dir>/<table>.json files instead of the REST API",
    )
    parser.add_argument(
        "--tables",
        help="Comma-separated subset of registry tables to export",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Print the SQL to stdout instead of writing the output file",
    )
    return parser


def print_summary(report: ExportReport, stream=sys.stdout) -> None:
    print("=" * 60, file=stream)
    print("Seed Export Summary", file=stream)
    print("=" * 60, file=stream)
    print(f"Compiled: {len(report.compiled)}", file=stream)
    print(f"Empty:    {len(report.empty)}", file=stream)
    print(f"Failed:   {len(report.failed)}", file=stream)
    print(f"Rows:     {report.total_rows}", file=stream)
    for outcome in report.failed:
        print(f"  - {outcome.table_name}: {outcome.error_message}", file=stream)
    if report.output_path:
        print(f"Seed file generated: {report.output_path}", file=stream)
    print("=" * 60, file=stream)


def _build_source(args: argparse.Namespace, settings) -> RowSource:
    if args.source_dir:
        return JsonDirectoryRowSource(args.source_dir)
    return SupabaseRowSource(settings=settings)


def main(argv: Optional[List[str]] = None) -> int:
    """
    Run the export.

    Returns:
        0 when an artifact was produced (even if some tables failed),
        1 when configuration is invalid or every table failed
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        settings = get_settings()
    except ValidationError as e:
        print(f"Failed to load settings: {e}", file=sys.stderr)
        return 1

    try:
        registry = load_table_registry(args.registry or settings.registry_path)
        if args.tables:
            names = [name.strip() for name in args.tables.split(",") if name.strip()]
            registry = registry.select(names)
    except TableRegistryError as e:
        print(f"Invalid table registry: {e}", file=sys.stderr)
        return 1

    try:
        source = _build_source(args, settings)
    except SourceConfigurationError as e:
        print(f"Cannot create row source: {e}", file=sys.stderr)
        return 1

    output_path = None if args.dry_run else (args.output or settings.output_path)

    try:
        report = run_export(
            registry,
            source,
            output_path=output_path,
            project=settings.project_ref,
        )
    except AllTablesFailedError as e:
        print_summary(e.report, stream=sys.stderr)
        print(f"Export failed: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        logger.error("cli.export.write_failed", output_path=str(output_path), error=str(e))
        print(f"Cannot write seed file: {e}", file=sys.stderr)
        return 1

    if args.dry_run:
        sys.stdout.write(report.artifact)
        print_summary(report, stream=sys.stderr)
    else:
        print_summary(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
