"""
Seed export job.

Runs the export as a single sequential pass: each registry table is fetched in
full, compiled, and its section appended to the output in registry order.

Failure policy:
- a table whose fetch fails is logged and skipped; nothing is emitted for it
- a table whose rows cannot be compiled is logged and skipped the same way
- an empty table produces its "no data found" section
- when every table fails no artifact is produced and AllTablesFailedError
  is raised
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path
from typing import List, Optional, Union

from seed_export.config.table_registry import TableRegistry
from seed_export.domain.seed_values import UnsupportedValueError
from seed_export.domain.statements import (
    CompiledStatement,
    StatementCompilationError,
    StatementCompiler,
)
from seed_export.io.artifact_writer import render_artifact, write_artifact
from seed_export.io.connectors.exceptions import SourceUnavailableError
from seed_export.io.connectors.protocols import RowSource
from seed_export.io.fetcher import fetch_table
from seed_export.utils.logging import bind_context


class TableStatus(str, Enum):
    """Outcome of one table within a run."""

    COMPILED = "compiled"
    EMPTY = "empty"
    FAILED = "failed"


@dataclass
class TableOutcome:
    table_name: str
    status: TableStatus
    row_count: int = 0
    error_type: Optional[str] = None
    error_message: Optional[str] = None


@dataclass
class ExportReport:
    """Summary of one export run."""

    generated_at: datetime
    outcomes: List[TableOutcome] = field(default_factory=list)
    artifact: str = ""
    output_path: Optional[Path] = None

    def _with_status(self, status: TableStatus) -> List[TableOutcome]:
        return [o for o in self.outcomes if o.status == status]

    @property
    def compiled(self) -> List[TableOutcome]:
        return self._with_status(TableStatus.COMPILED)

    @property
    def empty(self) -> List[TableOutcome]:
        return self._with_status(TableStatus.EMPTY)

    @property
    def failed(self) -> List[TableOutcome]:
        return self._with_status(TableStatus.FAILED)

    @property
    def total_rows(self) -> int:
        return sum(o.row_count for o in self.outcomes)

    @property
    def all_failed(self) -> bool:
        return bool(self.outcomes) and len(self.failed) == len(self.outcomes)


class AllTablesFailedError(Exception):
    """Raised when no table of the registry could be exported."""

    def __init__(self, report: ExportReport):
        self.report = report
        names = ", ".join(o.table_name for o in report.failed)
        super().__init__(f"Every table failed to export: {names}")


def run_export(
    registry: TableRegistry,
    source: RowSource,
    *,
    output_path: Optional[Union[str, Path]] = None,
    project: str = "unknown",
    generated_at: Optional[datetime] = None,
) -> ExportReport:
    """
    Export every registry table into one seed artifact.

    Args:
        registry: Tables to export, in output order, plus encoder options
        source: Row source collaborator
        output_path: Where to write the artifact. Nothing is written when None;
            the rendered text is still returned on the report.
        project: Backend project identifier for the header
        generated_at: Run timestamp; now (UTC) when None

    Returns:
        ExportReport with per-table outcomes and the artifact text

    Raises:
        AllTablesFailedError: If every table failed
        OSError: If the artifact cannot be written
    """
    generated_at = generated_at or datetime.now(timezone.utc)
    report = ExportReport(generated_at=generated_at)
    compiler = StatementCompiler(registry.encoder)
    sections: List[CompiledStatement] = []

    run_logger = bind_context(run=generated_at.isoformat(), project=project)
    run_logger.info("export_job.started", tables=registry.table_names)

    for spec in registry.tables:
        table_logger = run_logger.bind(table=spec.name)

        try:
            rows = fetch_table(source, spec)
        except SourceUnavailableError as e:
            table_logger.warning("export_job.table.fetch_failed", **e.to_dict())
            report.outcomes.append(
                TableOutcome(
                    spec.name,
                    TableStatus.FAILED,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            )
            continue

        try:
            section = compiler.compile(spec, rows)
        except (StatementCompilationError, UnsupportedValueError) as e:
            table_logger.error("export_job.table.compile_failed", **e.to_dict())
            report.outcomes.append(
                TableOutcome(
                    spec.name,
                    TableStatus.FAILED,
                    row_count=0,
                    error_type=type(e).__name__,
                    error_message=str(e),
                )
            )
            continue

        sections.append(section)
        status = TableStatus.COMPILED if section.has_data else TableStatus.EMPTY
        report.outcomes.append(TableOutcome(spec.name, status, row_count=section.row_count))
        table_logger.info("export_job.table.done", status=status.value, rows=section.row_count)

    if report.all_failed:
        run_logger.error("export_job.all_tables_failed", failed=len(report.failed))
        raise AllTablesFailedError(report)

    report.artifact = render_artifact(sections, registry.table_names, generated_at, project)
    if output_path is not None:
        report.output_path = write_artifact(output_path, report.artifact)

    run_logger.info(
        "export_job.completed",
        compiled=len(report.compiled),
        empty=len(report.empty),
        failed=len(report.failed),
        rows=report.total_rows,
        output_path=str(report.output_path) if report.output_path else None,
    )
    return report
