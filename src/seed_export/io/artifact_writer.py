"""
Seed artifact writer.

Assembles the run header, one section per compiled table (in registry order)
and the closing banner into a single SQL document, and writes it to a fixed
location, replacing any previous artifact.
"""

import os
import tempfile
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterable, Sequence, Union

import structlog

from seed_export.domain.statements import CompiledStatement
from seed_export.domain.statements.compiler import BANNER_RULE

logger = structlog.get_logger(__name__)


def format_generated_at(generated_at: datetime) -> str:
    """UTC ISO-8601 timestamp with millisecond precision, e.g. 2024-01-01T00:00:00.000Z."""
    if generated_at.tzinfo is None:
        generated_at = generated_at.replace(tzinfo=timezone.utc)
    stamp = generated_at.astimezone(timezone.utc).isoformat(timespec="milliseconds")
    return stamp.replace("+00:00", "Z")


def render_header(table_names: Iterable[str], generated_at: datetime, project: str) -> str:
    lines = [
        BANNER_RULE,
        "-- SUPABASE SEED DATA",
        f"-- Generated: {format_generated_at(generated_at)}",
        f"-- Project: {project}",
        BANNER_RULE,
        "-- Tables included:",
    ]
    lines.extend(f"--   - {name}" for name in table_names)
    lines.append(BANNER_RULE)
    return "\n".join(lines)


def render_footer() -> str:
    return "\n".join([BANNER_RULE, "-- END OF SEED DATA", BANNER_RULE])


def render_artifact(
    sections: Sequence[CompiledStatement],
    table_names: Iterable[str],
    generated_at: datetime,
    project: str,
) -> str:
    """
    Render the complete seed document.

    Args:
        sections: Compiled statements, already in registry order
        table_names: Full table manifest for the header
        generated_at: Run timestamp
        project: Backend project identifier

    Returns:
        The artifact text, ending with a newline
    """
    blocks = [render_header(table_names, generated_at, project)]
    blocks.extend(section.sql for section in sections)
    blocks.append(render_footer())
    return "\n\n".join(blocks) + "\n"


def _default_file_mode() -> int:
    """Mode a plain open() would create a new file with under the current umask."""
    umask = os.umask(0)
    os.umask(umask)
    return 0o666 & ~umask


def write_artifact(path: Union[str, Path], text: str) -> Path:
    """
    Write the artifact, replacing any previous file.

    The text is written to a temporary file in the target directory and then
    renamed over the destination, so a failed write leaves the previous
    artifact in place. The file gets the mode a plain overwrite would give it
    rather than the owner-only mode of the temporary file.

    Returns:
        The resolved output path
    """
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    fd, tmp_name = tempfile.mkstemp(
        dir=str(output_path.parent), prefix=f".{output_path.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(text)
        os.chmod(tmp_name, _default_file_mode())
        os.replace(tmp_name, output_path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise

    logger.info("artifact_writer.written", path=str(output_path), bytes=len(text.encode("utf-8")))
    return output_path
