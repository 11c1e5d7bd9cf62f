"""Report generation for a finished batch."""

from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

import structlog

from fontsubsetter.domain import CharacterSet, Report, SubsetResult
from fontsubsetter.io import write_report
from fontsubsetter.utils import get_logger


def generate_report(
    results: Sequence[SubsetResult],
    charset: CharacterSet,
    output_dir: Path,
    logger: structlog.stdlib.BoundLogger | None = None,
) -> Report:
    """Summarize a batch and write subset-report.json into output_dir.

    Args:
        results: Successful results in input order
        charset: Character set the batch used
        output_dir: Directory receiving the report (overwritten if present)
        logger: Logger for the completion line (module logger if None)

    Returns:
        The persisted Report
    """
    logger = logger or get_logger("fontsubsetter.core.report")

    report = Report(
        timestamp=datetime.now(timezone.utc),
        character_count=len(charset),
        results=tuple(results),
    )
    report_path = write_report(report, output_dir)

    logger.info(
        "Report written",
        processed=report.processed_files,
        average_reduction=report.average_reduction,
        report=str(report_path),
    )
    return report
