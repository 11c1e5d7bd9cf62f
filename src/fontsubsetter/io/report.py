"""Report persistence."""

import json
from pathlib import Path

from fontsubsetter.domain import Report

REPORT_FILENAME = "subset-report.json"


def get_report_path(output_dir: Path) -> Path:
    """Location of the report inside an output directory."""
    return Path(output_dir) / REPORT_FILENAME


def write_report(report: Report, output_dir: Path) -> Path:
    """Write a report as pretty-printed JSON, replacing any previous one.

    Args:
        report: Report to persist
        output_dir: Directory receiving subset-report.json (created if missing)

    Returns:
        Path of the written report

    Raises:
        OSError: If the file cannot be written
    """
    report_path = get_report_path(output_dir)
    report_path.parent.mkdir(parents=True, exist_ok=True)
    report_path.write_text(
        json.dumps(report.to_dict(), indent=2, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return report_path
