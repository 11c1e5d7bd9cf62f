"""Core pipeline for fontsubsetter.

This module contains the pieces that turn discovered fonts into WOFF2
subsets and a report:

- Subsetting engine (protocol plus the fontTools implementation)
- Batch execution with per-font failure isolation
- Report generation

Key classes:
- SubsetEngine: Protocol for anything that can subset one font
- FontToolsEngine: fontTools subsetter writing WOFF2
- BatchRunner: Runs an engine over a batch of fonts
- FontSubsetProcessor: Runs a complete batch from settings

Key functions:
- process_font_file: Picklable wrapper around one engine call
- generate_report: Summarize results and write subset-report.json
"""

from fontsubsetter.core.engine import FontToolsEngine, SubsetEngine, SubsetOutput
from fontsubsetter.core.processor import BatchRunner, FontSubsetProcessor, process_font_file
from fontsubsetter.core.report import generate_report

__all__ = [
    # Processor classes
    "BatchRunner",
    "FontSubsetProcessor",
    # Engine classes
    "FontToolsEngine",
    "SubsetEngine",
    "SubsetOutput",
    # Functions
    "generate_report",
    "process_font_file",
]
