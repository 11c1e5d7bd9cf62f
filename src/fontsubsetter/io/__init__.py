"""Filesystem I/O layer for fontsubsetter.

This module handles everything the run reads from or writes to disk
apart from the fonts themselves, which belong to the subsetting engine.

Key responsibilities:
- Read and normalize the character file
- Discover TTF/OTF/WOFF fonts in the source directory
- Persist the JSON report

Key functions:
- load_charset: Character file to CharacterSet
- discover_fonts: Source directory to sorted FontFileRefs
- write_report: Report to subset-report.json
"""

from fontsubsetter.io.charset import load_charset
from fontsubsetter.io.discovery import discover_fonts, list_font_files
from fontsubsetter.io.report import REPORT_FILENAME, get_report_path, write_report

__all__ = [
    "REPORT_FILENAME",
    "discover_fonts",
    "get_report_path",
    "list_font_files",
    "load_charset",
    "write_report",
]
