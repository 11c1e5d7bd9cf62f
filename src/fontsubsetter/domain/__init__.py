"""Domain models for fontsubsetter.

This module contains the domain models for a subsetting run. All models are:

- Immutable (frozen dataclasses)
- Owned by the run that creates them
- Independent of fonttools implementation details

Key classes:
- CharacterSet: The unique, non-blank characters to keep
- FontFormat: Recognized input formats
- FontFileRef: A discovered input font
- SubsetResult: Size outcome for one font
- Report: Summary of a run
"""

from fontsubsetter.domain.charset import CharacterSet
from fontsubsetter.domain.font import OUTPUT_SUFFIX, FontFileRef, FontFormat
from fontsubsetter.domain.report import Report, SubsetResult, reduction_percent

__all__: list[str] = [
    # Enums
    "FontFormat",
    # Core types
    "CharacterSet",
    "FontFileRef",
    "SubsetResult",
    "Report",
    # Helpers
    "OUTPUT_SUFFIX",
    "reduction_percent",
]
