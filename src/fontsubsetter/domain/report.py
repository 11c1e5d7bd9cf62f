"""Subset results and the run report.

Both models are frozen: a result is created once after a successful
engine call and a report once at the end of a run.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal
from typing import Any


def round_percent(value: float) -> float:
    """Round to one decimal, ties away from zero (6.25 -> 6.3)."""
    return float(Decimal(value).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP))


def reduction_percent(original_size: int, optimized_size: int) -> float:
    """Relative size decrease in percent, rounded to one decimal.

    Args:
        original_size: Byte size of the source font
        optimized_size: Byte size of the subsetted output

    Returns:
        (original - optimized) / original * 100, or 0.0 for an empty original
    """
    if original_size <= 0:
        return 0.0
    return round_percent((original_size - optimized_size) / original_size * 100)


@dataclass(frozen=True)
class SubsetResult:
    """Outcome of subsetting one font.

    Attributes:
        original_file: Input file name
        output_file: Output file name
        original_size: Input size in bytes
        optimized_size: Output size in bytes
        reduction: Size reduction in percent, one decimal
    """

    original_file: str
    output_file: str
    original_size: int
    optimized_size: int
    reduction: float

    @classmethod
    def from_sizes(
        cls,
        original_file: str,
        output_file: str,
        original_size: int,
        optimized_size: int,
    ) -> "SubsetResult":
        """Create a result, computing the reduction from the two sizes."""
        return cls(
            original_file=original_file,
            output_file=output_file,
            original_size=original_size,
            optimized_size=optimized_size,
            reduction=reduction_percent(original_size, optimized_size),
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to a report detail record."""
        return {
            "originalFile": self.original_file,
            "outputFile": self.output_file,
            "originalSize": self.original_size,
            "optimizedSize": self.optimized_size,
            "reduction": f"{self.reduction:.1f}",
        }


@dataclass(frozen=True)
class Report:
    """Summary of a whole run.

    Attributes:
        timestamp: When the report was generated (timezone aware)
        character_count: Size of the character set used
        results: Successful results in input order
    """

    timestamp: datetime
    character_count: int
    results: tuple[SubsetResult, ...]

    @property
    def processed_files(self) -> int:
        return len(self.results)

    @property
    def average_reduction(self) -> float:
        """Mean reduction over all results, one decimal.

        A run without results reports 0.0 rather than an undefined mean.
        """
        if not self.results:
            return 0.0
        total = sum(result.reduction for result in self.results)
        return round_percent(total / len(self.results))

    @property
    def total_original_size(self) -> int:
        return sum(result.original_size for result in self.results)

    @property
    def total_optimized_size(self) -> int:
        return sum(result.optimized_size for result in self.results)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the JSON report document."""
        return {
            "timestamp": self.timestamp.isoformat(),
            "characterCount": self.character_count,
            "processedFiles": self.processed_files,
            "averageReduction": f"{self.average_reduction:.1f}%",
            "details": [result.to_dict() for result in self.results],
        }
