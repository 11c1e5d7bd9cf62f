"""Font file references."""

from dataclasses import dataclass
from enum import Enum
from pathlib import Path

OUTPUT_SUFFIX = ".woff2"


class FontFormat(str, Enum):
    """Recognized input font formats, keyed by file extension."""

    TTF = "ttf"
    OTF = "otf"
    WOFF = "woff"

    @classmethod
    def from_path(cls, path: Path) -> "FontFormat | None":
        """Infer the format from a file suffix, ignoring case.

        Args:
            path: Font file path

        Returns:
            Matching FontFormat, or None for unrecognized extensions
        """
        suffix = path.suffix.lower().lstrip(".")
        try:
            return cls(suffix)
        except ValueError:
            return None


@dataclass(frozen=True)
class FontFileRef:
    """A discovered input font.

    Attributes:
        path: Location of the font file
        format: Format inferred from the file extension
    """

    path: Path
    format: FontFormat

    @property
    def name(self) -> str:
        """File name of the font (e.g., "Roboto-Regular.ttf")."""
        return self.path.name

    @property
    def output_name(self) -> str:
        """File name of the WOFF2 output (e.g., "Roboto-Regular.woff2")."""
        return f"{self.path.stem}{OUTPUT_SUFFIX}"
