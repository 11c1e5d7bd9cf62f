"""Subsetting engine.

The batch runner only depends on the SubsetEngine protocol. FontToolsEngine
is the default implementation: fontTools subsets the glyphs and encodes
the result as WOFF2 (brotli compressed).

FontToolsEngine is picklable so the runner can execute it in worker
processes.
"""

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol

from fontTools.subset import Options, Subsetter
from fontTools.ttLib import TTFont

from fontsubsetter.domain import OUTPUT_SUFFIX, CharacterSet
from fontsubsetter.exceptions import SubsetError

PARTIAL_SUFFIX = ".part"


@dataclass(frozen=True)
class SubsetOutput:
    """What the engine wrote for one font.

    Attributes:
        output_filename: Name of the file written into the output directory
        output_bytes: Size of that file in bytes
    """

    output_filename: str
    output_bytes: int


class SubsetEngine(Protocol):
    """Anything that can subset one font file into an output directory."""

    def subset(
        self,
        input_path: Path,
        charset: CharacterSet,
        output_dir: Path,
    ) -> SubsetOutput:
        """Subset a font to the character set and write it to output_dir.

        Raises:
            SubsetError: If the font cannot be read, subsetted or written
        """
        ...


class FontToolsEngine:
    """Subsets fonts with fontTools and writes WOFF2 output.

    Example:
        engine = FontToolsEngine()
        output = engine.subset(Path("font.ttf"), charset, Path("out"))
        print(output.output_filename, output.output_bytes)
    """

    def __init__(self, hinting: bool = False) -> None:
        """Initialize the engine.

        Args:
            hinting: Keep TrueType hinting instructions (dropped by default)
        """
        self.hinting = hinting

    def build_options(self) -> Options:
        """Create fontTools subsetter options for WOFF2 output."""
        options = Options()
        options.flavor = "woff2"
        options.hinting = self.hinting
        options.notdef_outline = True
        options.ignore_missing_glyphs = True
        options.ignore_missing_unicodes = True
        return options

    def subset(
        self,
        input_path: Path,
        charset: CharacterSet,
        output_dir: Path,
    ) -> SubsetOutput:
        """Subset a font and save it as <stem>.woff2 in output_dir.

        The font is first written to a temporary .part file and renamed into
        place only after a complete save, so a failure never leaves a
        truncated .woff2 behind.

        Args:
            input_path: TTF, OTF or WOFF font to subset
            charset: Characters whose glyphs are kept
            output_dir: Existing directory receiving the output

        Returns:
            SubsetOutput naming the written file and its size

        Raises:
            SubsetError: If any step fails
        """
        input_path = Path(input_path)
        output_dir = Path(output_dir)
        output_name = f"{input_path.stem}{OUTPUT_SUFFIX}"

        if not input_path.is_file():
            raise SubsetError(str(input_path), "file not found")

        options = self.build_options()
        try:
            font = TTFont(str(input_path), lazy=False)
        except Exception as e:
            raise SubsetError(str(input_path), f"cannot read font: {e}") from e

        try:
            subsetter = Subsetter(options=options)
            subsetter.populate(text=charset.text)
            subsetter.subset(font)
            font.flavor = options.flavor
            output_bytes = self._save_atomic(font, output_dir / output_name)
        except Exception as e:
            raise SubsetError(str(input_path), str(e) or type(e).__name__) from e
        finally:
            font.close()

        return SubsetOutput(output_filename=output_name, output_bytes=output_bytes)

    def _save_atomic(self, font: TTFont, output_path: Path) -> int:
        """Save a font to output_path via a temporary file and return its size."""
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{output_path.stem}-",
            suffix=PARTIAL_SUFFIX,
            dir=output_path.parent,
        )
        os.close(fd)
        tmp_path = Path(tmp_name)
        try:
            font.save(str(tmp_path))
            size = tmp_path.stat().st_size
            os.replace(tmp_path, output_path)
        except BaseException:
            tmp_path.unlink(missing_ok=True)
            raise
        return size
