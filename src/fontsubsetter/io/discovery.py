"""Font discovery for the source directory."""

from pathlib import Path

from fontsubsetter.domain import FontFileRef, FontFormat
from fontsubsetter.exceptions import DiscoveryError
from fontsubsetter.utils import get_logger

logger = get_logger("fontsubsetter.io.discovery")


def list_font_files(directory: Path) -> list[FontFileRef]:
    """List recognized font files directly inside a directory.

    Matches .ttf, .otf and .woff case-insensitively. Subdirectories and
    files with any other extension are ignored.

    Args:
        directory: Directory to scan

    Returns:
        Font references sorted by file name

    Raises:
        DiscoveryError: If the directory cannot be listed
    """
    directory = Path(directory)
    try:
        entries = sorted(directory.iterdir(), key=lambda entry: entry.name)
    except OSError as e:
        raise DiscoveryError(str(directory), str(e)) from e

    refs: list[FontFileRef] = []
    for entry in entries:
        font_format = FontFormat.from_path(entry)
        if font_format is None or not entry.is_file():
            continue
        refs.append(FontFileRef(path=entry, format=font_format))
    return refs


def discover_fonts(directory: Path) -> list[FontFileRef]:
    """Find the fonts to process, treating an unreadable directory as empty.

    Args:
        directory: Directory to scan

    Returns:
        Font references sorted by file name, or [] if listing failed
    """
    try:
        refs = list_font_files(directory)
    except DiscoveryError as e:
        logger.warning("Font discovery failed", directory=e.path, error=e.reason)
        return []

    logger.info("Fonts discovered", directory=str(directory), count=len(refs))
    return refs
