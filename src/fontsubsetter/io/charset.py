"""Character set loading.

The character file is plain UTF-8 text. Its layout does not matter:
one character per line, one long line, or prose all work, since every
distinct non-blank character is collected.
"""

from pathlib import Path

from fontsubsetter.domain import CharacterSet
from fontsubsetter.exceptions import CharsetLoadError
from fontsubsetter.utils import get_logger

logger = get_logger("fontsubsetter.io.charset")


def load_charset(path: Path) -> CharacterSet:
    """Load the characters to keep from a text file.

    Args:
        path: Path to the character file

    Returns:
        CharacterSet with duplicates and whitespace removed

    Raises:
        CharsetLoadError: If the file is missing, unreadable or not UTF-8
    """
    try:
        # utf-8-sig: a byte-order mark is an encoding artifact, not a character
        content = Path(path).read_text(encoding="utf-8-sig")
    except (OSError, UnicodeDecodeError) as e:
        raise CharsetLoadError(str(path), str(e)) from e

    charset = CharacterSet.from_text(content)
    logger.info("Character set loaded", path=str(path), unique_characters=len(charset))
    return charset
