"""Character set domain model.

A character set is the collection of characters a subsetted font must
still be able to render. It is built once per run and never changes.
"""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass


@dataclass(frozen=True)
class CharacterSet:
    """Immutable set of unique, non-blank characters.

    Attributes:
        characters: The member characters, each a single code point
    """

    characters: frozenset[str]

    def __post_init__(self) -> None:
        for char in self.characters:
            if len(char) != 1:
                raise ValueError(f"Not a single character: {char!r}")
            if not char.strip():
                raise ValueError(f"Blank character not allowed: {char!r}")

    @classmethod
    def from_text(cls, text: Iterable[str]) -> "CharacterSet":
        """Build a character set from arbitrary text.

        Duplicates collapse into one member and whitespace-only
        characters are dropped.

        Args:
            text: Text (or any iterable of characters) to collect

        Returns:
            CharacterSet of the distinct non-blank characters
        """
        return cls(frozenset(char for char in text if char.strip()))

    @property
    def text(self) -> str:
        """Members joined in code point order."""
        return "".join(sorted(self.characters))

    @property
    def unicodes(self) -> list[int]:
        """Sorted code points of the members."""
        return sorted(ord(char) for char in self.characters)

    def __len__(self) -> int:
        return len(self.characters)

    def __contains__(self, char: object) -> bool:
        return char in self.characters

    def __iter__(self) -> Iterator[str]:
        return iter(sorted(self.characters))
