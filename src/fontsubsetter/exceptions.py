"""Exception hierarchy for Fontsubsetter."""


class FontSubsetterError(Exception):
    """Base exception for all Fontsubsetter errors."""

    pass


class CharsetLoadError(FontSubsetterError, OSError):
    """The character set file could not be read.

    This is fatal for a run: without a character set there is nothing
    to subset against.
    """

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to read character file '{path}': {reason}")


class DiscoveryError(FontSubsetterError):
    """The font source directory could not be listed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to list font directory '{path}': {reason}")


class SubsetError(FontSubsetterError):
    """Subsetting or converting a single font failed."""

    def __init__(self, path: str, reason: str) -> None:
        self.path = path
        self.reason = reason
        super().__init__(f"Failed to subset font '{path}': {reason}")


class SubsetTimeoutError(SubsetError):
    """The engine did not finish a font within the configured timeout."""

    def __init__(self, path: str, timeout: float) -> None:
        self.timeout = timeout
        super().__init__(path, f"timed out after {timeout:g}s")
