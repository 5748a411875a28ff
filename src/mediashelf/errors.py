"""Exception hierarchy."""

from __future__ import annotations


class MediashelfError(Exception):
    """Base class for mediashelf errors."""


class ConfigurationError(MediashelfError):
    """Raised when sources or settings are unusable at construction time.

    This is a caller error: nothing meaningful can be returned, so it is never
    swallowed by the aggregator.
    """


class SourceError(MediashelfError, RuntimeError):
    """A single source's search call failed."""

    def __init__(self, source: str, message: str) -> None:
        super().__init__(f"{source}: {message}")
        self.source = source
        self.message = message


class SourceResponseError(SourceError):
    """A source answered, but the payload could not be understood."""
