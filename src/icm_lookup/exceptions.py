"""
Exceptions raised by the ICM lookup library.

Load-time errors (missing source, malformed line) abort catalog construction.
Query-time errors (unknown subset, bad sample count) go straight to the caller.
"""

from typing import Optional


class CodeLookupError(Exception):
    """Base class for all lookup errors."""


class UnknownSubsetError(CodeLookupError, KeyError, ValueError):
    """Raised when a subset identifier is not one of the four known code sets."""

    def __init__(self, subset):
        self.subset = subset
        super().__init__(f"The specified code set {subset!r} does not exist.")

    def __str__(self) -> str:
        # KeyError would quote the message
        return self.args[0]


class SampleCountError(CodeLookupError, ValueError):
    """Raised when a sample count is negative or larger than the subset."""

    def __init__(self, count: int, available: int):
        self.count = count
        self.available = available
        if count < 0:
            message = f"The specified count {count} must not be negative."
        else:
            message = (
                f"The specified count {count} is greater than the number of codes "
                f"in the specified code set ({available})."
            )
        super().__init__(message)


class MalformedSourceLineError(CodeLookupError, ValueError):
    """Raised when a source line has no comma between code and description."""

    def __init__(self, line_number: int, line: str, source: Optional[str] = None):
        self.line_number = line_number
        self.line = line
        self.source = source
        where = f"{source}, line {line_number}" if source else f"line {line_number}"
        super().__init__(f"Malformed code line ({where}): {line!r}")


class SourceUnavailableError(CodeLookupError, FileNotFoundError):
    """Raised when the text feed for a subset cannot be read."""

    def __init__(self, source: str, reason: Optional[str] = None):
        self.source = source
        message = f"Resource {source} not found."
        if reason:
            message = f"{message} {reason}"
        super().__init__(message)

    def __str__(self) -> str:
        return self.args[0]
