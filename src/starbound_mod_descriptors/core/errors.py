"""Exception types raised by the descriptor layer.

Callers can tell bad input, malformed files and filesystem failures apart by
type alone:

- ``DescriptorArgumentError``: a caller-supplied value violates a precondition
- ``DescriptorParseError``: on-disk or in-memory content is not well formed
- ``DescriptorIOError``: an underlying read, write, create or delete failed

The argument and parse errors are also ``ValueError`` subclasses and the I/O
error is an ``OSError`` subclass, so generic handlers keep working.
"""


class DescriptorError(Exception):
    """Base class for all descriptor errors."""


class DescriptorArgumentError(DescriptorError, ValueError):
    """Raised when a precondition on a caller-supplied value fails."""


class DescriptorParseError(DescriptorError, ValueError):
    """Raised when JSON content cannot be decoded into a descriptor."""


class UnknownRarityError(DescriptorParseError, LookupError):
    """Raised when a rarity string is not one of the known tiers."""

    def __init__(self, token: str):
        super().__init__(f"Unknown rarity: {token!r}")
        self.token = token


class DescriptorIOError(DescriptorError, OSError):
    """Raised when a filesystem operation fails.

    Always raised with the original exception chained as ``__cause__``.
    """
