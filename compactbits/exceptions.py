"""Exceptions raised by checked bit set operations."""


class BitSetError(Exception):
    """Base class of all errors raised by compactbits."""


class OutOfRange(BitSetError, IndexError):
    """A bit position or string offset is outside the valid range."""


class InvalidArgument(BitSetError, ValueError):
    """A character outside the zero/one alphabet was found while parsing."""


class BitSetOverflow(BitSetError, OverflowError):
    """A bit set is too wide for the requested integer conversion."""
