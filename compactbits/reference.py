"""A handle to a single bit inside a bit set's backing words."""

from __future__ import annotations

from typing import Any

from .typehints import Words


class BitRef:
    """A non-owning reference to one bit of a :class:`~compactbits.BitSet`.

    A :class:`BitRef` aliases the storage of the bit set that produced it and
    does no bounds checking. Use it within a single expression; the checked
    :meth:`~compactbits.BitSet.set`, :meth:`~compactbits.BitSet.reset` and
    :meth:`~compactbits.BitSet.flip` methods are the safe way to mutate.

    Attributes
    ----------
    words
        The backing words of the referenced bit set.
    index
        The index of the word holding the bit.
    offset
        The position of the bit inside ``words[index]``.

    """

    __slots__ = "words", "index", "offset"

    def __init__(self, words: Words, index: int, offset: int) -> None:
        self.words = words
        self.index = index
        self.offset = offset

    def __bool__(self) -> bool:
        """Return the value of the referenced bit."""
        return bool(self.words[self.index] >> self.offset & 1)

    def __invert__(self) -> bool:
        """Return the negation of the referenced bit without modifying it."""
        return not self

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, (BitRef, bool)):
            return bool(self) == bool(other)
        if isinstance(other, int):
            return int(bool(self)) == other
        return NotImplemented

    def __ne__(self, other: Any) -> bool:
        return not (self == other)

    __hash__ = None  # type: ignore[assignment]

    def assign(self, value: bool) -> BitRef:
        """Set the referenced bit to `value`, leaving all other bits alone."""
        bit = 1 << self.offset
        if value:
            self.words[self.index] |= bit
        else:
            self.words[self.index] &= ~bit
        return self

    def assign_from(self, other: BitRef) -> BitRef:
        """Copy the value of the bit referenced by `other` into this bit.

        This reference keeps pointing at its own bit afterwards.

        """
        return self.assign(bool(other))

    def flip(self) -> BitRef:
        """Toggle the referenced bit in place."""
        return self.assign(not self)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(index={self.index}, "
            f"offset={self.offset}, value={bool(self)})"
        )
