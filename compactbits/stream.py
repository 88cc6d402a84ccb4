"""Reading and writing bit sets as text streams of zeros and ones.

Reading is greedy: characters are consumed one at a time until the set is
full, the input ends, or a character outside the alphabet is seen. That
character is left unread in the :class:`CharStream`, so a caller can go on
reading from the same place. A read that consumes nothing from a nonempty
set marks the stream as failed instead of raising.

>>> import io
>>> from compactbits import BitSet, CharStream
>>> stream = CharStream(io.StringIO("0110x"))
>>> bits = BitSet[8]()
>>> stream >> bits
CharStream(fail=False, eof=False)
>>> str(bits), stream.read()
('01100000', 'x')

"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from .exceptions import InvalidArgument
from .protocols import Reader, Writer

if TYPE_CHECKING:  # pragma: no cover
    from .bitset import BitSet

logger = logging.getLogger(__name__)


def check_alphabet(zero: str, one: str) -> None:
    """Check that `zero` and `one` are distinct single characters.

    Raises
    ------
    InvalidArgument
        If either is not exactly one character or they are equal

    """
    if len(zero) != 1 or len(one) != 1:
        raise InvalidArgument(
            f"zero and one must be single characters, got {zero!r} and {one!r}"
        )
    if zero == one:
        raise InvalidArgument(f"zero and one must differ, both are {zero!r}")


class CharStream:
    """A character source with one character of lookahead and a fail flag.

    Attributes
    ----------
    source
        The underlying reader.
    fail
        Whether the last read could not produce a value.
    eof
        Whether the end of `source` has been reached.

    """

    __slots__ = "source", "fail", "eof", "_lookahead"

    def __init__(self, source: Reader) -> None:
        self.source = source
        self.fail = False
        self.eof = False
        self._lookahead: Optional[str] = None

    @property
    def good(self) -> bool:
        """Return whether the stream is neither failed nor exhausted."""
        return not (self.fail or self.eof)

    def __bool__(self) -> bool:
        return not self.fail

    def peek(self) -> str:
        """Return the next character without consuming it, or ``""`` at the end."""
        if self._lookahead is None:
            self._lookahead = self.source.read(1)
            if not self._lookahead:
                self.eof = True
        return self._lookahead

    def get(self) -> str:
        """Consume and return the next character, or ``""`` at the end."""
        char = self.peek()
        if char:
            self._lookahead = None
        return char

    def read(self, size: int = -1) -> str:
        """Consume up to `size` characters, or everything if `size` is negative."""
        if not size:
            return ""
        head = self._lookahead or ""
        if self._lookahead:
            self._lookahead = None
        if size < 0:
            rest = self.source.read()
            self.eof = True
        else:
            wanted = size - len(head)
            rest = self.source.read(wanted)
            if len(rest) < wanted:
                self.eof = True
        return head + rest

    def clear(self) -> None:
        """Reset the fail and end of input flags."""
        self.fail = False
        self.eof = False
        if self._lookahead == "":
            self._lookahead = None

    def __rshift__(self, bits: BitSet) -> CharStream:
        """Read into `bits` with :func:`read_bits`."""
        return read_bits(self, bits)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(fail={self.fail}, eof={self.eof})"


def read_bits(
    stream: CharStream, bits: BitSet, zero: str = "0", one: str = "1"
) -> CharStream:
    """Read characters from `stream` into `bits`, starting at bit 0.

    `bits` is cleared first. Bits after the last character read stay zero.

    Parameters
    ----------
    stream
        The stream to read from.
    bits
        The bit set to overwrite.
    zero
        The character that represents a cleared bit.
    one
        The character that represents a set bit.

    Returns
    -------
    CharStream
        `stream`, with :attr:`~CharStream.fail` set if `bits` is nonempty
        and no character was consumed.

    """
    check_alphabet(zero, one)
    bits.reset()
    consumed = 0
    for pos in range(len(bits)):
        if not stream.good:
            break
        char = stream.peek()
        if char != zero and char != one:
            break
        stream.get()
        bits[pos] = char == one
        consumed += 1

    if len(bits) and not consumed:
        stream.fail = True
        logger.debug(f"No bits read into {bits.__class__.__name__}")
    return stream


def write_bits(out: Writer, bits: BitSet, zero: str = "0", one: str = "1") -> Writer:
    """Write `bits` to `out` as a string of zeros and ones, bit 0 first."""
    out.write(bits.to_string(zero, one))
    return out
