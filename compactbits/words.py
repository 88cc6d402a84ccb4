"""Backing word selection and single-word bit primitives.

A capacity ``n`` is stored in the narrowest unsigned word that holds it (8,
16 or 32 bits) and in 64-bit words for anything larger. Every function here
is a pure function of its arguments.

"""

from __future__ import annotations

import array
import functools
from typing import Iterator, Sequence

WIDTHS = 8, 16, 32, 64

# ordered narrowest first so the first match wins on every platform
_TYPECODES = "B", "H", "I", "L", "Q"


def _check_capacity(n: int) -> None:
    if not isinstance(n, int) or isinstance(n, bool):
        raise TypeError(f"capacity must be an integer, got {n!r}")
    if n < 0:
        raise ValueError(f"capacity not greater than or equal to 0, n == {n}")


def word_width(n: int) -> int:
    """Return the number of bits per backing word for capacity `n`.

    Raises
    ------
    TypeError
        If `n` is not an integer
    ValueError
        If `n` is negative

    """
    _check_capacity(n)
    return next((width for width in WIDTHS if n <= width), WIDTHS[-1])


def word_count(n: int) -> int:
    """Return the number of backing words needed for capacity `n`."""
    width = word_width(n)
    return (n + width - 1) // width


def all_ones(width: int) -> int:
    """Return a `width`-bit word with every bit set."""
    return (1 << width) - 1


def last_word_mask(n: int) -> int:
    """Return the mask of valid bits in the last word of capacity `n`.

    A capacity that is an exact multiple of the word width uses the whole
    last word, so the mask is the all-ones word.

    """
    width = word_width(n)
    if not n:
        return 0
    remainder = n % width
    return all_ones(width) if not remainder else (1 << remainder) - 1


@functools.lru_cache(maxsize=None)
def typecode(width: int) -> str:
    """Return the :mod:`array` typecode whose items are exactly `width` bits.

    Raises
    ------
    ValueError
        If this platform has no unsigned array type of that width

    """
    nbytes, remainder = divmod(width, 8)
    if remainder or width not in WIDTHS:
        raise ValueError(f"Invalid word width: {width:d}")
    for code in _TYPECODES:
        if array.array(code).itemsize == nbytes:
            return code
    raise ValueError(f"No unsigned array typecode with {nbytes:d} byte items")


def _popcount_builtin(word: int) -> int:
    """Return the number of set bits in `word`."""
    return word.bit_count()  # type: ignore[attr-defined]


def _popcount_scan(word: int) -> int:
    count = 0
    while word:
        # clear the lowest set bit
        word &= word - 1
        count += 1
    return count


def find_first_set(word: int) -> int:
    """Return the 1-based index of the lowest set bit of `word`, or 0."""
    return (word & -word).bit_length()


HAVE_BIT_COUNT = hasattr(int, "bit_count")

popcount = _popcount_builtin if HAVE_BIT_COUNT else _popcount_scan


def iter_set_bits(words: Sequence[int], width: int, limit: int) -> Iterator[int]:
    """Yield the indices of the set bits in `words` that are less than `limit`.

    Parameters
    ----------
    words
        Packed words, least significant word first.
    width
        The number of bits in each element of `words`.
    limit
        One past the largest bit index to yield.

    """
    for index, word in enumerate(words):
        base = index * width
        if base >= limit:
            return
        while word:
            bit = base + find_first_set(word) - 1
            if bit >= limit:
                return
            yield bit
            word &= word - 1
