"""compactbits user-facing API.

These helpers describe how a bit set is laid out in memory, which is mostly
useful when choosing capacities for large numbers of small sets.

"""

from __future__ import annotations

import functools
from typing import Any, List, Tuple, Type

import tabulate
import toolz
from public import public
from toolz import curried

from .bitset import BitSet
from .typehints import WordRow
from .words import popcount


@public  # type: ignore[misc]
def bitset_type(size: int) -> Type[BitSet]:
    """Return the bit set class with capacity `size`.

    This is the same as ``BitSet[size]``.

    Examples
    --------
    >>> from compactbits import bitset_type
    >>> Flags = bitset_type(12)
    >>> Flags.width, Flags.nwords
    (16, 1)

    """
    return BitSet[size]


@public  # type: ignore[misc]
def describe(cls: Type[BitSet]) -> WordRow:
    """Return the storage parameters chosen for the bit set class `cls`."""
    return dict(
        size=cls.size,
        width=cls.width,
        nwords=cls.nwords,
        nbytes=cls.nwords * cls.width // 8,
        mask=f"{cls.mask:#x}",
    )


def _word_row(bits: BitSet, item: Tuple[int, int]) -> WordRow:
    index, word = item
    width = bits.width
    start = index * width
    return dict(
        word=index,
        bits=f"[{start}, {min(start + width, bits.size)})",
        hex=f"{word:#0{width // 4 + 2}x}",
        binary=f"{word:0{width}b}",
        count=popcount(word),
    )


@public  # type: ignore[misc]
def layout(bits: BitSet) -> List[WordRow]:
    """Return one row per backing word of `bits`.

    Each row holds the word index, the half-open range of bit positions it
    stores, the word in hexadecimal and binary (most significant bit first)
    and its population count.

    """
    return toolz.pipe(
        enumerate(bits.words),
        curried.map(functools.partial(_word_row, bits)),
        list,
    )


@public  # type: ignore[misc]
def pretty(
    bits: BitSet,
    *,
    tablefmt: str = "simple",
    headers: str = "keys",
    **kwargs: Any,
) -> str:
    """Pretty-format the backing words of a bit set.

    Parameters
    ----------
    bits
        The bit set to format
    tablefmt
        The kind of table to use for formatting
    headers
        A string indicating how to compute column names
    kwargs
        Additional keyword arguments passed to the `tabulate.tabulate`
        function

    Returns
    -------
    str
        Pretty-formatted word table

    See Also
    --------
    compactbits.api.show

    """
    # binary columns must keep their leading zeros
    kwargs.setdefault("disable_numparse", True)
    return tabulate.tabulate(
        layout(bits), tablefmt=tablefmt, headers=headers, **kwargs
    )


@public  # type: ignore[misc]
def show(bits: BitSet, **kwargs: Any) -> None:
    """Print the backing words of a bit set.

    See Also
    --------
    compactbits.api.pretty

    """
    print(pretty(bits, **kwargs))
