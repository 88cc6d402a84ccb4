"""A fixed capacity set of bits stored in the narrowest suitable words.

The capacity of a bit set is part of its type: ``BitSet[11]`` is a distinct
class from ``BitSet[12]``, and binary operations between them are rejected.
Bits are packed least significant first, so bit ``i`` lives at offset
``i % width`` of word ``i // width``.

Every bit at or above the capacity in the last word is zero after every
operation. Counting, equality and hashing rely on this.

"""

from __future__ import annotations

import array
import functools
import logging
import operator
import sys
from typing import Any, Callable, ClassVar, Iterator, Optional, Tuple, Type, Union

import toolz

from .exceptions import BitSetOverflow, InvalidArgument, OutOfRange
from .protocols import Writer
from .reference import BitRef
from .stream import check_alphabet, write_bits
from .typehints import B
from .words import (
    all_ones,
    iter_set_bits,
    last_word_mask,
    popcount,
    typecode,
    word_count,
    word_width,
)

logger = logging.getLogger(__name__)

# chunk size in bytes of the hash fold
HASH_CHUNK = 8


@functools.lru_cache(maxsize=None)
def _specialize(size: int) -> Type[BitSet]:
    width = word_width(size)
    name = f"{BitSet.__name__}[{size}]"
    namespace = dict(
        __slots__=(),
        __module__=__name__,
        __qualname__=name,
        size=size,
        width=width,
        nwords=word_count(size),
        mask=last_word_mask(size),
        ones=all_ones(width),
        typecode=typecode(width),
    )
    cls = type(name, (BitSet,), namespace)
    logger.debug(f"Created {name} with {cls.nwords} {width}-bit word(s)")
    return cls


def _restore(size: int, value: int) -> BitSet:
    return BitSet[size](value)


class BitSet:
    """A fixed capacity sequence of bits.

    Use ``BitSet[N]`` to get the class for capacity ``N``. Instances are
    constructed from nothing (all zeros), an unsigned integer, a string of
    zeros and ones, or another instance of the same class.

    Attributes
    ----------
    size
        The number of bits, fixed by the class.
    width
        The number of bits in each backing word: 8, 16, 32 or 64.
    nwords
        The number of backing words.
    mask
        The valid bits of the last backing word.

    Examples
    --------
    >>> from compactbits import BitSet
    >>> bits = BitSet[11]()
    >>> bits.set(10).set(0)
    BitSet[11]('10000000001')
    >>> bits.count()
    2
    >>> BitSet[8](0b10110000).to_u32()
    176

    """

    __slots__ = ("_words",)

    size: ClassVar[int]
    width: ClassVar[int]
    nwords: ClassVar[int]
    mask: ClassVar[int]
    ones: ClassVar[int]
    typecode: ClassVar[str]

    def __class_getitem__(cls, size: int) -> Type[BitSet]:
        """Return the bit set class with capacity `size`."""
        if cls is not BitSet:
            raise TypeError(f"{cls.__name__} already has a capacity")
        # True == 1, so bools are rejected before the cache lookup
        word_width(size)
        return _specialize(size)

    def __init__(self, value: Union[int, str, BitSet] = 0) -> None:
        """Construct a bit set.

        Parameters
        ----------
        value
            An unsigned integer whose bit ``i`` becomes bit ``i`` of the set,
            a string of ``"0"`` and ``"1"`` characters parsed with
            :meth:`from_string`, or a bit set of the same class to copy.

        Raises
        ------
        TypeError
            If the class has no capacity or `value` has an unsupported type
        ValueError
            If `value` is a negative integer

        """
        cls = type(self)
        if cls is BitSet:
            raise TypeError("BitSet has no capacity, use BitSet[N] instead")
        self._words = cls._zeros()

        if isinstance(value, BitSet):
            if type(value) is not cls:
                raise TypeError(
                    f"Cannot construct {cls.__name__} from {type(value).__name__}"
                )
            self._words = array.array(cls.typecode, value._words)
        elif isinstance(value, str):
            self._words = cls.from_string(value)._words
        elif isinstance(value, int):
            self._load(value)
        else:
            raise TypeError(
                f"Cannot construct {cls.__name__} from {type(value).__name__}"
            )

    @classmethod
    def _zeros(cls) -> array.array:
        return array.array(cls.typecode, bytes(cls.nwords * cls.width // 8))

    @classmethod
    def _from_words(cls: Type[B], words: Any) -> B:
        result = object.__new__(cls)
        result._words = array.array(cls.typecode, words)
        result._trim()
        return result

    def _load(self, value: int) -> None:
        if value < 0:
            raise ValueError(f"value not greater than or equal to 0, value == {value}")
        width, ones = self.width, self.ones
        words = self._words
        for index in range(self.nwords):
            words[index] = value >> (index * width) & ones
        self._trim()

    def _trim(self) -> None:
        if self.nwords:
            self._words[-1] &= self.mask

    def _assign(self, other: BitSet) -> None:
        # BitRefs and buffer views alias self._words
        words = self._words
        for index, word in enumerate(other._words):
            words[index] = word

    def _check(self, pos: int) -> None:
        if not 0 <= pos < self.size:
            raise OutOfRange(
                f"bit position {pos} out of range for {self.__class__.__name__}"
            )

    @classmethod
    def from_string(
        cls: Type[B],
        text: str,
        pos: int = 0,
        n: Optional[int] = None,
        zero: str = "0",
        one: str = "1",
    ) -> B:
        """Construct a bit set from the characters ``text[pos:pos + n]``.

        Character ``i`` of the substring becomes bit ``i``. At most `size`
        characters are used; bits past the end of the substring stay zero.

        Parameters
        ----------
        text
            The source string.
        pos
            The index of the first character to read.
        n
            The maximum number of characters to read, or ``None`` for all.
        zero
            The character that represents a cleared bit.
        one
            The character that represents a set bit.

        Raises
        ------
        OutOfRange
            If `pos` is past the end of `text` and the capacity is nonzero
        InvalidArgument
            If a character that would be copied is neither `zero` nor `one`

        """
        check_alphabet(zero, one)
        result = cls()
        if pos < 0:
            raise OutOfRange(f"pos not greater than or equal to 0, pos == {pos}")
        if cls.size and pos > len(text):
            raise OutOfRange(
                f"pos {pos} is past the end of a string of length {len(text)}"
            )
        end = len(text) if n is None else min(len(text), pos + n)
        stop = min(end, pos + cls.size)
        for bit, char in enumerate(text[pos:stop]):
            if char == one:
                result[bit] = True
            elif char != zero:
                raise InvalidArgument(
                    f"Invalid character {char!r} at index {pos + bit}, "
                    f"expected {zero!r} or {one!r}"
                )
        return result

    @classmethod
    def from_bytes(cls: Type[B], data: bytes) -> B:
        """Construct a bit set from a raw byte image produced by :meth:`buffer`.

        Bits at or above the capacity are cleared.

        Raises
        ------
        ValueError
            If `data` is not exactly :attr:`nbytes` long

        """
        expected = cls.nwords * cls.width // 8
        if len(data) != expected:
            raise ValueError(
                f"{cls.__name__} needs {expected} bytes, got {len(data)}"
            )
        words = array.array(cls.typecode)
        words.frombytes(bytes(data))
        return cls._from_words(words)

    def __getitem__(self, pos: int) -> bool:
        """Return the value of bit `pos` without bounds checking."""
        index, offset = divmod(pos, self.width)
        return bool(self._words[index] >> offset & 1)

    def __setitem__(self, pos: int, value: bool) -> None:
        """Set bit `pos` to `value` without bounds checking."""
        self.ref(pos).assign(value)

    get_bit = __getitem__
    set_bit = __setitem__

    def ref(self, pos: int) -> BitRef:
        """Return a :class:`~compactbits.reference.BitRef` to bit `pos`.

        No bounds checking is done.

        """
        index, offset = divmod(pos, self.width)
        return BitRef(self._words, index, offset)

    def test(self, pos: int) -> bool:
        """Return the value of bit `pos`.

        Raises
        ------
        OutOfRange
            If `pos` is not less than :attr:`size`

        """
        self._check(pos)
        return self[pos]

    def set(self: B, pos: Optional[int] = None, value: bool = True) -> B:
        """Set bit `pos` to `value`, or every bit to `value` if `pos` is ``None``.

        Raises
        ------
        OutOfRange
            If `pos` is not less than :attr:`size`

        """
        if pos is None:
            words = self._words
            fill = self.ones if value else 0
            for index in range(self.nwords):
                words[index] = fill
            self._trim()
        else:
            self._check(pos)
            self[pos] = value
        return self

    def reset(self: B, pos: Optional[int] = None) -> B:
        """Clear bit `pos`, or every bit if `pos` is ``None``.

        Raises
        ------
        OutOfRange
            If `pos` is not less than :attr:`size`

        """
        if pos is None:
            words = self._words
            for index in range(self.nwords):
                words[index] = 0
            return self
        return self.set(pos, False)

    def flip(self: B, pos: Optional[int] = None) -> B:
        """Toggle bit `pos`, or every bit if `pos` is ``None``.

        Raises
        ------
        OutOfRange
            If `pos` is not less than :attr:`size`

        """
        if pos is None:
            words = self._words
            for index in range(self.nwords):
                words[index] ^= self.ones
            self._trim()
        else:
            self._check(pos)
            self.ref(pos).flip()
        return self

    def count(self) -> int:
        """Return the number of set bits."""
        words = self._words
        if not words:
            return 0
        return sum(map(popcount, words[:-1])) + popcount(words[-1] & self.mask)

    def any(self) -> bool:
        """Return whether any bit is set."""
        words = self._words
        return bool(words) and (any(words[:-1]) or bool(words[-1] & self.mask))

    def none(self) -> bool:
        """Return whether no bit is set."""
        return not self.any()

    def all(self) -> bool:
        """Return whether every bit is set, which is true when the size is 0."""
        words = self._words
        if not words:
            return True
        ones, mask = self.ones, self.mask
        return all(word == ones for word in words[:-1]) and words[-1] & mask == mask

    def iter_set_bits(self) -> Iterator[int]:
        """Iterate over the positions of the set bits in increasing order."""
        return iter_set_bits(self._words, self.width, self.size)

    @property
    def words(self) -> Tuple[int, ...]:
        """Return a snapshot of the backing words, least significant first."""
        return tuple(self._words)

    def __len__(self) -> int:
        """Return the capacity of the set."""
        return self.size

    def __iter__(self) -> Iterator[bool]:
        """Iterate over the bits from position 0 upwards."""
        return (self[pos] for pos in range(self.size))

    def __bool__(self) -> bool:
        return self.any()

    def _combine(self, other: Any, op: Callable[[int, int], int]) -> Any:
        if type(other) is not type(self):
            return NotImplemented
        return self._from_words(map(op, self._words, other._words))

    def __and__(self: B, other: B) -> B:
        return self._combine(other, operator.and_)

    def __or__(self: B, other: B) -> B:
        return self._combine(other, operator.or_)

    def __xor__(self: B, other: B) -> B:
        return self._combine(other, operator.xor)

    def _inplace(self: B, result: Any) -> B:
        if result is NotImplemented:
            return result
        self._assign(result)
        return self

    def __iand__(self: B, other: B) -> B:
        return self._inplace(self.__and__(other))

    def __ior__(self: B, other: B) -> B:
        return self._inplace(self.__or__(other))

    def __ixor__(self: B, other: B) -> B:
        return self._inplace(self.__xor__(other))

    def __invert__(self: B) -> B:
        ones = self.ones
        return self._from_words(word ^ ones for word in self._words)

    def _shift_amount(self, shift: Any) -> Optional[int]:
        if not isinstance(shift, int):
            return None
        if shift < 0:
            raise ValueError(f"shift not greater than or equal to 0, shift == {shift}")
        return shift

    def __lshift__(self: B, shift: int) -> B:
        """Move every bit `shift` positions towards the end of the set."""
        amount = self._shift_amount(shift)
        if amount is None:
            return NotImplemented
        result = type(self)()
        if amount >= self.size:
            return result

        words, out = self._words, result._words
        width, ones = self.width, self.ones
        skip, bits = divmod(amount, width)
        for index in range(self.nwords - 1, skip - 1, -1):
            source = index - skip
            word = words[source] << bits
            if bits and source:
                word |= words[source - 1] >> (width - bits)
            out[index] = word & ones
        result._trim()
        return result

    def __rshift__(self: B, shift: int) -> B:
        """Move every bit `shift` positions towards position 0."""
        amount = self._shift_amount(shift)
        if amount is None:
            return NotImplemented
        result = type(self)()
        if amount >= self.size:
            return result

        words, out = self._words, result._words
        width, ones = self.width, self.ones
        skip, bits = divmod(amount, width)
        last = self.nwords - 1
        for index in range(self.nwords - skip):
            source = index + skip
            word = words[source] >> bits
            if bits and source < last:
                word |= words[source + 1] << (width - bits) & ones
            out[index] = word
        result._trim()
        return result

    def __ilshift__(self: B, shift: int) -> B:
        return self._inplace(self.__lshift__(shift))

    def __irshift__(self: B, shift: int) -> B:
        return self._inplace(self.__rshift__(shift))

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._words == other._words

    def __ne__(self, other: Any) -> bool:
        return not (self == other)

    def tobytes(self) -> bytes:
        """Return the backing words as little endian bytes."""
        words = self._words
        if sys.byteorder == "big":
            words = array.array(self.typecode, words)
            words.byteswap()
        return words.tobytes()

    def hash_code(self) -> int:
        """Return a 64-bit hash of the set.

        The little endian byte image of the backing words is split into
        8-byte chunks, the last one zero padded, and the chunks are combined
        with exclusive or.

        """
        chunks = toolz.partition_all(HASH_CHUNK, self.tobytes())
        return functools.reduce(
            operator.xor,
            (int.from_bytes(bytes(chunk), "little") for chunk in chunks),
            0,
        )

    def __hash__(self) -> int:
        return self.hash_code()

    def buffer(self) -> memoryview:
        """Return a writable byte view of the backing words in native order.

        Writers must keep every bit at or above :attr:`size` zero.

        """
        return memoryview(self._words).cast("B")

    @property
    def nbytes(self) -> int:
        """Return the size of the backing words in bytes."""
        return self.nwords * self.width // 8

    def _to_unsigned(self, nbits: int) -> int:
        if self.size > nbits:
            raise BitSetOverflow(
                f"{self.__class__.__name__} cannot be represented by a "
                f"{nbits}-bit unsigned integer"
            )
        value = 0
        for bit in iter_set_bits(self._words, self.width, min(self.size, nbits)):
            value |= 1 << bit
        return value

    def to_u32(self) -> int:
        """Return the set as a 32-bit unsigned integer, bit 0 least significant.

        Raises
        ------
        BitSetOverflow
            If :attr:`size` is greater than 32

        """
        return self._to_unsigned(32)

    def to_u64(self) -> int:
        """Return the set as a 64-bit unsigned integer, bit 0 least significant.

        Raises
        ------
        BitSetOverflow
            If :attr:`size` is greater than 64

        """
        return self._to_unsigned(64)

    def to_int(self) -> int:
        """Return the set as an unbounded unsigned integer."""
        width = self.width
        return sum(word << (index * width) for index, word in enumerate(self._words))

    __int__ = to_int

    def to_string(self, zero: str = "0", one: str = "1") -> str:
        """Return a string of :attr:`size` characters, bit 0 first."""
        return "".join(one if bit else zero for bit in self)

    def write_to(self, out: Writer, zero: str = "0", one: str = "1") -> Writer:
        """Write :meth:`to_string` to `out` and return `out`."""
        return write_bits(out, self, zero=zero, one=one)

    def __str__(self) -> str:
        return self.to_string()

    def __format__(self, format_spec: str) -> str:
        if not format_spec:
            return str(self)
        return format(self.to_int(), format_spec)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.to_string()!r})"

    def copy(self: B) -> B:
        """Return a copy of this set."""
        return type(self)(self)

    def __copy__(self: B) -> B:
        return self.copy()

    def __deepcopy__(self: B, memo: Any) -> B:
        return self.copy()

    def __reduce__(self) -> Tuple[Callable[[int, int], BitSet], Tuple[int, int]]:
        return _restore, (self.size, self.to_int())
