"""Various type definitions used throughout compactbits."""

from typing import TYPE_CHECKING, Any, Dict, MutableSequence, TypeVar

if TYPE_CHECKING:  # pragma: no cover
    from .bitset import BitSet  # noqa: F401

B = TypeVar("B", bound="BitSet")

Words = MutableSequence[int]
WordRow = Dict[str, Any]
