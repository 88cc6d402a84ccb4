"""Top-level package for compactbits."""

from compactbits.api import *  # noqa: F401,F403
from compactbits.bitset import BitSet  # noqa: F401
from compactbits.exceptions import (  # noqa: F401
    BitSetError,
    BitSetOverflow,
    InvalidArgument,
    OutOfRange,
)
from compactbits.reference import BitRef  # noqa: F401
from compactbits.stream import CharStream, read_bits, write_bits  # noqa: F401

import importlib.metadata as importlib_metadata

__version__ = importlib_metadata.version(__name__)
