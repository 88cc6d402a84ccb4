"""Protocols for the text sources and sinks used by the stream codec."""

import abc

from typing_extensions import Protocol


class Reader(Protocol):
    """A protocol for objects that produce text, such as :class:`io.StringIO`."""

    @abc.abstractmethod
    def read(self, size: int = -1) -> str:
        """Read at most `size` characters, or everything if `size` is negative.

        An empty string signals the end of input.

        """


class Writer(Protocol):
    """A protocol for objects that consume text, such as :data:`sys.stdout`."""

    @abc.abstractmethod
    def write(self, text: str) -> int:
        """Write `text` and return the number of characters written."""
