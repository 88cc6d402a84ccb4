"""Inspect how bit sets of a given capacity are stored."""

import argparse
import logging
import sys
from typing import Optional, Sequence, TextIO

from compactbits.api import describe, pretty
from compactbits.bitset import BitSet
from compactbits.exceptions import BitSetError

logger = logging.getLogger(__name__)


def capacity(text: str) -> int:
    value = int(text)
    if value < 0:
        raise argparse.ArgumentTypeError(f"capacity must be >= 0, got {value}")
    return value


def integer(text: str) -> int:
    value = int(text, 0)
    if value < 0:
        raise argparse.ArgumentTypeError(f"value must be >= 0, got {value}")
    return value


def parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="compactbits",
        description=(
            "Show the word layout of a fixed capacity bit set built from "
            "strings of zeros and ones or from integers."
        ),
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    p.add_argument(
        "-s",
        "--size",
        type=capacity,
        required=True,
        help="Capacity of the bit set in bits.",
    )
    p.add_argument(
        "strings",
        nargs="*",
        default=[],
        help="Bit strings to parse, bit 0 first.",
    )
    p.add_argument(
        "-i",
        "--int",
        dest="integers",
        type=integer,
        action="append",
        default=[],
        help="Integer values to load; accepts 0x and 0b prefixes.",
    )
    p.add_argument(
        "-z",
        "--zero",
        type=str,
        default="0",
        help="Character for a cleared bit.",
    )
    p.add_argument(
        "-o",
        "--one",
        type=str,
        default="1",
        help="Character for a set bit.",
    )
    p.add_argument(
        "-t",
        "--tablefmt",
        type=str,
        default="simple",
        help="tabulate table format for the word table.",
    )
    p.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log debug messages to stderr.",
    )
    return p.parse_args(argv)


def main(
    *,
    size: int,
    strings: Sequence[str],
    integers: Sequence[int],
    zero: str,
    one: str,
    tablefmt: str,
    output: Optional[TextIO] = None,
) -> int:
    """Print the storage summary and every requested value, return an exit code."""
    if output is None:
        output = sys.stdout
    cls = BitSet[size]
    summary = describe(cls)
    print(
        f"{cls.__name__}: {summary['nwords']} x {summary['width']}-bit word(s), "
        f"{summary['nbytes']} byte(s)",
        file=output,
    )

    values = []
    try:
        values.extend(cls.from_string(s, zero=zero, one=one) for s in strings)
        values.extend(cls(value) for value in integers)
    except BitSetError as e:
        logger.debug(f"Rejected input for {cls.__name__}: {e}")
        print(f"compactbits: error: {e}", file=sys.stderr)
        return 2

    for bits in values:
        print(file=output)
        print(
            f"{bits.to_string(zero, one)}  count={bits.count()}  int={bits.to_int()}",
            file=output,
        )
        if bits.nwords:
            print(pretty(bits, tablefmt=tablefmt), file=output)
    return 0


def run(argv: Optional[Sequence[str]] = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    return main(
        size=args.size,
        strings=args.strings,
        integers=args.integers,
        zero=args.zero,
        one=args.one,
        tablefmt=args.tablefmt,
    )


if __name__ == "__main__":  # pragma: no cover
    sys.exit(run())
