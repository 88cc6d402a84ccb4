import pytest

import compactbits
from compactbits import BitSet, bitset_type, describe, layout, pretty, show


def test_bitset_type() -> None:
    assert bitset_type(12) is BitSet[12]


def test_public_names() -> None:
    assert {"bitset_type", "describe", "layout", "pretty", "show"} <= set(
        compactbits.api.__all__
    )


def test_describe() -> None:
    assert describe(BitSet[11]) == dict(
        size=11, width=16, nwords=1, nbytes=2, mask="0x7ff"
    )
    assert describe(BitSet[0]) == dict(size=0, width=8, nwords=0, nbytes=0, mask="0x0")


def test_layout() -> None:
    assert layout(BitSet[11]("10000000001")) == [
        dict(
            word=0,
            bits="[0, 11)",
            hex="0x0401",
            binary="0000010000000001",
            count=2,
        )
    ]
    assert layout(BitSet[0]()) == []


def test_layout_multiple_words() -> None:
    rows = layout(BitSet[100]().set(99).set(0))
    assert [row["bits"] for row in rows] == ["[0, 64)", "[64, 100)"]
    assert [row["count"] for row in rows] == [1, 1]
    assert rows[1]["hex"] == "0x0000000800000000"


def test_pretty() -> None:
    text = pretty(BitSet[8](0b1011_0000))
    assert "binary" in text
    assert "10110000" in text
    assert "0xb0" in text


def test_show(capsys: pytest.CaptureFixture) -> None:
    show(BitSet[8](1), tablefmt="plain")
    out, _ = capsys.readouterr()
    assert "00000001" in out
