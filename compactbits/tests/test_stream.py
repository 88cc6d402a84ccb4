import io

import pytest

from compactbits import BitSet, CharStream, InvalidArgument, read_bits, write_bits


def stream(text: str) -> CharStream:
    return CharStream(io.StringIO(text))


def test_partial_read_leaves_remaining_bits_clear() -> None:
    text = "01010100110"
    bits = BitSet[20]()
    s = read_bits(stream(text), bits)
    assert not s.fail
    assert s.eof
    assert bits.to_string()[: len(text)] == text
    assert bits.to_string()[len(text) :] == "0" * 9
    assert all(not bits.test(pos) for pos in range(len(text), 20))


def test_stops_at_mismatch_without_consuming() -> None:
    s = stream("0110x")
    bits = BitSet[8]()
    assert s >> bits is s
    assert bits.to_string() == "01100000"
    assert not s.fail
    assert s.peek() == "x"
    assert s.read() == "x"


def test_bounded_by_capacity() -> None:
    s = stream("111111")
    bits = BitSet[4]()
    s >> bits
    assert bits.to_string() == "1111"
    assert not s.fail
    assert s.read() == "11"


def test_fails_when_nothing_consumed() -> None:
    s = stream("x01")
    bits = BitSet[8](0xFF)
    s >> bits
    assert s.fail
    assert not s
    assert bits.none()
    assert s.read() == "x01"


def test_fails_on_empty_input() -> None:
    s = stream("")
    s >> BitSet[8]()
    assert s.fail
    assert s.eof


def test_mismatch_after_first_character_is_not_a_failure() -> None:
    s = stream("1x")
    bits = BitSet[8]()
    s >> bits
    assert not s.fail
    assert bits.to_string() == "10000000"


def test_zero_capacity_never_fails() -> None:
    s = stream("")
    s >> BitSet[0]()
    assert not s.fail

    s = stream("x")
    s >> BitSet[0]()
    assert not s.fail
    assert s.read() == "x"


def test_resets_target() -> None:
    bits = BitSet[8]().set()
    stream("1") >> bits
    assert bits.to_string() == "10000000"


def test_chained_reads() -> None:
    a, b = BitSet[4](), BitSet[4]()
    s = stream("01011100")
    s >> a >> b
    assert a.to_string() == "0101"
    assert b.to_string() == "1100"
    assert not s.fail


def test_failed_stream_stays_failed_until_cleared() -> None:
    s = stream("x1")
    bits = BitSet[4]()
    s >> bits
    assert s.fail

    assert s.get() == "x"
    s >> bits
    assert s.fail
    assert bits.none()

    s.clear()
    s >> bits
    assert not s.fail
    assert bits.to_string() == "1000"


def test_custom_alphabet() -> None:
    bits = BitSet[4]()
    s = read_bits(stream("-+-+|"), bits, zero="-", one="+")
    assert bits.to_string() == "0101"
    assert s.read() == "|"

    with pytest.raises(InvalidArgument):
        read_bits(stream(""), bits, zero="ab")


def test_read_includes_lookahead() -> None:
    s = stream("abcdef")
    assert s.peek() == "a"
    assert s.read(0) == ""
    assert s.read(2) == "ab"
    assert s.get() == "c"
    assert s.read() == "def"
    assert s.eof
    assert s.get() == ""


def test_write_bits() -> None:
    out = io.StringIO()
    bits = BitSet[11]().set(10).set(0)
    assert write_bits(out, bits) is out
    bits.write_to(out, zero=".", one="#")
    assert out.getvalue() == "10000000001" + "#.........#"
