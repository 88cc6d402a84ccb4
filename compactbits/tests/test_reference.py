from compactbits import BitRef, BitSet


def test_read_and_assign() -> None:
    bits = BitSet[11]()
    ref = bits.ref(3)
    assert isinstance(ref, BitRef)
    assert not ref

    ref.assign(True)
    assert ref
    assert bits.test(3)
    assert bits.count() == 1

    ref.assign(False)
    assert not bits.test(3)


def test_assign_from_copies_value() -> None:
    bits = BitSet[11]()
    target = bits.ref(0)
    source = bits.ref(1)
    bits.set(1)

    target.assign_from(source)
    assert bits.test(0)

    bits.reset(1)
    assert bits.test(0)
    assert (target.index, target.offset) == (0, 0)


def test_invert_is_pure() -> None:
    bits = BitSet[8](1)
    ref = bits.ref(0)
    assert ~ref is False
    assert bits.test(0)
    assert ~bits.ref(1) is True


def test_flip() -> None:
    bits = BitSet[8]()
    ref = bits.ref(7)
    assert ref.flip() is ref
    assert bits.to_string() == "00000001"
    ref.flip()
    assert bits.none()


def test_reference_across_words() -> None:
    bits = BitSet[100]()
    ref = bits.ref(70)
    assert (ref.index, ref.offset) == (1, 6)
    ref.assign(True)
    assert bits.test(70)
    assert bits.words == (0, 1 << 6)


def test_other_bits_untouched() -> None:
    bits = BitSet[16](0b1010_1010_1010_1010)
    bits.ref(1).assign(False)
    bits.ref(0).assign(True)
    assert bits.to_int() == 0b1010_1010_1010_1001


def test_equality() -> None:
    bits = BitSet[8](0b11)
    assert bits.ref(0) == True  # noqa: E712
    assert bits.ref(0) == bits.ref(1)
    assert bits.ref(0) != bits.ref(2)


def test_integer_equality() -> None:
    bits = BitSet[8](0b1)
    assert bits.ref(0) == 1
    assert bits.ref(1) == 0
    assert bits.ref(0) != 2
    assert bits.ref(1) != -1


def test_repr() -> None:
    bits = BitSet[16](1 << 9)
    assert repr(bits.ref(9)) == "BitRef(index=0, offset=9, value=True)"
