import pytest
from hubbench._element import Element, make_element_type, to_int32
from hubbench._exceptions import HBConfigError


def test_payload_fills_remaining_size():
    E = make_element_type(64)
    e = E(7)
    assert len(e.payload) == 60
    assert E.SIZE == 64
    assert not E.NONTRIVIAL


def test_minimum_size_has_empty_payload():
    E = make_element_type(4)
    assert E(1).payload == bytearray()


def test_size_below_key_rejected():
    with pytest.raises(HBConfigError) as exc_info:
        make_element_type(3)
    assert exc_info.value.option == "element_size"
    assert exc_info.value.value == 3


def test_element_types_are_cached():
    assert make_element_type(16) is make_element_type(16)
    assert make_element_type(16) is not make_element_type(16, nontrivial=True)


def test_int_conversion_and_ordering():
    E = make_element_type(8)
    a, b = E(-5), E(3)
    assert int(a) == -5
    assert a < b
    assert sorted([b, a]) == [a, b]
    assert E(3) == b
    assert isinstance(a, Element)


def test_trivial_relocate_keeps_object():
    E = make_element_type(8)
    e = E(1)
    e.payload[:] = b"\x01\x02\x03\x04"
    assert e.relocate() is e
    e.destroy()
    assert e.payload == bytearray(b"\x01\x02\x03\x04")


def test_nontrivial_relocate_moves_payload():
    E = make_element_type(8, nontrivial=True)
    e = E(9)
    e.payload[:] = b"abcd"
    moved = e.relocate()
    assert moved is not e
    assert moved.key == 9
    assert moved.payload == bytearray(b"abcd")
    assert e.payload == bytearray(4)


def test_nontrivial_destroy_zeroes_payload():
    E = make_element_type(8, nontrivial=True)
    e = E(2)
    e.payload[:] = b"wxyz"
    e.destroy()
    assert e.payload == bytearray(4)


@pytest.mark.parametrize(
    "value, expected",
    [
        (0, 0),
        (0x7FFFFFFF, 0x7FFFFFFF),
        (0x80000000, -0x80000000),
        (0xFFFFFFFF, -1),
        (0x1_0000_0005, 5),
    ],
)
def test_to_int32(value, expected):
    assert to_int32(value) == expected
