from ._exceptions import HBConfigError

KEY_SIZE: int = 4


class Element:
    """Fixed-size payload record ordered by a signed 32-bit key.

    Concrete element types are created with :func:`make_element_type`, which
    fixes ``SIZE`` (key plus filler) and whether the payload is non-trivial.
    A non-trivial payload is zeroed when the element is moved out of or
    destroyed, so containers that relocate elements pay for the copy.
    """

    __slots__ = ("key", "payload")

    SIZE: int = KEY_SIZE
    NONTRIVIAL: bool = False

    def __init__(self, key: int) -> None:
        self.key: int = key
        self.payload: bytearray = bytearray(self.SIZE - KEY_SIZE)

    def __int__(self) -> int:
        return self.key

    def __index__(self) -> int:
        return self.key

    def __lt__(self, other: "Element") -> bool:
        return self.key < other.key

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Element):
            return NotImplemented
        return self.key == other.key

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.key})"

    def relocate(self) -> "Element":
        """Return the element as it lives at its new position."""
        if not self.NONTRIVIAL:
            return self
        moved = type(self).__new__(type(self))
        moved.key = self.key
        moved.payload = bytearray(self.payload)
        self.payload[:] = bytes(len(self.payload))
        return moved

    def destroy(self) -> None:
        if self.NONTRIVIAL:
            self.payload[:] = bytes(len(self.payload))


_ELEMENT_TYPES: dict[tuple[int, bool], type[Element]] = {}


def make_element_type(size: int, nontrivial: bool = False) -> type[Element]:
    """Return the element class for a given total size and triviality mode.

    Classes are cached so repeated calls hand back the same type.
    """
    if size < KEY_SIZE:
        raise HBConfigError("element_size", size, f"must be at least {KEY_SIZE}")
    cache_key = (size, nontrivial)
    cls = _ELEMENT_TYPES.get(cache_key)
    if cls is None:
        suffix = "NonTrivial" if nontrivial else ""
        cls = type(
            f"Element{size}{suffix}",
            (Element,),
            {"__slots__": (), "SIZE": size, "NONTRIVIAL": nontrivial},
        )
        _ELEMENT_TYPES[cache_key] = cls
    return cls


def to_int32(value: int) -> int:
    """Truncate an arbitrary integer to a signed 32-bit value."""
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value
