from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable, Iterator

from ._element import Element
from ._exceptions import HBInvalidHandleError
from ._typing import HBContainerStats


class IContainer(ABC):
    """Capability set shared by the candidate containers.

    Handles returned by :meth:`insert` stay valid until their element is
    erased or the container is reorganized by ``sort``, ``clear`` or
    ``shrink_to_fit``.  Erasing one handle never invalidates another.

    Every candidate's ``erase`` returns the next live handle.
    ``HAS_ERASE_VOID`` declares the cheaper variant that returns nothing;
    callers dispatch on it through :func:`erase_void` instead of checking
    for the method itself.
    """

    HAS_ERASE_VOID: bool = False

    def __init__(self, element_type: type[Element] = Element) -> None:
        self.element_type: type[Element] = element_type

    @abstractmethod
    def insert(self, key: int) -> object: ...

    @abstractmethod
    def erase(self, handle: object) -> object | None:
        """Erase the element at ``handle`` and return the next live handle."""
        ...

    @abstractmethod
    def __len__(self) -> int: ...

    @abstractmethod
    def __iter__(self) -> Iterator[Element]: ...

    @abstractmethod
    def clear(self) -> None: ...

    @abstractmethod
    def shrink_to_fit(self) -> None: ...

    @abstractmethod
    def sort(self) -> None: ...

    @abstractmethod
    def stats(self) -> HBContainerStats: ...

    def size(self) -> int:
        return len(self)

    def visit_all(self, fn: Callable[[Element], object]) -> None:
        for x in self:
            fn(x)


def erase_void(container: IContainer, handle: object) -> None:
    """Erase ``handle`` through the cheapest variant the container declares."""
    if container.HAS_ERASE_VOID:
        container.erase_void(handle)  # type: ignore[attr-defined]
    else:
        container.erase(handle)


# ---------------------------------------------------------------------------
#  BlockHive: growing blocks, erased slots recycled through a free list
# ---------------------------------------------------------------------------


class _HiveBlock:
    __slots__ = ("pos", "capacity", "slots", "live")

    def __init__(self, pos: int, capacity: int) -> None:
        self.pos: int = pos
        self.capacity: int = capacity
        self.slots: list[Element | None] = []
        self.live: int = 0


class HiveHandle:
    __slots__ = ("block", "index")

    def __init__(self, block: _HiveBlock, index: int) -> None:
        self.block = block
        self.index = index

    def __repr__(self) -> str:
        return f"HiveHandle(block={self.block.pos}, index={self.index})"


class BlockHive(IContainer):
    MIN_BLOCK_CAPACITY: int = 8
    MAX_BLOCK_CAPACITY: int = 8192

    def __init__(self, element_type: type[Element] = Element) -> None:
        super().__init__(element_type)
        self._blocks: list[_HiveBlock] = []
        self._free: list[tuple[_HiveBlock, int]] = []
        self._size: int = 0
        self._capacity: int = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Element]:
        for block in self._blocks:
            for x in block.slots:
                if x is not None:
                    yield x

    def insert(self, key: int) -> HiveHandle:
        element = self.element_type(key)
        if self._free:
            block, index = self._free.pop()
            block.slots[index] = element
        else:
            block = self._blocks[-1] if self._blocks else None
            if block is None or len(block.slots) == block.capacity:
                block = self._grow()
            index = len(block.slots)
            block.slots.append(element)
        block.live += 1
        self._size += 1
        return HiveHandle(block, index)

    def _grow(self) -> _HiveBlock:
        capacity = min(
            max(self.MIN_BLOCK_CAPACITY, self._capacity), self.MAX_BLOCK_CAPACITY
        )
        block = _HiveBlock(len(self._blocks), capacity)
        self._blocks.append(block)
        self._capacity += capacity
        return block

    def _check(self, handle: HiveHandle) -> Element:
        block = handle.block
        if (
            block.pos >= len(self._blocks)
            or self._blocks[block.pos] is not block
            or handle.index >= len(block.slots)
        ):
            raise HBInvalidHandleError(handle)
        element = block.slots[handle.index]
        if element is None:
            raise HBInvalidHandleError(handle)
        return element

    def erase(self, handle: HiveHandle) -> HiveHandle | None:
        element = self._check(handle)
        block = handle.block
        block.slots[handle.index] = None
        block.live -= 1
        self._size -= 1
        self._free.append((block, handle.index))
        element.destroy()
        return self._next_live(block.pos, handle.index + 1)

    def _next_live(self, pos: int, index: int) -> HiveHandle | None:
        blocks = self._blocks
        while pos < len(blocks):
            block = blocks[pos]
            if block.live:
                slots = block.slots
                for i in range(index, len(slots)):
                    if slots[i] is not None:
                        return HiveHandle(block, i)
            pos += 1
            index = 0
        return None

    def clear(self) -> None:
        if self.element_type.NONTRIVIAL:
            for x in self:
                x.destroy()
        self._blocks = []
        self._free = []
        self._size = 0
        self._capacity = 0

    def shrink_to_fit(self) -> None:
        kept = [b for b in self._blocks if b.live]
        for pos, block in enumerate(kept):
            block.pos = pos
        self._blocks = kept
        self._capacity = sum(b.capacity for b in kept)
        self._free = [
            (block, i)
            for block in kept
            for i, x in enumerate(block.slots)
            if x is None
        ]

    def sort(self) -> None:
        positions = [
            (block, i)
            for block in self._blocks
            for i, x in enumerate(block.slots)
            if x is not None
        ]
        values = [block.slots[i] for block, i in positions]
        values.sort()
        for (block, i), x in zip(positions, values):
            block.slots[i] = x.relocate()

    def stats(self) -> HBContainerStats:
        return HBContainerStats(
            size=self._size,
            capacity=self._capacity,
            block_count=len(self._blocks),
            free_slots=self._capacity - self._size,
        )


# ---------------------------------------------------------------------------
#  SlotHub: fixed 64-slot blocks tracked by an occupancy bitmask
# ---------------------------------------------------------------------------


class _HubBlock:
    __slots__ = ("pos", "slots", "mask")

    def __init__(self, pos: int, size: int) -> None:
        self.pos: int = pos
        self.slots: list[Element | None] = [None] * size
        self.mask: int = 0


class HubHandle:
    __slots__ = ("block", "index")

    def __init__(self, block: _HubBlock, index: int) -> None:
        self.block = block
        self.index = index

    def __repr__(self) -> str:
        return f"HubHandle(block={self.block.pos}, index={self.index})"


class SlotHub(IContainer):
    HAS_ERASE_VOID = True
    BLOCK_SIZE: int = 64
    FULL_MASK: int = (1 << BLOCK_SIZE) - 1

    def __init__(self, element_type: type[Element] = Element) -> None:
        super().__init__(element_type)
        self._blocks: list[_HubBlock] = []
        # positions of blocks with at least one vacant slot
        self._available: list[int] = []
        self._size: int = 0

    def __len__(self) -> int:
        return self._size

    def __iter__(self) -> Iterator[Element]:
        for block in self._blocks:
            mask = block.mask
            slots = block.slots
            while mask:
                low = mask & -mask
                yield slots[low.bit_length() - 1]
                mask ^= low

    def visit_all(self, fn: Callable[[Element], object]) -> None:
        full = self.FULL_MASK
        for block in self._blocks:
            mask = block.mask
            if mask == full:
                for x in block.slots:
                    fn(x)
                continue
            slots = block.slots
            while mask:
                low = mask & -mask
                fn(slots[low.bit_length() - 1])
                mask ^= low

    def insert(self, key: int) -> HubHandle:
        if self._available:
            block = self._blocks[self._available[-1]]
        else:
            block = _HubBlock(len(self._blocks), self.BLOCK_SIZE)
            self._blocks.append(block)
            self._available.append(block.pos)
        vacant = ~block.mask & self.FULL_MASK
        index = (vacant & -vacant).bit_length() - 1
        block.slots[index] = self.element_type(key)
        block.mask |= 1 << index
        if block.mask == self.FULL_MASK:
            self._available.pop()
        self._size += 1
        return HubHandle(block, index)

    def erase_void(self, handle: HubHandle) -> None:
        block = handle.block
        bit = 1 << handle.index
        if (
            block.pos >= len(self._blocks)
            or self._blocks[block.pos] is not block
            or not block.mask & bit
        ):
            raise HBInvalidHandleError(handle)
        if block.mask == self.FULL_MASK:
            self._available.append(block.pos)
        block.mask &= ~bit
        element = block.slots[handle.index]
        block.slots[handle.index] = None
        self._size -= 1
        element.destroy()

    def erase(self, handle: HubHandle) -> HubHandle | None:
        self.erase_void(handle)
        pos = handle.block.pos
        mask = handle.block.mask >> (handle.index + 1) << (handle.index + 1)
        while True:
            if mask:
                low = mask & -mask
                return HubHandle(self._blocks[pos], low.bit_length() - 1)
            pos += 1
            if pos >= len(self._blocks):
                return None
            mask = self._blocks[pos].mask

    def clear(self) -> None:
        nontrivial = self.element_type.NONTRIVIAL
        for block in self._blocks:
            if nontrivial:
                for x in block.slots:
                    if x is not None:
                        x.destroy()
            block.slots = [None] * self.BLOCK_SIZE
            block.mask = 0
        self._available = [b.pos for b in reversed(self._blocks)]
        self._size = 0

    def shrink_to_fit(self) -> None:
        kept = [b for b in self._blocks if b.mask]
        for pos, block in enumerate(kept):
            block.pos = pos
        self._blocks = kept
        self._available = [b.pos for b in kept if b.mask != self.FULL_MASK]

    def sort(self) -> None:
        positions = []
        for block in self._blocks:
            mask = block.mask
            while mask:
                low = mask & -mask
                positions.append((block, low.bit_length() - 1))
                mask ^= low
        values = [block.slots[i] for block, i in positions]
        values.sort()
        for (block, i), x in zip(positions, values):
            block.slots[i] = x.relocate()

    def stats(self) -> HBContainerStats:
        capacity = len(self._blocks) * self.BLOCK_SIZE
        return HBContainerStats(
            size=self._size,
            capacity=capacity,
            block_count=len(self._blocks),
            free_slots=capacity - self._size,
        )


CANDIDATES: dict[str, type[IContainer]] = {
    "hive": BlockHive,
    "hub": SlotHub,
}
