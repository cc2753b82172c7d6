from typing import TypedDict


class HBContainerStats(TypedDict):
    size: int
    capacity: int
    block_count: int
    free_slots: int
