from __future__ import annotations

import random

from ._containers import IContainer, erase_void
from ._element import Element, to_int32
from ._exceptions import HBConfigError

DEFAULT_SEED: int = 0
RNG_MAX: int = 2**64 - 1


class WorkloadGenerator:
    """Builds candidate containers with reproducible erasure patterns.

    Every call starts from a fresh ``random.Random(seed)``, so two calls with
    the same ``(n, erasure_rate)`` insert the same keys and erase the same
    positions whatever the container type.  Erasure is decided per element
    by drawing a 64-bit value against ``erasure_rate * RNG_MAX``; the number
    of survivors is therefore ``n * (1 - erasure_rate)`` only in expectation.
    """

    def __init__(
        self,
        container_type: type[IContainer],
        element_type: type[Element] = Element,
        seed: int = DEFAULT_SEED,
    ) -> None:
        self.container_type = container_type
        self.element_type = element_type
        self.seed = seed

    def __repr__(self) -> str:
        return (
            f"WorkloadGenerator({self.container_type.__name__}, "
            f"{self.element_type.__name__}, seed={self.seed})"
        )

    def new_container(self) -> IContainer:
        return self.container_type(self.element_type)

    def make(self, n: int, erasure_rate: float) -> IContainer:
        if n < 0:
            raise HBConfigError("n", n, "must be >= 0")
        if not 0.0 <= erasure_rate <= 1.0:
            raise HBConfigError("erasure_rate", erasure_rate, "must lie in [0, 1]")
        erasure_cut = int(erasure_rate * RNG_MAX)
        rng = random.Random(self.seed)
        getrandbits = rng.getrandbits
        c = self.new_container()
        insert = c.insert
        handles = [insert(to_int32(getrandbits(64))) for _ in range(n)]
        rng.shuffle(handles)
        for h in handles:
            if getrandbits(64) < erasure_cut:
                erase_void(c, h)
        return c

    def fill(self, container: IContainer, n: int) -> None:
        """Top ``container`` up to ``n`` elements; never removes any."""
        missing = n - len(container)
        if missing <= 0:
            return
        getrandbits = random.Random(self.seed).getrandbits
        insert = container.insert
        for _ in range(missing):
            insert(to_int32(getrandbits(64)))
