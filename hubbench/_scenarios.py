"""Workload shapes timed against both candidates.

A scenario is a callable ``(n, erasure_rate) -> checksum``.  The checksum is
returned so the timer can fold it into its sink; it also lets tests check
that both candidates did the same work.
"""
from __future__ import annotations

import logging
from collections.abc import Callable

from ._containers import IContainer
from ._timer import Timer
from ._workload import WorkloadGenerator

LOGGER = logging.getLogger("hubbench.scenarios")

CHECKSUM_MASK: int = 0xFFFFFFFF

Scenario = Callable[[int, float], int]


class _Scenario:
    name: str = ""

    def __init__(self, generator: WorkloadGenerator, timer: Timer) -> None:
        self.generator = generator
        self.timer = timer

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.generator.container_type.__name__})"


class BuildEraseRebuild(_Scenario):
    """make + fill, with the teardown excluded from timing."""

    name = "insert, erase, insert"

    def __call__(self, n: int, erasure_rate: float) -> int:
        c = self.generator.make(n, erasure_rate)
        self.generator.fill(c, n)
        res = len(c)
        with self.timer.paused():
            c.clear()
            del c
        return res


class BuildEraseRebuildDestroy(_Scenario):
    """make + fill, with the teardown timed as well."""

    name = "ins, erase, ins, destroy"

    def __call__(self, n: int, erasure_rate: float) -> int:
        c = self.generator.make(n, erasure_rate)
        self.generator.fill(c, n)
        res = len(c)
        c.clear()
        return res


class _CachedContainer(_Scenario):
    def __init__(self, generator: WorkloadGenerator, timer: Timer) -> None:
        super().__init__(generator, timer)
        self.n: int = 0
        self.erasure_rate: float = 0.0
        self.container: IContainer = generator.new_container()

    def get_container(self, n: int, erasure_rate: float) -> IContainer:
        if n != self.n or erasure_rate != self.erasure_rate:
            with self.timer.paused():
                # invalidated until make succeeds
                self.n = -1
                self.container.clear()
                self.container.shrink_to_fit()
                self.container = self.generator.make(n, erasure_rate)
                self.n = n
                self.erasure_rate = erasure_rate
                LOGGER.debug(
                    "rebuilt %r for n=%d erasure_rate=%g: %s",
                    self,
                    n,
                    erasure_rate,
                    self.container.stats(),
                )
        return self.container


class FullTraversal(_CachedContainer):
    name = "for_each"

    def __call__(self, n: int, erasure_rate: float) -> int:
        res = 0
        for x in self.get_container(n, erasure_rate):
            res += x.key
        return res & CHECKSUM_MASK


class CapabilityTraversal(_CachedContainer):
    name = "visit_all"

    def __call__(self, n: int, erasure_rate: float) -> int:
        res = 0

        def visit(x) -> None:
            nonlocal res
            res += x.key

        self.get_container(n, erasure_rate).visit_all(visit)
        return res & CHECKSUM_MASK


class SortAll(_Scenario):
    """Sort a freshly built container; only the sort and release are timed."""

    name = "sort"

    def __call__(self, n: int, erasure_rate: float) -> int:
        with self.timer.paused():
            c = self.generator.make(n, erasure_rate)
        c.sort()
        return len(c)


SCENARIOS: dict[str, type[_Scenario]] = {
    "create": BuildEraseRebuild,
    "create_and_destroy": BuildEraseRebuildDestroy,
    "for_each": FullTraversal,
    "visit_all": CapabilityTraversal,
    "sort": SortAll,
}


def default_suite(
    generator_a: WorkloadGenerator,
    generator_b: WorkloadGenerator,
    timer: Timer,
) -> list[tuple[str, Scenario, Scenario]]:
    """The five comparisons of the standard table, in column order.

    The ``visit_all`` column pits candidate A's plain traversal against
    candidate B's bulk traversal.
    """
    pairs = [
        (BuildEraseRebuild, BuildEraseRebuild),
        (BuildEraseRebuildDestroy, BuildEraseRebuildDestroy),
        (FullTraversal, FullTraversal),
        (FullTraversal, CapabilityTraversal),
        (SortAll, SortAll),
    ]
    return [
        (cls_b.name, cls_a(generator_a, timer), cls_b(generator_b, timer))
        for cls_a, cls_b in pairs
    ]
