import pytest
from hubbench._containers import BlockHive, SlotHub
from hubbench._scenarios import (
    SCENARIOS,
    BuildEraseRebuild,
    BuildEraseRebuildDestroy,
    CapabilityTraversal,
    FullTraversal,
    SortAll,
    default_suite,
)
from hubbench._timer import Timer
from hubbench._workload import WorkloadGenerator


@pytest.fixture
def timer(fake_clock):
    return Timer(num_trials=5, min_time_per_trial=1.0, clock=fake_clock)


def expected_checksum(n, rate):
    c = WorkloadGenerator(BlockHive).make(n, rate)
    return sum(int(x) for x in c) & 0xFFFFFFFF


@pytest.mark.parametrize("cls", [BuildEraseRebuild, BuildEraseRebuildDestroy])
def test_build_scenarios_return_full_size(container_type, timer, cls):
    scenario = cls(WorkloadGenerator(container_type), timer)
    assert scenario(1000, 0.5) == 1000
    assert scenario(10, 0.0) == 10


def test_build_teardown_is_excluded_from_timing(container_type, fake_clock):
    timer = Timer(num_trials=5, min_time_per_trial=1.0, clock=fake_clock)

    class SlowClear(container_type):
        def clear(self):
            fake_clock.advance(1000.0)
            super().clear()

    excluded = BuildEraseRebuild(WorkloadGenerator(SlowClear), timer)
    included = BuildEraseRebuildDestroy(WorkloadGenerator(SlowClear), timer)
    def timed(scenario):
        def op():
            fake_clock.advance(1.0)
            return scenario(10, 0.0)
        return op

    assert timer.measure(timed(excluded)) == pytest.approx(1.0)
    assert timer.measure(timed(included)) == pytest.approx(1001.0)


@pytest.mark.parametrize("cls", [FullTraversal, CapabilityTraversal])
def test_traversal_checksum(container_type, timer, cls):
    scenario = cls(WorkloadGenerator(container_type), timer)
    assert scenario(500, 0.3) == expected_checksum(500, 0.3)


def test_traversals_agree_across_candidates(timer):
    a = FullTraversal(WorkloadGenerator(BlockHive), timer)
    b = CapabilityTraversal(WorkloadGenerator(SlotHub), timer)
    for n, rate in [(10, 0.0), (1000, 0.5), (64 * 5, 0.0)]:
        assert a(n, rate) == b(n, rate)


def test_traversal_cache_reused_for_same_cell(container_type, timer):
    scenario = FullTraversal(WorkloadGenerator(container_type), timer)
    scenario(100, 0.2)
    first = scenario.container
    scenario(100, 0.2)
    assert scenario.container is first
    scenario(100, 0.3)
    assert scenario.container is not first
    assert len(first) == 0


def test_traversal_cache_not_committed_when_rebuild_fails(container_type, timer):
    class FlakyGenerator(WorkloadGenerator):
        failures = 0

        def make(self, n, erasure_rate):
            if self.failures:
                self.failures -= 1
                raise MemoryError("rebuild failed")
            return super().make(n, erasure_rate)

    gen = FlakyGenerator(container_type)
    scenario = FullTraversal(gen, timer)
    assert scenario(100, 0.2) == expected_checksum(100, 0.2)

    gen.failures = 1
    with pytest.raises(MemoryError):
        scenario(200, 0.5)
    assert scenario.n != 200

    assert scenario(100, 0.2) == expected_checksum(100, 0.2)
    assert scenario(200, 0.5) == expected_checksum(200, 0.5)
    assert (scenario.n, scenario.erasure_rate) == (200, 0.5)


def test_traversal_rebuild_is_excluded_from_timing(container_type, fake_clock):
    timer = Timer(num_trials=5, min_time_per_trial=1.0, clock=fake_clock)

    class SlowInsert(container_type):
        def insert(self, key):
            fake_clock.advance(1.0)
            return super().insert(key)

    scenario = CapabilityTraversal(WorkloadGenerator(SlowInsert), timer)

    def op():
        fake_clock.advance(0.5)
        return scenario(50, 0.0)

    assert timer.measure(op) == pytest.approx(0.5)


def test_sort_scenario(container_type, timer):
    gen = WorkloadGenerator(container_type)
    assert SortAll(gen, timer)(1000, 0.4) == len(gen.make(1000, 0.4))


def test_sort_leaves_size_and_orders_keys(container_type):
    c = WorkloadGenerator(container_type).make(2000, 0.25)
    size = len(c)
    c.sort()
    ks = [int(x) for x in c]
    assert len(c) == size
    assert ks == sorted(ks)


def test_sort_build_is_excluded_from_timing(container_type, fake_clock):
    timer = Timer(num_trials=5, min_time_per_trial=1.0, clock=fake_clock)

    class SlowInsert(container_type):
        def insert(self, key):
            fake_clock.advance(1.0)
            return super().insert(key)

        def sort(self):
            fake_clock.advance(0.25)
            super().sort()

    scenario = SortAll(WorkloadGenerator(SlowInsert), timer)
    assert timer.measure(lambda: scenario(20, 0.0)) == pytest.approx(0.25)


def test_scenario_registry():
    assert set(SCENARIOS) == {"create", "create_and_destroy", "for_each", "visit_all", "sort"}


def test_default_suite(timer):
    suite = default_suite(WorkloadGenerator(BlockHive), WorkloadGenerator(SlotHub), timer)
    titles = [title for title, _, _ in suite]
    assert titles == [
        "insert, erase, insert",
        "ins, erase, ins, destroy",
        "for_each",
        "visit_all",
        "sort",
    ]
    _, a, b = suite[3]
    assert type(a) is FullTraversal
    assert type(b) is CapabilityTraversal
    assert a.generator.container_type is BlockHive
    assert b.generator.container_type is SlotHub
