"""pytest fixture plugin.

Usage::

    # conftest.py
    from hubbench._pytest_plugin import bench_config, fake_clock

This makes the ``bench_config`` and ``fake_clock`` fixtures available::

    def test_something(bench_config, fake_clock):
        timer = Timer(bench_config.num_trials, 1.0, clock=fake_clock)
"""

import pytest

from ._config import BenchConfig


class FakeClock:
    """Manually advanced clock for deterministic :class:`Timer` tests."""

    def __init__(self, start: float = 0.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def bench_config() -> BenchConfig:
    """A tiny grid: sizes 1.E1..1.E2, erasure rates 0 and 0.5, short trials."""
    return BenchConfig(
        min_size_exp=1,
        max_size_exp=2,
        min_erasure_rate=0.0,
        max_erasure_rate=0.5,
        erasure_rate_step=0.5,
        num_trials=5,
        min_time_per_trial=0.001,
    )


@pytest.fixture
def fake_clock() -> FakeClock:
    return FakeClock()
