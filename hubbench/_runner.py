from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from ._config import BenchConfig
from ._scenarios import Scenario
from ._timer import Timer

LOGGER = logging.getLogger("hubbench.runner")

PLACEHOLDER = "----"


@dataclass
class BenchmarkResult:
    """Ratios for one scenario pair: rows are erasure rates, columns sizes."""

    title: str
    erasure_rates: list[float] = field(default_factory=list)
    size_exponents: list[int] = field(default_factory=list)
    data: list[list[str]] = field(default_factory=list)


Table = list[BenchmarkResult]


class BenchmarkRunner:
    def __init__(self, config: BenchConfig, timer: Timer | None = None) -> None:
        self.config = config
        self.timer = timer if timer is not None else Timer(
            config.num_trials, config.min_time_per_trial
        )

    def run(self, title: str, scenario_a: Scenario, scenario_b: Scenario) -> BenchmarkResult:
        """Sweep the erasure-rate x size grid, timing A against B per cell.

        A cell whose workload would exceed ``config.size_limit`` holds
        :data:`PLACEHOLDER` and neither scenario is called for it.  Other
        cells hold ``time_a / time_b`` to two decimals, so values below 1.00
        mean candidate A was faster.
        """
        config = self.config
        res = BenchmarkResult(title, config.erasure_rates(), config.size_exponents())
        LOGGER.info(
            "%s (sizeof(element): %d, sizes 1.E%d..1.E%d)",
            title,
            config.element_size,
            config.min_size_exp,
            config.max_size_exp,
        )
        for erasure_rate in res.erasure_rates:
            row: list[str] = []
            for i in res.size_exponents:
                n = 10**i
                if config.exceeds_size_limit(n):
                    LOGGER.debug("skipping n=%d: over the %d byte limit", n, config.size_limit)
                    row.append(PLACEHOLDER)
                    continue
                t_a = self.timer.measure(lambda: scenario_a(n, erasure_rate))
                t_b = self.timer.measure(lambda: scenario_b(n, erasure_rate))
                LOGGER.debug(
                    "n=%d erasure_rate=%g: A=%.3e s B=%.3e s", n, erasure_rate, t_a, t_b
                )
                row.append(f"{t_a / t_b:.2f}")
            res.data.append(row)
            LOGGER.info("  erase rate %-6g %s", erasure_rate, " ".join(row))
        return res

    def run_suite(self, suite: Iterable[tuple[str, Scenario, Scenario]]) -> Table:
        return [self.run(title, a, b) for title, a, b in suite]
