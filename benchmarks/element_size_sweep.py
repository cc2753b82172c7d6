"""Element sweep: rerun the comparison table for several payload layouts."""
from __future__ import annotations

import dataclasses
import logging
from datetime import datetime
from pathlib import Path

from hubbench import (
    BenchConfig,
    BenchmarkRunner,
    BlockHive,
    SlotHub,
    Timer,
    WorkloadGenerator,
    default_suite,
    render_table,
)

LOGGER = logging.getLogger("hubbench.sweep")

LAYOUTS: list[tuple[int, bool]] = [
    (8, False),
    (64, False),
    (64, True),
    (256, True),
]


def run_sweep(base: BenchConfig, layouts: list[tuple[int, bool]] = LAYOUTS) -> str:
    sections: list[str] = []
    for element_size, nontrivial in layouts:
        config = dataclasses.replace(base, element_size=element_size, nontrivial=nontrivial)
        label = f"{element_size}B {'non-trivial' if nontrivial else 'trivial'}"
        LOGGER.info("sweep %s", label)
        timer = Timer(config.num_trials, config.min_time_per_trial)
        element_type = config.element_type()
        suite = default_suite(
            WorkloadGenerator(BlockHive, element_type, config.seed),
            WorkloadGenerator(SlotHub, element_type, config.seed),
            timer,
        )
        table = BenchmarkRunner(config, timer).run_suite(suite)
        sections.append(f"## {label}\n\n```\n{render_table(table, config)}```\n")
    return "\n".join(sections)


if __name__ == "__main__":
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
    result = run_sweep(BenchConfig.from_env(max_size_exp=5))

    out_dir = Path("benchmarks") / "results"
    out_dir.mkdir(parents=True, exist_ok=True)
    ts = datetime.now().strftime("%Y%m%d_%H%M%S")
    out_path = out_dir / f"element_size_sweep_{ts}.md"
    out_path.write_text(f"# Element Size Sweep\n\n{result}", encoding="utf-8")
    print(f"\nSaved: {out_path}")
