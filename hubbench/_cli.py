from __future__ import annotations

import argparse
import logging
import os
import sys

from ._config import BenchConfig
from ._containers import CANDIDATES
from ._runner import BenchmarkRunner
from ._scenarios import default_suite
from ._table import write_table
from ._timer import Timer
from ._workload import WorkloadGenerator

LOGGER = logging.getLogger("hubbench")


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="hubbench",
        description="Compare two block-based containers over a size x erasure-rate grid",
    )
    parser.add_argument("output", help="Path of the text table to write")
    parser.add_argument("--min-size-exp", type=int)
    parser.add_argument("--max-size-exp", type=int)
    parser.add_argument("--min-erasure-rate", type=float)
    parser.add_argument("--max-erasure-rate", type=float)
    parser.add_argument("--erasure-rate-step", type=float)
    parser.add_argument("--element-size", type=int, help="Total element size in bytes")
    parser.add_argument(
        "--nontrivial",
        action="store_true",
        default=None,
        help="Zero element payloads on move and destruction",
    )
    parser.add_argument("--trials", dest="num_trials", type=int)
    parser.add_argument(
        "--min-time", dest="min_time_per_trial", type=float, help="Seconds per trial"
    )
    parser.add_argument("--size-limit", type=int, help="Memory cutoff in bytes")
    parser.add_argument("--seed", type=int)
    parser.add_argument("--candidate-a", choices=sorted(CANDIDATES), default="hive")
    parser.add_argument("--candidate-b", choices=sorted(CANDIDATES), default="hub")
    parser.add_argument(
        "--log-level",
        default=os.environ.get("HUBBENCH_LOG_LEVEL", "INFO"),
        help="Logging level",
    )
    return parser.parse_args(argv)


def setup_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )


def build_config(args: argparse.Namespace) -> BenchConfig:
    return BenchConfig.from_env(
        element_size=args.element_size,
        nontrivial=args.nontrivial,
        min_size_exp=args.min_size_exp,
        max_size_exp=args.max_size_exp,
        min_erasure_rate=args.min_erasure_rate,
        max_erasure_rate=args.max_erasure_rate,
        erasure_rate_step=args.erasure_rate_step,
        num_trials=args.num_trials,
        min_time_per_trial=args.min_time_per_trial,
        size_limit=args.size_limit,
        seed=args.seed,
    )


def run(args: argparse.Namespace) -> None:
    config = build_config(args)
    element_type = config.element_type()
    timer = Timer(config.num_trials, config.min_time_per_trial)
    generator_a = WorkloadGenerator(CANDIDATES[args.candidate_a], element_type, config.seed)
    generator_b = WorkloadGenerator(CANDIDATES[args.candidate_b], element_type, config.seed)
    LOGGER.info(
        "Comparing %s (A) against %s (B), sizeof(element)=%d%s",
        args.candidate_a,
        args.candidate_b,
        config.element_size,
        " (non-trivial)" if config.nontrivial else "",
    )
    table = BenchmarkRunner(config, timer).run_suite(
        default_suite(generator_a, generator_b, timer)
    )
    out_path = write_table(table, args.output, config)
    LOGGER.info("Table written to %s", out_path)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(args.log_level)
    try:
        run(args)
    except Exception as exc:
        LOGGER.error("Benchmark aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
