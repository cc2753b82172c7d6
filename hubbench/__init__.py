from ._config import BenchConfig
from ._containers import CANDIDATES, BlockHive, IContainer, SlotHub, erase_void
from ._element import Element, make_element_type
from ._exceptions import HBConfigError, HBInvalidHandleError, HBTimerStateError
from ._runner import PLACEHOLDER, BenchmarkResult, BenchmarkRunner, Table
from ._scenarios import (
    SCENARIOS,
    BuildEraseRebuild,
    BuildEraseRebuildDestroy,
    CapabilityTraversal,
    FullTraversal,
    SortAll,
    default_suite,
)
from ._table import render_table, write_table
from ._timer import Timer, trimmed_mean
from ._typing import HBContainerStats
from ._workload import DEFAULT_SEED, WorkloadGenerator

__all__ = [
    "BenchConfig",
    "IContainer",
    "BlockHive",
    "SlotHub",
    "CANDIDATES",
    "erase_void",
    "Element",
    "make_element_type",
    "HBConfigError",
    "HBInvalidHandleError",
    "HBTimerStateError",
    "HBContainerStats",
    "Timer",
    "trimmed_mean",
    "WorkloadGenerator",
    "DEFAULT_SEED",
    "BuildEraseRebuild",
    "BuildEraseRebuildDestroy",
    "FullTraversal",
    "CapabilityTraversal",
    "SortAll",
    "SCENARIOS",
    "default_suite",
    "BenchmarkRunner",
    "BenchmarkResult",
    "Table",
    "PLACEHOLDER",
    "render_table",
    "write_table",
]
__version__ = "0.1.0"
