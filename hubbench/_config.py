from __future__ import annotations

import dataclasses
import math
import os
import sys
from collections.abc import Mapping
from dataclasses import dataclass, field

from ._element import Element, make_element_type
from ._exceptions import HBConfigError

ENV_PREFIX = "HUBBENCH_"


def default_size_limit() -> int:
    """Memory cutoff for one workload: smaller on 32-bit interpreters."""
    if sys.maxsize > 2**32:
        return 2048 * 1024 * 1024
    return 800 * 1024 * 1024


@dataclass(frozen=True)
class BenchConfig:
    """Options shared by the workload generator, the runner and the table."""

    element_size: int = 8
    nontrivial: bool = False
    min_size_exp: int = 3
    max_size_exp: int = 7
    min_erasure_rate: float = 0.0
    max_erasure_rate: float = 0.9
    erasure_rate_step: float = 0.1
    num_trials: int = 10
    min_time_per_trial: float = 0.2
    size_limit: int = field(default_factory=default_size_limit)
    seed: int = 0

    def __post_init__(self) -> None:
        if self.element_size < 4:
            raise HBConfigError("element_size", self.element_size, "must be at least 4")
        if self.min_size_exp < 0:
            raise HBConfigError("min_size_exp", self.min_size_exp, "must be >= 0")
        if self.max_size_exp < self.min_size_exp:
            raise HBConfigError(
                "max_size_exp", self.max_size_exp, "must be >= min_size_exp"
            )
        for name in ("min_erasure_rate", "max_erasure_rate"):
            value = getattr(self, name)
            if not 0.0 <= value <= 1.0:
                raise HBConfigError(name, value, "must lie in [0, 1]")
        if self.max_erasure_rate < self.min_erasure_rate:
            raise HBConfigError(
                "max_erasure_rate", self.max_erasure_rate, "must be >= min_erasure_rate"
            )
        if not self.erasure_rate_step > 0.0:
            raise HBConfigError("erasure_rate_step", self.erasure_rate_step, "must be > 0")
        if self.num_trials <= 4:
            raise HBConfigError(
                "num_trials", self.num_trials, "must exceed the 4 trimmed samples"
            )
        if not self.min_time_per_trial > 0.0:
            raise HBConfigError(
                "min_time_per_trial", self.min_time_per_trial, "must be > 0"
            )
        if self.size_limit <= 0:
            raise HBConfigError("size_limit", self.size_limit, "must be > 0")

    @classmethod
    def from_env(
        cls, environ: Mapping[str, str] | None = None, **overrides: object
    ) -> BenchConfig:
        """Build a config from ``HUBBENCH_*`` variables, then ``overrides``.

        ``HUBBENCH_NONTRIVIAL`` accepts ``1/true/yes/on``; every other option
        is converted with the type of its default.
        """
        environ = os.environ if environ is None else environ
        values: dict[str, object] = {}
        for f in dataclasses.fields(cls):
            raw = environ.get(ENV_PREFIX + f.name.upper())
            if raw is None:
                continue
            try:
                values[f.name] = _convert(f.name, raw)
            except ValueError as exc:
                raise HBConfigError(f.name, raw, str(exc)) from exc
        values.update({k: v for k, v in overrides.items() if v is not None})
        return cls(**values)  # type: ignore[arg-type]

    def erasure_rates(self) -> list[float]:
        """Inclusive erasure-rate axis, one entry per table row."""
        steps = math.floor(
            (self.max_erasure_rate - self.min_erasure_rate) / self.erasure_rate_step
            + 1e-9
        )
        return [
            round(self.min_erasure_rate + i * self.erasure_rate_step, 10)
            for i in range(steps + 1)
        ]

    def size_exponents(self) -> list[int]:
        return list(range(self.min_size_exp, self.max_size_exp + 1))

    def exceeds_size_limit(self, n: int) -> bool:
        return n * self.element_size > self.size_limit

    def element_type(self) -> type[Element]:
        return make_element_type(self.element_size, self.nontrivial)


_INT_FIELDS = {
    "element_size",
    "min_size_exp",
    "max_size_exp",
    "num_trials",
    "size_limit",
    "seed",
}


def _convert(name: str, raw: str) -> object:
    if name == "nontrivial":
        return raw.strip().lower() in ("1", "true", "yes", "on")
    if name in _INT_FIELDS:
        return int(raw)
    return float(raw)
