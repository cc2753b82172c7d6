from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from contextlib import contextmanager

from ._exceptions import HBConfigError, HBTimerStateError

TRIMMED_PER_SIDE: int = 2


def trimmed_mean(samples: Sequence[float], trim: int = TRIMMED_PER_SIDE) -> float:
    """Mean of ``samples`` after dropping the ``trim`` lowest and highest."""
    if len(samples) <= 2 * trim:
        raise ValueError(
            f"need more than {2 * trim} samples to trim {trim} per side, "
            f"got {len(samples)}"
        )
    ordered = sorted(samples)
    kept = ordered[trim: len(ordered) - trim]
    return sum(kept) / len(kept)


class Timer:
    """Per-call timing of an operation, robust to scheduling noise.

    Each of ``num_trials`` trials calls the operation until at least
    ``min_time_per_trial`` seconds have elapsed and records the average time
    per call; :meth:`measure` returns the trimmed mean of those averages.

    Work done between :meth:`pause` and :meth:`resume` is excluded by moving
    the trial start forward by the paused interval.  A timer holds a single
    trial clock, so measurements on one instance cannot nest.  Outside an
    open trial ``pause`` and ``resume`` do nothing, which lets scenarios be
    called directly.

    Every result is folded into :attr:`sink`, keeping the values observable.
    """

    def __init__(
        self,
        num_trials: int = 10,
        min_time_per_trial: float = 0.2,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        if num_trials <= 2 * TRIMMED_PER_SIDE:
            raise HBConfigError(
                "num_trials", num_trials, "must exceed the 4 trimmed samples"
            )
        if not min_time_per_trial > 0.0:
            raise HBConfigError("min_time_per_trial", min_time_per_trial, "must be > 0")
        self.num_trials: int = num_trials
        self.min_time_per_trial: float = min_time_per_trial
        self._clock = clock
        self._start: float | None = None
        self._pause: float | None = None
        self.sink: int = 0
        self.calls: int = 0

    @property
    def in_trial(self) -> bool:
        return self._start is not None

    @property
    def is_paused(self) -> bool:
        return self._pause is not None

    def measure(self, operation: Callable[[], object]) -> float:
        if self._start is not None:
            raise HBTimerStateError("measure() called while a trial is already open")
        samples: list[float] = []
        for _ in range(self.num_trials):
            samples.append(self._run_trial(operation))
        return trimmed_mean(samples)

    def _run_trial(self, operation: Callable[[], object]) -> float:
        clock = self._clock
        runs = 0
        self._start = clock()
        try:
            while True:
                self._consume(operation())
                runs += 1
                now = clock()
                if now - self._start >= self.min_time_per_trial:
                    break
            if self._pause is not None:
                raise HBTimerStateError("operation returned while timing was paused")
            return (now - self._start) / runs
        finally:
            self._start = None
            self._pause = None

    def _consume(self, result: object) -> None:
        self.calls += 1
        if isinstance(result, int):
            self.sink ^= result

    def pause(self) -> None:
        if self._start is None:
            return
        if self._pause is not None:
            raise HBTimerStateError("pause() called while already paused")
        self._pause = self._clock()

    def resume(self) -> None:
        if self._start is None:
            return
        if self._pause is None:
            raise HBTimerStateError("resume() called without a matching pause()")
        self._start += self._clock() - self._pause
        self._pause = None

    @contextmanager
    def paused(self):
        """Exclude the body of the ``with`` block from the open trial."""
        self.pause()
        try:
            yield
        finally:
            self.resume()
