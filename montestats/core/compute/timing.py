"""
Wall-clock timing for backends.

Every backend runs its work in named sections and reports the section
totals, plus the overall elapsed time, in the ``timing`` field of its
Result.
"""

import time
from contextlib import contextmanager
from typing import Iterator


class Timer:
    """
    Overall stopwatch with named, accumulating sections.

    Usage:
        timer = Timer()
        timer.start()
        with timer.section('draw_samples'):
            batch = dist.draw(source, 1000, 40)
        with timer.section('summary_statistics'):
            means = batch.mean(axis=1)
        timer.stop()
        timer.result()
        # {'total_seconds': 0.004, 'draw_samples': 0.003, 'summary_statistics': 0.001}

    A section entered more than once (e.g. per chunk) adds up.
    """

    def __init__(self):
        self._t0: float | None = None
        self._elapsed: float | None = None
        self._sections: dict[str, float] = {}

    def start(self) -> None:
        self._t0 = time.perf_counter()
        self._elapsed = None

    def stop(self) -> None:
        if self._t0 is None:
            raise RuntimeError("Timer.stop() called before start()")
        self._elapsed = time.perf_counter() - self._t0

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self._sections[name] = (
                self._sections.get(name, 0.0) + time.perf_counter() - t0
            )

    def result(self) -> dict[str, float]:
        """
        Section totals keyed by name, plus 'total_seconds'.

        Raises:
            RuntimeError: If the timer has not been stopped
        """
        if self._elapsed is None:
            raise RuntimeError("Timer.result() called before stop()")
        return {'total_seconds': self._elapsed, **self._sections}


@contextmanager
def timed() -> Iterator[Timer]:
    """
    Time a block as a whole.

    Usage:
        with timed() as timer:
            study = convergence_study(seed=42)
        timer.result()['total_seconds']
    """
    timer = Timer()
    timer.start()
    try:
        yield timer
    finally:
        timer.stop()
