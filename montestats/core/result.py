"""
Result envelope shared by every backend.

Each backend returns Result[P], where P is the frozen payload of its
domain (SimulationParams, TTestParams, PairwiseParams, PermutationParams).
The envelope carries what every computation has in common: diagnostics
in ``info``, per-section ``timing``, the producing backend, and non-fatal
warnings. Solution wrappers read from it; nothing writes to it after
construction.
"""

from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable output of one backend run.

    Attributes:
        params: Domain payload
        info: Diagnostics such as the seed, group sizes or pair counts
        timing: Section timings from Timer.result(), or None
        backend_name: e.g. 'cpu_simulation', 'cpu_permutation'
        warnings: Non-fatal conditions, e.g. an undefined single-trial
            variance or a pair with constant data
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)

    def has_warning(self, substring: str) -> bool:
        """True if any warning contains ``substring``."""
        return any(substring in w for w in self.warnings)
