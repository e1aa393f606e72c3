"""
GroupedData: a fixed dataset partitioned by two categorical factors.

GroupedData is the "grouping key -> ordered sequence of values" view that
the pairwise tester and the permutation tester consume. It doesn't know
which test will run on it. Groups are built once and never mutated; the
stored arrays are read-only.

Usage:
    from montestats.core.grouping import GroupedData

    data = GroupedData.from_frame(df, response='len', factors=('supp', 'dose'))
    data = GroupedData.from_mapping({('OJ', 0.5): [15.2, 21.5], ...})

    data.keys()          # (('OJ', 0.5), ('OJ', 1.0), ..., ('VC', 2.0))
    data[('OJ', 0.5)]    # array([15.2, 21.5, ...])
    data.levels('dose')  # (0.5, 1.0, 2.0)
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterator, Mapping, Sequence, TYPE_CHECKING

import numpy as np
from numpy.typing import ArrayLike, NDArray

from montestats.core.exceptions import ValidationError
from montestats.core.validation import check_array, check_1d, check_finite

if TYPE_CHECKING:
    import pandas as pd


GroupKey = tuple[Any, Any]


def _as_level(value: Any) -> Any:
    """Unwrap numpy scalars so keys hash and compare like plain Python values."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def _freeze(values: ArrayLike, name: str) -> NDArray[np.floating[Any]]:
    arr = check_array(values, name).astype(np.float64, copy=True)
    check_1d(arr, name)
    check_finite(arr, name)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True)
class GroupedData:
    """
    Immutable mapping from (first_level, second_level) to observations.

    Construct via factory classmethods, not directly.

    Keys are ordered first-factor-major, each factor in its level order.
    That order fixes which group of a pair is reported first, and hence
    the sign of every pairwise difference.
    """
    _groups: dict[GroupKey, NDArray[np.floating[Any]]]
    _factors: tuple[str, str]
    _levels: tuple[tuple[Any, ...], tuple[Any, ...]]
    _response: str

    # === Group Access ===

    def keys(self) -> tuple[GroupKey, ...]:
        """Group keys present in the data, in canonical order."""
        return tuple(
            (a, b)
            for a in self._levels[0]
            for b in self._levels[1]
            if (a, b) in self._groups
        )

    def __getitem__(self, key: GroupKey) -> NDArray[np.floating[Any]]:
        """
        Access the observations of one group.

        Raises:
            KeyError: If the group is absent, listing available keys
        """
        key = tuple(_as_level(k) for k in key)
        if key not in self._groups:
            raise KeyError(
                f"GroupedData has no group {key!r}. Available: {self.keys()}"
            )
        return self._groups[key]

    def __contains__(self, key: object) -> bool:
        if not isinstance(key, tuple):
            return False
        return tuple(_as_level(k) for k in key) in self._groups

    def __iter__(self) -> Iterator[GroupKey]:
        return iter(self.keys())

    def __len__(self) -> int:
        return len(self._groups)

    def items(self) -> Iterator[tuple[GroupKey, NDArray[np.floating[Any]]]]:
        for key in self.keys():
            yield key, self._groups[key]

    # === Properties ===

    @property
    def factors(self) -> tuple[str, str]:
        """Names of the two grouping factors."""
        return self._factors

    @property
    def response(self) -> str:
        """Name of the measured variable."""
        return self._response

    @property
    def n_observations(self) -> int:
        return int(sum(len(v) for v in self._groups.values()))

    def factor_index(self, factor: str) -> int:
        """Position (0 or 1) of a factor in the group keys."""
        if factor not in self._factors:
            raise ValidationError(
                f"unknown factor {factor!r}, expected one of {self._factors}"
            )
        return self._factors.index(factor)

    def levels(self, factor: str | int) -> tuple[Any, ...]:
        """Level order of a factor, by name or position."""
        idx = factor if isinstance(factor, int) else self.factor_index(factor)
        return self._levels[idx]

    def select(self, factor: str, level: Any) -> dict[Any, NDArray[np.floating[Any]]]:
        """
        Groups at one level of a factor, keyed by the other factor's level.

        Used to build a permutation stratum: select('dose', 0.5) returns
        {'OJ': ..., 'VC': ...}.
        """
        idx = self.factor_index(factor)
        other = 1 - idx
        level = _as_level(level)
        return {
            key[other]: self._groups[key]
            for key in self.keys()
            if key[idx] == level
        }

    def describe(self) -> 'pd.DataFrame':
        """Per-group n, mean and standard deviation (ddof=1)."""
        import pandas as pd

        rows = []
        for (a, b), values in self.items():
            n = len(values)
            rows.append({
                self._factors[0]: a,
                self._factors[1]: b,
                'n': n,
                'mean': float(np.mean(values)),
                'sd': float(np.std(values, ddof=1)) if n > 1 else np.nan,
            })
        return pd.DataFrame(rows, columns=[*self._factors, 'n', 'mean', 'sd'])

    # === Factory Methods ===

    @classmethod
    def from_mapping(
        cls,
        groups: Mapping[GroupKey, ArrayLike],
        *,
        factors: tuple[str, str] = ('first', 'second'),
        levels: tuple[Sequence[Any], Sequence[Any]] | None = None,
        response: str = 'value',
    ) -> GroupedData:
        """
        Construct from a {(first_level, second_level): values} mapping.

        Level order defaults to the sorted distinct levels seen in the keys.
        """
        if len(factors) != 2:
            raise ValidationError(f"factors must name exactly 2 factors, got {factors!r}")

        storage: dict[GroupKey, NDArray[np.floating[Any]]] = {}
        for key, values in groups.items():
            if not isinstance(key, tuple) or len(key) != 2:
                raise ValidationError(
                    f"group keys must be 2-tuples, got {key!r}"
                )
            key = (_as_level(key[0]), _as_level(key[1]))
            storage[key] = _freeze(values, f"group {key!r}")

        if not storage:
            raise ValidationError("groups must contain at least one group")

        if levels is None:
            levels = (
                sorted({k[0] for k in storage}),
                sorted({k[1] for k in storage}),
            )
        level_tuple = (
            tuple(_as_level(v) for v in levels[0]),
            tuple(_as_level(v) for v in levels[1]),
        )
        unknown = [
            k for k in storage
            if k[0] not in level_tuple[0] or k[1] not in level_tuple[1]
        ]
        if unknown:
            raise ValidationError(
                f"group keys {unknown} use levels outside {level_tuple}"
            )

        return cls(
            _groups=storage,
            _factors=(str(factors[0]), str(factors[1])),
            _levels=level_tuple,
            _response=response,
        )

    @classmethod
    def from_frame(
        cls,
        df: 'pd.DataFrame',
        *,
        response: str,
        factors: tuple[str, str],
        levels: tuple[Sequence[Any], Sequence[Any]] | None = None,
    ) -> GroupedData:
        """
        Construct from a long-format pandas DataFrame.

        Level order: explicit ``levels`` if given, else the categories of a
        categorical column, else the sorted distinct values. Rows whose
        levels fall outside an explicit ``levels`` are ignored.
        """
        missing = [c for c in (response, *factors) if c not in df.columns]
        if missing:
            raise ValidationError(
                f"DataFrame has no column(s) {missing}. Available: {list(df.columns)}"
            )
        if len(factors) != 2:
            raise ValidationError(f"factors must name exactly 2 factors, got {factors!r}")

        if levels is None:
            levels = tuple(_frame_levels(df[f]) for f in factors)

        groups: dict[GroupKey, NDArray] = {}
        for a in levels[0]:
            for b in levels[1]:
                mask = (df[factors[0]] == a) & (df[factors[1]] == b)
                if mask.any():
                    groups[(a, b)] = df.loc[mask, response].to_numpy()

        return cls.from_mapping(
            groups, factors=factors, levels=levels, response=response,
        )

    def __repr__(self) -> str:
        return (
            f"GroupedData(response={self._response!r}, factors={self._factors}, "
            f"n_groups={len(self)}, n_observations={self.n_observations})"
        )


def _frame_levels(column: 'pd.Series') -> list[Any]:
    if hasattr(column, 'cat'):
        return [_as_level(v) for v in column.cat.categories]
    return sorted(_as_level(v) for v in column.dropna().unique())
