from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from appraisal.config import AppraisalConfig, DEFAULT_CONFIG

log = logging.getLogger(__name__)


class CashFlowSeries:
    """
    Ordered yearly cash flows (year 1..count) for one calculation session.

    The count stays within [config.min_years, config.max_years]. When the
    series grows, new years are pre-filled from `config.example_flows`
    (if `prefill` is set and the year is within that table), otherwise left
    unset (None). Shrinking drops the trailing years.
    """

    def __init__(
        self,
        count: Optional[int] = None,
        *,
        config: AppraisalConfig = DEFAULT_CONFIG,
        prefill: bool = True,
    ) -> None:
        self.config = config
        self.prefill = prefill
        self._values: List[Optional[float]] = []
        self.resize(config.default_years if count is None else count)

    @classmethod
    def from_values(
        cls,
        values: Sequence[Optional[float]],
        *,
        config: AppraisalConfig = DEFAULT_CONFIG,
        prefill: bool = True,
    ) -> "CashFlowSeries":
        series = cls(len(values), config=config, prefill=prefill)
        for year, v in enumerate(values, start=1):
            series[year] = v
        return series

    # --- sizing ---

    @property
    def count(self) -> int:
        return len(self._values)

    def __len__(self) -> int:
        return len(self._values)

    @property
    def can_append(self) -> bool:
        return self.count < self.config.max_years

    @property
    def can_remove(self) -> bool:
        return self.count > self.config.min_years

    def _default_for(self, year: int) -> Optional[float]:
        if self.prefill and year <= len(self.config.example_flows):
            return float(self.config.example_flows[year - 1])
        return None

    def resize(self, new_count: int) -> None:
        """Set the number of years; existing years keep their values."""
        n = int(new_count)
        if not (self.config.min_years <= n <= self.config.max_years):
            raise ValueError(
                f"year count {n} outside allowed range "
                f"[{self.config.min_years}, {self.config.max_years}]"
            )
        if n < self.count:
            del self._values[n:]
        else:
            for year in range(self.count + 1, n + 1):
                self._values.append(self._default_for(year))

    def append(self) -> bool:
        """Add one year. No-op (returns False) at max_years."""
        if not self.can_append:
            return False
        self.resize(self.count + 1)
        log.info("year added, total %d years", self.count)
        return True

    def remove_last(self) -> bool:
        """Drop the last year. No-op (returns False) at min_years."""
        if not self.can_remove:
            return False
        self.resize(self.count - 1)
        log.info("year removed, total %d years", self.count)
        return True

    # --- values ---

    def _check_year(self, year: int) -> int:
        if not (1 <= year <= self.count):
            raise IndexError(f"year {year} outside 1..{self.count}")
        return year - 1

    def __getitem__(self, year: int) -> Optional[float]:
        return self._values[self._check_year(year)]

    def __setitem__(self, year: int, value: Optional[float]) -> None:
        self._values[self._check_year(year)] = None if value is None else float(value)

    def values(self) -> List[Optional[float]]:
        """Values for years 1..count, unset years as None."""
        return list(self._values)

    def missing_years(self) -> List[int]:
        return [
            year
            for year, v in enumerate(self._values, start=1)
            if v is None or not math.isfinite(v)
        ]

    def snapshot(self) -> Tuple[float, ...]:
        """
        Immutable copy of the series for one calculation.
        Raises ValueError naming the years that are unset or not finite.
        """
        missing = self.missing_years()
        if missing:
            raise ValueError(f"cash flow missing or not a number for year(s) {missing}")
        return tuple(float(v) for v in self._values)  # type: ignore[arg-type]

    def __repr__(self) -> str:
        return f"CashFlowSeries(count={self.count}, values={self._values!r})"


__all__ = ["CashFlowSeries"]
