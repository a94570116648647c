"""
Finance metrics façade.

Design:
- IRR/NPV implementations live only in appraisal.finance.irr (singleton).
- This module must not *define* irr/npv; it re-exports them next to the
  other appraisal metrics (ROI, discounted payback).
"""
from __future__ import annotations

import logging
import math
from typing import Optional, Sequence

import numpy as np
import pandas as pd

from .irr import npv as npv, irr as irr  # re-exports

log = logging.getLogger(__name__)

NOT_RECOVERABLE_LABEL = "Not recoverable"


def roi(investment: float, cashflows: Sequence[float]) -> float:
    """(sum of cash flows - investment) / investment, as a fraction."""
    inv = float(investment)
    if inv == 0:
        raise ValueError("ROI is undefined for a zero investment")
    return (sum(float(cf) for cf in cashflows) - inv) / inv


def discounted_payback(
    investment: float, cashflows: Sequence[float], rate_pct: float
) -> Optional[float]:
    """
    Years until cumulative discounted cash flow first reaches the investment.

    The result is fractional: whole years elapsed plus the share of the
    paying-back year's discounted flow needed to close the remaining gap.
    Returns None when the investment is never recovered.
    """
    r = float(rate_pct) / 100.0
    inv = float(investment)
    cumulative = 0.0
    for t, cf in enumerate(cashflows, start=1):
        discounted = float(cf) / ((1.0 + r) ** t)
        previous = cumulative
        cumulative += discounted
        if cumulative >= inv:
            return (t - 1) + (inv - previous) / discounted
    log.debug("investment %s not recovered within %d years", inv, len(cashflows))
    return None


def _plural(n: int, one: str, many: str) -> str:
    return f"{n} {one if n == 1 else many}"


def years_months_label(decimal_years: Optional[float]) -> str:
    """
    '4 years and 3 months' style label for a fractional-year duration.
    Months rounding up to 12 rolls over into the next year.
    """
    if decimal_years is None or not math.isfinite(decimal_years):
        return NOT_RECOVERABLE_LABEL

    years = math.floor(decimal_years)
    # half-up, not Python's banker's rounding
    months = math.floor((decimal_years - years) * 12 + 0.5)
    if months == 12:
        return _plural(years + 1, "year", "years")

    parts = []
    if years > 0:
        parts.append(_plural(years, "year", "years"))
    if months > 0:
        parts.append(_plural(months, "month", "months"))
    return " and ".join(parts) or "0 months"


def discounted_schedule(
    investment: float, cashflows: Sequence[float], rate_pct: float
) -> pd.DataFrame:
    """
    Year-by-year discounting table:
      year, cashflow, discount_factor, discounted_cashflow,
      cumulative_discounted, remaining (investment still to recover, floored at 0)
    """
    cfs = np.asarray([float(x) for x in cashflows], dtype=float)
    years = np.arange(1, len(cfs) + 1)
    factor = (1.0 + float(rate_pct) / 100.0) ** (-years.astype(float))
    discounted = cfs * factor
    cumulative = np.cumsum(discounted)
    return pd.DataFrame(
        {
            "year": years,
            "cashflow": cfs,
            "discount_factor": factor,
            "discounted_cashflow": discounted,
            "cumulative_discounted": cumulative,
            "remaining": np.maximum(float(investment) - cumulative, 0.0),
        }
    )


__all__ = [
    "npv",
    "irr",
    "roi",
    "discounted_payback",
    "years_months_label",
    "discounted_schedule",
    "NOT_RECOVERABLE_LABEL",
]
