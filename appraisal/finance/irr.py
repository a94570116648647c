# appraisal/finance/irr.py
"""
NPV and IRR for a single up-front investment followed by yearly cash flows.

Rates passed to `npv` are percentages (10 means 10%); `irr` returns a
decimal rate (0.18 = 18%). This is the only module that defines them.
"""
from __future__ import annotations

import logging
import math
from typing import Callable, Optional, Sequence

log = logging.getLogger(__name__)

IRR_LOW = -0.99
IRR_HIGH = 5.0
IRR_MAX_ITERATIONS = 100
IRR_TOLERANCE = 1e-6


def _npv_at(rate: float, investment: float, cashflows: Sequence[float]) -> float:
    """NPV at a decimal rate; year i is discounted i times (i starts at 1)."""
    total = -float(investment)
    for t, cf in enumerate(cashflows, start=1):
        total += float(cf) / ((1.0 + rate) ** t)
    return total


# ---------- NPV ----------
def npv(rate_pct: float, investment: float, cashflows: Sequence[float]) -> float:
    """
    Net present value:
        NPV = -investment + sum_{i=1..N} CF[i] / (1+r)^i,   r = rate_pct / 100
    NaN in any cash flow propagates to the result.
    """
    return _npv_at(float(rate_pct) / 100.0, investment, cashflows)


# ---------- IRR ----------
def _bisect(
    f: Callable[[float], float],
    lo: float,
    hi: float,
    max_iterations: int,
    tolerance: float,
) -> Optional[float]:
    f_lo = f(lo)
    f_hi = f(hi)
    if not (math.isfinite(f_lo) and math.isfinite(f_hi)):
        return None
    # no sign change: not bracketed (may still have an even number of roots)
    if f_lo * f_hi > 0:
        return None

    for _ in range(max_iterations):
        if hi - lo <= tolerance:
            break
        mid = (lo + hi) / 2.0
        f_mid = f(mid)
        if abs(f_mid) < tolerance:
            return mid
        if f_lo * f_mid < 0:
            hi = mid
        else:
            lo, f_lo = mid, f_mid
    return (lo + hi) / 2.0


def irr(
    investment: float,
    cashflows: Sequence[float],
    *,
    low: float = IRR_LOW,
    high: float = IRR_HIGH,
    max_iterations: int = IRR_MAX_ITERATIONS,
    tolerance: float = IRR_TOLERANCE,
) -> Optional[float]:
    """
    Rate r with NPV(r) = 0, by bisection over [low, high].
    Returns None when NPV has the same sign at both bracket ends
    (the IRR is then "not computable"; no root is guessed).
    """
    cfs = [float(x) for x in cashflows]
    result = _bisect(
        lambda r: _npv_at(r, investment, cfs), low, high, max_iterations, tolerance
    )
    if result is None:
        log.debug("IRR not bracketed on [%s, %s] for %d cash flows", low, high, len(cfs))
    return result


__all__ = ["npv", "irr", "IRR_LOW", "IRR_HIGH", "IRR_MAX_ITERATIONS", "IRR_TOLERANCE"]
