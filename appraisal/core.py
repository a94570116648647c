# appraisal/core.py
"""
One appraisal run: metrics -> interpretations -> recommendation.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Optional, Tuple

from .config import AppraisalConfig, DEFAULT_CONFIG
from .finance.metrics import (
    discounted_payback,
    irr as compute_irr,
    npv as compute_npv,
    roi as compute_roi,
    years_months_label,
)
from .interpret import (
    Interpretation,
    interpret_dr,
    interpret_irr,
    interpret_npv,
    interpret_roi,
)
from .recommend import Recommendation, recommend

log = logging.getLogger(__name__)


class CalculationError(RuntimeError):
    """Raised when a run cannot produce a trustworthy result set."""


@dataclass(frozen=True)
class AppraisalResult:
    investment: float
    rate_pct: float
    cashflows: Tuple[float, ...]
    npv: float
    irr: Optional[float]
    roi: float
    dr_years: Optional[float]
    dr_label: str
    interpretations: Dict[str, Interpretation] = field(default_factory=dict)
    recommendation: Optional[Recommendation] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "investment": self.investment,
            "discount_rate_pct": self.rate_pct,
            "years": len(self.cashflows),
            "cashflows": list(self.cashflows),
            "npv": self.npv,
            "irr": self.irr,
            "irr_pct": None if self.irr is None else self.irr * 100.0,
            "roi": self.roi,
            "roi_pct": self.roi * 100.0,
            "dr_years": self.dr_years,
            "dr_label": self.dr_label,
            "interpretations": {k: v.to_dict() for k, v in self.interpretations.items()},
            "recommendation": self.recommendation.to_dict() if self.recommendation else None,
        }


def calculate(
    investment: float,
    rate_pct: float,
    cashflows: Iterable[float],
    config: AppraisalConfig = DEFAULT_CONFIG,
) -> AppraisalResult:
    """
    Compute NPV, IRR, ROI and discounted payback, classify each and build the
    overall recommendation. Inputs are assumed validated upstream
    (see appraisal.validate); any fault here raises CalculationError and no
    partial result is returned.
    """
    try:
        flows = tuple(float(x) for x in cashflows)
        inv = float(investment)
        rate = float(rate_pct)

        npv_value = compute_npv(rate, inv, flows)
        irr_value = compute_irr(
            inv,
            flows,
            low=config.irr_low,
            high=config.irr_high,
            max_iterations=config.irr_max_iterations,
            tolerance=config.irr_tolerance,
        )
        roi_value = compute_roi(inv, flows)
        dr_value = discounted_payback(inv, flows, rate)
    except Exception as e:
        log.error("calculation failed", exc_info=True)
        raise CalculationError(f"calculation failed: {e}") from e

    if not (math.isfinite(npv_value) and math.isfinite(roi_value)):
        log.error("calculation produced non-finite NPV/ROI (npv=%s, roi=%s)", npv_value, roi_value)
        raise CalculationError("calculation failed: non-finite result, check the input values")

    interpretations = {
        "npv": interpret_npv(npv_value),
        "irr": interpret_irr(irr_value, rate, config),
        "roi": interpret_roi(roi_value, config),
        "dr": interpret_dr(dr_value, config),
    }
    return AppraisalResult(
        investment=inv,
        rate_pct=rate,
        cashflows=flows,
        npv=npv_value,
        irr=irr_value,
        roi=roi_value,
        dr_years=dr_value,
        dr_label=years_months_label(dr_value),
        interpretations=interpretations,
        recommendation=recommend(npv_value, irr_value, roi_value, dr_value, rate, config),
    )


__all__ = ["AppraisalResult", "CalculationError", "calculate"]
