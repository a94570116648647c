# appraisal/interpret.py
"""
Qualitative reading of each metric.

Every classifier is pure and checks bands from most to least favourable;
the first match wins, so a boundary value belongs to the band listed first.
Missing metrics (None or a non-finite float) get their own verdict and are
never read as zero.
"""
from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import AppraisalConfig, DEFAULT_CONFIG


class Band(str, Enum):
    EXCELLENT = "excellent"
    POSITIVE = "positive"
    WARNING = "warning"
    NEGATIVE = "negative"


@dataclass(frozen=True)
class Interpretation:
    text: str
    band: Band
    code: str

    def to_dict(self) -> dict:
        return {"text": self.text, "band": self.band.value, "code": self.code}


def _missing(x: Optional[float]) -> bool:
    return x is None or not math.isfinite(x)


def interpret_npv(npv_value: float) -> Interpretation:
    if npv_value > 0:
        return Interpretation(
            "POSITIVE NPV - profitable project; the investment creates economic value.",
            Band.POSITIVE, "npv_positive",
        )
    if npv_value == 0:
        return Interpretation(
            "ZERO NPV - break-even project; no value created or destroyed.",
            Band.WARNING, "npv_zero",
        )
    # NaN also lands here
    return Interpretation(
        "NEGATIVE NPV - unprofitable project; the investment destroys value.",
        Band.NEGATIVE, "npv_negative",
    )


def interpret_irr(
    irr_value: Optional[float], rate_pct: float, config: AppraisalConfig = DEFAULT_CONFIG
) -> Interpretation:
    """Compare the IRR (decimal) with the required rate (percent)."""
    if _missing(irr_value):
        return Interpretation(
            "IRR NOT COMPUTABLE - cash flows do not produce a rate of return.",
            Band.NEGATIVE, "irr_not_computable",
        )
    rate = rate_pct / 100.0
    if irr_value > rate + config.irr_excellent_margin:
        return Interpretation(
            "EXCELLENT IRR - return well above the required rate.",
            Band.EXCELLENT, "irr_excellent",
        )
    if irr_value > rate:
        return Interpretation(
            "SATISFACTORY IRR - return above the required rate.",
            Band.POSITIVE, "irr_satisfactory",
        )
    if abs(irr_value - rate) < config.irr_breakeven_band:
        return Interpretation(
            "BREAK-EVEN IRR - return equal to the required rate.",
            Band.WARNING, "irr_breakeven",
        )
    return Interpretation(
        "INSUFFICIENT IRR - return below the required rate.",
        Band.NEGATIVE, "irr_insufficient",
    )


def interpret_roi(roi_value: float, config: AppraisalConfig = DEFAULT_CONFIG) -> Interpretation:
    """Thresholds apply to the fractional ratio (0.5 = 50%)."""
    if roi_value > config.roi_excellent:
        return Interpretation(
            "EXCEPTIONAL ROI - gains above 100% of the investment.",
            Band.EXCELLENT, "roi_exceptional",
        )
    if roi_value > config.roi_high:
        return Interpretation(
            "VERY GOOD ROI - substantial gains (>50%).",
            Band.POSITIVE, "roi_very_good",
        )
    if roi_value > config.roi_low:
        return Interpretation(
            "SATISFACTORY ROI - acceptable gains (>20%).",
            Band.POSITIVE, "roi_satisfactory",
        )
    if roi_value > 0:
        return Interpretation(
            "LOW ROI - positive but modest gains.",
            Band.WARNING, "roi_low",
        )
    return Interpretation(
        "NEGATIVE ROI - the investment loses money.",
        Band.NEGATIVE, "roi_negative",
    )


def interpret_dr(dr_years: Optional[float], config: AppraisalConfig = DEFAULT_CONFIG) -> Interpretation:
    if _missing(dr_years):
        return Interpretation(
            "RECOVERY IMPOSSIBLE - cash flows never repay the investment.",
            Band.NEGATIVE, "dr_impossible",
        )
    if dr_years <= config.dr_excellent_years:
        return Interpretation(
            "VERY FAST RECOVERY - very low liquidity risk.",
            Band.EXCELLENT, "dr_very_fast",
        )
    if dr_years <= config.dr_positive_years:
        return Interpretation(
            "ACCEPTABLE RECOVERY - moderate liquidity risk.",
            Band.POSITIVE, "dr_acceptable",
        )
    if dr_years <= config.dr_weak_years:
        return Interpretation(
            "SLOW RECOVERY - high liquidity risk.",
            Band.WARNING, "dr_slow",
        )
    return Interpretation(
        "VERY SLOW RECOVERY - very high liquidity risk.",
        Band.NEGATIVE, "dr_very_slow",
    )


__all__ = [
    "Band",
    "Interpretation",
    "interpret_npv",
    "interpret_irr",
    "interpret_roi",
    "interpret_dr",
]
