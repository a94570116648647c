from __future__ import annotations

import math
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from .config import AppraisalConfig, DEFAULT_CONFIG


class Tier(str, Enum):
    HIGHLY_RECOMMENDED = "highly-recommended"
    RECOMMENDED = "recommended"
    STUDY_NEEDED = "study-needed"
    NOT_RECOMMENDED = "not-recommended"


_TEXT = {
    Tier.HIGHLY_RECOMMENDED: "PROJECT HIGHLY RECOMMENDED",
    Tier.RECOMMENDED: "PROJECT RECOMMENDED",
    Tier.STUDY_NEEDED: "PROJECT NEEDS FURTHER STUDY",
    Tier.NOT_RECOMMENDED: "PROJECT NOT RECOMMENDED",
}


@dataclass(frozen=True)
class Recommendation:
    text: str
    tier: Tier

    def to_dict(self) -> dict:
        return {"text": self.text, "tier": self.tier.value}


def _gt(x: Optional[float], bound: float) -> bool:
    return x is not None and math.isfinite(x) and x > bound


def _le(x: Optional[float], bound: float) -> bool:
    return x is not None and math.isfinite(x) and x <= bound


def recommend(
    npv: float,
    irr: Optional[float],
    roi: float,
    dr_years: Optional[float],
    rate_pct: float,
    config: AppraisalConfig = DEFAULT_CONFIG,
) -> Recommendation:
    """
    Overall verdict from the raw metrics (not from their interpretations).

    Criteria sets from strictest to loosest; the first one met wins. A missing
    IRR or payback fails every comparison it takes part in, so such a project
    is at best "needs further study".
    """
    rate = rate_pct / 100.0
    positive_npv = _gt(npv, 0.0)

    if (
        positive_npv
        and _gt(irr, rate + config.strong_irr_margin)
        and _gt(roi, config.strong_roi)
        and _le(dr_years, config.strong_dr_years)
    ):
        tier = Tier.HIGHLY_RECOMMENDED
    elif (
        positive_npv
        and _gt(irr, rate)
        and _gt(roi, config.standard_roi)
        and _le(dr_years, config.standard_dr_years)
    ):
        tier = Tier.RECOMMENDED
    elif positive_npv:
        tier = Tier.STUDY_NEEDED
    else:
        tier = Tier.NOT_RECOMMENDED
    return Recommendation(_TEXT[tier], tier)


__all__ = ["Tier", "Recommendation", "recommend"]
