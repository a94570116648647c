# appraisal/adapters.py
from __future__ import annotations

from typing import Any, Dict, List, Optional, Tuple

from appraisal.config import AppraisalConfig, config_from_overrides, flatten_grouped
from appraisal.core import calculate
from appraisal.finance.cashflow import CashFlowSeries
from appraisal.finance.metrics import discounted_schedule
from appraisal.validate import parse_number, validate_params_dict


# ------------------------------
# Small helpers (no policy here)
# ------------------------------
def _scenario(params: Dict[str, Any]) -> Dict[str, Any]:
    """One-level view of the scenario (`project: {...}` lifted to the top), as files are loaded."""
    return flatten_grouped(params)


def _investment(p: Dict[str, Any], cfg: AppraisalConfig) -> float:
    val = parse_number(p.get("investment"))
    return cfg.default_investment if val is None else val


def _rate_pct(p: Dict[str, Any], cfg: AppraisalConfig) -> float:
    val = parse_number(p.get("discount_rate_pct"))
    return cfg.default_rate_pct if val is None else val


def _cashflows(p: Dict[str, Any], cfg: AppraisalConfig) -> List[float]:
    """
    Explicit `cashflows` if given; otherwise the pre-filled example series
    resized to `years` (default: cfg.default_years).
    """
    explicit = p.get("cashflows")
    if explicit is not None:
        return [float(parse_number(v)) for v in explicit]  # validated upstream
    years = parse_number(p.get("years"))
    series = CashFlowSeries(None if years is None else int(years), config=cfg)
    return list(series.snapshot())


def resolve_inputs(
    params: Dict[str, Any], config: Optional[AppraisalConfig] = None
) -> Tuple[float, float, List[float]]:
    """(investment, rate_pct, cashflows) with relaxed-mode defaults applied."""
    params = _scenario(params)
    cfg = config or config_from_overrides(params.get("config"))
    return _investment(params, cfg), _rate_pct(params, cfg), _cashflows(params, cfg)


# ------------------------------
# Public adapter(s)
# ------------------------------
def run_appraisal(
    params: Dict[str, Any],
    *,
    mode: str = "relaxed",
    with_annual: bool = True,
) -> Dict[str, Any]:
    """
    High-level adapter:
      1) Build the config from the optional `config` group.
      2) Validate the flattened scenario mapping (ValueError on bad input);
         grouped keys are checked exactly as they are read.
      3) Resolve defaults, run the engine, and flatten the result.

    Returns the result bundle (see AppraisalResult.to_dict) plus
      'name' and, when with_annual, 'annual': [{year, cashflow, ...}, ...].
    """
    params = _scenario(params)
    cfg = config_from_overrides(params.get("config"))
    validate_params_dict(params, mode=mode, config=cfg)

    investment, rate_pct, flows = resolve_inputs(params, cfg)
    result = calculate(investment, rate_pct, flows, cfg)

    summary: Dict[str, Any] = {"name": params.get("name") or ""}
    summary.update(result.to_dict())
    if with_annual:
        summary["annual"] = discounted_schedule(investment, flows, rate_pct).to_dict(orient="records")
    return summary


__all__ = ["run_appraisal", "resolve_inputs"]
