from __future__ import annotations

from dataclasses import dataclass, fields, replace
from typing import Any, Dict, Tuple
import os
import io
import yaml


@dataclass(frozen=True)
class AppraisalConfig:
    """Constants honoured by the calculation engine."""

    min_years: int = 3
    max_years: int = 30
    default_years: int = 7
    default_investment: float = 1_000_000.0
    default_rate_pct: float = 10.0
    example_flows: Tuple[float, ...] = (
        250000.0, 300000.0, 350000.0, 320000.0, 280000.0, 200000.0, 150000.0,
    )

    # IRR bracket (-99% .. +500%) and bisection budget
    irr_low: float = -0.99
    irr_high: float = 5.0
    irr_max_iterations: int = 100
    irr_tolerance: float = 1e-6

    # interpretation thresholds
    irr_excellent_margin: float = 0.05
    irr_breakeven_band: float = 0.001
    roi_excellent: float = 1.0
    roi_high: float = 0.5
    roi_low: float = 0.2
    dr_excellent_years: float = 2.0
    dr_positive_years: float = 4.0
    dr_weak_years: float = 6.0

    # recommendation tiers
    strong_irr_margin: float = 0.02
    strong_roi: float = 0.3
    strong_dr_years: float = 4.0
    standard_roi: float = 0.2
    standard_dr_years: float = 5.0


DEFAULT_CONFIG = AppraisalConfig()


def config_from_overrides(overrides: Dict[str, Any] | None) -> AppraisalConfig:
    """
    Build a config from a mapping of field overrides (e.g. the `config:` group
    of a scenario file). Unknown keys raise ValueError.
    """
    if not overrides:
        return DEFAULT_CONFIG
    known = {f.name: f for f in fields(AppraisalConfig)}
    unknown = [k for k in overrides if k not in known]
    if unknown:
        raise ValueError(f"unknown config keys: {sorted(unknown)}")

    coerced: Dict[str, Any] = {}
    for k, v in overrides.items():
        default = getattr(DEFAULT_CONFIG, k)
        if isinstance(default, tuple):
            coerced[k] = tuple(float(x) for x in v)
        elif isinstance(default, int):
            coerced[k] = int(v)
        else:
            coerced[k] = float(v)
    cfg = replace(DEFAULT_CONFIG, **coerced)
    if not (1 <= cfg.min_years <= cfg.default_years <= cfg.max_years):
        raise ValueError("config requires 1 <= min_years <= default_years <= max_years")
    if not cfg.irr_low < cfg.irr_high:
        raise ValueError("config requires irr_low < irr_high")
    return cfg


def flatten_grouped(cfg: Dict[str, Any]) -> Dict[str, Any]:
    """
    Flatten shallow groups like {'project': {...}} into one level.
    Prefers top-level keys if collisions occur. The `config` group is kept as-is.
    """
    flat: Dict[str, Any] = {}
    for k, v in cfg.items():
        if not isinstance(v, dict) or k == "config":
            flat[k] = v
    for k, v in cfg.items():
        if isinstance(v, dict) and k != "config":
            for sk, sv in v.items():
                flat.setdefault(sk, sv)
    return flat


def _split_config(d: Dict[str, Any]) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    overrides = d.pop("config", None) or {}
    if not isinstance(overrides, dict):
        raise ValueError("'config' must be a mapping")
    return d, overrides


def parse_model_config(text: str) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """Parse YAML (JSON is a subset) text. Returns (flat_scenario, config_overrides)."""
    try:
        cfg = yaml.safe_load(text) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"invalid scenario YAML: {e}") from e
    if not isinstance(cfg, dict):
        raise ValueError("scenario must be a mapping at the top level")
    return _split_config(flatten_grouped(cfg))


def load_model_config(
    source: str | os.PathLike | io.StringIO,
) -> Tuple[Dict[str, Any], Dict[str, Any]]:
    """
    Load a scenario from a path or text stream.
    Returns (flat_scenario, config_overrides).
    """
    text: str
    if hasattr(source, "read"):
        text = str(source.read())
    else:
        p = os.fspath(source)
        with open(p, "r", encoding="utf-8") as f:
            text = f.read()
    return parse_model_config(text)
