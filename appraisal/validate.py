# appraisal/validate.py
"""
Input checks run before anything reaches the engine: a positive finite
investment, a finite non-negative rate and a bounded list of finite yearly
cash flows.
"""
from __future__ import annotations
import math, os, sys
from pathlib import Path
from typing import Any, Dict, List, Optional

from .config import AppraisalConfig, DEFAULT_CONFIG, config_from_overrides, load_model_config
from .schema import ALLOWED_KEYS, REQUIRED_STRICT, SCHEMA


def _mode_from_env_or_flag(flag: str | None) -> str:
    if flag in ("strict", "relaxed"):
        return flag
    env = (os.environ.get("VALIDATION_MODE") or "").lower()
    return env if env in ("strict", "relaxed") else "relaxed"


def parse_number(value: Any) -> Optional[float]:
    """float(value) for numbers and numeric strings; None when unparsable or not finite."""
    if value is None or isinstance(value, bool):
        return None
    try:
        x = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    return x if math.isfinite(x) else None


def _check_scalar(key: str, value: Any) -> Optional[str]:
    bounds = SCHEMA[key]
    x = parse_number(value)
    if x is None:
        return f"{key} must be a finite number, got {value!r}"
    lo, hi = float(bounds["min"]), float(bounds["max"])
    too_low = x <= lo if bounds.get("min_exclusive") else x < lo
    if too_low or x > hi:
        left = "(" if bounds.get("min_exclusive") else "["
        return f"{key} outside allowed range {left}{lo}, {hi}]: {x}"
    return None


def cashflow_errors(cashflows: Any, config: AppraisalConfig = DEFAULT_CONFIG) -> List[str]:
    if not isinstance(cashflows, (list, tuple)):
        return [f"cashflows must be a list, got {type(cashflows).__name__}"]
    errors: List[str] = []
    n = len(cashflows)
    if not (config.min_years <= n <= config.max_years):
        errors.append(
            f"cashflows length outside allowed range [{config.min_years}, {config.max_years}]: {n}"
        )
    bad = [year for year, v in enumerate(cashflows, start=1) if parse_number(v) is None]
    if bad:
        errors.append(f"cashflows must be finite numbers; invalid year(s): {bad}")
    return errors


def validate_params_dict(
    data: Dict[str, Any],
    *,
    mode: str = "relaxed",
    config: AppraisalConfig = DEFAULT_CONFIG,
) -> None:
    """
    Check a flat scenario mapping; raise ValueError listing every problem.
      - relaxed: keys may be omitted (defaults fill them later)
      - strict : investment/discount_rate_pct/cashflows required, unknown keys rejected
    """
    errors: List[str] = []
    if mode == "strict":
        missing = [k for k in REQUIRED_STRICT if k not in data]
        if missing:
            errors.append(f"missing required keys: {missing}")
        unknown = sorted(k for k in data.keys() if k not in ALLOWED_KEYS)
        if unknown:
            errors.append(f"unknown top-level keys (strict mode): {unknown}")

    for key in SCHEMA:
        if key in data:
            msg = _check_scalar(key, data[key])
            if msg:
                errors.append(msg)

    if "years" in data:
        years = parse_number(data["years"])
        if years is None or years != int(years) or not (config.min_years <= years <= config.max_years):
            errors.append(
                f"years outside allowed range [{config.min_years}, {config.max_years}]: {data['years']!r}"
            )

    if "cashflows" in data:
        errors.extend(cashflow_errors(data["cashflows"], config))

    if errors:
        raise ValueError("; ".join(errors))


def load_params_from_file(path: Path) -> Dict[str, Any]:
    """Flat scenario mapping; a `config` group, if any, is kept under 'config'."""
    p = Path(path)
    if p.is_dir():
        # scenario_runner handles directories; keep this function file-only
        raise ValueError(f"{p} is a directory (expected a file)")
    flat, overrides = load_model_config(p)
    if overrides:
        flat["config"] = overrides
    return flat


SCENARIO_PATTERNS = ("*.yaml", "*.yml", "*.json")


def iter_scenario_files(p: Path) -> List[Path]:
    """The file itself, or the scenario files directly inside a directory (subdirectories are not searched)."""
    if p.is_file():
        return [p]
    if p.is_dir():
        return sorted(f for pattern in SCENARIO_PATTERNS for f in p.glob(pattern) if f.is_file())
    return []


def _main(argv: List[str] | None = None) -> int:
    import argparse
    parser = argparse.ArgumentParser(prog="appraisal.validate", add_help=True)
    parser.add_argument("paths", nargs="+", help="YAML/JSON files or directories to validate")
    parser.add_argument("--mode", choices=["strict", "relaxed"], default=None, help="validation mode")
    args = parser.parse_args(argv)

    mode = _mode_from_env_or_flag(args.mode)
    had_error = False

    for raw in args.paths:
        target = Path(raw)
        any_seen = False
        for f in iter_scenario_files(target):
            any_seen = True
            try:
                data = load_params_from_file(f)
                cfg = config_from_overrides(data.get("config"))
                validate_params_dict(data, mode=mode, config=cfg)
                print(f"OK: {f}")
            except Exception as e:
                print(f"{f}: {e}", file=sys.stderr)
                had_error = True
        if not any_seen:
            print(f"{target}: no YAML/JSON files found", file=sys.stderr)
            had_error = True

    return 1 if had_error else 0


if __name__ == "__main__":
    raise SystemExit(_main())
