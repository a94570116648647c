# appraisal/cli.py
from __future__ import annotations

import argparse
import json
import logging
import math
import os
import sys
from pathlib import Path
from typing import Any, Dict, Optional

from .adapters import run_appraisal
from .config import DEFAULT_CONFIG
from .core import CalculationError
from .scenario_runner import run_dir
from .validate import _mode_from_env_or_flag


def format_currency(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return "—"
    return f"{round(value):,}"


def format_percent(value: Optional[float]) -> str:
    if value is None or not math.isfinite(value):
        return "—"
    return f"{value * 100:.2f} %"


def parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="appraisal",
        description="Investment appraisal: NPV, IRR, ROI and discounted payback with a recommendation",
    )
    p.add_argument(
        "--config",
        default=None,
        help="Scenario YAML/JSON file, or a directory of scenarios. If omitted, inputs come from flags.",
    )
    p.add_argument("--investment", type=float, default=None,
                   help=f"Initial investment (default: {DEFAULT_CONFIG.default_investment:,.0f}).")
    p.add_argument("--rate", type=float, default=None,
                   help=f"Discount rate in percent (default: {DEFAULT_CONFIG.default_rate_pct:g}).")
    p.add_argument("--cashflows", type=float, nargs="+", default=None, metavar="CF",
                   help="Yearly cash flows, year 1 first.")
    p.add_argument("--years", type=int, default=None,
                   help="Number of years of example cash flows when --cashflows is omitted.")
    p.add_argument(
        "--outputs-dir",
        default="outputs",
        help="Directory for summary/result files in --config mode (default: outputs).",
    )
    p.add_argument(
        "--format",
        dest="fmt",
        default="csv",
        choices=["csv", "jsonl"],
        help="Format of the annual schedule files (default: csv).",
    )
    p.add_argument(
        "--save-annual",
        action="store_true",
        help="Write the per-year discounting schedule alongside the summary.",
    )
    p.add_argument("--json", action="store_true", help="Print the result bundle as JSON.")
    p.add_argument("-v", "--verbose", action="store_true", help="Log progress to stderr.")
    v = p.add_mutually_exclusive_group()
    v.add_argument(
        "--strict",
        action="store_true",
        help="Enable strict validation (all inputs required, unknown keys raise).",
    )
    v.add_argument(
        "--relaxed",
        action="store_true",
        help="Enable relaxed validation (missing inputs take defaults).",
    )
    return p.parse_args(argv)


def _apply_validation_mode(ns: argparse.Namespace) -> None:
    # Default: leave env as-is; flags override explicitly.
    if ns.strict:
        os.environ["VALIDATION_MODE"] = "strict"
    elif ns.relaxed:
        os.environ["VALIDATION_MODE"] = "relaxed"


def _params_from_flags(ns: argparse.Namespace) -> Dict[str, Any]:
    params: Dict[str, Any] = {}
    if ns.investment is not None:
        params["investment"] = ns.investment
    if ns.rate is not None:
        params["discount_rate_pct"] = ns.rate
    if ns.cashflows is not None:
        params["cashflows"] = ns.cashflows
    if ns.years is not None:
        params["years"] = ns.years
    return params


def render_report(summary: Dict[str, Any]) -> str:
    it = summary["interpretations"]
    lines = [
        f"Investment : {format_currency(summary['investment'])}",
        f"Rate       : {summary['discount_rate_pct']:g} %  over {summary['years']} years",
        "",
        f"NPV : {format_currency(summary['npv']):>22}  {it['npv']['text']}",
        f"IRR : {format_percent(summary['irr']):>22}  {it['irr']['text']}",
        f"ROI : {format_percent(summary['roi']):>22}  {it['roi']['text']}",
        f"DR  : {summary['dr_label']:>22}  {it['dr']['text']}",
        "",
        f"=> {summary['recommendation']['text']}",
    ]
    return "\n".join(lines)


def main(argv: list[str] | None = None) -> int:
    ns = parse_args(argv)
    _apply_validation_mode(ns)
    if ns.verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")
    mode = _mode_from_env_or_flag(None)

    try:
        if ns.config:
            outputs_dir = Path(ns.outputs_dir).resolve()
            res = run_dir(Path(ns.config).resolve(), outputs_dir, mode=mode, fmt=ns.fmt,
                          save_annual=ns.save_annual)
            if ns.json:
                print(json.dumps(res.summary, indent=2, ensure_ascii=False))
            else:
                print(f"Wrote {res.summary_path}")
            return 1 if res.failed else 0

        summary = run_appraisal(_params_from_flags(ns), mode=mode, with_annual=False)
    except ValueError as e:
        print(f"ERROR: invalid input: {e}", file=sys.stderr)
        return 2
    except OSError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 2
    except CalculationError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    if ns.json:
        print(json.dumps(summary, indent=2, ensure_ascii=False))
    else:
        print(render_report(summary))
    return 0


__all__ = ["main", "parse_args", "format_currency", "format_percent"]
