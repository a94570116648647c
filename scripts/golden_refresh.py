"""Regenerate tests/golden/summary.json from the reference scenario (strict mode, in-process)."""
from __future__ import annotations
import argparse, json, tempfile
from pathlib import Path

from appraisal.scenario_runner import run_dir

ROOT = Path(__file__).resolve().parents[1]

# headline metrics compared by tests/golden/test_reference_case_stability.py
HEADLINE = ("npv", "irr", "roi", "dr_years")


def _baseline(summary: dict) -> dict:
    missing = [k for k in HEADLINE if summary.get(k) is None]
    if missing:
        raise ValueError(f"{summary.get('source')}: no value for {missing}")
    return {k: float(summary[k]) for k in HEADLINE}


def main(argv: list[str] | None = None) -> int:
    ap = argparse.ArgumentParser(description=__doc__)
    ap.add_argument("--scenario", default=str(ROOT / "appraisal/inputs/scenarios/reference_case.yaml"))
    ap.add_argument("--baseline", default=str(ROOT / "tests/golden/summary.json"))
    args = ap.parse_args(argv)

    with tempfile.TemporaryDirectory() as tmp:
        res = run_dir(args.scenario, tmp, mode="strict")
    baseline = _baseline(res.summary)

    out = Path(args.baseline)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(json.dumps(baseline, indent=2, sort_keys=True), encoding="utf-8")
    print(f"[ok] {res.summary['name'] or args.scenario}: tier={res.summary['recommendation']['tier']} -> {out}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
