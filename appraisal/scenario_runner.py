# appraisal/scenario_runner.py
from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, List, Optional
from datetime import datetime
import json
import logging
import os
import warnings

import pandas as pd

from .adapters import run_appraisal
from .validate import iter_scenario_files, load_params_from_file

log = logging.getLogger(__name__)

@dataclass
class RunResult:
    summary: Dict[str, Any] | List[Dict[str, Any]]
    summary_path: Path
    results_paths: List[Path] = field(default_factory=list)

    @property
    def failed(self) -> List[Dict[str, Any]]:
        rows = self.summary if isinstance(self.summary, list) else [self.summary]
        return [r for r in rows if "error" in r]


def _env_mode() -> str:
    mode = os.getenv("VALIDATION_MODE", "relaxed").lower()
    return mode if mode in ("strict", "relaxed") else "relaxed"


def _to_native(o: Any) -> Any:
    # numpy scalars coming out of pandas
    if hasattr(o, "item"):
        return o.item()
    raise TypeError(f"not JSON serializable: {type(o).__name__}")


def _write_json(path: Path, payload: Any) -> None:
    path.write_text(json.dumps(payload, indent=2, default=_to_native), encoding="utf-8")


def _write_annual(out: Path, stem: str, annual: List[Dict[str, Any]], fmt: str) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    base = f"{stem}_results_{stamp}"
    df = pd.DataFrame(annual)
    if fmt == "jsonl":
        path = out / f"{base}.jsonl"
        df.to_json(path, orient="records", lines=True)
    elif fmt == "csv":
        path = out / f"{base}.csv"
        df.to_csv(path, index=False)
    else:
        raise ValueError(f"unknown fmt: {fmt}")
    return path


def run_file(
    cfg_path: Path,
    out: Path,
    *,
    mode: str,
    fmt: str,
    save_annual: bool,
) -> tuple[Dict[str, Any], Optional[Path]]:
    params = load_params_from_file(cfg_path)
    summary = run_appraisal(params, mode=mode, with_annual=True)
    annual = summary.pop("annual")
    summary["source"] = str(cfg_path)
    results_path = _write_annual(out, cfg_path.stem, annual, fmt) if save_annual else None
    return summary, results_path


def run_dir(
    config: str | Path,
    out_dir: str | Path,
    *,
    mode: Optional[str] = None,
    fmt: str = "jsonl",
    save_annual: bool = False,
) -> RunResult:
    """
    Run one scenario file, or every scenario file in a directory, and write
    `summary.json` into out_dir (a mapping for a file, a list for a directory).

    A bad single file raises (ValueError for invalid input, CalculationError
    for engine faults). In directory mode a failing file is reported with a
    warning and an `error` entry; the remaining files still run.
    """
    mode = mode or _env_mode()
    cfg_path = Path(config)
    out = Path(out_dir)
    out.mkdir(parents=True, exist_ok=True)
    summary_path = out / "summary.json"

    if cfg_path.is_dir():
        files = iter_scenario_files(cfg_path)
        if not files:
            raise ValueError(f"{cfg_path}: no scenario files found")
        rows: List[Dict[str, Any]] = []
        written: List[Path] = []
        for f in files:
            try:
                summary, results_path = run_file(f, out, mode=mode, fmt=fmt, save_annual=save_annual)
            except Exception as e:
                warnings.warn(f"Scenario {f.name} failed: {e}")
                rows.append({"source": str(f), "error": str(e)})
                continue
            rows.append(summary)
            if results_path is not None:
                written.append(results_path)
        failed = sum(1 for r in rows if "error" in r)
        if failed:
            warnings.warn(f"{failed}/{len(files)} scenarios failed")
        _write_json(summary_path, rows)
        log.info("ran %d scenarios from %s (%d failed)", len(files), cfg_path, failed)
        return RunResult(summary=rows, summary_path=summary_path, results_paths=written)

    summary, results_path = run_file(cfg_path, out, mode=mode, fmt=fmt, save_annual=save_annual)
    _write_json(summary_path, summary)
    return RunResult(
        summary=summary,
        summary_path=summary_path,
        results_paths=[results_path] if results_path is not None else [],
    )


def run_matrix(dir_path: str | Path, out_dir: str | Path, pattern: str = "*.yaml", *, fmt: str = "jsonl"):
    """Run each matching file into its own sub-directory of out_dir."""
    d = Path(dir_path)
    o = Path(out_dir)
    o.mkdir(parents=True, exist_ok=True)
    results = {}
    for cfg in sorted(d.glob(pattern)):
        results[cfg.name] = run_dir(cfg, o / cfg.stem, fmt=fmt, save_annual=False)
    return results


__all__ = ["RunResult", "run_dir", "run_file", "run_matrix"]
