import subprocess
import sys
from pathlib import Path
import pytest

from appraisal.scenario_runner import run_dir

ROOT = Path(__file__).resolve().parents[2]

MIN_CFG = """\
name: no cash flows
project:
  investment: 1000000
  discount_rate_pct: 10
"""

def _write(p: Path, name: str, text: str) -> Path:
    f = p / name
    f.write_text(text, encoding="utf-8")
    return f

def test_strict_requires_cashflows_in_runner(tmp_path: Path, monkeypatch):
    cfg = _write(tmp_path, "no_flows.yaml", MIN_CFG)
    out = tmp_path / "out"
    monkeypatch.setenv("VALIDATION_MODE", "strict")
    with pytest.raises(ValueError, match="cashflows"):
        run_dir(cfg, out, fmt="csv", save_annual=False)

def test_relaxed_prefills_cashflows_in_runner(tmp_path: Path, monkeypatch):
    cfg = _write(tmp_path, "no_flows.yaml", MIN_CFG)
    monkeypatch.setenv("VALIDATION_MODE", "relaxed")
    res = run_dir(cfg, tmp_path / "out", fmt="csv", save_annual=False)
    assert res.summary["years"] == 7

def test_cli_flag_requires_cashflows(tmp_path: Path):
    cfg = _write(tmp_path, "no_flows.yaml", MIN_CFG)
    out = tmp_path / "out"
    out.mkdir(parents=True, exist_ok=True)
    with pytest.raises(subprocess.CalledProcessError) as ei:
        subprocess.check_call(
            [sys.executable, "-m", "appraisal", "--config", str(cfg), "--outputs-dir", str(out), "--strict"],
            cwd=ROOT,
        )
    assert ei.value.returncode == 2
