from __future__ import annotations
from typing import Dict, Any

# Scenario input schema: units, type, min/max ranges, and description.
# `min_exclusive` marks a strict lower bound.
SCHEMA: Dict[str, Dict[str, Any]] = {
    "investment":        {"unit": "currency", "type": "float", "min": 0.0, "min_exclusive": True, "max": float("inf"), "desc": "Capital outlay at year 0"},
    "discount_rate_pct": {"unit": "percent",  "type": "float", "min": 0.0, "max": float("inf"), "desc": "Discount rate (10 means 10%)"},
}

# Top-level keys a scenario file may carry.
ALLOWED_KEYS = frozenset({"name", "investment", "discount_rate_pct", "cashflows", "years", "config"})

# Keys strict mode insists on.
REQUIRED_STRICT = ("investment", "discount_rate_pct", "cashflows")
