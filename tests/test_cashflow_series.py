import logging

import pytest

from appraisal.config import AppraisalConfig, DEFAULT_CONFIG
from appraisal.finance.cashflow import CashFlowSeries

EXAMPLE = list(DEFAULT_CONFIG.example_flows)


def test_default_series_is_prefilled():
    s = CashFlowSeries()
    assert s.count == 7
    assert s.values() == EXAMPLE
    assert s.snapshot() == tuple(EXAMPLE)


def test_growth_past_example_table_is_unset():
    s = CashFlowSeries(9)
    assert s.values()[:7] == EXAMPLE
    assert s[8] is None and s[9] is None
    assert s.missing_years() == [8, 9]


def test_shrink_then_grow_restores_example_values():
    s = CashFlowSeries()
    s.resize(5)
    assert s.values() == EXAMPLE[:5]
    s.resize(7)
    assert s.values() == EXAMPLE


def test_resize_keeps_values_of_surviving_years():
    s = CashFlowSeries()
    s[2] = 1.0
    s[7] = 9.0
    s.resize(5)
    s.resize(7)
    assert s[2] == 1.0
    # year 7 was dropped by the shrink, so it comes back with its example value
    assert s[7] == EXAMPLE[6]


def test_append_stops_at_max_years():
    s = CashFlowSeries()
    while s.append():
        pass
    assert s.count == DEFAULT_CONFIG.max_years
    assert not s.can_append
    assert s.append() is False
    assert s.count == 30


def test_remove_last_stops_at_min_years():
    s = CashFlowSeries()
    while s.remove_last():
        pass
    assert s.count == DEFAULT_CONFIG.min_years
    assert not s.can_remove
    assert s.remove_last() is False
    assert s.count == 3


@pytest.mark.parametrize("n", [2, 31, 0])
def test_resize_out_of_bounds_rejected(n):
    s = CashFlowSeries()
    with pytest.raises(ValueError, match="outside allowed range"):
        s.resize(n)
    assert s.count == 7


def test_without_prefill_values_are_unset():
    s = CashFlowSeries(4, prefill=False)
    assert s.values() == [None, None, None, None]
    with pytest.raises(ValueError, match=r"\[1, 2, 3, 4\]"):
        s.snapshot()


def test_snapshot_is_detached_from_later_edits():
    s = CashFlowSeries()
    snap = s.snapshot()
    s[1] = -1.0
    assert snap[0] == EXAMPLE[0]


def test_year_index_is_one_based():
    s = CashFlowSeries()
    with pytest.raises(IndexError):
        s[0]
    with pytest.raises(IndexError):
        s[8] = 1.0


def test_from_values_and_custom_bounds():
    cfg = AppraisalConfig(min_years=2, max_years=4, default_years=3)
    s = CashFlowSeries.from_values([10.0, 20.0], config=cfg, prefill=False)
    assert s.values() == [10.0, 20.0]
    assert s.append() and s.append()
    assert s.append() is False
    assert s.values() == [10.0, 20.0, None, None]


def test_append_and_remove_are_logged(caplog):
    s = CashFlowSeries()
    with caplog.at_level(logging.INFO, logger="appraisal.finance.cashflow"):
        s.append()
        s.remove_last()
    assert "year added, total 8 years" in caplog.text
    assert "year removed, total 7 years" in caplog.text
