import math

import numpy_financial as npf
import pytest

from appraisal.finance import metrics as m

FLOWS = [250000.0, 300000.0, 350000.0, 320000.0, 280000.0, 200000.0, 150000.0]
INVESTMENT = 1_000_000.0


def test_npv_reference_case():
    assert m.npv(10, INVESTMENT, FLOWS) == pytest.approx(320457.5718, rel=1e-9)


def test_npv_matches_numpy_financial():
    # numpy-financial discounts the first value at t=0
    expected = npf.npv(0.10, [-1000.0, 500.0, 500.0, 500.0])
    assert m.npv(10, 1000.0, [500.0, 500.0, 500.0]) == pytest.approx(expected, rel=1e-12)
    assert m.npv(10, 1000.0, [500.0, 500.0, 500.0]) == pytest.approx(243.426, rel=1e-4)


@pytest.mark.parametrize("flows", [[400.0, 400.0, 400.0], [-50.0, 0.0, 2000.0], [1.5, 2.5, 3.5, 4.5]])
def test_npv_at_zero_rate_is_undiscounted(flows):
    assert m.npv(0, 1000.0, flows) == pytest.approx(sum(flows) - 1000.0)


def test_npv_propagates_nan():
    assert math.isnan(m.npv(10, 1000.0, [float("nan"), 1.0, 1.0]))


def test_irr_reference_case():
    r = m.irr(INVESTMENT, FLOWS)
    assert r is not None
    assert r == pytest.approx(0.1980394548, abs=1e-6)


def test_irr_matches_numpy_financial():
    r = m.irr(1000.0, [500.0, 500.0, 500.0])
    assert r == pytest.approx(float(npf.irr([-1000.0, 500.0, 500.0, 500.0])), abs=1e-5)
    assert 0.23 < r < 0.24


@pytest.mark.parametrize(
    "investment,flows",
    [
        (INVESTMENT, FLOWS),
        (1000.0, [500.0, 500.0, 500.0]),
        (1000.0, [100.0, 100.0, 100.0]),        # negative IRR
        (5000.0, [-200.0, 1500.0, 2500.0, 3000.0]),
    ],
)
def test_npv_is_zero_at_irr(investment, flows):
    r = m.irr(investment, flows)
    assert r is not None and math.isfinite(r)
    # bisection stops on a 1e-6 rate bracket, so judge NPV relative to the outlay
    assert abs(m.npv(r * 100.0, investment, flows)) / investment < 1e-4


@pytest.mark.parametrize("flows", [[0.0, 0.0, 0.0], [-10.0, -20.0, -5.0], [-1.0, 0.0, -3.0]])
def test_irr_not_computable_without_sign_change(flows):
    assert m.irr(1000.0, flows) is None


def test_irr_not_computable_for_nan_flows():
    assert m.irr(1000.0, [float("nan"), 1.0, 1.0]) is None


def test_irr_respects_custom_bracket():
    # true IRR ~23.4% lies outside [0, 0.2]
    assert m.irr(1000.0, [500.0, 500.0, 500.0], low=0.0, high=0.2) is None


def test_roi_basic_and_scale_invariant():
    assert m.roi(INVESTMENT, FLOWS) == pytest.approx(0.85)
    base = m.roi(1000.0, [400.0, 300.0, 500.0])
    for k in (0.001, 3.0, 1e6):
        assert m.roi(1000.0 * k, [400.0 * k, 300.0 * k, 500.0 * k]) == pytest.approx(base)


def test_roi_zero_investment_rejected():
    with pytest.raises(ValueError):
        m.roi(0.0, [1.0, 2.0, 3.0])


def test_discounted_payback_reference_case():
    dr = m.discounted_payback(INVESTMENT, FLOWS, 10)
    assert dr == pytest.approx(4.248875, abs=1e-9)


def test_discounted_payback_brackets_the_investment():
    dr = m.discounted_payback(INVESTMENT, FLOWS, 10)
    sched = m.discounted_schedule(INVESTMENT, FLOWS, 10)
    cum = sched["cumulative_discounted"].tolist()
    # cumulative through floor(dr) years < investment <= cumulative through ceil(dr) years
    assert cum[math.floor(dr) - 1] < INVESTMENT <= cum[math.ceil(dr) - 1]


def test_discounted_payback_within_first_year():
    # 1100 discounted once at 10% is exactly 1000
    assert m.discounted_payback(500.0, [1100.0, 0.0, 0.0], 10) == pytest.approx(0.5)


def test_discounted_payback_not_recoverable():
    assert m.discounted_payback(1000.0, [100.0, 100.0, 100.0], 10) is None


@pytest.mark.parametrize(
    "years,label",
    [
        (4.248875, "4 years and 3 months"),
        (2.999999, "3 years"),
        (0.99, "1 year"),
        (1.0, "1 year"),
        (1.5, "1 year and 6 months"),
        (0.5, "6 months"),
        (0.04, "0 months"),
        (2.0833, "2 years and 1 month"),
    ],
)
def test_years_months_label(years, label):
    assert m.years_months_label(years) == label


@pytest.mark.parametrize("value", [None, float("nan"), float("inf")])
def test_years_months_label_not_recoverable(value):
    assert m.years_months_label(value) == m.NOT_RECOVERABLE_LABEL


def test_discounted_schedule_columns():
    sched = m.discounted_schedule(1000.0, [400.0, 400.0, 400.0], 0)
    assert list(sched.columns) == [
        "year", "cashflow", "discount_factor", "discounted_cashflow",
        "cumulative_discounted", "remaining",
    ]
    assert sched["year"].tolist() == [1, 2, 3]
    assert sched["cumulative_discounted"].tolist() == pytest.approx([400.0, 800.0, 1200.0])
    assert sched["remaining"].tolist() == pytest.approx([600.0, 200.0, 0.0])
