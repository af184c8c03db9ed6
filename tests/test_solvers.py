import math

import pytest

from tvmlib.config import DEFAULT_CONFIG, TvmConfig
from tvmlib.errors import DegenerateInputError, NonRealResultError
from tvmlib.solvers import solve_fv, solve_nper, solve_pmt, solve_pv

CONFIGS = [
    DEFAULT_CONFIG,
    TvmConfig(is_beginning=True, is_discrete=True, compound_frequency=12, payment_frequency=12),
    TvmConfig(is_beginning=False, is_discrete=False, compound_frequency=12, payment_frequency=12),
    TvmConfig(is_beginning=False, is_discrete=True, compound_frequency=1, payment_frequency=12),
]

# Annual rate of 50% compounded once a year gives an exact effective rate of 0.5.
ANNUAL = TvmConfig(is_beginning=False, is_discrete=True, compound_frequency=1, payment_frequency=1)


def test_pv_loan_annuity():
    i = 0.05 / 12
    a = (1 + i) ** 120 - 1
    b = 1 / i
    expected = -(0.0 + a * -200.0 * b) / (a + 1)
    pv = solve_pv(5.0, 120, -200.0, 0.0, DEFAULT_CONFIG)
    assert pv == pytest.approx(expected, rel=1e-12)
    assert pv == pytest.approx(18856.3, abs=0.5)


@pytest.mark.parametrize("config", CONFIGS)
def test_pv_then_fv_recovers_fv(config):
    pv = solve_pv(7.5, 60, -150.0, 2000.0, config)
    assert solve_fv(7.5, 60, -150.0, pv, config) == pytest.approx(2000.0, abs=1e-6)


@pytest.mark.parametrize("config", CONFIGS)
def test_pmt_then_pv_and_nper(config):
    pmt = solve_pmt(6.0, 48, 20000.0, 0.0, config)
    assert pmt < 0
    assert solve_pv(6.0, 48, pmt, 0.0, config) == pytest.approx(20000.0, abs=1e-6)
    assert solve_nper(6.0, pmt, 20000.0, 0.0, config) == pytest.approx(48.0, abs=1e-6)


def test_zero_rate_linearity():
    assert solve_fv(0.0, 10, -100.0, 500.0, DEFAULT_CONFIG) == -(500.0 + 10 * -100.0)
    assert solve_pv(0.0, 10, -100.0, 500.0, DEFAULT_CONFIG) == 500.0
    assert solve_pmt(0.0, 10, 500.0, 500.0, DEFAULT_CONFIG) == -100.0
    assert solve_nper(0.0, -100.0, 500.0, 500.0, DEFAULT_CONFIG) == 10.0


def test_no_payment_growth():
    fv = solve_fv(6.0, 12, 0.0, -1000.0, DEFAULT_CONFIG)
    assert fv == pytest.approx(1000.0 * 1.005 ** 12)
    assert solve_pv(6.0, 12, 0.0, fv, DEFAULT_CONFIG) == pytest.approx(-1000.0)
    assert solve_nper(6.0, 0.0, -1000.0, fv, DEFAULT_CONFIG) == pytest.approx(12.0)


def test_nper_without_payment_same_signs_is_non_real():
    with pytest.raises(NonRealResultError):
        solve_nper(6.0, 0.0, 1000.0, 500.0, DEFAULT_CONFIG)


def test_nper_without_payment_zero_pv():
    with pytest.raises(DegenerateInputError):
        solve_nper(6.0, 0.0, 0.0, 500.0, DEFAULT_CONFIG)


def test_nper_zero_rate_zero_payment():
    with pytest.raises(DegenerateInputError):
        solve_nper(0.0, 0.0, 100.0, -100.0, DEFAULT_CONFIG)


def test_nper_zero_denominator():
    # pv + pmt*B = 20 + (-10)*2
    with pytest.raises(DegenerateInputError):
        solve_nper(50.0, -10.0, 20.0, 0.0, ANNUAL)


def test_nper_zero_ratio():
    # -fv + pmt*B = 20 + (-10)*2
    with pytest.raises(DegenerateInputError):
        solve_nper(50.0, -10.0, 0.0, -20.0, ANNUAL)


def test_nper_negative_ratio():
    with pytest.raises(NonRealResultError):
        solve_nper(50.0, -10.0, 100.0, 0.0, ANNUAL)


def test_nper_annual_exact():
    # 100 grows by 50% a year with no payments
    assert solve_nper(50.0, 0.0, -100.0, 225.0, ANNUAL) == pytest.approx(2.0)
    assert math.isclose(solve_fv(50.0, 2, 0.0, -100.0, ANNUAL), 225.0)


def test_pmt_zero_periods():
    with pytest.raises(DegenerateInputError):
        solve_pmt(0.0, 0, 100.0, 0.0, DEFAULT_CONFIG)
    with pytest.raises(DegenerateInputError):
        solve_pmt(6.0, 0, 100.0, 0.0, DEFAULT_CONFIG)


def test_overflowing_growth_is_non_real():
    with pytest.raises(NonRealResultError):
        solve_pv(5.0, 200000, -200.0, 0.0, DEFAULT_CONFIG)
    with pytest.raises(NonRealResultError):
        solve_fv(5.0, 200000, -200.0, 1000.0, DEFAULT_CONFIG)


def test_underflowing_discount_factor_is_degenerate():
    with pytest.raises(DegenerateInputError):
        solve_pv(5.0, -200000, -200.0, 0.0, DEFAULT_CONFIG)
