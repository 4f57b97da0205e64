"""Tests for the mortgage payment formulas."""

import numpy as np
import pytest

from calculator import (
    CalculationResult,
    MortgageInputs,
    calculate,
    compare_types,
    compute,
    monthly_payment,
    monthly_payment_array,
    rate_sensitivity,
    total_interest,
)


class TestRepayment:
    def test_standard_annuity_payment(self):
        res = compute(200_000, 5, 25)
        assert res.monthly_payment == pytest.approx(1169.18, abs=0.01)

    def test_totals_add_up(self):
        res = compute(200_000, 5, 25)
        assert res.total_interest == pytest.approx(res.monthly_payment * 300 - 200_000)
        assert res.total_amount == pytest.approx(res.principal + res.total_interest)

    def test_zero_rate_divides_principal_evenly(self):
        res = compute(100_000, 0, 10)
        assert res.monthly_payment == pytest.approx(833.33, abs=0.01)
        assert res.total_interest == pytest.approx(0.0, abs=1e-6)
        assert res.total_amount == pytest.approx(100_000)

    def test_one_year_term(self):
        res = compute(12_000, 6, 1)
        # Slightly more than 1,000/month once interest is added
        assert 1_000 < res.monthly_payment < 1_040

    def test_higher_rate_costs_more(self):
        assert monthly_payment(200_000, 6, 25) > monthly_payment(200_000, 5, 25)

    def test_longer_term_lowers_payment_raises_interest(self):
        short = compute(200_000, 5, 15)
        long = compute(200_000, 5, 30)
        assert long.monthly_payment < short.monthly_payment
        assert long.total_interest > short.total_interest


class TestInterestOnly:
    def test_payment_is_monthly_interest(self):
        res = compute(200_000, 5, 25, interest_only=True)
        assert res.monthly_payment == pytest.approx(200_000 * 0.05 / 12)

    def test_totals(self):
        res = compute(200_000, 5, 25, interest_only=True)
        assert res.total_interest == pytest.approx(250_000)
        assert res.total_amount == pytest.approx(450_000)

    def test_total_interest_helper(self):
        assert total_interest(200_000, 1_000.0, 10, interest_only=True) == pytest.approx(120_000)
        assert total_interest(100_000, 1_000.0, 10) == pytest.approx(20_000)


class TestResultRecord:
    def test_echoes_inputs(self):
        res = compute(150_000, 4.5, 20, interest_only=True)
        assert res.principal == 150_000
        assert res.annual_rate == 4.5
        assert res.years == 20
        assert res.is_interest_only is True
        assert res.mortgage_type == "interest-only"

    def test_is_immutable(self):
        res = compute(150_000, 4.5, 20)
        with pytest.raises(AttributeError):
            res.monthly_payment = 0.0

    def test_idempotent(self):
        assert compute(321_000, 3.75, 30) == compute(321_000, 3.75, 30)

    def test_calculate_matches_compute(self):
        inputs = MortgageInputs(principal=200_000, annual_rate=5, years=25)
        assert calculate(inputs) == compute(200_000, 5, 25)
        assert isinstance(calculate(inputs), CalculationResult)


class TestVectorised:
    def test_matches_scalar_formula(self):
        rates = np.array([1.0, 3.5, 5.0, 12.0])
        payments = monthly_payment_array(200_000, rates, 25)
        expected = [monthly_payment(200_000, r, 25) for r in rates]
        np.testing.assert_allclose(payments, expected)

    def test_zero_rate_element(self):
        payments = monthly_payment_array(120_000, np.array([0.0, 5.0]), 10)
        assert payments[0] == pytest.approx(1_000.0)
        assert np.all(np.isfinite(payments))

    def test_interest_only(self):
        payments = monthly_payment_array(120_000, np.array([6.0, 12.0]), 10, interest_only=True)
        np.testing.assert_allclose(payments, [600.0, 1_200.0])


class TestRateSensitivity:
    def test_band_around_chosen_rate(self):
        sens = rate_sensitivity(MortgageInputs(200_000, 5, 25))
        np.testing.assert_allclose(sens.rates, np.arange(3.0, 7.01, 0.5))
        assert sens.rates[sens.base_index] == pytest.approx(5)
        assert sens.monthly_payments[sens.base_index] == pytest.approx(1169.18, abs=0.01)

    def test_clipped_to_valid_range(self):
        low = rate_sensitivity(MortgageInputs(200_000, 1, 25))
        high = rate_sensitivity(MortgageInputs(200_000, 29.5, 25))
        assert low.rates.min() > 0
        assert high.rates.max() <= 30

    def test_contains_odd_base_rate(self):
        sens = rate_sensitivity(MortgageInputs(200_000, 4.37, 25))
        assert sens.rates[sens.base_index] == pytest.approx(4.37)
        assert np.all(np.diff(sens.rates) > 0)

    def test_payments_increase_with_rate(self):
        sens = rate_sensitivity(MortgageInputs(200_000, 5, 25))
        assert np.all(np.diff(sens.monthly_payments) > 0)
        assert np.all(np.diff(sens.total_interest) > 0)


class TestCompareTypes:
    def test_differences(self):
        cmp = compare_types(MortgageInputs(200_000, 5, 25))
        assert cmp.repayment.monthly_payment == pytest.approx(1169.18, abs=0.01)
        assert cmp.interest_only.monthly_payment == pytest.approx(833.33, abs=0.01)
        assert cmp.monthly_difference == pytest.approx(335.85, abs=0.01)
        assert cmp.interest_difference == pytest.approx(
            250_000 - cmp.repayment.total_interest)
        assert cmp.interest_difference > 0


class TestNumericalEdges:
    def test_tiny_rate_approaches_zero_rate_payment(self):
        res = compute(200_000, 1e-13, 25)
        assert np.isfinite(res.monthly_payment)
        assert res.monthly_payment == pytest.approx(200_000 / 300, rel=1e-6)
        assert res.total_interest == pytest.approx(0, abs=1e-3)

    def test_tiny_rate_in_array(self):
        payments = monthly_payment_array(200_000, np.array([1e-13, 5.0]), 25)
        assert np.all(np.isfinite(payments))
        assert payments[0] == pytest.approx(666.67, abs=0.01)
        assert payments[1] == pytest.approx(1169.18, abs=0.01)

    def test_tiny_rate_sensitivity_is_finite(self):
        sens = rate_sensitivity(MortgageInputs(200_000, 1e-13, 25))
        assert np.all(np.isfinite(sens.monthly_payments))
        assert sens.rates[sens.base_index] == 1e-13

    def test_huge_principal_stays_finite(self):
        res = compute(1e305, 30, 50)
        expected = 1e305 * 0.025 / (1 - 1.025 ** -600)
        assert np.isfinite(res.monthly_payment)
        assert res.monthly_payment == pytest.approx(expected, rel=1e-9)
        assert np.isfinite(res.total_amount)

    def test_huge_principal_array_matches_scalar(self):
        payments = monthly_payment_array(1e305, np.array([30.0]), 50)
        assert payments[0] == pytest.approx(monthly_payment(1e305, 30, 50), rel=1e-12)


class TestMortgageInputsChecks:
    @pytest.mark.parametrize("principal, rate, years", [
        (0, 5, 25),
        (-1, 5, 25),
        (200_000, 5, 0),
        (200_000, -1, 25),
    ])
    def test_impossible_values_rejected(self, principal, rate, years):
        with pytest.raises(ValueError):
            MortgageInputs(principal, rate, years)

    def test_zero_rate_allowed(self):
        assert MortgageInputs(100_000, 0, 10).monthly_rate == 0
