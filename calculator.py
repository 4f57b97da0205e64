"""
Mortgage payment calculations.

Two repayment types are supported:
  - repayment: a fixed annuity payment that retires principal and
    interest over the full term
  - interest-only: the payment covers accrued interest only; the
    principal is still owed at the end of the term

Everything here is a pure function of its inputs. Callers are expected
to have validated the inputs first (see validation.py); the formulas
re-check no bounds and nothing is rounded.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

import config as cfg


# ─── Data Classes ─────────────────────────────────────────────────────

@dataclass
class MortgageInputs:
    """Validated numeric inputs for a single calculation."""

    principal: float       # amount borrowed
    annual_rate: float     # annual interest rate in percent (5 = 5%)
    years: float           # mortgage term in years
    interest_only: bool = False

    def __post_init__(self) -> None:
        if self.principal <= 0:
            raise ValueError("Principal must be positive")
        if self.years <= 0:
            raise ValueError("Term must be positive")
        if self.annual_rate < 0:
            raise ValueError("Interest rate cannot be negative")

    @property
    def n_payments(self) -> float:
        return self.years * cfg.MONTHS_PER_YEAR

    @property
    def monthly_rate(self) -> float:
        return self.annual_rate / 100 / cfg.MONTHS_PER_YEAR


@dataclass(frozen=True)
class CalculationResult:
    """Outcome of one calculation, plus an echo of the inputs."""

    monthly_payment: float
    total_interest: float
    total_amount: float
    principal: float
    years: float
    annual_rate: float
    is_interest_only: bool

    @property
    def mortgage_type(self) -> str:
        return cfg.INTEREST_ONLY if self.is_interest_only else cfg.REPAYMENT


@dataclass
class RateSensitivity:
    """Payments across a band of rates around the chosen one."""

    rates: np.ndarray = field(repr=False)            # annual %, ascending
    monthly_payments: np.ndarray = field(repr=False)
    total_interest: np.ndarray = field(repr=False)
    base_rate: float = 0.0
    base_index: int = 0                              # index of base_rate in rates


@dataclass(frozen=True)
class TypeComparison:
    """Repayment vs interest-only for the same loan."""

    repayment: CalculationResult
    interest_only: CalculationResult

    @property
    def monthly_difference(self) -> float:
        """How much more a repayment mortgage costs each month."""
        return self.repayment.monthly_payment - self.interest_only.monthly_payment

    @property
    def interest_difference(self) -> float:
        """Extra interest paid over the term by going interest-only."""
        return self.interest_only.total_interest - self.repayment.total_interest


# ─── Core Formulas ───────────────────────────────────────────────────

def monthly_payment(
    principal: float,
    annual_rate_pct: float,
    years: float,
    interest_only: bool = False,
) -> float:
    """Monthly payment for a repayment or interest-only mortgage.

    Repayment uses the standard annuity formula::

        M = P * r(1+r)^n / ((1+r)^n - 1) = P * r / (1 - (1+r)^-n)

    with r = annual_rate / 12 and n = years * 12. A zero rate
    degenerates to P / n. The second form is evaluated through
    log1p/expm1 so tiny rates and huge principals stay finite.
    """
    r = annual_rate_pct / 100 / cfg.MONTHS_PER_YEAR
    n = years * cfg.MONTHS_PER_YEAR

    if interest_only:
        return principal * r

    if r == 0:
        return principal / n

    # 1 - (1+r)^-n without cancelling to zero when 1 + r rounds to 1
    discount = -math.expm1(-n * math.log1p(r))
    return principal * r / discount


def total_interest(
    principal: float,
    payment: float,
    years: float,
    interest_only: bool = False,
) -> float:
    """Interest paid over the whole term at a fixed monthly payment."""
    n = years * cfg.MONTHS_PER_YEAR
    if interest_only:
        return payment * n
    return payment * n - principal


def compute(
    principal: float,
    annual_rate_pct: float,
    years: float,
    interest_only: bool = False,
) -> CalculationResult:
    """Monthly payment, total interest and total amount for one loan."""
    payment = monthly_payment(principal, annual_rate_pct, years, interest_only)
    interest = total_interest(principal, payment, years, interest_only)
    return CalculationResult(
        monthly_payment=payment,
        total_interest=interest,
        total_amount=principal + interest,
        principal=principal,
        years=years,
        annual_rate=annual_rate_pct,
        is_interest_only=interest_only,
    )


def calculate(inputs: MortgageInputs) -> CalculationResult:
    """Run :func:`compute` on a MortgageInputs struct."""
    return compute(inputs.principal, inputs.annual_rate, inputs.years,
                   inputs.interest_only)


# ─── Vectorised Variants ─────────────────────────────────────────────

def monthly_payment_array(
    principal: float,
    rates_pct: np.ndarray,
    years: float,
    interest_only: bool = False,
) -> np.ndarray:
    """:func:`monthly_payment` over an array of annual rates."""
    r = np.asarray(rates_pct, dtype=float) / 100 / cfg.MONTHS_PER_YEAR
    n = years * cfg.MONTHS_PER_YEAR

    if interest_only:
        return principal * r

    # Zero-rate elements would divide by zero; swap in a dummy denominator
    # and overwrite them with P/n afterwards.
    zero = r == 0
    denom = np.where(zero, 1.0, -np.expm1(-n * np.log1p(r)))
    payments = principal * r / denom
    payments[zero] = principal / n
    return payments


def rate_sensitivity(
    inputs: MortgageInputs,
    spread: float = cfg.SENSITIVITY_SPREAD_PCT,
    step: float = cfg.SENSITIVITY_STEP_PCT,
) -> RateSensitivity:
    """Payments for rates from ``rate - spread`` to ``rate + spread``.

    The band is clipped to the accepted range (0, MAX_RATE_PCT] and
    always contains the chosen rate itself.
    """
    offsets = np.arange(-spread, spread + step / 2, step)
    rates = inputs.annual_rate + offsets
    keep = (rates > 0) & (rates <= cfg.MAX_RATE_PCT) & ~np.isclose(rates, inputs.annual_rate)
    rates = np.sort(np.append(rates[keep], inputs.annual_rate))

    payments = monthly_payment_array(inputs.principal, rates, inputs.years,
                                     inputs.interest_only)
    n = inputs.n_payments
    if inputs.interest_only:
        interest = payments * n
    else:
        interest = payments * n - inputs.principal

    base_index = int(np.argmin(np.abs(rates - inputs.annual_rate)))
    return RateSensitivity(
        rates=rates,
        monthly_payments=payments,
        total_interest=interest,
        base_rate=inputs.annual_rate,
        base_index=base_index,
    )


def compare_types(inputs: MortgageInputs) -> TypeComparison:
    """Price the same loan both as repayment and as interest-only."""
    return TypeComparison(
        repayment=compute(inputs.principal, inputs.annual_rate, inputs.years, False),
        interest_only=compute(inputs.principal, inputs.annual_rate, inputs.years, True),
    )


# ─── Smoke Test ──────────────────────────────────────────────────────

if __name__ == "__main__":
    def check(name: str, actual: float, expected: float, tol: float = 0.01) -> None:
        status = "PASS" if abs(actual - expected) <= tol else "FAIL"
        print(f"  [{status}] {name}: expected {expected}, got {actual:.2f}")

    print("=== Repayment ===")
    res = compute(200_000, 5, 25)
    check("Monthly on $200k @ 5% / 25y", res.monthly_payment, 1169.18)
    check("Total = principal + interest", res.total_amount,
          res.principal + res.total_interest)

    print("\n=== Interest only ===")
    res = compute(200_000, 5, 25, interest_only=True)
    check("Monthly on $200k @ 5% / 25y", res.monthly_payment, 833.33)
    check("Total interest", res.total_interest, 250_000)
    check("Total amount", res.total_amount, 450_000)

    print("\n=== Zero rate ===")
    check("Monthly on $100k @ 0% / 10y", compute(100_000, 0, 10).monthly_payment, 833.33)
