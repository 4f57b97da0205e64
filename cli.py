"""
CLI interface and shared display-data computation for the
mortgage repayment calculator.
"""

from __future__ import annotations

import math
import sys
from typing import Any, Dict, List

import config as cfg
from calculator import (
    CalculationResult,
    MortgageInputs,
    compare_types,
    rate_sensitivity,
)
from session import FormSession


# ═══════════════════════════════════════════════════════════════════
# Formatting helpers
# ═══════════════════════════════════════════════════════════════════

def fmt(val: float, decimals: int = 2) -> str:
    """Format number as $X,XXX.XX."""
    sign = "-" if val < 0 else ""
    return f"{sign}{cfg.CURRENCY_SYMBOL}{abs(val):,.{decimals}f}"


def pct(val: float, decimals: int = 2) -> str:
    """Format a percentage without trailing zeros (5 -> 5%, 4.25 -> 4.25%)."""
    return f"{round(val, decimals):g}%"


def years_label(years: float) -> str:
    unit = "year" if years == 1 else "years"
    return f"{years:g} {unit}"


# ═══════════════════════════════════════════════════════════════════
# Input collection (CLI)
# ═══════════════════════════════════════════════════════════════════

PROMPTS = {
    "amount": f"Mortgage amount ({cfg.CURRENCY_SYMBOL})",
    "term": "Mortgage term (years)",
    "rate": "Interest rate (%)",
}


def _prompt_text(label: str) -> str:
    return input(f"  {label}: ").strip()


def _prompt_choice(label: str, options: List[str], default: str) -> str:
    opts = "/".join(options)
    while True:
        raw = input(f"  {label} ({opts}) [{default}]: ").strip().lower()
        if not raw:
            return default
        if raw in options:
            return raw
        print(f"    Choose from: {opts}")


def collect_inputs(session: FormSession) -> CalculationResult:
    """Prompt until the form validates, then return the result.

    After a rejected submission only the fields in error are asked
    for again; the others keep what was typed.
    """
    print("\n  Enter your mortgage details:\n")
    for name, label in PROMPTS.items():
        session.update_field(name, _prompt_text(label))
    session.update_field(
        "mortgage_type",
        _prompt_choice("Mortgage type", list(cfg.MORTGAGE_TYPES), cfg.REPAYMENT),
    )

    result = session.submit()
    while result is None:
        print()
        for msg in session.errors.values():
            print(f"    {msg}")
        print()
        for name in list(session.errors):
            if name == "mortgage_type":
                value = _prompt_choice("Mortgage type", list(cfg.MORTGAGE_TYPES),
                                       cfg.REPAYMENT)
            else:
                value = _prompt_text(PROMPTS[name])
            session.update_field(name, value)
        result = session.submit()
    return result


# ═══════════════════════════════════════════════════════════════════
# Shared display-data computation (used by CLI and web app)
# ═══════════════════════════════════════════════════════════════════

def _inputs_from_result(result: CalculationResult) -> MortgageInputs:
    return MortgageInputs(
        principal=result.principal,
        annual_rate=result.annual_rate,
        years=result.years,
        interest_only=result.is_interest_only,
    )


def compute_display_data(result: CalculationResult) -> Dict[str, Any]:
    """Extract every figure needed for the output sections."""
    inputs = _inputs_from_result(result)
    comparison = compare_types(inputs)
    sensitivity = rate_sensitivity(inputs)

    # Totals can overflow for astronomically large principals
    if math.isfinite(result.total_amount) and result.total_amount > 0:
        interest_share = result.total_interest / result.total_amount * 100
    else:
        interest_share = 0.0

    return {
        # Inputs echo
        "principal": result.principal,
        "annual_rate": result.annual_rate,
        "years": result.years,
        "n_payments": inputs.n_payments,
        "is_interest_only": result.is_interest_only,
        "type_label": cfg.MORTGAGE_TYPE_LABELS[result.mortgage_type],
        "payment_label": ("(Interest Only)" if result.is_interest_only
                          else "(Principal + Interest)"),
        # Results
        "monthly_payment": result.monthly_payment,
        "total_interest": result.total_interest,
        "total_amount": result.total_amount,
        "interest_share": interest_share,
        # Repayment vs interest-only
        "cmp_repayment_monthly": comparison.repayment.monthly_payment,
        "cmp_interest_only_monthly": comparison.interest_only.monthly_payment,
        "cmp_repayment_interest": comparison.repayment.total_interest,
        "cmp_interest_only_interest": comparison.interest_only.total_interest,
        "cmp_monthly_difference": comparison.monthly_difference,
        "cmp_interest_difference": comparison.interest_difference,
        # Rate sensitivity rows: (rate, monthly, total interest, is_base)
        "sensitivity": sensitivity,
        "sensitivity_rows": [
            (float(r), float(m), float(t), i == sensitivity.base_index)
            for i, (r, m, t) in enumerate(zip(sensitivity.rates,
                                              sensitivity.monthly_payments,
                                              sensitivity.total_interest))
        ],
    }


# ═══════════════════════════════════════════════════════════════════
# Box-drawing CLI output
# ═══════════════════════════════════════════════════════════════════

W = 64  # box width (characters)
H_BAR = "═"


def _box_top(title: str) -> str:
    inner = W - 2
    bar = H_BAR * inner
    return (
        f"╔{bar}╗\n"
        f"║  {title:<{inner - 2}}║\n"
        f"╠{bar}╣"
    )


def _box_line(text: str = "") -> str:
    inner = W - 4
    if len(text) > inner:
        text = text[:inner]
    return f"║  {text:<{inner}}║"


def _box_row(label: str, value: str, lw: int = 34) -> str:
    return _box_line(f"{label:<{lw}}{value}")


def _box_bottom() -> str:
    return f"╚{H_BAR * (W - 2)}╝"


def _print_section(title: str, rows: List[str]) -> None:
    """Print a titled box with content rows."""
    print(_box_top(title))
    for r in rows:
        print(r)
    print(_box_bottom())
    print()


# ═══════════════════════════════════════════════════════════════════
# CLI Section Printers
# ═══════════════════════════════════════════════════════════════════

def _print_results(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Monthly payment", f"{fmt(d['monthly_payment'])} {d['payment_label']}"),
        _box_row("Total interest", fmt(d["total_interest"])),
        _box_row("Total amount", f"{fmt(d['total_amount'])} (Principal + Interest)"),
    ]
    _print_section("YOUR RESULTS", rows)


def _print_summary(d: Dict[str, Any]) -> None:
    rows = [
        _box_row("Principal", fmt(d["principal"])),
        _box_row("Interest rate", f"{pct(d['annual_rate'])} per year"),
        _box_row("Term", years_label(d["years"])),
        _box_row("Type", d["type_label"]),
        _box_line(),
        _box_row("Interest share of total paid", pct(d["interest_share"], 1)),
    ]
    _print_section("SUMMARY", rows)


def _print_comparison(d: Dict[str, Any]) -> None:
    rows = [
        _box_line(f"{'':<20}{'Repayment':>18}{'Interest only':>18}"),
        _box_line("─" * (W - 6)),
        _box_line(f"{'Monthly payment':<20}"
                  f"{fmt(d['cmp_repayment_monthly']):>18}"
                  f"{fmt(d['cmp_interest_only_monthly']):>18}"),
        _box_line(f"{'Total interest':<20}"
                  f"{fmt(d['cmp_repayment_interest']):>18}"
                  f"{fmt(d['cmp_interest_only_interest']):>18}"),
        _box_line(),
        _box_line(f"Repayment costs {fmt(d['cmp_monthly_difference'])}/mo more but"),
        _box_line(f"saves {fmt(d['cmp_interest_difference'])} in interest and clears"),
        _box_line("the principal by the end of the term."),
    ]
    _print_section("REPAYMENT VS INTEREST ONLY", rows)


def _print_sensitivity(d: Dict[str, Any]) -> None:
    h1 = f"{'Rate':>8}  {'Monthly':>14}  {'Total interest':>18}"
    rows = [_box_line(h1), _box_line("─" * (W - 6))]
    for rate, monthly, interest, is_base in d["sensitivity_rows"]:
        marker = " <<" if is_base else ""
        rows.append(_box_line(
            f"{pct(rate):>8}  {fmt(monthly):>14}  {fmt(interest):>18}{marker}"
        ))
    _print_section("IF THE RATE WERE DIFFERENT", rows)


# ═══════════════════════════════════════════════════════════════════
# Main CLI entry point
# ═══════════════════════════════════════════════════════════════════

def run_cli() -> None:
    """Run the full CLI workflow."""
    # Ensure box-drawing characters render on Windows
    try:
        sys.stdout.reconfigure(encoding="utf-8")
    except (AttributeError, OSError):
        pass
    print()
    print("=" * W)
    print("  Mortgage Repayment Calculator")
    print("=" * W)

    session = FormSession()
    while True:
        result = collect_inputs(session)
        d = compute_display_data(result)

        print()
        _print_results(d)
        _print_summary(d)
        _print_comparison(d)
        _print_sensitivity(d)

        again = _prompt_choice("Calculate another?", ["yes", "no"], "no")
        if again != "yes":
            break
        session.reset()


if __name__ == "__main__":
    run_cli()
