"""
Form input validation for the mortgage calculator.

Raw field values (strings from a web form or terminal prompt) are
checked against the numeric and range rules below. The outcome is a
mapping of field name to a human-readable message; an empty mapping
means the input was accepted. Nothing here raises for bad user input.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

import config as cfg
from calculator import MortgageInputs


FIELDS = ("amount", "term", "rate", "mortgage_type")


@dataclass
class FormInput:
    """Field values exactly as the user entered them."""

    amount: Any = ""
    term: Any = ""
    rate: Any = ""
    mortgage_type: str = cfg.REPAYMENT

    @property
    def interest_only(self) -> bool:
        return self.mortgage_type == cfg.INTEREST_ONLY


# ─── Parsing ─────────────────────────────────────────────────────────

def _strip_number(s: str) -> str:
    """Remove currency symbols, percent signs, commas, spaces."""
    for ch in (cfg.CURRENCY_SYMBOL, "%", ",", " "):
        s = s.replace(ch, "")
    return s


def parse_number(value: Any) -> Optional[float]:
    """Convert a raw field value to a finite float, or None if that fails."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        number = float(value)
    else:
        text = _strip_number(str(value).strip())
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    if not math.isfinite(number):
        return None
    return number


def parse_form(form: Mapping[str, Any]) -> FormInput:
    """Build a FormInput from a request form or any mapping.

    Accepts ``mortgageType`` as an alias of ``mortgage_type``.
    """
    mortgage_type = form.get("mortgage_type", form.get("mortgageType")) or cfg.REPAYMENT
    return FormInput(
        amount=form.get("amount", ""),
        term=form.get("term", ""),
        rate=form.get("rate", ""),
        mortgage_type=str(mortgage_type).strip().lower(),
    )


# ─── Field Rules ─────────────────────────────────────────────────────

def _check_amount(value: Any) -> Optional[str]:
    amount = parse_number(value)
    if amount is None or amount <= 0:
        return cfg.MSG_AMOUNT_REQUIRED
    if amount < cfg.MIN_AMOUNT:
        return cfg.MSG_AMOUNT_MINIMUM
    return None


def _check_term(value: Any) -> Optional[str]:
    term = parse_number(value)
    if term is None or term <= 0:
        return cfg.MSG_TERM_REQUIRED
    if term < cfg.MIN_TERM_YEARS or term > cfg.MAX_TERM_YEARS:
        return cfg.MSG_TERM_RANGE
    return None


def _check_rate(value: Any) -> Optional[str]:
    rate = parse_number(value)
    if rate is None or rate <= 0:
        return cfg.MSG_RATE_REQUIRED
    if rate > cfg.MAX_RATE_PCT:
        return cfg.MSG_RATE_MAXIMUM
    return None


def _check_type(value: Any) -> Optional[str]:
    if value not in cfg.MORTGAGE_TYPES:
        return cfg.MSG_TYPE_REQUIRED
    return None


# ─── Public API ──────────────────────────────────────────────────────

def validate_form(form: FormInput) -> Dict[str, str]:
    """Check every field and return the errors found.

    All fields are checked on every call; a bad amount does not stop
    the term or rate from being reported.
    """
    checks = (
        ("amount", _check_amount(form.amount)),
        ("term", _check_term(form.term)),
        ("rate", _check_rate(form.rate)),
        ("mortgage_type", _check_type(form.mortgage_type)),
    )
    return {name: msg for name, msg in checks if msg is not None}


def is_valid(errors: Mapping[str, str]) -> bool:
    return len(errors) == 0


def clear_field_error(errors: Mapping[str, str], field: str) -> Dict[str, str]:
    """Return a copy of *errors* without the entry for *field*."""
    return {name: msg for name, msg in errors.items() if name != field}


def to_mortgage_inputs(form: FormInput) -> MortgageInputs:
    """Convert an accepted FormInput into numbers for the calculator."""
    errors = validate_form(form)
    if errors:
        raise ValueError(f"Form input is not valid: {errors}")
    return MortgageInputs(
        principal=parse_number(form.amount),
        annual_rate=parse_number(form.rate),
        years=parse_number(form.term),
        interest_only=form.interest_only,
    )
