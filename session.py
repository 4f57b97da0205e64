"""
Form session state for the mortgage calculator.

Holds what the user has typed, the current per-field errors and the
latest result, and applies the three user actions: edit a field,
submit, reset. Both the terminal interface and the web app drive
their forms through this class.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

import config as cfg
from calculator import CalculationResult, calculate
from validation import (
    FIELDS,
    FormInput,
    clear_field_error,
    is_valid,
    to_mortgage_inputs,
    validate_form,
)


@dataclass
class FormSession:
    form: FormInput = field(default_factory=FormInput)
    errors: Dict[str, str] = field(default_factory=dict)
    result: Optional[CalculationResult] = None
    is_calculating: bool = False

    def update_field(self, name: str, value: Any) -> None:
        """Overwrite one field and drop only that field's error."""
        if name not in FIELDS:
            raise ValueError(f"Unknown field: {name!r}")
        setattr(self.form, name, value)
        if name in self.errors:
            self.errors = clear_field_error(self.errors, name)

    def submit(self) -> Optional[CalculationResult]:
        """Validate the form and, if it passes, calculate.

        Returns the new result, or None when validation failed or a
        calculation is already in progress.
        """
        if self.is_calculating:
            return None

        self.errors = validate_form(self.form)
        if not is_valid(self.errors):
            return None

        self.is_calculating = True
        try:
            self.result = calculate(to_mortgage_inputs(self.form))
        finally:
            self.is_calculating = False
        return self.result

    def reset(self) -> None:
        """Clear the form, the errors and the result."""
        self.form = FormInput(mortgage_type=cfg.REPAYMENT)
        self.errors = {}
        self.result = None
