"""
Constants for the mortgage repayment calculator.

All monetary values in US dollars. Rates are annual percentages
(5 means 5% per year), terms are in years.
"""

# ── General ──────────────────────────────────────────────────────────
CURRENCY_SYMBOL = "$"
MONTHS_PER_YEAR = 12

# ── Mortgage types ───────────────────────────────────────────────────
REPAYMENT = "repayment"
INTEREST_ONLY = "interest-only"
MORTGAGE_TYPES = (REPAYMENT, INTEREST_ONLY)
MORTGAGE_TYPE_LABELS = {
    REPAYMENT: "Repayment",
    INTEREST_ONLY: "Interest Only",
}

# ── Input limits ─────────────────────────────────────────────────────
MIN_AMOUNT = 1_000
MIN_TERM_YEARS = 1
MAX_TERM_YEARS = 50
MAX_RATE_PCT = 30

# ── Validation messages ──────────────────────────────────────────────
MSG_AMOUNT_REQUIRED = "Please enter a valid mortgage amount"
MSG_AMOUNT_MINIMUM = "Minimum mortgage amount is $1,000"
MSG_TERM_REQUIRED = "Please enter a valid mortgage term"
MSG_TERM_RANGE = "Mortgage term must be between 1 and 50 years"
MSG_RATE_REQUIRED = "Please enter a valid interest rate"
MSG_RATE_MAXIMUM = "Interest rate cannot exceed 30%"
MSG_TYPE_REQUIRED = "Please select a mortgage type"

# ── Rate sensitivity sweep ───────────────────────────────────────────
SENSITIVITY_SPREAD_PCT = 2.0   # +/- around the chosen rate
SENSITIVITY_STEP_PCT = 0.5

# ── Web server ───────────────────────────────────────────────────────
WEB_HOST = "127.0.0.1"
WEB_PORT = 5000
