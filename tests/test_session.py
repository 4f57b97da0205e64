"""Tests for the form session lifecycle."""

import pytest

import config as cfg
from session import FormSession
from validation import FormInput


def _filled_session(**overrides):
    values = {"amount": "200000", "term": "25", "rate": "5", "mortgage_type": "repayment"}
    values.update(overrides)
    return FormSession(form=FormInput(**values))


class TestSubmit:
    def test_valid_submit_produces_result(self):
        session = _filled_session()
        result = session.submit()
        assert result is not None
        assert session.result is result
        assert session.errors == {}
        assert result.monthly_payment == pytest.approx(1169.18, abs=0.01)
        assert session.is_calculating is False

    def test_invalid_submit_reports_errors_without_calculating(self):
        session = _filled_session(amount="500")
        assert session.submit() is None
        assert session.errors == {"amount": cfg.MSG_AMOUNT_MINIMUM}
        assert session.result is None

    def test_failed_submit_keeps_earlier_result(self):
        session = _filled_session()
        first = session.submit()
        session.update_field("rate", "40")
        assert session.submit() is None
        assert session.result is first

    def test_new_result_replaces_old(self):
        session = _filled_session()
        first = session.submit()
        session.update_field("mortgage_type", "interest-only")
        second = session.submit()
        assert second is not first
        assert session.result.is_interest_only

    def test_busy_session_ignores_submit(self):
        session = _filled_session()
        session.is_calculating = True
        assert session.submit() is None
        assert session.result is None


class TestUpdateField:
    def test_clears_only_that_error(self):
        session = _filled_session(amount="", term="", rate="")
        session.submit()
        assert set(session.errors) == {"amount", "term", "rate"}

        session.update_field("term", "25")
        assert set(session.errors) == {"amount", "rate"}
        assert session.form.term == "25"

    def test_unknown_field(self):
        with pytest.raises(ValueError):
            FormSession().update_field("deposit", "10")


class TestReset:
    def test_clears_everything(self):
        session = _filled_session(mortgage_type="interest-only")
        session.submit()
        session.reset()
        assert session.form == FormInput("", "", "", cfg.REPAYMENT)
        assert session.errors == {}
        assert session.result is None


class TestNumericalEdges:
    def test_tiny_rate_submits(self):
        session = _filled_session(rate="1e-13")
        result = session.submit()
        assert result is not None
        assert result.monthly_payment == pytest.approx(200_000 / 300, rel=1e-6)
