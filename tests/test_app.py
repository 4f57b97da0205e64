"""Tests for the Flask web app."""

import pytest

from app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as c:
        yield c


def _post(client, **fields):
    data = {"amount": "200000", "term": "25", "rate": "5",
            "mortgage_type": "repayment", "action": "calculate"}
    data.update(fields)
    return client.post("/", data=data)


class TestIndex:
    def test_get_shows_empty_form(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "Results shown here" in html
        assert "Calculate Repayments" in html


class TestCalculate:
    def test_repayment_results(self, client):
        html = _post(client).get_data(as_text=True)
        assert "Your Results" in html
        assert "$1,169.18" in html
        assert "(Principal + Interest)" in html
        assert "data:image/png;base64," in html

    def test_interest_only_results(self, client):
        html = _post(client, mortgage_type="interest-only").get_data(as_text=True)
        assert "$833.33" in html
        assert "$250,000.00" in html
        assert "$450,000.00" in html
        assert "(Interest Only)" in html

    def test_default_action_is_calculate(self, client):
        resp = client.post("/", data={"amount": "200000", "term": "25", "rate": "5"})
        assert "$1,169.18" in resp.get_data(as_text=True)

    def test_invalid_input_shows_errors(self, client):
        html = _post(client, amount="500", rate="31").get_data(as_text=True)
        assert "Minimum mortgage amount is $1,000" in html
        assert "Interest rate cannot exceed 30%" in html
        assert "Your Results" not in html
        assert "Results shown here" in html

    def test_entered_values_are_kept_on_error(self, client):
        html = _post(client, amount="500").get_data(as_text=True)
        assert 'value="500"' in html
        assert 'value="25"' in html


class TestReset:
    def test_reset_clears_form(self, client):
        html = _post(client, action="reset").get_data(as_text=True)
        assert "Results shown here" in html
        assert 'value="200000"' not in html

    def test_unknown_action(self, client):
        assert _post(client, action="delete").status_code == 400


class TestNumericalEdges:
    def test_tiny_rate(self, client):
        resp = _post(client, rate="0.0000000000001")
        assert resp.status_code == 200
        html = resp.get_data(as_text=True)
        assert "Your Results" in html
        assert "$666.67" in html

    def test_huge_principal(self, client):
        resp = _post(client, amount="1e305", term="50", rate="30")
        assert resp.status_code == 200
        assert "Your Results" in resp.get_data(as_text=True)

    def test_overflowing_principal(self, client):
        resp = _post(client, amount="1e308", term="50", rate="30")
        assert resp.status_code == 200
        assert "Your Results" in resp.get_data(as_text=True)
