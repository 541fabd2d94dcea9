from __future__ import annotations

from decimal import Decimal

import pytest

from backend.tax_guard.config import AppConfig
from backend.tax_guard.services import (
    SOCIAL_SECURITY_LABELS,
    DashboardService,
    RevenueBasis,
    SocialSecurityStatus,
    format_currency,
)

NBSP = "\u00a0"


@pytest.mark.parametrize(
    ("value", "expected"),
    [
        (0, "0"),
        (810, "810"),
        (105_000, f"105{NBSP}000"),
        (1_234_567, f"1{NBSP}234{NBSP}567"),
        (Decimal("40.4"), "40,4"),
        (Decimal("12000.0"), f"12{NBSP}000"),
        (Decimal("0.125"), "0,13"),
    ],
)
def test_format_currency_uses_czech_separators(value, expected):
    assert format_currency(value) == expected


def test_every_status_has_a_label():
    assert set(SOCIAL_SECURITY_LABELS) == set(SocialSecurityStatus)
    assert SOCIAL_SECURITY_LABELS[SocialSecurityStatus.MUST_PAY] == "MUSÍTE PLATIT (Limit překročen)"


def test_build_context_uses_stored_threshold_and_config(db_session, make_invoice):
    make_invoice(10_000)
    make_invoice(20_000, is_paid=False)

    context = DashboardService.build_context(
        db_session, AppConfig(revenue_basis=RevenueBasis.PAID, default_social_limit=5_000)
    )

    assert context.stats.revenue == 10_000
    assert context.stats.social_limit == 5_000
    assert context.limit_progress_percent == 80
    assert len(context.invoices) == 2


def test_empty_dashboard_renders_placeholder_row(client):
    response = client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Žádné faktury." in response.text
    assert 'id="revenue">0 Kč' in response.text
    assert "0 Kč (Student do limitu)" in response.text


def test_dashboard_renders_figures_and_rows(client, make_invoice):
    first = make_invoice(10_000, date="2025-01-10", client_name="Alfa")
    make_invoice(20_000, date="2025-02-10", client_name="Beta")

    html = client.get("/").text

    assert f'id="revenue">30{NBSP}000 Kč' in html
    assert f'id="profit">12{NBSP}000 Kč' in html
    assert 'id="health-insurance">810 Kč' in html
    assert f'hx-delete="/invoices/{first.id}"' in html
    assert html.index("Beta") < html.index("Alfa")


def test_dashboard_shows_must_pay_when_over_limit(client, make_invoice):
    make_invoice(300_000)

    html = client.get("/").text

    assert "MUSÍTE PLATIT (Limit překročen)" in html
    assert f'id="profit">120{NBSP}000 Kč' in html


def test_dashboard_escapes_client_names(client, make_invoice):
    make_invoice(100, client_name="<script>alert(1)</script>")

    html = client.get("/").text

    assert "<script>alert(1)</script>" not in html
    assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html


def test_stats_endpoint_reports_snapshot(client, make_invoice):
    make_invoice(10_000)
    make_invoice(20_000)

    payload = client.get("/stats").json()

    assert payload["revenue"] == 30_000
    assert Decimal(str(payload["expenses"])) == Decimal("18000")
    assert Decimal(str(payload["profit"])) == Decimal("12000")
    assert payload["health_insurance"] == 810
    assert payload["social_limit"] == 105_000
    assert payload["over_limit"] is False
    assert payload["social_security_status"] == "ZERO_UNDER_LIMIT"
    assert payload["revenue_basis"] == "all"


def test_stats_endpoint_honours_paid_revenue_basis(client, make_invoice, monkeypatch):
    make_invoice(10_000)
    make_invoice(20_000, is_paid=False)

    assert client.get("/stats").json()["revenue"] == 30_000

    monkeypatch.setenv("REVENUE_BASIS", "paid")
    payload = client.get("/stats").json()

    assert payload["revenue"] == 10_000
    assert payload["revenue_basis"] == "paid"


def test_health_endpoint(client):
    assert client.get("/health").json() == {"status": "ok"}
