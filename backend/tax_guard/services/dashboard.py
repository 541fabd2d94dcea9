"""Assemble and render the HTML dashboard."""

from __future__ import annotations

import html as htmllib
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import TYPE_CHECKING, Sequence

from sqlalchemy.orm import Session

from .. import models
from .invoices import InvoiceService
from .settings import SettingsService
from .stats_engine import SocialSecurityStatus, StatsEngine, StatsSnapshot

if TYPE_CHECKING:
    from ..config import AppConfig

NBSP = "\u00a0"

SOCIAL_SECURITY_LABELS: dict[SocialSecurityStatus, str] = {
    SocialSecurityStatus.MUST_PAY: "MUSÍTE PLATIT (Limit překročen)",
    SocialSecurityStatus.ZERO_UNDER_LIMIT: "0 Kč (Student do limitu)",
}

EMPTY_INVOICES_ROW = (
    '<tr><td colspan="4" class="px-6 py-4 text-center text-sm text-gray-500">'
    "Žádné faktury.</td></tr>"
)


def format_currency(value: Decimal | int) -> str:
    """Format a number the way ``cs-CZ`` locales do (``1 234,5``)."""

    amount = Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    whole, _, fraction = f"{abs(amount):.2f}".partition(".")
    grouped = f"{int(whole):,}".replace(",", NBSP)
    fraction = fraction.rstrip("0")
    if fraction:
        return f"{sign}{grouped},{fraction}"
    return f"{sign}{grouped}"


def _raw_number(value: Decimal | int) -> str:
    normalized = Decimal(value).normalize()
    if normalized == normalized.to_integral_value():
        return str(int(normalized))
    return format(normalized, "f")


@dataclass(frozen=True)
class DashboardContext:
    """Everything the page needs for one render."""

    stats: StatsSnapshot
    invoices: Sequence[models.Invoice]
    year: int

    @property
    def social_security_label(self) -> str:
        return SOCIAL_SECURITY_LABELS[self.stats.social_security_status]

    @property
    def limit_progress_percent(self) -> int:
        if self.stats.social_limit <= 0:
            return 100 if self.stats.profit > 0 else 0
        ratio = self.stats.profit / Decimal(self.stats.social_limit) * 100
        return int(min(ratio, Decimal(100)))


class DashboardService:
    """Load ledger data, run the stats engine and render the page."""

    @staticmethod
    def build_context(db: Session, config: "AppConfig") -> DashboardContext:
        invoices = InvoiceService.list_invoices(db)
        threshold = SettingsService.get_social_limit(db, default=config.default_social_limit)
        stats = StatsEngine.compute(invoices, threshold, revenue_basis=config.revenue_basis)
        return DashboardContext(stats=stats, invoices=invoices, year=date.today().year)

    @staticmethod
    def render_invoice_rows(invoices: Sequence[models.Invoice]) -> str:
        if not invoices:
            return EMPTY_INVOICES_ROW

        esc = htmllib.escape
        rows = []
        for invoice in invoices:
            rows.append(
                f"""
    <tr>
        <td class="px-6 py-4 whitespace-nowrap text-sm text-gray-500">{esc(str(invoice.date))}</td>
        <td class="px-6 py-4 whitespace-nowrap text-sm text-gray-900">{esc(str(invoice.client_name))}</td>
        <td class="px-6 py-4 whitespace-nowrap text-sm font-medium text-gray-900">{format_currency(invoice.amount)} Kč</td>
        <td class="px-6 py-4 whitespace-nowrap text-right text-sm font-medium">
            <button hx-delete="/invoices/{int(invoice.id)}" hx-target="body" hx-swap="outerHTML" class="text-red-600 hover:text-red-900">Smazat</button>
        </td>
    </tr>"""
            )
        return "".join(rows)

    @classmethod
    def render(cls, context: DashboardContext) -> str:
        """Return the complete dashboard page."""

        stats = context.stats
        status_class = "text-red-600" if stats.over_limit else "text-green-600"
        today = date.today().isoformat()

        return f"""<!DOCTYPE html>
<html lang="cs">
<head>
  <meta charset="utf-8" />
  <meta name="viewport" content="width=device-width, initial-scale=1" />
  <title>Student Tax Guard</title>
  <script src="https://unpkg.com/htmx.org@1.9.12"></script>
  <script src="https://cdn.tailwindcss.com"></script>
</head>
<body class="bg-gray-100 min-h-screen">
  <main class="max-w-5xl mx-auto py-10 px-4 space-y-8">
    <h1 class="text-3xl font-bold text-gray-900">Student Tax Guard {context.year}</h1>

    <section class="grid grid-cols-1 md:grid-cols-4 gap-4">
      <div class="bg-white rounded shadow p-4">
        <p class="text-sm text-gray-500">Příjmy</p>
        <p class="text-2xl font-semibold" id="revenue">{format_currency(stats.revenue)} Kč</p>
      </div>
      <div class="bg-white rounded shadow p-4">
        <p class="text-sm text-gray-500">Zisk (po 60 % výdajích)</p>
        <p class="text-2xl font-semibold" id="profit">{format_currency(stats.profit)} Kč</p>
      </div>
      <div class="bg-white rounded shadow p-4">
        <p class="text-sm text-gray-500">Zdravotní pojištění</p>
        <p class="text-2xl font-semibold" id="health-insurance">{format_currency(stats.health_insurance)} Kč</p>
      </div>
      <div class="bg-white rounded shadow p-4">
        <p class="text-sm text-gray-500">Sociální pojištění</p>
        <p class="text-lg font-semibold {status_class}" id="social-security">{htmllib.escape(context.social_security_label)}</p>
      </div>
    </section>

    <section class="bg-white rounded shadow p-4 space-y-2">
      <div class="flex justify-between text-sm text-gray-600">
        <span>Zisk vůči rozhodné částce</span>
        <span id="limit">{format_currency(stats.profit)} / {format_currency(stats.social_limit)} Kč</span>
      </div>
      <progress class="w-full" id="limit-progress" value="{_raw_number(stats.profit)}" max="{stats.social_limit}">{context.limit_progress_percent} %</progress>
      <form hx-post="/settings" hx-target="body" hx-swap="outerHTML" class="flex gap-2 items-end">
        <label class="text-sm text-gray-600">Rozhodná částka
          <input type="number" name="social_limit_amount" min="0" step="1" value="{stats.social_limit}" class="border rounded px-2 py-1" required />
        </label>
        <button type="submit" class="bg-gray-800 text-white rounded px-3 py-1">Uložit</button>
      </form>
    </section>

    <section class="bg-white rounded shadow p-4">
      <form hx-post="/invoices" hx-target="body" hx-swap="outerHTML" class="grid grid-cols-1 md:grid-cols-4 gap-2 items-end">
        <label class="text-sm text-gray-600">Datum
          <input type="date" name="date" value="{today}" class="border rounded px-2 py-1 w-full" required />
        </label>
        <label class="text-sm text-gray-600">Klient
          <input type="text" name="client_name" class="border rounded px-2 py-1 w-full" required />
        </label>
        <label class="text-sm text-gray-600">Částka (Kč)
          <input type="number" name="amount" min="0" step="1" class="border rounded px-2 py-1 w-full" required />
        </label>
        <button type="submit" class="bg-blue-600 text-white rounded px-3 py-2">Přidat fakturu</button>
      </form>
    </section>

    <section class="bg-white rounded shadow overflow-hidden">
      <table class="min-w-full divide-y divide-gray-200">
        <thead class="bg-gray-50">
          <tr>
            <th class="px-6 py-3 text-left text-xs font-medium text-gray-500 uppercase">Datum</th>
            <th class="px-6 py-3 text-left text-xs font-medium text-gray-500 uppercase">Klient</th>
            <th class="px-6 py-3 text-left text-xs font-medium text-gray-500 uppercase">Částka</th>
            <th class="px-6 py-3"></th>
          </tr>
        </thead>
        <tbody class="bg-white divide-y divide-gray-200">{cls.render_invoice_rows(context.invoices)}
        </tbody>
      </table>
    </section>
  </main>
</body>
</html>
"""
