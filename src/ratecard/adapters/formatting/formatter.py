# src/ratecard/adapters/formatting/formatter.py
"""
Result Formatter - Presentation Rows and Status Text

This module turns conversion results into the rows the UI layer renders
(currency code, formatted value, change percent, trend direction, display
time) and builds the plain-text status line and result listing used by
the command line.

Values use Venezuelan grouping ('1.234,56'); change percentages are signed
with two decimals ('+0.53%').

Files that USE this module:
- ratecard.app (prints rows, status line and chart series)
- tests.test_formatter (unit tests)

Files that this module USES:
- ratecard.application.controller (ChartSeries)
- ratecard.application.scheduler (next_update_date)
- ratecard.domain.models (AppState, ConversionResult, CURRENCIES)
- ratecard.shared.language (translate, format_long_date)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, tzinfo
from typing import List, Optional, Sequence

from ratecard.application.controller import ChartSeries
from ratecard.application.scheduler import next_update_date
from ratecard.domain.models import CURRENCIES, AppState, ConversionResult
from ratecard.shared.language import format_long_date, translate


@dataclass(frozen=True)
class PresentationRow:
    """One result card as handed to the UI layer."""
    currency_code: str
    formatted_value: str
    change_percent: float
    is_positive_trend: bool
    display_timestamp: str


def format_value(value: float, decimals: int = 2) -> str:
    """
    Format a converted value with '.' thousands and ',' decimals.

    Args:
        value: Number to format
        decimals: Decimal places (default: 2)

    Returns:
        Formatted string like '3.900,00'
    """
    grouped = f"{value:,.{decimals}f}"
    return grouped.replace(",", "\x00").replace(".", ",").replace("\x00", ".")


def _fmt_pct(change_percent: float) -> str:
    """
    Format a trend percentage with explicit sign.

    Zero and positive changes count as an up trend and get '+'.
    """
    sign = "+" if change_percent >= 0 else ""
    return f"{sign}{change_percent:.2f}%"


def _fmt_time(ts: datetime, tz: Optional[tzinfo] = None) -> str:
    return f"{ts.astimezone(tz):%H:%M}"


def presentation_rows(
    results: Sequence[ConversionResult],
    tz: Optional[tzinfo] = None,
) -> List[PresentationRow]:
    """
    Convert engine results into UI rows, keeping their order.

    Args:
        results: Conversion results
        tz: Timezone for the display time (defaults to the local timezone)

    Returns:
        List of PresentationRow
    """
    return [
        PresentationRow(
            currency_code=r.currency,
            formatted_value=format_value(r.value),
            change_percent=r.change_percent,
            is_positive_trend=r.is_positive_trend,
            display_timestamp=_fmt_time(r.display_timestamp, tz),
        )
        for r in results
    ]


def status_line(
    state: AppState,
    now: datetime,
    lang: Optional[str] = None,
    tz: Optional[tzinfo] = None,
) -> str:
    """
    Build 'Updated: <api time> | Next: <next business day>'.

    Args:
        state: Live application state
        now: Current local time
        lang: Optional language override
        tz: Timezone for the API time (defaults to the local timezone)
    """
    updated = translate(
        "updated_line", lang=lang,
        when=format_long_date(state.api_timestamp.astimezone(tz), lang=lang),
    )
    upcoming = translate(
        "next_line", lang=lang,
        when=format_long_date(next_update_date(now), lang=lang, with_year=False, with_time=False),
    )
    return f"{updated} | {upcoming}"


def result_lines(rows: Sequence[PresentationRow], lang: Optional[str] = None) -> str:
    """
    Render rows as plain text, one per line, followed by the simulated-trend note.

    Returns:
        Multi-line string, or the 'enter an amount' hint when there are no rows
    """
    if not rows:
        return translate("no_results", lang=lang)

    lines = []
    for row in rows:
        currency = CURRENCIES[row.currency_code]
        arrow = "▲" if row.is_positive_trend else "▼"
        lines.append(
            f"{currency.flag} {row.currency_code}  {row.formatted_value:>18}  "
            f"{arrow} {_fmt_pct(row.change_percent):>8}  🕒 {row.display_timestamp}  {currency.name}"
        )
    lines.append(translate("simulated_trend", lang=lang))
    return "\n".join(lines)


def chart_lines(series: ChartSeries, lang: Optional[str] = None) -> str:
    """Render the simulated chart series as labelled text lines."""
    lines = [translate(
        "chart_label", lang=lang, base=series.base, target=series.target, days=len(series.points)
    )]
    for point in series.points:
        lines.append(f"{point.day.isoformat()}  {format_value(point.value, decimals=4)}")
    return "\n".join(lines)
