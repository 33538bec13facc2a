# tests/test_formatter.py
"""
Formatter Tests - Unit Tests for Presentation Rows and Status Text

Files that USE this module:
- pytest (test runner executes these tests)

Files that this module USES:
- ratecard.adapters.formatting.formatter (all formatter functions for testing)
- ratecard.domain.models (ConversionResult, AppState for test data)
"""
import pytest  # Testing framework for writing and running tests

from datetime import date, datetime, timezone  # Date/time utilities for test data

from ratecard.adapters.formatting.formatter import (  # Functions under test
    PresentationRow,
    _fmt_pct,
    chart_lines,
    format_value,
    presentation_rows,
    result_lines,
    status_line,
)
from ratecard.application.controller import ChartSeries  # Chart series input
from ratecard.application.trend import HistoryPoint  # Chart point type
from ratecard.domain.models import DEFAULT_RATES, AppState, ConversionResult  # Domain models for test data

API_TS = datetime(2026, 10, 19, 14, 5, tzinfo=timezone.utc)


class TestFormatValue:
    def test_grouping_and_decimals(self):
        assert format_value(1234567.891) == "1.234.567,89"
        assert format_value(93) == "93,00"
        assert format_value(0.005) == "0,01"

    def test_custom_decimals(self):
        assert format_value(1.07526, decimals=4) == "1,0753"


class TestFmtPct:
    def test_positive_and_zero_get_plus(self):
        assert _fmt_pct(0.5349) == "+0.53%"
        assert _fmt_pct(0) == "+0.00%"

    def test_negative(self):
        assert _fmt_pct(-1.2) == "-1.20%"


class TestPresentationRows:
    def test_rows_keep_order_and_fields(self):
        results = [
            ConversionResult("VES", 3650.0, 1.25, API_TS),
            ConversionResult("EUR", 93.0, -0.4, API_TS),
        ]
        rows = presentation_rows(results, tz=timezone.utc)

        assert rows == [
            PresentationRow("VES", "3.650,00", 1.25, True, "14:05"),
            PresentationRow("EUR", "93,00", -0.4, False, "14:05"),
        ]

    def test_empty(self):
        assert presentation_rows([]) == []


class TestStatusLine:
    def test_english_weekday(self):
        state = AppState(DEFAULT_RATES, DEFAULT_RATES, API_TS, API_TS)
        # Thursday -> next update Friday
        now = datetime(2026, 10, 22, 9, 0, tzinfo=timezone.utc)
        assert status_line(state, now, lang="en", tz=timezone.utc) == (
            "Updated: Monday, October 19, 2026, 14:05 | Next: Friday, October 23"
        )

    def test_spanish_friday_points_to_monday(self):
        state = AppState(DEFAULT_RATES, DEFAULT_RATES, API_TS, API_TS)
        now = datetime(2026, 10, 23, 9, 0, tzinfo=timezone.utc)
        assert status_line(state, now, lang="es", tz=timezone.utc) == (
            "Actualizado: lunes, 19 de octubre de 2026, 14:05 | Próxima: lunes, 26 de octubre"
        )


class TestResultLines:
    def test_no_rows_shows_hint(self):
        assert result_lines([], lang="en") == "Enter an amount to see conversions."

    def test_rows_include_arrows_and_simulated_note(self):
        rows = [
            PresentationRow("EUR", "93,00", 0.53, True, "14:05"),
            PresentationRow("COP", "390.000,00", -1.2, False, "14:05"),
        ]
        text = result_lines(rows, lang="en")
        lines = text.splitlines()

        assert len(lines) == 3
        assert "EUR" in lines[0] and "93,00" in lines[0] and "▲" in lines[0] and "+0.53%" in lines[0]
        assert "COP" in lines[1] and "▼" in lines[1] and "-1.20%" in lines[1]
        assert "simulated" in lines[2]


class TestChartLines:
    def test_label_and_points(self):
        series = ChartSeries("USD", "EUR", [
            HistoryPoint(date(2026, 10, 18), 0.931),
            HistoryPoint(date(2026, 10, 19), 0.93),
        ])
        assert chart_lines(series, lang="en").splitlines() == [
            "USD vs EUR (last 2 days, simulated)",
            "2026-10-18  0,9310",
            "2026-10-19  0,9300",
        ]
