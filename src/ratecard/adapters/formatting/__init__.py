# src/ratecard/adapters/formatting/__init__.py
"""
Formatting Adapters - Output Presentation

Turns conversion results and state into UI rows and text.
"""

from ratecard.adapters.formatting.formatter import (
    PresentationRow,
    chart_lines,
    format_value,
    presentation_rows,
    result_lines,
    status_line,
)

__all__ = [
    "PresentationRow",
    "chart_lines",
    "format_value",
    "presentation_rows",
    "result_lines",
    "status_line",
]
