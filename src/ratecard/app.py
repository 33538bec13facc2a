# src/ratecard/app.py
"""
Application Entry Point - Command Line Composition Root

This module wires settings, logging, storage, provider and controller, then
runs one session of the widget from the command line:

    ratecard 1,250.50 --base EUR
    ratecard 100 --refresh --lang en --chart

Files that USE this module:
- ratecard.__main__ (python -m ratecard)
- pyproject.toml console script 'ratecard'

Files that this module USES:
- ratecard.shared.logging_conf (setup_logging)
- ratecard.config (settings)
- ratecard.adapters.* (JsonFileStore, RateStore, ExchangeRateApiProvider, formatter)
- ratecard.application (RateController)
"""

from __future__ import annotations  # Enable postponed evaluation of annotations for forward references

import argparse  # Command line parsing
import asyncio  # Drives the controller's refresh coroutines
import logging  # Standard library for logging messages and errors
from typing import Optional, Sequence

from ratecard.adapters.formatting.formatter import chart_lines, presentation_rows, result_lines, status_line
from ratecard.adapters.persistence.key_value import JsonFileStore
from ratecard.adapters.persistence.rate_store import RateStore
from ratecard.adapters.providers.exchangerate_api import ExchangeRateApiProvider
from ratecard.application.controller import RateController
from ratecard.application.trend import TrendEstimator
from ratecard.domain.models import CURRENCY_ORDER
from ratecard.shared.language import set_language
from ratecard.shared.logging_conf import setup_logging
from ratecard.shared.validators import format_amount_input


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ratecard",
        description="Convert an amount into USD, VES, EUR and COP with trend indicators.",
    )
    parser.add_argument("amount", nargs="?", default="", help="Amount to convert, e.g. 1,250.50")
    parser.add_argument("--base", choices=CURRENCY_ORDER, help="Base currency (remembered for next time)")
    parser.add_argument("--refresh", action="store_true", help="Force a refresh (weekdays only)")
    parser.add_argument("--chart", action="store_true", help="Print the simulated recent-rate series")
    parser.add_argument("--lang", choices=["en", "es"], help="Display language")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING)")
    return parser


def build_controller() -> RateController:
    """Wire the controller from settings."""
    from ratecard.config import settings

    store = RateStore(
        JsonFileStore(settings.state_file),
        state_key=settings.state_key,
        base_currency_key=settings.base_currency_key,
    )
    return RateController(
        store=store,
        provider=ExchangeRateApiProvider(),
        trend=TrendEstimator(settings.trend_jitter_pct, settings.history_jitter_pct),
        default_base=settings.default_base_currency,
        history_days=settings.history_days,
    )


async def run(args: argparse.Namespace, controller: RateController) -> int:
    outcome = await controller.startup()
    notices = [outcome.notice] if outcome.notice else []

    if args.refresh:
        manual = await controller.manual_refresh()
        if manual.notice:
            notices.append(manual.notice)

    if args.base:
        controller.set_base_currency(args.base)

    print(status_line(controller.state, controller.clock.now()))
    for notice in notices:
        print(f"• {notice}")

    amount_text = format_amount_input(args.amount)
    if amount_text:
        print(f"{amount_text} {controller.base_currency}")
    print(result_lines(presentation_rows(controller.convert(amount_text))))

    if args.chart:
        print(chart_lines(controller.chart_series()))
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """
    Parse arguments, configure logging and run one widget session.

    Returns:
        Process exit code (always 0: every failure degrades to cached or default rates)
    """
    from ratecard.config import settings

    args = build_parser().parse_args(argv)
    setup_logging(
        level=getattr(logging, str(args.log_level).upper(), logging.WARNING),
        log_to_stdout=settings.log_stdout,
        log_file=settings.log_file,
        log_dir=settings.log_dir,
        max_bytes=settings.log_max_bytes,
        backup_count=settings.log_backup_count,
    )
    if args.lang:
        set_language(args.lang)

    return asyncio.run(run(args, build_controller()))


if __name__ == "__main__":
    raise SystemExit(main())
