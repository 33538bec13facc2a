# src/ratecard/shared/language.py
"""
Language Management - Multi-language Support

This module provides the current display language, translation of notices
and labels, and long-form date rendering for the status line.

Files that USE this module:
- ratecard.application.controller (translate for refresh notices)
- ratecard.adapters.formatting.formatter (translate, format_long_date)
- ratecard.app (set_language from the --lang flag)

Files that this module USES:
- ratecard.config (default language, loaded lazily)
"""
import logging
from datetime import datetime
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

# Language constants
LANG_ENGLISH = "en"
LANG_SPANISH = "es"
SUPPORTED_LANGUAGES = (LANG_ENGLISH, LANG_SPANISH)

TRANSLATIONS: Dict[str, Dict[str, str]] = {
    LANG_ENGLISH: {
        "rates_updated": "Rates updated",
        "offline_mode": "Offline mode: using estimated rates.",
        "market_closed": "Market closed. Next update: Monday",
        "refresh_in_flight": "A refresh is already running",
        "updated_line": "Updated: {when}",
        "next_line": "Next: {when}",
        "simulated_trend": "Trends compare against simulated previous rates, not market history.",
        "chart_label": "{base} vs {target} (last {days} days, simulated)",
        "no_results": "Enter an amount to see conversions.",
    },
    LANG_SPANISH: {
        "rates_updated": "Tasas actualizadas",
        "offline_mode": "Modo Offline: Usando tasas estimadas.",
        "market_closed": "Mercado cerrado. Próxima actualización: Lunes",
        "refresh_in_flight": "Ya hay una actualización en curso",
        "updated_line": "Actualizado: {when}",
        "next_line": "Próxima: {when}",
        "simulated_trend": "Las tendencias comparan contra tasas previas simuladas, no historial de mercado.",
        "chart_label": "{base} vs {target} (Últimos {days} días, simulado)",
        "no_results": "Ingresa un monto para ver las conversiones.",
    },
}

_WEEKDAYS = {
    LANG_ENGLISH: ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"],
    LANG_SPANISH: ["lunes", "martes", "miércoles", "jueves", "viernes", "sábado", "domingo"],
}

_MONTHS = {
    LANG_ENGLISH: ["January", "February", "March", "April", "May", "June", "July",
                   "August", "September", "October", "November", "December"],
    LANG_SPANISH: ["enero", "febrero", "marzo", "abril", "mayo", "junio", "julio",
                   "agosto", "septiembre", "octubre", "noviembre", "diciembre"],
}


class LanguageManager:
    """Holds the active display language."""

    def __init__(self, language: Optional[str] = None):
        if language is None:
            from ratecard.config import settings
            language = settings.default_language
        self._current_language: str = language if language in SUPPORTED_LANGUAGES else LANG_SPANISH

    def get_language(self) -> str:
        return self._current_language

    def set_language(self, lang: str) -> bool:
        """
        Set the active language.

        Args:
            lang: Language code ('en' or 'es')

        Returns:
            True if language was set, False if the code is not supported
        """
        if lang not in SUPPORTED_LANGUAGES:
            logger.warning("Invalid language code: %s", lang)
            return False
        self._current_language = lang
        return True

    def translate(self, key: str, lang: Optional[str] = None, **kwargs: Any) -> str:
        """
        Translate a message key with optional parameters.

        Args:
            key: Translation key
            lang: Optional language override
            **kwargs: Parameters to format into translation

        Returns:
            Translated and formatted string, or key if translation not found
        """
        lang_dict = TRANSLATIONS.get(lang or self._current_language, TRANSLATIONS[LANG_ENGLISH])
        template = lang_dict.get(key, key)
        try:
            return template.format(**kwargs)
        except (KeyError, IndexError) as e:
            logger.error("Translation format error for key %s: %s", key, e)
            return template


_manager: Optional[LanguageManager] = None


def _get_manager() -> LanguageManager:
    global _manager
    if _manager is None:
        _manager = LanguageManager()
    return _manager


def get_language() -> str:
    return _get_manager().get_language()


def set_language(lang: str) -> bool:
    return _get_manager().set_language(lang)


def translate(key: str, lang: Optional[str] = None, **kwargs: Any) -> str:
    return _get_manager().translate(key, lang=lang, **kwargs)


def format_long_date(
    when: datetime,
    lang: Optional[str] = None,
    with_year: bool = True,
    with_time: bool = True,
) -> str:
    """
    Render a date the way the status line shows it.

    Examples:
        es: 'lunes, 19 de octubre de 2026, 14:05'
        en: 'Monday, October 19, 2026, 14:05'

    Args:
        when: Date/time to render
        lang: Optional language override (defaults to the active language)
        with_year: Include the year
        with_time: Include HH:MM

    Returns:
        Localised long date string
    """
    lang = lang if lang in SUPPORTED_LANGUAGES else get_language()
    weekday = _WEEKDAYS[lang][when.weekday()]
    month = _MONTHS[lang][when.month - 1]

    if lang == LANG_SPANISH:
        text = f"{weekday}, {when.day} de {month}"
        if with_year:
            text += f" de {when.year}"
    else:
        text = f"{weekday}, {month} {when.day}"
        if with_year:
            text += f", {when.year}"

    if with_time:
        text += f", {when:%H:%M}"
    return text
