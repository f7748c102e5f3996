"""Locale-aware number formatting for display."""

from __future__ import annotations

# (decimal separator, thousands separator)
_SEPARATORS: dict[str, tuple[str, str]] = {
    "pt-BR": (",", "."),
    "de-DE": (",", "."),
    "es-ES": (",", "."),
    "fr-FR": (",", "\u202f"),
    "en-US": (".", ","),
    "en-GB": (".", ","),
}

CURRENCY_SYMBOLS: dict[str, str] = {
    "brl": "R$",
    "usd": "$",
    "eur": "€",
    "gbp": "£",
    "jpy": "¥",
}

MISSING = "-"


def format_number(value: float | None, locale: str = "pt-BR", decimals: int = 2) -> str:
    """Format ``value`` with grouped thousands and fixed decimals.

    >>> format_number(1234.5)
    '1.234,50'
    >>> format_number(1234.5, "en-US")
    '1,234.50'
    """
    if value is None:
        return MISSING
    decimal_sep, thousands_sep = _SEPARATORS.get(locale, _SEPARATORS["en-US"])
    text = f"{value:,.{decimals}f}"
    return (
        text.replace(",", "\0")
        .replace(".", decimal_sep)
        .replace("\0", thousands_sep)
    )


def format_price(value: float | None, currency: str = "brl", locale: str = "pt-BR") -> str:
    """Format a monetary amount with its currency symbol, e.g. ``R$ 1.234,56``."""
    if value is None:
        return MISSING
    symbol = CURRENCY_SYMBOLS.get(currency.lower(), currency.upper())
    return f"{symbol} {format_number(value, locale)}"


def format_change(pct: float | None, absolute: bool = False) -> str:
    """Format a percentage change with two decimals, e.g. ``-2.35%``."""
    if pct is None:
        return MISSING
    if absolute:
        pct = abs(pct)
    return f"{pct:.2f}%"
