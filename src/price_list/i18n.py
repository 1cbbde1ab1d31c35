"""UI text lookup keyed by a two-letter language code."""

from __future__ import annotations

import os
from typing import Any, Callable, Union

Message = Union[str, Callable[[str], str]]

DEFAULT_LANGUAGE = os.getenv("PRICE_LIST_LANGUAGE", "en").lower()

ENGLISH: dict[str, Message] = {
    "Search": "Search",
    "search placeholder": "Product search, min. 3 characters",
    "Organic only": "Organic only",
    "Language": "Language",
    "Price": "Price",
    "currency symbol": "€",
    "Store": "Store",
    "Name": "Name",
    "Results": "Results",
    "Chart": "Chart",
    "Sales price": "Sales price",
    "Unit price": "Unit price",
    "Sort by": "Sort by",
    "Price ascending": "Price ascending",
    "Price descending": "Price descending",
    "Quantity ascending": "Quantity ascending",
    "Quantity descending": "Quantity descending",
    "Store & name": "Store & name",
    "Name similarity": "Name similarity",
    "Show more": "Show more",
    "Price history": "Price history",
    "No data selected": "No data selected",
    "Price sum": "Price sum",
    "Price sum per store": "Price sum per store",
    "Today's prices only": "Today's prices only",
    "Percentage change": "Change as %",
    "Price sum for store": lambda store: "Price sum " + store,
    "% change since": lambda since: "% change since " + since,
    "Share link": "Share link",
    "Changed on:": "Changed on:",
    "More expensive": "More expensive",
    "Cheaper": "Cheaper",
    "Unavailable": "Unavailable",
}

GERMAN: dict[str, Message] = {
    "Search": "Suche",
    "search placeholder": "Produkt Suche, min. 3 Zeichen",
    "Organic only": "Nur Bio",
    "Language": "Sprache",
    "Price": "Preis",
    "currency symbol": "€",
    "Store": "Kette",
    "Name": "Name",
    "Results": "Resultate",
    "Chart": "Diagramm",
    "Sales price": "Verkaufspreis",
    "Unit price": "Mengenpreis",
    "Sort by": "Sortieren nach",
    "Price ascending": "Preis aufsteigend",
    "Price descending": "Preis absteigend",
    "Quantity ascending": "Menge aufsteigend",
    "Quantity descending": "Menge absteigend",
    "Store & name": "Kette & Name",
    "Name similarity": "Namensähnlichkeit",
    "Show more": "Mehr anzeigen",
    "Price history": "Preisverlauf",
    "No data selected": "Keine Daten ausgewählt",
    "Price sum": "Preissumme",
    "Price sum per store": "Preissumme pro Kette",
    "Today's prices only": "Nur heutige Preise",
    "Percentage change": "Änderungen in %",
    "Price sum for store": lambda store: "Preissumme " + store,
    "% change since": lambda since: "% Änderung seit " + since,
    "Share link": "Link teilen",
    "Changed on:": "Geändert am:",
    "More expensive": "Teurer",
    "Cheaper": "Billiger",
    "Unavailable": "Nicht verfügbar",
}

TRANSLATIONS: dict[str, dict[str, Message]] = {"en": ENGLISH, "de": GERMAN}

_language = DEFAULT_LANGUAGE if DEFAULT_LANGUAGE in TRANSLATIONS else "en"


def set_language(code: str) -> None:
    global _language
    code = code.split("-")[0].lower()
    _language = code if code in TRANSLATIONS else "en"


def get_language() -> str:
    return _language


def i18n(key: str, *args: Any, language: str | None = None) -> str:
    """Look up ``key``; parameterized entries take one string argument."""
    table = TRANSLATIONS.get(language or _language, ENGLISH)
    message = table.get(key, ENGLISH.get(key, key))
    if callable(message):
        return message(*[str(arg) for arg in args])
    return message
