"""
Naming — action names and export file names.

Convention:
  action name → ``Export {Plural(label)}``
  file name   → ``{Plural(label)}_{MM_DD_YYYY[_HH_MM]}.xlsx``
"""

from __future__ import annotations

import re
from datetime import datetime
from typing import Optional

from resource_export.core.config import settings
from resource_export.services.export.export import XLSX_EXTENSION

_IRREGULAR = {
    "child": "children",
    "person": "people",
    "man": "men",
    "woman": "women",
    "mouse": "mice",
    "goose": "geese",
    "tooth": "teeth",
    "foot": "feet",
    "ox": "oxen",
    "leaf": "leaves",
    "life": "lives",
    "knife": "knives",
    "wife": "wives",
    "half": "halves",
    "criterion": "criteria",
    "datum": "data",
}

_UNCOUNTABLE = {
    "audio", "data", "equipment", "feedback", "information", "metadata",
    "money", "news", "series", "species", "software", "hardware", "staff",
}


def _match_case(word: str, plural: str) -> str:
    if word.isupper():
        return plural.upper()
    if word[:1].isupper():
        return plural[:1].upper() + plural[1:]
    return plural


def pluralize(label: str) -> str:
    """
    English plural of the last word of *label*.

    ``User`` → ``Users``, ``Category`` → ``Categories``,
    ``OrderBox`` → ``OrderBoxes``, ``Person`` → ``People``.
    """
    if not label:
        return label
    # Split off the trailing word of CamelCase / snake_case / spaced labels.
    match = re.search(r"([A-Z]?[a-z0-9]+|[A-Z]+)$", label)
    if not match:
        return label
    head, word = label[: match.start()], match.group(1)
    lower = word.lower()

    if lower in _UNCOUNTABLE:
        plural = lower
    elif lower in _IRREGULAR:
        plural = _IRREGULAR[lower]
    elif re.search(r"[^aeiou]y$", lower):
        plural = lower[:-1] + "ies"
    elif re.search(r"(s|x|z|ch|sh)$", lower):
        plural = lower + "es"
    else:
        plural = lower + "s"

    return head + _match_case(word, plural)


def action_name(resource_label: str) -> str:
    return f"Export {pluralize(resource_label)}"


def generate_file_name(
    resource_label: str,
    override: Optional[str] = None,
    now: Optional[datetime] = None,
) -> str:
    """File name shown to the user; ``.xlsx`` is always appended."""
    if override:
        stem = override
    else:
        stamp = (now or datetime.now()).strftime(settings.filename_date_format)
        stem = f"{pluralize(resource_label)}_{stamp}"
    return stem + XLSX_EXTENSION


def export_path(file_name: str) -> str:
    """Disk-relative path of *file_name* under the exports directory."""
    return f"{settings.EXPORTS_DIR.strip('/')}/{file_name}"
