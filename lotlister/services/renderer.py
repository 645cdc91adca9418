from __future__ import annotations

import re
from collections.abc import Mapping

"""Template rendering for listings.

Two passes over a fresh copy of the template:

1. For every column of the row, in column order, replace each literal
   ``{Column}`` with the cell value (trimmed), or FALLBACK_TEXT when blank.
2. Replace any placeholder still left (columns the row does not have) with
   FALLBACK_TEXT.

Replacement in pass 1 is plain ``str.replace``: exact and case-sensitive.
Nothing is escaped.
"""

__all__ = [
    "FALLBACK_TEXT",
    "PLACEHOLDER_PATTERN",
    "substitution_value",
    "render",
]

FALLBACK_TEXT = "Not specified"

# brace, one or more non-brace characters, closing brace
PLACEHOLDER_PATTERN = re.compile(r"\{[^{}]+\}")


def substitution_value(raw: str | None) -> str:
    if raw is None:
        return FALLBACK_TEXT
    value = str(raw).strip()
    return value if value else FALLBACK_TEXT


def render(template: str, fields: Mapping[str, str | None]) -> str:
    """Render ``template`` for one row.

    >>> render("Lot {LotNo}: {Color}", {"LotNo": " 7 ", "ModelNo": "X"})
    'Lot 7: Not specified'
    """
    text = template
    for name, raw in fields.items():
        text = text.replace("{" + name + "}", substitution_value(raw))
    return PLACEHOLDER_PATTERN.sub(FALLBACK_TEXT, text)
