from __future__ import annotations

import re
import unicodedata
from typing import Any

_WHITESPACE = re.compile(r"\s+")


def normalize_text(value: Any) -> str:
    """
    Comparison key for free text typed into a spreadsheet.

    Lower-cases, strips accents (NFD + drop combining marks), trims and
    collapses whitespace runs. None and empty input give "".
    """
    if value is None:
        return ""
    text = str(value).lower()
    text = unicodedata.normalize("NFD", text)
    text = "".join(ch for ch in text if not unicodedata.combining(ch))
    return _WHITESPACE.sub(" ", text.strip())
