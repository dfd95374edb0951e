"""Optional clean-up applied to input words before layout."""

from __future__ import annotations

import re
import unicodedata

NON_LETTER_RE = re.compile(r"[^\w]|[\d_]")


def clean_word(text: str) -> str:
    """Return ``text`` uppercased with accents, digits, spaces and punctuation removed.

    ``"Crème brûlée"`` becomes ``"CREMEBRULEE"``. Letters without an ASCII
    decomposition (Greek, Cyrillic) are kept and only uppercased.
    """

    if not text:
        return ""
    decomposed = unicodedata.normalize("NFKD", text)
    stripped = "".join(char for char in decomposed if not unicodedata.combining(char))
    return NON_LETTER_RE.sub("", stripped).upper()


__all__ = ["clean_word"]
