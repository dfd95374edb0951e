"""Word list input helpers."""

from __future__ import annotations

from pathlib import Path
from typing import List


def parse_words_file(path: Path | str) -> List[str]:
    """Read words from a file, one entry per line. Blank lines and # comments are skipped."""
    entries: List[str] = []
    for line in Path(path).read_text(encoding="utf-8").splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        entries.append(line)
    return entries
