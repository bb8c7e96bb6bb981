from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"')


def unquote(s: str) -> str:
    """Strip one pair of matching surrounding quotes (single or double).

    Input is returned unchanged when only one end is quoted or the quote characters differ.
    """
    if len(s) >= 2 and s[0] in _QUOTES and s[0] == s[-1]:
        return s[1:-1]
    return s


def ensure_outdir(path: str | Path) -> Path:
    p = Path(path)
    p.mkdir(parents=True, exist_ok=True)
    return p


def write_json(path: str | Path, obj: Any) -> None:
    with open(path, "wt", encoding="utf-8") as f:
        json.dump(obj, f, indent=2, sort_keys=True)
