from __future__ import annotations
from typing import Any, Tuple


def coerce_value(raw: str) -> Any:
    """Turn a command-line literal into bool, int, float or str."""
    low = raw.strip().lower()
    if low in ("true", "yes", "on"):
        return True
    if low in ("false", "no", "off"):
        return False
    for conv in (int, float):
        try:
            return conv(raw)
        except ValueError:
            pass
    return raw


def parse_property(pair: str) -> Tuple[str, Any]:
    """Split ``name=value``; raises ValueError when the name is missing."""
    name, sep, raw = pair.partition("=")
    name = name.strip()
    if not sep or not name:
        raise ValueError(f"expected name=value, got {pair!r}")
    return name, coerce_value(raw)
