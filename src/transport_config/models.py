from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List

from .config import ProviderConfig


class Source(str, Enum):
    DEFAULT = "default"
    OVERRIDE = "override"
    PROPERTY = "property"


@dataclass
class SettingRow:
    """One displayed setting."""
    name: str
    value: Any
    source: Source = Source.DEFAULT

    def display_value(self) -> str:
        if self.value is None:
            return "unset"
        if isinstance(self.value, (bool, int, float, str)):
            return str(self.value)
        return type(self.value).__name__


@dataclass
class Section:
    """Titled group of rows."""
    title: str
    rows: List[SettingRow] = field(default_factory=list)

    def count(self, source: Source) -> int:
        return sum(1 for r in self.rows if r.source == source)

    def as_dict(self) -> Dict[str, Any]:
        return {r.name: {"value": r.display_value(), "source": r.source.value} for r in self.rows}


def describe(config: ProviderConfig) -> List[Section]:
    overridden = config.overridden()
    typed = Section(title="Typed settings")
    for name, value in config.typed_settings().items():
        src = Source.OVERRIDE if name in overridden else Source.DEFAULT
        typed.rows.append(SettingRow(name=name, value=value, source=src))
    props = Section(
        title="Dynamic properties",
        rows=[SettingRow(name=n, value=v, source=Source.PROPERTY) for n, v in config.properties_set()],
    )
    return [typed, props]
