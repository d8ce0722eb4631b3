from __future__ import annotations
import logging
import threading
from typing import Any, Dict, List, Optional, Tuple, Type, Union

log = logging.getLogger("transport.properties")

TypeSpec = Union[Type[Any], Tuple[Type[Any], ...]]


def pick(name: str, value: Any, expected_type: TypeSpec, default: Any) -> Any:
    """Return ``value`` only if it is an instance of ``expected_type``.

    Absent entries, stored ``None`` and mismatched types all fall back to
    ``default``; this never raises.
    """
    if value is None:
        return default
    try:
        matched = isinstance(value, expected_type)
    except TypeError:
        # subscripted generics, non-runtime protocols
        log.debug("typed lookup unusable type | name=%s | type=%r", name, expected_type)
        return default
    if matched:
        return value
    log.debug("typed lookup mismatch | name=%s | got=%s", name, type(value).__name__)
    return default


class PropertyStore:
    """Thread-safe name -> value mapping for provider-specific settings.

    Every operation is atomic on its own. Nothing is atomic across calls:
    a reader racing a writer sees either the old or the new value.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._data: Dict[str, Any] = {}

    def put(self, name: str, value: Any) -> None:
        with self._lock:
            self._data[name] = value
        log.debug("put | name=%s | type=%s", name, type(value).__name__)

    def get(self, name: str, default: Any = None) -> Any:
        with self._lock:
            return self._data.get(name, default)

    def get_typed(self, name: str, expected_type: TypeSpec, default: Any = None) -> Any:
        with self._lock:
            value = self._data.get(name)
        return pick(name, value, expected_type, default)

    def pop(self, name: str) -> Optional[Any]:
        with self._lock:
            value = self._data.pop(name, None)
        log.debug("pop | name=%s", name)
        return value

    def items(self) -> List[Tuple[str, Any]]:
        # snapshot, insertion order
        with self._lock:
            return list(self._data.items())

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._data

    def __len__(self) -> int:
        with self._lock:
            return len(self._data)
