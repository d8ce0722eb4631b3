from __future__ import annotations
import logging
from concurrent.futures import Executor
from dataclasses import dataclass, field, fields
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Set, Tuple

from .properties import PropertyStore, TypeSpec, pick
from .protocols import ChannelPool, Timer

log = logging.getLogger("transport.config")


@dataclass(frozen=True)
class TransportOptions:
    """Immutable snapshot handed to a provider at construction time."""

    use_dead_lock_checker: bool
    boss_executor_service: Optional[Executor]
    http_client_codec_max_initial_line_length: int
    http_client_codec_max_header_size: int
    http_client_codec_max_chunk_size: int
    socket_channel_factory: Optional[Any]
    disable_zero_copy: bool
    timer: Optional[Timer]
    handshake_timeout_in_millis: int
    channel_pool: Optional[ChannelPool]
    chunked_file_chunk_size: int
    properties: Mapping[str, Any] = field(default_factory=lambda: MappingProxyType({}))

    def get_property(self, name: str, expected_type: Optional[TypeSpec] = None, default: Any = None) -> Any:
        value = self.properties.get(name)
        if expected_type is None:
            return default if name not in self.properties else value
        return pick(name, value, expected_type, default)

    def has_property(self, name: str) -> bool:
        return name in self.properties


@dataclass
class ProviderConfig:
    """Transport tuning knobs for the async HTTP provider.

    Two halves share this object:

    * typed fields with fixed defaults, assigned as plain attributes. Values
      are never validated; ``None`` references mean "let the provider pick".
      Assignment is not synchronized, so finish it before sharing the object.
    * a thread-safe property store for provider-specific keys without a
      typed field, read back with :meth:`get_property`.

    The object only holds references to executors, timers, pools and
    factories. Their lifecycle belongs to whoever created them.
    """

    use_dead_lock_checker: bool = False
    boss_executor_service: Optional[Executor] = None
    http_client_codec_max_initial_line_length: int = 4096
    http_client_codec_max_header_size: int = 8192
    http_client_codec_max_chunk_size: int = 8192
    socket_channel_factory: Optional[Any] = None
    disable_zero_copy: bool = False
    timer: Optional[Timer] = None
    handshake_timeout_in_millis: int = 10000
    channel_pool: Optional[ChannelPool] = None
    chunked_file_chunk_size: int = 8192
    _properties: PropertyStore = field(default_factory=PropertyStore, init=False, repr=False, compare=False)

    # ---------- dynamic properties ----------

    def add_property(self, name: str, value: Any) -> "ProviderConfig":
        """Insert or overwrite a property; returns ``self`` for chaining."""
        self._properties.put(name, value)
        return self

    def get_property(self, name: str, expected_type: Optional[TypeSpec] = None, default: Any = None) -> Any:
        """Look up a property.

        Without ``expected_type`` the stored value is returned as is, or
        ``default`` when the name is absent. With ``expected_type`` the value
        is returned only if ``isinstance(value, expected_type)`` holds;
        absence, a stored ``None`` or a mismatch all yield ``default``.
        """
        if expected_type is None:
            return self._properties.get(name, default)
        return self._properties.get_typed(name, expected_type, default)

    def has_property(self, name: str) -> bool:
        return name in self._properties

    def remove_property(self, name: str) -> Optional[Any]:
        """Delete a property and return what was stored, if anything."""
        return self._properties.pop(name)

    def properties_set(self) -> List[Tuple[str, Any]]:
        """Point-in-time ``(name, value)`` pairs in insertion order."""
        return self._properties.items()

    # ---------- typed settings ----------

    @classmethod
    def typed_field_names(cls) -> List[str]:
        return [f.name for f in fields(cls) if f.init]

    @classmethod
    def default_for(cls, name: str) -> Any:
        for f in fields(cls):
            if f.init and f.name == name:
                return f.default
        raise KeyError(name)

    def typed_settings(self) -> Dict[str, Any]:
        # references are returned as-is, never copied
        return {name: getattr(self, name) for name in self.typed_field_names()}

    def overridden(self) -> Set[str]:
        out: Set[str] = set()
        for name, value in self.typed_settings().items():
            default = self.default_for(name)
            if value is not default and value != default:
                out.add(name)
        return out

    def freeze(self) -> TransportOptions:
        """Snapshot for handoff; later changes here do not leak into it."""
        props = dict(self.properties_set())
        log.debug("freeze | overridden=%s | properties=%d", sorted(self.overridden()), len(props))
        return TransportOptions(properties=MappingProxyType(props), **self.typed_settings())
