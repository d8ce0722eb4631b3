from __future__ import annotations
from typing import Any, Callable, List, Optional, Protocol, Tuple, runtime_checkable


@runtime_checkable
class AsyncHttpProviderConfig(Protocol):
    """Extension point every provider configuration exposes."""

    def add_property(self, name: str, value: Any) -> "AsyncHttpProviderConfig":
        ...

    def get_property(self, name: str, expected_type: Any = None, default: Any = None) -> Any:
        ...

    def remove_property(self, name: str) -> Optional[Any]:
        ...

    def properties_set(self) -> List[Tuple[str, Any]]:
        ...


@runtime_checkable
class Timer(Protocol):
    """Scheduler shared by the provider for idle and request timeouts."""

    def new_timeout(self, task: Callable[[], Any], delay_ms: int) -> Any:
        ...

    def stop(self) -> Any:
        ...


@runtime_checkable
class ChannelPool(Protocol):
    """Keyed cache of reusable connections."""

    def offer(self, uri: str, channel: Any) -> bool:
        ...

    def poll(self, uri: str) -> Optional[Any]:
        ...

    def remove_all(self, channel: Any) -> bool:
        ...

    def can_cache_connection(self) -> bool:
        ...

    def destroy(self) -> None:
        ...
