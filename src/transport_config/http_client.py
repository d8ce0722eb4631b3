from __future__ import annotations
import logging
from collections.abc import Mapping
from typing import Any, Dict

import httpx

from .config import ProviderConfig, TransportOptions

log = logging.getLogger("transport.http")


def _number(options: TransportOptions, name: str, types: Any, default: Any) -> Any:
    value = options.get_property(name, types, default)
    # bool is an int subclass but never a count or a duration
    if isinstance(value, bool):
        log.debug("numeric property got bool | name=%s", name)
        return default
    return value


def client_options(options: TransportOptions) -> Dict[str, Any]:
    """Translate a transport snapshot into ``httpx.AsyncClient`` keyword arguments.

    Provider-specific keys are probed with the typed accessor, so a missing
    or mistyped property silently falls back to the default shown here.
    """
    read_s = _number(options, "timeout_s", (int, float), 8.0)
    timeout = httpx.Timeout(read_s, connect=options.handshake_timeout_in_millis / 1000)
    limits = httpx.Limits(
        max_connections=_number(options, "max_connections", int, 100),
        max_keepalive_connections=_number(options, "max_keepalive_connections", int, 20),
    )
    kwargs: Dict[str, Any] = {
        "timeout": timeout,
        "limits": limits,
        "verify": options.get_property("verify_tls", bool, True),
        "follow_redirects": options.get_property("follow_redirects", bool, True),
    }
    headers = options.get_property("extra_headers", Mapping, None)
    if headers:
        kwargs["headers"] = dict(headers)
    if options.socket_channel_factory is not None:
        # used directly; the caller keeps ownership
        kwargs["transport"] = options.socket_channel_factory
    return kwargs


class HttpClient:
    """Asynchronous HTTP client wrapper built from a provider configuration."""

    def __init__(self, config: ProviderConfig | TransportOptions) -> None:
        self.options = config.freeze() if isinstance(config, ProviderConfig) else config
        kwargs = client_options(self.options)
        log.info(
            "client init | connect_timeout=%.3fs | custom_transport=%s | zero_copy=%s",
            kwargs["timeout"].connect,
            "transport" in kwargs,
            not self.options.disable_zero_copy,
        )
        self._client = httpx.AsyncClient(**kwargs)

    async def get(self, url: str) -> httpx.Response:
        return await self._client.get(url)

    async def post_json(self, url: str, payload: Dict[str, Any]) -> httpx.Response:
        return await self._client.post(url, json=payload)

    async def aclose(self) -> None:
        await self._client.aclose()
