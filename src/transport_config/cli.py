from __future__ import annotations
import json
import logging
from typing import Any, List, Optional

import typer
from rich.console import Console

from .config import ProviderConfig
from .http_client import client_options
from .models import describe
from .reporter import Reporter
from .util import parse_property

app = typer.Typer(add_completion=False, no_args_is_help=True)
_default = ProviderConfig.default_for


def _config(properties: Optional[List[str]], **typed: Any) -> ProviderConfig:
    config = ProviderConfig(**typed)
    for pair in properties or []:
        try:
            name, value = parse_property(pair)
        except ValueError as e:
            raise typer.BadParameter(str(e), param_hint="--property")
        config.add_property(name, value)
    return config


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )


@app.callback()
def main() -> None:
    pass


@app.command("show")
def show(
    dead_lock_checker: bool = typer.Option(_default("use_dead_lock_checker"), "--dead-lock-checker"),
    max_initial_line_length: int = typer.Option(_default("http_client_codec_max_initial_line_length"), "--max-initial-line-length"),
    max_header_size: int = typer.Option(_default("http_client_codec_max_header_size"), "--max-header-size"),
    max_chunk_size: int = typer.Option(_default("http_client_codec_max_chunk_size"), "--max-chunk-size"),
    disable_zero_copy: bool = typer.Option(_default("disable_zero_copy"), "--disable-zero-copy"),
    handshake_timeout: int = typer.Option(_default("handshake_timeout_in_millis"), "--handshake-timeout", help="TLS handshake timeout in milliseconds."),
    chunked_file_chunk_size: int = typer.Option(_default("chunked_file_chunk_size"), "--chunked-file-chunk-size"),
    properties: Optional[List[str]] = typer.Option(None, "--property", "-p", help="Provider property as name=value. Repeatable."),
    as_json: bool = typer.Option(False, "--json", help="Print JSON instead of tables."),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print the effective transport configuration."""
    _setup_logging(verbose)
    config = _config(
        properties,
        use_dead_lock_checker=dead_lock_checker,
        http_client_codec_max_initial_line_length=max_initial_line_length,
        http_client_codec_max_header_size=max_header_size,
        http_client_codec_max_chunk_size=max_chunk_size,
        disable_zero_copy=disable_zero_copy,
        handshake_timeout_in_millis=handshake_timeout,
        chunked_file_chunk_size=chunked_file_chunk_size,
    )
    typed, props = describe(config)
    if as_json:
        typer.echo(json.dumps({"typed": typed.as_dict(), "properties": props.as_dict()}, indent=2))
        return
    reporter = Reporter(Console())
    reporter.section(typed)
    reporter.section(props)
    reporter.summary([typed, props])


@app.command("client-options")
def show_client_options(
    handshake_timeout: int = typer.Option(_default("handshake_timeout_in_millis"), "--handshake-timeout", help="TLS handshake timeout in milliseconds."),
    properties: Optional[List[str]] = typer.Option(None, "--property", "-p", help="Provider property as name=value. Repeatable."),
    as_json: bool = typer.Option(False, "--json"),
    verbose: bool = typer.Option(False, "--verbose", "-v"),
):
    """Print the httpx client options a provider derives from the configuration."""
    _setup_logging(verbose)
    config = _config(properties, handshake_timeout_in_millis=handshake_timeout)
    kwargs = client_options(config.freeze())
    if as_json:
        timeout = kwargs["timeout"]
        limits = kwargs["limits"]
        out = {
            "connect_timeout_s": timeout.connect,
            "read_timeout_s": timeout.read,
            "max_connections": limits.max_connections,
            "max_keepalive_connections": limits.max_keepalive_connections,
            "verify": kwargs["verify"],
            "follow_redirects": kwargs["follow_redirects"],
            "headers": kwargs.get("headers", {}),
        }
        typer.echo(json.dumps(out, indent=2))
        return
    Reporter(Console()).options(kwargs)


if __name__ == "__main__":
    app()
