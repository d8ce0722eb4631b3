"""Tests for the typed settings block and the frozen snapshot."""

from __future__ import annotations

import sys
from concurrent.futures import ThreadPoolExecutor

import pytest

from transport_config.config import ProviderConfig, TransportOptions
from transport_config.protocols import ChannelPool, Timer


class FakeTimer:
    def __init__(self) -> None:
        self.stopped = False

    def new_timeout(self, task, delay_ms):
        return (task, delay_ms)

    def stop(self):
        self.stopped = True


class FakePool:
    def offer(self, uri, channel):
        return True

    def poll(self, uri):
        return None

    def remove_all(self, channel):
        return False

    def can_cache_connection(self):
        return True

    def destroy(self):
        pass


class TestDefaults:
    def test_scalar_defaults(self):
        config = ProviderConfig()
        assert config.use_dead_lock_checker is False
        assert config.http_client_codec_max_initial_line_length == 4096
        assert config.http_client_codec_max_header_size == 8192
        assert config.http_client_codec_max_chunk_size == 8192
        assert config.disable_zero_copy is False
        assert config.handshake_timeout_in_millis == 10000
        assert config.chunked_file_chunk_size == 8192

    def test_reference_defaults_are_unset(self):
        config = ProviderConfig()
        assert config.boss_executor_service is None
        assert config.socket_channel_factory is None
        assert config.timer is None
        assert config.channel_pool is None

    def test_nothing_overridden_by_default(self):
        assert ProviderConfig().overridden() == set()

    def test_default_for_unknown_field(self):
        with pytest.raises(KeyError):
            ProviderConfig.default_for("no_such_field")

    def test_typed_field_names_exclude_store(self):
        names = ProviderConfig.typed_field_names()
        assert len(names) == 11
        assert "_properties" not in names


class TestRoundTrip:
    @pytest.mark.parametrize(
        "name",
        [
            "http_client_codec_max_initial_line_length",
            "http_client_codec_max_header_size",
            "http_client_codec_max_chunk_size",
            "handshake_timeout_in_millis",
            "chunked_file_chunk_size",
        ],
    )
    @pytest.mark.parametrize("value", [0, -1, 2**31 - 1, sys.maxsize])
    def test_sizes_accept_boundaries(self, name, value):
        config = ProviderConfig()
        setattr(config, name, value)
        assert getattr(config, name) == value

    @pytest.mark.parametrize("name", ["use_dead_lock_checker", "disable_zero_copy"])
    def test_toggles(self, name):
        config = ProviderConfig()
        setattr(config, name, True)
        assert getattr(config, name) is True
        assert name in config.overridden()
        setattr(config, name, False)
        assert getattr(config, name) is False

    def test_references_are_held_not_copied(self):
        executor = ThreadPoolExecutor(max_workers=1)
        timer = FakeTimer()
        pool = FakePool()
        factory = object()
        try:
            config = ProviderConfig(
                boss_executor_service=executor,
                timer=timer,
                channel_pool=pool,
                socket_channel_factory=factory,
            )
            assert config.boss_executor_service is executor
            assert config.timer is timer
            assert config.channel_pool is pool
            assert config.socket_channel_factory is factory
            assert isinstance(config.timer, Timer)
            assert isinstance(config.channel_pool, ChannelPool)
        finally:
            executor.shutdown()

    def test_setting_reference_back_to_none(self):
        config = ProviderConfig(timer=FakeTimer())
        config.timer = None
        assert config.timer is None
        assert "timer" not in config.overridden()

    def test_no_validation_on_assignment(self):
        config = ProviderConfig()
        config.http_client_codec_max_chunk_size = -8192
        config.handshake_timeout_in_millis = 0
        assert config.http_client_codec_max_chunk_size == -8192
        assert config.handshake_timeout_in_millis == 0


class TestTypedSettings:
    def test_reports_current_values(self):
        config = ProviderConfig(http_client_codec_max_header_size=16384)
        settings = config.typed_settings()
        assert settings["http_client_codec_max_header_size"] == 16384
        assert settings["http_client_codec_max_initial_line_length"] == 4096

    def test_overridden_lists_changed_fields(self):
        config = ProviderConfig()
        config.handshake_timeout_in_millis = 5000
        config.add_property("x", 1)
        assert config.overridden() == {"handshake_timeout_in_millis"}

    def test_properties_do_not_affect_equality(self):
        a = ProviderConfig().add_property("x", 1)
        b = ProviderConfig()
        assert a == b


class TestFreeze:
    def test_snapshot_copies_typed_values_and_properties(self):
        timer = FakeTimer()
        config = ProviderConfig(handshake_timeout_in_millis=2500, timer=timer)
        config.add_property("max_connections", 10)
        options = config.freeze()
        assert isinstance(options, TransportOptions)
        assert options.handshake_timeout_in_millis == 2500
        assert options.timer is timer
        assert options.get_property("max_connections", int, 0) == 10

    def test_snapshot_is_isolated_from_later_mutation(self):
        config = ProviderConfig().add_property("a", 1)
        options = config.freeze()
        config.handshake_timeout_in_millis = 1
        config.add_property("b", 2)
        config.remove_property("a")
        assert options.handshake_timeout_in_millis == 10000
        assert dict(options.properties) == {"a": 1}

    def test_snapshot_is_read_only(self):
        options = ProviderConfig().freeze()
        with pytest.raises(AttributeError):
            options.disable_zero_copy = True  # type: ignore[misc]
        with pytest.raises(TypeError):
            options.properties["x"] = 1  # type: ignore[index]

    def test_snapshot_lookup_semantics(self):
        options = ProviderConfig().add_property("flag", "yes").add_property("none", None).freeze()
        assert options.get_property("flag") == "yes"
        assert options.get_property("flag", bool, False) is False
        assert options.get_property("missing", default=3) == 3
        assert options.get_property("none", default=3) is None
        assert options.get_property("none", int, 3) == 3

    def test_snapshot_tells_stored_none_from_absent(self):
        options = ProviderConfig().add_property("none", None).freeze()
        assert options.has_property("none") is True
        assert options.has_property("missing") is False
