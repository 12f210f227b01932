"""Tests for collector.registry — plugin discovery."""

from unittest.mock import MagicMock

import pytest

from statboard.collector.fitbit import FitbitCollector
from statboard.collector.registry import CollectorRegistry, default_registry
from statboard.models import Metric


class FakeCollector:
    name = "fake"

    def __init__(self, **config):
        self.config = config

    def collect(self, metric_name: str, days_back: int) -> list[Metric]:
        return []


class TestRegistry:
    def test_manual_register(self):
        reg = CollectorRegistry()
        reg.register("fake", FakeCollector)
        assert "fake" in reg.list_names()

    def test_get(self):
        reg = CollectorRegistry()
        reg.register("fake", FakeCollector)
        assert reg.get("fake") is FakeCollector
        assert reg.get("nonexistent") is None

    def test_create_passes_config(self):
        reg = CollectorRegistry()
        reg.register("fake", FakeCollector)
        instance = reg.create("fake", token="t")
        assert instance.name == "fake"
        assert instance.config == {"token": "t"}

    def test_create_missing_raises(self):
        reg = CollectorRegistry()
        reg.register("fake", FakeCollector)
        with pytest.raises(KeyError, match="No collector registered as 'missing'"):
            reg.create("missing")

    def test_discover_accepts_collector_class(self, monkeypatch):
        ep = MagicMock()
        ep.name = "fake_ep"
        ep.load.return_value = FakeCollector
        monkeypatch.setattr("statboard.collector.registry.entry_points", lambda group: [ep])

        reg = CollectorRegistry()
        result = reg.discover()
        assert result["fake_ep"] is FakeCollector

    def test_discover_skips_invalid_entry(self, monkeypatch):
        class NotACollector:
            pass

        ep = MagicMock()
        ep.name = "invalid"
        ep.load.return_value = NotACollector
        monkeypatch.setattr("statboard.collector.registry.entry_points", lambda group: [ep])

        reg = CollectorRegistry()
        assert "invalid" not in reg.discover()

    def test_discover_skips_broken_entry(self, monkeypatch):
        ep = MagicMock()
        ep.name = "broken"
        ep.load.side_effect = ImportError("missing dependency")
        monkeypatch.setattr("statboard.collector.registry.entry_points", lambda group: [ep])

        reg = CollectorRegistry()
        assert reg.discover() == {}


def test_default_registry_has_fitbit(monkeypatch):
    monkeypatch.setattr("statboard.collector.registry.entry_points", lambda group: [])
    reg = default_registry()
    assert reg.get("fitbit") is FitbitCollector
    assert reg.list_names() == ["fitbit"]
