"""
Unit Tests for Engine Configuration
===================================
"""

from btcscript_sdk.config import DEFAULT_ENGINE_URL, EngineConfig


class TestEngineConfig:
    def test_defaults(self):
        config = EngineConfig()
        assert config.url == DEFAULT_ENGINE_URL == "http://localhost:3000/run-job"
        assert config.timeout == 30.0
        assert config.send_breakpoints is True

    def test_from_env(self, monkeypatch):
        monkeypatch.setenv("BTCSCRIPT_ENGINE_URL", "http://engine:8080/run")
        monkeypatch.setenv("BTCSCRIPT_ENGINE_TIMEOUT", "2.5")
        monkeypatch.setenv("BTCSCRIPT_SEND_BREAKPOINTS", "no")

        config = EngineConfig.from_env()

        assert config.url == "http://engine:8080/run"
        assert config.timeout == 2.5
        assert config.send_breakpoints is False

    def test_from_env_unset(self, monkeypatch):
        for name in ("BTCSCRIPT_ENGINE_URL", "BTCSCRIPT_ENGINE_TIMEOUT", "BTCSCRIPT_SEND_BREAKPOINTS"):
            monkeypatch.delenv(name, raising=False)
        assert EngineConfig.from_env() == EngineConfig()

    def test_invalid_values_ignored(self, monkeypatch):
        monkeypatch.setenv("BTCSCRIPT_ENGINE_TIMEOUT", "soon")
        monkeypatch.setenv("BTCSCRIPT_SEND_BREAKPOINTS", "perhaps")
        config = EngineConfig.from_env()
        assert config.timeout == 30.0
        assert config.send_breakpoints is True

    def test_negative_timeout_ignored(self, monkeypatch):
        monkeypatch.setenv("BTCSCRIPT_ENGINE_TIMEOUT", "-1")
        assert EngineConfig.from_env().timeout == 30.0

    def test_headers_not_shared(self):
        a, b = EngineConfig(), EngineConfig()
        a.headers["X-Test"] = "1"
        assert "X-Test" not in b.headers
