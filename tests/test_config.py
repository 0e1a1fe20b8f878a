# test_config.py
import json
import pathlib
import sys
from pathlib import Path

sys.path.append(str(pathlib.Path(__file__).resolve().parents[1]))

from config import DispatchProvider, get_settings  # noqa: E402

CONFIG_JSON = Path(__file__).resolve().parents[1] / "config.json"


def _settings():
    get_settings.cache_clear()
    return get_settings()


def test_defaults_from_config():
    settings = _settings()
    data = json.loads(CONFIG_JSON.read_text())
    assert settings.delivery_dispatch_url == data["delivery_dispatch_url"]
    assert settings.dispatch_provider == DispatchProvider(data["dispatch_provider"])


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("DISPATCH_PROVIDER", "http")
    monkeypatch.setenv("DELIVERY_DISPATCH_TIMEOUT", "1.5")
    settings = _settings()
    assert settings.dispatch_provider == DispatchProvider.HTTP
    assert settings.delivery_dispatch_timeout == 1.5
    monkeypatch.delenv("DISPATCH_PROVIDER")
    monkeypatch.delenv("DELIVERY_DISPATCH_TIMEOUT")
    get_settings.cache_clear()


def test_missing_key_uses_default(monkeypatch):
    original = CONFIG_JSON.read_text()
    monkeypatch.setattr(
        Path,
        "read_text",
        lambda self: json.dumps(
            {k: v for k, v in json.loads(original).items() if k != "slow_query_ms"}
        ),
    )
    settings = _settings()
    assert settings.slow_query_ms == 200
    get_settings.cache_clear()
