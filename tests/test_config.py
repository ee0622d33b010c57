import json

import pytest

from ytlivechat.shared.config.system import (
    DEFAULT_BASE_URL,
    DEFAULT_INTERVAL_MS,
    LiveChatConfig,
    load_live_chat_config,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for key in (
        "YTLIVECHAT_INTERVAL_MS",
        "YTLIVECHAT_BASE_URL",
        "YTLIVECHAT_USER_AGENT",
        "YTLIVECHAT_TIMEOUT",
        "YTLIVECHAT_LOG_DIR",
    ):
        monkeypatch.delenv(key, raising=False)


@pytest.mark.unit
class TestLoadConfig:
    def test_defaults(self):
        config = load_live_chat_config()

        assert config == LiveChatConfig()
        assert config.interval_ms == DEFAULT_INTERVAL_MS
        assert config.base_url == DEFAULT_BASE_URL

    def test_raw_values(self):
        config = load_live_chat_config(
            {"interval_ms": "500", "base_url": "http://localhost:8000/", "item_queue_size": 5}
        )

        assert config.interval_ms == 500
        assert config.interval_seconds == 0.5
        assert config.base_url == "http://localhost:8000"
        assert config.item_queue_size == 5

    def test_invalid_values_are_ignored_per_key(self):
        config = load_live_chat_config(
            {"interval_ms": "fast", "request_timeout": True, "error_queue_size": 0, "user_agent": ""}
        )

        assert config.interval_ms == DEFAULT_INTERVAL_MS
        assert config.request_timeout == 15.0
        assert config.error_queue_size == 10
        assert config.user_agent == LiveChatConfig().user_agent

    def test_environment_overrides_file(self, tmp_path, monkeypatch):
        path = tmp_path / "livechat.json"
        path.write_text(json.dumps({"interval_ms": 2000, "request_timeout": 3}), encoding="utf-8")
        monkeypatch.setenv("YTLIVECHAT_INTERVAL_MS", "250")

        config = load_live_chat_config(path=path)

        assert config.interval_ms == 250
        assert config.request_timeout == 3.0

    def test_missing_file_uses_defaults(self, tmp_path):
        assert load_live_chat_config(path=tmp_path / "absent.json") == LiveChatConfig()

    def test_non_object_file_is_ignored(self, tmp_path):
        path = tmp_path / "livechat.json"
        path.write_text("[1, 2, 3]", encoding="utf-8")

        assert load_live_chat_config(path=path) == LiveChatConfig()

    def test_non_positive_interval_means_default(self):
        assert LiveChatConfig(interval_ms=0).interval_seconds == DEFAULT_INTERVAL_MS / 1000.0
