# tests/unit/test_env_utils.py
from app.config.env_utils import env_bool, env_float, env_int, env_list


def test_env_helpers(monkeypatch):
    monkeypatch.setenv("X_BOOL", "Yes")
    monkeypatch.setenv("X_INT", " 5 ")
    monkeypatch.setenv("X_FLOAT", "not-a-number")
    monkeypatch.setenv("X_LIST", "a, b\nc,,")

    assert env_bool("X_BOOL") is True
    assert env_bool("X_MISSING", True) is True
    assert env_int("X_INT", 1) == 5
    assert env_float("X_FLOAT", 2.5) == 2.5
    assert env_list("X_LIST", ["z"]) == ["a", "b", "c"]
    assert env_list("X_MISSING", ["z"]) == ["z"]


def test_gateway_key_read_at_call_time(monkeypatch):
    from app.config.settings import settings

    monkeypatch.delenv("AI_GATEWAY_API_KEY", raising=False)
    assert settings.AI_GATEWAY_API_KEY is None

    monkeypatch.setenv("AI_GATEWAY_API_KEY", "k-123")
    assert settings.AI_GATEWAY_API_KEY == "k-123"
