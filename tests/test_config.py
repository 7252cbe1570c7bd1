import pytest

from kount.config import KountSettings, load_settings
from kount.errors import ConfigurationError

ENV = {
    "KOUNT_API_KEY": "env-key",
    "KOUNT_CLIENT_ID": "env-client",
    "KOUNT_AUTH_URL": "https://login.example.com/token",
    "KOUNT_HOST": "https://api.example.com",
}


@pytest.fixture(autouse=True)
def no_dotenv(monkeypatch):
    monkeypatch.setattr("kount.config.load_dotenv", lambda *a, **k: False)
    for name in ["KOUNT_API_KEY", "KOUNT_CLIENT_ID", "KOUNT_AUTH_URL", "KOUNT_HOST", "KOUNT_REDIS_URL",
                 "KOUNT_TIMEOUT_SECONDS", "KOUNT_DEBUG_HTTP", "KOUNT_TRANSPORT"]:
        monkeypatch.delenv(name, raising=False)


def test_load_settings_from_env(monkeypatch):
    for k, v in ENV.items():
        monkeypatch.setenv(k, v)
    monkeypatch.setenv("KOUNT_DEBUG_HTTP", "true")
    monkeypatch.setenv("KOUNT_TIMEOUT_SECONDS", "12.5")

    settings = load_settings()

    assert settings.api_key == "env-key"
    assert settings.client_id == "env-client"
    assert settings.debug_http is True
    assert settings.timeout_seconds == 12.5
    assert settings.redis_url is None
    assert settings.transport == "requests"


def test_env_overrides_yaml(tmp_path, monkeypatch):
    cfg = tmp_path / "kount.yml"
    cfg.write_text(
        "api_key: yaml-key\n"
        "client_id: yaml-client\n"
        "auth_url: https://login.example.com/token\n"
        "host: https://yaml.example.com\n"
        "redis_url: redis://localhost:6379/0\n"
        "transport: httpx\n",
        encoding="utf-8",
    )
    monkeypatch.setenv("KOUNT_HOST", "https://env.example.com")

    settings = load_settings(cfg)

    assert settings.api_key == "yaml-key"
    assert settings.host == "https://env.example.com"
    assert settings.redis_url == "redis://localhost:6379/0"
    assert settings.transport == "httpx"


def test_missing_required_values_raise_configuration_error():
    with pytest.raises(ConfigurationError):
        load_settings()


def test_missing_file_raises_configuration_error(tmp_path):
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "nope.yml")


def test_non_mapping_yaml_is_rejected(tmp_path):
    cfg = tmp_path / "kount.yml"
    cfg.write_text("- just\n- a list\n", encoding="utf-8")

    with pytest.raises(ConfigurationError):
        load_settings(cfg)


def test_blank_values_and_bad_timeout_are_rejected():
    with pytest.raises(ValueError):
        KountSettings(api_key="  ", client_id="c", auth_url="a", host="h")
    with pytest.raises(ValueError):
        KountSettings(api_key="k", client_id="c", auth_url="a", host="h", timeout_seconds=0)


def test_blank_redis_url_is_none():
    assert KountSettings(api_key="k", client_id="c", auth_url="a", host="h", redis_url="").redis_url is None
