import dataclasses

import pytest

from token_dashboard.config import DEFAULT_BASE_URL, DEFAULT_WALLET, Settings

ENV_VARS = [
    "TOKEN_API_JWT",
    "TOKEN_API_BASE_URL",
    "TOKEN_API_TIMEOUT",
    "TOKEN_API_NETWORK",
    "TRANSFERS_PAGE_SIZE",
    "DEFAULT_WALLET_ADDRESS",
    "DEFAULT_TOKEN_ADDRESS",
    "LOG_LEVEL",
]


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    # setenv first so monkeypatch also removes whatever load_dotenv writes
    for name in ENV_VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults_without_environment(clean_env):
    settings = Settings.load(clean_env / "missing.env")
    assert settings.api_token is None
    assert not settings.has_credential
    assert settings.base_url == DEFAULT_BASE_URL
    assert settings.request_timeout == 30.0
    assert settings.transfers_page_size == 10
    assert settings.default_wallet == DEFAULT_WALLET


def test_reads_dotenv_file(clean_env):
    env_file = clean_env / ".env"
    env_file.write_text(
        "TOKEN_API_JWT=abc.def.ghi\n"
        "TOKEN_API_BASE_URL=https://proxy.local/\n"
        "TOKEN_API_TIMEOUT=5\n"
        "TRANSFERS_PAGE_SIZE=25\n"
        "LOG_LEVEL=debug\n"
    )
    settings = Settings.load(env_file)
    assert settings.api_token == "abc.def.ghi"
    assert settings.has_credential
    assert settings.base_url == "https://proxy.local"
    assert settings.request_timeout == 5.0
    assert settings.transfers_page_size == 25
    assert settings.log_level == "DEBUG"


def test_blank_token_counts_as_missing(clean_env, monkeypatch):
    monkeypatch.setenv("TOKEN_API_JWT", "   ")
    assert Settings.load(clean_env / "missing.env").api_token is None


def test_malformed_number_fails_at_load(clean_env, monkeypatch):
    monkeypatch.setenv("TRANSFERS_PAGE_SIZE", "ten")
    with pytest.raises(ValueError):
        Settings.load(clean_env / "missing.env")


def test_settings_are_immutable():
    settings = Settings(api_token="x")
    with pytest.raises(dataclasses.FrozenInstanceError):
        settings.api_token = "y"


@pytest.mark.parametrize("size", ["0", "-5", "1001", "5000"])
def test_page_size_out_of_range_fails_at_load(clean_env, monkeypatch, size):
    monkeypatch.setenv("TRANSFERS_PAGE_SIZE", size)
    with pytest.raises(ValueError, match="TRANSFERS_PAGE_SIZE"):
        Settings.load(clean_env / "missing.env")


@pytest.mark.parametrize("size", ["1", "1000"])
def test_page_size_bounds_are_inclusive(clean_env, monkeypatch, size):
    monkeypatch.setenv("TRANSFERS_PAGE_SIZE", size)
    assert Settings.load(clean_env / "missing.env").transfers_page_size == int(size)


def test_unknown_network_fails_at_load(clean_env, monkeypatch):
    monkeypatch.setenv("TOKEN_API_NETWORK", "solana")
    with pytest.raises(ValueError, match="solana"):
        Settings.load(clean_env / "missing.env")


def test_known_network_is_kept(clean_env, monkeypatch):
    monkeypatch.setenv("TOKEN_API_NETWORK", "arbitrum-one")
    assert Settings.load(clean_env / "missing.env").default_network == "arbitrum-one"
