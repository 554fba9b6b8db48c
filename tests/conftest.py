import pytest

from token_dashboard.config import Settings


@pytest.fixture
def settings():
    return Settings(api_token="test-jwt-token-123", base_url="https://token-api.example")


@pytest.fixture
def no_token_settings():
    return Settings(api_token=None, base_url="https://token-api.example")
