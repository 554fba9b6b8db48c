import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Optional, Union

from dotenv import load_dotenv

from .models import MAX_PAGE_SIZE, NetworkId

DEFAULT_BASE_URL = "https://token-api.thegraph.com"
DEFAULT_WALLET = "0x2a0c0dbecc7e4d658f48e01e3fa353f44050c208"
DEFAULT_TOKEN = "0xc944e90c64b2c07662a292be6244bdf05cda44a7"


def _env_str(name: str, default: str = "") -> str:
    return (os.getenv(name) or default).strip()


def _page_size(raw: str) -> int:
    size = int(raw)
    if not 1 <= size <= MAX_PAGE_SIZE:
        raise ValueError(f"TRANSFERS_PAGE_SIZE must be between 1 and {MAX_PAGE_SIZE}, got {size}")
    return size


def _network(raw: str) -> str:
    try:
        return NetworkId(raw).value
    except ValueError:
        known = ", ".join(n.value for n in NetworkId)
        raise ValueError(f"TOKEN_API_NETWORK must be one of {known}, got {raw!r}") from None


@dataclass(frozen=True, slots=True)
class Settings:
    """Runtime configuration, built once per process and passed to the client."""

    api_token: Optional[str] = None
    base_url: str = DEFAULT_BASE_URL
    request_timeout: float = 30.0
    default_network: str = "mainnet"
    transfers_page_size: int = 10
    default_wallet: str = DEFAULT_WALLET
    default_token: str = DEFAULT_TOKEN
    log_level: str = "INFO"

    @property
    def has_credential(self) -> bool:
        return bool(self.api_token)

    @classmethod
    def load(cls, env_path: Union[str, Path, None] = None) -> "Settings":
        if env_path is not None:
            load_dotenv(dotenv_path=env_path, override=True)
        else:
            load_dotenv()

        return cls(
            api_token=_env_str("TOKEN_API_JWT") or None,
            base_url=_env_str("TOKEN_API_BASE_URL", DEFAULT_BASE_URL).rstrip("/"),
            request_timeout=float(_env_str("TOKEN_API_TIMEOUT", "30")),
            default_network=_network(_env_str("TOKEN_API_NETWORK", "mainnet")),
            transfers_page_size=_page_size(_env_str("TRANSFERS_PAGE_SIZE", "10")),
            default_wallet=_env_str("DEFAULT_WALLET_ADDRESS", DEFAULT_WALLET),
            default_token=_env_str("DEFAULT_TOKEN_ADDRESS", DEFAULT_TOKEN),
            log_level=_env_str("LOG_LEVEL", "INFO").upper(),
        )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings.load()
