"""
Data models for the Token API dashboard
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import urlencode


class InputMode(str, Enum):
    WALLET = "wallet"
    TOKEN = "token"

    @property
    def label(self) -> str:
        return "Wallet Address" if self is InputMode.WALLET else "Token Address"

    @property
    def placeholder(self) -> str:
        return f"Enter {self.label} (e.g., 0x...)"


class QueryKind(str, Enum):
    BALANCES = "Balances"
    TOKEN_INFO = "Token Info"
    TRANSFERS = "Transfers"
    HOLDERS = "Token Holders"
    OHLC = "Price History (OHLC)"

    @property
    def input_mode(self) -> InputMode:
        return _INPUT_MODES[self]


_INPUT_MODES = {
    QueryKind.BALANCES: InputMode.WALLET,
    QueryKind.TRANSFERS: InputMode.WALLET,
    QueryKind.TOKEN_INFO: InputMode.TOKEN,
    QueryKind.HOLDERS: InputMode.TOKEN,
    QueryKind.OHLC: InputMode.TOKEN,
}


class NetworkId(str, Enum):
    MAINNET = "mainnet"
    BSC = "bsc"
    BASE = "base"
    ARBITRUM_ONE = "arbitrum-one"
    OPTIMISM = "optimism"
    MATIC = "matic"

    @property
    def display_name(self) -> str:
        return NETWORK_NAMES[self]


NETWORK_NAMES = {
    NetworkId.MAINNET: "Ethereum Mainnet",
    NetworkId.BSC: "Binance Smart Chain",
    NetworkId.BASE: "Base",
    NetworkId.ARBITRUM_ONE: "Arbitrum One",
    NetworkId.OPTIMISM: "Optimism",
    NetworkId.MATIC: "Polygon (Matic)",
}


@dataclass(frozen=True)
class RequestDescriptor:
    """One immutable GET request against the Token API."""
    url: str
    params: Tuple[Tuple[str, str], ...] = ()
    headers: Tuple[Tuple[str, str], ...] = ()
    context: str = ""
    method: str = "GET"

    @property
    def full_url(self) -> str:
        if not self.params:
            return self.url
        return f"{self.url}?{urlencode(self.params)}"

    def header_dict(self) -> Dict[str, str]:
        return dict(self.headers)


@dataclass
class TabState:
    """Result/loading/error slot for one query kind"""
    result: Optional[List[Dict[str, Any]]] = None
    loading: bool = False
    error: Optional[str] = None
    error_type: Optional[type] = None


MAX_PAGE_SIZE = 1000


@dataclass
class PaginationState:
    page: int = 1
    page_size: int = 10


@dataclass(frozen=True)
class ChartSlice:
    label: str
    value: float


# ==========================
# Records
# ==========================
def _opt_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _opt_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def _opt_int(value: Any) -> Optional[int]:
    number = _opt_float(value)
    return int(number) if number is not None else None


@dataclass
class BalanceRecord:
    symbol: Optional[str] = None
    name: Optional[str] = None
    amount: Optional[str] = None
    amount_formatted: Optional[str] = None
    price_usd: Optional[float] = None
    value_usd: Optional[float] = None
    contract: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "BalanceRecord":
        return cls(
            symbol=_opt_str(item.get("symbol")),
            name=_opt_str(item.get("name")),
            amount=_opt_str(item.get("amount")),
            amount_formatted=_opt_str(item.get("amountFormatted")),
            price_usd=_opt_float(item.get("price_usd")),
            value_usd=_opt_float(item.get("value_usd")),
            contract=_opt_str(item.get("contract")),
        )


@dataclass
class TokenInfoRecord:
    name: Optional[str] = None
    symbol: Optional[str] = None
    decimals: Optional[int] = None
    address: Optional[str] = None
    network_id: Optional[str] = None
    holders: Optional[int] = None
    price_usd: Optional[float] = None
    market_cap: Optional[float] = None
    circulating_supply: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TokenInfoRecord":
        return cls(
            name=_opt_str(item.get("name")),
            symbol=_opt_str(item.get("symbol")),
            decimals=_opt_int(item.get("decimals")),
            address=_opt_str(item.get("address")),
            network_id=_opt_str(item.get("network_id")),
            holders=_opt_int(item.get("holders")),
            price_usd=_opt_float(item.get("price_usd")),
            market_cap=_opt_float(item.get("market_cap")),
            circulating_supply=_opt_str(item.get("circulating_supply")),
        )


@dataclass
class TransferRecord:
    datetime: Optional[str] = None
    from_address: Optional[str] = None
    to_address: Optional[str] = None
    amount: Optional[str] = None
    amount_formatted: Optional[str] = None
    value_usd: Optional[float] = None
    transaction_id: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "TransferRecord":
        return cls(
            datetime=_opt_str(item.get("datetime")),
            from_address=_opt_str(item.get("from")),
            to_address=_opt_str(item.get("to")),
            amount=_opt_str(item.get("amount")),
            amount_formatted=_opt_str(item.get("amountFormatted")),
            value_usd=_opt_float(item.get("value_usd")),
            transaction_id=_opt_str(item.get("transaction_id")),
        )


@dataclass
class HolderRecord:
    address: Optional[str] = None
    amount: Optional[str] = None
    amount_formatted: Optional[str] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "HolderRecord":
        return cls(
            address=_opt_str(item.get("address")),
            amount=_opt_str(item.get("amount")),
            amount_formatted=_opt_str(item.get("amountFormatted")),
        )


@dataclass
class OhlcRecord:
    datetime: Optional[str] = None
    ticker: Optional[str] = None
    open: Optional[float] = None
    high: Optional[float] = None
    low: Optional[float] = None
    close: Optional[float] = None
    volume: Optional[float] = None

    @classmethod
    def from_api(cls, item: Dict[str, Any]) -> "OhlcRecord":
        return cls(
            datetime=_opt_str(item.get("datetime")),
            ticker=_opt_str(item.get("ticker")),
            open=_opt_float(item.get("open")),
            high=_opt_float(item.get("high")),
            low=_opt_float(item.get("low")),
            close=_opt_float(item.get("close")),
            volume=_opt_float(item.get("volume")),
        )


RECORD_TYPES = {
    QueryKind.BALANCES: BalanceRecord,
    QueryKind.TOKEN_INFO: TokenInfoRecord,
    QueryKind.TRANSFERS: TransferRecord,
    QueryKind.HOLDERS: HolderRecord,
    QueryKind.OHLC: OhlcRecord,
}
