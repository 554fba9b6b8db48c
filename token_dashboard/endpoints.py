"""
Request builders for the Token API.

Each builder validates its address and network and returns an immutable
RequestDescriptor. Nothing here touches the network.
"""

import logging
from typing import Callable, Dict, List, Optional, Tuple, Union

from .config import Settings
from .errors import InvalidAddress, InvalidParameter
from .models import MAX_PAGE_SIZE, InputMode, NetworkId, QueryKind, RequestDescriptor

logger = logging.getLogger(__name__)

MAX_AGE_DAYS = 180

NetworkLike = Union[NetworkId, str]


# ==========================
# Validation
# ==========================
def is_address_like(txt: Optional[str]) -> bool:
    return isinstance(txt, str) and txt.startswith("0x")


def validate_address(address: Optional[str], mode: InputMode, context: str = "") -> str:
    if not is_address_like(address):
        logger.error("[%s] Invalid EVM %s address provided: %r", context, mode.value, address)
        raise InvalidAddress(
            f"Invalid EVM {mode.value} address provided. Address must start with 0x.",
            context,
        )
    return address


def coerce_network(network: NetworkLike, context: str = "") -> NetworkId:
    try:
        return NetworkId(network)
    except ValueError:
        raise InvalidParameter(f"Unknown network id: {network!r}", context) from None


def _headers(settings: Settings) -> Tuple[Tuple[str, str], ...]:
    headers = [("Accept", "application/json")]
    if settings.api_token:
        headers.append(("Authorization", f"Bearer {settings.api_token}"))
    return tuple(headers)


def _descriptor(
    settings: Settings,
    path: str,
    params: List[Tuple[str, str]],
    context: str,
) -> RequestDescriptor:
    return RequestDescriptor(
        url=f"{settings.base_url}{path}",
        params=tuple(params),
        headers=_headers(settings),
        context=context,
    )


# ==========================
# Builders
# ==========================
def balances(settings: Settings, address: str, network: NetworkLike = NetworkId.MAINNET) -> RequestDescriptor:
    context = "Balances"
    validate_address(address, InputMode.WALLET, context)
    network_id = coerce_network(network, context)
    return _descriptor(settings, f"/balances/evm/{address}", [("network_id", network_id.value)], context)


def token_info(settings: Settings, address: str, network: NetworkLike = NetworkId.MAINNET) -> RequestDescriptor:
    context = "Token Metadata"
    validate_address(address, InputMode.TOKEN, context)
    network_id = coerce_network(network, context)
    return _descriptor(settings, f"/tokens/evm/{address}", [("network_id", network_id.value)], context)


def transfers(
    settings: Settings,
    address: str,
    network: NetworkLike = NetworkId.MAINNET,
    page: int = 1,
    page_size: int = 10,
    age_days: Optional[int] = None,
    contract: Optional[str] = None,
) -> RequestDescriptor:
    """
    Build a paginated transfers request for a wallet.

    Args:
        page: Page number, 1-based
        page_size: Rows per page (1-1000), sent as ``limit``
        age_days: Optional data age filter in days (1-180)
        contract: Optional token contract filter
    """
    context = "Token Transfers"
    validate_address(address, InputMode.WALLET, context)
    network_id = coerce_network(network, context)

    if page < 1:
        raise InvalidParameter(f"Page must be >= 1, got {page}.", context)
    if not 1 <= page_size <= MAX_PAGE_SIZE:
        raise InvalidParameter(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}.", context)
    if age_days is not None and not 1 <= age_days <= MAX_AGE_DAYS:
        raise InvalidParameter(f"Age must be between 1 and {MAX_AGE_DAYS} days, got {age_days}.", context)

    params = [
        ("network_id", network_id.value),
        ("page", str(page)),
        ("limit", str(page_size)),
    ]
    if age_days is not None:
        params.append(("age", str(age_days)))
    if contract:
        params.append(("contract", contract))

    return _descriptor(settings, f"/transfers/evm/{address}", params, context)


def holders(settings: Settings, address: str, network: NetworkLike = NetworkId.MAINNET) -> RequestDescriptor:
    context = "Token Holders"
    validate_address(address, InputMode.TOKEN, context)
    network_id = coerce_network(network, context)
    return _descriptor(settings, f"/holders/evm/{address}", [("network_id", network_id.value)], context)


def ohlc_history(settings: Settings, address: str, network: NetworkLike = NetworkId.MAINNET) -> RequestDescriptor:
    context = "Token OHLC"
    validate_address(address, InputMode.TOKEN, context)
    network_id = coerce_network(network, context)
    return _descriptor(settings, f"/ohlc/prices/evm/{address}", [("network_id", network_id.value)], context)


BUILDERS: Dict[QueryKind, Callable[..., RequestDescriptor]] = {
    QueryKind.BALANCES: balances,
    QueryKind.TOKEN_INFO: token_info,
    QueryKind.TRANSFERS: transfers,
    QueryKind.HOLDERS: holders,
    QueryKind.OHLC: ohlc_history,
}
