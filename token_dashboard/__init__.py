"""
Token API dashboard core: client, request builders, per-tab state and presenters
for The Graph Token API on EVM networks.
"""

__version__ = "0.1.0"

from .client import TokenApiClient
from .config import Settings, get_settings
from .coordinator import DashboardCoordinator
from .errors import (
    HttpError,
    InvalidAddress,
    InvalidParameter,
    MissingCredential,
    ResponseDecodeError,
    TokenApiError,
    TransportError,
)
from .models import InputMode, NetworkId, QueryKind, TabState

__all__ = [
    "TokenApiClient",
    "Settings",
    "get_settings",
    "DashboardCoordinator",
    "TokenApiError",
    "MissingCredential",
    "InvalidAddress",
    "InvalidParameter",
    "HttpError",
    "TransportError",
    "ResponseDecodeError",
    "InputMode",
    "NetworkId",
    "QueryKind",
    "TabState",
]
