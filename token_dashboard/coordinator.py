"""
Per-tab state for the dashboard.

Every QueryKind owns an independent TabState. A dispatch only ever writes
the slot of its own kind, so requests for different tabs can be in flight
at the same time without touching each other.
"""

import asyncio
import logging
from typing import Any, Dict, List, Optional

from .config import Settings
from .endpoints import BUILDERS, coerce_network
from .errors import InvalidParameter, TokenApiError
from .models import (
    MAX_PAGE_SIZE,
    InputMode,
    NetworkId,
    PaginationState,
    QueryKind,
    RequestDescriptor,
    TabState,
)

logger = logging.getLogger(__name__)

UNKNOWN_ERROR = "An unknown error occurred."


def normalize_result(data: Any) -> Optional[List[Dict[str, Any]]]:
    """Lists pass through, a bare object becomes a one-element list, nothing stays None."""
    if isinstance(data, list):
        return data
    if data is None:
        return None
    return [data]


class DashboardCoordinator:
    """
    Owns the address inputs, network, pagination and the five TabStates.

    ``executor`` is anything with a blocking ``execute(descriptor)`` method,
    normally a TokenApiClient. Calls run in a worker thread so the event loop
    only suspends at the network boundary.
    """

    def __init__(self, executor, settings: Settings, page_size: Optional[int] = None):
        self.executor = executor
        self.settings = settings
        self.tabs: Dict[QueryKind, TabState] = {kind: TabState() for kind in QueryKind}
        self.active: QueryKind = QueryKind.BALANCES
        self.addresses: Dict[InputMode, str] = {
            InputMode.WALLET: settings.default_wallet,
            InputMode.TOKEN: settings.default_token,
        }
        self.network: NetworkId = coerce_network(settings.default_network)
        if page_size is None:
            page_size = settings.transfers_page_size
        if not 1 <= page_size <= MAX_PAGE_SIZE:
            raise InvalidParameter(f"Page size must be between 1 and {MAX_PAGE_SIZE}, got {page_size}.")
        self.pagination = PaginationState(page=1, page_size=page_size)
        self.age_days: Optional[int] = None
        self.contract_filter: Optional[str] = None
        self._generations: Dict[QueryKind, int] = {kind: 0 for kind in QueryKind}

    # ---- inputs ---------------------------------------------------------
    def address_for(self, kind: QueryKind) -> str:
        return self.addresses[kind.input_mode]

    def set_address(self, kind: QueryKind, value: str) -> None:
        self.addresses[kind.input_mode] = (value or "").strip()

    def set_network(self, network) -> None:
        self.network = coerce_network(network)

    def switch(self, kind: QueryKind) -> TabState:
        # display only, never fetches
        self.active = kind
        return self.tabs[kind]

    def state(self, kind: QueryKind) -> TabState:
        return self.tabs[kind]

    @property
    def active_state(self) -> TabState:
        return self.tabs[self.active]

    # ---- pagination -----------------------------------------------------
    @property
    def can_go_previous(self) -> bool:
        return self.pagination.page > 1 and not self.tabs[QueryKind.TRANSFERS].loading

    @property
    def can_go_next(self) -> bool:
        # a short page means no more rows; a full page may still be the last one
        tab = self.tabs[QueryKind.TRANSFERS]
        if tab.loading or tab.result is None:
            return False
        return len(tab.result) >= self.pagination.page_size

    async def next_page(self) -> TabState:
        return await self.dispatch(QueryKind.TRANSFERS, page=self.pagination.page + 1)

    async def previous_page(self) -> Optional[TabState]:
        if self.pagination.page <= 1:
            return None
        return await self.dispatch(QueryKind.TRANSFERS, page=self.pagination.page - 1)

    # ---- dispatch -------------------------------------------------------
    def _build(self, kind: QueryKind, address: str, page: int) -> RequestDescriptor:
        builder = BUILDERS[kind]
        if kind is QueryKind.TRANSFERS:
            return builder(
                self.settings,
                address,
                self.network,
                page=page,
                page_size=self.pagination.page_size,
                age_days=self.age_days,
                contract=self.contract_filter,
            )
        return builder(self.settings, address, self.network)

    async def dispatch(
        self,
        kind: QueryKind,
        address: Optional[str] = None,
        network=None,
        page: Optional[int] = None,
    ) -> TabState:
        """
        Fetch ``kind`` and store the outcome in its TabState.

        ``page`` is only meaningful for Transfers: None means a fresh search
        (page reset to 1), a number means a paging request. Failures never
        propagate; they end up in ``TabState.error``.
        """
        if address is not None:
            self.set_address(kind, address)
        tab = self.tabs[kind]
        self._generations[kind] += 1
        generation = self._generations[kind]

        tab.loading = True
        tab.error = None
        tab.error_type = None

        target = self.address_for(kind)
        try:
            if network is not None:
                self.set_network(network)
            logger.info(
                "Fetch requested for %s, mode: %s, address: %s, network: %s",
                kind.value, kind.input_mode.value, target, self.network.value,
            )
            requested_page = 1 if page is None else page
            descriptor = self._build(kind, target, requested_page)
            if kind is QueryKind.TRANSFERS:
                self.pagination.page = requested_page
            loop = asyncio.get_running_loop()
            data = await loop.run_in_executor(None, self.executor.execute, descriptor)
        except TokenApiError as e:
            logger.error("Error during %s fetch: %s", kind.value, e)
            return self._fail(kind, generation, e)
        except Exception as e:
            logger.exception("Unexpected error during %s fetch", kind.value)
            return self._fail(kind, generation, e)

        if generation != self._generations[kind]:
            logger.info("Discarding stale %s response", kind.value)
            return tab

        tab.result = normalize_result(data)
        tab.error = None
        tab.loading = False
        logger.info(
            "Finished fetch for %s: %s row(s)",
            kind.value, len(tab.result) if tab.result is not None else 0,
        )
        return tab

    def _fail(self, kind: QueryKind, generation: int, error: Exception) -> TabState:
        tab = self.tabs[kind]
        if generation != self._generations[kind]:
            logger.info("Discarding stale %s failure", kind.value)
            return tab
        tab.error = str(error) or UNKNOWN_ERROR
        tab.error_type = type(error)
        tab.result = None
        tab.loading = False
        return tab
