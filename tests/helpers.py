import threading
from typing import Any, List

from token_dashboard.models import RequestDescriptor

WALLET = "0x2a0c0dbecc7e4d658f48e01e3fa353f44050c208"
TOKEN = "0xc944e90c64b2c07662a292be6244bdf05cda44a7"


class FakeExecutor:
    """Stands in for TokenApiClient: records descriptors and replays queued outcomes."""

    def __init__(self, *outcomes: Any):
        self.outcomes: List[Any] = list(outcomes)
        self.calls: List[RequestDescriptor] = []
        self._lock = threading.Lock()

    def execute(self, descriptor: RequestDescriptor) -> Any:
        with self._lock:
            self.calls.append(descriptor)
            outcome = self.outcomes.pop(0) if self.outcomes else []
        if callable(outcome):
            outcome = outcome()
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome
