import json
from typing import Any, Optional


class TokenApiError(RuntimeError):
    """Base class for every failure raised while querying the Token API."""

    def __init__(self, message: str, context: Optional[str] = None) -> None:
        super().__init__(message)
        self.context = context


class MissingCredential(TokenApiError):
    pass


class InvalidAddress(TokenApiError, ValueError):
    pass


class InvalidParameter(TokenApiError, ValueError):
    pass


class HttpError(TokenApiError):
    """Non-2xx answer from the API. ``body`` is the parsed JSON when possible, else raw text."""

    def __init__(self, status_code: int, body: Any, context: Optional[str] = None) -> None:
        shown = body if isinstance(body, str) else json.dumps(body)
        prefix = f"[{context}] " if context else ""
        super().__init__(
            f"{prefix}API request failed with status {status_code}. Body: {shown}",
            context,
        )
        self.status_code = status_code
        self.body = body


class TransportError(TokenApiError):
    def __init__(self, cause: BaseException, context: Optional[str] = None) -> None:
        prefix = f"[{context}] " if context else ""
        super().__init__(f"{prefix}Network error: {cause}", context)
        self.cause = cause


class ResponseDecodeError(TokenApiError):
    pass
