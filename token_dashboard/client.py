"""
HTTP client for The Graph Token API
"""

import logging
from typing import Any, Optional

import requests

from .config import Settings, get_settings
from .errors import (
    HttpError,
    MissingCredential,
    ResponseDecodeError,
    TransportError,
)
from .models import RequestDescriptor

logger = logging.getLogger(__name__)


def unwrap_envelope(body: Any) -> Any:
    """Return the ``data`` field of an API envelope, or the body itself when there is none."""
    if isinstance(body, dict) and body.get("data") is not None:
        return body["data"]
    return body


class TokenApiClient:
    """
    Executes RequestDescriptors and normalizes the outcome.

    Example:
        >>> with TokenApiClient(Settings.load()) as client:
        ...     rows = client.execute(endpoints.balances(client.settings, "0xabc..."))
    """

    def __init__(self, settings: Optional[Settings] = None, session: Optional[requests.Session] = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()

    def execute(self, descriptor: RequestDescriptor) -> Any:
        """
        Perform one GET and return the unwrapped payload.

        Raises:
            MissingCredential: no API token configured (checked before any I/O)
            HttpError: non-2xx status
            TransportError: connection, DNS or timeout failure
            ResponseDecodeError: 2xx body that is not JSON
        """
        context = descriptor.context
        logger.debug("[%s] Performing fetch. URL: %s", context, descriptor.full_url)

        token = self.settings.api_token
        if not token:
            logger.error("[%s] TOKEN_API_JWT environment variable is not set.", context)
            raise MissingCredential(
                "API token is missing. Please set TOKEN_API_JWT in your .env file.",
                context,
            )
        logger.debug("[%s] Using JWT starting with: %s...", context, token[:10])

        headers = descriptor.header_dict()
        headers["Authorization"] = f"Bearer {token}"

        try:
            r = self.session.request(
                descriptor.method,
                descriptor.url,
                params=list(descriptor.params),
                headers=headers,
                timeout=self.settings.request_timeout,
            )
        except requests.RequestException as e:
            logger.error("[%s] Fetch error: %s", context, e)
            raise TransportError(e, context) from e

        logger.info("[%s] API Response Status: %s", context, r.status_code)

        if not 200 <= r.status_code < 300:
            body: Any = r.text
            logger.error("[%s] API Error Body: %s", context, body)
            try:
                body = r.json()
            except ValueError:
                logger.warning("[%s] Could not parse error body as JSON.", context)
            raise HttpError(r.status_code, body, context)

        try:
            payload = r.json()
        except ValueError as e:
            raise ResponseDecodeError(f"[{context}] Response body is not valid JSON.", context) from e

        logger.debug("[%s] Successfully fetched data.", context)
        return unwrap_envelope(payload)

    def close(self):
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()
