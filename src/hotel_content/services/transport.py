"""HTTP transport for the CMS REST API."""
from __future__ import annotations

import json
import logging
from typing import Any, Dict, Optional

import httpx

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


class ContentError(RuntimeError):
    """Base class for failures while reading content from the CMS."""

    def __init__(self, message: str, *, endpoint: Optional[str] = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class TransportError(ContentError):
    """Raised on a non-2xx response or a network failure."""

    def __init__(
        self,
        status_code: Optional[int],
        message: str,
        *,
        endpoint: Optional[str] = None,
        retryable: bool = False,
    ) -> None:
        if status_code is None:
            text = f"CMS request failed: {message}"
        else:
            text = f"CMS request failed ({status_code}): {message}"
        super().__init__(text, endpoint=endpoint)
        self.status_code = status_code
        self.upstream_message = message
        self.retryable = retryable


class MalformedResponseError(ContentError):
    """Raised when a response body is not JSON or lacks the ``data`` envelope."""

    def __init__(self, message: str, *, endpoint: Optional[str] = None, body: str = "") -> None:
        super().__init__(message, endpoint=endpoint)
        self.body = body


def _is_retryable_status(status: int) -> bool:
    return status == 429 or status >= 500


def _extract_error_message(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except (json.JSONDecodeError, ValueError):
        return response.reason_phrase or response.text[:256]
    if isinstance(payload, dict):
        errors = payload.get("errors")
        if isinstance(errors, list) and errors and isinstance(errors[0], dict):
            message = errors[0].get("message")
            if message:
                return str(message)
        message = payload.get("message")
        if message:
            return str(message)
    return response.reason_phrase or response.text[:256]


class CmsTransport:
    """Executes single GET requests against the CMS with a caller-chosen credential."""

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = DEFAULT_TIMEOUT,
        headers: Optional[Dict[str, str]] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        default_headers = {
            "Accept": "application/json",
            "User-Agent": "hotel-content/0.1.0",
        }
        if headers:
            default_headers.update(headers)
        self._base_url = base_url.rstrip("/")
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, headers=default_headers)

    @classmethod
    def from_settings(cls, settings: Any, *, client: Optional[httpx.AsyncClient] = None) -> "CmsTransport":
        return cls(
            settings.base_url,
            timeout=settings.request_timeout_s,
            headers={"User-Agent": settings.user_agent},
            client=client,
        )

    @property
    def base_url(self) -> str:
        return self._base_url

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "CmsTransport":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    def build_url(self, endpoint: str, query_string: str = "") -> str:
        url = f"{self._base_url}/{endpoint.lstrip('/')}"
        if query_string:
            url = f"{url}?{query_string}"
        return url

    async def execute(self, endpoint: str, query_string: str, credential: str) -> Dict[str, Any]:
        """Perform one GET and return the parsed JSON body unchanged."""
        url = self.build_url(endpoint, query_string)
        headers = {"Authorization": f"Bearer {credential}"}
        logger.debug("CMS request GET %s", url)
        try:
            response = await self._client.get(url, headers=headers)
        except httpx.TimeoutException as exc:
            raise TransportError(None, f"timed out: {exc}", endpoint=endpoint, retryable=True) from exc
        except httpx.HTTPError as exc:
            raise TransportError(None, str(exc) or exc.__class__.__name__, endpoint=endpoint, retryable=True) from exc

        if not response.is_success:
            message = _extract_error_message(response)
            raise TransportError(
                response.status_code,
                message,
                endpoint=endpoint,
                retryable=_is_retryable_status(response.status_code),
            )

        text = response.text
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise MalformedResponseError(
                f"CMS response for {endpoint} is not valid JSON", endpoint=endpoint, body=text[:512]
            ) from exc
        if not isinstance(payload, dict) or "data" not in payload:
            raise MalformedResponseError(
                f"CMS response for {endpoint} is missing the data envelope", endpoint=endpoint, body=text[:512]
            )
        return payload
