"""Thin async HTTP client for the portal REST API.

Every page/component talks to the API layer through ``ApiClient`` so that
error normalization, identity forwarding and request-id propagation happen in
one place.

Failures are raised as ``ApiError``. Its ``message`` prefers the server's
``error`` field, then ``message``, then the caller's default.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from pydantic import BaseModel, ConfigDict

from libs.common.config import get_settings
from libs.common.logging import get_logger, get_request_id

logger = get_logger(__name__)

DEFAULT_ERROR_MESSAGE = "Something went wrong. Please try again."


class ApiModel(BaseModel):
    """Base for payloads exchanged with the camelCase REST API."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")


class ApiError(Exception):
    """Normalized failure of an API call."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        response_data: Optional[dict] = None,
    ):
        self.message = message
        self.status_code = status_code
        self.response_data = response_data or {}
        super().__init__(message)

    @property
    def is_conflict(self) -> bool:
        return self.status_code == 409

    @property
    def is_not_found(self) -> bool:
        return self.status_code == 404


def error_message(data: Any, default: str) -> str:
    """Pick the most specific human message out of an error body."""
    if isinstance(data, dict):
        for key in ("error", "message"):
            value = data.get(key)
            if isinstance(value, str) and value.strip():
                return value
    return default


class ApiClient:
    """Async client bound to the API base URL and, optionally, an identity."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        *,
        timeout: Optional[float] = None,
        cookies: Optional[dict[str, str]] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        settings = get_settings()
        self.base_url = (base_url or settings.API_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.API_TIMEOUT_SECONDS
        self.cookies = cookies or {}
        self._transport = transport

    def with_cookies(self, cookies: dict[str, str]) -> "ApiClient":
        """Return a client that forwards the given identity cookies."""
        return ApiClient(
            self.base_url,
            timeout=self.timeout,
            cookies={**self.cookies, **cookies},
            transport=self._transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        request_id = get_request_id()
        if request_id:
            headers["X-Request-ID"] = request_id
        return headers

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        files: Optional[list] = None,
        default_error: str = DEFAULT_ERROR_MESSAGE,
    ) -> Any:
        """Perform a request and return the decoded JSON body.

        Raises:
            ApiError: on transport failure, non-2xx status, or a
                ``{"success": false}`` envelope.
        """
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                cookies=self.cookies,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    path,
                    params=params,
                    json=json,
                    data=data,
                    files=files,
                    headers=self._headers(),
                )
        except httpx.RequestError as e:
            logger.error(f"API request failed: {method} {path}: {e}")
            raise ApiError(default_error) from e

        try:
            body = response.json() if response.content else None
        except ValueError:
            body = None

        if not response.is_success:
            logger.warning(
                f"API error: {method} {path} -> {response.status_code}",
                extra={"extra_fields": {"status_code": response.status_code}},
            )
            raise ApiError(
                message=error_message(body, default_error),
                status_code=response.status_code,
                response_data=body if isinstance(body, dict) else None,
            )

        if isinstance(body, dict) and body.get("success") is False:
            raise ApiError(
                message=error_message(body, default_error),
                status_code=response.status_code,
                response_data=body,
            )

        return body

    async def get(self, path: str, *, params: Optional[dict] = None, **kwargs) -> Any:
        return await self.request("GET", path, params=params, **kwargs)

    async def post(self, path: str, *, json: Any = None, **kwargs) -> Any:
        return await self.request("POST", path, json=json, **kwargs)

    async def put(self, path: str, *, json: Any = None, **kwargs) -> Any:
        return await self.request("PUT", path, json=json, **kwargs)

    async def delete(self, path: str, *, json: Any = None, **kwargs) -> Any:
        # The fee-plan API takes its identifier in the DELETE body.
        return await self.request("DELETE", path, json=json, **kwargs)


def unwrap(body: Any) -> Any:
    """Return ``body["data"]`` for ``{success, data}`` envelopes, else the body."""
    if isinstance(body, dict) and "data" in body:
        return body["data"]
    return body
