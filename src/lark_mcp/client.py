"""
Lark / Feishu Open Platform client.

Holds the process-wide client handle used by every tool. The handle is built
lazily from environment credentials on first use and reused afterwards.
"""

import base64
import os
import time
from typing import Any, Callable, Literal, NamedTuple

import httpx

from .exceptions import ConfigurationError, LarkAPIError, TokenAcquisitionError
from .logging_config import get_logger

logger = get_logger(__name__)

Domain = Literal["feishu", "lark"]

BASE_URLS: dict[str, str] = {
    "feishu": "https://open.feishu.cn",
    "lark": "https://open.larksuite.com",
}

TOKEN_PATH = "/open-apis/auth/v3/tenant_access_token/internal"

# Refresh the tenant token this many seconds before it expires
TOKEN_REFRESH_MARGIN = 300


class LarkConfig(NamedTuple):
    app_id: str
    app_secret: str
    domain: Domain = "feishu"


def get_config() -> LarkConfig:
    app_id = os.getenv("LARK_APP_ID")
    app_secret = os.getenv("LARK_APP_SECRET")
    if not app_id or not app_secret:
        raise ConfigurationError(
            "LARK_APP_ID and LARK_APP_SECRET environment variables are required"
        )

    domain = os.getenv("LARK_DOMAIN", "feishu").strip().lower()
    if domain not in BASE_URLS:
        logger.warning(f"Unknown LARK_DOMAIN '{domain}', using 'feishu'")
        domain = "feishu"

    return LarkConfig(app_id=app_id, app_secret=app_secret, domain=domain)


def _query_value(value: Any) -> Any:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return [_query_value(v) for v in value]
    return value


def _build_query(params: dict[str, Any] | None) -> dict[str, Any] | None:
    if not params:
        return None
    return {k: _query_value(v) for k, v in params.items() if v is not None}


def _build_body(body: dict[str, Any] | None) -> dict[str, Any] | None:
    if body is None:
        return None
    return {k: v for k, v in body.items() if v is not None}


def _parse_response(response: httpx.Response) -> dict[str, Any]:
    content_type = response.headers.get("content-type", "")

    if "json" not in content_type:
        response.raise_for_status()
        return {
            "content_type": content_type or "application/octet-stream",
            "size": len(response.content),
            "content_base64": base64.b64encode(response.content).decode("ascii"),
        }

    payload = response.json() if response.content else {}
    code = payload.get("code", 0) if isinstance(payload, dict) else 0
    if code != 0:
        raise LarkAPIError(code, payload.get("msg", ""), response.status_code)

    response.raise_for_status()
    return payload


class LarkClient:
    """Async client for the Open Platform using a tenant access token.

    Tools talk to the platform through :meth:`request` only. The underlying
    ``httpx.AsyncClient`` is created on first use and shared by all calls.
    """

    def __init__(
        self,
        config: LarkConfig,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self.base_url = BASE_URLS[config.domain]
        self._timeout = timeout
        self._transport = transport
        self._http: httpx.AsyncClient | None = None
        self._token: str | None = None
        self._token_expires_at = 0.0

    def _get_http_client(self) -> httpx.AsyncClient:
        if self._http is None or self._http.is_closed:
            self._http = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self._timeout,
                transport=self._transport,
            )
        return self._http

    async def _tenant_access_token(self) -> str:
        if self._token and time.monotonic() < self._token_expires_at:
            return self._token

        logger.debug("Requesting tenant access token")
        response = await self._get_http_client().post(
            TOKEN_PATH,
            json={
                "app_id": self.config.app_id,
                "app_secret": self.config.app_secret,
            },
        )
        payload = response.json()
        if payload.get("code", 0) != 0 or "tenant_access_token" not in payload:
            raise TokenAcquisitionError(
                payload.get("code", -1),
                payload.get("msg", "tenant_access_token missing from response"),
                response.status_code,
            )

        expire = int(payload.get("expire", 0))
        self._token = payload["tenant_access_token"]
        self._token_expires_at = time.monotonic() + max(
            expire - TOKEN_REFRESH_MARGIN, 0
        )
        return self._token

    async def request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        body: dict[str, Any] | None = None,
        data: dict[str, Any] | None = None,
        files: dict[str, Any] | None = None,
    ) -> dict[str, Any]:
        """Issue one Open Platform call and return the decoded response body.

        Args:
            method: HTTP verb
            path: Resource path starting with ``/open-apis/``
            params: Query parameters, ``None`` values are dropped
            body: JSON body, top-level ``None`` values are dropped
            data: Multipart form fields (uploads only)
            files: Multipart files (uploads only)

        Returns:
            The response body, usually ``{"code": 0, "msg": ..., "data": ...}``

        Raises:
            LarkAPIError: the platform reported a non-zero code
            httpx.HTTPError: transport failure or non-JSON error response
        """
        token = await self._tenant_access_token()
        headers = {"Authorization": f"Bearer {token}"}

        logger.debug(f"Lark request: {method} {path}", extra={"method": method, "path": path})
        response = await self._get_http_client().request(
            method,
            path,
            params=_build_query(params),
            json=None if files else _build_body(body),
            data=data,
            files=files,
            headers=headers,
        )

        try:
            return _parse_response(response)
        except LarkAPIError as e:
            logger.warning(
                f"Lark API error on {method} {path}: {e}",
                extra={"method": method, "path": path, "code": e.code},
            )
            raise

    async def aclose(self) -> None:
        if self._http is not None:
            await self._http.aclose()
            self._http = None


ClientGetter = Callable[[], LarkClient]

_client: LarkClient | None = None


def get_client() -> LarkClient:
    global _client
    if _client is not None:
        return _client
    _client = LarkClient(get_config())
    return _client


def reset_client() -> None:
    """Forget the memoized client (tests only)."""
    global _client
    _client = None
