import asyncio
import logging
import os
import platform
import time
from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Type, TypeVar

import httpx
from dotenv import load_dotenv
from pydantic import BaseModel, ValidationError

from .observability import log_event

T = TypeVar("T", bound=BaseModel)

__version__ = "0.1.0"

DEFAULT_HOST = "api.contentful.com"
CMA_CONTENT_TYPE = "application/vnd.contentful.management.v1+json"
RATE_LIMIT_RESET_HEADER = "X-Contentful-RateLimit-Reset"
REQUEST_ID_HEADER = "X-Contentful-Request-Id"

# Network and timeout failures that are safe to retry.
RETRYABLE_TRANSPORT_ERRORS = (
    httpx.TimeoutException,
    httpx.NetworkError,
    httpx.RemoteProtocolError,
)


class ContentfulClientError(Exception):
    """Base error for client failures."""


class ContentfulHTTPError(ContentfulClientError):
    def __init__(
        self,
        *,
        status_code: int,
        method: str,
        url: str,
        message: str,
        response_json: Optional[Dict[str, Any]] = None,
        response_text: Optional[str] = None,
        request_id: Optional[str] = None,
    ):
        super().__init__(f"{status_code} {method} {url}: {message}")
        self.status_code = status_code
        self.method = method
        self.url = url
        self.message = message
        self.response_json = response_json
        self.response_text = response_text
        self.request_id = request_id

    @property
    def error_id(self) -> Optional[str]:
        """CMA error kind, e.g. ``NotFound`` or ``VersionMismatch``."""
        sys_ = (self.response_json or {}).get("sys")
        return sys_.get("id") if isinstance(sys_, dict) else None


@dataclass(frozen=True)
class RetryConfig:
    max_retries: int = 2  # total extra attempts
    backoff_base_seconds: float = 0.3  # 0.3, 0.6, 1.2...
    retry_statuses: frozenset[int] = frozenset({502, 503, 504})
    retry_on_429: bool = True  # CMA rate-limits per second


class ContentfulParseError(ContentfulClientError):
    pass


class ContentfulModelValidationError(ContentfulClientError):
    pass


def user_agent(application: Optional[str] = None) -> str:
    parts = [
        f"sdk contentful-cma/{__version__}",
        f"platform python/{platform.python_version()}",
    ]
    if application:
        parts.append(f"app {application}")
    return "; ".join(parts) + ";"


class ContentfulClient:
    """
    Shared HTTP client for the Contentful Management API.
    - Handles bearer auth, host, timeouts, retries
    - Returns raw dict payloads or optional Pydantic-validated models
    - No resource logic; endpoint modules own URLs and headers
    """

    def __init__(
        self,
        *,
        access_token: str,
        host: str = DEFAULT_HOST,
        insecure: bool = False,
        base_path: str = "",
        timeout_seconds: float = 30.0,
        retry: Optional[RetryConfig] = None,
        logger: Optional[logging.Logger] = None,
        http: Optional[httpx.AsyncClient] = None,
        request_id: Optional[str] = None,
        application: Optional[str] = None,
        headers: Optional[Mapping[str, str]] = None,
    ):
        access_token = access_token or ""
        host = (host or "").strip().rstrip("/")

        if not access_token:
            raise ValueError("access_token must be provided.")
        if not host:
            raise ValueError("host must be provided.")

        scheme = "http" if insecure else "https"
        self.host = host
        self.base_url = f"{scheme}://{host}{base_path.rstrip('/')}"
        self.timeout_seconds = timeout_seconds
        self.retry = retry if retry is not None else RetryConfig()
        self.log = logger or logging.getLogger("contentful_cma.client")
        self.request_id = request_id

        default_headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
            "Content-Type": CMA_CONTENT_TYPE,
            "X-Contentful-User-Agent": user_agent(application),
        }
        default_headers.update(headers or {})

        self._owns_http = http is None
        self.http = http or httpx.AsyncClient(
            base_url=self.base_url,
            headers=default_headers,
            timeout=timeout_seconds,
        )

    @classmethod
    def from_env(cls, **kwargs) -> "ContentfulClient":
        load_dotenv()
        access_token = os.getenv("CONTENTFUL_MANAGEMENT_ACCESS_TOKEN", "").strip()
        host = os.getenv("CONTENTFUL_HOST", "").strip() or DEFAULT_HOST
        return cls(access_token=access_token, host=host, **kwargs)

    async def aclose(self) -> None:
        if self._owns_http:
            await self.http.aclose()

    async def __aenter__(self) -> "ContentfulClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    async def request(
        self,
        method: str,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Core request method.
        - Retries on transient failures (network/timeouts + 502/503/504 and 429)
        - Raises ContentfulHTTPError on non-2xx HTTP responses
        - Raises ContentfulClientError on network/timeout errors after retries
        - Raises ContentfulParseError if response isn't valid JSON
        - Returns parsed JSON dict on success
        """
        method = method.upper()
        start = time.perf_counter()
        req_headers = _stringify_headers(headers)

        attempt = 0

        while True:
            try:
                resp = await self.http.request(
                    method, url, params=params, json=json, headers=req_headers
                )
                duration_ms = int((time.perf_counter() - start) * 1000)

                # structured-ish log without secrets
                self.log.debug(
                    "cma.request",
                    extra={
                        "tool": tool,
                        "method": method,
                        "url": str(resp.request.url),
                        "status": resp.status_code,
                        "duration_ms": duration_ms,
                        "attempt": attempt,
                    },
                )

                if resp.status_code in self.retry.retry_statuses or (
                    self.retry.retry_on_429 and resp.status_code == 429
                ):
                    if attempt < self.retry.max_retries:
                        await asyncio.sleep(self._retry_delay(resp, attempt))
                        attempt += 1
                        continue

                self._log_call(
                    tool=tool,
                    method=method,
                    url=url,
                    status=resp.status_code,
                    duration_ms=duration_ms,
                    attempt=attempt,
                )

                if resp.status_code < 200 or resp.status_code >= 300:
                    raise self._to_http_error(resp, method=method)

                return self._safe_json(resp)

            except RETRYABLE_TRANSPORT_ERRORS as exc:
                if attempt < self.retry.max_retries:
                    await asyncio.sleep(self.retry.backoff_base_seconds * (2**attempt))
                    attempt += 1
                    continue
                self._log_call(
                    tool=tool,
                    method=method,
                    url=url,
                    status="exception",
                    duration_ms=int((time.perf_counter() - start) * 1000),
                    attempt=attempt,
                    error_type=type(exc).__name__,
                )
                raise ContentfulClientError(
                    f"Network/timeout error calling {method} {url}: {exc}"
                ) from exc

            except httpx.HTTPError as exc:
                # Other httpx exceptions (rare) - do not blindly retry
                self._log_call(
                    tool=tool,
                    method=method,
                    url=url,
                    status="exception",
                    duration_ms=int((time.perf_counter() - start) * 1000),
                    attempt=attempt,
                    error_type=type(exc).__name__,
                )
                raise ContentfulClientError(
                    f"HTTPX error calling {method} {url}: {exc}"
                ) from exc

    def _retry_delay(self, resp: httpx.Response, attempt: int) -> float:
        if resp.status_code == 429:
            reset = resp.headers.get(RATE_LIMIT_RESET_HEADER)
            if reset is not None:
                try:
                    return max(0.0, float(reset))
                except ValueError:
                    pass
        return self.retry.backoff_base_seconds * (2**attempt)

    def _log_call(self, **fields: Any) -> None:
        url = fields.pop("url")
        log_event(
            "cma_call",
            request_id=self.request_id,
            endpoint=url,
            **{k: v for k, v in fields.items() if v is not None},
        )

    def _safe_json(self, resp: httpx.Response) -> Dict[str, Any]:
        # Handle empty responses (204 No Content, etc.)
        if not resp.content:
            return {}

        try:
            data = resp.json()
        except ValueError as exc:
            snippet = (resp.text or "")[:500]
            raise ContentfulParseError(
                f"Expected JSON from {resp.request.method} "
                f"{resp.request.url}, got non-JSON body snippet: "
                f"{snippet!r}"
            ) from exc

        if not isinstance(data, dict):
            raise ContentfulParseError(
                f"Expected top-level JSON object from "
                f"{resp.request.method} {resp.request.url}, "
                f"got {type(data).__name__}"
            )
        return data

    def _to_http_error(
        self, resp: httpx.Response, *, method: str
    ) -> ContentfulHTTPError:
        url = str(resp.request.url)
        # Try JSON first; fall back to text snippet.
        response_json: Optional[Dict[str, Any]] = None
        response_text: Optional[str] = None
        message = "request failed"

        try:
            parsed = resp.json()
            if isinstance(parsed, dict):
                response_json = parsed
                # CMA errors carry a message and an error kind under sys.id
                sys_ = parsed.get("sys") if isinstance(parsed.get("sys"), dict) else {}
                message = parsed.get("message") or sys_.get("id") or message
        except ValueError:
            response_text = (resp.text or "")[:500]

        return ContentfulHTTPError(
            status_code=resp.status_code,
            method=method,
            url=url,
            message=message,
            response_json=response_json,
            response_text=response_text,
            request_id=resp.headers.get(REQUEST_ID_HEADER),
        )

    async def get(
        self,
        url: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("GET", url, params=params, headers=headers, tool=tool)

    async def post(
        self,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("POST", url, json=json, headers=headers, tool=tool)

    async def put(
        self,
        url: str,
        *,
        json: Any = None,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("PUT", url, json=json, headers=headers, tool=tool)

    async def patch(
        self,
        url: str,
        *,
        json: Any,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("PATCH", url, json=json, headers=headers, tool=tool)

    async def delete(
        self,
        url: str,
        *,
        headers: Optional[Mapping[str, Any]] = None,
        tool: Optional[str] = None,
    ) -> Dict[str, Any]:
        return await self.request("DELETE", url, headers=headers, tool=tool)

    async def request_model(
        self, model: Type[T], method: str, url: str, **kwargs: Any
    ) -> T:
        return validate_model(model, await self.request(method, url, **kwargs))


def validate_model(model: Type[T], payload: Dict[str, Any]) -> T:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        raise ContentfulModelValidationError(
            f"Response did not match model {model.__name__}: {exc}"
        ) from exc


def _stringify_headers(
    headers: Optional[Mapping[str, Any]],
) -> Optional[Dict[str, str]]:
    # Version headers arrive as ints; httpx only accepts str/bytes values.
    if not headers:
        return None
    return {k: str(v) for k, v in headers.items() if v is not None}
