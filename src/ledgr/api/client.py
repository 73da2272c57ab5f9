"""Thin JSON client over ``httpx`` for the Ledgr REST API."""

from __future__ import annotations

from typing import Any, Mapping, Optional

import httpx

from ..config import BaseConfig
from ..logging_config import get_logger
from .errors import ApiError, TransportError, error_for_status
from .session import AuthSession

logger = get_logger(__name__)

QueryParams = Mapping[str, Any]


class ApiClient:
    """Authenticated request helper shared by every repository.

    One ``httpx.Client`` is kept for the lifetime of the app. The bearer token
    is read from the session on each request. Nothing is retried: a failure is
    raised as a typed :class:`ApiError` and the caller decides what to show.
    """

    def __init__(
        self,
        config: BaseConfig,
        session: AuthSession,
        *,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.config = config
        self.session = session
        self._http = httpx.Client(
            base_url=config.API_BASE_URL,
            timeout=config.REQUEST_TIMEOUT,
            headers={"Accept": "application/json"},
            transport=transport,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "ApiClient":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def _headers(self) -> dict[str, str]:
        if self.session.token:
            return {"Authorization": f"Bearer {self.session.token}"}
        return {}

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[QueryParams] = None,
        json: Any = None,
    ) -> Any:
        """Issue one request and return the decoded JSON body (or ``None``)."""

        clean_params = _clean_params(params)
        try:
            response = self._http.request(
                method,
                path,
                params=clean_params,
                json=json,
                headers=self._headers(),
            )
        except httpx.TimeoutException as exc:
            logger.warning("Request timed out", extra={"method": method, "path": path})
            raise TransportError("The server took too long to respond") from exc
        except httpx.TransportError as exc:
            logger.warning(
                "Request failed before reaching the server",
                extra={"method": method, "path": path, "error": str(exc)},
            )
            raise TransportError() from exc

        body = _decode(response)
        logger.debug(
            "%s %s -> %s", method, response.request.url.raw_path.decode("ascii", "replace"), response.status_code
        )
        if response.is_success:
            return body

        error = error_for_status(response.status_code, body)
        logger.warning(
            "API request rejected",
            extra={"method": method, "path": path, "status": response.status_code, "error_message": error.message},
        )
        raise error

    def get(self, path: str, params: Optional[QueryParams] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, payload: Any = None) -> Any:
        return self.request("POST", path, json=payload)

    def put(self, path: str, payload: Any = None) -> Any:
        return self.request("PUT", path, json=payload)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)


def _clean_params(params: Optional[QueryParams]) -> Optional[dict[str, str]]:
    """Drop empty values so the query string never carries ``key=``."""

    if not params:
        return None
    cleaned = {
        key: str(value)
        for key, value in params.items()
        if value is not None and str(value) != ""
    }
    return cleaned or None


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        if response.is_success:
            raise ApiError("The server returned an unreadable response", status_code=response.status_code)
        return None
