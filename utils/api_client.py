"""
HTTP client for the assessment backend.

This module provides the single gateway to the REST API that can be used by
any layer:
- Repositories
- Services
- Streamlit pages
- Scripts

It owns transport concerns only: base URL, timeout, auth header, response
envelope unwrapping and mapping failures onto ``utils.errors``.
"""

import logging
from functools import lru_cache
from typing import Any, Dict, Optional, Type, TypeVar

import httpx
import pydantic

from config.settings import settings
from utils.errors import HttpStatusError, NetworkError, NotFoundError

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=pydantic.BaseModel)


def unwrap_envelope(body: Any) -> Any:
    """
    Strip the ``{"success": ..., "data": ...}`` envelope some endpoints use.

    Raw bodies are returned unchanged.

    Raises:
        HttpStatusError: If the envelope reports ``success: false``
    """
    if isinstance(body, dict) and "success" in body and ("data" in body or "message" in body):
        if not body["success"]:
            raise HttpStatusError(body.get("message") or "Request failed")
        return body.get("data")
    return body


def _error_message(response: httpx.Response) -> str:
    """Best-effort message from an error response body."""
    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "detail", "error"):
            if body.get(key):
                return str(body[key])
    return f"Request failed with status {response.status_code}"


class ApiClient:
    """
    Thin wrapper around ``httpx.Client`` issuing JSON requests.

    Paths are relative to the client's base URL, e.g. ``/admin/roles``.
    """

    def __init__(self, http: httpx.Client):
        """
        Initialize the client.

        Args:
            http: Configured httpx client (base_url, timeout, headers)
        """
        self.http = http

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        return self._request("GET", path, params=params)

    def post(self, path: str, json: Any = None) -> Any:
        return self._request("POST", path, json=json)

    def put(self, path: str, json: Any = None) -> Any:
        return self._request("PUT", path, json=json)

    def delete(self, path: str) -> Any:
        return self._request("DELETE", path)

    def _request(self, method: str, path: str, params: Optional[Dict[str, Any]] = None, json: Any = None) -> Any:
        if params:
            params = {k: v for k, v in params.items() if v is not None and v != ""}

        logger.debug("%s %s params=%s", method, path, params)
        try:
            response = self.http.request(method, path, params=params or None, json=json)
        except httpx.TransportError as exc:
            logger.error("%s %s failed: %s", method, path, exc)
            raise NetworkError(f"Could not reach the server: {exc}") from exc

        return self._parse(method, path, response)

    def _parse(self, method: str, path: str, response: httpx.Response) -> Any:
        if response.status_code >= 400:
            message = _error_message(response)
            logger.warning("%s %s -> %s: %s", method, path, response.status_code, message)
            error_class = NotFoundError if response.status_code == 404 else HttpStatusError
            raise error_class(message, status_code=response.status_code)

        if response.status_code == 204 or not response.content:
            return None

        try:
            body = response.json()
        except ValueError:
            # Plain text endpoints (e.g. health check)
            return response.text

        return unwrap_envelope(body)


def parse_model(model_class: Type[M], data: Any) -> M:
    """
    Validate a response body into model_class.

    Raises:
        HttpStatusError: If the body does not match the model
    """
    try:
        return model_class.model_validate(data)
    except pydantic.ValidationError as exc:
        logger.error("Unexpected %s payload: %s", model_class.__name__, exc)
        raise HttpStatusError("Unexpected response from the server") from exc


def build_http_client(
    base_url: str = None,
    timeout: float = None,
    token: Optional[str] = None,
) -> httpx.Client:
    """
    Create an httpx client configured for the backend.

    Args:
        base_url: Backend base URL, defaults to settings.API_BASE_URL
        timeout: Request timeout in seconds
        token: Optional bearer token

    Returns:
        httpx.Client ready to be wrapped by ApiClient
    """
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    token = token or settings.API_TOKEN
    if token:
        headers["Authorization"] = f"Bearer {token}"

    return httpx.Client(
        base_url=base_url or settings.API_BASE_URL,
        timeout=timeout or settings.API_TIMEOUT_SECONDS,
        headers=headers,
    )


@lru_cache()
def get_api_client() -> ApiClient:
    """
    Get cached API client.

    Returns:
        ApiClient singleton bound to settings.API_BASE_URL
    """
    return ApiClient(build_http_client())
