"""HTTP wrapper utilities for the job_deck API client."""

import logging
from typing import Any, Optional

import requests

from job_deck.config import get_settings
from job_deck.errors import NotFoundError, RequestError

logger = logging.getLogger(__name__)


def _headers(token: Optional[str]) -> dict:
    headers = {"Accept": "application/json"}
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


def _error_message(resp: requests.Response) -> str:
    """Server-provided message, falling back to a generic one."""
    text = resp.text
    if not text:
        return "API error"
    try:
        body = resp.json()
    except ValueError:
        return text
    if isinstance(body, dict):
        message = body.get("error") or body.get("detail")
        if isinstance(message, str) and message:
            return message
    return text


def _make_request(method: str, path: str, token: Optional[str], **kwargs) -> Any:
    """Generic request with error handling. Raises instead of returning defaults."""
    settings = get_settings()
    url = f"{settings.api_url}{path}"
    logger.debug("%s %s", method.upper(), path)
    try:
        resp = requests.request(
            method,
            url,
            headers=_headers(token),
            timeout=settings.timeout,
            **kwargs,
        )
    except requests.RequestException as e:
        raise RequestError(str(e)) from e

    if not resp.ok:
        message = _error_message(resp)
        if resp.status_code == 404:
            raise NotFoundError(message, body=resp.text)
        raise RequestError(message, resp.status_code, body=resp.text)

    if resp.status_code == 204 or not resp.text:
        return None
    try:
        return resp.json()
    except ValueError as e:
        body = resp.text[:200] if resp.text else "(empty)"
        raise RequestError(f"Invalid response ({resp.status_code}): {body}", resp.status_code) from e


def get(path: str, token: Optional[str] = None, **kwargs) -> Any:
    return _make_request("get", path, token, **kwargs)


def post(path: str, token: Optional[str] = None, **kwargs) -> Any:
    return _make_request("post", path, token, **kwargs)


def put(path: str, token: Optional[str] = None, **kwargs) -> Any:
    return _make_request("put", path, token, **kwargs)


def delete(path: str, token: Optional[str] = None, **kwargs) -> Any:
    return _make_request("delete", path, token, **kwargs)
