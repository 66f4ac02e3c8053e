"""Shared HTTP client wrapper with timeouts, optional retries and jitter."""

from __future__ import annotations

import logging
import random
import time
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

import requests
from requests import Response, Session
from requests.exceptions import JSONDecodeError, RequestException

logger = logging.getLogger(__name__)


class HTTPClientError(RuntimeError):
    """Raised when the HTTP client cannot satisfy a request."""

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


@dataclass(frozen=True)
class HTTPClientConfig:
    """Configuration for the shared HTTP client.

    ``max_retries`` counts total attempts, so the default of 1 issues exactly
    one request per call.
    """

    base_url: str
    timeout: float = 8.0
    max_retries: int = 1
    backoff_seconds: float = 0.5
    backoff_jitter: float = 0.2
    headers: Mapping[str, str] = field(default_factory=dict)
    encoding: Optional[str] = None


class HTTPClient:
    """Small HTTP client that applies timeout and retry/backoff policies."""

    def __init__(
        self,
        config: HTTPClientConfig,
        session: Optional[Session] = None,
    ) -> None:
        self._config = config
        self._session = session or requests.Session()
        if config.headers:
            self._session.headers.update(dict(config.headers))

    def get(self, path: str, params: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        """GET ``path`` and decode the body as a JSON object."""

        response = self._request(path, params)
        try:
            payload = response.json()
        except (JSONDecodeError, ValueError) as exc:
            raise HTTPClientError("Invalid JSON response", status_code=response.status_code) from exc
        if not isinstance(payload, dict):
            raise HTTPClientError("Expected a JSON object", status_code=response.status_code)
        return payload

    def get_text(self, path: str = "", params: Optional[Mapping[str, Any]] = None) -> str:
        """GET ``path`` and return the decoded body text."""

        response = self._request(path, params)
        if self._config.encoding:
            response.encoding = self._config.encoding
        return response.text

    def _request(self, path: str, params: Optional[Mapping[str, Any]]) -> Response:
        url = self._build_url(path)
        attempts = max(self._config.max_retries, 1)
        attempt = 0
        last_error: Optional[Exception] = None

        while attempt < attempts:
            attempt += 1
            try:
                response = self._session.get(url, params=params, timeout=self._config.timeout)
                self._check_status(response)
                return response
            except (RequestException, HTTPClientError) as exc:
                last_error = exc
                if attempt >= attempts:
                    break
                sleep_for = self._compute_backoff(attempt)
                logger.warning(
                    "HTTP request to %s failed (attempt %s/%s): %s. Retrying in %.2fs.",
                    url,
                    attempt,
                    attempts,
                    exc,
                    sleep_for,
                )
                time.sleep(sleep_for)

        status_code = getattr(last_error, "status_code", None)
        raise HTTPClientError(
            f"Failed to fetch {url}: {last_error}", status_code=status_code
        ) from last_error

    def _compute_backoff(self, attempt: int) -> float:
        base = self._config.backoff_seconds * (2 ** (attempt - 1))
        jitter = random.uniform(-self._config.backoff_jitter, self._config.backoff_jitter)
        return max(base + jitter, 0.0)

    def _build_url(self, path: str) -> str:
        base = self._config.base_url.rstrip("/")
        suffix = path.lstrip("/")
        if not suffix:
            return self._config.base_url
        return f"{base}/{suffix}"

    @staticmethod
    def _check_status(response: Response) -> None:
        status = response.status_code
        if status >= 500:
            raise HTTPClientError(f"Server error {status}", status_code=status)
        if status >= 400:
            raise HTTPClientError(f"Client error {status}", status_code=status)
