from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Callable, Mapping, Optional

import requests

from ..core.constants import DEFAULT_API_TIMEOUT
from ..core.exceptions import ApiError, AuthenticationError, BackendUnavailableError, NotFoundError

logger = logging.getLogger(__name__)


@dataclass
class ApiConfig:
    base_url: str
    timeout: float = DEFAULT_API_TIMEOUT


def unwrap_envelope(body: Any) -> Any:
    """Responses may be wrapped as ``{"data": ..., "message": ...}``; return the payload."""
    if isinstance(body, dict) and body.get("data") is not None:
        return body["data"]
    return body


def clean_params(params: Optional[Mapping[str, Any]]) -> Optional[dict]:
    """Drop query parameters that were not provided (``None`` or empty string)."""
    if not params:
        return None
    out = {}
    for key, value in params.items():
        if value is None or value == "":
            continue
        out[key] = getattr(value, "value", value)
    return out or None


class ApiClient:
    """Thin HTTP client for the transport REST backend.

    One ``requests.Session`` is shared by the whole process; the bearer token is
    looked up per request through ``token_provider`` (the Flask session in the web
    app). No retries: a failed call surfaces as an ``ApiError`` subclass.
    """

    def __init__(
        self,
        config: ApiConfig,
        *,
        token_provider: Optional[Callable[[], Optional[str]]] = None,
        on_unauthorized: Optional[Callable[[], None]] = None,
        session: Optional[requests.Session] = None,
    ):
        self._config = config
        self._token_provider = token_provider or (lambda: None)
        self._on_unauthorized = on_unauthorized
        self._session = session or requests.Session()

    @property
    def base_url(self) -> str:
        return self._config.base_url.rstrip("/")

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def _headers(self) -> dict:
        headers = {"Content-Type": "application/json", "Accept": "application/json"}
        token = self._token_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    @staticmethod
    def _error_message(resp, default: str) -> str:
        try:
            body = resp.json()
        except ValueError:
            return default
        if isinstance(body, dict):
            for key in ("message", "title", "error"):
                if body.get(key):
                    return str(body[key])
        return default

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[Mapping[str, Any]] = None,
        json: Any = None,
    ) -> Any:
        url = self._url(path)
        try:
            resp = self._session.request(
                method,
                url,
                params=clean_params(params),
                json=json,
                headers=self._headers(),
                timeout=self._config.timeout,
            )
        except requests.Timeout as e:
            logger.error("API timeout: %s %s", method, url)
            raise BackendUnavailableError("Tempo de resposta da API esgotado") from e
        except requests.ConnectionError as e:
            logger.error("API unreachable: %s %s (%s)", method, url, e)
            raise BackendUnavailableError("Não foi possível conectar à API") from e

        status = resp.status_code
        if status == 401:
            # Expired or invalid token: forget it, never redirect from here.
            logger.warning("Token expirado. Faça login novamente. (%s %s)", method, path)
            if self._on_unauthorized:
                self._on_unauthorized()
            raise AuthenticationError(self._error_message(resp, "Sessão expirada. Faça login novamente."))
        if status == 404:
            raise NotFoundError(self._error_message(resp, "Registro não encontrado"), status_code=status)
        if status >= 400:
            message = self._error_message(resp, f"Erro {status} em {method} {path}")
            logger.warning("API error %s on %s %s: %s", status, method, path, message)
            raise ApiError(message, status_code=status)

        if status == 204 or not resp.content:
            return None
        try:
            body = resp.json()
        except ValueError:
            raise ApiError(f"Resposta inválida da API em {method} {path}", status_code=status)
        return unwrap_envelope(body)

    def get(self, path: str, *, params: Optional[Mapping[str, Any]] = None) -> Any:
        return self.request("GET", path, params=params)

    def post(self, path: str, *, json: Any = None) -> Any:
        return self.request("POST", path, json=json)

    def put(self, path: str, *, json: Any = None) -> Any:
        return self.request("PUT", path, json=json)

    def patch(self, path: str, *, json: Any = None) -> Any:
        return self.request("PATCH", path, json=json)

    def delete(self, path: str) -> Any:
        return self.request("DELETE", path)
