from __future__ import annotations

from typing import Any, Optional

import pytest

from src.unibus_admin.unibus_admin.backend.cache import QueryCache
from src.unibus_admin.unibus_admin.backend.client import ApiClient, ApiConfig

BASE_URL = "http://backend.test/api"


class FakeResponse:
    def __init__(self, status_code: int = 200, body: Any = None, *, text: Optional[str] = None):
        self.status_code = status_code
        self._body = body
        self._text = text
        self.content = (text or "").encode() if body is None else b"{}"

    def json(self):
        if self._text is not None:
            raise ValueError("not json")
        return self._body


class FakeSession:
    """Stands in for ``requests.Session``: canned answers keyed by method and path."""

    def __init__(self):
        self.routes: dict[tuple[str, str], Any] = {}
        self.calls: list[dict] = []

    def add(self, method: str, path: str, status: int = 200, body: Any = None, *, text: Optional[str] = None, error: Optional[Exception] = None):
        self.routes[(method.upper(), path)] = error if error is not None else FakeResponse(status, body, text=text)
        return self

    def request(self, method, url, params=None, json=None, headers=None, timeout=None):
        path = url[len(BASE_URL):] if url.startswith(BASE_URL) else url
        self.calls.append(
            {"method": method, "path": path, "url": url, "params": params, "json": json, "headers": headers, "timeout": timeout}
        )
        answer = self.routes.get((method.upper(), path))
        if isinstance(answer, Exception):
            raise answer
        if answer is None:
            return FakeResponse(404, {"message": "Registro não encontrado"})
        return answer

    def last(self, method: Optional[str] = None) -> dict:
        calls = [c for c in self.calls if method is None or c["method"] == method]
        return calls[-1]


@pytest.fixture
def fake_session() -> FakeSession:
    return FakeSession()


@pytest.fixture
def client(fake_session) -> ApiClient:
    return ApiClient(ApiConfig(base_url=BASE_URL, timeout=2), session=fake_session)


@pytest.fixture
def cache() -> QueryCache:
    return QueryCache(60)
