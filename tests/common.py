import json
from typing import Any

import httpx


class MockResponse:
    """Stand-in for httpx.Response. A payload of None simulates a non-JSON body."""

    def __init__(self, status_code: int, payload: Any = None, text: str = "") -> None:
        self.status_code = status_code
        self._payload = payload
        self.text = text if payload is None else json.dumps(payload)

    def json(self) -> Any:
        if self._payload is None:
            raise ValueError("not json")
        return self._payload


class MockAsyncClient:
    """Minimal async context-manager mock for httpx.AsyncClient that records requests."""

    def __init__(self, response: MockResponse, *args: Any, **kwargs: Any) -> None:
        self._response = response
        self.init_kwargs = kwargs
        self.calls: list[dict[str, Any]] = []

    async def __aenter__(self) -> "MockAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def request(self, method: str, url: str, **kwargs: Any) -> MockResponse:
        self.calls.append({"method": method, "url": url, **kwargs})
        return self._response


class FailingAsyncClient:
    """Async client whose request raises the given httpx error to simulate transport failure."""

    def __init__(self, exc_cls: type[httpx.RequestError], *args: Any, **kwargs: Any) -> None:
        self._exc_cls = exc_cls

    async def __aenter__(self) -> "FailingAsyncClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        return None

    async def request(self, method: str, url: str, **kwargs: Any) -> MockResponse:
        raise self._exc_cls("Network failure", request=httpx.Request(method, url))


class RecordingSink:
    """Log sink that keeps (level, message) pairs."""

    def __init__(self) -> None:
        self.records: list[tuple[int, str]] = []

    def log(self, level: int, msg: str, *args: Any, **kwargs: Any) -> None:
        self.records.append((level, msg))
