"""Shared fixtures: a BoxClient wired to an in-memory recording transport."""
from __future__ import annotations

import json
from typing import Any

import httpx
import pytest
import pytest_asyncio

from boxkit.client import BoxClient
from boxkit.config import Config

BASE = "https://api.box.test"


class Recorder:
    """Records every request and answers with queued responses (200 {} by default)."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._queued: list[tuple[int, Any]] = []

    def queue(self, status: int = 200, body: Any = None) -> None:
        self._queued.append((status, body))

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status, body = self._queued.pop(0) if self._queued else (200, {})
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]

    @staticmethod
    def body(request: httpx.Request) -> Any:
        return json.loads(request.content) if request.content else None

    @staticmethod
    def query(request: httpx.Request) -> dict[str, str]:
        return dict(request.url.params)


@pytest.fixture
def recorder() -> Recorder:
    return Recorder()


@pytest_asyncio.fixture
async def client(recorder: Recorder):
    config = Config(api_root_url=BASE, access_token="test-token")
    box = BoxClient(config, transport=httpx.MockTransport(recorder.handler))
    yield box
    await box.aclose()
