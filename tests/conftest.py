from __future__ import annotations

from typing import Callable, List, Tuple

import pytest
import requests
from requests.adapters import BaseAdapter

Handler = Callable[[requests.PreparedRequest], Tuple[int, bytes]]


class FakeAdapter(BaseAdapter):
    """Transport adapter that answers from a handler instead of the network."""

    def __init__(self, handler: Handler) -> None:
        super().__init__()
        self.handler = handler
        self.requests: List[requests.PreparedRequest] = []

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        self.requests.append(request)
        status, body = self.handler(request)
        resp = requests.Response()
        resp.status_code = status
        resp._content = body
        resp._content_consumed = True
        resp.encoding = "utf-8"
        resp.url = request.url
        resp.request = request
        return resp

    def close(self) -> None:
        pass


@pytest.fixture
def fake_session():
    """Return a factory: handler -> (session, adapter)."""

    def _make(handler: Handler) -> Tuple[requests.Session, FakeAdapter]:
        session = requests.Session()
        adapter = FakeAdapter(handler)
        session.mount("http://", adapter)
        session.mount("https://", adapter)
        return session, adapter

    return _make


class FakeClock:
    """Stands in for the ``time`` module: sleeping advances the clock."""

    def __init__(self) -> None:
        self.now = 0.0
        self.sleeps: List[float] = []

    def monotonic(self) -> float:
        return self.now

    def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


@pytest.fixture
def fake_clock(monkeypatch) -> FakeClock:
    import sonar_teambuild.retry as retry_mod

    clock = FakeClock()
    monkeypatch.setattr(retry_mod, "time", clock)
    return clock
