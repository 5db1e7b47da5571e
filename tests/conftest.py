"""Shared fixtures: an in-memory society backend behind httpx.MockTransport."""

import json
import os
import sys
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import httpx
import pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from config.settings import ApiSettings
from data.api_client import SocietyApiClient

BASE_URL = "http://society.test/restapi/v1.0"
BASE_PATH = "/restapi/v1.0"


@dataclass
class Call:
    method: str
    path: str
    params: Dict[str, str]
    body: Any
    headers: Dict[str, str]


class FakeBackend:
    """Routes (method, path) to canned or computed JSON and records every request."""

    def __init__(self):
        self.routes: Dict[tuple, tuple] = {}
        self.requests: List[Call] = []

    def on(self, method: str, path: str, body: Any = None, status: int = 200,
           error: Optional[Exception] = None):
        self.routes[(method, path)] = (status, body, error)

    def handler(self, request: httpx.Request) -> httpx.Response:
        path = request.url.path[len(BASE_PATH):]
        body = json.loads(request.content) if request.content else None
        self.requests.append(Call(request.method, path, dict(request.url.params), body, dict(request.headers)))
        route = self.routes.get((request.method, path))
        if route is None:
            return httpx.Response(404, json={"isSuccess": False, "resMsg": f"No route {path}"})
        status, payload, error = route
        if error is not None:
            raise error
        if callable(payload):
            payload = payload(body)
        return httpx.Response(status, json=payload)

    def calls(self, method: Optional[str] = None, path: Optional[str] = None) -> List[Call]:
        return [
            c for c in self.requests
            if (method is None or c.method == method) and (path is None or c.path == path)
        ]


@pytest.fixture
def backend():
    return FakeBackend()


@pytest.fixture
def client(backend):
    settings = ApiSettings(base_url=BASE_URL, token="secret", timeout=5)
    return SocietyApiClient(settings, transport=httpx.MockTransport(backend.handler))


def ok(result=None, msg=None):
    body = {"statusCode": 200, "isSuccess": True, "result": result}
    if msg:
        body["resMsg"] = msg
    return body


def fail(msg=None):
    body = {"statusCode": 200, "isSuccess": False}
    if msg:
        body["resMsg"] = msg
    return body
