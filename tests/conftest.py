"""Fixtures compartidas: settings, proveedor simulado (httpx.MockTransport) y logger."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

from chat2desk import Chat2DeskClient, ClientSettings
from chat2desk.adapters.http_client import ApiTransport

FIXTURES_DIR = Path(__file__).parent / "fixtures"
BASE_URL = "https://api.chat2desk.test"
TOKEN = "secret-token"

Responder = Callable[[httpx.Request], httpx.Response]


def load_fixture(*parts: str) -> bytes:
    return FIXTURES_DIR.joinpath(*parts).read_bytes()


class RecordingLogger:
    """Logger en memoria que cumple `LoggerLike`."""

    def __init__(self) -> None:
        self.records: list[tuple[str, str]] = []

    def _record(self, level: str, msg: str, args: tuple[Any, ...]) -> None:
        self.records.append((level, msg % args if args else msg))

    def debug(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("debug", msg, args)

    def info(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("info", msg, args)

    def warning(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("warning", msg, args)

    def error(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("error", msg, args)

    def critical(self, msg: str, *args: Any, **kwargs: Any) -> None:
        self._record("critical", msg, args)

    def messages(self, level: str) -> list[str]:
        return [message for record_level, message in self.records if record_level == level]


class FakeVendor:
    """Proveedor simulado: rutas (método, path) -> respuesta; guarda cada petición."""

    def __init__(self) -> None:
        self.requests: list[httpx.Request] = []
        self._routes: dict[tuple[str, str], list[Responder]] = {}

    def add(self, method: str, path: str, responder: Responder) -> None:
        self._routes.setdefault((method.upper(), "/" + path.lstrip("/")), []).append(responder)

    def reply(self, method: str, path: str, payload: Any = None, *, status_code: int = 200, content: bytes | None = None) -> None:
        if content is None:
            content = json.dumps(payload).encode("utf-8")
        self.add(method, path, lambda request: httpx.Response(status_code, content=content))

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        responders = self._routes.get((request.method, request.url.path))
        if not responders:
            return httpx.Response(404, json={"status": "error", "errors": "route not stubbed"})
        # La última respuesta registrada se repite si hay más peticiones que respuestas.
        responder = responders.pop(0) if len(responders) > 1 else responders[0]
        return responder(request)

    def last_json(self) -> Any:
        return json.loads(self.requests[-1].content)


@pytest.fixture
def settings() -> ClientSettings:
    return ClientSettings(base_url=BASE_URL, token=TOKEN)


@pytest.fixture
def vendor() -> FakeVendor:
    return FakeVendor()


@pytest.fixture
def logger() -> RecordingLogger:
    return RecordingLogger()


@pytest.fixture
def transport(settings: ClientSettings, vendor: FakeVendor, logger: RecordingLogger) -> ApiTransport:
    return ApiTransport(settings, logger=logger, transport=httpx.MockTransport(vendor))


@pytest.fixture
def client(settings: ClientSettings, vendor: FakeVendor, logger: RecordingLogger) -> Chat2DeskClient:
    return Chat2DeskClient(settings, logger=logger, transport=httpx.MockTransport(vendor))


@pytest.fixture
def login_body() -> Callable[[str], bytes]:
    """Cuerpo crudo de `fixtures/login/<name>.json`."""

    return lambda name: load_fixture("login", f"{name}.json")
