import json

import httpx
import pytest

from app.config import reload_settings


class FakeRechat:
    """Stands in for api.rechat.com behind an httpx.MockTransport."""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.error: Exception | None = None
        self.respond(204)

    def respond(self, status_code: int, json_body=None, text: str | None = None) -> None:
        if json_body is not None:
            self._reply = lambda: httpx.Response(status_code, json=json_body)
        else:
            self._reply = lambda: httpx.Response(status_code, text=text or "")

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return self._reply()

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))

    @property
    def last_body(self):
        return json.loads(self.requests[-1].content)


@pytest.fixture
def rechat_api() -> FakeRechat:
    return FakeRechat()


@pytest.fixture
def settings_env(tmp_path, monkeypatch):
    monkeypatch.setenv("HISTORY_FILE", str(tmp_path / "history.json"))
    monkeypatch.setenv("OPENAPI_SPEC_PATH", "")
    settings = reload_settings()
    yield settings
    monkeypatch.undo()
    reload_settings()
