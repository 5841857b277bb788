import json

import httpx
import pytest
from fastapi.testclient import TestClient

from ads_api.config import Settings
from ads_api.db import init_db, make_engine, make_session_factory
from ads_api.main import create_app
from ads_api.repository import AdRepository


class FakeTelegram:
    """Stands in for api.telegram.org; records every call."""

    def __init__(self):
        self.calls = []
        self.send_response = (200, {"ok": True, "result": [{"message_id": 555}, {"message_id": 556}]})
        self.edit_response = (200, {"ok": True, "result": {"message_id": 555}})
        self.raise_exc = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        method = request.url.path.rsplit("/", 1)[-1]
        body = json.loads(request.content) if request.content else {}
        self.calls.append((method, body))
        if self.raise_exc is not None:
            raise self.raise_exc
        status, payload = self.send_response if method == "sendMediaGroup" else self.edit_response
        if isinstance(payload, str):
            return httpx.Response(status, text=payload)
        return httpx.Response(status, json=payload)

    def calls_to(self, method):
        return [body for m, body in self.calls if m == method]

    def client(self) -> httpx.Client:
        return httpx.Client(transport=httpx.MockTransport(self.handler))


def make_settings(**overrides) -> Settings:
    values = {
        "DATABASE_URL": "sqlite://",
        "TELEGRAM_BOT_TOKEN": "123:TEST",
        "TELEGRAM_CHANNEL_ID": "@test_channel",
    }
    values.update(overrides)
    return Settings(_env_file=None, **values)


@pytest.fixture
def settings():
    return make_settings()


@pytest.fixture
def tg():
    return FakeTelegram()


@pytest.fixture
def client(settings, tg):
    app = create_app(settings, http_client=tg.client())
    with TestClient(app) as c:
        yield c


@pytest.fixture
def session():
    engine = make_engine("sqlite://")
    init_db(engine)
    db = make_session_factory(engine)()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def repo(session):
    return AdRepository(session)


def ad_payload(**overrides):
    data = {
        "user_id": 1,
        "username": "landlord",
        "photos": "a.jpg,b.jpg",
        "rooms": "2",
        "price": 15000,
        "type": "Apartment",
        "area": 80,
        "building": "Marina Tower",
        "district": "Dubai Marina",
        "text": "Sea view, furnished.",
    }
    data.update(overrides)
    return data
