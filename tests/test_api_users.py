import pytest
from fastapi.testclient import TestClient

from ads_api.main import create_app

from conftest import ad_payload, make_settings


def test_create_user_with_given_id(client):
    r = client.post("/users", json={"userid": 1001, "username": "alice"})
    assert r.status_code == 201
    assert r.json()["user"] == {"userid": 1001, "username": "alice", "ads": None}


def test_create_user_assigns_id(client):
    r = client.post("/users", json={"username": "bob"})
    assert r.status_code == 201
    assert isinstance(r.json()["user"]["userid"], int)


def test_create_duplicate_user(client):
    client.post("/users", json={"userid": 5, "username": "alice"})
    r = client.post("/users", json={"userid": 5, "username": "again"})
    assert r.status_code == 409
    assert r.json()["error"] == "conflict"


def test_list_and_get_users(client):
    client.post("/users", json={"userid": 2, "username": "b"})
    client.post("/users", json={"userid": 1, "username": "a"})

    items = client.get("/users").json()["items"]
    assert [u["userid"] for u in items] == [1, 2]

    assert client.get("/users/2").json()["user"]["username"] == "b"
    assert client.get("/users/3").status_code == 404


def test_owned_ads_projection_in_insertion_order(client):
    client.post("/users", json={"userid": 1, "username": "landlord"})
    for _ in range(3):
        client.post("/ads", json=ad_payload())

    assert client.get("/users/1").json()["user"]["ads"] == "1,2,3"
    items = client.get("/users/1/ads").json()["items"]
    assert [a["id"] for a in items] == [1, 2, 3]


def test_update_user(client):
    client.post("/users", json={"userid": 1, "username": "landlord"})
    client.post("/ads", json=ad_payload())
    client.post("/ads", json=ad_payload())

    r = client.put("/users/1", json={"username": "renamed", "ads": "2,1"})
    assert r.status_code == 200
    assert r.json()["user"] == {"userid": 1, "username": "renamed", "ads": "2,1"}
    assert [a["id"] for a in client.get("/users/1/ads").json()["items"]] == [2, 1]

    # ads omitted: projection untouched
    r = client.put("/users/1", json={"username": "again"})
    assert r.json()["user"]["ads"] == "2,1"


@pytest.mark.parametrize("ads", ["1,abc", "1,\u00b2", "-3", "1.5"])
def test_update_user_bad_ads_string(client, ads):
    client.post("/users", json={"userid": 1, "username": "landlord"})
    r = client.put("/users/1", json={"username": "x", "ads": ads})
    assert r.status_code == 400
    assert r.json()["error"] == "validation_error"


def test_update_missing_user(client):
    assert client.put("/users/9", json={"username": "x"}).status_code == 404
    assert client.get("/users/9/ads").status_code == 404


def test_app_without_telegram_config_still_serves_crud(tg):
    app = create_app(make_settings(TELEGRAM_BOT_TOKEN=None, TELEGRAM_CHANNEL_ID=None), http_client=tg.client())
    with TestClient(app) as c:
        c.post("/users", json={"userid": 1, "username": "landlord"})
        ad = c.post("/ads", json=ad_payload()).json()["ad"]

        r = c.post(f"/ads/{ad['id']}/post")

        assert r.status_code == 500
        assert r.json()["error"] == "configuration_missing"
    assert tg.calls == []
