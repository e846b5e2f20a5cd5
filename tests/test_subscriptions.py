import importlib

from sqlalchemy import delete, false

from app.db.models import Subscription
from tests.conftest import auth_headers


def test_subscribe_toggle(client, make_user):
    alice = make_user(username="alice")
    bob = make_user(username="bob")
    headers = auth_headers(bob.id)

    first = client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=headers)
    assert first.json()["data"] == {"isSubscribed": True}

    profile = client.get("/api/v1/users/c/alice", headers=headers).json()["data"]
    assert (profile["isSubscribed"], profile["subscribersCount"]) == (True, 1)

    second = client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=headers)
    assert second.json()["data"] == {"isSubscribed": False}


def test_cannot_subscribe_to_self(client, make_user):
    alice = make_user()
    response = client.post(f"/api/v1/subscriptions/c/{alice.id}", headers=auth_headers(alice.id))
    assert response.status_code == 400


def test_subscribe_to_missing_channel(client, make_user):
    headers = auth_headers(make_user().id)
    assert client.post(f"/api/v1/subscriptions/c/{'1' * 24}", headers=headers).status_code == 404
    assert client.post("/api/v1/subscriptions/c/oops", headers=headers).status_code == 400


def test_channel_subscribers(client, make_user, make_subscription):
    channel = make_user()
    early = make_user(username="early")
    late = make_user(username="late")
    viewer = make_user()
    make_subscription(early, channel)
    make_subscription(late, channel)
    make_subscription(viewer, late)

    page = client.get(f"/api/v1/subscriptions/c/{channel.id}", headers=auth_headers(viewer.id)).json()["data"]
    assert page["totalItems"] == 2
    assert [item["username"] for item in page["items"]] == ["late", "early"]
    late_row = page["items"][0]
    assert late_row["subscribersCount"] == 1
    assert late_row["isSubscribed"] is True
    assert late_row["subscribedAt"]
    assert page["items"][1]["isSubscribed"] is False

    assert client.get(f"/api/v1/subscriptions/c/{'2' * 24}").status_code == 404


def test_subscribed_channels(client, make_user, make_subscription):
    fan = make_user()
    first = make_user(username="first")
    second = make_user(username="second")
    make_subscription(fan, first)
    make_subscription(fan, second)

    page = client.get(f"/api/v1/subscriptions/u/{fan.id}").json()["data"]
    assert [item["username"] for item in page["items"]] == ["second", "first"]
    assert all(item["subscribersCount"] == 1 for item in page["items"])
    assert all(item["isSubscribed"] is False for item in page["items"])

    as_fan = client.get(f"/api/v1/subscriptions/u/{fan.id}", headers=auth_headers(fan.id)).json()["data"]
    assert all(item["isSubscribed"] is True for item in as_fan["items"])


def test_subscription_inserted_by_a_concurrent_request_counts_as_subscribed(
    client, db, monkeypatch, make_user, make_subscription
):
    channel = make_user()
    fan = make_user()
    make_subscription(fan, channel)
    module = importlib.import_module("app.services.subscription_service")
    monkeypatch.setattr(module, "delete", lambda table: delete(table).where(false()))

    response = client.post(f"/api/v1/subscriptions/c/{channel.id}", headers=auth_headers(fan.id))

    assert response.status_code == 200
    assert response.json()["data"] == {"isSubscribed": True}
    assert db.query(Subscription).filter(Subscription.channel_id == channel.id).count() == 1
