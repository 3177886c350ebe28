"""HTTP tests for /api/v1/subscriptions."""

from tests.factories.user import DEFAULT_PASSWORD, UserFactory

BASE = "/api/v1/subscriptions"


def _two_accounts(session) -> tuple[int, int]:
    alice, bob = UserFactory(username="alice"), UserFactory(username="bob")
    session.commit()
    return alice.id, bob.id


def _login(client, username: str) -> None:
    res = client.post(
        "/api/v1/users/login", json={"username": username, "password": DEFAULT_PASSWORD}
    )
    assert res.status_code == 200


class TestSubscriptionsApi:
    def test_subscribe_then_repeat(self, client, session):
        alice_id, bob_id = _two_accounts(session)
        _login(client, "bob")

        first = client.post(f"{BASE}/c/{alice_id}")
        second = client.post(f"{BASE}/c/{alice_id}")

        assert first.status_code == 201
        assert first.get_json()["data"]["created"] is True
        assert first.get_json()["data"]["subscriber_id"] == bob_id
        assert second.status_code == 200
        assert second.get_json()["message"] == "Already subscribed"
        assert second.get_json()["data"]["id"] == first.get_json()["data"]["id"]

    def test_self_subscription(self, client, session):
        _, bob_id = _two_accounts(session)
        _login(client, "bob")

        res = client.post(f"{BASE}/c/{bob_id}")

        assert res.status_code == 400

    def test_unknown_channel(self, client, session):
        _two_accounts(session)
        _login(client, "bob")

        assert client.post(f"{BASE}/c/999999").status_code == 404

    def test_unsubscribe(self, client, session):
        alice_id, _ = _two_accounts(session)
        _login(client, "bob")
        client.post(f"{BASE}/c/{alice_id}")

        res = client.delete(f"{BASE}/c/{alice_id}")
        again = client.delete(f"{BASE}/c/{alice_id}")

        assert res.get_json()["data"] == {"channel_id": alice_id, "removed": True}
        assert again.status_code == 200
        assert again.get_json()["data"]["removed"] is False

    def test_requires_auth(self, client, session):
        alice_id, _ = _two_accounts(session)

        res = client.post(f"{BASE}/c/{alice_id}")

        assert res.status_code == 401
        assert res.get_json()["success"] is False
