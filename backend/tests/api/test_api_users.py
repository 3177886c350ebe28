"""HTTP tests for /api/v1/users: sessions, account maintenance and channel reads."""

from __future__ import annotations

import pytest
from tests.factories.user import DEFAULT_PASSWORD, UserFactory
from tests.factories.video import VideoFactory
from tests.helpers.utils import auth_header, image_upload

BASE = "/api/v1/users"


def _seed_user(session, **kwargs) -> dict:
    """Persist a user and return plain values that survive request teardown."""
    user = UserFactory(**kwargs)
    session.commit()
    return {"id": user.id, "username": user.username, "email": user.email}


def _login(client, username: str, password: str = DEFAULT_PASSWORD) -> dict:
    res = client.post(f"{BASE}/login", json={"username": username, "password": password})
    assert res.status_code == 200, res.get_json()
    return res.get_json()["data"]


class TestRegisterAndLogin:
    def test_register_multipart(self, client, media_uplink):
        res = client.post(
            f"{BASE}/register",
            data={
                "username": "Alice",
                "email": "Alice@Example.com",
                "full_name": "Alice A",
                "password": "s3cret",
                "avatar": image_upload("me.png"),
            },
            content_type="multipart/form-data",
        )

        assert res.status_code == 201
        body = res.get_json()
        assert body["success"] is True
        assert body["statusCode"] == 201
        assert body["message"] == "User registered successfully"
        data = body["data"]
        assert data["username"] == "alice"
        assert data["email"] == "alice@example.com"
        assert data["avatar"].startswith("https://media.test/")
        assert data["cover_image"] == ""
        assert "password" not in data and "password_hash" not in data
        assert "refresh_token" not in data
        assert len(media_uplink.uploaded) == 1
        assert media_uplink.uploaded[0].endswith("-me.png")

    def test_register_without_avatar(self, client):
        res = client.post(
            f"{BASE}/register",
            data={
                "username": "alice",
                "email": "alice@example.com",
                "full_name": "Alice",
                "password": "s3cret",
            },
            content_type="multipart/form-data",
        )

        assert res.status_code == 400
        assert res.get_json()["message"] == "Avatar file is required"

    def test_register_duplicate(self, client, session, media_uplink):
        _seed_user(session, username="alice")

        res = client.post(
            f"{BASE}/register",
            data={
                "username": "ALICE",
                "email": "fresh@example.com",
                "full_name": "Alice",
                "password": "s3cret",
                "avatar": image_upload(),
            },
            content_type="multipart/form-data",
        )

        assert res.status_code == 409
        assert media_uplink.uploaded == []

    def test_register_missing_field(self, client):
        res = client.post(
            f"{BASE}/register",
            data={"username": "alice", "avatar": image_upload()},
            content_type="multipart/form-data",
        )

        body = res.get_json()
        assert res.status_code == 400
        assert body["message"] == "Validation failed"
        assert any(err.startswith("email:") for err in body["errors"])

    def test_login_sets_http_only_cookies(self, client, session):
        seeded = _seed_user(session, username="alice")

        res = client.post(
            f"{BASE}/login", json={"username": "Alice", "password": DEFAULT_PASSWORD}
        )

        assert res.status_code == 200
        data = res.get_json()["data"]
        assert data["user"]["id"] == seeded["id"]
        assert data["access_token"] and data["refresh_token"]
        assert client.get_cookie("accessToken").value == data["access_token"]
        assert client.get_cookie("refreshToken").value == data["refresh_token"]
        set_cookies = res.headers.getlist("Set-Cookie")
        assert all("HttpOnly" in header for header in set_cookies)

    def test_login_unknown_user(self, client):
        res = client.post(f"{BASE}/login", json={"username": "ghost", "password": "x"})

        assert res.status_code == 404

    def test_login_wrong_password(self, client, session):
        _seed_user(session, username="alice")

        res = client.post(f"{BASE}/login", json={"username": "alice", "password": "wrong"})

        body = res.get_json()
        assert res.status_code == 401
        assert body["success"] is False
        assert body["message"] == "Invalid user credentials"


class TestRefreshAndLogout:
    def test_refresh_rotates_and_old_token_dies(self, app, client, session):
        _seed_user(session, username="alice")
        login = _login(client, "alice")

        res = client.post(f"{BASE}/refresh-token")
        assert res.status_code == 200
        pair = res.get_json()["data"]
        assert pair["refresh_token"] != login["refresh_token"]
        assert pair["access_token"] != login["access_token"]
        assert client.get_cookie("refreshToken").value == pair["refresh_token"]

        replay = app.test_client().post(
            f"{BASE}/refresh-token", json={"refresh_token": login["refresh_token"]}
        )
        assert replay.status_code == 401

    def test_refresh_from_body(self, app, session):
        _seed_user(session, username="alice")
        login = _login(app.test_client(), "alice")

        res = app.test_client().post(
            f"{BASE}/refresh-token", json={"refresh_token": login["refresh_token"]}
        )

        assert res.status_code == 200

    def test_refresh_without_token(self, client):
        res = client.post(f"{BASE}/refresh-token", json={})

        assert res.status_code == 401
        assert res.get_json()["message"] == "Unauthorized request"

    def test_logout_clears_cookies_and_revokes(self, app, client, session):
        _seed_user(session, username="alice")
        login = _login(client, "alice")

        res = client.post(f"{BASE}/logout")

        assert res.status_code == 200
        assert client.get_cookie("accessToken") is None
        assert client.get_cookie("refreshToken") is None
        again = app.test_client().post(
            f"{BASE}/refresh-token", json={"refresh_token": login["refresh_token"]}
        )
        assert again.status_code == 401

    def test_logout_requires_auth(self, client):
        assert client.post(f"{BASE}/logout").status_code == 401


class TestCurrentAccount:
    def test_current_user_with_bearer(self, app, session):
        seeded = _seed_user(session, username="alice")
        token = _login(app.test_client(), "alice")["access_token"]

        res = app.test_client().get(f"{BASE}/current-user", headers=auth_header(token))

        assert res.status_code == 200
        assert res.get_json()["data"]["id"] == seeded["id"]

    def test_current_user_anonymous(self, client):
        res = client.get(f"{BASE}/current-user")

        assert res.status_code == 401

    def test_current_user_bad_token(self, client):
        res = client.get(f"{BASE}/current-user", headers=auth_header("nope"))

        assert res.status_code == 401

    def test_change_password(self, app, client, session):
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.post(
            f"{BASE}/change-password",
            json={"old_password": DEFAULT_PASSWORD, "new_password": "n3w-pass"},
        )

        assert res.status_code == 200
        _login(app.test_client(), "alice", "n3w-pass")

    def test_change_password_wrong_old(self, client, session):
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.post(
            f"{BASE}/change-password", json={"old_password": "bad", "new_password": "n3w"}
        )

        assert res.status_code == 401
        assert res.get_json()["message"] == "Invalid old password"

    def test_update_account(self, client, session):
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.patch(
            f"{BASE}/update-account",
            json={"full_name": "Alice Liddell", "email": "liddell@example.com"},
        )

        data = res.get_json()["data"]
        assert res.status_code == 200
        assert data["full_name"] == "Alice Liddell"
        assert data["email"] == "liddell@example.com"

    def test_update_account_email_conflict(self, client, session):
        _seed_user(session, email="taken@example.com")
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.patch(
            f"{BASE}/update-account", json={"full_name": "A", "email": "taken@example.com"}
        )

        assert res.status_code == 409

    @pytest.mark.parametrize(
        ("route", "field"), [("avatar", "avatar"), ("cover-image", "cover_image")]
    )
    def test_replace_images(self, client, session, media_uplink, route, field):
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.patch(
            f"{BASE}/{route}",
            data={field: image_upload("fresh.png")},
            content_type="multipart/form-data",
        )

        assert res.status_code == 200
        assert res.get_json()["data"][field].startswith("https://media.test/")
        assert len(media_uplink.uploaded) == 1
        assert media_uplink.uploaded[0].endswith("-fresh.png")

    def test_replace_avatar_without_file(self, client, session):
        _seed_user(session, username="alice")
        _login(client, "alice")

        res = client.patch(f"{BASE}/avatar", data={}, content_type="multipart/form-data")

        assert res.status_code == 400

    def test_failed_upload_is_server_error(self, client, session, media_uplink):
        _seed_user(session, username="alice")
        _login(client, "alice")
        media_uplink.fail = True

        res = client.patch(
            f"{BASE}/avatar", data={"avatar": image_upload()}, content_type="multipart/form-data"
        )

        assert res.status_code == 500
        assert res.get_json()["success"] is False


class TestChannelAndHistory:
    def test_channel_profile_anonymous_and_subscribed(self, app, client, session):
        alice = _seed_user(session, username="alice")
        _seed_user(session, username="bob")

        anonymous = app.test_client().get(f"{BASE}/c/ALICE")
        assert anonymous.status_code == 200
        assert anonymous.get_json()["data"]["is_subscribed_to_channel"] is False

        _login(client, "bob")
        assert client.post(f"/api/v1/subscriptions/c/{alice['id']}").status_code == 201
        res = client.get(f"{BASE}/c/alice")

        body = res.get_json()
        assert body["message"] == "User channel fetched successfully"
        assert body["data"]["subscribers_count"] == 1
        assert body["data"]["subscribed_to_count"] == 0
        assert body["data"]["is_subscribed_to_channel"] is True

    def test_channel_profile_with_rejected_token_stays_anonymous(self, client, session):
        _seed_user(session, username="alice")

        res = client.get(f"{BASE}/c/alice", headers=auth_header("garbage"))

        assert res.status_code == 200
        assert res.get_json()["data"]["is_subscribed_to_channel"] is False

    def test_channel_profile_unknown(self, client):
        res = client.get(f"{BASE}/c/ghost")

        assert res.status_code == 404

    def test_watch_history_round_trip(self, client, session):
        _seed_user(session, username="alice")
        owner = UserFactory(username="creator")
        first, second = VideoFactory(owner=owner), VideoFactory(owner=owner)
        session.commit()
        first_id, second_id = first.id, second.id
        _login(client, "alice")

        for video_id in (first_id, second_id, first_id):
            res = client.post(f"{BASE}/watch-history/{video_id}")
            assert res.status_code == 201

        res = client.get(f"{BASE}/watch-history")

        items = res.get_json()["data"]
        assert [item["id"] for item in items] == [first_id, second_id, first_id]
        assert items[0]["owner"]["username"] == "creator"
        assert "email" not in items[0]["owner"]

    def test_record_view_unknown_video(self, client, session):
        _seed_user(session, username="alice")
        _login(client, "alice")

        assert client.post(f"{BASE}/watch-history/999999").status_code == 404
