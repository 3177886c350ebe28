"""Unit tests for the ``User`` model normalisation rules."""

import pytest
from sqlalchemy.exc import IntegrityError
from tests.factories.user import UserFactory

from vidtube.models import User


class TestUserModel:
    def test_username_is_trimmed_and_lowercased(self):
        user = User(username="  Alice  ")
        assert user.username == "alice"

    def test_email_is_trimmed_and_lowercased(self):
        user = User(email="  Alice@Example.COM ")
        assert user.email == "alice@example.com"

    @pytest.mark.parametrize("email", ["", "no-at-sign", "alice@localhost"])
    def test_malformed_email_is_rejected(self, email):
        with pytest.raises(ValueError):
            User(email=email)

    def test_blank_username_is_rejected(self):
        with pytest.raises(ValueError, match="Username is required"):
            User(username="   ")

    def test_full_name_is_trimmed(self):
        assert User(full_name="  Alice A ").full_name == "Alice A"

    def test_defaults_after_flush(self, session):
        """Cover image defaults to empty and no refresh token is stored."""
        user = UserFactory()
        session.flush()
        session.refresh(user)

        assert user.cover_image == ""
        assert user.refresh_token is None
        assert user.created_at is not None

    def test_username_unique_regardless_of_case(self, session):
        UserFactory(username="alice")
        with pytest.raises(IntegrityError):
            UserFactory(username="ALICE", email="other@example.com")

    def test_email_unique(self, session):
        UserFactory(email="dup@example.com")
        with pytest.raises(IntegrityError):
            UserFactory(email="DUP@example.com")

    def test_repr_shows_handle_but_no_credentials(self, session):
        user = UserFactory(username="alice", refresh_token="rt-secret")

        text = repr(user)

        assert text == f"<User id={user.id} username='alice'>"
        assert "rt-secret" not in text and user.password_hash not in text
