"""Unit tests for UserRepository."""

import pytest
from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory

from vidtube.repositories.user import UserRepository


class TestUserRepository:
    """Ensure ``UserRepository`` performs lookups, token writes and the channel read."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_get_by_username_ignores_case_and_blanks(self, repo, session):
        u = UserFactory(username="alice")
        session.commit()

        assert repo.get_by_username("  ALICE ").id == u.id
        assert repo.get_by_username("bob") is None

    def test_get_by_email(self, repo, session):
        u = UserFactory(email="alice@example.com")
        session.commit()

        assert repo.get_by_email("Alice@Example.com").id == u.id

    def test_exists_by_username_or_email(self, repo, session):
        UserFactory(username="alice", email="alice@example.com")
        session.commit()

        assert repo.exists_by_username_or_email("Alice", "fresh@example.com")
        assert repo.exists_by_username_or_email("fresh", "ALICE@example.com")
        assert not repo.exists_by_username_or_email("fresh", "fresh@example.com")

    def test_email_taken_by_other(self, repo, session):
        alice = UserFactory(email="alice@example.com")
        bob = UserFactory(email="bob@example.com")
        session.commit()

        assert repo.email_taken_by_other("alice@example.com", bob.id)
        assert not repo.email_taken_by_other("alice@example.com", alice.id)

    def test_set_password_hash_only_touches_that_column(self, repo, session):
        u = UserFactory(refresh_token="kept")
        session.commit()

        assert repo.set_password_hash(u.id, "digest")
        session.commit()

        refreshed = repo.get(u.id)
        assert refreshed.password_hash == "digest"
        assert refreshed.refresh_token == "kept"

    def test_set_refresh_token_and_clear(self, repo, session):
        u = UserFactory()
        session.commit()

        assert repo.set_refresh_token(u.id, "token-1")
        session.commit()
        assert repo.get(u.id).refresh_token == "token-1"

        assert repo.set_refresh_token(u.id, None)
        session.commit()
        assert repo.get(u.id).refresh_token is None

    def test_set_refresh_token_unknown_account(self, repo, session):
        assert repo.set_refresh_token(999_999, "token") is False

    def test_swap_refresh_token_only_from_expected_value(self, repo, session):
        u = UserFactory(refresh_token="old")
        session.commit()

        assert repo.swap_refresh_token(u.id, "old", "new")
        # the second swap from the same token loses
        assert not repo.swap_refresh_token(u.id, "old", "newer")
        session.commit()

        assert repo.get(u.id).refresh_token == "new"

    def test_assign_updates_rejects_token_column(self, repo, session):
        u = UserFactory()
        session.commit()

        with pytest.raises(ValueError, match="non-updatable"):
            repo.assign_updates(u, {"refresh_token": "sneaky"})


class TestChannelProfileRead:
    """``channel_profile`` aggregates counters in one query."""

    @pytest.fixture()
    def repo(self):
        return UserRepository()

    def test_counts_and_viewer_flag(self, repo, session):
        alice, bob, carol = UserFactory(username="alice"), UserFactory(), UserFactory()
        SubscriptionFactory(subscriber_id=bob.id, channel_id=alice.id)
        SubscriptionFactory(subscriber_id=carol.id, channel_id=alice.id)
        SubscriptionFactory(subscriber_id=alice.id, channel_id=bob.id)
        session.commit()

        row = repo.channel_profile("ALICE", viewer_id=bob.id)

        assert row["id"] == alice.id
        assert row["subscribers_count"] == 2
        assert row["subscribed_to_count"] == 1
        assert bool(row["is_subscribed_to_channel"]) is True

    def test_viewer_without_edge(self, repo, session):
        alice, dave = UserFactory(username="alice"), UserFactory()
        session.commit()

        row = repo.channel_profile("alice", viewer_id=dave.id)

        assert row["subscribers_count"] == 0
        assert row["subscribed_to_count"] == 0
        assert bool(row["is_subscribed_to_channel"]) is False

    def test_anonymous_viewer(self, repo, session):
        alice, bob = UserFactory(username="alice"), UserFactory()
        SubscriptionFactory(subscriber_id=bob.id, channel_id=alice.id)
        session.commit()

        row = repo.channel_profile("alice")

        assert row["subscribers_count"] == 1
        assert bool(row["is_subscribed_to_channel"]) is False

    def test_unknown_handle(self, repo, session):
        assert repo.channel_profile("ghost") is None
