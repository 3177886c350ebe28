"""Unit tests for SubscriptionRepository."""

import pytest
from tests.factories.subscription import SubscriptionFactory
from tests.factories.user import UserFactory

from vidtube.repositories.subscription import SubscriptionRepository


class TestSubscriptionRepository:
    @pytest.fixture()
    def repo(self):
        return SubscriptionRepository()

    def test_get_edge_is_directional(self, repo, session):
        alice, bob = UserFactory(), UserFactory()
        edge = SubscriptionFactory(subscriber_id=alice.id, channel_id=bob.id)
        session.commit()

        assert repo.get_edge(alice.id, bob.id).id == edge.id
        assert repo.get_edge(bob.id, alice.id) is None

    def test_delete_edge(self, repo, session):
        alice, bob = UserFactory(), UserFactory()
        SubscriptionFactory(subscriber_id=alice.id, channel_id=bob.id)
        session.commit()

        assert repo.delete_edge(alice.id, bob.id) is True
        assert repo.delete_edge(alice.id, bob.id) is False
        assert repo.get_edge(alice.id, bob.id) is None
