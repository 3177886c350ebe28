"""Unit tests for the Werkzeug password hasher."""

from vidtube.infra.security import WerkzeugPasswordHasher


class TestWerkzeugPasswordHasher:
    hasher = WerkzeugPasswordHasher(method="pbkdf2:sha256:1000")

    def test_hash_is_salted_and_verifiable(self):
        first = self.hasher.hash("s3cret")
        second = self.hasher.hash("s3cret")

        assert first != "s3cret"
        assert first != second
        assert self.hasher.verify("s3cret", first)
        assert not self.hasher.verify("wrong", first)

    def test_empty_digest_never_verifies(self):
        assert self.hasher.verify("anything", "") is False
