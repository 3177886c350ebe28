from __future__ import annotations

from dataclasses import dataclass

from werkzeug.security import check_password_hash, generate_password_hash

from vidtube.services._shared.ports import PasswordHasher


@dataclass(frozen=True, slots=True)
class WerkzeugPasswordHasher(PasswordHasher):
    """
    Salted password digests via :mod:`werkzeug.security`.

    :param method: Hash method understood by ``generate_password_hash``
        (``"scrypt"`` by default; tests use a cheap ``pbkdf2`` setting).
    """

    method: str = "scrypt"

    def hash(self, plain: str) -> str:
        return generate_password_hash(plain, method=self.method)

    def verify(self, plain: str, digest: str) -> bool:
        if not digest:
            return False
        # ``check_password_hash`` is untyped; coerce to bool for mypy.
        return bool(check_password_hash(digest, plain))
