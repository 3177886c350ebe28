# vidtube/services/tokens/service.py
from __future__ import annotations

import hmac
import logging
from datetime import UTC, datetime
from typing import Any
from uuid import uuid4

from sqlalchemy.exc import SQLAlchemyError

from vidtube.services._shared.base import BaseService
from vidtube.services._shared.errors import InvalidTokenError, TokenPersistenceError
from vidtube.services._shared.ports import TokenProvider
from vidtube.services.tokens.dto import AccessClaims, TokenConfig, TokenPairOut, TokenSubject

log = logging.getLogger(__name__)

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"

INVALID_REFRESH_TOKEN = "Invalid refresh token"
INVALID_ACCESS_TOKEN = "Invalid access token"


class TokenService(BaseService):
    """
    Token lifecycle: issue, verify, rotate-on-use and revoke.

    Access tokens are stateless. Refresh tokens are mirrored into the
    account's ``refresh_token`` column and only honoured while they match it,
    so each account holds at most one live refresh token and every
    successful refresh invalidates the one it consumed.
    """

    def __init__(self, *, config: TokenConfig, provider: TokenProvider) -> None:
        """
        :param config: Secrets and lifetimes.
        :param provider: JWT codec.
        """
        super().__init__()
        self.cfg = config
        self.provider = provider

    # ------------------------------------------------------------------ #
    # Issue
    # ------------------------------------------------------------------ #

    def issue_access_token(self, account: TokenSubject) -> str:
        """Mint an access token. No storage side effect."""
        claims: dict[str, Any] = {
            "sub": str(account.id),
            "email": account.email,
            "username": account.username,
            "full_name": account.full_name,
            "type": ACCESS_TOKEN_TYPE,
            "jti": uuid4().hex,
        }
        return self.provider.encode(
            claims, key=self.cfg.access_secret, expires_delta=self.cfg.access_ttl
        )

    def issue_refresh_token(self, account: TokenSubject) -> str:
        """Mint a refresh token. The caller decides whether to store it."""
        claims: dict[str, Any] = {
            "sub": str(account.id),
            "type": REFRESH_TOKEN_TYPE,
            "jti": uuid4().hex,
        }
        return self.provider.encode(
            claims, key=self.cfg.refresh_secret, expires_delta=self.cfg.refresh_ttl
        )

    def issue_token_pair(self, account: TokenSubject) -> TokenPairOut:
        """
        Mint both tokens and store the refresh token on the account.

        Any previously stored refresh token stops being valid.

        :param account: Account receiving the tokens.
        :returns: Access/Refresh token pair.
        :raises TokenPersistenceError: If the refresh token cannot be stored.
        """
        pair = TokenPairOut(
            access_token=self.issue_access_token(account),
            refresh_token=self.issue_refresh_token(account),
        )
        try:
            with self.rw_uow() as uow:
                stored = uow.users.set_refresh_token(account.id, pair.refresh_token)
        except SQLAlchemyError as exc:
            log.error(
                "tokens.persist_failed", extra={"account_id": account.id}, exc_info=True
            )
            raise TokenPersistenceError() from exc
        if not stored:
            log.error("tokens.persist_failed: account row missing", extra={"account_id": account.id})
            raise TokenPersistenceError()
        return pair

    # ------------------------------------------------------------------ #
    # Verify
    # ------------------------------------------------------------------ #

    def verify_access_token(self, token: str) -> AccessClaims:
        """
        Check signature, expiry and token type.

        Every failure carries the same message, so a caller cannot tell an
        expired token from a forged one.

        :raises InvalidTokenError: On any failure.
        """
        try:
            payload = self.provider.decode(token, key=self.cfg.access_secret)
        except InvalidTokenError as exc:
            raise InvalidTokenError(INVALID_ACCESS_TOKEN) from exc
        if payload.get("type") != ACCESS_TOKEN_TYPE:
            raise InvalidTokenError(INVALID_ACCESS_TOKEN)
        try:
            return AccessClaims(
                account_id=int(payload["sub"]),
                email=payload["email"],
                username=payload["username"],
                full_name=payload["full_name"],
                jti=payload["jti"],
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=UTC),
            )
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError(INVALID_ACCESS_TOKEN) from exc

    def _decode_refresh(self, token: str) -> dict[str, Any]:
        try:
            payload = self.provider.decode(token, key=self.cfg.refresh_secret)
        except InvalidTokenError as exc:
            raise InvalidTokenError(INVALID_REFRESH_TOKEN) from exc
        if payload.get("type") != REFRESH_TOKEN_TYPE:
            raise InvalidTokenError(INVALID_REFRESH_TOKEN)
        return payload

    def refresh_subject(self, token: str) -> int:
        """
        Return the account id a refresh token was issued to.

        :raises InvalidTokenError: If the token does not decode as a refresh token.
        """
        payload = self._decode_refresh(token)
        try:
            return int(payload["sub"])
        except (KeyError, TypeError, ValueError) as exc:
            raise InvalidTokenError(INVALID_REFRESH_TOKEN) from exc

    def verify_refresh_token(self, token: str, account: TokenSubject) -> None:
        """
        Check signature, expiry, type, subject and equality with the stored value.

        Every failure raises the same error so callers cannot tell an expired
        token from a rotated one.

        :raises InvalidTokenError: On any failure.
        """
        if self.refresh_subject(token) != account.id:
            raise InvalidTokenError(INVALID_REFRESH_TOKEN)
        stored = account.refresh_token
        if not stored or not hmac.compare_digest(stored.encode(), token.encode()):
            raise InvalidTokenError(INVALID_REFRESH_TOKEN)

    # ------------------------------------------------------------------ #
    # Rotate / revoke
    # ------------------------------------------------------------------ #

    def rotate(self, token: str, account: TokenSubject) -> TokenPairOut:
        """
        Exchange a valid refresh token for a new pair.

        The stored token is swapped with a compare-and-set, so when two
        requests present the same token only the first one wins.

        :param token: Refresh token presented by the client.
        :param account: Account snapshot including its stored refresh token.
        :returns: New token pair.
        :raises InvalidTokenError: If the token is invalid or was already used.
        :raises TokenPersistenceError: If the new token cannot be stored.
        """
        self.verify_refresh_token(token, account)
        pair = TokenPairOut(
            access_token=self.issue_access_token(account),
            refresh_token=self.issue_refresh_token(account),
        )
        try:
            with self.rw_uow() as uow:
                swapped = uow.users.swap_refresh_token(account.id, token, pair.refresh_token)
        except SQLAlchemyError as exc:
            log.error("tokens.persist_failed", extra={"account_id": account.id}, exc_info=True)
            raise TokenPersistenceError() from exc
        if not swapped:
            log.warning("tokens.rotate_conflict", extra={"account_id": account.id})
            raise InvalidTokenError(INVALID_REFRESH_TOKEN)
        log.info("tokens.rotated", extra={"account_id": account.id})
        return pair

    def revoke(self, account_id: int) -> None:
        """Clear the stored refresh token. Safe to call repeatedly."""
        with self.rw_uow() as uow:
            uow.users.set_refresh_token(account_id, None)
        log.info("tokens.revoked", extra={"account_id": account_id})
