"""Account repository: credential lookups, token slot writes, channel read model."""

from __future__ import annotations

from typing import Any, cast

from sqlalchemy import false, func, or_, select, update
from sqlalchemy.engine import RowMapping

from vidtube.models.subscription import Subscription
from vidtube.models.user import User
from vidtube.repositories.base import BaseRepository


class UserRepository(BaseRepository[User]):
    """Persistence-only repository for :class:`User`.

    Token and password columns are never reachable through
    :meth:`assign_updates`; they have dedicated single-column writers.
    """

    model = User

    # ---------------------------- Whitelist ----------------------------

    def _updatable_fields(self):
        """Profile fields a user may edit (no password, no token)."""
        return {"email", "full_name", "avatar", "cover_image"}

    # ---------------------------- Lookup helpers ----------------------------

    def get_by_username(self, username: str) -> User | None:
        """Fetch an account by handle, ignoring case and surrounding blanks.

        :param username: Handle as typed by the client.
        :type username: str
        :returns: Account or ``None``.
        :rtype: User | None
        """
        stmt = select(User).where(func.lower(User.username) == username.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def get_by_email(self, email: str) -> User | None:
        stmt = select(User).where(User.email == email.strip().lower())
        return cast(User | None, self.session.execute(stmt).scalars().first())

    def exists_by_username_or_email(self, username: str, email: str) -> bool:
        """Return ``True`` when either the handle (any case) or the email is taken."""
        stmt = select(User.id).where(
            or_(
                func.lower(User.username) == username.strip().lower(),
                User.email == email.strip().lower(),
            )
        )
        return self.session.execute(stmt.limit(1)).first() is not None

    def email_taken_by_other(self, email: str, account_id: int) -> bool:
        stmt = select(User.id).where(User.email == email.strip().lower(), User.id != account_id)
        return self.session.execute(stmt.limit(1)).first() is not None

    # ---------------------------- Column writers ----------------------------

    def set_password_hash(self, user_id: int, digest: str) -> bool:
        """Overwrite only ``password_hash``.

        :returns: ``True`` when a row was updated.
        """
        result = self.session.execute(
            update(User).where(User.id == user_id).values(password_hash=digest)
        )
        return bool(result.rowcount)

    def set_refresh_token(self, user_id: int, token: str | None) -> bool:
        """Overwrite only ``refresh_token`` (``None`` clears it).

        :returns: ``True`` when a row was updated.
        """
        result = self.session.execute(
            update(User).where(User.id == user_id).values(refresh_token=token)
        )
        return bool(result.rowcount)

    def swap_refresh_token(self, user_id: int, expected: str, replacement: str) -> bool:
        """Compare-and-set the stored refresh token.

        The UPDATE only matches while the row still holds ``expected``, so of
        two concurrent swaps from the same token exactly one succeeds.

        :param user_id: Account identifier.
        :param expected: Token the caller presented.
        :param replacement: Newly minted token.
        :returns: ``True`` when this call performed the swap.
        """
        result = self.session.execute(
            update(User)
            .where(User.id == user_id, User.refresh_token == expected)
            .values(refresh_token=replacement)
        )
        return bool(result.rowcount)

    # ---------------------------- Read model ----------------------------

    def channel_profile(self, username: str, viewer_id: int | None = None) -> RowMapping | None:
        """Load a channel with its subscription counters in one SELECT.

        ``subscribers_count`` counts edges pointing at the channel,
        ``subscribed_to_count`` counts edges leaving it, and
        ``is_subscribed_to_channel`` tells whether ``viewer_id`` holds an edge
        to it (always false when ``viewer_id`` is ``None``).

        :param username: Handle, matched case-insensitively.
        :param viewer_id: Account viewing the profile, if any.
        :returns: Row mapping or ``None`` when no account matches.
        """
        subscribers = (
            select(func.count(Subscription.id))
            .where(Subscription.channel_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        subscribed_to = (
            select(func.count(Subscription.id))
            .where(Subscription.subscriber_id == User.id)
            .correlate(User)
            .scalar_subquery()
        )
        is_subscribed: Any
        if viewer_id is None:
            is_subscribed = false()
        else:
            is_subscribed = (
                select(Subscription.id)
                .where(
                    Subscription.subscriber_id == viewer_id,
                    Subscription.channel_id == User.id,
                )
                .correlate(User)
                .exists()
            )

        stmt = select(
            User.id,
            User.full_name,
            User.username,
            User.avatar,
            User.cover_image,
            User.email,
            subscribers.label("subscribers_count"),
            subscribed_to.label("subscribed_to_count"),
            is_subscribed.label("is_subscribed_to_channel"),
        ).where(func.lower(User.username) == username.strip().lower())
        return self.session.execute(stmt).mappings().first()
