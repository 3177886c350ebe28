"""Shared API helpers: envelopes, auth extraction, cookies, uploads, service wiring."""

from __future__ import annotations

import functools
import logging
import os
import time
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any, TypeVar
from uuid import uuid4

from flask import Response, current_app, g, jsonify, request
from werkzeug.utils import secure_filename

from vidtube.core.config import parse_duration
from vidtube.core.extensions import get_media_uplink
from vidtube.infra.jwt import PyJWTTokenProvider
from vidtube.infra.security import WerkzeugPasswordHasher
from vidtube.services import (
    AccountOut,
    AccountService,
    ChannelService,
    SessionService,
    SubscriptionService,
    TokenConfig,
    TokenService,
)
from vidtube.services._shared.errors import AuthenticationError

F = TypeVar("F", bound=Callable[..., Any])

log = logging.getLogger(__name__)

ACCESS_COOKIE = "accessToken"
REFRESH_COOKIE = "refreshToken"


# ------------------------------------------------------------------ #
# Responses
# ------------------------------------------------------------------ #


def json_response(data: Any, *, message: str = "Success", status: int = 200) -> Response:
    """Wrap ``data`` in the success envelope."""

    response = jsonify(
        {
            "statusCode": status,
            "data": data,
            "message": message,
            "success": status < 400,
        }
    )
    response.status_code = status
    return response


def timing(func: F) -> F:
    """Decorator capturing handler execution time in milliseconds."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        start = time.perf_counter()
        try:
            return func(*args, **kwargs)
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            current_app.logger.debug(
                "request.elapsed",
                extra={"endpoint": request.endpoint, "elapsed_ms": round(elapsed_ms, 2)},
            )

    return wrapper  # type: ignore[return-value]


# ------------------------------------------------------------------ #
# Service wiring
# ------------------------------------------------------------------ #


def token_service() -> TokenService:
    config = TokenConfig.from_mapping(current_app.config)
    return TokenService(config=config, provider=PyJWTTokenProvider(algorithm=config.algorithm))


def password_hasher() -> WerkzeugPasswordHasher:
    return WerkzeugPasswordHasher(method=current_app.config.get("PASSWORD_HASH_METHOD", "scrypt"))


def session_service(*, with_uplink: bool = False) -> SessionService:
    """Build a :class:`SessionService`; ``with_uplink`` resolves the media host."""

    return SessionService(
        tokens=token_service(),
        hasher=password_hasher(),
        uplink=get_media_uplink() if with_uplink else None,
    )


def account_service(*, with_uplink: bool = False) -> AccountService:
    return AccountService(uplink=get_media_uplink() if with_uplink else None)


def channel_service() -> ChannelService:
    return ChannelService()


def subscription_service() -> SubscriptionService:
    return SubscriptionService()


# ------------------------------------------------------------------ #
# Authentication
# ------------------------------------------------------------------ #


def extract_access_token() -> str | None:
    """Return the access token from the cookie, else from ``Authorization: Bearer``."""

    token = request.cookies.get(ACCESS_COOKIE)
    if token:
        return token
    header = request.headers.get("Authorization", "")
    scheme, _, value = header.partition(" ")
    if scheme.lower() == "bearer" and value.strip():
        return value.strip()
    return None


def current_account() -> AccountOut:
    """Return the account resolved by :func:`require_auth`."""

    return g.current_account


def require_auth(func: F) -> F:
    """Reject the request with 401 unless it carries a valid access token."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_account = session_service().authenticate(extract_access_token())
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


def optional_auth(func: F) -> F:
    """Resolve the account when a valid token is present; otherwise stay anonymous."""

    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any):
        g.current_account = None
        token = extract_access_token()
        if token:
            try:
                g.current_account = session_service().authenticate(token)
            except AuthenticationError:
                log.debug("optional_auth: token rejected, continuing anonymously")
        return func(*args, **kwargs)

    return wrapper  # type: ignore[return-value]


# ------------------------------------------------------------------ #
# Cookies
# ------------------------------------------------------------------ #


def _cookie_options() -> dict[str, Any]:
    cfg = current_app.config
    return {
        "httponly": True,
        "secure": bool(cfg.get("AUTH_COOKIE_SECURE", True)),
        "samesite": cfg.get("AUTH_COOKIE_SAMESITE"),
        "path": "/",
    }


def set_auth_cookies(response: Response, *, access_token: str, refresh_token: str) -> Response:
    """Attach both tokens as httpOnly cookies living as long as the tokens."""

    cfg = current_app.config
    options = _cookie_options()
    response.set_cookie(
        ACCESS_COOKIE,
        access_token,
        max_age=int(parse_duration(cfg["ACCESS_TOKEN_EXPIRY"]).total_seconds()),
        **options,
    )
    response.set_cookie(
        REFRESH_COOKIE,
        refresh_token,
        max_age=int(parse_duration(cfg["REFRESH_TOKEN_EXPIRY"]).total_seconds()),
        **options,
    )
    return response


def clear_auth_cookies(response: Response) -> Response:
    options = _cookie_options()
    response.delete_cookie(ACCESS_COOKIE, **options)
    response.delete_cookie(REFRESH_COOKIE, **options)
    return response


# ------------------------------------------------------------------ #
# Uploads
# ------------------------------------------------------------------ #


@contextmanager
def saved_uploads(*names: str) -> Iterator[dict[str, str | None]]:
    """Save the named multipart files into ``UPLOAD_TMP_DIR``.

    Yields a mapping of field name to temp path (``None`` when the field is
    absent or empty). Files the media uplink did not consume are removed when
    the block exits, whether it succeeded or raised.
    """

    tmp_dir = Path(current_app.config.get("UPLOAD_TMP_DIR", "./public/temp"))
    tmp_dir.mkdir(parents=True, exist_ok=True)

    paths: dict[str, str | None] = {}
    try:
        for name in names:
            storage = request.files.get(name)
            if storage is None or not storage.filename:
                paths[name] = None
                continue
            target = tmp_dir / f"{uuid4().hex}-{secure_filename(storage.filename) or name}"
            storage.save(target)
            paths[name] = str(target)
        yield paths
    finally:
        for path in paths.values():
            if path is None:
                continue
            try:
                os.remove(path)
            except FileNotFoundError:
                pass
            except OSError:
                log.warning("Could not remove temp file %s", path, exc_info=True)
