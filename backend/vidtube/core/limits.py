"""Per-media-type request body limits."""

from __future__ import annotations

from flask import Flask, request

from vidtube.core.errors import PayloadTooLarge

_FORM_MIMETYPE = "application/x-www-form-urlencoded"


def _limit_for(app: Flask, mimetype: str) -> int | None:
    if request.is_json:
        return int(app.config.get("JSON_BODY_LIMIT", 20 * 1024))
    if mimetype == _FORM_MIMETYPE:
        return int(app.config.get("FORM_BODY_LIMIT", 10 * 1024))
    return None


def init_app(app: Flask) -> None:
    """Reject JSON and url-encoded bodies larger than the configured limits.

    Multipart uploads are bounded by ``MAX_CONTENT_LENGTH`` instead.
    """

    @app.before_request
    def _enforce_body_limit() -> None:
        limit = _limit_for(app, request.mimetype)
        if limit is None:
            return
        length = request.content_length
        if length is None:
            # chunked bodies carry no Content-Length
            length = len(request.get_data(cache=True))
        if length > limit:
            raise PayloadTooLarge(f"Request body exceeds {limit} bytes")
