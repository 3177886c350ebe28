"""Account, session and channel endpoints."""

from __future__ import annotations

from flask import Blueprint, g, request

from vidtube.api.deps import (
    REFRESH_COOKIE,
    account_service,
    channel_service,
    clear_auth_cookies,
    current_account,
    json_response,
    optional_auth,
    require_auth,
    saved_uploads,
    session_service,
    set_auth_cookies,
    timing,
)
from vidtube.schemas import (
    AccountSchema,
    ChangePasswordSchema,
    ChannelProfileSchema,
    LoginResultSchema,
    LoginSchema,
    RefreshSchema,
    RegisterSchema,
    TokenPairSchema,
    UpdateAccountSchema,
    WatchEntrySchema,
    WatchHistoryItemSchema,
)
from vidtube.services import ChangePasswordIn, LoginIn, RegisterIn, UpdateDetailsIn

bp = Blueprint("users", __name__)

account_schema = AccountSchema()
register_schema = RegisterSchema()
login_schema = LoginSchema()
login_result_schema = LoginResultSchema()
refresh_schema = RefreshSchema()
token_pair_schema = TokenPairSchema()
change_password_schema = ChangePasswordSchema()
update_account_schema = UpdateAccountSchema()
channel_profile_schema = ChannelProfileSchema()
watch_history_schema = WatchHistoryItemSchema(many=True)
watch_entry_schema = WatchEntrySchema()


def _payload() -> dict:
    """Read JSON or form fields, whichever the client sent."""

    if request.is_json:
        return request.get_json(silent=True) or {}
    return request.form.to_dict()


# ------------------------------------------------------------------ #
# Sessions
# ------------------------------------------------------------------ #


@bp.post("/register")
@timing
def register():
    """Create an account from multipart fields plus ``avatar``/``cover_image`` files."""

    with saved_uploads("avatar", "cover_image") as files:
        data = register_schema.load(_payload())
        account = session_service(with_uplink=True).register(
            RegisterIn(
                username=data["username"],
                email=data["email"],
                full_name=data["full_name"],
                password=data["password"],
                avatar_path=files["avatar"],
                cover_image_path=files["cover_image"],
            )
        )
    return json_response(
        account_schema.dump(account), message="User registered successfully", status=201
    )


@bp.post("/login")
@timing
def login():
    data = login_schema.load(_payload())
    result = session_service().login(LoginIn(username=data["username"], password=data["password"]))
    response = json_response(login_result_schema.dump(result), message="User logged in successfully")
    return set_auth_cookies(
        response, access_token=result.access_token, refresh_token=result.refresh_token
    )


@bp.post("/logout")
@require_auth
@timing
def logout():
    session_service().logout(current_account().id)
    return clear_auth_cookies(json_response({}, message="User logged out"))


@bp.post("/refresh-token")
@timing
def refresh_token():
    """Rotate the refresh token taken from the cookie, else from the body."""

    token = request.cookies.get(REFRESH_COOKIE)
    if not token:
        token = refresh_schema.load(_payload()).get("refresh_token")
    pair = session_service().refresh(token)
    response = json_response(token_pair_schema.dump(pair), message="Access token refreshed")
    return set_auth_cookies(
        response, access_token=pair.access_token, refresh_token=pair.refresh_token
    )


@bp.post("/change-password")
@require_auth
@timing
def change_password():
    data = change_password_schema.load(_payload())
    session_service().change_password(
        ChangePasswordIn(
            account_id=current_account().id,
            old_password=data["old_password"],
            new_password=data["new_password"],
        )
    )
    return json_response({}, message="Password changed successfully")


# ------------------------------------------------------------------ #
# Current account
# ------------------------------------------------------------------ #


@bp.get("/current-user")
@require_auth
@timing
def get_current_user():
    account = account_service().get_account(current_account().id)
    return json_response(account_schema.dump(account), message="Current user fetched successfully")


@bp.patch("/update-account")
@require_auth
@timing
def update_account():
    data = update_account_schema.load(_payload())
    account = account_service().update_details(
        current_account().id, UpdateDetailsIn(full_name=data["full_name"], email=data["email"])
    )
    return json_response(
        account_schema.dump(account), message="Account details updated successfully"
    )


@bp.patch("/avatar")
@require_auth
@timing
def update_avatar():
    with saved_uploads("avatar") as files:
        account = account_service(with_uplink=True).update_avatar(
            current_account().id, files["avatar"]
        )
    return json_response(account_schema.dump(account), message="Avatar updated successfully")


@bp.patch("/cover-image")
@require_auth
@timing
def update_cover_image():
    with saved_uploads("cover_image") as files:
        account = account_service(with_uplink=True).update_cover_image(
            current_account().id, files["cover_image"]
        )
    return json_response(account_schema.dump(account), message="Cover image updated successfully")


# ------------------------------------------------------------------ #
# Channel read model
# ------------------------------------------------------------------ #


@bp.get("/c/<username>")
@optional_auth
@timing
def get_channel_profile(username: str):
    viewer = g.current_account
    profile = channel_service().get_channel_profile(
        username, viewer_id=viewer.id if viewer is not None else None
    )
    return json_response(
        channel_profile_schema.dump(profile), message="User channel fetched successfully"
    )


@bp.get("/watch-history")
@require_auth
@timing
def get_watch_history():
    items = channel_service().get_watch_history(current_account().id)
    return json_response(
        watch_history_schema.dump(items), message="Watch history fetched successfully"
    )


@bp.post("/watch-history/<int:video_id>")
@require_auth
@timing
def record_view(video_id: int):
    entry = account_service().record_view(current_account().id, video_id)
    return json_response(watch_entry_schema.dump(entry), message="View recorded", status=201)
