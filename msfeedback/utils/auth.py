import datetime as dt
import hashlib
import re
import secrets
from functools import wraps
from flask import request, current_app, g
import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from msfeedback.extensions import db
from msfeedback.utils.http import error

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$")
_UNITS = {"s": 1, "m": 60, "h": 3600, "d": 86400, "": 1}


def hash_password(plain: str) -> str:
    return generate_password_hash(plain)


def hash_api_key(raw_key: str) -> str:
    """One-way, deterministic digest used to store and look up API keys."""
    return hashlib.sha256(raw_key.encode("utf-8")).hexdigest()


def generate_api_key() -> str:
    return "msk_" + secrets.token_urlsafe(32)


def parse_duration(value) -> dt.timedelta:
    """Parse ``"24h"``, ``"30m"``, ``"7d"`` or plain seconds into a timedelta."""
    if isinstance(value, (int, float)):
        return dt.timedelta(seconds=int(value))
    match = _DURATION_RE.match(str(value or ""))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return dt.timedelta(seconds=int(amount) * _UNITS[unit])


def _encode(payload: dict, expires_in) -> str:
    now = dt.datetime.now(dt.timezone.utc)
    payload = dict(payload)
    payload["iat"] = int(now.timestamp())
    payload["exp"] = int((now + parse_duration(expires_in)).timestamp())
    return jwt.encode(payload, current_app.config["JWT_SECRET"], algorithm="HS256")


def create_token(user) -> str:
    return _encode(
        {"sub": str(user.id), "username": user.username, "email": user.email, "type": "access"},
        current_app.config["JWT_EXPIRES_IN"],
    )


def create_refresh_token(user) -> str:
    return _encode({"sub": str(user.id), "type": "refresh"}, current_app.config["JWT_REFRESH_EXPIRES_IN"])


def decode_token(token: str):
    return jwt.decode(token, current_app.config["JWT_SECRET"], algorithms=["HS256"])


def _bearer_token():
    auth_header = request.headers.get("Authorization", "")
    if not auth_header.startswith("Bearer "):
        return None
    return auth_header.split(" ", 1)[1].strip() or None


def _resolve_user(token: str):
    """Return ``(user, error_response)`` for a bearer token."""
    from msfeedback.models.user import User

    try:
        payload = decode_token(token)
    except jwt.ExpiredSignatureError:
        return None, error("INVALID_TOKEN", "Token has expired", 401)
    except jwt.InvalidTokenError:
        return None, error("INVALID_TOKEN", "Invalid token", 401)
    if payload.get("type", "access") != "access":
        return None, error("INVALID_TOKEN", "Invalid token", 401)

    try:
        user = db.session.get(User, int(payload["sub"]))
    except (KeyError, TypeError, ValueError):
        return None, error("INVALID_TOKEN", "Invalid token", 401)
    # Ids can be reused after a delete; the username claim must still match
    if user is None or payload.get("username") != user.username:
        return None, error("INVALID_TOKEN", "User no longer exists", 401)
    if not user.is_active:
        return None, error("ACCOUNT_DISABLED", "Account is disabled or locked", 403)
    return user, None


def require_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        token = _bearer_token()
        if not token:
            return error("UNAUTHORIZED", "Missing Bearer token", 401)
        user, failure = _resolve_user(token)
        if failure is not None:
            return failure
        g.current_user = user
        return f(*args, **kwargs)
    return wrapper


def optional_auth(f):
    @wraps(f)
    def wrapper(*args, **kwargs):
        g.current_user = None
        token = _bearer_token()
        if token:
            user, failure = _resolve_user(token)
            if failure is None:
                g.current_user = user
        return f(*args, **kwargs)
    return wrapper


def current_user():
    return g.get("current_user")


__all__ = [
    "hash_password",
    "hash_api_key",
    "generate_api_key",
    "create_token",
    "create_refresh_token",
    "decode_token",
    "require_auth",
    "optional_auth",
    "current_user",
    "check_password_hash",
]
