import logging
from typing import Any, Dict, Optional

from sqlalchemy import or_

from msfeedback.extensions import db
from msfeedback.models.user import User
from msfeedback.utils.auth import check_password_hash, create_refresh_token, create_token, hash_password
from msfeedback.utils.enums import UserStatus
from msfeedback.utils.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError, UnauthorizedError
from msfeedback.utils.pagination import apply_date_range, apply_sort, contains, paginate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "createdAt": User.created_at,
    "username": User.username,
    "email": User.email,
}


def register_user(data: Dict[str, Any]) -> User:
    username = data["username"].strip()
    email = data["email"].strip().lower()

    exists = User.query.filter(or_(User.username == username, User.email == email)).first()
    if exists:
        raise BadRequestError("Username or email already exists", code="USER_EXISTS")

    user = User(
        username=username,
        email=email,
        password=hash_password(data["password"]),
        first_name=data.get("first_name"),
        last_name=data.get("last_name"),
        phone_number=data.get("phone_number"),
        status=UserStatus.ACTIVE.value,
    )
    db.session.add(user)
    db.session.commit()
    logger.info("Registered user %s", user.username)
    return user


def authenticate(username: str, password: str) -> Dict[str, Any]:
    """Accepts a username or an email in ``username``."""
    login = username.strip()
    user = User.query.filter(or_(User.username == login, User.email == login.lower())).first()
    if not user or not check_password_hash(user.password, password):
        raise UnauthorizedError("Username or password incorrect", code="INVALID_CREDENTIALS")
    if not user.is_active:
        raise ForbiddenError("Account is disabled or locked", code="ACCOUNT_DISABLED")
    return {
        "user": user.to_dict(),
        "token": create_token(user),
        "refreshToken": create_refresh_token(user),
    }


def get_user(user_id: int) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    return user


def list_users(page: int = 1, limit: int = 10, username: Optional[str] = None, email: Optional[str] = None,
               status: Optional[str] = None, is_email_verified: Optional[bool] = None,
               is_phone_verified: Optional[bool] = None, created_from: Optional[str] = None,
               created_to: Optional[str] = None, sort_by: Optional[str] = None,
               sort_order: Optional[str] = None) -> Dict[str, Any]:
    query = User.query
    if username:
        query = query.filter(contains(User.username, username))
    if email:
        query = query.filter(contains(User.email, email))
    if status:
        query = query.filter(User.status == status)
    if is_email_verified is not None:
        query = query.filter(User.is_email_verified.is_(is_email_verified))
    if is_phone_verified is not None:
        query = query.filter(User.is_phone_verified.is_(is_phone_verified))
    query = apply_date_range(query, User.created_at, created_from, created_to)
    query = apply_sort(query, User, sort_by, sort_order, SORTABLE_FIELDS, "createdAt")
    return paginate(query, page, limit, lambda u: u.to_dict())


def update_user(user_id: int, changes: Dict[str, Any]) -> User:
    user = get_user(user_id)
    if "email" in changes:
        email = changes["email"].strip().lower()
        taken = User.query.filter(User.email == email, User.id != user.id).first()
        if taken:
            raise ConflictError("Email already in use", code="USER_EXISTS")
        user.email = email
    for field in ("first_name", "last_name", "phone_number", "status"):
        if field in changes:
            setattr(user, field, changes[field])
    db.session.commit()
    return user


def change_password(user: User, old_password: str, new_password: str) -> None:
    if not check_password_hash(user.password, old_password):
        raise BadRequestError("Current password is incorrect", errors=[
            {"field": "oldPassword", "message": "Incorrect password."}
        ])
    user.password = hash_password(new_password)
    db.session.commit()


def delete_user(user_id: int) -> None:
    user = get_user(user_id)
    db.session.delete(user)
    db.session.commit()
    logger.info("Deleted user %s", user_id)
