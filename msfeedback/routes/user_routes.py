from flask import Blueprint
from msfeedback.utils.auth import require_auth
from msfeedback.utils.permissions import USER_MANAGE, require_capability
from msfeedback.controllers.user_controller import (
    register_handler,
    login_handler,
    list_users_handler,
    get_me_handler,
    change_password_handler,
    get_user_handler,
    update_user_handler,
    delete_user_handler,
)

user_bp = Blueprint("users", __name__, url_prefix="/api/users")

@user_bp.post("/register")
def register():
    return register_handler()

@user_bp.post("/login")
def login():
    return login_handler()

@user_bp.get("")
@require_auth
@require_capability(USER_MANAGE)
def list_users():
    return list_users_handler()

@user_bp.get("/me")
@require_auth
def get_me():
    return get_me_handler()

@user_bp.put("/me/password")
@require_auth
def change_password():
    return change_password_handler()

@user_bp.get("/<int:user_id>")
@require_auth
@require_capability(USER_MANAGE)
def get_user(user_id):
    return get_user_handler(user_id)

@user_bp.put("/<int:user_id>")
@require_auth
@require_capability(USER_MANAGE)
def update_user(user_id):
    return update_user_handler(user_id)

@user_bp.delete("/<int:user_id>")
@require_auth
@require_capability(USER_MANAGE)
def delete_user(user_id):
    return delete_user_handler(user_id)
