from msfeedback.schemas.user_schema import ChangePasswordSchema, LoginSchema, RegisterSchema, UserUpdateSchema
from msfeedback.services import user_service
from msfeedback.utils.auth import current_user
from msfeedback.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from msfeedback.utils.http import ok, error, json_body, validate_schema, arg_int, arg_str, arg_bool


def register_handler():
    data, errors = validate_schema(RegisterSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    user = user_service.register_user(data)
    return ok(user.to_dict(), 201, message="User registered")


def login_handler():
    data, errors = validate_schema(LoginSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    return ok(user_service.authenticate(data["username"], data["password"]), message="Login successful")


def list_users_handler():
    result = user_service.list_users(
        page=arg_int("page", 1, min_value=1),
        limit=arg_int("limit", DEFAULT_PAGE_SIZE, min_value=1, max_value=MAX_PAGE_SIZE),
        username=arg_str("username"),
        email=arg_str("email"),
        status=arg_str("status"),
        is_email_verified=arg_bool("isEmailVerified"),
        is_phone_verified=arg_bool("isPhoneVerified"),
        created_from=arg_str("createdFrom"),
        created_to=arg_str("createdTo"),
        sort_by=arg_str("sortBy"),
        sort_order=arg_str("sortOrder"),
    )
    return ok(result)


def get_user_handler(user_id: int):
    return ok(user_service.get_user(user_id).to_dict())


def get_me_handler():
    return ok(current_user().to_dict())


def update_user_handler(user_id: int):
    data, errors = validate_schema(UserUpdateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    user = user_service.update_user(user_id, data)
    return ok(user.to_dict(), message="User updated")


def change_password_handler():
    data, errors = validate_schema(ChangePasswordSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    user_service.change_password(current_user(), data["old_password"], data["new_password"])
    return ok(message="Password changed")


def delete_user_handler(user_id: int):
    me = current_user()
    if me.id == user_id:
        return error("FORBIDDEN", "You cannot delete your own account", 403)
    user_service.delete_user(user_id)
    return ok(message="User deleted")
