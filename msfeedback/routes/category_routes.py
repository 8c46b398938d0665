from flask import Blueprint
from msfeedback.utils.auth import require_auth
from msfeedback.utils.permissions import CATEGORY_MANAGE, require_capability
from msfeedback.controllers.category_controller import (
    list_categories_handler,
    category_tree_handler,
    get_category_handler,
    create_category_handler,
    update_category_handler,
    delete_category_handler,
)

category_bp = Blueprint("categories", __name__, url_prefix="/api/categories")

@category_bp.get("")
def list_categories():
    return list_categories_handler()

@category_bp.get("/tree")
def category_tree():
    return category_tree_handler()

@category_bp.get("/<int:category_id>")
def get_category(category_id):
    return get_category_handler(category_id)

@category_bp.post("")
@require_auth
@require_capability(CATEGORY_MANAGE)
def create_category():
    return create_category_handler()

@category_bp.put("/<int:category_id>")
@require_auth
@require_capability(CATEGORY_MANAGE)
def update_category(category_id):
    return update_category_handler(category_id)

@category_bp.delete("/<int:category_id>")
@require_auth
@require_capability(CATEGORY_MANAGE)
def delete_category(category_id):
    return delete_category_handler(category_id)
