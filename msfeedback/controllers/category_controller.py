"""
Category Controller Module

Handles category HTTP requests: listing, the active tree, detail, and
create/update/delete for signed-in users.
"""

from msfeedback.schemas.category_schema import CategoryCreateSchema, CategoryUpdateSchema
from msfeedback.services import category_service
from msfeedback.utils.pagination import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE
from msfeedback.utils.http import ok, error, json_body, validate_schema, arg_int, arg_str, arg_bool


def list_categories_handler():
    """
    Query Parameters:
        - page, limit: pagination (limit max 100)
        - name: case-insensitive substring
        - isActive: 'true' / 'false'
        - parentId: id, or 'null' for root categories
        - sortBy: sortOrder | name | createdAt; sortOrder: asc | desc
    """
    result = category_service.list_categories(
        page=arg_int("page", 1, min_value=1),
        limit=arg_int("limit", DEFAULT_PAGE_SIZE, min_value=1, max_value=MAX_PAGE_SIZE),
        name=arg_str("name"),
        is_active=arg_bool("isActive"),
        parent_id=arg_str("parentId"),
        sort_by=arg_str("sortBy"),
        sort_order=arg_str("sortOrder"),
    )
    return ok(result)


def category_tree_handler():
    return ok(category_service.category_tree())


def get_category_handler(category_id: int):
    category = category_service.get_category(category_id)
    return ok(category_service.category_detail(category))


def create_category_handler():
    data, errors = validate_schema(CategoryCreateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    category = category_service.create_category(data)
    return ok(category_service.category_detail(category), 201, message="Category created")


def update_category_handler(category_id: int):
    data, errors = validate_schema(CategoryUpdateSchema, json_body())
    if errors:
        return error("VALIDATION_ERROR", "Validation failed", 400, errors=errors)

    category = category_service.update_category(category_id, data)
    return ok(category_service.category_detail(category), message="Category updated")


def delete_category_handler(category_id: int):
    category_service.delete_category(category_id)
    return ok(message="Category deleted")
