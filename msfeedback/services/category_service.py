"""
Category Service Module

CRUD for the category tree plus the nested tree view used by the admin UI.
"""

import logging
from typing import Any, Dict, List, Optional

from msfeedback.extensions import db
from msfeedback.models.category import Category, DEFAULT_COLOR
from msfeedback.models.feedback import Feedback
from msfeedback.utils.errors import BadRequestError, NotFoundError
from msfeedback.utils.pagination import apply_sort, contains, paginate

logger = logging.getLogger(__name__)

SORTABLE_FIELDS = {
    "sortOrder": Category.sort_order,
    "name": Category.name,
    "createdAt": Category.created_at,
}

DEFAULT_CATEGORIES = [
    {"name": "Feature request", "description": "Ideas and suggestions for product features", "color": "#1890ff", "sort_order": 1},
    {"name": "Bug report", "description": "Technical problems and errors users run into", "color": "#ff4d4f", "sort_order": 2},
    {"name": "UI improvement", "description": "Interface and user experience suggestions", "color": "#52c41a", "sort_order": 3},
]


def _counts(category: Category) -> Dict[str, int]:
    return {
        "children": Category.query.filter_by(parent_id=category.id).count(),
        "feedbacks": Feedback.query.filter_by(category_id=category.id).count(),
    }


def category_detail(category: Category) -> Dict[str, Any]:
    data = category.to_dict(counts=_counts(category))
    data["parent"] = {"id": category.parent.id, "name": category.parent.name} if category.parent else None
    data["children"] = [
        {"id": c.id, "name": c.name, "color": c.color, "isActive": c.is_active, "sortOrder": c.sort_order}
        for c in sorted(category.children, key=lambda c: (c.sort_order, c.name))
    ]
    return data


def get_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def list_categories(page: int = 1, limit: int = 10, name: Optional[str] = None,
                    is_active: Optional[bool] = None, parent_id: Optional[str] = None,
                    sort_by: Optional[str] = None, sort_order: Optional[str] = None) -> Dict[str, Any]:
    query = Category.query

    if name:
        query = query.filter(contains(Category.name, name))

    if is_active is not None:
        query = query.filter(Category.is_active.is_(is_active))

    if parent_id is not None:
        if parent_id == "null":
            query = query.filter(Category.parent_id.is_(None))
        else:
            try:
                query = query.filter(Category.parent_id == int(parent_id))
            except ValueError:
                raise BadRequestError("Invalid parentId filter", errors=[
                    {"field": "parentId", "message": "Must be an integer or 'null'."}
                ])

    query = apply_sort(query, Category, sort_by, sort_order or "asc", SORTABLE_FIELDS, "sortOrder")
    return paginate(query, page, limit, lambda c: c.to_dict(counts=_counts(c)))


def category_tree() -> List[Dict[str, Any]]:
    """Active categories as nested nodes; only roots at the top level."""
    categories = (
        Category.query.filter(Category.is_active.is_(True))
        .order_by(Category.sort_order.asc(), Category.name.asc(), Category.id.asc())
        .all()
    )
    by_parent: Dict[Optional[int], List[Category]] = {}
    for category in categories:
        by_parent.setdefault(category.parent_id, []).append(category)

    def build(node: Category, seen) -> Dict[str, Any]:
        seen = seen | {node.id}
        data = node.to_dict()
        data["children"] = [build(child, seen) for child in by_parent.get(node.id, []) if child.id not in seen]
        return data

    return [build(root, frozenset()) for root in by_parent.get(None, [])]


def _check_parent(category_id: Optional[int], parent_id: Optional[int]):
    if parent_id is None:
        return
    parent = db.session.get(Category, parent_id)
    if parent is None:
        raise BadRequestError("Parent category does not exist", errors=[
            {"field": "parentId", "message": f"Category {parent_id} not found."}
        ])
    # Walk up from the new parent; reaching the category itself means a cycle.
    node = parent
    while node is not None and category_id is not None:
        if node.id == category_id:
            raise BadRequestError("A category cannot be moved under itself", errors=[
                {"field": "parentId", "message": "Would create a cycle."}
            ])
        node = node.parent


def create_category(data: Dict[str, Any]) -> Category:
    _check_parent(None, data.get("parent_id"))
    category = Category(
        name=data["name"].strip(),
        description=data.get("description") or "",
        color=data.get("color") or DEFAULT_COLOR,
        is_active=data.get("is_active", True),
        sort_order=data.get("sort_order", 0),
        parent_id=data.get("parent_id"),
    )
    db.session.add(category)
    db.session.commit()
    return category


def update_category(category_id: int, changes: Dict[str, Any]) -> Category:
    category = get_category(category_id)
    if "parent_id" in changes:
        _check_parent(category.id, changes["parent_id"])
    for field in ("name", "description", "color", "is_active", "sort_order", "parent_id"):
        if field in changes:
            value = changes[field]
            setattr(category, field, value.strip() if field == "name" else value)
    db.session.commit()
    return category


def delete_category(category_id: int) -> None:
    """Refuses while the category still has children or linked feedback."""
    category = get_category(category_id)

    if Category.query.filter_by(parent_id=category.id).count() > 0:
        raise BadRequestError("Category has child categories and cannot be deleted", code="CATEGORY_HAS_CHILDREN")

    if Feedback.query.filter_by(category_id=category.id).count() > 0:
        raise BadRequestError("Category has linked feedback and cannot be deleted", code="CATEGORY_HAS_FEEDBACK")

    db.session.delete(category)
    db.session.commit()
    logger.info("Deleted category %s", category_id)


def ensure_default_categories() -> int:
    """Create the default categories on an empty table; returns how many were added."""
    if Category.query.count() > 0:
        return 0
    for item in DEFAULT_CATEGORIES:
        db.session.add(Category(**item))
    db.session.commit()
    return len(DEFAULT_CATEGORIES)
