from flask import Blueprint
from msfeedback.utils.auth import optional_auth, require_auth
from msfeedback.utils.permissions import (
    FEEDBACK_CREATE,
    FEEDBACK_DELETE,
    FEEDBACK_PROCESS,
    FEEDBACK_UPDATE,
    require_capability,
)
from msfeedback.controllers.feedback_controller import (
    list_feedbacks_handler,
    create_feedback_handler,
    get_feedback_handler,
    update_feedback_handler,
    delete_feedback_handler,
    add_processing_handler,
)

feedback_bp = Blueprint("feedback", __name__, url_prefix="/api/feedback")

@feedback_bp.route("", methods=["GET"])
@optional_auth
def list_feedbacks():
    return list_feedbacks_handler()

@feedback_bp.route("", methods=["POST"])
@require_auth
@require_capability(FEEDBACK_CREATE)
def create_feedback():
    return create_feedback_handler()

@feedback_bp.route("/<int:feedback_id>", methods=["GET"])
@optional_auth
def get_feedback(feedback_id):
    return get_feedback_handler(feedback_id)

@feedback_bp.route("/<int:feedback_id>", methods=["PUT"])
@require_auth
@require_capability(FEEDBACK_UPDATE)
def update_feedback(feedback_id):
    return update_feedback_handler(feedback_id)

@feedback_bp.route("/<int:feedback_id>", methods=["DELETE"])
@require_auth
@require_capability(FEEDBACK_DELETE)
def delete_feedback(feedback_id):
    return delete_feedback_handler(feedback_id)

@feedback_bp.route("/<int:feedback_id>/processing", methods=["POST"])
@require_auth
@require_capability(FEEDBACK_PROCESS)
def add_processing(feedback_id):
    return add_processing_handler(feedback_id)
