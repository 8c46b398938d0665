from flask import Blueprint
from msfeedback.utils.auth import require_auth
from msfeedback.utils.enums import Permission
from msfeedback.utils.permissions import require_capability
from msfeedback.controllers.dashboard_controller import get_dashboard_stats_handler

statistics_bp = Blueprint("statistics", __name__, url_prefix="/api/statistics")

@statistics_bp.get("/dashboard")
@require_auth
@require_capability(Permission.STATS_VIEW.value)
def dashboard():
    return get_dashboard_stats_handler()
