from flask import Blueprint
from msfeedback.extensions import limiter
from msfeedback.controllers.home_controller import api_index, health

home_bp = Blueprint("home", __name__)

@home_bp.route("/api")
def index():
    return api_index()

@home_bp.route("/health")
@limiter.exempt
def health_check():
    return health()
