import time
from datetime import datetime, timezone
from flask import current_app, jsonify

API_VERSION = "1.0.0"


def api_index():
    return jsonify({
        "message": "MSFeedback API is running",
        "version": API_VERSION,
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": {
            "users": "/api/users",
            "feedback": "/api/feedback",
            "categories": "/api/categories",
            "statistics": "/api/statistics",
            "externalFeedback": "/api/external/feedback",
        },
    })


def health():
    started = current_app.config.get("STARTED_AT", time.monotonic())
    return jsonify({
        "status": "OK",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - started, 3),
    }), 200
