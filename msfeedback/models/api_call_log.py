from datetime import datetime
from msfeedback.extensions import db

class ApiCallLog(db.Model):
    __tablename__ = "api_call_logs"

    id = db.Column(db.Integer, primary_key=True)
    # Null when the presented key did not resolve to a system
    external_system_id = db.Column(db.Integer, db.ForeignKey("external_systems.id", ondelete="SET NULL"), nullable=True, index=True)
    api_path = db.Column(db.String(255), nullable=False)
    method = db.Column(db.String(10), nullable=False)
    status_code = db.Column(db.Integer, nullable=False)
    request_id = db.Column(db.String(36), nullable=False)
    response_time = db.Column(db.Integer, nullable=False, default=0)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
