from datetime import datetime
from msfeedback.extensions import db

class ApiKey(db.Model):
    __tablename__ = "api_keys"

    id = db.Column(db.Integer, primary_key=True)
    # sha256 hex digest of the raw key; the raw key is never stored
    key = db.Column(db.String(64), unique=True, nullable=False, index=True)
    name = db.Column(db.String(100), nullable=True)
    status = db.Column(db.Boolean, nullable=False, default=True)
    external_system_id = db.Column(db.Integer, db.ForeignKey("external_systems.id", ondelete="CASCADE"), nullable=False)
    last_used_at = db.Column(db.DateTime, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
