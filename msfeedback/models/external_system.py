from datetime import datetime
from msfeedback.extensions import db
from msfeedback.utils.http import isoformat

class ExternalSystem(db.Model):
    __tablename__ = "external_systems"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), unique=True, nullable=False)
    description = db.Column(db.Text, nullable=True)
    permissions = db.Column(db.JSON, nullable=False, default=list)
    rate_limit = db.Column(db.Integer, nullable=False, default=100)
    status = db.Column(db.Boolean, nullable=False, default=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)

    api_keys = db.relationship("ApiKey", backref="external_system", cascade="all, delete-orphan")

    def has_permission(self, permission: str) -> bool:
        return permission in (self.permissions or [])

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "permissions": list(self.permissions or []),
            "rateLimit": self.rate_limit,
            "status": self.status,
            "createdAt": isoformat(self.created_at),
        }

    def __repr__(self):
        return f"<ExternalSystem {self.id}: {self.name}>"
