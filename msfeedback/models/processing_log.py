from datetime import datetime
from msfeedback.extensions import db
from msfeedback.utils.http import isoformat

class ProcessingLog(db.Model):
    """Append-only audit entry for an action taken on a feedback item."""

    __tablename__ = "processing_logs"

    id = db.Column(db.Integer, primary_key=True)
    feedback_id = db.Column(db.Integer, db.ForeignKey("feedbacks.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True)
    operator = db.Column(db.String(100), nullable=True)
    action = db.Column(db.String(50), nullable=False)
    comment = db.Column(db.Text, nullable=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)

    user = db.relationship("User")

    def to_dict(self):
        return {
            "id": self.id,
            "feedbackId": self.feedback_id,
            "action": self.action,
            "content": self.comment,
            "operator": self.operator,
            "user": {"id": self.user.id, "username": self.user.username} if self.user else None,
            "createdAt": isoformat(self.created_at),
        }
