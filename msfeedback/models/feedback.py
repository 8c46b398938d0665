from dataclasses import dataclass
from datetime import datetime
from typing import Optional
from msfeedback.extensions import db
from msfeedback.utils.enums import FeedbackPriority, FeedbackStatus, MediaType
from msfeedback.utils.http import isoformat

ORIGIN_USER = "user"
ORIGIN_EXTERNAL = "external"


@dataclass(frozen=True)
class Origin:
    """Who submitted a feedback item: a logged-in user or an external system."""

    type: str
    id: int

    @classmethod
    def user(cls, user_id: int) -> "Origin":
        return cls(ORIGIN_USER, user_id)

    @classmethod
    def external(cls, system_id: int) -> "Origin":
        return cls(ORIGIN_EXTERNAL, system_id)

    def to_dict(self):
        return {"type": self.type, "id": self.id}


class Feedback(db.Model):
    __tablename__ = "feedbacks"

    id = db.Column(db.Integer, primary_key=True)
    feedback_no = db.Column(db.String(6), unique=True, nullable=False, index=True)
    type = db.Column(db.String(50), nullable=False, default="general")
    title = db.Column(db.String(200), nullable=True)
    content = db.Column(db.Text, nullable=False)
    priority = db.Column(db.String(20), nullable=False, default=FeedbackPriority.NORMAL.value, index=True)
    status = db.Column(db.String(20), nullable=False, default=FeedbackStatus.PENDING.value, index=True)
    media_types = db.Column(db.String(100), nullable=False, default=MediaType.TEXT.value)
    reply = db.Column(db.Text, nullable=True)
    contact = db.Column(db.String(100), nullable=True)
    external_id = db.Column(db.String(255), nullable=True, index=True)
    external_data = db.Column(db.JSON, nullable=True)
    category_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True, index=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    external_system_id = db.Column(db.Integer, db.ForeignKey("external_systems.id"), nullable=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, index=True)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    __table_args__ = (
        db.CheckConstraint(
            "NOT (user_id IS NOT NULL AND external_system_id IS NOT NULL)",
            name="ck_feedback_single_origin",
        ),
    )

    category = db.relationship("Category", backref=db.backref("feedbacks", lazy="dynamic"))
    user = db.relationship("User", backref=db.backref("feedbacks", lazy="dynamic"))
    external_system = db.relationship("ExternalSystem", backref=db.backref("feedbacks", lazy="dynamic"))
    media_files = db.relationship(
        "MediaFile", backref="feedback", cascade="all, delete-orphan",
        order_by="MediaFile.id",
    )
    processing_logs = db.relationship(
        "ProcessingLog", backref="feedback", cascade="all, delete-orphan",
        order_by="[ProcessingLog.created_at.desc(), ProcessingLog.id.desc()]",
    )

    @property
    def origin(self) -> Optional[Origin]:
        if self.user_id is not None:
            return Origin.user(self.user_id)
        if self.external_system_id is not None:
            return Origin.external(self.external_system_id)
        return None

    @origin.setter
    def origin(self, value: Optional[Origin]):
        self.user_id = None
        self.external_system_id = None
        if value is None:
            return
        if value.type == ORIGIN_USER:
            self.user_id = value.id
        elif value.type == ORIGIN_EXTERNAL:
            self.external_system_id = value.id
        else:
            raise ValueError(f"Unknown feedback origin: {value.type}")

    def to_dict(self, include_logs=False, log_limit=None):
        origin = self.origin
        data = {
            "id": self.id,
            "feedbackNo": self.feedback_no,
            "type": self.type,
            "title": self.title,
            "content": self.content,
            "priority": self.priority,
            "status": self.status,
            "mediaTypes": self.media_types,
            "reply": self.reply,
            "contact": self.contact,
            "externalId": self.external_id,
            "externalData": self.external_data,
            "categoryId": self.category_id,
            "category": self.category.to_brief() if self.category else None,
            "origin": origin.to_dict() if origin else None,
            "user": self.user.to_brief() if self.user else None,
            "attachments": [m.to_dict() for m in self.media_files],
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if include_logs:
            logs = self.processing_logs
            if log_limit is not None:
                logs = logs[:log_limit]
            data["processing"] = [log.to_dict() for log in logs]
        return data

    def __repr__(self):
        return f"<Feedback {self.feedback_no}>"
