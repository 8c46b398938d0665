from datetime import datetime
from msfeedback.extensions import db
from msfeedback.utils.http import isoformat

DEFAULT_COLOR = "#1890ff"

class Category(db.Model):
    __tablename__ = "categories"

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    description = db.Column(db.Text, nullable=True)
    color = db.Column(db.String(20), nullable=False, default=DEFAULT_COLOR)
    is_active = db.Column(db.Boolean, nullable=False, default=True, index=True)
    sort_order = db.Column(db.Integer, nullable=False, default=0)
    parent_id = db.Column(db.Integer, db.ForeignKey("categories.id"), nullable=True, index=True)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    parent = db.relationship("Category", remote_side=[id], backref=db.backref("children", lazy="select"))

    def to_brief(self):
        return {"id": self.id, "name": self.name, "color": self.color}

    def to_dict(self, counts=None):
        data = {
            "id": self.id,
            "name": self.name,
            "description": self.description,
            "color": self.color,
            "isActive": self.is_active,
            "sortOrder": self.sort_order,
            "parentId": self.parent_id,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }
        if counts is not None:
            data["_count"] = counts
        return data

    def __repr__(self):
        return f"<Category {self.id}: {self.name}>"
