from datetime import datetime
from msfeedback.extensions import db
from msfeedback.utils.enums import UserStatus
from msfeedback.utils.http import isoformat

class User(db.Model):
    __tablename__ = "users"

    id = db.Column(db.Integer, primary_key=True)
    username = db.Column(db.String(50), unique=True, nullable=False, index=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password = db.Column(db.String(255), nullable=False)
    first_name = db.Column(db.String(100), nullable=True)
    last_name = db.Column(db.String(100), nullable=True)
    phone_number = db.Column(db.String(30), nullable=True)
    status = db.Column(db.String(20), nullable=False, default=UserStatus.ACTIVE.value)
    is_email_verified = db.Column(db.Boolean, nullable=False, default=False)
    is_phone_verified = db.Column(db.Boolean, nullable=False, default=False)
    created_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    updated_at = db.Column(db.DateTime, nullable=False, default=datetime.utcnow, onupdate=datetime.utcnow)

    @property
    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE.value

    def to_dict(self):
        """Public view of the user; never includes the password hash."""
        return {
            "id": self.id,
            "username": self.username,
            "email": self.email,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "phoneNumber": self.phone_number,
            "status": self.status,
            "isEmailVerified": self.is_email_verified,
            "isPhoneVerified": self.is_phone_verified,
            "createdAt": isoformat(self.created_at),
            "updatedAt": isoformat(self.updated_at),
        }

    def to_brief(self):
        return {
            "id": self.id,
            "username": self.username,
            "firstName": self.first_name,
            "lastName": self.last_name,
        }

    def __repr__(self):
        return f"<User {self.id}: {self.username}>"
