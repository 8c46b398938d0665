from enum import Enum

class UserStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    LOCKED = "locked"

class FeedbackStatus(str, Enum):
    PENDING = "PENDING"
    PROCESSING = "PROCESSING"
    SOLVED = "SOLVED"
    REJECTED = "REJECTED"

class FeedbackPriority(str, Enum):
    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"

class MediaType(str, Enum):
    TEXT = "TEXT"
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    VOICE = "VOICE"
    LINK = "LINK"

class Permission(str, Enum):
    FEEDBACK_SUBMIT = "feedback:submit"
    FEEDBACK_QUERY = "feedback:query"
    STATS_VIEW = "stats:view"

class ProcessingAction(str, Enum):
    STATUS_CHANGE = "status_change"
    REPLY = "reply"
    COMMENT = "comment"
