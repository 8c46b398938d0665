from .user import User
from .category import Category
from .external_system import ExternalSystem
from .api_key import ApiKey
from .api_call_log import ApiCallLog
from .feedback import Feedback, Origin
from .media_file import MediaFile
from .processing_log import ProcessingLog

__all__ = [
    "User",
    "Category",
    "ExternalSystem",
    "ApiKey",
    "ApiCallLog",
    "Feedback",
    "Origin",
    "MediaFile",
    "ProcessingLog",
]
