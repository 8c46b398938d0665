"""
Media type detection for feedback attachments.

Each attachment is classified as TEXT, IMAGE, VIDEO, VOICE or LINK from its
declared MIME type, then its file extension, then a URL-looking file name.
"""

import fnmatch
import os
import re
from typing import Iterable, List, Mapping

from msfeedback.utils.enums import MediaType

MIME_PREFIXES = (
    ("image/", MediaType.IMAGE),
    ("video/", MediaType.VIDEO),
    ("audio/", MediaType.VOICE),
)

EXTENSIONS = {
    MediaType.IMAGE: {"jpg", "jpeg", "png", "gif", "bmp", "webp"},
    MediaType.VIDEO: {"mp4", "avi", "mov", "wmv", "flv", "mkv", "webm"},
    MediaType.VOICE: {"mp3", "wav", "aac", "m4a", "ogg", "flac"},
}

_URL_RE = re.compile(r"^https?://", re.IGNORECASE)


def detect_media_type(file_name: str = "", file_type: str = "") -> str:
    file_name = (file_name or "").strip()
    file_type = (file_type or "").strip().lower()

    for prefix, media_type in MIME_PREFIXES:
        if file_type.startswith(prefix):
            return media_type.value

    ext = _extension(file_name.split("?", 1)[0])
    for media_type, exts in EXTENSIONS.items():
        if ext in exts:
            return media_type.value

    if _URL_RE.match(file_name) or file_type == "text/uri-list":
        return MediaType.LINK.value

    return MediaType.TEXT.value


def _extension(file_name: str) -> str:
    return os.path.splitext(file_name)[1].lstrip(".").lower()


def detect_media_types(attachments: Iterable[Mapping]) -> List[str]:
    """De-duplicated per-attachment types in first-seen order; ``["TEXT"]`` when empty."""
    seen: List[str] = []
    for attachment in attachments or []:
        media_type = detect_media_type(attachment.get("file_name", ""), attachment.get("file_type", ""))
        if media_type not in seen:
            seen.append(media_type)
    return seen or [MediaType.TEXT.value]


def aggregate_media_types(attachments: Iterable[Mapping]) -> str:
    return ",".join(detect_media_types(attachments))


def is_allowed_type(file_type: str, allowed_patterns: Iterable[str]) -> bool:
    patterns = [p.lower() for p in allowed_patterns or []]
    if not patterns:
        return True
    file_type = (file_type or "").lower()
    return any(fnmatch.fnmatch(file_type, pattern) for pattern in patterns)
