import random
import re

import pytest

from msfeedback.services.feedback_service import FEEDBACK_NO_ALPHABET, generate_feedback_no
from msfeedback.services.media_service import aggregate_media_types, detect_media_type, detect_media_types, is_allowed_type

CODE_RE = re.compile(r"^[A-Z0-9]{6}$")


def test_tracking_code_shape():
    rng = random.Random(7)
    for _ in range(200):
        code = generate_feedback_no(exists=lambda c: False, rng=rng)
        assert CODE_RE.match(code)
        assert set(code) <= set(FEEDBACK_NO_ALPHABET)


def test_tracking_code_redraws_on_collision():
    taken = {generate_feedback_no(exists=lambda c: False, rng=random.Random(1))}
    checked = []

    def exists(code):
        checked.append(code)
        return code in taken

    code = generate_feedback_no(exists=exists, rng=random.Random(1))
    assert code not in taken
    assert len(checked) == 2
    assert checked[0] in taken


def test_tracking_code_keeps_drawing_until_free():
    attempts = []

    def exists(code):
        attempts.append(code)
        return len(attempts) < 25

    generate_feedback_no(exists=exists, rng=random.Random(3))
    assert len(attempts) == 25


@pytest.mark.parametrize("file_name,file_type,expected", [
    ("photo.bin", "image/png", "IMAGE"),
    ("clip", "video/mp4", "VIDEO"),
    ("memo", "audio/mpeg", "VOICE"),
    ("holiday.JPEG", "", "IMAGE"),
    ("talk.webm", "application/octet-stream", "VIDEO"),
    ("song.flac", None, "VOICE"),
    ("https://cdn.example.com/pic.png?size=large", "", "IMAGE"),
    ("http://example.com/page", "", "LINK"),
    ("links", "text/uri-list", "LINK"),
    ("log.txt", "text/plain", "TEXT"),
    ("", "", "TEXT"),
])
def test_detect_media_type(file_name, file_type, expected):
    assert detect_media_type(file_name, file_type) == expected


def test_mime_type_wins_over_extension():
    assert detect_media_type("recording.mp3", "image/gif") == "IMAGE"


def test_aggregate_is_deduplicated_in_first_seen_order():
    attachments = [
        {"file_name": "a.mp4", "file_type": "video/mp4"},
        {"file_name": "b.png", "file_type": "image/png"},
        {"file_name": "c.mov", "file_type": ""},
        {"file_name": "notes.txt", "file_type": "text/plain"},
    ]
    assert detect_media_types(attachments) == ["VIDEO", "IMAGE", "TEXT"]
    assert aggregate_media_types(attachments) == "VIDEO,IMAGE,TEXT"


def test_no_attachments_defaults_to_text():
    assert aggregate_media_types([]) == "TEXT"
    assert aggregate_media_types(None) == "TEXT"


def test_allowed_type_patterns():
    assert is_allowed_type("image/png", ["image/*"])
    assert not is_allowed_type("application/zip", ["image/*", "text/plain"])
    assert is_allowed_type("anything/at-all", [])
