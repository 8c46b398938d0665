from sqlalchemy.exc import IntegrityError

from msfeedback.extensions import db
from msfeedback.models.api_call_log import ApiCallLog
from msfeedback.models.api_key import ApiKey
from msfeedback.models.external_system import ExternalSystem
from msfeedback.models.feedback import Feedback
from msfeedback.controllers import external_feedback_controller
from msfeedback.services import feedback_service

SUBMIT = "/api/external/feedback/submit"
CRASH_REPORT = {
    "content": "app crashes on save",
    "attachments": [{"fileName": "log.txt", "fileType": "text/plain", "fileSize": 120}],
}


class _UntouchableStore:
    @property
    def query(self):
        raise AssertionError("feedback store was queried")


def test_submit_text_attachment(client, app, make_api_key):
    key = make_api_key()
    r = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key})
    assert r.status_code == 201, r.data
    data = r.get_json()["data"]
    assert data["mediaTypes"] == "TEXT"
    assert data["status"] == "PENDING"
    assert len(data["feedbackNo"]) == 6

    with app.app_context():
        feedback = Feedback.query.filter_by(feedback_no=data["feedbackNo"]).one()
        system = ExternalSystem.query.filter_by(name="partner").one()
        assert feedback.origin.type == "external"
        assert feedback.external_system_id == system.id
        assert feedback.user_id is None
        assert feedback.type == "external"
        logs = ApiCallLog.query.all()
        assert len(logs) == 1
        assert logs[0].external_system_id == system.id
        assert logs[0].status_code == 201
        assert logs[0].method == "POST"
        assert logs[0].api_path == SUBMIT
        assert ApiKey.query.one().last_used_at is not None


def test_submit_with_bearer_key_and_partner_fields(client, make_api_key):
    key = make_api_key()
    r = client.post(SUBMIT, headers={"Authorization": f"Bearer {key}"}, json={
        "content": "Payment page froze",
        "priority": "medium",
        "externalId": "TICKET-42",
        "externalData": {"source": "helpdesk"},
        "createdAt": "2024-05-01T08:30:00Z",
        "attachments": [
            {"fileName": "https://example.com/report", "fileType": "text/html", "fileSize": 1},
            {"fileName": "clip.mov", "fileType": "application/octet-stream", "fileSize": 10},
        ],
    })
    assert r.status_code == 201, r.data
    data = r.get_json()["data"]
    assert data["externalId"] == "TICKET-42"
    assert data["mediaTypes"] == "LINK,VIDEO"
    assert data["createdAt"].startswith("2024-05-01T08:30:00")

    status = client.get(f"/api/external/feedback/status/{data['feedbackNo']}", headers={"X-API-Key": key})
    assert status.get_json()["data"]["externalId"] == "TICKET-42"


def test_medium_priority_is_stored_as_normal(client, app, make_api_key):
    key = make_api_key()
    r = client.post(SUBMIT, headers={"X-API-Key": key}, json={"content": "x", "priority": "MEDIUM"})
    with app.app_context():
        assert db.session.get(Feedback, r.get_json()["data"]["id"]).priority == "normal"


def test_submit_without_permission(client, app, make_api_key):
    key = make_api_key(permissions=("feedback:query",))
    r = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key})
    assert r.status_code == 403
    assert r.get_json()["code"] == "INSUFFICIENT_PERMISSIONS"
    with app.app_context():
        assert Feedback.query.count() == 0
        assert ApiCallLog.query.one().status_code == 403


def test_submit_with_disabled_system_logs_one_call(client, app, make_api_key):
    key = make_api_key(enabled=False)
    r = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key})
    assert r.status_code == 403
    assert r.get_json()["code"] == "SYSTEM_DISABLED"
    with app.app_context():
        logs = ApiCallLog.query.all()
        assert len(logs) == 1
        assert logs[0].status_code == 403
        assert logs[0].external_system_id is not None
        assert Feedback.query.count() == 0


def test_missing_key(client, app):
    r = client.post(SUBMIT, json=CRASH_REPORT)
    assert r.status_code == 401
    assert r.get_json()["code"] == "MISSING_API_KEY"
    with app.app_context():
        log = ApiCallLog.query.one()
        assert log.external_system_id is None
        assert log.status_code == 401


def test_invalid_key(client, app, make_api_key):
    make_api_key()
    r = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": "not-a-real-key"})
    assert r.status_code == 401
    assert r.get_json()["code"] == "INVALID_API_KEY"
    with app.app_context():
        assert ApiCallLog.query.one().external_system_id is None


def test_submit_validation_error(client, app, make_api_key):
    key = make_api_key()
    r = client.post(SUBMIT, headers={"X-API-Key": key}, json={
        "priority": "whenever",
        "attachments": [{"fileName": "", "fileType": "image/png", "fileSize": 0}],
    })
    assert r.status_code == 400
    body = r.get_json()
    assert body["code"] == "VALIDATION_ERROR"
    fields = {e["field"] for e in body["errors"]}
    assert {"content", "priority", "attachments.0.fileName", "attachments.0.fileSize"} <= fields
    with app.app_context():
        assert ApiCallLog.query.one().status_code == 400


def test_status_unknown_code(client, make_api_key):
    key = make_api_key()
    r = client.get("/api/external/feedback/status/UNKNOWN1", headers={"X-API-Key": key})
    assert r.status_code == 404
    assert r.get_json()["code"] == "FEEDBACK_NOT_FOUND"


def test_status_requires_query_permission(client, make_api_key):
    key = make_api_key(permissions=("feedback:submit",))
    r = client.get("/api/external/feedback/status/ABC123", headers={"X-API-Key": key})
    assert r.status_code == 403
    assert r.get_json()["code"] == "INSUFFICIENT_PERMISSIONS"


def test_status_caps_logs_newest_first(client, app, make_api_key):
    key = make_api_key()
    feedback_no = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key}).get_json()["data"]["feedbackNo"]
    with app.app_context():
        feedback = feedback_service.find_by_feedback_no(feedback_no)
        for n in range(12):
            feedback_service.add_processing(feedback.id, "comment", f"note {n}", None)

    r = client.get(f"/api/external/feedback/status/{feedback_no}", headers={"X-API-Key": key})
    assert r.status_code == 200
    data = r.get_json()["data"]
    assert data["status"] == "PENDING"
    assert data["attachments"][0]["fileName"] == "log.txt"
    logs = data["operationLogs"]
    assert len(logs) == 10
    assert logs[0]["content"] == "note 11"
    assert logs[0]["operator"] == "system"


def test_batch_status(client, make_api_key):
    key = make_api_key()
    headers = {"X-API-Key": key}
    first = client.post(SUBMIT, json=CRASH_REPORT, headers=headers).get_json()["data"]["feedbackNo"]
    second = client.post(SUBMIT, json={"content": "second"}, headers=headers).get_json()["data"]["feedbackNo"]

    r = client.post("/api/external/feedback/batch-status", headers=headers,
                    json={"feedbackNos": [second, "UNKNOWN1", first]})
    assert r.status_code == 200
    assert [item["feedbackNo"] for item in r.get_json()["data"]] == [second, first]


def test_batch_status_too_many(client, make_api_key, monkeypatch):
    key = make_api_key()
    monkeypatch.setattr(external_feedback_controller, "Feedback", _UntouchableStore())

    r = client.post("/api/external/feedback/batch-status", headers={"X-API-Key": key},
                    json={"feedbackNos": [f"C{n:05d}" for n in range(101)]})
    assert r.status_code == 400
    assert r.get_json()["code"] == "BATCH_SIZE_EXCEEDED"

    malformed = [f"C{n:05d}" for n in range(100)] + [""]
    r = client.post("/api/external/feedback/batch-status", headers={"X-API-Key": key},
                    json={"feedbackNos": malformed})
    assert r.status_code == 400
    assert r.get_json()["code"] == "BATCH_SIZE_EXCEEDED"


def test_batch_status_empty_or_malformed(client, make_api_key):
    key = make_api_key()
    for body in ({"feedbackNos": []}, {"feedbackNos": "ABC123"}, {}):
        r = client.post("/api/external/feedback/batch-status", headers={"X-API-Key": key}, json=body)
        assert r.status_code == 400
        assert r.get_json()["code"] == "INVALID_INPUT"


def test_every_attempt_is_logged(client, app, make_api_key):
    key = make_api_key()
    client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key})
    client.post(SUBMIT, json=CRASH_REPORT)
    client.get("/api/external/feedback/status/UNKNOWN1", headers={"X-API-Key": key})
    with app.app_context():
        codes = [log.status_code for log in ApiCallLog.query.order_by(ApiCallLog.id).all()]
        request_ids = {log.request_id for log in ApiCallLog.query.all()}
    assert codes == [201, 401, 404]
    assert len(request_ids) == 3


def test_integrity_error_on_submit_is_a_conflict(client, app, make_api_key, monkeypatch):
    key = make_api_key()

    def duplicate(*args, **kwargs):
        raise IntegrityError("INSERT INTO feedbacks", {}, Exception("UNIQUE constraint failed"))

    monkeypatch.setattr(feedback_service, "create_feedback", duplicate)
    r = client.post(SUBMIT, json=CRASH_REPORT, headers={"X-API-Key": key})
    assert r.status_code == 409
    assert r.get_json()["code"] == "CONFLICT"
    with app.app_context():
        assert ApiCallLog.query.one().status_code == 409
