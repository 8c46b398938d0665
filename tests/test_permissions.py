from msfeedback.models.external_system import ExternalSystem
from msfeedback.models.user import User
from msfeedback.utils.permissions import CATEGORY_MANAGE, FEEDBACK_PROCESS, can


def test_active_user_can_do_admin_actions():
    user = User(username="alice", email="a@example.com", password="x", status="active")
    assert can(user, FEEDBACK_PROCESS)
    assert can(user, CATEGORY_MANAGE)
    assert can(user, "stats:view")
    assert not can(user, "feedback:submit")


def test_inactive_user_can_do_nothing():
    user = User(username="bob", email="b@example.com", password="x", status="locked")
    assert not can(user, FEEDBACK_PROCESS)


def test_external_system_limited_to_its_permissions():
    system = ExternalSystem(name="crm", permissions=["feedback:submit"], status=True)
    assert can(system, "feedback:submit")
    assert not can(system, "feedback:query")
    assert not can(system, CATEGORY_MANAGE)


def test_disabled_system_and_anonymous():
    system = ExternalSystem(name="crm", permissions=["feedback:submit"], status=False)
    assert not can(system, "feedback:submit")
    assert not can(None, "feedback:submit")
    assert not can(object(), FEEDBACK_PROCESS)
