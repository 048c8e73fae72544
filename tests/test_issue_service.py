import pytest

from backend.app.schemas import IssueCreateRequest
from backend.app.services import issue_service
from core.constants import IssueStatus, IssueType
from core.exceptions import IssueNotFoundError, NotFoundError, ValidationFailedError
from core.models import Issue
from core.permissions import Permission


@pytest.mark.parametrize(
    "total,take,skip,expected",
    [
        (0, 10, 0, {"pages": 0, "page_size": 10, "results": 0, "page": 1}),
        (3, 2, 0, {"pages": 2, "page_size": 2, "results": 3, "page": 1}),
        (3, 2, 2, {"pages": 2, "page_size": 2, "results": 3, "page": 2}),
        (25, 10, 15, {"pages": 3, "page_size": 10, "results": 25, "page": 2}),
    ],
)
def test_build_page_info(total, take, skip, expected):
    assert issue_service.build_page_info(total, take, skip) == expected


def test_create_issue_stores_first_comment(test_session, make_user, make_media):
    reporter = make_user(Permission.CREATE_ISSUES)
    media = make_media()
    request = IssueCreateRequest(message="No audio", media_id=media.id, issue_type=IssueType.SYNC)

    issue = issue_service.create_issue(test_session, reporter, request)

    assert issue.status == IssueStatus.OPEN
    assert issue.issue_type == IssueType.SYNC
    assert [c.message for c in issue.comments] == ["No audio"]
    assert issue.comments[0].user_id == reporter.id


def test_create_issue_unknown_media(test_session, make_user):
    reporter = make_user(Permission.CREATE_ISSUES)
    request = IssueCreateRequest(message="No audio", media_id=404, issue_type=IssueType.SYNC)

    with pytest.raises(NotFoundError, match="Media does not exist."):
        issue_service.create_issue(test_session, reporter, request)

    assert test_session.query(Issue).count() == 0


def test_update_status_loads_issue_before_checking_token(test_session):
    with pytest.raises(IssueNotFoundError):
        issue_service.update_status(test_session, 999, "not-a-status")


def test_update_status_rejects_unknown_token(test_session, make_user, make_media, make_issue):
    issue = make_issue(make_media(), make_user(Permission.CREATE_ISSUES))

    with pytest.raises(ValidationFailedError, match="You must provide a valid status"):
        issue_service.update_status(test_session, issue.id, "closed")


def test_update_status_is_idempotent(test_session, make_user, make_media, make_issue):
    issue = make_issue(make_media(), make_user(Permission.CREATE_ISSUES))

    issue_service.update_status(test_session, issue.id, "resolved")
    updated = issue_service.update_status(test_session, issue.id, "resolved")

    assert updated.status == IssueStatus.RESOLVED


def test_viewing_rules(make_user, make_media, make_issue):
    reporter = make_user(Permission.CREATE_ISSUES)
    issue = make_issue(make_media(), reporter)

    assert issue_service.can_view(reporter, issue)
    assert issue_service.can_view(make_user(Permission.VIEW_ISSUES), issue)
    assert issue_service.can_view(make_user(Permission.ADMIN), issue)
    assert not issue_service.can_view(make_user(Permission.CREATE_ISSUES), issue)

    assert issue_service.is_owner_or_manager(reporter, issue)
    assert issue_service.is_owner_or_manager(make_user(Permission.MANAGE_ISSUES), issue)
    assert not issue_service.is_owner_or_manager(make_user(Permission.VIEW_ISSUES), issue)
