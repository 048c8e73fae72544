from datetime import datetime

import pytest
from sqlalchemy import select
from sqlalchemy.exc import NoResultFound

from core.constants import IssueType
from core.models import Issue, IssueComment, Media
from core.permissions import Permission
from core.repositories import (
    IssueCommentRepository,
    IssueRepository,
    MediaRepository,
    UserRepository,
)


@pytest.fixture
def seeded(make_user, make_media, make_issue):
    reporter = make_user(Permission.CREATE_ISSUES)
    media = make_media(tmdb_id=42)
    issues = [make_issue(media, reporter, message=f"issue {n}", days=n) for n in range(3)]
    return reporter, media, issues


def test_list_page_newest_first(test_session, seeded):
    _, _, issues = seeded

    page, total = IssueRepository(test_session).list_page(skip=0, take=2)

    assert total == 3
    assert [issue.id for issue in page] == [issues[2].id, issues[1].id]


def test_list_page_window(test_session, seeded):
    _, _, issues = seeded

    page, total = IssueRepository(test_session).list_page(skip=2, take=2)

    assert total == 3
    assert [issue.id for issue in page] == [issues[0].id]


def test_list_page_sort_by_modified(test_session, seeded):
    _, _, issues = seeded
    oldest = test_session.get(Issue, issues[0].id)
    oldest.updated_at = datetime(2030, 1, 1)
    test_session.flush()

    page, _ = IssueRepository(test_session).list_page(take=3, sort="modified")

    assert page[0].id == issues[0].id
    # Unknown sort keys fall back to creation order
    page, _ = IssueRepository(test_session).list_page(take=3, sort="bogus")
    assert page[0].id == issues[2].id


def test_list_page_loads_relations(test_session, seeded):
    reporter, media, _ = seeded

    page, _ = IssueRepository(test_session).list_page(take=1)

    issue = page[0]
    assert issue.media.tmdb_id == media.tmdb_id
    assert issue.created_by.id == reporter.id
    assert issue.comments[0].user.id == reporter.id
    assert issue.description.message == "issue 2"


def test_get_one_or_fail_raises_for_missing(test_session):
    with pytest.raises(NoResultFound):
        IssueRepository(test_session).get_one_or_fail(999)


def test_add_comment_bumps_updated_at(test_session, seeded):
    reporter, _, issues = seeded
    repo = IssueRepository(test_session)
    issue = repo.get_one_or_fail(issues[0].id)
    before = issue.updated_at

    comment = repo.add_comment(issue, reporter.id, "still broken")

    assert comment.id is not None
    assert [c.message for c in repo.get_one_or_fail(issue.id).comments] == [
        "issue 0",
        "still broken",
    ]
    assert issue.updated_at.replace(tzinfo=None) > before


def test_deleting_issue_removes_comments(test_session, seeded):
    _, _, issues = seeded
    repo = IssueRepository(test_session)

    repo.delete(repo.get_one_or_fail(issues[0].id))

    assert repo.count() == 2
    assert IssueCommentRepository(test_session).count() == 2


def test_deleting_media_removes_its_issues(test_session, seeded):
    _, media, _ = seeded

    MediaRepository(test_session).delete(test_session.get(Media, media.id))

    assert IssueRepository(test_session).count() == 0
    assert test_session.scalars(select(IssueComment)).all() == []


def test_user_lookup_by_id(test_session, make_user):
    user = make_user()

    assert UserRepository(test_session).get_by_id(user.id).id == user.id
    assert UserRepository(test_session).get_by_id(999) is None


def test_issue_defaults(test_session, make_user, make_media):
    reporter = make_user(Permission.CREATE_ISSUES)
    media = make_media()
    issue = IssueRepository(test_session).save(
        Issue(media_id=media.id, created_by_id=reporter.id, issue_type=int(IssueType.OTHER))
    )

    assert issue.status == 1
    assert issue.problem_season == 0
    assert issue.problem_episode == 0
    assert issue.created_at is not None
