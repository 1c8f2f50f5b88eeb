from datetime import datetime, timezone

import pytest

from editorial_backend.filters import filter_submissions, filter_users
from editorial_backend.models import Submission, User

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def submissions():
    rows = [
        ("s1", "Deep Learning for Proteins", "We fold things.", "review", "review"),
        ("s2", "Graph Theory", "Notes on deep graphs.", "submission", "queued"),
        ("s3", "Compilers", "Parsing at scale.", "production", "editing"),
    ]
    return [
        Submission(
            id=sid,
            journal_id="journal-1",
            author_id="user-2",
            title=title,
            abstract=abstract,
            stage=stage,
            status=status,
            submitted_date=NOW,
            last_modified=NOW,
        )
        for sid, title, abstract, stage, status in rows
    ]


@pytest.fixture
def users():
    rows = [
        ("user-1", "admin@journal.com", "admin", "Admin", "User", ["admin", "editor"]),
        ("user-2", "author@university.edu", "jsmith", "John", "Smith", ["author"]),
        ("user-3", "reviewer@university.edu", "mjones", "Mary", "Jones", ["reviewer"]),
    ]
    return [
        User(
            id=uid,
            email=email,
            username=username,
            first_name=first,
            last_name=last,
            roles=roles,
            created_at=NOW,
            updated_at=NOW,
        )
        for uid, email, username, first, last, roles in rows
    ]


class TestFilterSubmissions:
    def test_no_filters(self, submissions):
        assert filter_submissions(submissions) == submissions

    def test_search_title_and_abstract(self, submissions):
        actual = filter_submissions(submissions, search="DEEP")
        assert [s.id for s in actual] == ["s1", "s2"]

    def test_stage(self, submissions):
        assert [s.id for s in filter_submissions(submissions, stage="production")] == ["s3"]

    def test_all_disables(self, submissions):
        assert filter_submissions(submissions, stage="all", status="all") == submissions

    def test_combined(self, submissions):
        actual = filter_submissions(submissions, search="deep", status="queued")
        assert [s.id for s in actual] == ["s2"]

    def test_does_not_modify_input(self, submissions):
        filter_submissions(submissions, stage="review")
        assert len(submissions) == 3


class TestFilterUsers:
    def test_search_fields(self, users):
        assert [u.id for u in filter_users(users, search="smith")] == ["user-2"]
        assert [u.id for u in filter_users(users, search="university")] == ["user-2", "user-3"]
        assert [u.id for u in filter_users(users, search="mjones")] == ["user-3"]

    def test_role_membership(self, users):
        assert [u.id for u in filter_users(users, role="editor")] == ["user-1"]

    def test_role_all(self, users):
        assert filter_users(users, role="all") == users
