from datetime import datetime, timezone

import pytest

from editorial_backend.db.backends import MemoryBackend
from editorial_backend.db.session import Storage
from editorial_backend.editorial import (
    complete_review,
    create_submission,
    decline_review,
    new_contributor,
    update_journal_settings,
)
from editorial_backend.queries import Queries
from editorial_backend.seed import initialize_seed_data

NOW = datetime(2024, 3, 1, tzinfo=timezone.utc)


@pytest.fixture
def storage():
    storage = Storage(MemoryBackend(), prefix="ojs_")
    initialize_seed_data(storage, now=NOW)
    return storage


class TestContributors:
    def test_first_is_primary(self):
        first = new_contributor([], first_name="Ada", last_name="Lovelace", email="ada@x.org")
        assert first.is_primary
        assert first.sequence == 1
        assert first.id.startswith("contrib-")

    def test_later_are_not_primary(self):
        first = new_contributor([])
        second = new_contributor([first], role="translator", orcid="0000-0001")
        assert not second.is_primary
        assert second.sequence == 2
        assert second.role == "translator"
        assert second.orcid == "0000-0001"


class TestCreateSubmission:
    def test_defaults(self, storage):
        submission = create_submission(
            storage,
            journal_id="journal-1",
            author_id="user-2",
            title="Type Systems",
            abstract="About types.",
            keywords=["types", " types ", "", "logic"],
            contributors=[new_contributor([], first_name="John", last_name="Smith")],
            section_id="",
        )
        assert submission.id.startswith("submission-")
        assert submission.stage == "submission"
        assert submission.status == "queued"
        assert submission.review_round == 0
        assert submission.keywords == ["types", "logic"]
        assert submission.section_id is None
        assert submission.metadata.contributors[0].is_primary
        assert storage.submissions.get_by_id(submission.id) == submission

    def test_counts_towards_journal(self, storage):
        create_submission(storage, "journal-1", "user-2", "Title", "Abstract")
        assert Queries(storage).dashboard_stats("journal-1").total_submissions == 2


class TestReviews:
    def test_complete(self, storage):
        review = complete_review(
            storage,
            "review-1",
            recommendation="revisions",
            rating=4,
            comments="Solid work",
            comments_for_editor="Minor issues",
        )
        assert review.completed_date is not None
        assert review.recommendation == "revisions"
        assert review.rating == 4
        assert review.comments_for_editor == "Minor issues"
        assert Queries(storage).active_reviews_for_reviewer("user-3") == []

    def test_complete_rejects_rating(self, storage):
        with pytest.raises(ValueError):
            complete_review(storage, "review-1", recommendation="accept", rating=0)
        assert storage.reviews.get_by_id("review-1").completed_date is None

    def test_decline(self, storage):
        review = decline_review(storage, "review-1")
        assert review.declined is True
        assert review.completed_date is None
        assert Queries(storage).active_reviews_for_reviewer("user-3") == []

    def test_decline_then_complete_keeps_both(self, storage):
        decline_review(storage, "review-1")
        review = complete_review(storage, "review-1", recommendation="accept", rating=5)
        assert review.declined is True
        assert review.completed_date is not None

    def test_missing_review(self, storage):
        assert decline_review(storage, "review-404") is None


class TestJournalSettings:
    def test_update_settings(self, storage):
        journal = update_journal_settings(
            storage, "journal-1", name="IJCS Letters", supported_locales=["en_US"]
        )
        assert journal.name == "IJCS Letters"
        assert journal.supported_locales == ["en_US"]
        assert journal.updated_at > NOW
        assert journal.publisher == "Academic Press"

    def test_missing_journal(self, storage):
        assert update_journal_settings(storage, "journal-9", name="x") is None
