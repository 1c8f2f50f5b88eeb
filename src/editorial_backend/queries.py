"""Derived reads across the record stores

Each query is a pure function of the current store contents and may be
called any number of times in any order. Relationships are resolved by
matching identifier fields; dangling references simply match nothing.
"""

from logging import getLogger
from typing import List, Optional

from .config import config
from .models import (
    DashboardStats,
    Decision,
    Issue,
    Review,
    ReviewCounts,
    Section,
    Submission,
    WorkflowStage,
)

logger = getLogger(__name__)

EDITING_STAGES = ("copyediting", "production")


class Queries:
    def __init__(self, storage) -> None:
        self.storage = storage

    def submissions_by_journal(self, journal_id: str) -> List[Submission]:
        return self.storage.submissions.get_by_field("journal_id", journal_id)

    def submissions_by_author(self, author_id: str) -> List[Submission]:
        return self.storage.submissions.get_by_field("author_id", author_id)

    def submissions_by_stage(
        self, journal_id: str, stage: WorkflowStage
    ) -> List[Submission]:
        return [
            submission
            for submission in self.storage.submissions.get_all()
            if submission.journal_id == journal_id and submission.stage == stage
        ]

    def recent_submissions(
        self, journal_id: str, limit: Optional[int] = None
    ) -> List[Submission]:
        """The first ``limit`` submissions of a journal in storage order"""
        limit = config.recent_submissions_limit if limit is None else limit
        return self.submissions_by_journal(journal_id)[:limit]

    def reviews_for_submission(self, submission_id: str) -> List[Review]:
        return self.storage.reviews.get_by_field("submission_id", submission_id)

    def reviews_by_reviewer(self, reviewer_id: str) -> List[Review]:
        return self.storage.reviews.get_by_field("reviewer_id", reviewer_id)

    def active_reviews_for_reviewer(self, reviewer_id: str) -> List[Review]:
        """Reviews neither completed nor declined"""
        return [
            review
            for review in self.storage.reviews.get_all()
            if review.reviewer_id == reviewer_id
            and not review.completed_date
            and not review.declined
        ]

    def issues_by_journal(self, journal_id: str) -> List[Issue]:
        return self.storage.issues.get_by_field("journal_id", journal_id)

    def published_issues(self, journal_id: str) -> List[Issue]:
        return [
            issue
            for issue in self.storage.issues.get_all()
            if issue.journal_id == journal_id and issue.published
        ]

    def sections_by_journal(self, journal_id: str) -> List[Section]:
        return self.storage.sections.get_by_field("journal_id", journal_id)

    def decisions_for_submission(self, submission_id: str) -> List[Decision]:
        return self.storage.decisions.get_by_field("submission_id", submission_id)

    def dashboard_stats(self, journal_id: str) -> DashboardStats:
        """Counts the journal's submissions by stage and status

        Rescans the journal's submissions on every call.
        """
        submissions = self.submissions_by_journal(journal_id)
        stats = DashboardStats(
            total_submissions=len(submissions),
            in_review=sum(1 for s in submissions if s.stage == "review"),
            in_editing=sum(1 for s in submissions if s.stage in EDITING_STAGES),
            published=sum(1 for s in submissions if s.status == "published"),
        )
        logger.debug(f"Dashboard stats for {journal_id}: {stats}")
        return stats


def review_counts(reviews: List[Review]) -> ReviewCounts:
    """Pending (open) and completed reviews among ``reviews``

    A declined review is neither pending nor completed.
    """
    return ReviewCounts(
        pending=sum(1 for r in reviews if not r.completed_date and not r.declined),
        completed=sum(1 for r in reviews if r.completed_date),
    )
