"""Editorial actions: submitting manuscripts, completing reviews, journal settings

These are thin writes through the record stores. None of them enforce
workflow ordering: a submission's stage can be set to anything at any time.
"""

from logging import getLogger
from typing import List, Optional

from .models import (
    Contributor,
    ContributorRole,
    Journal,
    Review,
    ReviewRecommendation,
    Submission,
    SubmissionMetadata,
)
from .utils import make_id, utcnow

logger = getLogger(__name__)


def new_contributor(
    existing: List[Contributor],
    first_name: str = "",
    last_name: str = "",
    email: str = "",
    role: ContributorRole = "author",
    **details,
) -> Contributor:
    """Builds the next contributor for a submission form

    The first contributor is primary by default; ``sequence`` is the
    1-based position after the ``existing`` ones.
    """
    return Contributor(
        id=make_id("contrib"),
        first_name=first_name,
        last_name=last_name,
        email=email,
        role=role,
        is_primary=len(existing) == 0,
        sequence=len(existing) + 1,
        **details,
    )


def create_submission(
    storage,
    journal_id: str,
    author_id: str,
    title: str,
    abstract: str,
    keywords: Optional[List[str]] = None,
    contributors: Optional[List[Contributor]] = None,
    language: str = "en",
    section_id: Optional[str] = None,
    subtitle: Optional[str] = None,
) -> Submission:
    """Stores a new submission queued at the first workflow stage"""
    now = utcnow()
    unique_keywords = []
    for keyword in keywords or []:
        keyword = keyword.strip()
        if keyword and keyword not in unique_keywords:
            unique_keywords.append(keyword)

    submission = Submission(
        id=make_id("submission"),
        journal_id=journal_id,
        author_id=author_id,
        title=title,
        subtitle=subtitle or None,
        abstract=abstract,
        keywords=unique_keywords,
        language=language,
        stage="submission",
        status="queued",
        submitted_date=now,
        last_modified=now,
        section_id=section_id or None,
        review_round=0,
        files=[],
        metadata=SubmissionMetadata(contributors=contributors or []),
    )
    logger.info(f"Author {author_id} submitted {submission.id} to {journal_id}")
    return storage.submissions.create(submission)


def complete_review(
    storage,
    review_id: str,
    recommendation: ReviewRecommendation,
    rating: int,
    comments: str = "",
    comments_for_author: Optional[str] = None,
    comments_for_editor: Optional[str] = None,
) -> Optional[Review]:
    """Records the reviewer's verdict and marks the review completed

    A previously declined review is completed all the same; the two
    markers are not reconciled.
    """
    return storage.reviews.update(
        review_id,
        recommendation=recommendation,
        rating=rating,
        comments=comments,
        comments_for_author=comments_for_author,
        comments_for_editor=comments_for_editor,
        completed_date=utcnow(),
    )


def decline_review(storage, review_id: str) -> Optional[Review]:
    return storage.reviews.update(review_id, declined=True)


def update_journal_settings(storage, journal_id: str, **changes) -> Optional[Journal]:
    """Merges ``changes`` into the journal and refreshes its modification time"""
    changes["updated_at"] = utcnow()
    return storage.journals.update(journal_id, **changes)
