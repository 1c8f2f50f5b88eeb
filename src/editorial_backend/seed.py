"""Load the demonstration dataset into an empty store

- Users - an administrator who also edits, an author and a reviewer
- Journal - one journal with two sections
- Submissions - one manuscript in review, with its contributor
- Reviews - one open review assignment for that manuscript

"""

from datetime import datetime, timedelta
from logging import getLogger
from typing import List, Optional

from .models import (
    Contributor,
    Journal,
    Review,
    Section,
    Submission,
    SubmissionMetadata,
    User,
)
from .utils import utcnow

logger = getLogger(__name__)

JOURNAL_ID = "journal-1"


def demo_users(now: datetime) -> List[User]:
    return [
        User(
            id="user-1",
            email="admin@journal.com",
            username="admin",
            first_name="Admin",
            last_name="User",
            affiliation="Journal Editorial Office",
            country="US",
            roles=["admin", "editor"],
            created_at=now,
            updated_at=now,
        ),
        User(
            id="user-2",
            email="author@university.edu",
            username="jsmith",
            first_name="John",
            last_name="Smith",
            affiliation="University of Science",
            country="US",
            roles=["author"],
            created_at=now,
            updated_at=now,
        ),
        User(
            id="user-3",
            email="reviewer@university.edu",
            username="mjones",
            first_name="Mary",
            last_name="Jones",
            affiliation="Institute of Technology",
            country="UK",
            roles=["reviewer"],
            created_at=now,
            updated_at=now,
        ),
    ]


def demo_journal(now: datetime) -> Journal:
    return Journal(
        id=JOURNAL_ID,
        name="International Journal of Computer Science",
        initials="IJCS",
        description="A leading journal in computer science research and innovation",
        publisher="Academic Press",
        issn="1234-5678",
        eissn="1234-5679",
        online_issn="1234-5679",
        path="ijcs",
        enabled=True,
        primary_locale="en_US",
        supported_locales=["en_US", "fr_FR"],
        created_at=now,
        updated_at=now,
    )


def demo_sections() -> List[Section]:
    return [
        Section(
            id="section-1",
            journal_id=JOURNAL_ID,
            title="Articles",
            abbrev="ART",
            policy="Original research articles",
            is_inactive=False,
            abstract_word_count=250,
            sequence=1,
        ),
        Section(
            id="section-2",
            journal_id=JOURNAL_ID,
            title="Reviews",
            abbrev="REV",
            policy="Literature reviews and systematic reviews",
            is_inactive=False,
            abstract_word_count=300,
            sequence=2,
        ),
    ]


def demo_submission(now: datetime) -> Submission:
    return Submission(
        id="submission-1",
        journal_id=JOURNAL_ID,
        author_id="user-2",
        title="Machine Learning Approaches for Natural Language Processing",
        abstract=(
            "This paper presents novel machine learning approaches for improving "
            "natural language processing tasks. We demonstrate significant "
            "improvements in accuracy and performance across multiple benchmarks."
        ),
        keywords=["machine learning", "NLP", "deep learning", "transformers"],
        language="en",
        stage="review",
        status="review",
        submitted_date=now - timedelta(days=7),
        last_modified=now,
        section_id="section-1",
        editor_id="user-1",
        review_round=1,
        files=[],
        metadata=SubmissionMetadata(
            contributors=[
                Contributor(
                    id="contrib-1",
                    first_name="John",
                    last_name="Smith",
                    email="author@university.edu",
                    affiliation="University of Science",
                    country="US",
                    role="author",
                    is_primary=True,
                    sequence=1,
                )
            ]
        ),
    )


def demo_review(now: datetime) -> Review:
    return Review(
        id="review-1",
        submission_id="submission-1",
        reviewer_id="user-3",
        review_round=1,
        assigned_date=now - timedelta(days=5),
        due_date=now + timedelta(days=9),
        declined=False,
        comments="",
        review_method="doubleBlind",
        files=[],
    )


def initialize_seed_data(storage, now: Optional[datetime] = None) -> bool:
    """Populates ``storage`` with the demonstration dataset

    Does nothing if a journal already exists. The check only looks at the
    journal collection, so a run interrupted after the journal was written
    is never completed by a later run.

    Arguments
    ---------
    storage: Storage
        Handle on the collections to populate
    now: datetime, optional
        Reference time for every timestamp, defaults to the current time

    Returns
    -------
    bool
        True if the dataset was written
    """
    if storage.journals.get_all():
        logger.info("Journals already present, skipping seed data")
        return False

    now = now or utcnow()

    users = demo_users(now)
    for user in users:
        storage.users.create(user)

    storage.auth.set_current_user(users[0])

    storage.journals.create(demo_journal(now))

    for section in demo_sections():
        storage.sections.create(section)

    storage.submissions.create(demo_submission(now))
    storage.reviews.create(demo_review(now))

    logger.info("Seed data initialized")
    return True
