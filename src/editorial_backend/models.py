"""This module describes the data model of the editorial backend

Each entity is a record carrying a unique string ``id``. Relationships are
plain identifier fields (``journal_id``, ``submission_id``, ...) resolved at
query time; nothing enforces that a referenced record exists.

Attributes are snake_case in Python and camelCase once persisted, so a stored
collection keeps the layout of the browser prototype (``firstName``,
``journalId``, ``isInactive``). Optional fields are left out of the stored
JSON when unset.

"""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

UserRole = Literal["admin", "editor", "reviewer", "author", "reader"]

WorkflowStage = Literal[
    "submission", "review", "copyediting", "production", "published"
]

SubmissionStatus = Literal[
    "incomplete", "queued", "review", "editing", "published", "declined"
]

ReviewRecommendation = Literal["accept", "revisions", "resubmit", "decline"]

ReviewMethod = Literal["doubleBlind", "singleBlind", "open"]

FileStage = Literal["submission", "review", "copyedit", "proof", "production"]

ContributorRole = Literal["author", "translator", "editor"]

DecisionOutcome = Literal[
    "accept", "decline", "requestRevisions", "resubmit", "sendToProduction"
]

AccessStatus = Literal["open", "subscription"]


class StoredModel(BaseModel):
    """Base for everything that is serialized into the key-value store"""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        validate_assignment=True,
    )

    def to_json_dict(self) -> dict:
        """Dump in the persisted layout: camelCase keys, unset optionals absent"""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class Record(StoredModel):
    """A stored entity with its unique identifier"""

    id: str


class User(Record):
    email: str
    username: str
    first_name: str
    last_name: str
    affiliation: Optional[str] = None
    country: Optional[str] = None
    roles: List[UserRole] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"


class Journal(Record):
    name: str
    initials: str
    description: str
    publisher: str
    issn: Optional[str] = None
    eissn: Optional[str] = None
    online_issn: Optional[str] = None
    path: str
    enabled: bool = True
    primary_locale: str = "en_US"
    supported_locales: List[str] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class SubmissionFile(StoredModel):
    """A file attached to a submission

    Only the metadata is kept, ``file_url`` points at wherever the content
    lives.
    """

    id: str
    submission_id: str
    file_stage: FileStage
    file_name: str
    file_type: str
    file_size: int
    uploaded_by: str
    uploaded_date: datetime
    label: Optional[str] = None
    file_url: Optional[str] = None


class Contributor(StoredModel):
    id: str
    first_name: str
    last_name: str
    email: str
    affiliation: Optional[str] = None
    country: Optional[str] = None
    orcid: Optional[str] = None
    role: ContributorRole = "author"
    is_primary: bool = False
    sequence: int


class SubmissionMetadata(StoredModel):
    contributors: List[Contributor] = Field(default_factory=list)
    citations: Optional[List[str]] = None
    coverage: Optional[str] = None
    rights: Optional[str] = None
    source: Optional[str] = None
    subjects: Optional[List[str]] = None
    type: Optional[str] = None
    discipline: Optional[str] = None
    agencies: Optional[List[str]] = None


class Submission(Record):
    """A manuscript moving through the editorial workflow"""

    journal_id: str
    author_id: str
    title: str
    abstract: str
    prefix: Optional[str] = None
    subtitle: Optional[str] = None
    keywords: List[str] = Field(default_factory=list)
    language: str = "en"
    stage: WorkflowStage = "submission"
    status: SubmissionStatus = "queued"
    submitted_date: datetime
    last_modified: datetime
    section_id: Optional[str] = None
    editor_id: Optional[str] = None
    review_round: int = 0
    files: List[SubmissionFile] = Field(default_factory=list)
    metadata: SubmissionMetadata = Field(default_factory=SubmissionMetadata)


class ReviewFile(StoredModel):
    id: str
    review_id: str
    file_name: str
    file_type: str
    uploaded_date: datetime
    file_url: Optional[str] = None


class Review(Record):
    """A reviewer assignment for one round of a submission

    ``completed_date`` and ``declined`` both mark the end of an assignment.
    Nothing prevents a record from carrying both.
    """

    submission_id: str
    reviewer_id: str
    review_round: int = 1
    assigned_date: datetime
    due_date: datetime
    completed_date: Optional[datetime] = None
    declined: bool = False
    recommendation: Optional[ReviewRecommendation] = None
    comments: str = ""
    comments_for_author: Optional[str] = None
    comments_for_editor: Optional[str] = None
    rating: Optional[int] = Field(default=None, ge=1, le=5)
    review_method: ReviewMethod = "doubleBlind"
    files: List[ReviewFile] = Field(default_factory=list)


class Issue(Record):
    journal_id: str
    volume: Optional[int] = None
    number: Optional[str] = None
    year: int
    title: Optional[str] = None
    description: Optional[str] = None
    published: bool = False
    date_published: Optional[datetime] = None
    date_notified: Optional[datetime] = None
    last_modified: datetime
    access_status: AccessStatus = "open"
    cover_image_url: Optional[str] = None
    submissions: List[str] = Field(default_factory=list)


class Section(Record):
    journal_id: str
    title: str
    abbrev: str
    policy: Optional[str] = None
    is_inactive: bool = False
    abstract_word_count: Optional[int] = None
    review_form_id: Optional[str] = None
    sequence: int = 0


class Decision(Record):
    submission_id: str
    editor_id: str
    stage: WorkflowStage
    decision: DecisionOutcome
    date_decided: datetime
    comments: str = ""
    review_round: int


class DashboardStats(StoredModel):
    """Submission counts shown on the journal dashboard"""

    total_submissions: int
    in_review: int
    in_editing: int
    published: int


class ReviewCounts(StoredModel):
    pending: int
    completed: int
