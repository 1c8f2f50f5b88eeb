from typing import List, Optional

from .models import Submission, User
from .utils import contains

ALL = "all"


def _active(value: Optional[str]) -> bool:
    return bool(value) and value != ALL


def filter_submissions(
    submissions: List[Submission],
    search: Optional[str] = None,
    stage: Optional[str] = None,
    status: Optional[str] = None,
) -> List[Submission]:
    """Filter submissions the way the submissions list does

    ``search`` matches title or abstract regardless of case. ``stage`` and
    ``status`` must match exactly; None or "all" disables a filter.
    """
    filtered = list(submissions)
    if search:
        filtered = [
            s for s in filtered if contains(s.title, search) or contains(s.abstract, search)
        ]
    if _active(stage):
        filtered = [s for s in filtered if s.stage == stage]
    if _active(status):
        filtered = [s for s in filtered if s.status == status]
    return filtered


def filter_users(
    users: List[User], search: Optional[str] = None, role: Optional[str] = None
) -> List[User]:
    filtered = list(users)
    if search:
        filtered = [
            u
            for u in filtered
            if contains(u.first_name, search)
            or contains(u.last_name, search)
            or contains(u.email, search)
            or contains(u.username, search)
        ]
    if _active(role):
        filtered = [u for u in filtered if role in u.roles]
    return filtered
