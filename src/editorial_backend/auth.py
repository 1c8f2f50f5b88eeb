"""The current-user slot of the dashboard

A single stored user, independent of the user collection: there is no
expiry, no token and only one session per store.
"""

from logging import getLogger
from typing import Optional

from pydantic import ValidationError

from .db.backends import KeyValueBackend
from .models import User
from .storage import DeserializationError, read_entry

logger = getLogger(__name__)


class CurrentUserSession:
    def __init__(self, backend: KeyValueBackend, key: str) -> None:
        self.backend = backend
        self.key = key

    def get_current_user(self) -> Optional[User]:
        data = read_entry(self.backend, self.key)
        if data is None:
            return None
        try:
            return User.model_validate_json(data)
        except ValidationError as ex:
            logger.error(f"Stored current user is malformed: {ex}")
            raise DeserializationError(self.key, str(ex)) from ex

    def set_current_user(self, user: Optional[User]) -> None:
        if user is None:
            self.backend.remove(self.key)
            logger.info("Cleared current user")
        else:
            self.backend.set(self.key, user.model_dump_json(by_alias=True, exclude_none=True))
            logger.info(f"Current user is now {user.id}")

    def logout(self) -> None:
        self.set_current_user(None)


def login(storage, email: str) -> Optional[User]:
    """Makes the user registered with ``email`` the current user

    The match ignores case but not surrounding whitespace. No credentials
    are checked. Returns None and leaves the current session as it is when
    no user has that email.
    """
    wanted = email.lower()
    for user in storage.users.get_all():
        if user.email.lower() == wanted:
            storage.auth.set_current_user(user)
            return user
    logger.warning(f"No account found for {email}")
    return None
