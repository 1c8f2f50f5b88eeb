import logging
from functools import wraps
from typing import Any, Dict, List, Optional

from pydantic import ValidationError
from tqdm import tqdm

from ..auth import CurrentUserSession
from ..config import config
from ..models import Decision, Issue, Journal, Review, Section, Submission, User
from ..storage import (
    COLLECTIONS,
    DeserializationError,
    RecordStore,
    StorageError,
    storage_key,
)
from .backends import KeyValueBackend, open_backend

logger = logging.getLogger(__name__)


class Storage:
    """Handle on every collection of one backend

    Components receive a handle instead of reaching for a global store, so
    independent handles over independent backends never see each other.
    """

    def __init__(self, backend: KeyValueBackend, prefix: Optional[str] = None) -> None:
        self.backend = backend
        self.prefix = config.storage_prefix if prefix is None else prefix

        self.users: RecordStore[User] = self._collection("users")
        self.journals: RecordStore[Journal] = self._collection("journals")
        self.submissions: RecordStore[Submission] = self._collection("submissions")
        self.reviews: RecordStore[Review] = self._collection("reviews")
        self.issues: RecordStore[Issue] = self._collection("issues")
        self.sections: RecordStore[Section] = self._collection("sections")
        self.decisions: RecordStore[Decision] = self._collection("decisions")
        self.auth = CurrentUserSession(
            backend, storage_key(self.prefix, "current_user")
        )

    def _collection(self, name: str) -> RecordStore:
        return RecordStore(
            self.backend, storage_key(self.prefix, name), COLLECTIONS[name]
        )

    def collections(self) -> Dict[str, RecordStore]:
        return {name: getattr(self, name) for name in COLLECTIONS}

    def clear(self) -> None:
        """Removes every collection and the current user"""
        for store in self.collections().values():
            store.clear()
        self.auth.logout()

    def dump_snapshot(self) -> Dict[str, List[Dict[str, Any]]]:
        """Exports every collection in its persisted layout"""
        return {
            name: [record.to_json_dict() for record in store.get_all()]
            for name, store in self.collections().items()
        }

    def load_snapshot(self, snapshot: Dict[str, List[Dict[str, Any]]]) -> Dict[str, int]:
        """Appends the records of ``snapshot`` to the matching collections

        Returns the number of records loaded per collection. Every collection
        is validated before the first record is written, so a malformed
        snapshot leaves the store unchanged.
        """
        if not isinstance(snapshot, dict):
            raise StorageError("A snapshot must map collection names to records")
        unknown = set(snapshot) - set(COLLECTIONS)
        if unknown:
            raise StorageError(f"Unknown collections in snapshot: {sorted(unknown)}")

        stores = self.collections()
        validated = {}
        for name, records in snapshot.items():
            if not isinstance(records, list):
                raise StorageError(f"Snapshot collection {name} must be a list of records")
            try:
                validated[name] = [stores[name].model.model_validate(r) for r in records]
            except ValidationError as ex:
                logger.error(f"Snapshot collection {name} is malformed: {ex}")
                raise DeserializationError(name, str(ex)) from ex

        loaded = {}
        for name in tqdm(validated, desc="Loading collections"):
            store = stores[name]
            for record in validated[name]:
                store.create(record)
            loaded[name] = len(validated[name])
            logger.info(f"Loaded {loaded[name]} records into {store.key}")
        return loaded


def open_storage(
    kind: Optional[str] = None, path: Optional[str] = None, prefix: Optional[str] = None
) -> Storage:
    """Builds a Storage handle, defaulting to the configured backend"""
    kind = kind or config.store_backend
    path = path or config.store_path
    return Storage(open_backend(kind, path), prefix=prefix)


def connect_to_store(f):
    @wraps(f)
    def with_store_(*args, **kwargs):
        storage = open_storage()
        logger.debug(f"Opened {config.store_backend} store at {config.store_path}")
        return f(*args, storage, **kwargs)

    return with_store_
