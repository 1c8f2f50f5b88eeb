"""Keyed record storage on top of a key-value backend

A :class:`RecordStore` keeps one homogeneous collection of records as a single
JSON list under one key. Reads deserialize the whole list and scan it; every
mutation rewrites the whole list. There is no index, no transaction and no
conflict detection, so collections are expected to stay small and the last
writer of a key wins.

"""

from functools import lru_cache
from json import dumps
from logging import getLogger
from typing import Any, Dict, Generic, List, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter, ValidationError
from pydantic.alias_generators import to_camel

from .db.backends import KeyValueBackend
from .models import (
    Decision,
    Issue,
    Journal,
    Record,
    Review,
    Section,
    Submission,
    User,
)

logger = getLogger(__name__)

STORAGE_KEYS = {
    "users": "users",
    "journals": "journals",
    "submissions": "submissions",
    "reviews": "reviews",
    "issues": "issues",
    "sections": "sections",
    "decisions": "decisions",
    "current_user": "current_user",
}

COLLECTIONS: Dict[str, Type[Record]] = {
    "users": User,
    "journals": Journal,
    "submissions": Submission,
    "reviews": Review,
    "issues": Issue,
    "sections": Section,
    "decisions": Decision,
}

T = TypeVar("T", bound=Record)


class StorageError(ValueError):
    pass


class DeserializationError(StorageError):
    """A stored entry is not valid JSON or does not match its model"""

    def __init__(self, key: str, reason: str) -> None:
        self.key = key
        super().__init__(f"Could not deserialize stored entry {key}: {reason}")


def storage_key(prefix: str, name: str) -> str:
    return f"{prefix}{STORAGE_KEYS[name]}"


class RecordStore(Generic[T]):
    """CRUD over one collection of records identified by ``id``

    Parameters
    ----------
    backend : KeyValueBackend
        The byte store holding the serialized collection
    key : str
        The key of the collection in ``backend``
    model : Type[Record]
        The model every record of the collection is validated against

    Notes
    -----
    ``create`` does not check for duplicate identifiers. When two records
    share an id, ``get_by_id`` and ``update`` act on the first one while ``delete``
    removes all of them.
    """

    def __init__(self, backend: KeyValueBackend, key: str, model: Type[T]) -> None:
        self.backend = backend
        self.key = key
        self.model = model
        self._aliases = {
            to_camel(name): name for name in model.model_fields
        }

    def _load(self) -> List[T]:
        data = read_entry(self.backend, self.key)
        if data is None:
            return []
        return deserialize_records(data, self.model, self.key)

    def _save_all(self, records: List[T]) -> None:
        self.backend.set(self.key, serialize_records(records))
        logger.debug(f"Saved {len(records)} records to {self.key}")

    def _resolve_field(self, field: str) -> str:
        if field in self.model.model_fields:
            return field
        if field in self._aliases:
            return self._aliases[field]
        raise ValueError(f"{self.model.__name__} has no field {field}")

    def get_all(self) -> List[T]:
        """Returns every record in insertion order"""
        return self._load()

    def get_by_id(self, record_id: str) -> Optional[T]:
        for record in self._load():
            if record.id == record_id:
                return record
        return None

    def get_by_field(self, field: str, value: Any) -> List[T]:
        """Returns the records whose ``field`` equals ``value``

        ``field`` may be given as the attribute name or its stored
        camelCase name. Only strict equality is supported, a list field
        is not searched for membership.
        """
        name = self._resolve_field(field)
        return [
            record for record in self._load() if getattr(record, name) == value
        ]

    def create(self, record: Union[T, Dict[str, Any]]) -> T:
        if not isinstance(record, self.model):
            record = self.model.model_validate(record)
        records = self._load()
        records.append(record)
        self._save_all(records)
        logger.info(f"Created {record.id} in {self.key}")
        return record

    def update(self, record_id: str, **changes: Any) -> Optional[T]:
        """Merges ``changes`` into the record with ``record_id``

        Fields not named in ``changes`` keep their value. The merged record
        is validated again before anything is written. Returns None, leaving
        the collection untouched, if no record has ``record_id``.
        """
        fields = {self._resolve_field(name): value for name, value in changes.items()}
        records = self._load()
        for index, record in enumerate(records):
            if record.id == record_id:
                merged = self.model.model_validate({**record.model_dump(), **fields})
                records[index] = merged
                self._save_all(records)
                logger.info(f"Updated {record_id} in {self.key}: {sorted(fields)}")
                return merged
        logger.warning(f"Cannot update {record_id}: not found in {self.key}")
        return None

    def delete(self, record_id: str) -> bool:
        records = self._load()
        remaining = [record for record in records if record.id != record_id]
        if len(remaining) == len(records):
            logger.warning(f"Cannot delete {record_id}: not found in {self.key}")
            return False
        self._save_all(remaining)
        logger.info(f"Deleted {record_id} from {self.key}")
        return True

    def clear(self) -> None:
        self.backend.remove(self.key)
        logger.info(f"Cleared {self.key}")


def serialize_records(records: List[Record]) -> str:
    return dumps([record.to_json_dict() for record in records])


@lru_cache(maxsize=None)
def _list_adapter(model: Type[Record]) -> TypeAdapter:
    return TypeAdapter(List[model])


def deserialize_records(data: str, model: Type[T], key: str = "<memory>") -> List[T]:
    """Parses a serialized collection, raising DeserializationError if malformed"""
    try:
        return _list_adapter(model).validate_json(data)
    except ValidationError as ex:
        logger.error(f"Stored entry {key} is malformed: {ex}")
        raise DeserializationError(key, str(ex)) from ex


def read_entry(backend: KeyValueBackend, key: str) -> Optional[str]:
    """Reads ``key`` from ``backend``, None if absent

    An entry whose bytes are not valid UTF-8 raises DeserializationError.
    """
    try:
        return backend.get(key)
    except UnicodeDecodeError as ex:
        logger.error(f"Stored entry {key} is not valid UTF-8: {ex}")
        raise DeserializationError(key, str(ex)) from ex
