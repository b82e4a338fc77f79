"""Record store for users, content and topic suggestions.

``Storage`` is the interface every route talks to. ``MemStorage`` keeps one
``RecordCollection`` per entity type for the lifetime of the process; the
SQLAlchemy-backed variant lives in :mod:`studio.sql_storage`.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, Generic, List, Mapping, Optional, Type, TypeVar

from passlib.context import CryptContext
from pydantic import BaseModel

from .errors import ConfigurationError, InvalidRequestError
from .schemas import Content, TopicSuggestion, User
from .settings import Settings

logger = logging.getLogger(__name__)

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

DEFAULT_SUGGESTION_LIMIT = 10

R = TypeVar("R", bound=BaseModel)


class Storage(ABC):
    # User operations
    @abstractmethod
    def get_user(self, user_id: int) -> Optional[User]: ...

    @abstractmethod
    def get_user_by_username(self, username: str) -> Optional[User]: ...

    @abstractmethod
    def _insert_user(self, username: str, password_hash: str) -> User: ...

    def create_user(self, username: str, password: str) -> User:
        if self.get_user_by_username(username) is not None:
            raise InvalidRequestError(f"username '{username}' already exists")
        return self._insert_user(username, pwd_context.hash(password))

    # Content operations
    @abstractmethod
    def create_content(self, data: Mapping[str, Any]) -> Content: ...

    @abstractmethod
    def get_content(self, content_id: int) -> Optional[Content]: ...

    @abstractmethod
    def list_content(self) -> List[Content]: ...

    @abstractmethod
    def list_content_by_owner(self, owner_id: int) -> List[Content]: ...

    @abstractmethod
    def update_content(self, content_id: int, changes: Mapping[str, Any]) -> Optional[Content]: ...

    @abstractmethod
    def delete_content(self, content_id: int) -> bool: ...

    # Topic suggestion operations
    @abstractmethod
    def create_topic_suggestion(self, data: Mapping[str, Any]) -> TopicSuggestion: ...

    @abstractmethod
    def list_topic_suggestions(
        self, subject: str, grade: str, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> List[TopicSuggestion]: ...

    @abstractmethod
    def delete_topic_suggestion(self, suggestion_id: int) -> bool: ...

    def seed(self, config: Settings) -> None:
        if self.get_user_by_username(config.seed_username) is None:
            user = self.create_user(config.seed_username, config.seed_password_plain)
            logger.info("Seeded user %s (id=%s)", user.username, user.id)


class RecordCollection(Generic[R]):
    """Records of one type keyed by an id that only ever grows."""

    def __init__(self, record_type: Type[R]) -> None:
        self._record_type = record_type
        self._records: Dict[int, R] = {}
        self._next_id = 1

    def __len__(self) -> int:
        return len(self._records)

    def create(self, data: Mapping[str, Any]) -> R:
        record = self._record_type.model_validate({**data, "id": self._next_id})
        self._next_id += 1
        self._records[record.id] = record
        return record

    def get(self, record_id: int) -> Optional[R]:
        return self._records.get(record_id)

    def all(self) -> List[R]:
        return list(self._records.values())

    def where(self, predicate: Callable[[R], bool], limit: Optional[int] = None) -> List[R]:
        matches: List[R] = []
        for record in self._records.values():
            if limit is not None and len(matches) >= limit:
                break
            if predicate(record):
                matches.append(record)
        return matches

    def update(self, record_id: int, changes: Mapping[str, Any]) -> Optional[R]:
        existing = self._records.get(record_id)
        if existing is None:
            return None
        merged = self._record_type.model_validate({**existing.model_dump(), **changes, "id": record_id})
        self._records[record_id] = merged
        return merged

    def delete(self, record_id: int) -> bool:
        return self._records.pop(record_id, None) is not None


class MemStorage(Storage):
    def __init__(self) -> None:
        self.users: RecordCollection[User] = RecordCollection(User)
        self.content: RecordCollection[Content] = RecordCollection(Content)
        self.topic_suggestions: RecordCollection[TopicSuggestion] = RecordCollection(TopicSuggestion)

    def get_user(self, user_id: int) -> Optional[User]:
        return self.users.get(user_id)

    def get_user_by_username(self, username: str) -> Optional[User]:
        found = self.users.where(lambda u: u.username == username, limit=1)
        return found[0] if found else None

    def _insert_user(self, username: str, password_hash: str) -> User:
        return self.users.create({"username": username, "password": password_hash})

    def create_content(self, data: Mapping[str, Any]) -> Content:
        return self.content.create(data)

    def get_content(self, content_id: int) -> Optional[Content]:
        return self.content.get(content_id)

    def list_content(self) -> List[Content]:
        return self.content.all()

    def list_content_by_owner(self, owner_id: int) -> List[Content]:
        return self.content.where(lambda c: c.created_by_id == owner_id)

    def update_content(self, content_id: int, changes: Mapping[str, Any]) -> Optional[Content]:
        return self.content.update(content_id, changes)

    def delete_content(self, content_id: int) -> bool:
        return self.content.delete(content_id)

    def create_topic_suggestion(self, data: Mapping[str, Any]) -> TopicSuggestion:
        return self.topic_suggestions.create(data)

    def list_topic_suggestions(
        self, subject: str, grade: str, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> List[TopicSuggestion]:
        return self.topic_suggestions.where(lambda s: s.subject == subject and s.grade == grade, limit=limit)

    def delete_topic_suggestion(self, suggestion_id: int) -> bool:
        return self.topic_suggestions.delete(suggestion_id)


def create_storage(config: Settings) -> Storage:
    backend = (config.storage_backend or "memory").lower()
    if backend == "memory":
        storage: Storage = MemStorage()
    elif backend == "sql":
        from .db import make_engine
        from .sql_storage import SqlStorage

        storage = SqlStorage(make_engine(config.database_url))
    else:
        raise ConfigurationError(f"Unknown STORAGE_BACKEND: {config.storage_backend}")
    storage.seed(config)
    logger.info("Storage backend: %s", backend)
    return storage
