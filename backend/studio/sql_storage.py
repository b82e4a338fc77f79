"""SQLAlchemy-backed ``Storage``.

Same contract as ``MemStorage``: records go in and come out as the pydantic
schemas, ids are allocated by the database and never reused.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Mapping, Optional, Sequence

from sqlalchemy import select
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from .db import Base, make_sessionmaker
from .models import ContentRow, TopicSuggestionRow, UserRow
from .schemas import Content, TopicSuggestion, User
from .storage import DEFAULT_SUGGESTION_LIMIT, Storage

_CONTENT_FIELDS = (
    "title", "type", "subject", "grade", "difficulty",
    "html_content", "tags", "is_public", "created_by_id",
)
_SUGGESTION_FIELDS = ("title", "description", "subject", "grade", "category", "difficulty_levels")


def _row_values(row: Any, fields: Sequence[str]) -> Dict[str, Any]:
    return {"id": row.id, **{name: getattr(row, name) for name in fields}}


def _to_user(row: UserRow) -> User:
    return User(id=row.id, username=row.username, password=row.password)


def _to_content(row: ContentRow) -> Content:
    return Content.model_validate(_row_values(row, _CONTENT_FIELDS))


def _to_suggestion(row: TopicSuggestionRow) -> TopicSuggestion:
    return TopicSuggestion.model_validate(_row_values(row, _SUGGESTION_FIELDS))


class SqlStorage(Storage):
    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._session_factory = make_sessionmaker(engine)
        Base.metadata.create_all(bind=engine)

    @contextmanager
    def _session(self) -> Iterator[Session]:
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    # User operations
    def get_user(self, user_id: int) -> Optional[User]:
        with self._session() as db:
            row = db.get(UserRow, user_id)
            return _to_user(row) if row else None

    def get_user_by_username(self, username: str) -> Optional[User]:
        with self._session() as db:
            row = db.execute(select(UserRow).where(UserRow.username == username)).scalars().first()
            return _to_user(row) if row else None

    def _insert_user(self, username: str, password_hash: str) -> User:
        with self._session() as db:
            row = UserRow(username=username, password=password_hash)
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_user(row)

    # Content operations
    def create_content(self, data: Mapping[str, Any]) -> Content:
        # Validate before touching the table so a bad payload never consumes an id
        draft = Content.model_validate({**data, "id": 0})
        with self._session() as db:
            row = ContentRow(**{name: getattr(draft, name) for name in _CONTENT_FIELDS})
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_content(row)

    def get_content(self, content_id: int) -> Optional[Content]:
        with self._session() as db:
            row = db.get(ContentRow, content_id)
            return _to_content(row) if row else None

    def list_content(self) -> List[Content]:
        with self._session() as db:
            rows = db.execute(select(ContentRow).order_by(ContentRow.id)).scalars().all()
            return [_to_content(r) for r in rows]

    def list_content_by_owner(self, owner_id: int) -> List[Content]:
        with self._session() as db:
            stmt = select(ContentRow).where(ContentRow.created_by_id == owner_id).order_by(ContentRow.id)
            return [_to_content(r) for r in db.execute(stmt).scalars().all()]

    def update_content(self, content_id: int, changes: Mapping[str, Any]) -> Optional[Content]:
        with self._session() as db:
            row = db.get(ContentRow, content_id)
            if row is None:
                return None
            merged = Content.model_validate({**_row_values(row, _CONTENT_FIELDS), **changes, "id": content_id})
            for name in _CONTENT_FIELDS:
                setattr(row, name, getattr(merged, name))
            db.commit()
            db.refresh(row)
            return _to_content(row)

    def delete_content(self, content_id: int) -> bool:
        with self._session() as db:
            row = db.get(ContentRow, content_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True

    # Topic suggestion operations
    def create_topic_suggestion(self, data: Mapping[str, Any]) -> TopicSuggestion:
        draft = TopicSuggestion.model_validate({**data, "id": 0})
        with self._session() as db:
            row = TopicSuggestionRow(**{name: getattr(draft, name) for name in _SUGGESTION_FIELDS})
            db.add(row)
            db.commit()
            db.refresh(row)
            return _to_suggestion(row)

    def list_topic_suggestions(
        self, subject: str, grade: str, limit: int = DEFAULT_SUGGESTION_LIMIT
    ) -> List[TopicSuggestion]:
        with self._session() as db:
            stmt = (
                select(TopicSuggestionRow)
                .where(TopicSuggestionRow.subject == subject, TopicSuggestionRow.grade == grade)
                .order_by(TopicSuggestionRow.id)
                .limit(limit)
            )
            return [_to_suggestion(r) for r in db.execute(stmt).scalars().all()]

    def delete_topic_suggestion(self, suggestion_id: int) -> bool:
        with self._session() as db:
            row = db.get(TopicSuggestionRow, suggestion_id)
            if row is None:
                return False
            db.delete(row)
            db.commit()
            return True
