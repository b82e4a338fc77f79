from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel

from .constants import DEFAULT_OWNER_ID


class ContentType(str, Enum):
    NOTES = "notes"
    QUIZ = "quiz"
    ASSIGNMENT = "assignment"
    PAPER = "paper"


class DifficultyLevel(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


TITLE_MIN_LENGTH = 3


class _Schema(BaseModel):
    # JSON bodies use camelCase (htmlContent, isPublic, ...); Python code uses field names
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, use_enum_values=True)


def _check_title(value: str) -> str:
    if len(value) < TITLE_MIN_LENGTH:
        raise ValueError(f"title must be at least {TITLE_MIN_LENGTH} characters")
    return value


class User(_Schema):
    model_config = ConfigDict(frozen=True)

    id: int
    username: str
    password: str


class UserOut(_Schema):
    id: int
    username: str


class ContentCreate(_Schema):
    title: str
    type: ContentType
    subject: str
    grade: str
    difficulty: DifficultyLevel
    html_content: str
    tags: Optional[List[str]] = None
    is_public: bool = False
    created_by_id: int = DEFAULT_OWNER_ID

    @field_validator("title")
    @classmethod
    def check_title_length(cls, value: str) -> str:
        return _check_title(value)


class ContentUpdate(_Schema):
    """Partial update. Absent keys are left alone; ``null`` clears ``tags``."""

    title: Optional[str] = None
    type: Optional[ContentType] = None
    subject: Optional[str] = None
    grade: Optional[str] = None
    difficulty: Optional[DifficultyLevel] = None
    html_content: Optional[str] = None
    tags: Optional[List[str]] = None
    is_public: Optional[bool] = None
    created_by_id: Optional[int] = None

    @field_validator(
        "title", "type", "subject", "grade", "difficulty", "html_content", "is_public", "created_by_id",
        mode="before",
    )
    @classmethod
    def reject_null(cls, value, info: ValidationInfo):
        if value is None:
            raise ValueError(f"{to_camel(info.field_name)} cannot be null")
        return value

    @field_validator("title")
    @classmethod
    def check_title_length(cls, value: Optional[str]) -> Optional[str]:
        return value if value is None else _check_title(value)


class Content(ContentCreate):
    model_config = ConfigDict(frozen=True)

    id: int


class ContentStats(_Schema):
    notes: int = 0
    quiz: int = 0
    assignment: int = 0
    paper: int = 0
    total: int = 0


class TopicSuggestionCreate(_Schema):
    title: str
    description: str
    subject: str
    grade: str
    category: Optional[str] = None
    difficulty_levels: Optional[List[DifficultyLevel]] = None


class TopicSuggestion(TopicSuggestionCreate):
    model_config = ConfigDict(frozen=True)

    id: int


class SuggestionResponse(BaseModel):
    suggestions: List[TopicSuggestion] = Field(default_factory=list)


class ContentDraftResponse(BaseModel):
    content: str
