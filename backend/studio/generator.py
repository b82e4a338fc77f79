from __future__ import annotations

import html
import json
import logging
import re
from typing import Any, Callable, Dict, List, Optional

from pydantic import ValidationError

from .errors import GenerationParseError
from .gemini_client import GeminiClient
from .schemas import DifficultyLevel, TopicSuggestionCreate

logger = logging.getLogger(__name__)

DEFAULT_DIFFICULTY_LEVELS = [DifficultyLevel.MEDIUM.value]
_DIFFICULTY_VALUES = {level.value for level in DifficultyLevel}

_FENCE_RE = re.compile(r"```(?:json|html)?", re.IGNORECASE)
_BLOCK_TAG_RE = re.compile(
    r"<(?:h[1-6]|p|ul|ol|li|div|section|article|table|blockquote|pre)\b", re.IGNORECASE
)


def strip_code_fences(text: str) -> str:
    # Models like to wrap JSON/HTML answers in ```json ... ``` despite being told not to
    return _FENCE_RE.sub("", text or "").strip()


def build_suggestion_prompt(subject: str, grade: str, count: int) -> str:
    return f"""
Generate {count} educational topic suggestions for {subject} class for {grade} students.
Each suggestion should include a title, detailed description, subject category, and appropriate difficulty levels.
Format as a JSON array with the following structure for each suggestion:
{{
  "title": "Topic Title",
  "description": "Detailed description of the educational topic",
  "subject": "{subject}",
  "grade": "{grade}",
  "category": "Subject category or sub-area",
  "difficultyLevels": ["easy", "medium", "hard"]
}}
Include only the difficulty levels that suit the topic.
Only return valid JSON without any other text or explanation.
""".strip()


def build_content_prompt(prompt: str, subject: Optional[str] = None, grade: Optional[str] = None) -> str:
    context: List[str] = []
    if subject:
        context.append(f"- Subject: {subject}")
    if grade:
        context.append(f"- Grade level: {grade}")
    context_block = ("Context:\n" + "\n".join(context) + "\n\n") if context else ""
    return (
        "You are an experienced teacher writing classroom material.\n"
        f"{context_block}"
        f"Request: {prompt}\n\n"
        "Write the material as HTML suitable for a rich-text editor: use <h2>/<h3> headings, "
        "<p> paragraphs, and <ul>/<ol> lists where helpful. "
        "Return ONLY the HTML fragment, without <html>/<body> wrappers, markdown, or commentary."
    )


def parse_suggestions(raw_text: str) -> List[Any]:
    cleaned = strip_code_fences(raw_text)
    try:
        data = json.loads(cleaned)
    except ValueError as exc:
        raise GenerationParseError(raw_text) from exc
    if not isinstance(data, list):
        raise GenerationParseError(raw_text)
    return data


def _check_item(item: Any, raw_text: str) -> Dict[str, Any]:
    if not isinstance(item, dict):
        raise GenerationParseError(raw_text)
    title = item.get("title")
    description = item.get("description")
    if not isinstance(title, str) or not title.strip() or not isinstance(description, str):
        raise GenerationParseError(raw_text)
    return item


def _normalize_levels(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    levels: List[str] = []
    for level in value:
        if not isinstance(level, str):
            continue
        level = level.strip().lower()
        if level in _DIFFICULTY_VALUES and level not in levels:
            levels.append(level)
    return levels


def shape_suggestions(
    items: List[Any], subject: str, grade: str, count: int, raw_text: str = ""
) -> List[TopicSuggestionCreate]:
    """Coerce parsed items into records for the requested subject and grade.

    Only the first ``count`` items are checked; anything past them is
    discarded unread. ``subject`` and ``grade`` always come from the
    request, never from the model's echo of them.
    """
    shaped: List[TopicSuggestionCreate] = []
    for item in items[:count]:
        item = _check_item(item, raw_text)
        category = item.get("category")
        if not isinstance(category, str) or not category.strip():
            category = subject
        shaped.append(
            TopicSuggestionCreate(
                title=item["title"].strip(),
                description=item["description"].strip(),
                subject=subject,
                grade=grade,
                category=category,
                difficulty_levels=_normalize_levels(item.get("difficultyLevels")) or DEFAULT_DIFFICULTY_LEVELS,
            )
        )
    return shaped


def wrap_plain_text(text: str, heading: str) -> str:
    """Give block structure to an answer that came back as bare prose."""
    paragraphs = [p.strip() for p in re.split(r"\n\s*\n", text) if p.strip()]
    parts = [f"<h2>{html.escape(heading)}</h2>"]
    for paragraph in paragraphs:
        parts.append("<p>" + "<br>".join(html.escape(line.strip()) for line in paragraph.splitlines()) + "</p>")
    return "\n".join(parts)


class SuggestionGenerator:
    """Asks the text model for topic ideas and draft HTML content.

    ``client_factory`` builds a fresh client per call; anything with
    ``async generate(prompt) -> str`` and ``async aclose()`` will do.
    """

    def __init__(self, client_factory: Optional[Callable[[], Any]] = None) -> None:
        self._client_factory = client_factory or GeminiClient

    async def _call(self, prompt: str) -> str:
        client = self._client_factory()
        try:
            return await client.generate(prompt)
        finally:
            await client.aclose()

    async def generate_topic_suggestions(self, subject: str, grade: str, count: int) -> List[TopicSuggestionCreate]:
        logger.info("Generating %d topic suggestions for %s (%s)", count, subject, grade)
        raw = await self._call(build_suggestion_prompt(subject, grade, count))
        try:
            items = parse_suggestions(raw)
            suggestions = shape_suggestions(items, subject, grade, count, raw)
        except ValidationError as exc:
            logger.error("AI suggestions did not fit the record shape. Raw response: %s", raw)
            raise GenerationParseError(raw) from exc
        except GenerationParseError:
            logger.error("Failed to parse AI suggestions. Raw response: %s", raw)
            raise
        logger.info("Parsed %d suggestions", len(suggestions))
        return suggestions

    async def generate_content(self, prompt: str, subject: Optional[str] = None, grade: Optional[str] = None) -> str:
        logger.info("Generating content (subject=%s, grade=%s)", subject or "-", grade or "-")
        raw = await self._call(build_content_prompt(prompt, subject, grade))
        text = strip_code_fences(raw)
        if _BLOCK_TAG_RE.search(text):
            return text
        return wrap_plain_text(text, prompt)
