from __future__ import annotations
import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from ..deps import get_generator, get_settings, get_storage
from ..errors import GenerationError, InvalidRequestError, StudioError
from ..generator import SuggestionGenerator
from ..schemas import ContentDraftResponse, SuggestionResponse
from ..settings import Settings
from ..storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ai", tags=["ai"])

MAX_SUGGESTION_COUNT = 20


class SuggestionRequest(BaseModel):
	subject: Optional[str] = None
	grade: Optional[str] = None
	count: Optional[int] = Field(default=None, ge=1, le=MAX_SUGGESTION_COUNT)


class ContentRequest(BaseModel):
	prompt: Optional[str] = None
	subject: Optional[str] = None
	grade: Optional[str] = None


@router.post("/suggestions", response_model=SuggestionResponse)
async def generate_suggestions(
	req: SuggestionRequest,
	storage: Storage = Depends(get_storage),
	generator: SuggestionGenerator = Depends(get_generator),
	config: Settings = Depends(get_settings),
):
	subject = (req.subject or "").strip()
	grade = (req.grade or "").strip()
	if not subject or not grade:
		raise InvalidRequestError("Subject and grade are required")
	count = req.count or config.ai_suggestion_count
	try:
		drafts = await generator.generate_topic_suggestions(subject, grade, count)
	except StudioError:
		raise
	except Exception as e:
		logger.exception("AI suggestion generation failed")
		raise GenerationError("Failed to generate AI suggestions") from e
	# Persist only once the whole answer parsed; a bad answer stores nothing
	saved = [storage.create_topic_suggestion(draft.model_dump()) for draft in drafts]
	return SuggestionResponse(suggestions=saved)


@router.post("/content", response_model=ContentDraftResponse)
async def generate_content(req: ContentRequest, generator: SuggestionGenerator = Depends(get_generator)):
	prompt = (req.prompt or "").strip()
	if not prompt:
		raise InvalidRequestError("Prompt is required")
	try:
		content = await generator.generate_content(prompt, req.subject or None, req.grade or None)
	except StudioError:
		raise
	except Exception as e:
		logger.exception("AI content generation failed")
		raise GenerationError("Failed to generate content") from e
	return ContentDraftResponse(content=content)
