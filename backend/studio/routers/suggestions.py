from __future__ import annotations

import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..deps import get_settings, get_storage
from ..errors import InvalidRequestError, NotFoundError
from ..schemas import TopicSuggestion, TopicSuggestionCreate
from ..settings import Settings
from ..storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/suggestions", tags=["suggestions"])


@router.post("", response_model=TopicSuggestion, status_code=201)
async def create_suggestion(payload: TopicSuggestionCreate, storage: Storage = Depends(get_storage)):
    record = storage.create_topic_suggestion(payload.model_dump())
    logger.info("Created topic suggestion id=%s for %s (%s)", record.id, record.subject, record.grade)
    return record


@router.get("", response_model=List[TopicSuggestion])
async def list_suggestions(
    subject: Optional[str] = None,
    grade: Optional[str] = None,
    limit: Optional[int] = Query(default=None, ge=0),
    storage: Storage = Depends(get_storage),
    config: Settings = Depends(get_settings),
):
    missing = [name for name, value in (("subject", subject), ("grade", grade)) if not value]
    if missing:
        raise InvalidRequestError(
            "Subject and grade are required",
            fields=[{"field": name, "message": "Field required"} for name in missing],
        )
    if limit is None:
        limit = config.suggestion_list_limit
    return storage.list_topic_suggestions(subject, grade, limit)


@router.delete("/{suggestion_id}", status_code=204, response_class=Response)
async def delete_suggestion(suggestion_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_topic_suggestion(suggestion_id):
        raise NotFoundError("Topic suggestion", suggestion_id)
    logger.info("Deleted topic suggestion id=%s", suggestion_id)
    return Response(status_code=204)
