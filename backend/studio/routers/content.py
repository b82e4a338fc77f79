from __future__ import annotations

import logging
from collections import Counter
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response

from ..deps import get_storage
from ..errors import NotFoundError
from ..schemas import Content, ContentCreate, ContentStats, ContentUpdate
from ..storage import Storage

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/content", tags=["content"])


@router.post("", response_model=Content, status_code=201)
async def create_content(payload: ContentCreate, storage: Storage = Depends(get_storage)):
    record = storage.create_content(payload.model_dump())
    logger.info("Created content id=%s type=%s owner=%s", record.id, record.type, record.created_by_id)
    return record


@router.get("", response_model=List[Content])
async def list_content(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    storage: Storage = Depends(get_storage),
):
    if user_id is not None:
        return storage.list_content_by_owner(user_id)
    return storage.list_content()


# Registered before /{content_id} so "stats" is never read as an id
@router.get("/stats", response_model=ContentStats)
async def content_stats(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    storage: Storage = Depends(get_storage),
):
    records = storage.list_content_by_owner(user_id) if user_id is not None else storage.list_content()
    counts = Counter(record.type for record in records)
    return ContentStats(
        notes=counts["notes"],
        quiz=counts["quiz"],
        assignment=counts["assignment"],
        paper=counts["paper"],
        total=len(records),
    )


@router.get("/{content_id}", response_model=Content)
async def get_content(content_id: int, storage: Storage = Depends(get_storage)):
    record = storage.get_content(content_id)
    if record is None:
        raise NotFoundError("Content", content_id)
    return record


@router.patch("/{content_id}", response_model=Content)
async def update_content(content_id: int, payload: ContentUpdate, storage: Storage = Depends(get_storage)):
    record = storage.update_content(content_id, payload.model_dump(exclude_unset=True))
    if record is None:
        raise NotFoundError("Content", content_id)
    logger.info("Updated content id=%s", content_id)
    return record


@router.delete("/{content_id}", status_code=204, response_class=Response)
async def delete_content(content_id: int, storage: Storage = Depends(get_storage)):
    if not storage.delete_content(content_id):
        raise NotFoundError("Content", content_id)
    logger.info("Deleted content id=%s", content_id)
    return Response(status_code=204)
