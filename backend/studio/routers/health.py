from fastapi import APIRouter, Depends

from ..deps import get_settings
from ..settings import Settings

router = APIRouter(tags=["health"])


@router.get("/health")
def health():
	return {"status": "ok"}


@router.get("/info")
def info(config: Settings = Depends(get_settings)):
	return {
		"status": "ok",
		"gemini_configured": bool(config.gemini_api_key),
		"storage_backend": config.storage_backend,
	}
