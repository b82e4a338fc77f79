import logging
from functools import partial
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from . import __version__
from .errors import ConfigurationError, ErrorKind, StudioError, from_validation_errors
from .gemini_client import GeminiClient
from .generator import SuggestionGenerator
from .logging_config import setup_logging
from .settings import Settings, settings
from .storage import Storage, create_storage
from .routers import ai, content, health, meta, suggestions, users

logger = logging.getLogger(__name__)


def create_app(
	config: Optional[Settings] = None,
	*,
	storage: Optional[Storage] = None,
	generator: Optional[SuggestionGenerator] = None,
) -> FastAPI:
	config = config or settings
	setup_logging(config)
	if config.require_gemini_api_key and not config.gemini_api_key:
		raise ConfigurationError("GEMINI_API_KEY is not configured")

	app = FastAPI(title="Content Studio API", version=__version__)
	# One store and one generator per app; handlers reach them through app.state
	app.state.settings = config
	app.state.storage = storage if storage is not None else create_storage(config)
	app.state.generator = generator or SuggestionGenerator(partial(GeminiClient, config=config))

	_register_error_handlers(app)
	app.include_router(health.router)
	app.include_router(meta.router)
	app.include_router(users.router)
	app.include_router(content.router)
	app.include_router(suggestions.router)
	app.include_router(ai.router)
	return app


def _register_error_handlers(app: FastAPI) -> None:
	@app.exception_handler(StudioError)
	async def studio_error_handler(request: Request, exc: StudioError):
		if exc.status_code >= 500:
			logger.error("%s %s failed: %s (%s)", request.method, request.url.path, exc.message, exc.kind.value)
		return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

	@app.exception_handler(StarletteHTTPException)
	async def http_error_handler(request: Request, exc: StarletteHTTPException):
		# Unmatched routes and wrong methods are raised by the router itself
		if exc.status_code == 404:
			kind = ErrorKind.NOT_FOUND
		elif 400 <= exc.status_code < 500:
			kind = ErrorKind.VALIDATION
		else:
			kind = ErrorKind.UNKNOWN
		return JSONResponse(
			status_code=exc.status_code,
			content={"error": str(exc.detail), "kind": kind.value},
			headers=getattr(exc, "headers", None),
		)

	@app.exception_handler(RequestValidationError)
	async def validation_error_handler(request: Request, exc: RequestValidationError):
		err = from_validation_errors(exc.errors())
		return JSONResponse(status_code=err.status_code, content=err.to_payload())

	@app.exception_handler(Exception)
	async def unhandled_exception_handler(request: Request, exc: Exception):
		logger.exception("Unhandled error on %s %s", request.method, request.url.path)
		return JSONResponse(status_code=500, content={"error": "Internal server error", "kind": ErrorKind.UNKNOWN.value})


app = create_app()
