from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field

class Settings(BaseSettings):
	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	# Provider can be "vertex" (Vertex AI Express) or "ai_studio" (Generative Language API)
	gemini_provider: str = Field(default="ai_studio", validation_alias="GEMINI_PROVIDER")
	gemini_model: str = Field(default="gemini-1.5-flash", validation_alias="GEMINI_MODEL")
	gemini_timeout_seconds: float = Field(default=30.0, validation_alias="GEMINI_TIMEOUT_SECONDS")
	# Vertex configuration
	vertex_region: str = Field(default="us-central1", validation_alias="GEMINI_VERTEX_REGION")
	vertex_project: str | None = Field(default=None, validation_alias="GEMINI_VERTEX_PROJECT")
	# Refuse to start without a key instead of failing on the first AI request
	require_gemini_api_key: bool = Field(default=False, validation_alias="REQUIRE_GEMINI_API_KEY")

	# Storage: "memory" (process lifetime only) or "sql" (SQLAlchemy, see DATABASE_URL)
	storage_backend: str = Field(default="memory", validation_alias="STORAGE_BACKEND")
	database_url: str = Field(default="sqlite://", validation_alias="DATABASE_URL")

	# Seed user
	seed_username: str = Field(default="teacher", validation_alias="SEED_USERNAME")
	seed_password_plain: str = Field(default="password", validation_alias="SEED_PASSWORD")

	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	suggestion_list_limit: int = Field(default=10, validation_alias="SUGGESTION_LIST_LIMIT")
	ai_suggestion_count: int = Field(default=3, validation_alias="AI_SUGGESTION_COUNT")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
