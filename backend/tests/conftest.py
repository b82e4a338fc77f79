import pytest
from fastapi.testclient import TestClient

from studio.generator import SuggestionGenerator
from studio.main import create_app
from studio.settings import Settings

_ENV_VARS = (
    "GEMINI_API_KEY",
    "GEMINI_PROVIDER",
    "GEMINI_MODEL",
    "REQUIRE_GEMINI_API_KEY",
    "STORAGE_BACKEND",
    "DATABASE_URL",
    "SEED_USERNAME",
    "SEED_PASSWORD",
    "SUGGESTION_LIST_LIMIT",
    "AI_SUGGESTION_COUNT",
)


class FakeModelClient:
    """Stands in for GeminiClient; also acts as its own client factory."""

    def __init__(self, reply=""):
        self.reply = reply
        self.prompts = []
        self.close_count = 0

    def __call__(self):
        return self

    async def generate(self, prompt):
        self.prompts.append(prompt)
        if isinstance(self.reply, Exception):
            raise self.reply
        return self.reply

    async def aclose(self):
        self.close_count += 1


@pytest.fixture
def clean_env(monkeypatch):
    for var in _ENV_VARS:
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def make_settings(clean_env):
    def _make(**values):
        values.setdefault("GEMINI_API_KEY", "test-key")
        return Settings(_env_file=None, **values)

    return _make


@pytest.fixture
def settings(make_settings):
    return make_settings()


@pytest.fixture
def fake_model():
    return FakeModelClient()


@pytest.fixture
def app(settings, fake_model):
    return create_app(settings, generator=SuggestionGenerator(fake_model))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def content_payload():
    return {
        "title": "Linear Equations",
        "type": "notes",
        "subject": "Mathematics",
        "grade": "9th Grade",
        "difficulty": "easy",
        "htmlContent": "<h2>Linear Equations</h2><p>Solve for x.</p>",
        "tags": ["algebra", "equations"],
        "isPublic": False,
        "createdById": 1,
    }


@pytest.fixture
def suggestion_payload():
    return {
        "title": "Pythagorean Theorem",
        "description": "Right triangles and the relation between their sides.",
        "subject": "Mathematics",
        "grade": "9th Grade",
        "category": "Geometry",
        "difficultyLevels": ["easy", "medium"],
    }
