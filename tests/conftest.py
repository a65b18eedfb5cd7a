import json
from pathlib import Path
from typing import Callable, Dict

import pytest
from fastapi.testclient import TestClient

from travel_blog.auth import IdentityVerifier
from travel_blog.config import Settings
from travel_blog.database import Database
from travel_blog.main import create_app
from travel_blog.services import ArticleCatalog

SEED_ARTICLES = [
    {
        "id": "art1",
        "title": "Lviv in the rain",
        "date": "2024-03-02",
        "image": "/images/lviv.jpg",
        "paragraphs": ["Cobblestones and coffee.", "More coffee."],
        "likesCount": 5,
    },
    {
        "id": "art2",
        "title": "Hiking the Carpathians",
        "date": "2024-06-15",
        "paragraphs": ["Hoverla at sunrise."],
        "likesCount": 0,
    },
]


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def seed_file(tmp_path: Path) -> Path:
    path = tmp_path / "articles.json"
    path.write_text(json.dumps(SEED_ARTICLES), encoding="utf-8")
    return path


@pytest.fixture
def settings(tmp_path: Path, seed_file: Path) -> Settings:
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'blog.sqlite3'}",
        create_tables=True,
        articles_seed_path=str(seed_file),
        identity_secret_key="test-secret",
        identity_project_id="travel-blog-test",
        transaction_max_attempts=5,
    )


@pytest.fixture
def identity(settings: Settings) -> IdentityVerifier:
    return IdentityVerifier(settings)


@pytest.fixture
def auth_headers(identity: IdentityVerifier) -> Callable[..., Dict[str, str]]:
    """Build an Authorization header for a user id"""
    def _headers(uid: str = "user-1", email: str = "traveller@example.com") -> Dict[str, str]:
        return {"Authorization": f"Bearer {identity.issue_token(uid, email=email)}"}
    return _headers


@pytest.fixture
async def db(settings: Settings):
    """Seeded store for service-level tests (anyio tests only)"""
    database = Database(settings)
    await database.create_all()
    await ArticleCatalog(database).seed_from_file(settings.articles_seed_path)
    yield database
    await database.dispose()


@pytest.fixture
def app(settings: Settings, identity: IdentityVerifier):
    return create_app(settings, identity=identity)


@pytest.fixture
def client(app):
    # Entering the context runs the lifespan: tables and seed articles
    with TestClient(app) as test_client:
        yield test_client
