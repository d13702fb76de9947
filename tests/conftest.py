"""
Shared pytest fixtures for site-control tests.

Every test gets a fresh site root under tmp_path, an in-memory backend
and a dispatcher wired to both, so no test touches Contentful, GitHub
or the real working directory.
"""

from pathlib import Path

import pytest

from dispatcher import Dispatcher
from models import SiteContext
from settings import Settings
from tests.helpers import FakeBackend, FakeProjects


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    return tmp_path


@pytest.fixture
def settings(site_root: Path) -> Settings:
    return Settings(
        space_id="space123",
        delivery_token="delivery-token",
        management_token="management-token",
        site_root=site_root,
        github_username="octocat",
    )


@pytest.fixture
def backend() -> FakeBackend:
    return FakeBackend()


@pytest.fixture
def projects() -> FakeProjects:
    return FakeProjects()


@pytest.fixture
def context(settings: Settings, backend: FakeBackend, projects: FakeProjects) -> SiteContext:
    return SiteContext(settings=settings, backend=backend, projects=projects)


@pytest.fixture
def dispatcher(context: SiteContext) -> Dispatcher:
    return Dispatcher(context)


@pytest.fixture
def valid_tool_params() -> dict:
    return {
        "name": "Whisper",
        "description": "Speech recognition model",
        "category": "audio",
        "website": "https://openai.com/research/whisper",
        "pricing": "free",
        "tags": ["speech", "transcription"],
        "features": ["multilingual"],
    }
