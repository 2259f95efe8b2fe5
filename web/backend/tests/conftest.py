"""Pytest configuration for backend tests.

Each test gets its own SQLite file and a default Config, so nothing touches
the user's real config or data directories.
"""

import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

# Add project root to path so `web.backend` imports resolve
project_root = Path(__file__).parent.parent.parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from tunevote.core.config import Config  # noqa: E402
from web.backend.deps import get_config  # noqa: E402
from web.backend.main import app  # noqa: E402


@pytest.fixture
def db_path(tmp_path: Path, monkeypatch) -> Path:
    path = tmp_path / "api.db"
    monkeypatch.setenv("DATABASE_PATH", str(path))
    return path


@pytest.fixture
def client(db_path: Path):
    """TestClient with lifespan (schema init) and default config."""
    app.dependency_overrides[get_config] = lambda: Config()
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
