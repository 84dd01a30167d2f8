"""Pytest configuration and shared fixtures for Shelf API tests."""

from pathlib import Path
from typing import Callable, Dict, Generator

import pytest
from fastapi.testclient import TestClient

from shelf.config import Settings
from shelf.database import Storage, UploadedFile
from shelf.main import create_app


# =============================================================================
# Test Configuration
# =============================================================================


@pytest.fixture
def test_settings(tmp_path: Path) -> Settings:
    """Settings rooted at a fresh temporary directory."""
    return Settings(
        DATA_DIR=tmp_path / "data",
        UPLOADS_DIR=tmp_path / "uploads",
        LOG_LEVEL="WARNING",
    )


@pytest.fixture
def storage(test_settings: Settings) -> Storage:
    """Initialized storage with empty stores."""
    storage = Storage.from_settings(test_settings)
    storage.initialize()
    return storage


# =============================================================================
# API Fixtures
# =============================================================================


@pytest.fixture
def client(test_settings: Settings) -> Generator[TestClient, None, None]:
    """Test client whose lifespan has run."""
    app = create_app(test_settings)
    with TestClient(app) as client:
        yield client


@pytest.fixture
def register(client: TestClient) -> Callable[..., Dict[str, str]]:
    """Register an account and return its bearer header."""

    def _register(email: str, name: str = "Reader") -> Dict[str, str]:
        response = client.post(
            "/api/auth/register",
            json={"name": name, "email": email, "password": "secret123"},
        )
        assert response.status_code == 201, response.text
        return {"Authorization": f"Bearer {response.json()['token']}"}

    return _register


@pytest.fixture
def auth_headers(register) -> Dict[str, str]:
    """Bearer header for a freshly registered user."""
    return register("reader@example.com")


@pytest.fixture
def other_headers(register) -> Dict[str, str]:
    """Bearer header for a second, unrelated user."""
    return register("other@example.com", name="Other")


# =============================================================================
# Sample Data
# =============================================================================


PDF_BYTES = b"%PDF-1.4\n1 0 obj\n<<>>\nendobj\ntrailer\n<<>>\n%%EOF\n"
PNG_BYTES = b"\x89PNG\r\n\x1a\n\x00\x00\x00\rIHDR" + b"\x00" * 16


@pytest.fixture
def sample_pdf() -> UploadedFile:
    return UploadedFile(filename="novel.pdf", content=PDF_BYTES, content_type="application/pdf")


@pytest.fixture
def sample_image() -> UploadedFile:
    return UploadedFile(filename="beach.png", content=PNG_BYTES, content_type="image/png")
