from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from juliaydavid.core.config import Settings
from juliaydavid.main import create_app
from juliaydavid.storage.backends import LocalBackend
from juliaydavid.storage.blobs import IMAGES, MEDIA, BlobStore


class UndeletableBackend(LocalBackend):
    """Stores files normally but every delete fails."""

    def delete(self, key):
        return False


PASSWORDS = {
    "Julia": "julia-secreta",
    "David": "david-secreto",
    # Has an account but is not on the allowlist
    "Mallory": "mallory-pass",
}


@pytest.fixture
def settings(tmp_path):
    return Settings(
        DATABASE_URL=f"sqlite+aiosqlite:///{tmp_path / 'test.db'}",
        SECRET_KEY="test-secret-key",
        ENVIRONMENT="test",
        BCRYPT_ROUNDS=4,
        BLOB_BACKEND="local",
        LOCAL_BLOB_DIR=str(tmp_path / "uploads"),
        SEED_USER_PASSWORDS=PASSWORDS,
        CORS_ORIGINS="",
    )


@pytest.fixture
def upload_dir(settings):
    return Path(settings.LOCAL_BLOB_DIR)


@pytest.fixture
def client(settings):
    with TestClient(create_app(settings)) as client:
        yield client


@pytest.fixture
def sticky_client(settings, upload_dir):
    blobs = BlobStore({
        IMAGES: UndeletableBackend(IMAGES, upload_dir, settings.LOCAL_BLOB_URL),
        MEDIA: UndeletableBackend(MEDIA, upload_dir, settings.LOCAL_BLOB_URL),
    })
    with TestClient(create_app(settings, blobs=blobs)) as client:
        yield client


def login(client, username, password=None):
    response = client.post(
        "/api/login",
        json={"username": username, "password": password or PASSWORDS[username]},
    )
    assert response.status_code == 200, response.text
    return {"Authorization": f"Bearer {response.json()['token']}"}


@pytest.fixture
def julia(client):
    return login(client, "Julia")


@pytest.fixture
def david(client):
    return login(client, "David")


@pytest.fixture
def mallory(client):
    return login(client, "Mallory")


def stored_files(root):
    return sorted(p for p in root.rglob("*") if p.is_file())
