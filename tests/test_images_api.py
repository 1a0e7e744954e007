from contextlib import asynccontextmanager

from fastapi.testclient import TestClient

from juliaydavid.core.errors import BlobError, StoreError
from juliaydavid.main import create_app
from juliaydavid.storage.backends import LocalBackend
from juliaydavid.storage.blobs import IMAGES, BlobStore
from tests.conftest import login, stored_files

PNG = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


class BrokenBackend(LocalBackend):
    def upload(self, data, key, mime):
        raise BlobError(detail="bucket unreachable")


def upload(client, headers, name="foto.png", data=PNG, mime="image/png", description="En la playa"):
    return client.post(
        "/api/images",
        files={"image": (name, data, mime)},
        data={"description": description} if description is not None else {},
        headers=headers,
    )


def test_upload_list_and_serve(client, julia, upload_dir):
    response = upload(client, julia)
    assert response.status_code == 201
    image = response.json()
    assert image["description"] == "En la playa"
    assert image["uploaded_by"] == "Julia"
    assert image["url"].startswith("/uploads/galeria/")

    assert [row["id"] for row in client.get("/api/images").json()] == [image["id"]]
    assert len(stored_files(upload_dir)) == 1
    assert client.get(image["url"]).content == PNG


def test_default_description(client, julia):
    assert upload(client, julia, description=None).json()["description"] == "Sin descripción"


def test_newest_first(client, julia):
    first = upload(client, julia).json()
    second = upload(client, julia).json()
    assert [row["id"] for row in client.get("/api/images").json()] == [second["id"], first["id"]]


def test_rejects_non_images(client, julia, upload_dir):
    response = upload(client, julia, name="notas.txt", data=b"hola", mime="text/plain")
    assert response.status_code == 400
    assert client.get("/api/images").json() == []
    assert stored_files(upload_dir) == []


def test_missing_file(client, julia):
    response = client.post("/api/images", data={"description": "x"}, headers=julia)
    assert response.status_code == 400


def test_too_large(settings):
    settings.MAX_IMAGE_BYTES = 10
    with TestClient(create_app(settings)) as client:
        response = upload(client, login(client, "Julia"))
    assert response.status_code == 400


def test_upload_requires_allowlisted_user(client, mallory, upload_dir):
    assert upload(client, {}).status_code == 401
    assert upload(client, mallory).status_code == 403
    assert stored_files(upload_dir) == []


def test_blob_failure_leaves_gallery_unchanged(settings, tmp_path):
    blobs = BlobStore({IMAGES: BrokenBackend(IMAGES, tmp_path / "broken", "/broken")})
    with TestClient(create_app(settings, blobs=blobs)) as client:
        response = upload(client, login(client, "Julia"))
        assert response.status_code == 500
        assert response.json() == {"error": "Error al guardar el archivo"}
        assert client.get("/api/images").json() == []


def test_failed_insert_removes_uploaded_blob(client, julia, upload_dir, monkeypatch):
    @asynccontextmanager
    async def failing_transaction(db):
        raise StoreError(detail="disk I/O error")
        yield db

    monkeypatch.setattr(client.app.state.ctx.store, "transaction", failing_transaction)

    response = upload(client, julia)
    assert response.status_code == 500
    assert response.json() == {"error": "Error del servidor"}
    assert stored_files(upload_dir) == []
    assert client.get("/api/images").json() == []


def test_update_description(client, julia, mallory):
    image = upload(client, julia).json()
    response = client.put(f"/api/images/{image['id']}", json={"description": "Atardecer"}, headers=julia)
    assert response.status_code == 200
    assert response.json()["description"] == "Atardecer"

    assert client.put(f"/api/images/{image['id']}", json={"description": "x"}, headers=mallory).status_code == 403
    assert client.put("/api/images/999", json={"description": "x"}, headers=julia).status_code == 404


def test_delete_by_path_and_query(client, julia, upload_dir):
    first = upload(client, julia).json()
    second = upload(client, julia).json()

    assert client.delete(f"/api/images/{first['id']}", headers=julia).status_code == 200
    response = client.delete(f"/api/images?id={second['id']}", headers=julia)
    assert response.status_code == 200
    assert response.json() == {"message": "Imagen eliminada correctamente"}

    assert client.get("/api/images").json() == []
    assert stored_files(upload_dir) == []


def test_delete_errors(client, julia, mallory):
    image = upload(client, julia).json()
    assert client.delete("/api/images", headers=julia).status_code == 400
    assert client.delete("/api/images/999", headers=julia).status_code == 404
    assert client.delete(f"/api/images/{image['id']}", headers=mallory).status_code == 403
    assert client.delete(f"/api/images/{image['id']}").status_code == 401
    assert len(client.get("/api/images").json()) == 1


def test_blob_failure_detail_shown_when_enabled(settings, tmp_path):
    settings.EXPOSE_ERROR_DETAILS = True
    blobs = BlobStore({IMAGES: BrokenBackend(IMAGES, tmp_path / "broken", "/broken")})
    with TestClient(create_app(settings, blobs=blobs)) as client:
        response = upload(client, login(client, "Julia"))
    assert response.json() == {"error": "Error al guardar el archivo: bucket unreachable"}


def test_delete_succeeds_when_blob_cleanup_fails(sticky_client, upload_dir):
    julia = login(sticky_client, "Julia")
    image = upload(sticky_client, julia).json()

    response = sticky_client.delete(f"/api/images/{image['id']}", headers=julia)

    assert response.status_code == 200
    assert sticky_client.get("/api/images").json() == []
    # The leftover blob stays for manual reconciliation
    assert len(stored_files(upload_dir)) == 1
