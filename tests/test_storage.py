import pytest

from app.core.config import settings
from app.core.errors import NotFoundError, ValidationFailedError
from app.services.common import storage


def test_save_and_resolve(employer):
    object_path, url = storage.save_upload(storage.JOB_DOCUMENTS_BUCKET, employer.id, "Brief.DOCX", b"content")
    assert object_path.startswith(f"{employer.id}/")
    assert object_path.endswith(".docx")
    assert url == f"{settings.PUBLIC_BASE_URL.rstrip('/')}/storage/job-documents/{object_path}"
    assert storage.resolve(storage.JOB_DOCUMENTS_BUCKET, object_path).read_bytes() == b"content"


def test_files_without_extension_are_binary():
    assert storage.build_object_path("owner", "README").endswith(".bin")


def test_size_limit(monkeypatch):
    monkeypatch.setattr(settings, "MAX_UPLOAD_BYTES", 4)
    with pytest.raises(ValidationFailedError):
        storage.save_upload(storage.AVATARS_BUCKET, "owner", "face.png", b"12345")


def test_resolve_rejects_traversal_and_unknown_buckets():
    with pytest.raises(NotFoundError):
        storage.resolve(storage.AVATARS_BUCKET, "../../etc/passwd")
    with pytest.raises(NotFoundError):
        storage.resolve("secrets", "a.txt")
    with pytest.raises(NotFoundError):
        storage.resolve(storage.AVATARS_BUCKET, "nobody/missing.png")


def test_storage_route_serves_files(client, employer):
    object_path, _ = storage.save_upload(storage.AVATARS_BUCKET, employer.id, "me.txt", b"hello avatar")
    r = client.get(f"/storage/avatars/{object_path}")
    assert r.status_code == 200
    assert r.content == b"hello avatar"

    assert client.get("/storage/avatars/nobody/missing.png").status_code == 404
    assert client.get("/storage/private/x.txt").status_code == 404
