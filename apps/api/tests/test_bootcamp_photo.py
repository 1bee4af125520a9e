"""Bootcamp photo upload validation and storage."""

from __future__ import annotations

import os
from pathlib import Path
import tempfile
import unittest

from fastapi.testclient import TestClient

from devcamper.adapters.storage import FileStore, FileStoreError, LocalFileStore
from devcamper.core.config import get_settings
from devcamper.main import create_app
from devcamper.routes.dependencies import get_file_store
from devcamper.services.bootcamps import photo_filename

_ONE_MB = 1_000_000


class _RecordingFileStore(FileStore):
    def __init__(self, *, fail: bool = False) -> None:
        self.saved: dict[str, bytes] = {}
        self._fail = fail

    def save(self, filename: str, content: bytes) -> None:
        if self._fail:
            raise FileStoreError("disk full")
        self.saved[filename] = content


class PhotoFilenameTests(unittest.TestCase):
    def test_name_is_derived_from_bootcamp_id_and_extension(self) -> None:
        self.assertEqual(photo_filename("5d725a1b", "campus.JPG"), "photo_5d725a1b.JPG")
        self.assertEqual(photo_filename("5d725a1b", "archive.tar.png"), "photo_5d725a1b.png")
        self.assertEqual(photo_filename("5d725a1b", "noextension"), "photo_5d725a1b")


class LocalFileStoreTests(unittest.TestCase):
    def test_writes_into_root_and_creates_directory(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = LocalFileStore(Path(tmp) / "uploads")

            store.save("photo_1.jpg", b"jpeg-bytes")

            self.assertEqual((Path(tmp) / "uploads" / "photo_1.jpg").read_bytes(), b"jpeg-bytes")

    def test_refuses_paths_outside_root(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            store = LocalFileStore(tmp)

            with self.assertRaises(FileStoreError):
                store.save("../escape.jpg", b"x")
            self.assertFalse((Path(tmp).parent / "escape.jpg").exists())


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = (
        "DEVCAMPER_AUTH_PROVIDER",
        "DEVCAMPER_STORE_BACKEND",
        "DEVCAMPER_MAX_FILE_UPLOAD",
    )

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["DEVCAMPER_AUTH_PROVIDER"] = "mock"
        os.environ["DEVCAMPER_STORE_BACKEND"] = "memory"
        os.environ["DEVCAMPER_MAX_FILE_UPLOAD"] = str(_ONE_MB)
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class PhotoUploadApiTests(_SettingsEnvCase):
    def setUp(self) -> None:
        super().setUp()
        self.app = create_app()
        self.file_store = _RecordingFileStore()
        self.app.dependency_overrides[get_file_store] = lambda: self.file_store
        self.client = TestClient(self.app, raise_server_exceptions=False)
        self.store = self.app.state.store
        self.bootcamp = self.store.bootcamps.create(
            {"name": "Devworks", "user": "owner", "photo": "no-photo.jpg"}
        )
        self.owner = {"Authorization": "Bearer test:owner:publisher"}

    def _upload(self, headers: dict, content: bytes, *, filename: str = "campus.jpg", content_type: str = "image/jpeg"):
        return self.client.put(
            f"/api/v1/bootcamps/{self.bootcamp['id']}/photo",
            headers=headers,
            files={"file": (filename, content, content_type)},
        )

    def _photo(self) -> str:
        return self.store.bootcamps.find_by_id(self.bootcamp["id"])["photo"]

    def test_owner_upload_is_stored_under_deterministic_name(self) -> None:
        response = self._upload(self.owner, b"\xff\xd8\xff" + b"0" * 1024)

        expected = f"photo_{self.bootcamp['id']}.jpg"
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.json(), {"success": True, "data": expected})
        self.assertIn(expected, self.file_store.saved)
        self.assertEqual(self._photo(), expected)

    def test_admin_may_upload_for_any_bootcamp(self) -> None:
        response = self._upload({"Authorization": "Bearer test:admin-1:admin"}, b"png", filename="x.png", content_type="image/png")

        self.assertEqual(response.status_code, 200)
        self.assertEqual(self._photo(), f"photo_{self.bootcamp['id']}.png")

    def test_five_megabyte_upload_is_rejected_before_anything_is_stored(self) -> None:
        response = self._upload(self.owner, b"0" * (5 * _ONE_MB))

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "FILE_TOO_LARGE")
        self.assertEqual(self.file_store.saved, {})
        self.assertEqual(self._photo(), "no-photo.jpg")

    def test_non_image_is_rejected(self) -> None:
        response = self._upload(self.owner, b"%PDF-1.4", filename="brochure.pdf", content_type="application/pdf")

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "FILE_NOT_IMAGE")
        self.assertEqual(self.file_store.saved, {})
        self.assertEqual(self._photo(), "no-photo.jpg")

    def test_missing_file_is_rejected(self) -> None:
        response = self.client.put(f"/api/v1/bootcamps/{self.bootcamp['id']}/photo", headers=self.owner)

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json()["code"], "FILE_MISSING")
        self.assertEqual(response.json()["error"], "Please upload a file")

    def test_non_owner_is_forbidden(self) -> None:
        response = self._upload({"Authorization": "Bearer test:other:publisher"}, b"jpeg")

        self.assertEqual(response.status_code, 403)
        self.assertEqual(self.file_store.saved, {})

    def test_missing_bootcamp_returns_404(self) -> None:
        response = self.client.put(
            "/api/v1/bootcamps/missing/photo",
            headers=self.owner,
            files={"file": ("campus.jpg", b"jpeg", "image/jpeg")},
        )

        self.assertEqual(response.status_code, 404)

    def test_storage_failure_returns_500_and_keeps_old_photo(self) -> None:
        self.app.dependency_overrides[get_file_store] = lambda: _RecordingFileStore(fail=True)

        response = self._upload(self.owner, b"jpeg")

        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.json()["code"], "INTERNAL_ERROR")
        self.assertEqual(response.json()["error"], "Problem with file upload")
        self.assertEqual(self._photo(), "no-photo.jpg")


if __name__ == "__main__":
    unittest.main()
