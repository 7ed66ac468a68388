"""Tests for ground layout uploads."""

import re

import pytest

from expohub.core.constants import MAX_UPLOAD_BYTES
from expohub.core.errors import BadRequestError
from expohub.core.storage import QrStorage
from expohub.modules.uploads.services import UploadService, ground_layout_filename


class FakeS3:
    def __init__(self) -> None:
        self.calls: list[dict] = []

    def put_object(self, **kwargs):
        self.calls.append(kwargs)
        return {}


def test_filename_keeps_extension():
    assert re.fullmatch(r"ground-layout-\d{13}-\d{1,9}\.png", ground_layout_filename(".png"))


class TestUploadGroundLayout:
    """Tests for UploadService.upload_ground_layout."""

    async def test_local_upload(self, qr_storage):
        response = await UploadService(qr_storage).upload_ground_layout("Hall A.PNG", b"png-bytes")

        assert re.fullmatch(r"ground-layout-\d+-\d+\.png", response.filename)
        assert response.original_name == "Hall A.PNG"
        assert response.url == f"/uploads/{response.filename}"
        assert response.size == 9
        assert (qr_storage.upload_dir / response.filename).read_bytes() == b"png-bytes"

    async def test_pdf_to_s3(self, tmp_path):
        s3 = FakeS3()
        storage = QrStorage(backend="s3", upload_dir=tmp_path, s3_client=s3, bucket="expo-assets")

        response = await UploadService(storage).upload_ground_layout("layout.pdf", b"%PDF-1.7")

        assert response.url == f"https://expo-assets.s3.amazonaws.com/{response.filename}"
        assert s3.calls[0]["ContentType"] == "application/pdf"
        assert s3.calls[0]["Key"] == response.filename

    @pytest.mark.parametrize("name", ["layout.gif", "layout", None, "layout.png.exe"])
    async def test_rejects_other_types(self, qr_storage, name):
        with pytest.raises(BadRequestError) as exc_info:
            await UploadService(qr_storage).upload_ground_layout(name, b"data")

        assert exc_info.value.error_code == "invalid_file_type"

    async def test_rejects_empty_file(self, qr_storage):
        with pytest.raises(BadRequestError) as exc_info:
            await UploadService(qr_storage).upload_ground_layout("layout.png", b"")

        assert exc_info.value.error_code == "file_required"

    async def test_rejects_oversized_file(self, qr_storage):
        with pytest.raises(BadRequestError) as exc_info:
            await UploadService(qr_storage).upload_ground_layout(
                "layout.jpg", b"x" * (MAX_UPLOAD_BYTES + 1)
            )

        assert exc_info.value.error_code == "file_too_large"
        assert not qr_storage.upload_dir.exists()
