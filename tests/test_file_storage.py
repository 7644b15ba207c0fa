"""Tests for app.services.file_storage."""
import asyncio
import io
from pathlib import Path

import pytest
from fastapi import UploadFile
from starlette.datastructures import Headers

from app.errors import FileTooLargeError, UnsupportedFileTypeError
from app.services.file_storage import media_type, save_upload_file, validate_upload


def make_upload(content: bytes, content_type: str, filename: str = "syllabus.txt") -> UploadFile:
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


@pytest.mark.parametrize(
    "header, expected",
    [
        ("text/plain", "text/plain"),
        ("text/plain; charset=utf-8", "text/plain"),
        ("IMAGE/PNG ; name=scan", "image/png"),
        ("", ""),
        (None, ""),
    ],
)
def test_media_type(header, expected: str) -> None:
    assert media_type(header) == expected


def test_validate_upload(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setattr("app.services.file_storage.MAX_UPLOAD_BYTES", 10)

    validate_upload("text/plain", 10)
    with pytest.raises(FileTooLargeError):
        validate_upload("text/plain", 11)
    with pytest.raises(UnsupportedFileTypeError):
        validate_upload("application/zip", 1)


def test_save_strips_content_type_parameters(upload_dir: Path) -> None:
    mime_type, saved_path = asyncio.run(
        save_upload_file(make_upload(b"Unit 1", "text/plain; charset=utf-8"))
    )

    assert mime_type == "text/plain"
    assert Path(saved_path).parent == upload_dir
    assert Path(saved_path).suffix == ".txt"
    assert Path(saved_path).read_bytes() == b"Unit 1"


def test_save_rejects_unsupported_type_without_writing(upload_dir: Path) -> None:
    with pytest.raises(UnsupportedFileTypeError):
        asyncio.run(save_upload_file(make_upload(b"PK\x03\x04", "application/zip", "a.zip")))
    assert list(upload_dir.iterdir()) == []
