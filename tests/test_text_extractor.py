"""Tests for app.services.text_extractor and app.services.text_cleaner."""
import asyncio
from pathlib import Path

import docx
import pytest

from app.config import DOCX_MIME
from app.errors import ExtractionError, UnsupportedFileTypeError
from app.services import text_extractor
from app.services.text_cleaner import clean_text
from app.services.text_extractor import PDF_UNSUPPORTED_MESSAGE, extract_text


def test_plain_text(tmp_path: Path) -> None:
    path = tmp_path / "syllabus.txt"
    path.write_text("Unit 1: Algebra\nUnit 2: Geometry", encoding="utf-8")
    assert asyncio.run(extract_text(str(path), "text/plain")) == "Unit 1: Algebra\nUnit 2: Geometry"


def test_pdf_returns_placeholder(tmp_path: Path) -> None:
    path = tmp_path / "syllabus.pdf"
    path.write_bytes(b"%PDF-1.4 whatever")
    assert asyncio.run(extract_text(str(path), "application/pdf")) == PDF_UNSUPPORTED_MESSAGE


def test_word_document(tmp_path: Path) -> None:
    path = tmp_path / "syllabus.docx"
    document = docx.Document()
    document.add_paragraph("Chapter 1: Cells")
    document.add_paragraph("Chapter 2: Genetics")
    document.save(str(path))

    text = asyncio.run(extract_text(str(path), DOCX_MIME))
    assert text == "Chapter 1: Cells\nChapter 2: Genetics"


def test_image_uses_tesseract_without_google_key(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "scan.png"
    path.write_bytes(b"not really a png")
    monkeypatch.setattr(text_extractor, "google_ocr_enabled", lambda: False)
    monkeypatch.setattr(text_extractor, "tesseract_ocr", lambda p: f"OCR of {Path(p).name}")

    assert asyncio.run(extract_text(str(path), "image/png")) == "OCR of scan.png"


def test_image_uses_google_vision_when_configured(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    path = tmp_path / "scan.jpg"
    path.write_bytes(b"jpeg bytes")

    async def fake_google(p: str) -> str:
        return "vision text"

    monkeypatch.setattr(text_extractor, "google_ocr_enabled", lambda: True)
    monkeypatch.setattr(text_extractor, "google_ocr_image", fake_google)

    assert asyncio.run(extract_text(str(path), "image/jpeg")) == "vision text"


def test_unsupported_type() -> None:
    with pytest.raises(UnsupportedFileTypeError):
        asyncio.run(extract_text("/does/not/matter.zip", "application/zip"))


def test_converter_failure_is_wrapped(tmp_path: Path) -> None:
    path = tmp_path / "broken.docx"
    path.write_bytes(b"this is not a zip archive")

    with pytest.raises(ExtractionError) as excinfo:
        asyncio.run(extract_text(str(path), DOCX_MIME))
    assert excinfo.value.message.startswith("Failed to extract text from file: ")


def test_missing_file_is_wrapped(tmp_path: Path) -> None:
    with pytest.raises(ExtractionError):
        asyncio.run(extract_text(str(tmp_path / "gone.txt"), "text/plain"))


def test_clean_text() -> None:
    raw = "Unit 1\r\n\r\n\r\n\r\n•  Algebra   basics\n12\n\fUnit 2\t\tGeometry\n"
    assert clean_text(raw) == "Unit 1\n\nAlgebra basics\n\nUnit 2 Geometry"


def test_clean_text_empty() -> None:
    assert clean_text("") == ""
