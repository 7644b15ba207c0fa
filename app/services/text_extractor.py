import asyncio

import docx
import pytesseract
from PIL import Image

from app.config import ALLOWED_MIME_TYPES, DOC_MIME, DOCX_MIME, TESSERACT_LANG
from app.errors import ExtractionError, UnsupportedFileTypeError
from app.services.google_ocr import google_ocr_enabled, google_ocr_image
from app.utils.logger import logger

PDF_UNSUPPORTED_MESSAGE = (
    "PDF processing is temporarily unavailable. Please convert your PDF "
    "to text format or use an image of the PDF."
)


def read_plain_text(path: str) -> str:
    with open(path, "r", encoding="utf-8", errors="replace") as f:
        return f.read()


def read_word_document(path: str) -> str:
    document = docx.Document(path)
    return "\n".join(p.text for p in document.paragraphs)


def tesseract_ocr(path: str) -> str:
    with Image.open(path) as image:
        return pytesseract.image_to_string(image, lang=TESSERACT_LANG)


async def ocr_image(path: str) -> str:
    if google_ocr_enabled():
        logger.info("[EXTRACT] Image → Google Vision OCR")
        return await google_ocr_image(path)

    logger.info("[EXTRACT] Image → Tesseract OCR")
    return await asyncio.to_thread(tesseract_ocr, path)


async def extract_text(path: str, mime_type: str) -> str:
    """
    Extract plain text from an uploaded syllabus by its declared MIME type.

    PDF is accepted but not converted: the placeholder sentence is returned
    instead. Converter failures are wrapped in ExtractionError.
    """
    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileTypeError(mime_type)

    logger.info(f"[EXTRACT] {mime_type}: {path}")

    try:
        if mime_type == "text/plain":
            text = await asyncio.to_thread(read_plain_text, path)

        elif mime_type == "application/pdf":
            logger.warning("[EXTRACT] PDF extraction unavailable, returning placeholder")
            text = PDF_UNSUPPORTED_MESSAGE

        elif mime_type in (DOCX_MIME, DOC_MIME):
            text = await asyncio.to_thread(read_word_document, path)

        else:
            text = await ocr_image(path)

    except Exception as e:
        logger.error(f"[EXTRACT] Failed: {e}")
        raise ExtractionError(str(e)) from e

    logger.info(f"[EXTRACT] OK ({len(text)} chars)")
    return text
