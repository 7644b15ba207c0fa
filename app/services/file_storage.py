import os
import uuid
from typing import Tuple

from fastapi import UploadFile

from app.config import UPLOAD_DIR, ALLOWED_MIME_TYPES, MAX_UPLOAD_BYTES
from app.errors import UnsupportedFileTypeError, FileTooLargeError
from app.utils.logger import logger


def media_type(content_type: str) -> str:
    """
    Bare media type of a part header, e.g. "text/plain; charset=utf-8"
    gives "text/plain".
    """
    return (content_type or "").split(";")[0].strip().lower()


def validate_upload(mime_type: str, size: int):
    """
    Reject uploads before anything is written or extracted.
    """
    if mime_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedFileTypeError(mime_type)

    if size > MAX_UPLOAD_BYTES:
        raise FileTooLargeError(size, MAX_UPLOAD_BYTES)


async def save_upload_file(file: UploadFile) -> Tuple[str, str]:
    """
    Validate and persist an uploaded syllabus to a temporary file.
    Returns (mime_type, saved_path).
    """
    mime_type = media_type(file.content_type)

    # Read one byte past the cap so oversize files are detected without
    # buffering the whole body
    content = await file.read(MAX_UPLOAD_BYTES + 1)
    validate_upload(mime_type, len(content))

    ext = os.path.splitext(file.filename or "")[1].lower()
    saved_path = os.path.join(UPLOAD_DIR, f"{uuid.uuid4().hex}{ext}")

    os.makedirs(UPLOAD_DIR, exist_ok=True)
    with open(saved_path, "wb") as buffer:
        buffer.write(content)

    logger.info(f"[FILE] Saved OK → {saved_path} ({len(content)} bytes)")
    return mime_type, saved_path


def remove_upload_file(path: str):
    """
    Remove a temporary upload. Failures are logged, never raised.
    """
    try:
        if os.path.exists(path):
            os.remove(path)
            logger.info(f"[FILE] Removed {path}")
    except OSError as e:
        logger.warning(f"[FILE] Cleanup failed (non-critical): {e}")
