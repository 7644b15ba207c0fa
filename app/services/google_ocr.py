import base64

import httpx

from app.config import GOOGLE_OCR_API_KEY
from app.utils.logger import logger

VISION_ENDPOINT = "https://vision.googleapis.com/v1/images:annotate"


def google_ocr_enabled() -> bool:
    return bool(GOOGLE_OCR_API_KEY)


async def google_ocr_image(path: str) -> str:
    """
    OCR a single image file with Google Vision DOCUMENT_TEXT_DETECTION.
    Raises RuntimeError on HTTP or API errors.
    """
    if not GOOGLE_OCR_API_KEY:
        raise RuntimeError("GOOGLE_OCR_API_KEY is not configured")

    with open(path, "rb") as f:
        img_b64 = base64.b64encode(f.read()).decode("utf-8")

    request_body = {
        "requests": [
            {
                "image": {"content": img_b64},
                "features": [{"type": "DOCUMENT_TEXT_DETECTION"}],
            }
        ]
    }

    async with httpx.AsyncClient(timeout=90) as client:
        resp = await client.post(
            VISION_ENDPOINT,
            params={"key": GOOGLE_OCR_API_KEY},
            json=request_body,
        )

    if resp.status_code != 200:
        logger.error(f"[GOOGLE OCR] HTTP {resp.status_code}")
        raise RuntimeError(f"Google Vision returned HTTP {resp.status_code}")

    response_block = (resp.json().get("responses") or [{}])[0]
    if "error" in response_block:
        message = response_block["error"].get("message", "unknown error")
        raise RuntimeError(f"Google Vision error: {message}")

    annotation = response_block.get("fullTextAnnotation") or {}
    text = annotation.get("text", "")

    logger.info(f"[GOOGLE OCR] {path} OK, {len(text)} chars")
    return text
