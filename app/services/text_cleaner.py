import re
from app.utils.logger import logger

# OCR output often carries stray form feeds and bullet glyphs
BULLET_CHARS = "•◦▪●■□➢►"


def normalize_whitespace(text: str) -> str:
    text = text.replace("\r\n", "\n").replace("\r", "\n").replace("\f", "\n")
    # at most one blank line in a row
    text = re.sub(r"\n{3,}", "\n\n", text)
    text = re.sub(r"[ \t]+", " ", text)
    return text


def strip_line_noise(text: str) -> str:
    cleaned_lines = []
    for line in text.split("\n"):
        stripped = line.strip().lstrip(BULLET_CHARS).strip()

        # bare page numbers
        if re.fullmatch(r"\d{1,3}", stripped):
            continue

        cleaned_lines.append(stripped)
    return "\n".join(cleaned_lines)


def clean_text(raw_text: str) -> str:
    """
    Normalise syllabus text after extraction, before it goes into a prompt.
    """
    if not raw_text:
        return ""

    text = normalize_whitespace(raw_text)
    text = strip_line_noise(text)
    text = text.strip()

    logger.info(f"[CLEAN] Text cleaned, length={len(text)}")
    return text
