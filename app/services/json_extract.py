"""
Best-effort JSON extraction from free-text model replies.

Models wrap JSON in markdown fences, prepend prose, or add // and /* */
comments despite being told not to. extract_json_object() undoes those
habits before handing the text to json.loads().
"""
import json
import re

FENCE_RE = re.compile(r"```(?:json)?", re.IGNORECASE)
BLOCK_COMMENT_RE = re.compile(r"/\*.*?\*/", re.DOTALL)
# "//" only counts as a comment at line start or after whitespace, so
# URLs such as https://example.com survive
LINE_COMMENT_RE = re.compile(r"(^|\s)//.*$", re.MULTILINE)


def cleanup_json(text: str) -> str:
    """
    Removes markdown fences such as ```json ... ```.
    """
    return FENCE_RE.sub("", text).strip()


def strip_comments(text: str) -> str:
    text = BLOCK_COMMENT_RE.sub("", text)
    return LINE_COMMENT_RE.sub(r"\1", text)


def outermost_object(text: str) -> str:
    start = text.find("{")
    end = text.rfind("}")
    if start == -1 or end <= start:
        raise ValueError("No JSON object found in text")
    return text[start:end + 1]


def extract_json_object(text: str) -> dict:
    """
    Locate the outermost {...} block in `text` and parse it.
    Raises ValueError if nothing parseable is found.
    """
    if not text or not text.strip():
        raise ValueError("Empty text")

    candidate = outermost_object(cleanup_json(text))
    candidate = strip_comments(candidate)

    try:
        data = json.loads(candidate)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON: {e}") from e

    if not isinstance(data, dict):
        raise ValueError("Expected a JSON object")

    return data
