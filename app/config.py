import os
from pathlib import Path
from dotenv import load_dotenv

# ----------------------------
# Load .env file (if exists)
# ----------------------------
load_dotenv()

# ----------------------------
# Base directories
# ----------------------------
BASE_DIR = Path(__file__).resolve().parent.parent

# Temporary upload directory (files are removed after extraction)
UPLOAD_DIR = os.getenv("UPLOAD_DIR", str(BASE_DIR / "data"))
os.makedirs(UPLOAD_DIR, exist_ok=True)

# 10 MB, checked before extraction starts
MAX_UPLOAD_BYTES = int(os.getenv("MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))

DOCX_MIME = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
DOC_MIME = "application/msword"

# Declared MIME types accepted by the upload endpoint
ALLOWED_MIME_TYPES = {
    "text/plain",
    "application/pdf",
    DOCX_MIME,
    DOC_MIME,
    "image/jpeg",
    "image/png",
    "image/jpg",
}

# ----------------------------
# LLM configuration (OpenAI-compatible endpoint)
# ----------------------------
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_MODEL = os.getenv("OPENAI_MODEL", "gpt-4o-mini")
LLM_TIMEOUT_SECONDS = float(os.getenv("LLM_TIMEOUT_SECONDS", "60"))

# ----------------------------
# OCR
# ----------------------------
GOOGLE_OCR_API_KEY = os.getenv("GOOGLE_OCR_API_KEY", "")
TESSERACT_LANG = os.getenv("TESSERACT_LANG", "eng")

# ----------------------------
# Online syllabus search: "mock" or "web"
# ----------------------------
SEARCH_PROVIDER = os.getenv("SEARCH_PROVIDER", "mock").lower()

# ----------------------------
# CORS
# ----------------------------
ALLOWED_ORIGINS = [
    origin.strip()
    for origin in os.getenv("ALLOWED_ORIGINS", "*").split(",")
    if origin.strip()
]

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

APP_VERSION = "2.0.0"
