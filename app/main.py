from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import (
    ALLOWED_ORIGINS,
    APP_VERSION,
    GOOGLE_OCR_API_KEY,
    OPENAI_API_KEY,
)
from app.routes import health, legacy, syllabus
from app.utils.error_handler import register_error_handlers
from app.utils.logger import logger


# -------------------------------------------------------------------
# FastAPI application
# -------------------------------------------------------------------
app = FastAPI(
    title="AI Study Planner API",
    version=APP_VERSION,
)

# -------------------------------------------------------------------
# Error logging middleware + domain error handlers
# -------------------------------------------------------------------
register_error_handlers(app)

# -------------------------------------------------------------------
# CORS settings
# -------------------------------------------------------------------
app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_credentials=ALLOWED_ORIGINS != ["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

if not OPENAI_API_KEY:
    logger.warning("OPENAI_API_KEY is not set. Using fallback analysis and plans.")

if not GOOGLE_OCR_API_KEY:
    logger.info("GOOGLE_OCR_API_KEY not set. Images will be read with Tesseract.")

logger.info("Backend started")


# -------------------------------------------------------------------
# Routers
# -------------------------------------------------------------------
app.include_router(syllabus.router, prefix="/api/syllabus", tags=["Syllabus"])
app.include_router(health.router,   prefix="/health",       tags=["Health"])
app.include_router(legacy.router,                           tags=["Legacy"])


# -------------------------------------------------------------------
# Root endpoint
# -------------------------------------------------------------------
@app.get("/")
async def root():
    return {
        "message": "AI Study Planner API is running",
        "version": APP_VERSION,
        "features": [
            "Syllabus upload (text, PDF, Word, images)",
            "Topic extraction and weightage analysis",
            "Online syllabus research",
            "Intelligent study planning",
            "Progress tracking",
        ],
    }
