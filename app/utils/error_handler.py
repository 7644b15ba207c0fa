import traceback

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.errors import StudyPlannerError
from app.utils.logger import logger


async def log_exceptions(request: Request, call_next):
    try:
        return await call_next(request)

    except Exception:
        logger.error("=== GLOBAL ERROR ===")
        logger.error(f"Path: {request.url.path}")
        logger.error(traceback.format_exc())

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"}
        )


async def handle_domain_error(request: Request, exc: StudyPlannerError):
    logger.warning(
        f"[ERROR] {request.method} {request.url.path} → "
        f"{exc.status_code} {type(exc).__name__}: {exc.message}"
    )
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.message}
    )


def register_error_handlers(app: FastAPI):
    app.middleware("http")(log_exceptions)
    app.add_exception_handler(StudyPlannerError, handle_domain_error)
