import traceback
import uuid
from datetime import date, datetime, timezone
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from fastapi.responses import JSONResponse

from app.dependencies import get_search_provider, get_session_store
from app.errors import SessionNotFoundError, StudyPlannerError
from app.schemas.studyplan import (
    AckResponse,
    GeneratePlanRequest,
    GeneratePlanResponse,
    PlanUserInfo,
    ProgressUpdateRequest,
    SearchResponse,
    SessionSummary,
    SessionSummaryResponse,
    UploadResponse,
    UserSession,
)
from app.services.analyzer import analyze
from app.services.file_storage import remove_upload_file, save_upload_file
from app.services.scheduler import compute_total_days, generate_plan
from app.services.search_provider import SyllabusSearchProvider
from app.services.session_store import SessionStore
from app.services.text_cleaner import clean_text
from app.services.text_extractor import extract_text
from app.utils.logger import logger

router = APIRouter()

# Used when neither the request nor a stored session carries the value
DEFAULT_TOTAL_DAYS = 30
DEFAULT_HOURS_PER_DAY = 6


def today() -> date:
    return date.today()


# ======================================================================
# UPLOAD + ANALYSIS
# ======================================================================

@router.post("/upload", response_model=UploadResponse)
async def upload_syllabus(
    syllabus: Optional[UploadFile] = File(None),
    subject: str = Form(...),
    exam_type: str = Form(..., alias="examType"),
    exam_date: date = Form(..., alias="examDate"),
    hours_per_day: int = Form(..., alias="hoursPerDay", gt=0),
    user_id: Optional[str] = Form(None, alias="userId"),
    store: SessionStore = Depends(get_session_store),
    search_provider: SyllabusSearchProvider = Depends(get_search_provider),
):
    logger.info("------------------------------------------------------------")
    logger.info("[UPLOAD] Started")

    if syllabus is None or not syllabus.filename:
        logger.warning("[UPLOAD] No file uploaded")
        return JSONResponse(status_code=400, content={"error": "No file uploaded"})

    logger.info(f"[UPLOAD] {syllabus.filename} ({syllabus.content_type}) for {subject} ({exam_type})")

    # Type and size are rejected here, before extraction
    mime_type, saved_path = await save_upload_file(syllabus)

    try:
        raw_text = await extract_text(saved_path, mime_type)
    finally:
        remove_upload_file(saved_path)

    syllabus_text = clean_text(raw_text)
    logger.info(f"[UPLOAD] First 200 characters: {syllabus_text[:200]!r}")

    analysis = await analyze(syllabus_text, subject, exam_type)
    online_results = await search_provider.search(subject, exam_type)

    user_id = user_id or str(uuid.uuid4())
    days_remaining = compute_total_days(exam_date, today())

    # Re-uploading with the same id replaces the whole session
    store.put(UserSession(
        user_id=user_id,
        subject=subject,
        exam_type=exam_type,
        exam_date=exam_date,
        hours_per_day=hours_per_day,
        days_remaining=days_remaining,
        syllabus_text=syllabus_text,
        analysis=analysis,
        online_results=online_results,
        uploaded_at=datetime.now(timezone.utc),
    ))

    logger.info(f"[UPLOAD] Completed OK, userId={user_id}")

    return UploadResponse(
        user_id=user_id,
        analysis=analysis,
        online_results=online_results,
        days_remaining=days_remaining,
        message=(
            "Syllabus uploaded and analyzed successfully! "
            f"Found {analysis.total_topics} main topics from your uploaded file."
        ),
    )


# ======================================================================
# STUDY PLAN
# ======================================================================

@router.post("/generate-plan", response_model=GeneratePlanResponse)
async def generate_study_plan(
    payload: GeneratePlanRequest,
    store: SessionStore = Depends(get_session_store),
):
    logger.info(f"[PLAN] Request received: {payload.model_dump(exclude={'preferences'})}")

    session = None
    if payload.user_id and payload.user_id in store:
        session = store.get(payload.user_id)

    # Request values win over the stored session
    subject = payload.subject or (session.subject if session else "")
    exam_type = payload.exam_type or (session.exam_type if session else "")
    exam_date = payload.exam_date or (session.exam_date if session else None)
    hours_per_day = payload.hours_per_day or (
        session.hours_per_day if session else DEFAULT_HOURS_PER_DAY
    )

    start_date = today()
    if exam_date is not None:
        total_days = compute_total_days(exam_date, start_date)
    else:
        total_days = DEFAULT_TOTAL_DAYS
        exam_date = start_date

    try:
        study_plan = await generate_plan(
            total_days=total_days,
            hours_per_day=hours_per_day,
            start_date=start_date,
            exam_date=exam_date,
            subject=subject,
            exam_type=exam_type,
            preferences=payload.preferences,
        )
    except StudyPlannerError as e:
        logger.error("[PLAN] Generation failed")
        return JSONResponse(
            status_code=500,
            content={"error": e.message, "details": traceback.format_exc()},
        )

    if session is not None:
        session.study_plan = study_plan
        session.generated_at = datetime.now(timezone.utc)
        store.put(session)

    logger.info("[PLAN] Study plan generated successfully")

    return GeneratePlanResponse(
        study_plan=study_plan,
        user_info=PlanUserInfo(
            subject=subject or "Your Subject",
            exam_type=exam_type or "Academic",
            exam_date=exam_date,
            days_remaining=total_days,
            hours_per_day=hours_per_day,
            total_hours=total_days * hours_per_day,
        ),
    )


# ======================================================================
# SESSION
# ======================================================================

@router.get("/user/{user_id}", response_model=SessionSummaryResponse)
async def get_user_data(user_id: str, store: SessionStore = Depends(get_session_store)):
    session = store.get(user_id)

    return SessionSummaryResponse(
        user_info=SessionSummary.model_validate(
            session.model_dump(exclude={"syllabus_text", "online_results"})
        )
    )


@router.put("/progress", response_model=AckResponse)
async def update_progress(
    payload: ProgressUpdateRequest,
    store: SessionStore = Depends(get_session_store),
):
    if payload.user_id not in store:
        raise SessionNotFoundError(payload.user_id)

    store.set_progress(payload.user_id, payload.day, payload.completed, payload.notes)
    return AckResponse(message="Progress updated successfully")


# ======================================================================
# ONLINE SEARCH
# ======================================================================

@router.get("/search", response_model=SearchResponse)
async def search_online(
    subject: str = "",
    exam_type: str = Query("", alias="examType"),
    search_provider: SyllabusSearchProvider = Depends(get_search_provider),
):
    results = await search_provider.search(subject, exam_type)
    return SearchResponse(results=results)
