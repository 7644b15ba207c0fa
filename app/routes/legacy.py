from fastapi import APIRouter
from fastapi.responses import JSONResponse

from app.schemas.studyplan import LegacyPlanRequest, LegacyPlanResponse
from app.services.scheduler import generate_legacy_plan
from app.utils.logger import logger

router = APIRouter()


@router.post("/generate-plan", response_model=LegacyPlanResponse)
async def legacy_generate_plan(payload: LegacyPlanRequest):
    """
    Free-text plan for clients that predate /api/syllabus/generate-plan.
    """
    logger.info(
        f"[LEGACY] Plan request: subjects='{payload.subjects}' "
        f"days={payload.days} hours={payload.hours}"
    )

    try:
        plan = await generate_legacy_plan(payload.subjects, payload.days, payload.hours)
    except Exception as e:
        logger.error("[LEGACY] Plan generation failed")
        logger.exception(e)
        return JSONResponse(status_code=500, content={"error": "Failed to generate plan."})

    return LegacyPlanResponse(plan=plan)
