from fastapi import APIRouter

from app.services import llm_client

router = APIRouter()


@router.get("/")
async def health():
    return {
        "status": "ok",
        "message": "AI Study Planner backend is running",
        "llm": "configured" if llm_client.get_client() is not None else "fallback",
    }
