"""
Study schedule generation.

generate_plan() runs two stages: try_ai_plan() asks the configured model
for a plan and returns None on any failure, then build_fallback_plan()
produces a deterministic plan. Model failures never reach the caller.
"""
import json
import math
from datetime import date, timedelta
from typing import Any, Dict, List, Optional

from pydantic import ValidationError

from app.errors import PlanGenerationError
from app.schemas.studyplan import Activity, DayPlan, StudyPlan
from app.services import llm_client
from app.services.json_extract import extract_json_object
from app.utils.logger import logger

# Every N-th day (by 0-based index) that is neither first nor last is a
# revision day
REVISION_CADENCE_DAYS = 3

# The fallback never materialises more day entries than this
MAX_FALLBACK_DAYS = 10

THEORY_SHARE = 0.6
PRACTICE_SHARE = 0.4

REVISION_MILESTONES = (0.3, 0.6, 0.8)
MOCK_TEST_MILESTONES = (0.4, 0.7)

DEFAULT_TOPIC_LABEL = "Advanced Topics"

FIRST, LAST, REVISION, CORE = "first", "last", "revision", "core"

FOCUS = {
    FIRST: "Foundation Building",
    LAST: "Final Revision",
    REVISION: "Revision Day",
    CORE: "Core Topics",
}


def compute_total_days(exam_date: date, today: date) -> int:
    """Whole days until the exam, at least 1."""
    return max(1, math.ceil((exam_date - today) / timedelta(days=1)))


def format_display_date(value: date) -> str:
    return value.strftime("%a %b %d %Y")


def build_plan_title(subject: str, total_days: int, start_date: date, exam_date: date) -> str:
    return (
        f"Study Plan for {subject or 'Academic'} - {total_days} Days "
        f"({format_display_date(start_date)} to {format_display_date(exam_date)})"
    )


def split_subjects(subject: str) -> List[str]:
    return [s.strip() for s in (subject or "").split(",") if s.strip()]


def classify_day(index: int, total_days: int) -> str:
    if index == 0:
        return FIRST
    if index == total_days - 1:
        return LAST
    if index % REVISION_CADENCE_DAYS == 0:
        return REVISION
    return CORE


def day_topics(kind: str, label: Optional[str]) -> List[str]:
    if kind == FIRST:
        return ["Basic Concepts", "Introduction"]
    if kind == LAST:
        return ["Final Review", "Last Minute Prep"]
    if kind == REVISION:
        return ["Previous Topics Review"]
    return [label or DEFAULT_TOPIC_LABEL, "Problem Solving"]


def day_activity_texts(kind: str, label: Optional[str]):
    if kind == FIRST:
        theory = f"Study basic concepts of {label}" if label else "Study basic concepts"
        return theory, "Practice basic problems"
    if kind == LAST:
        return "Final review of all topics", "Quick practice test"
    if kind == REVISION:
        return "Review previous topics", "Practice previous problems"
    if label:
        return f"Study {label} concepts", f"Solve {label} problems"
    return "Study advanced concepts", "Solve complex problems"


def milestone_days(total_days: int):
    revision = [math.floor(total_days * f) for f in REVISION_MILESTONES]
    mock_tests = [math.floor(total_days * f) for f in MOCK_TEST_MILESTONES]
    mock_tests.append(total_days - 1)
    return revision, mock_tests


def build_fallback_plan(
    total_days: int,
    hours_per_day: int,
    start_date: date,
    exam_date: date,
    subject: str = "",
    exam_type: str = "",
    preferences: Optional[Dict[str, Any]] = None,
) -> StudyPlan:
    """
    Deterministic study plan. Pure: identical inputs give identical plans.

    Only the first MAX_FALLBACK_DAYS days are materialised; revision and
    mock-test milestones index the full `total_days` range and may point
    past the last materialised entry. `exam_type` and `preferences` do not
    affect the result.
    """
    if total_days < 1 or hours_per_day < 1:
        raise ValueError("total_days and hours_per_day must be positive")

    subjects = split_subjects(subject)
    theory_hours = math.floor(hours_per_day * THEORY_SHARE)
    practice_hours = math.floor(hours_per_day * PRACTICE_SHARE)

    days = []
    for i in range(min(total_days, MAX_FALLBACK_DAYS)):
        kind = classify_day(i, total_days)
        label = subjects[i % len(subjects)] if subjects else None
        theory_text, practice_text = day_activity_texts(kind, label)

        days.append(DayPlan(
            day=i + 1,
            date=start_date + timedelta(days=i),
            focus=FOCUS[kind],
            topics=day_topics(kind, label),
            activities=[
                Activity(activity=theory_text, duration=f"{theory_hours} hours", type="theory"),
                Activity(activity=practice_text, duration=f"{practice_hours} hours", type="practice"),
            ],
            total_time=f"{hours_per_day} hours",
            difficulty="Medium" if kind == CORE else "Easy",
        ))

    revision_days, mock_test_days = milestone_days(total_days)

    return StudyPlan(
        plan_title=build_plan_title(subject, total_days, start_date, exam_date),
        total_days=total_days,
        total_hours=total_days * hours_per_day,
        start_date=start_date,
        end_date=exam_date,
        days=days,
        revision_days=revision_days,
        mock_test_days=mock_test_days,
    )


def build_plan_prompt(
    total_days: int,
    hours_per_day: int,
    start_date: date,
    exam_date: date,
    subject: str,
    exam_type: str,
    preferences: Dict[str, Any],
) -> str:
    total_hours = total_days * hours_per_day
    start_str = format_display_date(start_date)
    end_str = format_display_date(exam_date)
    revision_days, mock_test_days = milestone_days(total_days)

    return f"""
Create a detailed day-wise study plan for a student with the following parameters:
- Subject: {subject or 'Academic'}
- Exam Type: {exam_type or 'Academic'}
- Total days: {total_days}
- Hours per day: {hours_per_day}
- Total hours: {total_hours}
- Start date: {start_str}
- Exam date: {end_str}
- User preferences: {json.dumps(preferences)}

Create a realistic study plan that:
1. Starts from today ({start_str}) and ends on exam day ({end_str})
2. Covers all topics progressively from basics to advanced
3. Includes regular revision sessions (every 3-4 days)
4. Has practice tests and mock exams (weekly)
5. Balances workload with {hours_per_day} hours per day
6. Includes rest days for better retention

IMPORTANT: Respond ONLY with valid JSON. Do not include any comments, explanations, or text outside the JSON structure.

Return this exact JSON structure with {min(total_days, MAX_FALLBACK_DAYS)} days (show first {MAX_FALLBACK_DAYS} days if more than {MAX_FALLBACK_DAYS}):
{{
  "planTitle": "{build_plan_title(subject, total_days, start_date, exam_date)}",
  "totalDays": {total_days},
  "totalHours": {total_hours},
  "startDate": "{start_date.isoformat()}",
  "endDate": "{exam_date.isoformat()}",
  "days": [
    {{
      "day": 1,
      "date": "{start_date.isoformat()}",
      "focus": "Foundation Building",
      "topics": ["Basic Concepts", "Introduction"],
      "activities": [
        {{
          "activity": "Study basic concepts",
          "duration": "{math.floor(hours_per_day * THEORY_SHARE)} hours",
          "type": "theory"
        }},
        {{
          "activity": "Practice problems",
          "duration": "{math.floor(hours_per_day * PRACTICE_SHARE)} hours",
          "type": "practice"
        }}
      ],
      "totalTime": "{hours_per_day} hours",
      "difficulty": "Easy"
    }}
  ],
  "revisionDays": {json.dumps(revision_days)},
  "mockTestDays": {json.dumps(mock_test_days)}
}}
"""


async def try_ai_plan(
    total_days: int,
    hours_per_day: int,
    start_date: date,
    exam_date: date,
    subject: str,
    exam_type: str,
    preferences: Dict[str, Any],
) -> Optional[StudyPlan]:
    """
    One model round trip. Returns None when no model is configured or when
    the request, JSON extraction or schema validation fails.
    """
    client = llm_client.get_client()
    if client is None:
        logger.info("[PLAN] No LLM configured, skipping AI plan")
        return None

    prompt = build_plan_prompt(
        total_days, hours_per_day, start_date, exam_date,
        subject, exam_type, preferences,
    )

    try:
        raw = await llm_client.run_chat_completion(client, prompt, temperature=0.4, max_tokens=6000)
    except Exception as e:
        logger.warning(f"[PLAN] AI generation failed, using fallback: {e}")
        return None

    logger.info(f"[PLAN] AI response (first 200 chars): {raw[:200]}")

    try:
        return StudyPlan.model_validate(extract_json_object(raw))
    except (ValueError, ValidationError) as e:
        logger.warning(f"[PLAN] Failed to parse AI response, using fallback: {e}")
        return None


async def generate_plan(
    total_days: int,
    hours_per_day: int,
    start_date: date,
    exam_date: date,
    subject: str = "",
    exam_type: str = "",
    preferences: Optional[Dict[str, Any]] = None,
) -> StudyPlan:
    preferences = preferences or {}

    logger.info(
        f"[PLAN] Generating: {total_days} days, {hours_per_day} hours/day, "
        f"exam date {exam_date.isoformat()}"
    )

    plan = await try_ai_plan(
        total_days, hours_per_day, start_date, exam_date,
        subject, exam_type, preferences,
    )
    if plan is not None:
        logger.info("[PLAN] Using AI plan")
        return plan

    try:
        plan = build_fallback_plan(
            total_days, hours_per_day, start_date, exam_date,
            subject, exam_type, preferences,
        )
    except Exception as e:
        logger.exception(e)
        raise PlanGenerationError(f"Failed to generate study plan: {e}") from e

    logger.info("[PLAN] Using fallback plan")
    return plan


# ----------------------------------------------------------------------
# Legacy free-text plan
# ----------------------------------------------------------------------
def build_legacy_prompt(subjects: str, days: int, hours: int) -> str:
    return f"""
You are an AI study planner. A student has {days} days until their exam and wants to study the following subjects: {subjects}.
They can study {hours} hours per day.

Create a day-wise study plan that:
  - Balances time between subjects
  - Suggests specific topics/activities per day
  - Includes one revision/mock test day
  - Ends with a motivational note
"""


def legacy_fallback_text(subjects: str, days: int, hours: int) -> str:
    names = subjects.split(",")
    first = names[0].strip() if names and names[0].strip() else "main subject"
    second = names[1].strip() if len(names) > 1 and names[1].strip() else "second subject"
    half = hours // 2
    third = hours // 3

    return f"""
**Your Study Plan for {days} Days**

**Day 1: Foundation Building**
- Review basic concepts of {first} ({half} hours)
- Practice problems and examples ({half} hours)
- Time: {hours} hours

**Day 2: Core Topics**
- Study advanced topics in {second} ({half} hours)
- Solve practice questions ({half} hours)
- Time: {hours} hours

**Day 3: Integration & Practice**
- Combine concepts from all subjects ({third} hours)
- Take mock tests ({third} hours)
- Review and revise ({third} hours)
- Time: {hours} hours

**Day {days}: Final Revision**
- Quick review of all topics ({half} hours)
- Last-minute practice ({half} hours)
- Time: {hours} hours

**Motivational Note:** You've got this! Stay consistent and believe in your preparation. Good luck!
"""


async def generate_legacy_plan(subjects: str, days: int, hours: int) -> str:
    """
    Free-text plan kept for old clients. Model errors propagate.
    """
    client = llm_client.get_client()
    if client is None:
        return legacy_fallback_text(subjects, days, hours)

    return await llm_client.run_chat_completion(
        client, build_legacy_prompt(subjects, days, hours), temperature=0.7
    )
