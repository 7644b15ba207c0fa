from datetime import date, datetime
from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    # camelCase on the wire, snake_case in Python; either is accepted on input
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------
# Topic analysis
# ---------------------------------------------------------
class Topic(CamelModel):
    name: str
    subtopics: List[str] = Field(default_factory=list)
    importance: str = "Medium"
    weightage: float = 0
    complexity: str = "Intermediate"
    suggested_hours: float = 0


class TopicAnalysis(CamelModel):
    topics: List[Topic]
    total_topics: int
    estimated_total_hours: float


# ---------------------------------------------------------
# Study plan
# ---------------------------------------------------------
class Activity(CamelModel):
    activity: str
    duration: str
    type: Literal["theory", "practice"]


class DayPlan(CamelModel):
    day: int
    date: date
    focus: str
    topics: List[str]
    activities: List[Activity]
    total_time: str
    difficulty: str


class StudyPlan(CamelModel):
    plan_title: str
    total_days: int
    total_hours: int
    start_date: date
    end_date: date
    days: List[DayPlan]
    revision_days: List[int] = Field(default_factory=list)
    mock_test_days: List[int] = Field(default_factory=list)


# ---------------------------------------------------------
# Session
# ---------------------------------------------------------
class SearchResult(CamelModel):
    title: str
    link: str


class ProgressEntry(CamelModel):
    completed: bool
    notes: str = ""
    updated_at: datetime


class UserSession(CamelModel):
    user_id: str
    subject: str
    exam_type: str
    exam_date: date
    hours_per_day: int
    days_remaining: int
    syllabus_text: str = ""
    analysis: Optional[TopicAnalysis] = None
    online_results: List[SearchResult] = Field(default_factory=list)
    study_plan: Optional[StudyPlan] = None
    progress: Dict[int, ProgressEntry] = Field(default_factory=dict)
    uploaded_at: datetime
    generated_at: Optional[datetime] = None


# ---------------------------------------------------------
# Requests / responses
# ---------------------------------------------------------
class UploadResponse(CamelModel):
    success: bool = True
    user_id: str
    analysis: TopicAnalysis
    online_results: List[SearchResult]
    days_remaining: int
    message: str


class GeneratePlanRequest(CamelModel):
    user_id: Optional[str] = None
    exam_date: Optional[date] = None
    hours_per_day: Optional[int] = Field(default=None, gt=0)
    subject: Optional[str] = None
    exam_type: Optional[str] = None
    preferences: Dict[str, Any] = Field(default_factory=dict)


class PlanUserInfo(CamelModel):
    subject: str
    exam_type: str
    exam_date: date
    days_remaining: int
    hours_per_day: int
    total_hours: int


class GeneratePlanResponse(CamelModel):
    success: bool = True
    study_plan: StudyPlan
    user_info: PlanUserInfo


class SessionSummary(CamelModel):
    user_id: str
    subject: str
    exam_type: str
    exam_date: date
    days_remaining: int
    hours_per_day: int
    analysis: Optional[TopicAnalysis] = None
    study_plan: Optional[StudyPlan] = None
    progress: Dict[int, ProgressEntry] = Field(default_factory=dict)
    uploaded_at: datetime
    generated_at: Optional[datetime] = None


class SessionSummaryResponse(CamelModel):
    success: bool = True
    user_info: SessionSummary


class ProgressUpdateRequest(CamelModel):
    user_id: str
    day: int = Field(gt=0)
    completed: bool
    notes: str = ""


class AckResponse(CamelModel):
    success: bool = True
    message: str


class SearchResponse(CamelModel):
    success: bool = True
    results: List[SearchResult]


# ---------------------------------------------------------
# Legacy free-text plan
# ---------------------------------------------------------
class LegacyPlanRequest(BaseModel):
    subjects: str = ""
    days: int = Field(default=7, gt=0)
    hours: int = Field(default=2, gt=0)


class LegacyPlanResponse(BaseModel):
    plan: str
