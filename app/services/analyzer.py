import json
from typing import Optional

from pydantic import ValidationError

from app.errors import AnalysisError
from app.schemas.studyplan import TopicAnalysis
from app.services import llm_client
from app.services.json_extract import cleanup_json
from app.utils.logger import logger

# Syllabus text beyond this is cut before it goes into the prompt
MAX_PROMPT_CHARS = 12000

# Used when no model is configured. Depends on the subject name only.
FALLBACK_TOPICS = [
    {
        "suffix": "Fundamentals",
        "subtopics": ["Basic Concepts", "Core Principles", "Key Definitions"],
        "importance": "High",
        "weightage": 35,
        "complexity": "Beginner",
        "suggestedHours": 6,
    },
    {
        "suffix": "Advanced Topics",
        "subtopics": ["Complex Problems", "Advanced Applications", "Case Studies"],
        "importance": "High",
        "weightage": 30,
        "complexity": "Advanced",
        "suggestedHours": 8,
    },
    {
        "suffix": "Practice & Revision",
        "subtopics": ["Problem Solving", "Mock Tests", "Previous Papers"],
        "importance": "Medium",
        "weightage": 25,
        "complexity": "Intermediate",
        "suggestedHours": 4,
    },
]
FALLBACK_TOTAL_HOURS = 18


def fallback_analysis(subject: str) -> TopicAnalysis:
    topics = []
    for entry in FALLBACK_TOPICS:
        topic = {k: v for k, v in entry.items() if k != "suffix"}
        topic["name"] = f"{subject} - {entry['suffix']}"
        topics.append(topic)

    return TopicAnalysis.model_validate({
        "topics": topics,
        "totalTopics": len(topics),
        "estimatedTotalHours": FALLBACK_TOTAL_HOURS,
    })


def build_analysis_prompt(text: str, subject: str, exam_type: Optional[str]) -> str:
    exam_part = f" ({exam_type} exam)" if exam_type else ""

    return f"""
Analyze the following syllabus for {subject}{exam_part} and extract:

1. All topics and subtopics clearly
2. Importance level (High/Medium/Low) for each topic
3. Estimated exam weightage percentage for each topic
4. Complexity level (Beginner/Intermediate/Advanced)
5. Suggested study time allocation

Syllabus Text:
\"\"\"{text[:MAX_PROMPT_CHARS]}\"\"\"

Format your response as JSON with this structure:
{{
  "topics": [
    {{
      "name": "Topic Name",
      "subtopics": ["Subtopic 1", "Subtopic 2"],
      "importance": "High/Medium/Low",
      "weightage": 25,
      "complexity": "Beginner/Intermediate/Advanced",
      "suggestedHours": 8
    }}
  ],
  "totalTopics": 10,
  "estimatedTotalHours": 80
}}

Return ONLY JSON. No markdown.
"""


async def analyze(text: str, subject: str, exam_type: Optional[str] = None) -> TopicAnalysis:
    """
    Topic/weightage breakdown of a syllabus.

    Without a configured model this returns the fixed three-topic fallback
    and never reads `text`. With a model, any request or parse failure
    raises AnalysisError.
    """
    client = llm_client.get_client()
    if client is None:
        logger.warning("[ANALYZE] No LLM configured, using fallback analysis")
        return fallback_analysis(subject)

    logger.info(f"[ANALYZE] Requesting topic analysis for '{subject}'")
    prompt = build_analysis_prompt(text, subject, exam_type)

    try:
        raw_output = await llm_client.run_chat_completion(client, prompt, temperature=0.3)
    except Exception as e:
        logger.error(f"[ANALYZE] LLM request failed: {e}")
        raise AnalysisError("Failed to analyze syllabus") from e

    logger.info(f"[ANALYZE] Raw output (200 chars): {raw_output[:200]}")

    try:
        result = json.loads(cleanup_json(raw_output))
        analysis = TopicAnalysis.model_validate(result)
    except (ValueError, ValidationError) as e:
        logger.error(f"[ANALYZE] JSON parse error: {e}")
        raise AnalysisError("Failed to analyze syllabus: invalid model response") from e

    logger.info(f"[ANALYZE] Completed, {analysis.total_topics} topics")
    return analysis
