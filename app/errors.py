"""
Domain errors.

Each error carries the HTTP status the API answers with; the handlers in
app/utils/error_handler.py render them as {"error": message}.
"""


class StudyPlannerError(Exception):
    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class UnsupportedFileTypeError(StudyPlannerError):
    status_code = 400

    def __init__(self, mime_type: str):
        super().__init__(
            f"Unsupported file type: {mime_type}. Please upload text, PDF, "
            "Word document, or image files."
        )
        self.mime_type = mime_type


class FileTooLargeError(StudyPlannerError):
    status_code = 413

    def __init__(self, size: int, limit: int):
        super().__init__(f"File too large: {size} bytes (limit {limit} bytes)")
        self.size = size
        self.limit = limit


class ExtractionError(StudyPlannerError):
    def __init__(self, reason: str):
        super().__init__(f"Failed to extract text from file: {reason}")
        self.reason = reason


class AnalysisError(StudyPlannerError):
    pass


class PlanGenerationError(StudyPlannerError):
    pass


class SessionNotFoundError(StudyPlannerError):
    status_code = 404

    def __init__(self, user_id: str):
        super().__init__("User data not found")
        self.user_id = user_id
