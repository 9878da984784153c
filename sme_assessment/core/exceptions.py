"""Domain exceptions raised by the service layer.

Route handlers let these propagate; ``main.py`` registers a handler that turns
them into the standard error envelope.
"""

from typing import Any, Dict, List, Optional


class AssessmentError(Exception):
    status_code = 400
    code = "BAD_REQUEST"

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NotFoundError(AssessmentError):
    status_code = 404
    code = "NOT_FOUND"


class ValidationFailedError(AssessmentError):
    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(AssessmentError):
    status_code = 409
    code = "CONFLICT"
