from __future__ import annotations

from typing import Any, Dict, List, Optional


class QuizError(Exception):
    """Base for every failure the quiz core reports to its caller.

    `kind` names the failure for API clients; `status_code` is the HTTP
    status used when the error reaches the transport boundary.
    """

    kind = "InternalError"
    status_code = 500

    def __init__(self, detail: str, *, status_code: Optional[int] = None):
        super().__init__(detail)
        self.detail = detail
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> Dict[str, Any]:
        return {"kind": self.kind, "detail": self.detail}


# ---------- Evaluator ----------


class EvaluationError(QuizError):
    status_code = 400


class MalformedExpression(EvaluationError):
    kind = "MalformedExpression"


class NonIntegerResult(EvaluationError):
    kind = "NonIntegerResult"


# ---------- Generator ----------


class GenerationError(QuizError):
    status_code = 400


class InvalidCount(GenerationError):
    kind = "InvalidCount"


class UnsupportedCount(GenerationError):
    kind = "UnsupportedCount"
    status_code = 501


# ---------- Orchestrator / policy ----------


class ValidationFailed(QuizError):
    kind = "ValidationFailed"
    status_code = 400

    def __init__(self, detail: str, errors: Optional[List[Dict[str, Any]]] = None):
        super().__init__(detail)
        self.errors = errors or []

    def to_dict(self) -> Dict[str, Any]:
        body = super().to_dict()
        if self.errors:
            body["errors"] = self.errors
        return body


class ScoringFailed(QuizError):
    kind = "ScoringFailed"


class InternalInvariantViolation(QuizError):
    kind = "InternalInvariantViolation"


class PersistenceFailed(QuizError):
    kind = "PersistenceFailed"


class NotFound(QuizError):
    kind = "NotFound"
    status_code = 404


class Unauthenticated(QuizError):
    kind = "Deny-Unauthenticated"
    status_code = 401


class Forbidden(QuizError):
    kind = "Deny-Forbidden"
    status_code = 403
