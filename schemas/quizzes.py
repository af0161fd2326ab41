# schemas/quizzes.py
from __future__ import annotations

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, field_validator, model_validator

from evaluator import LEN_LIMIT
from generator import MAX_QUESTIONS

# ---------- Requests ----------


class QuestionsAndAnswers(BaseModel):
    questions: List[str] = Field(min_length=1, max_length=MAX_QUESTIONS)
    # None where the question was left unanswered
    user_answers: List[Optional[StrictInt]]

    @field_validator("questions")
    @classmethod
    def _questions_not_blank(cls, v: List[str]) -> List[str]:
        for i, q in enumerate(v):
            if not q.strip():
                raise ValueError(f"question {i} is blank")
            if len(q) > LEN_LIMIT:
                raise ValueError(f"question {i} is too long (> {LEN_LIMIT})")
        return v

    @model_validator(mode="after")
    def _same_length(self) -> "QuestionsAndAnswers":
        if len(self.questions) != len(self.user_answers):
            raise ValueError(
                f"expected {len(self.questions)} answers, got {len(self.user_answers)}"
            )
        return self


class UpdateAnswers(BaseModel):
    user_answers: List[Optional[StrictInt]]


# ---------- Responses ----------


class QuizWithAnswersOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)
    id: int
    created_at: datetime
    questions: List[str]
    user_answers: List[Optional[int]]
    correct_answers: List[int]
    score: int
    owner_id: str


class ProblemOut(BaseModel):
    kind: str
    detail: str
    errors: Optional[List[Dict[str, Any]]] = None
