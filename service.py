from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any, Callable, List, Optional, Sequence

from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

import generator
from errors import (
    EvaluationError,
    Forbidden,
    InternalInvariantViolation,
    NotFound,
    PersistenceFailed,
    ScoringFailed,
    Unauthenticated,
    ValidationFailed,
)
from models import Quiz
from policy import ensure_access
from repository import StaleRecord
from schemas.quizzes import QuestionsAndAnswers, UpdateAnswers
from scoring import calculate_answers, calculate_score


@dataclass
class QuizWithAnswers:
    """A stored quiz together with the answers computed from its questions."""

    quiz: Quiz
    correct_answers: List[int]

    @property
    def id(self) -> int:
        return self.quiz.id

    @property
    def created_at(self) -> datetime:
        return self.quiz.created_at

    @property
    def questions(self) -> List[str]:
        return self.quiz.questions

    @property
    def user_answers(self) -> List[Optional[int]]:
        return self.quiz.user_answers

    @property
    def score(self) -> int:
        return self.quiz.score

    @property
    def owner_id(self) -> str:
        return self.quiz.owner_id


def _validation_errors(e: ValidationError) -> List[dict]:
    return e.errors(include_url=False, include_context=False, include_input=False)


def check_invariants(quiz: Quiz) -> None:
    n = len(quiz.questions)
    if len(quiz.user_answers) != n:
        raise InternalInvariantViolation(
            f"Quiz has {n} questions but {len(quiz.user_answers)} answers."
        )
    if not 0 <= quiz.score <= n:
        raise InternalInvariantViolation(
            f"Score {quiz.score} is outside 0..{n} for a quiz with {n} questions."
        )


class QuizService:
    """Create, read, update and delete quizzes on behalf of a requesting user.

    `repository` is the storage collaborator (see repository.QuizRepository);
    `clock` returns the current timezone-aware time.
    """

    def __init__(
        self,
        repository: Any,
        logger: Optional[logging.Logger] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.repository = repository
        self.logger = logger or logging.getLogger(__name__)
        self.clock = clock or (lambda: datetime.now(UTC))

    # --- helpers ----------------------------------------------------------------

    def _score(
        self, questions: Sequence[str], user_answers: Sequence[Optional[int]], status_code: int
    ) -> tuple[List[int], int]:
        try:
            correct_answers = calculate_answers(questions)
            score = calculate_score(questions, user_answers, correct_answers, log=self.logger)
        except EvaluationError as e:
            self.logger.error("Unable to calculate score: %s", e.detail)
            raise ScoringFailed(
                f"Unable to calculate the score and correct answers of the quiz: {e.detail}",
                status_code=status_code,
            ) from e
        return correct_answers, score

    def _find(self, quiz_id: int) -> Quiz:
        quiz = self.repository.find_by_id(quiz_id)
        if quiz is None:
            self.logger.info("Quiz (ID: %s) not found", quiz_id)
            raise NotFound(f"Quiz {quiz_id} not found.")
        return quiz

    def _authorize(self, quiz: Quiz, requester_id: Optional[str], action: str) -> None:
        try:
            ensure_access(requester_id, quiz.owner_id)
        except Unauthenticated:
            self.logger.info("Unauthenticated user has requested to %s quiz (ID: %s)", action, quiz.id)
            raise
        except Forbidden:
            self.logger.info(
                "Unauthorised user (ID: %s) has requested to %s quiz (ID: %s)",
                requester_id,
                action,
                quiz.id,
            )
            raise
        self.logger.info(
            "Authorised user (ID: %s) has requested to %s quiz (ID: %s)", requester_id, action, quiz.id
        )

    # --- operations -------------------------------------------------------------

    def list_for_owner(self, requester_id: Optional[str]) -> List[QuizWithAnswers]:
        if not requester_id:
            self.logger.info("Unauthenticated user has requested to view quizzes")
            raise Unauthenticated("Authentication is required to view quizzes.")

        results: List[QuizWithAnswers] = []
        for quiz in self.repository.find_all_by_owner(requester_id):
            try:
                correct_answers = calculate_answers(quiz.questions)
            except EvaluationError as e:
                # skip the corrupted quiz; one bad row must not hide the rest
                self.logger.error(
                    "Skipping quiz (ID: %s): stored questions cannot be evaluated: %s",
                    quiz.id,
                    e.detail,
                )
                continue
            results.append(QuizWithAnswers(quiz, correct_answers))
        return results

    def get(self, quiz_id: int, requester_id: Optional[str]) -> QuizWithAnswers:
        quiz = self._find(quiz_id)
        self._authorize(quiz, requester_id, "view")
        correct_answers, _ = self._score(quiz.questions, quiz.user_answers, status_code=500)
        return QuizWithAnswers(quiz, correct_answers)

    def create(
        self,
        questions: Optional[Sequence[str]],
        user_answers: Optional[Sequence[Optional[int]]],
        owner_id: Optional[str],
    ) -> QuizWithAnswers:
        if not owner_id:
            self.logger.error("Unable to create quiz: unable to retrieve the current user's ID")
            raise Unauthenticated("Authentication is required to create a quiz.")

        try:
            data = QuestionsAndAnswers(questions=questions, user_answers=user_answers)
        except ValidationError as e:
            self.logger.info("Unable to create quiz: data for new quiz was invalid (%d errors)", e.error_count())
            raise ValidationFailed(
                "Unable to create quiz: data for new quiz was invalid", _validation_errors(e)
            ) from e

        correct_answers, score = self._score(data.questions, data.user_answers, status_code=400)

        quiz = Quiz(
            created_at=self.clock(),
            questions=list(data.questions),
            user_answers=list(data.user_answers),
            score=score,
            owner_id=owner_id,
        )
        check_invariants(quiz)

        try:
            quiz = self.repository.insert(quiz)
        except SQLAlchemyError as e:
            self.logger.error("Unable to create quiz: error saving new quiz to database: %s", e)
            raise PersistenceFailed("Unable to create quiz: error saving new quiz to database.") from e

        self.logger.info("Created quiz (ID: %s) for user (ID: %s)", quiz.id, owner_id)
        return QuizWithAnswers(quiz, correct_answers)

    def update(
        self,
        quiz_id: int,
        user_answers: Optional[Sequence[Optional[int]]],
        requester_id: Optional[str],
    ) -> QuizWithAnswers:
        quiz = self._find(quiz_id)

        try:
            data = UpdateAnswers(user_answers=user_answers)
        except ValidationError as e:
            self.logger.info("Unable to update quiz (ID: %s): answers were invalid", quiz_id)
            raise ValidationFailed(
                "Unable to update quiz: answers were invalid", _validation_errors(e)
            ) from e
        if len(data.user_answers) != len(quiz.questions):
            self.logger.info("Unable to update quiz (ID: %s): wrong number of answers", quiz_id)
            raise ValidationFailed(
                f"Unable to update quiz: expected {len(quiz.questions)} answers, "
                f"got {len(data.user_answers)}"
            )

        self._authorize(quiz, requester_id, "edit")

        correct_answers, score = self._score(quiz.questions, data.user_answers, status_code=500)

        quiz.user_answers = list(data.user_answers)
        quiz.score = score
        check_invariants(quiz)

        try:
            quiz = self.repository.update(quiz)
        except StaleRecord as e:
            if not self.repository.exists(quiz_id):
                self.logger.info("Unable to update quiz (ID: %s): quiz no longer exists", quiz_id)
                raise NotFound(f"Quiz {quiz_id} no longer exists.") from e
            self.logger.error("Unable to update quiz (ID: %s): conflicting write: %s", quiz_id, e)
            raise PersistenceFailed("Unable to update quiz: conflicting write.") from e
        except SQLAlchemyError as e:
            self.logger.error("Unable to update quiz (ID: %s): %s", quiz_id, e)
            raise PersistenceFailed("Unable to update quiz: error saving changes to database.") from e

        self.logger.info("Updated quiz (ID: %s), score %d/%d", quiz_id, score, len(quiz.questions))
        return QuizWithAnswers(quiz, correct_answers)

    def delete(self, quiz_id: int, requester_id: Optional[str]) -> None:
        quiz = self._find(quiz_id)
        self._authorize(quiz, requester_id, "delete")

        try:
            deleted = self.repository.delete(quiz_id)
        except SQLAlchemyError as e:
            self.logger.error("Unable to delete quiz (ID: %s): %s", quiz_id, e)
            raise PersistenceFailed("Unable to delete quiz: error saving changes to database.") from e
        if not deleted:
            self.logger.info("Unable to delete quiz (ID: %s): quiz no longer exists", quiz_id)
            raise NotFound(f"Quiz {quiz_id} no longer exists.")

        self.logger.info("Deleted quiz (ID: %s)", quiz_id)

    def generate_questions(self, count: int) -> List[str]:
        self.logger.info("Generating %s questions", count)
        return generator.generate_questions(count, log=self.logger)
