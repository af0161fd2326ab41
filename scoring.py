from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from evaluator import evaluate

logger = logging.getLogger(__name__)


def calculate_answers(questions: Sequence[str]) -> List[int]:
    # strict: an unevaluable question aborts the whole calculation
    return [evaluate(q) for q in questions]


def _matches(user_answer: Optional[int], correct_answer: int) -> bool:
    if user_answer is None or isinstance(user_answer, bool):
        return False
    return user_answer == correct_answer


def calculate_score(
    questions: Sequence[str],
    user_answers: Sequence[Optional[int]],
    correct_answers: Optional[Sequence[int]] = None,
    log: Optional[logging.Logger] = None,
) -> int:
    """
    Count the positions where the user's answer equals the correct answer.
    When correct_answers is omitted they are computed from the questions.
    A missing (None) user answer never matches.
    """
    log = log or logger
    if correct_answers is None:
        correct_answers = calculate_answers(questions)

    if not (len(questions) == len(user_answers) == len(correct_answers)):
        raise ValueError(
            "questions, user_answers and correct_answers must be the same length "
            f"({len(questions)}, {len(user_answers)}, {len(correct_answers)})"
        )

    score = 0
    for user_answer, correct_answer in zip(user_answers, correct_answers):
        if _matches(user_answer, correct_answer):
            score += 1
            log.debug("UserAnswer: %s, CorrectAnswer: %s. Match", user_answer, correct_answer)
        else:
            log.debug("UserAnswer: %s, CorrectAnswer: %s. No match", user_answer, correct_answer)

    log.info("Score: %d/%d", score, len(questions))
    return score
