from __future__ import annotations

import logging
import random
from typing import Dict, List, Optional, Tuple

from errors import InvalidCount, UnsupportedCount
from evaluator import OPERATORS, evaluate_or_none

logger = logging.getLogger(__name__)

# Larger batches have never been exercised by the front end.
MAX_QUESTIONS = 30

# Half-open operand ranges per operator: (first, second), each [low, high).
OPERAND_RANGES: Dict[str, Tuple[Tuple[int, int], Tuple[int, int]]] = {
    "+": ((1, 100), (1, 100)),
    "-": ((10, 100), (1, 99)),
    "*": ((2, 10), (2, 20)),
}

_rng = random.Random()


def _candidate(rng) -> str:
    op = rng.choice(list(OPERATORS))
    (lo1, hi1), (lo2, hi2) = OPERAND_RANGES[op]
    return f"{rng.randrange(lo1, hi1)}{op}{rng.randrange(lo2, hi2)}"


def generate_questions(
    count: int,
    rng: Optional[random.Random] = None,
    log: Optional[logging.Logger] = None,
) -> List[str]:
    """Return `count` distinct, evaluable questions.

    Candidates that repeat an earlier question in this batch, or that the
    evaluator rejects, are dropped and resampled.
    """
    log = log or logger
    if isinstance(count, bool) or not isinstance(count, int) or count <= 0:
        raise InvalidCount(f"Number of questions must be a positive integer, got {count!r}.")
    if count > MAX_QUESTIONS:
        raise UnsupportedCount(
            f"Generating more than {MAX_QUESTIONS} questions at once is not supported."
        )

    rng = rng or _rng
    questions: List[str] = []
    while len(questions) < count:
        question = _candidate(rng)
        if question in questions:
            continue
        answer = evaluate_or_none(question, log)
        if answer is None:
            continue
        log.debug("%s, answer: %s", question, answer)
        questions.append(question)

    log.info("Generated %d questions: %s", count, ", ".join(questions))
    return questions
