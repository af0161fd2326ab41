from __future__ import annotations

import logging
import operator
import re
from typing import Any, Callable, Dict, Optional, Tuple

from sympy import Integer, nan, oo, zoo

from errors import EvaluationError, MalformedExpression, NonIntegerResult

logger = logging.getLogger(__name__)

# --- Grammar ----------------------------------------------------------------------
# <int><op><int>, e.g. "10-1", "7*8", "-3 + 4". No parentheses, no chaining.
LEN_LIMIT = 100
_EXPR_RE = re.compile(r"^\s*([+-]?[0-9]+)\s*([+\-*])\s*([+-]?[0-9]+)\s*$")

OPERATORS: Dict[str, Callable[[Any, Any], Any]] = {
    "+": operator.add,
    "-": operator.sub,
    "*": operator.mul,
}

_MALFORMED_MSG = "Expression must be <integer><operator><integer> using one of + - *."


def parse(expression: Any) -> Tuple[int, str, int]:
    """Split an expression into (left, operator, right).

    Raises MalformedExpression for anything that is not exactly two integers
    around one supported operator, including None and empty strings.
    """
    if expression is None or not isinstance(expression, str) or not expression.strip():
        raise MalformedExpression("Expression is required.")
    if len(expression) > LEN_LIMIT:
        raise MalformedExpression(f"Expression too long (> {LEN_LIMIT}).")

    m = _EXPR_RE.fullmatch(expression)
    if m is None:
        raise MalformedExpression(f"{_MALFORMED_MSG} Got: {expression!r}")

    left, op, right = m.groups()
    return int(left), op, int(right)


def _as_int(value: Any, expression: str) -> int:
    if value in (oo, -oo, zoo, nan) or getattr(value, "is_finite", None) is False:
        raise NonIntegerResult(f"Result of {expression!r} is not finite.")
    if not getattr(value, "is_Integer", False):
        raise NonIntegerResult(f"Result of {expression!r} is not an integer: {value}")
    return int(value)


def evaluate(expression: Any) -> int:
    """Strict mode: return the integer value or raise an EvaluationError."""
    left, op, right = parse(expression)
    value = OPERATORS[op](Integer(left), Integer(right))
    return _as_int(value, expression)


def evaluate_or_none(expression: Any, log: Optional[logging.Logger] = None) -> Optional[int]:
    """Best-effort mode: failures are logged and reported as None."""
    try:
        return evaluate(expression)
    except EvaluationError as e:
        (log or logger).warning("Unable to evaluate question %r: %s", expression, e.detail)
        return None
