import pytest

from errors import MalformedExpression
from scoring import calculate_answers, calculate_score


def test_calculate_answers():
    assert calculate_answers(["1+1", "2*2", "10-1"]) == [2, 4, 9]


def test_score_with_given_answers():
    assert calculate_score(["1+1", "2*2"], [2, 5], [2, 4]) == 1


def test_missing_answer_never_matches():
    assert calculate_score(["1+1", "2*2"], [None, 4], [2, 4]) == 1
    assert calculate_score(["1+1"], [None]) == 0


def test_score_derives_correct_answers():
    assert calculate_score(["1+1", "2*2", "9-3"], [2, 4, 6]) == 3


def test_bool_is_not_an_answer():
    assert calculate_score(["0+1"], [True]) == 0


def test_unevaluable_question_is_fatal():
    with pytest.raises(MalformedExpression):
        calculate_score(["1+1", "oops"], [2, 3])


def test_length_mismatch():
    with pytest.raises(ValueError):
        calculate_score(["1+1"], [2, 3], [2])
