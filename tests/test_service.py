import logging
from datetime import UTC, datetime

import pytest

from errors import (
    Forbidden,
    InternalInvariantViolation,
    NotFound,
    PersistenceFailed,
    ScoringFailed,
    Unauthenticated,
    ValidationFailed,
)
from fake_repository import FakeQuizRepository
from models import Quiz
from service import QuizService, check_invariants

NOW = datetime(2026, 3, 27, 12, 0, tzinfo=UTC)


@pytest.fixture
def repo():
    return FakeQuizRepository()


@pytest.fixture
def service(repo):
    return QuizService(repo, logger=logging.getLogger("test.quizzes"), clock=lambda: NOW)


def test_create_scores_and_persists(service, repo):
    result = service.create(["2+2"], [4], "u1")
    assert result.id == 1
    assert result.score == 1
    assert result.correct_answers == [4]
    assert result.created_at == NOW
    assert result.owner_id == "u1"
    assert repo.rows[1].score == 1


def test_create_then_update_round_trip(service):
    created = service.create(["2+2"], [4], "u1")
    updated = service.update(created.id, [9], "u1")
    assert updated.score == 0
    assert updated.user_answers == [9]
    assert updated.correct_answers == [4]


def test_update_is_idempotent(service):
    created = service.create(["2+2", "3*3"], [None, None], "u1")
    first = service.update(created.id, [4, 9], "u1")
    second = service.update(created.id, [4, 9], "u1")
    assert first.score == second.score == 2


def test_create_requires_owner(service):
    with pytest.raises(Unauthenticated):
        service.create(["1+1"], [2], None)


@pytest.mark.parametrize(
    "questions,answers",
    [
        (None, [1]),
        (["1+1"], None),
        ([], []),
        (["1+1", "2+2"], [2]),
        (["  "], [1]),
        (["1+1"], ["two"]),
        (["1+1"] * 31, [2] * 31),
    ],
)
def test_create_validation(service, repo, questions, answers):
    with pytest.raises(ValidationFailed) as exc:
        service.create(questions, answers, "u1")
    assert exc.value.status_code == 400
    assert repo.rows == {}


def test_create_with_unevaluable_question(service, repo):
    with pytest.raises(ScoringFailed) as exc:
        service.create(["1/0"], [1], "u1")
    assert exc.value.status_code == 400
    assert repo.rows == {}


def test_create_persistence_failure(service, repo):
    repo.fail_writes = True
    with pytest.raises(PersistenceFailed):
        service.create(["1+1"], [2], "u1")


def test_update_not_found(service):
    with pytest.raises(NotFound):
        service.update(99, [1], "u1")


def test_update_wrong_answer_count(service):
    created = service.create(["1+1"], [2], "u1")
    with pytest.raises(ValidationFailed):
        service.update(created.id, [2, 3], "u1")


def test_update_access_denied(service):
    created = service.create(["1+1"], [2], "u1")
    with pytest.raises(Forbidden):
        service.update(created.id, [1], "u2")
    with pytest.raises(Unauthenticated):
        service.update(created.id, [1], None)


def test_update_of_corrupted_quiz_is_internal_error(service, repo):
    created = service.create(["1+1"], [2], "u1")
    repo.rows[created.id].questions = ["garbage"]
    with pytest.raises(ScoringFailed) as exc:
        service.update(created.id, [2], "u1")
    assert exc.value.status_code == 500


def test_update_concurrently_deleted_is_not_found(service, repo):
    created = service.create(["1+1"], [2], "u1")
    repo.vanish_on_update = True
    with pytest.raises(NotFound):
        service.update(created.id, [1], "u1")


def test_update_conflict_on_existing_row_is_persistence_failure(service, repo):
    created = service.create(["1+1"], [2], "u1")
    repo.stale_on_update = True
    with pytest.raises(PersistenceFailed):
        service.update(created.id, [1], "u1")


def test_delete(service, repo):
    created = service.create(["1+1"], [2], "u1")
    with pytest.raises(Forbidden):
        service.delete(created.id, "u2")
    assert service.delete(created.id, "u1") is None
    assert repo.rows == {}
    with pytest.raises(NotFound):
        service.delete(created.id, "u1")


def test_delete_persistence_failure(service, repo):
    created = service.create(["1+1"], [2], "u1")
    repo.fail_writes = True
    with pytest.raises(PersistenceFailed):
        service.delete(created.id, "u1")


def test_get(service):
    created = service.create(["6*7"], [42], "u1")
    got = service.get(created.id, "u1")
    assert got.correct_answers == [42]
    with pytest.raises(Forbidden):
        service.get(created.id, "u2")


def test_list_for_owner_only_returns_own_quizzes(service):
    service.create(["1+1"], [2], "u1")
    service.create(["2+2"], [5], "u2")
    service.create(["3+3"], [6], "u1")
    listed = service.list_for_owner("u1")
    assert [q.questions for q in listed] == [["1+1"], ["3+3"]]
    assert [q.correct_answers for q in listed] == [[2], [6]]


def test_list_requires_identity(service):
    with pytest.raises(Unauthenticated):
        service.list_for_owner(None)


def test_list_skips_corrupted_quiz(service, repo, caplog):
    good = service.create(["1+1"], [2], "u1")
    bad = service.create(["2+2"], [4], "u1")
    repo.rows[bad.id].questions = ["not a question"]
    with caplog.at_level(logging.ERROR, logger="test.quizzes"):
        listed = service.list_for_owner("u1")
    assert [q.id for q in listed] == [good.id]
    assert f"ID: {bad.id}" in caplog.text


def test_invariant_check():
    with pytest.raises(InternalInvariantViolation):
        check_invariants(Quiz(questions=["1+1"], user_answers=[2], score=2, owner_id="u1"))
    with pytest.raises(InternalInvariantViolation):
        check_invariants(Quiz(questions=["1+1"], user_answers=[], score=0, owner_id="u1"))
    with pytest.raises(InternalInvariantViolation):
        check_invariants(Quiz(questions=["1+1"], user_answers=[2], score=-1, owner_id="u1"))


def test_generate_questions_delegates(service):
    assert len(service.generate_questions(3)) == 3


def test_delete_of_concurrently_removed_quiz_is_not_found(service, repo):
    created = service.create(["1+1"], [2], "u1")
    repo.vanish_on_delete = True
    with pytest.raises(NotFound):
        service.delete(created.id, "u1")
