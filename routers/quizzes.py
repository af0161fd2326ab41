# routers/quizzes.py
from __future__ import annotations

from typing import Annotated, Any, Dict, List, Optional

from fastapi import APIRouter, Body, Depends, Path, Response, status

from deps.auth import current_user_id, require_client
from deps.quizzes import get_quiz_service
from errors import Unauthenticated
from schemas.quizzes import ProblemOut, QuestionsAndAnswers, QuizWithAnswersOut
from service import QuizService

router = APIRouter(
    prefix="/api/quiz",
    tags=["quiz"],
    dependencies=[Depends(require_client)],
    responses={
        401: {"model": ProblemOut},
        403: {"model": ProblemOut},
        404: {"model": ProblemOut},
        500: {"model": ProblemOut},
    },
)

Service = Annotated[QuizService, Depends(get_quiz_service)]
UserId = Annotated[Optional[str], Depends(current_user_id)]


@router.get("", response_model=List[QuizWithAnswersOut])
def list_quizzes(service: Service, user_id: UserId):
    # the front end works out score percentages itself
    return [QuizWithAnswersOut.model_validate(q) for q in service.list_for_owner(user_id)]


@router.post("", response_model=QuizWithAnswersOut, status_code=status.HTTP_201_CREATED)
def create_quiz(body: QuestionsAndAnswers, service: Service, user_id: UserId):
    created = service.create(body.questions, body.user_answers, user_id)
    return QuizWithAnswersOut.model_validate(created)


# declared before /{quiz_id} so "questions" is never parsed as an id
@router.get("/questions/{count}", response_model=List[str])
def generate_questions(count: int, service: Service, user_id: UserId):
    if not user_id:
        raise Unauthenticated("Authentication is required to generate questions.")
    return service.generate_questions(count)


@router.get("/{quiz_id}", response_model=QuizWithAnswersOut)
def get_quiz(quiz_id: Annotated[int, Path()], service: Service, user_id: UserId):
    return QuizWithAnswersOut.model_validate(service.get(quiz_id, user_id))


@router.patch("/{quiz_id}", response_model=QuizWithAnswersOut)
def update_quiz(
    quiz_id: Annotated[int, Path()],
    body: Annotated[Dict[str, Any], Body(examples=[{"user_answers": [4, None]}])],
    service: Service,
    user_id: UserId,
):
    # body shape is checked by the service, after the quiz lookup
    # 200 with the body rather than 204: the front end refreshes its store from the new score
    updated = service.update(quiz_id, body.get("user_answers"), user_id)
    return QuizWithAnswersOut.model_validate(updated)


@router.delete("/{quiz_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_quiz(quiz_id: Annotated[int, Path()], service: Service, user_id: UserId):
    service.delete(quiz_id, user_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
