import logging
from typing import Annotated

from fastapi import Depends
from sqlalchemy.orm import Session

from db import get_db
from repository import QuizRepository
from service import QuizService

APP_LOGGER_NAME = "simple-math-quizzes"


def get_quiz_service(db: Annotated[Session, Depends(get_db)]) -> QuizService:
    return QuizService(
        QuizRepository(db), logger=logging.getLogger(f"{APP_LOGGER_NAME}.quizzes")
    )
