from __future__ import annotations

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from models import Quiz


class StaleRecord(Exception):
    """The row being written no longer matches the database (e.g. it was deleted)."""


class QuizRepository:
    """Storage for quizzes on top of a SQLAlchemy session.

    Writes commit immediately; on failure the session is rolled back and the
    SQLAlchemy error is re-raised for the caller to classify.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_id(self, quiz_id: int) -> Optional[Quiz]:
        return self.db.get(Quiz, quiz_id)

    def find_all_by_owner(self, owner_id: str) -> List[Quiz]:
        stmt = select(Quiz).where(Quiz.owner_id == owner_id).order_by(Quiz.created_at, Quiz.id)
        return list(self.db.scalars(stmt))

    def exists(self, quiz_id: int) -> bool:
        stmt = select(Quiz.id).where(Quiz.id == quiz_id)
        return self.db.execute(stmt).scalar_one_or_none() is not None

    def insert(self, quiz: Quiz) -> Quiz:
        try:
            self.db.add(quiz)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(quiz)
        return quiz

    def update(self, quiz: Quiz) -> Quiz:
        try:
            self.db.add(quiz)
            self.db.commit()
        except StaleDataError as e:
            self.db.rollback()
            raise StaleRecord(str(e)) from e
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return quiz

    def delete(self, quiz_id: int) -> bool:
        quiz = self.db.get(Quiz, quiz_id)
        if quiz is None:
            return False
        try:
            self.db.delete(quiz)
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            return False
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return True
