from __future__ import annotations

from datetime import UTC, datetime
from typing import List, Optional

from sqlalchemy import JSON, CheckConstraint, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import TypeDecorator

from db import Base


class UTCDateTime(TypeDecorator):
    """Timezone-aware datetime column; SQLite hands values back naive, read them as UTC."""

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value, dialect):
        # stored as UTC wall time; naive input is taken to be UTC already
        if value is not None and value.tzinfo is not None:
            value = value.astimezone(UTC)
        return value

    def process_result_value(self, value, dialect):
        if value is not None and value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value


class Quiz(Base):
    __tablename__ = "quizzes"
    __table_args__ = (CheckConstraint("score >= 0", name="score_non_negative"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    created_at: Mapped[datetime] = mapped_column(
        UTCDateTime(), default=lambda: datetime.now(UTC), index=True
    )
    questions: Mapped[List[str]] = mapped_column(JSON)
    # same length as questions; None where the user left a question blank
    user_answers: Mapped[List[Optional[int]]] = mapped_column(JSON)
    score: Mapped[int] = mapped_column(Integer)
    owner_id: Mapped[str] = mapped_column(String(64), index=True)

    def __repr__(self) -> str:
        return f"Quiz(id={self.id!r}, owner_id={self.owner_id!r}, score={self.score!r})"
