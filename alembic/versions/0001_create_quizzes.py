"""create quizzes

Revision ID: 0001_create_quizzes
Revises:
Create Date: 2026-10-17 10:12:41.528114

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "0001_create_quizzes"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "quizzes",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("questions", sa.JSON(), nullable=False),
        sa.Column("user_answers", sa.JSON(), nullable=False),
        sa.Column("score", sa.Integer(), nullable=False),
        sa.Column("owner_id", sa.String(length=64), nullable=False),
        sa.CheckConstraint("score >= 0", name=op.f("ck_quizzes_score_non_negative")),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_quizzes")),
    )
    op.create_index(op.f("ix_quizzes_created_at"), "quizzes", ["created_at"])
    op.create_index(op.f("ix_quizzes_owner_id"), "quizzes", ["owner_id"])


def downgrade() -> None:
    op.drop_index(op.f("ix_quizzes_owner_id"), table_name="quizzes")
    op.drop_index(op.f("ix_quizzes_created_at"), table_name="quizzes")
    op.drop_table("quizzes")
