"""normalize lesson duration to seconds

Revision ID: 9d4f7e3b2a61
Revises: 5c1e2a9d7b40
Create Date: 2025-11-09 16:42:51.904117

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

from zuhri.utils.duration import normalize_lesson_duration, LEGACY_MINUTES_CUTOFF


# revision identifiers, used by Alembic.
revision: str = '9d4f7e3b2a61'
down_revision: Union[str, None] = '5c1e2a9d7b40'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

lessons = sa.table(
    'lessons',
    sa.column('id', sa.Integer),
    sa.column('duration', sa.Integer),
)


def upgrade() -> None:
    conn = op.get_bind()
    rows = conn.execute(
        sa.select(lessons.c.id, lessons.c.duration)
        .where(lessons.c.duration.isnot(None))
        .where(lessons.c.duration < LEGACY_MINUTES_CUTOFF)
    ).fetchall()
    for lesson_id, duration in rows:
        conn.execute(
            lessons.update()
            .where(lessons.c.id == lesson_id)
            .values(duration=normalize_lesson_duration(duration))
        )


def downgrade() -> None:
    # Rows converted from minutes cannot be told apart from genuine short lessons.
    pass
