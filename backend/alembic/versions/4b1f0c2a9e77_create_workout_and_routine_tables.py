"""create sessions/exercise_logs/workout_sets + routines

Revision ID: 4b1f0c2a9e77
Revises:
Create Date: 2026-10-19 10:12:41.318204

"""
from typing import Sequence, Union
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '4b1f0c2a9e77'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) finished workout history
    op.create_table(
        'sessions',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('started_at', sa.DateTime(timezone=True), nullable=False),
        sa.Column('ended_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('routine_id', sa.String(length=32), nullable=True),
    )

    # 2) exercise_logs table
    op.create_table(
        'exercise_logs',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('session_id', sa.String(length=32), sa.ForeignKey('sessions.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
    )

    # 3) workout_sets table
    op.create_table(
        'workout_sets',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('exercise_id', sa.String(length=32), sa.ForeignKey('exercise_logs.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=False),
        sa.Column('unit', sa.String(length=8), nullable=False, server_default='kg'),
        sa.Column('completed', sa.Boolean(), nullable=False, server_default=sa.false()),
    )

    # 4) routines + their planned exercises
    op.create_table(
        'routines',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('position', sa.Integer(), nullable=False, index=True),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('last_performed', sa.DateTime(timezone=True), nullable=True),
    )
    op.create_table(
        'routine_exercises',
        sa.Column('id', sa.String(length=32), primary_key=True),
        sa.Column('routine_id', sa.String(length=32), sa.ForeignKey('routines.id', ondelete='CASCADE'), nullable=False, index=True),
        sa.Column('position', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=120), nullable=False),
        sa.Column('sets', sa.Integer(), nullable=False),
        sa.Column('reps', sa.Integer(), nullable=False),
        sa.Column('measure', sa.String(length=16), nullable=False, server_default='reps'),
    )


def downgrade() -> None:
    # drop child tables in reverse order
    op.drop_table('routine_exercises')
    op.drop_table('routines')
    op.drop_table('workout_sets')
    op.drop_table('exercise_logs')
    op.drop_table('sessions')
