"""create_activity_tracking_tables

Revision ID: a1c2e3f4b5d6
Revises:
Create Date: 2026-10-19 00:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
import sqlmodel


# revision identifiers, used by Alembic.
revision: str = 'a1c2e3f4b5d6'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table('user',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('username', sqlmodel.sql.sqltypes.AutoString(length=64), nullable=False),
        sa.Column('hashed_password', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('weight', sa.Float(), nullable=True),
        sa.Column('height', sa.Float(), nullable=True),
        sa.Column('daily_move_goal', sa.Integer(), nullable=False),
        sa.Column('daily_exercise_goal', sa.Integer(), nullable=False),
        sa.Column('daily_stand_goal', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_user_username'), 'user', ['username'], unique=True)

    op.create_table('workouttype',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('icon', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('color', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
    )

    op.create_table('workout',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('workout_type_id', sa.Integer(), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(), nullable=False),
        sa.Column('date', sa.DateTime(), nullable=False),
        sa.Column('duration', sa.Integer(), nullable=False),
        sa.Column('distance', sa.Float(), nullable=True),
        sa.Column('intensity', sa.String(), nullable=False),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(), nullable=True),
        sa.Column('calories', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.ForeignKeyConstraint(['workout_type_id'], ['workouttype.id']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_workout_user_id'), 'workout', ['user_id'])
    op.create_index(op.f('ix_workout_date'), 'workout', ['date'])

    op.create_table('activity',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('user_id', sa.Integer(), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('calories', sa.Integer(), nullable=False),
        sa.Column('move_minutes', sa.Integer(), nullable=False),
        sa.Column('exercise_minutes', sa.Float(), nullable=False),
        sa.Column('stand_hours', sa.Integer(), nullable=False),
        sa.Column('move_target', sa.Integer(), nullable=False),
        sa.Column('exercise_target', sa.Integer(), nullable=False),
        sa.Column('stand_target', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(), nullable=False),
        sa.Column('updated_at', sa.DateTime(), nullable=False),
        sa.ForeignKeyConstraint(['user_id'], ['user.id']),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('user_id', 'date', name='uq_activity_user_date'),
    )
    op.create_index(op.f('ix_activity_user_id'), 'activity', ['user_id'])
    op.create_index(op.f('ix_activity_date'), 'activity', ['date'])


def downgrade() -> None:
    op.drop_index(op.f('ix_activity_date'), table_name='activity')
    op.drop_index(op.f('ix_activity_user_id'), table_name='activity')
    op.drop_table('activity')
    op.drop_index(op.f('ix_workout_date'), table_name='workout')
    op.drop_index(op.f('ix_workout_user_id'), table_name='workout')
    op.drop_table('workout')
    op.drop_table('workouttype')
    op.drop_index(op.f('ix_user_username'), table_name='user')
    op.drop_table('user')
