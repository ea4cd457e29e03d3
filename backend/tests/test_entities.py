"""
Tests de persistance des entites : colonnes datetime stockees en UTC naif.
"""
import pytest
from datetime import date, datetime
from sqlalchemy import DateTime
from sqlmodel import select

from app.domain.entities import Activity, User, Workout, WorkoutType


class TestDatetimeColumns:
    """Les colonnes datetime sont des DateTime sans fuseau, comme la migration."""

    @pytest.mark.parametrize("table, column", [
        (User, "created_at"),
        (WorkoutType, "created_at"),
        (Workout, "date"),
        (Workout, "created_at"),
        (Workout, "updated_at"),
        (Activity, "created_at"),
        (Activity, "updated_at"),
    ])
    def test_column_type(self, table, column):
        column_type = table.__table__.c[column].type
        assert type(column_type) is DateTime
        assert column_type.timezone is False

    def test_workout_date_indexed(self):
        assert Workout.__table__.c["date"].index is True


class TestInsertEntities:
    """Insertion directe des entites, sans passer par les services."""

    def test_insert_all_tables(self, session):
        user = User(username="insertcheck", hashed_password="x")
        workout_type = WorkoutType(name="Cycling", icon="cycling", color="#34C759")
        session.add(user)
        session.add(workout_type)
        session.commit()
        session.refresh(user)
        session.refresh(workout_type)

        workout = Workout(
            user_id=user.id,
            workout_type_id=workout_type.id,
            name="Velotaf",
            date=datetime(2026, 10, 25, 7, 30),
            duration=40,
            intensity="low",
            calories=160,
        )
        activity = Activity(user_id=user.id, date=date(2026, 10, 25), calories=160, move_minutes=40)
        session.add(workout)
        session.add(activity)
        session.commit()
        session.refresh(workout)

        assert user.created_at.tzinfo is None
        assert workout.date == datetime(2026, 10, 25, 7, 30)
        assert workout.updated_at.tzinfo is None
        stored = session.exec(select(Activity).where(Activity.user_id == user.id)).one()
        assert stored.date == date(2026, 10, 25)
        assert stored.created_at.tzinfo is None
