"""
Fixtures pytest : base SQLite en memoire, utilisateur, types de seance, client HTTP.
"""
import os

# La configuration est lue a l'import des modules app.* : variables posees avant
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("JWT_SECRET_KEY", "test-secret-key")
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("ACTIVITY_TIMEZONE", "UTC")

import pytest
from datetime import datetime
from sqlalchemy.pool import StaticPool
from sqlmodel import SQLModel, Session, create_engine

from app.domain.entities import User, Workout, WorkoutType
from app.domain.services.activity_metrics import estimate_calories


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    SQLModel.metadata.drop_all(engine)


@pytest.fixture
def session(engine):
    with Session(engine) as session:
        yield session


@pytest.fixture
def workout_type(session):
    workout_type = WorkoutType(name="Running", icon="running", color="#FF3B30")
    session.add(workout_type)
    session.commit()
    session.refresh(workout_type)
    return workout_type


@pytest.fixture
def user(session):
    user = User(
        username="fitnessuser",
        hashed_password="not-a-real-hash",
        daily_move_goal=450,
        daily_exercise_goal=30,
        daily_stand_goal=12,
    )
    session.add(user)
    session.commit()
    session.refresh(user)
    return user


@pytest.fixture
def add_workout(session, user, workout_type):
    """Insere une seance brute (sans recalcul), calories coherentes."""
    def _add(when: datetime, duration: int, intensity: str = "medium", user_id: int = None):
        workout = Workout(
            user_id=user_id or user.id,
            workout_type_id=workout_type.id,
            name="Seance",
            date=when,
            duration=duration,
            intensity=intensity,
            calories=estimate_calories(duration, intensity),
        )
        session.add(workout)
        session.commit()
        session.refresh(workout)
        return workout
    return _add


@pytest.fixture
def client(engine):
    from fastapi.testclient import TestClient
    from app.main import app
    from app.core.database import get_session
    from app.api.routers import limiter

    def _get_test_session():
        with Session(engine) as session:
            yield session

    app.dependency_overrides[get_session] = _get_test_session
    limiter.reset()
    yield TestClient(app)
    app.dependency_overrides.clear()
