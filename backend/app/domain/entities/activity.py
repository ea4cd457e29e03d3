"""
Entité Activity - Domain Layer
Résumé quotidien dérivé des séances (anneaux move / exercise / stand).
Une entrée par utilisateur et par jour calendaire.
"""
from sqlmodel import SQLModel, Field, Relationship, UniqueConstraint
from sqlalchemy import DateTime
from typing import Optional, TYPE_CHECKING
from datetime import date as date_type, datetime

if TYPE_CHECKING:
    from .user import User


class Activity(SQLModel, table=True):
    """Résumé d'activité quotidien, recalculé à chaque écriture de séance."""
    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_activity_user_date"),
    )

    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    date: date_type = Field(index=True)

    # Métriques dérivées
    calories: int = Field(default=0)
    move_minutes: int = Field(default=0)
    exercise_minutes: float = Field(default=0.0)  # minutes pondérées par intensité
    stand_hours: int = Field(default=0)  # plafonné à 12

    # Objectifs de l'utilisateur au moment du recalcul
    move_target: int = Field(default=450)
    exercise_target: int = Field(default=30)
    stand_target: int = Field(default=12)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)

    # Relations
    user: "User" = Relationship(back_populates="activities")


class ActivityRead(SQLModel):
    """Schéma pour lire un résumé quotidien (réponse API)"""
    user_id: int
    date: date_type
    calories: int
    move_minutes: int
    move_target: int
    exercise_minutes: float
    exercise_target: int
    stand_hours: int
    stand_target: int


class RingProgress(SQLModel):
    """Progression des anneaux, en pourcentage plafonné à 100"""
    move: float
    exercise: float
    stand: float


class DailyActivity(ActivityRead):
    """Résumé du jour avec progression des anneaux"""
    calories_burned: int
    progress: RingProgress


class DailyActivityView(SQLModel):
    """Entrée de la vue hebdomadaire"""
    day: str  # nom court du jour, ex. "Mon"
    date: date_type
    calories_burned: int
    percentage: float  # move_minutes / move_target * 100, non plafonné


class ActivityAverages(SQLModel):
    """Moyennes sur tout l'historique, avec les objectifs actuels"""
    calories: int
    move_minutes: float
    move_target: int
    exercise_minutes: float
    exercise_target: int
    stand_hours: float
    stand_target: int
