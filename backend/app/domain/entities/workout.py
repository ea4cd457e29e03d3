"""
Entité Workout - Domain Layer
Représente une séance d'entraînement saisie par l'utilisateur.
Les calories sont dérivées (durée x intensité), jamais saisies.
"""
from sqlmodel import SQLModel, Field, Relationship, Column
from sqlalchemy import DateTime, String
from pydantic import field_validator
from typing import Optional, TYPE_CHECKING
from datetime import datetime, timezone
from enum import Enum

if TYPE_CHECKING:
    from .user import User


class Intensity(str, Enum):
    """Intensité d'une séance"""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _to_naive_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Les dates sont stockées en UTC naïf ; une date avec fuseau est convertie."""
    if value is not None and value.tzinfo is not None:
        return value.astimezone(timezone.utc).replace(tzinfo=None)
    return value


class WorkoutTypeBase(SQLModel):
    """Modèle de base pour WorkoutType"""
    name: str
    icon: str
    color: str  # hex, ex. "#FF3B30"


class WorkoutType(WorkoutTypeBase, table=True):
    """Catalogue des types de séance"""
    id: Optional[int] = Field(default=None, primary_key=True)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)


class WorkoutTypeRead(WorkoutTypeBase):
    """Schéma pour lire un type de séance (réponse API)"""
    id: int


class WorkoutBase(SQLModel):
    """Modèle de base pour Workout"""
    name: str
    workout_type_id: int
    date: datetime
    duration: int  # minutes
    distance: Optional[float] = None  # miles
    intensity: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None


class Workout(WorkoutBase, table=True):
    """Entité Workout complète pour la base de données"""
    id: Optional[int] = Field(default=None, primary_key=True)
    user_id: int = Field(foreign_key="user.id", index=True)
    workout_type_id: int = Field(foreign_key="workouttype.id")
    # UTC naif : type DateTime explicite, sans fuseau
    date: datetime = Field(index=True, sa_type=DateTime)

    # Colonne TEXT pour éviter les problèmes d'enum SQLAlchemy
    intensity: Intensity = Field(
        default=Intensity.MEDIUM,
        sa_column=Column("intensity", String, nullable=False),
    )

    # Valeur dérivée, recalculée à chaque écriture de duration / intensity
    calories: int = Field(default=0)

    # Timestamps
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)
    updated_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)

    # Relations
    user: "User" = Relationship(back_populates="workouts")


class WorkoutCreate(SQLModel):
    """Schéma pour créer une séance"""
    name: str = Field(min_length=1)
    workout_type_id: int
    date: datetime
    duration: int = Field(gt=0)
    distance: Optional[float] = Field(default=None, ge=0)
    intensity: Intensity = Intensity.MEDIUM
    notes: Optional[str] = None

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: datetime) -> datetime:
        return _to_naive_utc(v)


class WorkoutRead(WorkoutBase):
    """Schéma pour lire une séance (réponse API)"""
    id: int
    user_id: int
    calories: int
    created_at: datetime
    updated_at: datetime


class WorkoutUpdate(SQLModel):
    """Schéma pour mettre à jour une séance"""
    name: Optional[str] = Field(default=None, min_length=1)
    workout_type_id: Optional[int] = None
    date: Optional[datetime] = None
    duration: Optional[int] = Field(default=None, gt=0)
    distance: Optional[float] = Field(default=None, ge=0)
    intensity: Optional[Intensity] = None
    notes: Optional[str] = None

    @field_validator('date')
    @classmethod
    def normalize_date(cls, v: Optional[datetime]) -> Optional[datetime]:
        return _to_naive_utc(v)
