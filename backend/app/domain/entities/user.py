"""
Entité User - Domain Layer
Représente un utilisateur de MoveRings et ses objectifs quotidiens
"""
from sqlmodel import SQLModel, Field, Relationship
from sqlalchemy import DateTime
from pydantic import field_validator
from typing import Optional, List, TYPE_CHECKING
from datetime import datetime

if TYPE_CHECKING:
    from .activity import Activity
    from .workout import Workout


DEFAULT_MOVE_GOAL = 450
DEFAULT_EXERCISE_GOAL = 30
DEFAULT_STAND_GOAL = 12


class UserBase(SQLModel):
    """Modèle de base pour User"""
    username: str = Field(unique=True, index=True, max_length=64)
    weight: Optional[float] = None  # kg
    height: Optional[float] = None  # cm
    daily_move_goal: int = Field(default=DEFAULT_MOVE_GOAL, ge=0)
    daily_exercise_goal: int = Field(default=DEFAULT_EXERCISE_GOAL, ge=0)
    daily_stand_goal: int = Field(default=DEFAULT_STAND_GOAL, ge=0)
    created_at: datetime = Field(default_factory=datetime.utcnow, sa_type=DateTime)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Username must not be empty')
        return v.lower()


class User(UserBase, table=True):
    """Entité User complète pour la base de données"""
    id: Optional[int] = Field(default=None, primary_key=True)
    hashed_password: str

    # Relations
    workouts: List["Workout"] = Relationship(back_populates="user")
    activities: List["Activity"] = Relationship(back_populates="user")


class UserCreate(SQLModel):
    """Schéma pour créer un utilisateur"""
    username: str = Field(min_length=1, max_length=64)
    password: str = Field(min_length=6)
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    daily_move_goal: int = Field(default=DEFAULT_MOVE_GOAL, ge=0)
    daily_exercise_goal: int = Field(default=DEFAULT_EXERCISE_GOAL, ge=0)
    daily_stand_goal: int = Field(default=DEFAULT_STAND_GOAL, ge=0)

    @field_validator('username')
    @classmethod
    def validate_username(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError('Username must not be empty')
        return v.lower()


class UserRead(SQLModel):
    """Schéma pour lire un utilisateur (réponse API)"""
    id: int
    username: str
    weight: Optional[float]
    height: Optional[float]
    daily_move_goal: int
    daily_exercise_goal: int
    daily_stand_goal: int
    created_at: datetime


class UserUpdate(SQLModel):
    """Schéma pour mettre à jour le profil (objectifs, mensurations)"""
    weight: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    daily_move_goal: Optional[int] = Field(default=None, ge=0)
    daily_exercise_goal: Optional[int] = Field(default=None, ge=0)
    daily_stand_goal: Optional[int] = Field(default=None, ge=0)


class UserStats(SQLModel):
    """Statistiques de profil"""
    total_workouts: int
    total_calories: int
    active_days: int  # jours avec calories > 0 sur les 7 derniers jours
