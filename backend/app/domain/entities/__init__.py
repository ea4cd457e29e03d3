"""
Initialisation des entités du domaine
Résout les imports circulaires entre les modèles
"""

# Import des modèles dans l'ordre correct pour éviter les imports circulaires
from .user import User, UserCreate, UserRead, UserUpdate, UserStats
from .workout import (
    Intensity, Workout, WorkoutCreate, WorkoutRead, WorkoutUpdate,
    WorkoutType, WorkoutTypeRead,
)
from .activity import (
    Activity, ActivityRead, ActivityAverages, DailyActivity, DailyActivityView, RingProgress,
)

__all__ = [
    "User", "UserCreate", "UserRead", "UserUpdate", "UserStats",
    "Intensity", "Workout", "WorkoutCreate", "WorkoutRead", "WorkoutUpdate",
    "WorkoutType", "WorkoutTypeRead",
    "Activity", "ActivityRead", "ActivityAverages", "DailyActivity", "DailyActivityView", "RingProgress",
]
