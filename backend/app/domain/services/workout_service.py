"""
Service des seances : CRUD et recalcul synchrone du resume quotidien.

Chaque ecriture (create / update / delete) et le recalcul de l'Activity du jour
concerne forment une seule transaction : tout est commit, ou rien.
"""
import logging
from datetime import date as date_type, datetime
from typing import Iterable, List, Optional

from sqlmodel import Session, select

from app.domain.entities import Workout, WorkoutCreate, WorkoutUpdate, WorkoutType
from app.domain.services.activity_aggregator import ActivityAggregator, activity_aggregator
from app.domain.services.activity_metrics import estimate_calories

logger = logging.getLogger(__name__)

# Champs dont la modification change le resume quotidien
ACTIVITY_FIELDS = {"date", "duration", "intensity"}
# Champs non nullables : un null explicite dans un PATCH est ignore
REQUIRED_FIELDS = {"name", "workout_type_id", "date", "duration", "intensity"}

DEFAULT_WORKOUT_TYPES = [
    {"name": "Running", "icon": "running", "color": "#FF3B30"},
    {"name": "HIIT", "icon": "hiit", "color": "#FFCC00"},
    {"name": "Strength Training", "icon": "strength", "color": "#FF9500"},
    {"name": "Cycling", "icon": "cycling", "color": "#34C759"},
    {"name": "Swimming", "icon": "swimming", "color": "#5AC8FA"},
    {"name": "Cardio", "icon": "cardio", "color": "#007AFF"},
]


class WorkoutTypeService:

    def list_types(self, session: Session) -> List[WorkoutType]:
        return session.exec(select(WorkoutType).order_by(WorkoutType.id)).all()

    def get(self, session: Session, type_id: int) -> WorkoutType:
        workout_type = session.get(WorkoutType, type_id)
        if not workout_type:
            raise ValueError("Workout type not found")
        return workout_type

    def ensure_defaults(self, session: Session) -> int:
        """Cree le catalogue par defaut si la table est vide. Retourne le nombre cree."""
        if session.exec(select(WorkoutType)).first():
            return 0
        for data in DEFAULT_WORKOUT_TYPES:
            session.add(WorkoutType(**data))
        session.commit()
        logger.info(f"{len(DEFAULT_WORKOUT_TYPES)} types de seance crees")
        return len(DEFAULT_WORKOUT_TYPES)


class WorkoutService:

    def __init__(self, aggregator: ActivityAggregator = activity_aggregator):
        self.aggregator = aggregator

    def _commit_with_recompute(self, session: Session, user_id: int, days: Iterable[date_type]) -> None:
        """Recalcule les jours touches puis commit ; rollback complet en cas d'echec."""
        try:
            session.flush()
            for day in sorted(set(days)):
                self.aggregator.recompute(session, user_id, day)
            session.commit()
        except Exception as e:
            session.rollback()
            logger.error(f"User {user_id}: echec du recalcul d'activite, ecriture annulee: {e}")
            raise

    def _validate_workout_type(self, session: Session, type_id: int) -> None:
        if not session.get(WorkoutType, type_id):
            raise ValueError("Invalid workout type")

    def create(self, session: Session, user_id: int, workout_data: WorkoutCreate) -> Workout:
        self._validate_workout_type(session, workout_data.workout_type_id)

        workout = Workout(user_id=user_id, **workout_data.model_dump())
        workout.calories = estimate_calories(workout.duration, workout.intensity)
        session.add(workout)

        self._commit_with_recompute(session, user_id, [self.aggregator.as_day(workout.date)])
        session.refresh(workout)
        logger.info(f"User {user_id}: seance {workout.id} creee ({workout.calories} kcal)")
        return workout

    def get(self, session: Session, user_id: int, workout_id: int) -> Workout:
        workout = session.exec(
            select(Workout).where(
                Workout.id == workout_id,
                Workout.user_id == user_id,
            )
        ).first()
        if not workout:
            raise ValueError("Workout not found")
        return workout

    def list_workouts(
        self, session: Session, user_id: int, day: Optional[date_type] = None
    ) -> List[Workout]:
        """Seances de l'utilisateur, les plus recentes d'abord ; filtrees sur un jour si fourni."""
        if day is not None:
            return self.aggregator.workouts_for_day(session, user_id, day)
        return session.exec(
            select(Workout)
            .where(Workout.user_id == user_id)
            .order_by(Workout.date.desc())
        ).all()

    def update(
        self, session: Session, user_id: int, workout_id: int, workout_updates: WorkoutUpdate
    ) -> Workout:
        workout = self.get(session, user_id, workout_id)
        previous_day = self.aggregator.as_day(workout.date)

        updates = {
            field: value
            for field, value in workout_updates.model_dump(exclude_unset=True).items()
            if value is not None or field not in REQUIRED_FIELDS
        }
        if "workout_type_id" in updates:
            self._validate_workout_type(session, updates["workout_type_id"])

        for field, value in updates.items():
            setattr(workout, field, value)

        # Valeur derivee : jamais fournie par le client
        if "duration" in updates or "intensity" in updates:
            workout.calories = estimate_calories(workout.duration, workout.intensity)

        workout.updated_at = datetime.utcnow()
        session.add(workout)

        if ACTIVITY_FIELDS & updates.keys():
            days = [previous_day, self.aggregator.as_day(workout.date)]
            self._commit_with_recompute(session, user_id, days)
        else:
            session.commit()

        session.refresh(workout)
        return workout

    def delete(self, session: Session, user_id: int, workout_id: int) -> dict:
        workout = self.get(session, user_id, workout_id)
        day = self.aggregator.as_day(workout.date)
        session.delete(workout)
        self._commit_with_recompute(session, user_id, [day])
        logger.info(f"User {user_id}: seance {workout_id} supprimee")
        return {"message": "Workout deleted successfully"}


workout_type_service = WorkoutTypeService()
workout_service = WorkoutService()
