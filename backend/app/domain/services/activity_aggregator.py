"""
Agregateur d'activite : recalcule le resume quotidien (Activity) d'un utilisateur
a partir de toutes ses seances du jour.

Le recalcul ne commit pas : il s'execute dans la transaction de l'ecriture de
seance qui l'a declenche, l'appelant commit ou rollback l'ensemble.
"""
import logging
from datetime import date as date_type, datetime
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlmodel import Session, select

from app.core.settings import get_settings
from app.domain.entities import Activity, User, Workout
from app.domain.services.activity_metrics import day_bounds, iter_days, local_day, summarize_workouts

logger = logging.getLogger(__name__)


class ActivityAggregator:

    def __init__(self, tz: Optional[ZoneInfo] = None):
        self._tz = tz

    @property
    def tz(self) -> ZoneInfo:
        return self._tz or get_settings().activity_tz

    def as_day(self, day) -> date_type:
        """Un datetime est ramene a son jour calendaire dans le fuseau de reference."""
        if isinstance(day, datetime):
            return local_day(day, self.tz)
        return day

    def workouts_for_day(self, session: Session, user_id: int, day: date_type) -> List[Workout]:
        start_dt, end_dt = day_bounds(day, self.tz)
        return session.exec(
            select(Workout)
            .where(
                Workout.user_id == user_id,
                Workout.date >= start_dt,
                Workout.date <= end_dt,
            )
            .order_by(Workout.date.desc())
        ).all()

    def recompute(self, session: Session, user_id: int, day) -> Activity:
        """Recalcule et upsert l'Activity de (user_id, day).

        Verrouille la ligne User (SELECT ... FOR UPDATE) pour serialiser les
        ecritures concurrentes d'un meme utilisateur avant de lire les seances.
        Leve ValueError si l'utilisateur n'existe pas.
        """
        day = self.as_day(day)

        user = session.exec(
            select(User).where(User.id == user_id).with_for_update()
        ).first()
        if not user:
            raise ValueError("User not found")

        totals = summarize_workouts(self.workouts_for_day(session, user_id, day))

        activity = session.exec(
            select(Activity).where(
                Activity.user_id == user_id,
                Activity.date == day,
            )
        ).first()
        if not activity:
            activity = Activity(user_id=user_id, date=day)

        values = {
            "calories": totals.calories,
            "move_minutes": totals.move_minutes,
            "exercise_minutes": totals.exercise_minutes,
            "stand_hours": totals.stand_hours,
            "move_target": user.daily_move_goal,
            "exercise_target": user.daily_exercise_goal,
            "stand_target": user.daily_stand_goal,
        }
        changed = activity.id is None or any(
            getattr(activity, field) != value for field, value in values.items()
        )
        if changed:
            for field, value in values.items():
                setattr(activity, field, value)
            activity.updated_at = datetime.utcnow()
            session.add(activity)
            session.flush()

        logger.debug(
            f"User {user_id}: activite du {day} recalculee "
            f"({totals.calories} kcal, {totals.move_minutes} min, {totals.stand_hours} h debout)"
        )
        return activity

    def recompute_range(
        self, session: Session, user_id: int, date_from: date_type, date_to: date_type
    ) -> int:
        """Recalcule les jours de la plage (incluse) puis commit.

        Seuls les jours ayant des seances ou deja un resume sont recalcules :
        un backfill ne cree pas de lignes a zero qui fausseraient les moyennes.
        Retourne le nombre de jours recalcules.
        """
        if not session.get(User, user_id):
            raise ValueError("User not found")

        start_dt, _ = day_bounds(date_from, self.tz)
        _, end_dt = day_bounds(date_to, self.tz)
        workout_dates = session.exec(
            select(Workout.date).where(
                Workout.user_id == user_id,
                Workout.date >= start_dt,
                Workout.date <= end_dt,
            )
        ).all()
        activity_dates = session.exec(
            select(Activity.date).where(
                Activity.user_id == user_id,
                Activity.date >= date_from,
                Activity.date <= date_to,
            )
        ).all()
        days = {local_day(d, self.tz) for d in workout_dates} | set(activity_dates)

        days_computed = 0
        try:
            for day in iter_days(date_from, date_to):
                if day not in days:
                    continue
                self.recompute(session, user_id, day)
                days_computed += 1
            session.commit()
        except Exception:
            session.rollback()
            raise

        logger.info(f"User {user_id}: {days_computed} jours d'activite recalcules ({date_from} -> {date_to})")
        return days_computed


activity_aggregator = ActivityAggregator()
