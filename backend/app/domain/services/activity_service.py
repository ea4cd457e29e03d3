"""
Service d'activites : vues hebdomadaire, mensuelle, moyennes, resume du jour, statistiques.
Lecture seule sur les Activity persistees.
"""
import calendar
import logging
import re
from datetime import date as date_type, timedelta
from typing import List, Optional
from zoneinfo import ZoneInfo

from sqlmodel import Session, func, select

from app.core.settings import get_settings
from app.domain.entities import (
    Activity, ActivityAverages, DailyActivity, DailyActivityView, RingProgress,
    User, UserStats, Workout,
)
from app.domain.services.activity_metrics import ring_progress, today_in, round_half_up

logger = logging.getLogger(__name__)

WEEK_DAYS = 7
WEEKDAY_SHORT_NAMES = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{2})$")


def _move_percentage(activity: Optional[Activity]) -> float:
    """Pourcentage brut de l'objectif move, NON plafonne (vue hebdomadaire)."""
    if activity is None or activity.move_target <= 0:
        return 0.0
    return (activity.move_minutes / activity.move_target) * 100


def parse_year_month(year_month: str) -> tuple:
    """'YYYY-MM' -> (premier jour, dernier jour) du mois."""
    match = YEAR_MONTH_PATTERN.match(year_month or "")
    if not match:
        raise ValueError(f"Invalid year_month '{year_month}', expected YYYY-MM")
    year, month = int(match.group(1)), int(match.group(2))
    if not 1 <= month <= 12:
        raise ValueError(f"Invalid month in '{year_month}'")
    last_day = calendar.monthrange(year, month)[1]
    return date_type(year, month, 1), date_type(year, month, last_day)


class ActivityService:

    def __init__(self, tz: Optional[ZoneInfo] = None):
        self._tz = tz

    @property
    def tz(self) -> ZoneInfo:
        return self._tz or get_settings().activity_tz

    def _get_user(self, session: Session, user_id: int) -> User:
        user = session.get(User, user_id)
        if not user:
            raise ValueError("User not found")
        return user

    def _activities_between(
        self, session: Session, user_id: int, date_from: date_type, date_to: date_type
    ) -> List[Activity]:
        return session.exec(
            select(Activity)
            .where(
                Activity.user_id == user_id,
                Activity.date >= date_from,
                Activity.date <= date_to,
            )
            .order_by(Activity.date)
        ).all()

    def weekly_activities(
        self, session: Session, user_id: int, today: Optional[date_type] = None
    ) -> List[DailyActivityView]:
        """Les 7 derniers jours [today-6, today], du plus ancien au plus recent.

        Les jours sans Activity sont completes par une entree a zero.
        """
        today = today or today_in(self.tz)
        start_date = today - timedelta(days=WEEK_DAYS - 1)
        by_date = {
            activity.date: activity
            for activity in self._activities_between(session, user_id, start_date, today)
        }

        week = []
        for offset in range(WEEK_DAYS):
            day = start_date + timedelta(days=offset)
            activity = by_date.get(day)
            week.append(DailyActivityView(
                day=WEEKDAY_SHORT_NAMES[day.weekday()],
                date=day,
                calories_burned=activity.calories if activity else 0,
                percentage=_move_percentage(activity),
            ))
        return week

    def monthly_activities(self, session: Session, user_id: int, year_month: str) -> List[Activity]:
        """Activity persistees du mois, sans completer les jours manquants."""
        start_date, end_date = parse_year_month(year_month)
        return self._activities_between(session, user_id, start_date, end_date)

    def activity_averages(self, session: Session, user_id: int) -> ActivityAverages:
        """Moyennes sur toutes les Activity de l'utilisateur ; objectifs actuels non moyennes."""
        user = self._get_user(session, user_id)

        avg_calories, avg_move, avg_exercise, avg_stand = session.exec(
            select(
                func.avg(Activity.calories),
                func.avg(Activity.move_minutes),
                func.avg(Activity.exercise_minutes),
                func.avg(Activity.stand_hours),
            ).where(Activity.user_id == user_id)
        ).one()

        return ActivityAverages(
            calories=round_half_up(float(avg_calories or 0)),
            move_minutes=float(avg_move or 0),
            move_target=user.daily_move_goal,
            exercise_minutes=float(avg_exercise or 0),
            exercise_target=user.daily_exercise_goal,
            stand_hours=float(avg_stand or 0),
            stand_target=user.daily_stand_goal,
        )

    def daily_activity(
        self, session: Session, user_id: int, day: Optional[date_type] = None
    ) -> DailyActivity:
        """Resume du jour ; a defaut de ligne, un resume a zero avec les objectifs actuels (non persiste)."""
        user = self._get_user(session, user_id)
        day = day or today_in(self.tz)

        activity = session.exec(
            select(Activity).where(
                Activity.user_id == user_id,
                Activity.date == day,
            )
        ).first()
        if activity is None:
            activity = Activity(
                user_id=user_id,
                date=day,
                move_target=user.daily_move_goal,
                exercise_target=user.daily_exercise_goal,
                stand_target=user.daily_stand_goal,
            )

        return DailyActivity(
            user_id=user_id,
            date=day,
            calories=activity.calories,
            move_minutes=activity.move_minutes,
            move_target=activity.move_target,
            exercise_minutes=activity.exercise_minutes,
            exercise_target=activity.exercise_target,
            stand_hours=activity.stand_hours,
            stand_target=activity.stand_target,
            calories_burned=activity.calories,
            progress=RingProgress(**ring_progress(activity)),
        )

    def user_stats(
        self, session: Session, user_id: int, today: Optional[date_type] = None
    ) -> UserStats:
        self._get_user(session, user_id)
        today = today or today_in(self.tz)

        total_workouts = session.exec(
            select(func.count()).select_from(Workout).where(Workout.user_id == user_id)
        ).one()
        total_calories = session.exec(
            select(func.coalesce(func.sum(Workout.calories), 0)).where(Workout.user_id == user_id)
        ).one()

        recent = self._activities_between(
            session, user_id, today - timedelta(days=WEEK_DAYS - 1), today
        )
        active_days = sum(1 for activity in recent if activity.calories > 0)

        return UserStats(
            total_workouts=total_workouts,
            total_calories=int(total_calories),
            active_days=active_days,
        )


activity_service = ActivityService()
