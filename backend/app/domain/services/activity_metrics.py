"""
Calculs purs des anneaux d'activite : calories, minutes d'exercice, heures debout,
progression, et bornes de journee dans le fuseau de reference.
Aucun acces base de donnees ici.
"""
import math
from dataclasses import dataclass
from datetime import date as date_type, datetime, time, timedelta, timezone
from typing import Iterable, Optional, Tuple
from zoneinfo import ZoneInfo

# ---------------------------------------------------------------------------
# Constantes
# ---------------------------------------------------------------------------
CALORIES_PER_MINUTE = {"low": 4, "medium": 7, "high": 10}
EXERCISE_WEIGHTS = {"high": 1.0, "medium": 0.7, "low": 0.4}
DEFAULT_INTENSITY = "medium"
MINUTES_PER_STAND_HOUR = 30
MAX_STAND_HOURS = 12


def _intensity_key(intensity) -> str:
    """Accepte l'enum Intensity ou sa valeur brute ; inconnu -> medium."""
    key = getattr(intensity, "value", intensity)
    if key not in CALORIES_PER_MINUTE:
        return DEFAULT_INTENSITY
    return key


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def estimate_calories(duration_minutes: int, intensity=None) -> int:
    """Calories brulees = round(facteur[intensite] * duree).

    Facteurs (kcal/min) : low 4, medium 7, high 10. Intensite inconnue ou absente
    -> facteur medium. Ne leve jamais : la duree est validee en amont (> 0).
    """
    factor = CALORIES_PER_MINUTE[_intensity_key(intensity)]
    return round_half_up(factor * duration_minutes)


def exercise_weight(intensity) -> float:
    """Ponderation des minutes d'exercice (high 1.0, medium 0.7, low 0.4)."""
    key = getattr(intensity, "value", intensity)
    if key == "high":
        return EXERCISE_WEIGHTS["high"]
    if key == "medium":
        return EXERCISE_WEIGHTS["medium"]
    return EXERCISE_WEIGHTS["low"]


def stand_hours_for(duration_minutes: int) -> int:
    """Chaque tranche de 30 min (arrondie au superieur) compte une heure debout."""
    return math.ceil(duration_minutes / MINUTES_PER_STAND_HOUR)


@dataclass(frozen=True)
class DailyTotals:
    calories: int = 0
    move_minutes: int = 0
    exercise_minutes: float = 0.0
    stand_hours: int = 0


def summarize_workouts(workouts: Iterable) -> DailyTotals:
    """Agrege les seances d'une journee.

    Chaque element doit exposer ``calories``, ``duration`` et ``intensity``.
    Les heures debout saturent a 12.
    """
    calories = 0
    move_minutes = 0
    exercise_minutes = 0.0
    stand_hours = 0
    for workout in workouts:
        calories += workout.calories
        move_minutes += workout.duration
        exercise_minutes += workout.duration * exercise_weight(workout.intensity)
        stand_hours += stand_hours_for(workout.duration)

    return DailyTotals(
        calories=calories,
        move_minutes=move_minutes,
        exercise_minutes=exercise_minutes,
        stand_hours=min(MAX_STAND_HOURS, stand_hours),
    )


# ===================================================================
# Progression
# ===================================================================

def progress_percentage(current: float, target: float) -> float:
    """Pourcentage de progression plafonne, dans [0, 100].

    target <= 0 -> 0 (pas de division par zero ni de pourcentage negatif).
    """
    if target <= 0:
        return 0.0
    return max(0.0, min((current / target) * 100.0, 100.0))


def ring_progress(activity) -> dict:
    """Progression plafonnee des trois anneaux d'un resume quotidien."""
    return {
        "move": progress_percentage(activity.move_minutes, activity.move_target),
        "exercise": progress_percentage(activity.exercise_minutes, activity.exercise_target),
        "stand": progress_percentage(activity.stand_hours, activity.stand_target),
    }


# ===================================================================
# Bornes de journee
# ===================================================================

def day_bounds(day: date_type, tz: ZoneInfo) -> Tuple[datetime, datetime]:
    """Bornes [00:00:00, 23:59:59.999999] du jour dans ``tz``, en UTC naif.

    Les dates de seance sont stockees en UTC naif : on convertit les bornes locales.
    """
    start_local = datetime.combine(day, time.min, tzinfo=tz)
    end_local = datetime.combine(day, time.max, tzinfo=tz)
    return _as_naive_utc(start_local), _as_naive_utc(end_local)


def local_day(moment: datetime, tz: ZoneInfo) -> date_type:
    """Jour calendaire d'un instant (UTC naif ou avec fuseau) dans ``tz``."""
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(tz).date()


def today_in(tz: ZoneInfo, now: Optional[datetime] = None) -> date_type:
    now = now or datetime.now(timezone.utc)
    return local_day(now, tz)


def _as_naive_utc(moment: datetime) -> datetime:
    return moment.astimezone(timezone.utc).replace(tzinfo=None)


def iter_days(date_from: date_type, date_to: date_type):
    """Jours de date_from a date_to inclus."""
    current = date_from
    while current <= date_to:
        yield current
        current += timedelta(days=1)
