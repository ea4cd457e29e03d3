"""
Tests des calculs purs : calories, agregation journaliere, progression, bornes de journee.
"""
import pytest
from datetime import date, datetime
from types import SimpleNamespace
from zoneinfo import ZoneInfo

from app.domain.entities import Intensity
from app.domain.services.activity_metrics import (
    MAX_STAND_HOURS,
    day_bounds,
    estimate_calories,
    exercise_weight,
    local_day,
    progress_percentage,
    ring_progress,
    summarize_workouts,
)


def _workout(duration, intensity):
    return SimpleNamespace(
        duration=duration,
        intensity=intensity,
        calories=estimate_calories(duration, intensity),
    )


class TestEstimateCalories:
    """Tests pour estimate_calories."""

    def test_factors(self):
        assert estimate_calories(10, "low") == 40
        assert estimate_calories(10, "medium") == 70
        assert estimate_calories(10, "high") == 100

    def test_medium_30_minutes(self):
        assert estimate_calories(30, "medium") == 210

    def test_accepts_enum(self):
        assert estimate_calories(45, Intensity.HIGH) == 450

    def test_unknown_or_missing_intensity_defaults_to_medium(self):
        assert estimate_calories(20, "extreme") == 140
        assert estimate_calories(20, None) == 140
        assert estimate_calories(20) == 140

    def test_monotonic_in_duration(self):
        for intensity in ("low", "medium", "high"):
            values = [estimate_calories(d, intensity) for d in range(1, 200)]
            assert values == sorted(values)

    def test_monotonic_in_intensity(self):
        for duration in (1, 17, 30, 90):
            low = estimate_calories(duration, "low")
            medium = estimate_calories(duration, "medium")
            high = estimate_calories(duration, "high")
            assert low <= medium <= high


class TestSummarizeWorkouts:
    """Tests pour summarize_workouts."""

    def test_no_workouts(self):
        totals = summarize_workouts([])
        assert totals.calories == 0
        assert totals.move_minutes == 0
        assert totals.exercise_minutes == 0
        assert totals.stand_hours == 0

    def test_single_medium_workout(self):
        totals = summarize_workouts([_workout(30, "medium")])
        assert totals.calories == 210
        assert totals.move_minutes == 30
        assert totals.exercise_minutes == pytest.approx(21.0)
        assert totals.stand_hours == 1

    def test_two_workouts(self):
        totals = summarize_workouts([_workout(45, "high"), _workout(20, "low")])
        assert totals.calories == 530
        assert totals.move_minutes == 65
        assert totals.exercise_minutes == pytest.approx(53.0)
        # ceil(45/30) + ceil(20/30) = 2 + 1
        assert totals.stand_hours == 3

    def test_stand_hours_capped(self):
        """Les heures debout saturent a 12."""
        totals = summarize_workouts([_workout(240, "low") for _ in range(5)])
        assert totals.stand_hours == MAX_STAND_HOURS

    def test_calories_sum(self):
        workouts = [_workout(d, i) for d, i in [(12, "low"), (33, "medium"), (61, "high")]]
        assert summarize_workouts(workouts).calories == sum(w.calories for w in workouts)

    def test_exercise_weights(self):
        assert exercise_weight("high") == 1.0
        assert exercise_weight(Intensity.MEDIUM) == 0.7
        assert exercise_weight("low") == 0.4


class TestProgressPercentage:
    """Tests pour progress_percentage (plafonne)."""

    def test_capped_at_100(self):
        assert progress_percentage(120, 100) == 100

    def test_regular_value(self):
        assert progress_percentage(15, 30) == pytest.approx(50.0)

    def test_zero_or_negative_target(self):
        assert progress_percentage(50, 0) == 0
        assert progress_percentage(50, -10) == 0

    def test_never_negative(self):
        assert progress_percentage(-5, 10) == 0

    def test_ring_progress(self):
        activity = SimpleNamespace(
            move_minutes=900, move_target=450,
            exercise_minutes=15.0, exercise_target=30,
            stand_hours=3, stand_target=0,
        )
        assert ring_progress(activity) == {"move": 100.0, "exercise": 50.0, "stand": 0.0}


class TestDayBounds:
    """Tests des bornes de journee selon le fuseau de reference."""

    def test_utc_bounds(self):
        start, end = day_bounds(date(2026, 10, 19), ZoneInfo("UTC"))
        assert start == datetime(2026, 10, 19, 0, 0, 0)
        assert end == datetime(2026, 10, 19, 23, 59, 59, 999999)

    def test_paris_bounds_in_utc(self):
        # Heure d'ete a Paris (UTC+2)
        start, end = day_bounds(date(2026, 7, 1), ZoneInfo("Europe/Paris"))
        assert start == datetime(2026, 6, 30, 22, 0, 0)
        assert end == datetime(2026, 7, 1, 21, 59, 59, 999999)

    def test_local_day(self):
        tz = ZoneInfo("America/New_York")
        # 02:00 UTC = 22:00 la veille a New York
        assert local_day(datetime(2026, 7, 2, 2, 0), tz) == date(2026, 7, 1)
        assert local_day(datetime(2026, 7, 2, 2, 0), ZoneInfo("UTC")) == date(2026, 7, 2)
