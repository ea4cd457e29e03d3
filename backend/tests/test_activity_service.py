"""
Tests pour ActivityService : vues de lecture sur les resumes quotidiens.
Couvre : weekly_activities, monthly_activities, activity_averages, daily_activity, user_stats.
"""
import pytest
from datetime import date, datetime, timedelta
from zoneinfo import ZoneInfo

from app.domain.entities import Activity, User
from app.domain.services.activity_service import ActivityService, parse_year_month


TODAY = date(2026, 10, 19)  # un lundi


@pytest.fixture
def service():
    return ActivityService(tz=ZoneInfo("UTC"))


@pytest.fixture
def add_activity(session, user):
    def _add(day, **values):
        activity = Activity(user_id=user.id, date=day, **values)
        session.add(activity)
        session.commit()
        session.refresh(activity)
        return activity
    return _add


class TestWeeklyActivities:
    """Tests pour weekly_activities."""

    def test_seven_entries_with_gaps(self, session, user, add_activity, service):
        add_activity(TODAY - timedelta(days=2), calories=210, move_minutes=30)
        add_activity(TODAY, calories=530, move_minutes=65)

        week = service.weekly_activities(session, user.id, today=TODAY)

        assert len(week) == 7
        assert [entry.date for entry in week] == [TODAY - timedelta(days=6 - i) for i in range(7)]
        assert [entry.day for entry in week] == ["Tue", "Wed", "Thu", "Fri", "Sat", "Sun", "Mon"]
        assert [entry.calories_burned for entry in week] == [0, 0, 0, 0, 210, 0, 530]
        assert week[0].percentage == 0

    def test_percentage_not_capped(self, session, user, add_activity, service):
        """move 120 / 100 -> 120 dans la vue hebdomadaire, 100 dans la progression."""
        add_activity(TODAY, calories=840, move_minutes=120, move_target=100)

        week = service.weekly_activities(session, user.id, today=TODAY)
        assert week[-1].percentage == pytest.approx(120.0)

        daily = service.daily_activity(session, user.id, TODAY)
        assert daily.progress.move == pytest.approx(100.0)

    def test_zero_target(self, session, user, add_activity, service):
        add_activity(TODAY, calories=70, move_minutes=10, move_target=0)
        week = service.weekly_activities(session, user.id, today=TODAY)
        assert week[-1].percentage == 0

    def test_excludes_days_outside_window(self, session, user, add_activity, service):
        add_activity(TODAY - timedelta(days=7), calories=999, move_minutes=99)
        add_activity(TODAY + timedelta(days=1), calories=999, move_minutes=99)

        week = service.weekly_activities(session, user.id, today=TODAY)
        assert all(entry.calories_burned == 0 for entry in week)


class TestMonthlyActivities:
    """Tests pour monthly_activities."""

    def test_only_persisted_rows_in_month(self, session, user, add_activity, service):
        add_activity(date(2026, 9, 30), calories=100)
        add_activity(date(2026, 10, 1), calories=210)
        add_activity(date(2026, 10, 31), calories=300)
        add_activity(date(2026, 11, 1), calories=400)

        activities = service.monthly_activities(session, user.id, "2026-10")

        assert [a.date for a in activities] == [date(2026, 10, 1), date(2026, 10, 31)]

    def test_empty_month(self, session, user, service):
        assert service.monthly_activities(session, user.id, "2026-02") == []

    def test_parse_year_month(self):
        assert parse_year_month("2024-02") == (date(2024, 2, 1), date(2024, 2, 29))
        assert parse_year_month("2026-12") == (date(2026, 12, 1), date(2026, 12, 31))

    @pytest.mark.parametrize("value", ["2026-13", "2026-00", "202610", "2026-1", "", "abcd-ef"])
    def test_parse_year_month_invalid(self, value):
        with pytest.raises(ValueError):
            parse_year_month(value)


class TestActivityAverages:
    """Tests pour activity_averages."""

    def test_averages_with_current_goals(self, session, user, add_activity, service):
        add_activity(date(2026, 10, 18), calories=200, move_minutes=30, exercise_minutes=20.0, stand_hours=1)
        add_activity(date(2026, 10, 19), calories=400, move_minutes=60, exercise_minutes=40.0, stand_hours=3,
                     move_target=999)

        averages = service.activity_averages(session, user.id)

        assert averages.calories == 300
        assert averages.move_minutes == pytest.approx(45.0)
        assert averages.exercise_minutes == pytest.approx(30.0)
        assert averages.stand_hours == pytest.approx(2.0)
        # Objectifs actuels de l'utilisateur, jamais moyennes
        assert averages.move_target == 450
        assert averages.exercise_target == 30
        assert averages.stand_target == 12

    def test_no_activity(self, session, user, service):
        averages = service.activity_averages(session, user.id)

        assert averages.calories == 0
        assert averages.move_minutes == 0
        assert averages.exercise_minutes == 0
        assert averages.stand_hours == 0
        assert averages.move_target == 450

    def test_calories_rounded(self, session, user, add_activity, service):
        add_activity(date(2026, 10, 18), calories=100)
        add_activity(date(2026, 10, 19), calories=101)
        assert service.activity_averages(session, user.id).calories == 101

    def test_unknown_user(self, session, service):
        with pytest.raises(ValueError, match="User not found"):
            service.activity_averages(session, 9999)


class TestDailyActivity:
    """Tests pour daily_activity."""

    def test_existing_row(self, session, user, add_activity, service):
        add_activity(TODAY, calories=210, move_minutes=30, exercise_minutes=21.0, stand_hours=1)

        daily = service.daily_activity(session, user.id, TODAY)

        assert daily.calories == 210
        assert daily.calories_burned == 210
        assert daily.progress.move == pytest.approx(30 / 450 * 100)
        assert daily.progress.exercise == pytest.approx(70.0)
        assert daily.progress.stand == pytest.approx(1 / 12 * 100)

    def test_default_zero_row_not_persisted(self, session, user, service):
        user.daily_move_goal = 600
        session.add(user)
        session.commit()

        daily = service.daily_activity(session, user.id, TODAY)

        assert daily.calories == 0
        assert daily.move_target == 600
        assert daily.progress.move == 0
        assert session.get(User, user.id).activities == []


class TestUserStats:
    """Tests pour user_stats."""

    def test_stats(self, session, user, add_workout, add_activity, service):
        add_workout(datetime(2026, 10, 19, 10, 0), 30, "medium")
        add_workout(datetime(2026, 9, 1, 10, 0), 10, "high")
        add_activity(TODAY, calories=210)
        add_activity(TODAY - timedelta(days=1), calories=0)
        add_activity(TODAY - timedelta(days=6), calories=50)
        add_activity(TODAY - timedelta(days=7), calories=80)

        stats = service.user_stats(session, user.id, today=TODAY)

        assert stats.total_workouts == 2
        assert stats.total_calories == 310
        assert stats.active_days == 2

    def test_no_data(self, session, user, service):
        stats = service.user_stats(session, user.id, today=TODAY)
        assert (stats.total_workouts, stats.total_calories, stats.active_days) == (0, 0, 0)
