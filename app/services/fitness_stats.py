"""
Fitness statistics

Pure folds over workout logs. Averages over an empty set are 0.
"""
from collections import Counter
from typing import Dict, Iterable, List, Optional, Sequence

from app.schemas.stats import (
    BalancePoint,
    DayBucket,
    FitnessCharts,
    FitnessStats,
    FitnessSummary,
    GoalProgress,
    WeekBucket,
)
from app.services.periods import DateLike, as_date, days_back, days_between, week_windows, within_days

WEEKLY_WORKOUT_GOAL = 4

WORKOUT_TYPES = ["Strength", "Cardio", "HIIT", "Yoga", "Sports", "Swimming", "Cycling", "Running", "Other"]
BALANCE_TYPES = ["Strength", "Cardio", "HIIT", "Yoga", "Sports", "Other"]

MONTHLY_TARGETS = {
    "workouts": 20,
    "calories": 10000,
    "active_hours": 30,
}


def _get(obj, name: str, default=None):
    if isinstance(obj, dict):
        return obj.get(name, default)
    return getattr(obj, name, default)


def _average(values: List[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def exercise_volume(exercise) -> float:
    return (_get(exercise, "sets") or 0) * (_get(exercise, "reps") or 0) * (_get(exercise, "weight") or 0)


def workout_volume(workout) -> float:
    """sets x reps x weight summed over the workout's exercises"""
    return sum(exercise_volume(exercise) for exercise in (workout.exercises or []))


def total_volume(workouts: Iterable) -> float:
    return sum(workout_volume(workout) for workout in workouts)


def current_streak(workouts: Iterable, now: DateLike) -> int:
    """
    Consecutive workout days ending today or yesterday

    Walks the distinct workout dates newest first. Each date within one
    day of the cursor extends the streak and becomes the new cursor; the
    first larger gap ends the walk.
    """
    dates = sorted({as_date(workout.workout_date) for workout in workouts}, reverse=True)
    streak = 0
    cursor = as_date(now)
    for workout_date in dates:
        if days_between(cursor, workout_date) <= 1:
            streak += 1
            cursor = workout_date
        else:
            break
    return streak


def recent(workouts: Iterable, now: DateLike, days: int) -> List:
    return [workout for workout in workouts if within_days(workout.workout_date, now, days)]


def fitness_stats(workouts: Sequence, now: DateLike, weekly_goal: int = WEEKLY_WORKOUT_GOAL) -> FitnessStats:
    """Headline numbers for the last 7 and 30 days"""
    last_7_days = recent(workouts, now, 7)
    last_30_days = recent(workouts, now, 30)

    total_calories = sum(w.calories_burned or 0 for w in last_30_days)
    total_duration = sum(w.duration_minutes or 0 for w in last_30_days)
    workouts_this_week = len(last_7_days)

    return FitnessStats(
        workouts_this_week=workouts_this_week,
        workouts_this_month=len(last_30_days),
        total_calories=total_calories,
        total_duration=total_duration,
        avg_rpe=round(_average([w.rpe or 0 for w in last_30_days]), 1),
        avg_sleep=round(_average([w.sleep_quality or 0 for w in last_30_days]), 1),
        current_streak=current_streak(workouts, now),
        type_breakdown=dict(Counter(w.workout_type for w in last_30_days)),
        total_volume=round(total_volume(last_30_days)),
        avg_duration=round(total_duration / len(last_30_days)) if last_30_days else 0,
        weekly_goal=weekly_goal,
        weekly_goal_progress=min(workouts_this_week / weekly_goal * 100, 100.0),
    )


def daily_series(workouts: Sequence, now: DateLike, days: int = 14) -> List[DayBucket]:
    """Per-day totals and averages, oldest first"""
    buckets = []
    for day in days_back(now, days):
        day_workouts = [w for w in workouts if as_date(w.workout_date) == day]
        buckets.append(DayBucket(
            date=day.isoformat(),
            label=f"{day.strftime('%b')} {day.day}",
            workouts=len(day_workouts),
            calories=sum(w.calories_burned or 0 for w in day_workouts),
            duration=sum(w.duration_minutes or 0 for w in day_workouts),
            rpe=_average([w.rpe or 0 for w in day_workouts]),
            sleep=_average([w.sleep_quality or 0 for w in day_workouts]),
        ))
    return buckets


def weekly_series(workouts: Sequence, now: DateLike, weeks: int = 8) -> List[WeekBucket]:
    """Per-week totals over seven-day windows, oldest first"""
    buckets = []
    for index, (start, end) in enumerate(week_windows(now, weeks)):
        week_workouts = [w for w in workouts if start <= as_date(w.workout_date) < end]
        buckets.append(WeekBucket(
            week=f"W{index + 1}",
            start=start.isoformat(),
            workouts=len(week_workouts),
            total_calories=sum(w.calories_burned or 0 for w in week_workouts),
            total_duration=sum(w.duration_minutes or 0 for w in week_workouts),
            total_volume=total_volume(week_workouts),
        ))
    return buckets


def workout_balance(workouts: Sequence, now: DateLike) -> List[BalancePoint]:
    """Workout type mix of the last 30 days, scaled to the most frequent type"""
    counts: Dict[str, int] = {workout_type: 0 for workout_type in BALANCE_TYPES}
    for workout in recent(workouts, now, 30):
        key = workout.workout_type if workout.workout_type in counts else "Other"
        counts[key] += 1

    max_count = max(max(counts.values()), 1)
    return [
        BalancePoint(type=workout_type, value=round(count / max_count * 100), count=count)
        for workout_type, count in counts.items()
    ]


def _progress(name: str, current: float, target: float, shown: Optional[float] = None) -> GoalProgress:
    """Percentage from the exact value; `shown` replaces it in the label"""
    return GoalProgress(
        name=name,
        current=current if shown is None else shown,
        target=target,
        percentage=min(current / target * 100, 100.0) if target else 0.0,
    )


def monthly_goals(stats: FitnessStats, targets: Optional[Dict[str, int]] = None) -> List[GoalProgress]:
    """Progress toward the monthly workout, calorie and active-hour targets"""
    targets = {**MONTHLY_TARGETS, **(targets or {})}
    hours = stats.total_duration / 60
    return [
        _progress("workouts", stats.workouts_this_month, targets["workouts"]),
        _progress("calories", stats.total_calories, targets["calories"]),
        _progress("active_hours", hours, targets["active_hours"], shown=round(hours)),
    ]


def fitness_summary(
    workouts: Sequence,
    now: DateLike,
    weekly_goal: int = WEEKLY_WORKOUT_GOAL,
    targets: Optional[Dict[str, int]] = None,
) -> FitnessSummary:
    stats = fitness_stats(workouts, now, weekly_goal)
    return FitnessSummary(stats=stats, goals=monthly_goals(stats, targets))


def fitness_charts(workouts: Sequence, now: DateLike) -> FitnessCharts:
    return FitnessCharts(
        daily=daily_series(workouts, now),
        weekly=weekly_series(workouts, now),
        balance=workout_balance(workouts, now),
    )
