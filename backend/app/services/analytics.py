"""Training analytics over a user's recorded workouts.

Every function here is a pure reduction over a list of ``WorkoutEntry``
values and takes ``now`` explicitly. Weights and reps arrive as the strings
the user typed; anything that does not parse as a number counts as zero.
Datetimes are compared as naive UTC.
"""

import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import date, datetime, time, timedelta, timezone
from enum import Enum
from typing import Iterable, Mapping, Sequence

from app.services.catalog import BASE_EXERCISES

BALANCE_PARTS = ("chest", "back", "legs", "shoulders", "arms")
WEEKDAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
MAX_LEVEL = 10
STRENGTH_PROGRESS_LIMIT = 5

# Fallback for names outside the catalog; first match wins
BODY_PART_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("chest", ("bench press", "chest press", "chest", "pec")),
    ("back", ("pull-up", "pullup", "lat pulldown", "deadlift", "row", "back")),
    ("legs", ("squat", "leg press", "lunge", "leg")),
    ("shoulders", ("shoulder press", "raise", "shoulder")),
    ("arms", ("curl", "tricep", "arm")),
)


class VolumePeriod(str, Enum):
    WEEK = "1week"
    MONTH = "1month"
    YEAR = "1year"


@dataclass(frozen=True)
class SetRecord:
    weight: float
    reps: float


@dataclass
class WorkoutEntry:
    name: str
    sets: list[SetRecord]
    performed_at: datetime
    post_id: str | None = None

    @classmethod
    def from_exercise(cls, exercise: Mapping, performed_at: datetime, post_id: str | None = None) -> "WorkoutEntry":
        sets = [
            SetRecord(weight=to_number(s.get("weight")), reps=to_number(s.get("reps")))
            for s in exercise.get("sets") or []
        ]
        return cls(name=exercise.get("name") or "", sets=sets, performed_at=naive_utc(performed_at), post_id=post_id)

    @property
    def volume(self) -> float:
        return sum(s.weight * s.reps for s in self.sets)

    @property
    def max_weight(self) -> float:
        return max((s.weight for s in self.sets), default=0.0)

    @property
    def day(self) -> date:
        return self.performed_at.date()


@dataclass
class StrengthProgress:
    exercise: str
    current_max: float
    previous_max: float
    improvement: float
    improvement_percentage: float
    current_date: str
    previous_date: str


@dataclass
class VolumeSummary:
    this_week: float
    last_week: float
    this_month: float
    last_month: float
    improvement: float


@dataclass
class VolumePoint:
    date: str
    volume: float
    label: str


@dataclass
class BodyPartBalance:
    name: str
    percentage: float
    level: int
    max_level: int = MAX_LEVEL


@dataclass
class Share:
    name: str
    percentage: float


@dataclass
class DaysGoalProgress:
    monthly_target: int
    current_month_days: int
    achievement_rate: int


@dataclass
class GoalProgress:
    name: str
    target: float
    current: float
    progress: float


@dataclass
class Overview:
    this_month_days: int
    last_month_comparison: int
    max_bench_press: float
    year_training_days: int
    year_progress: str


@dataclass
class AnalyticsReport:
    overview: Overview
    strength_progress: list[StrengthProgress]
    volume: VolumeSummary
    volume_chart: list[VolumePoint]
    body_part_balance: list[BodyPartBalance]
    body_part_frequency: list[Share]
    weekday_frequency: list[Share]
    days_goal: DaysGoalProgress
    weekly_training_days: int
    streak: int
    goals: list[GoalProgress] = field(default_factory=list)


def to_number(value) -> float:
    try:
        n = float(str(value).strip())
    except (TypeError, ValueError):
        return 0.0
    return n if math.isfinite(n) else 0.0


def naive_utc(dt: datetime) -> datetime:
    if dt.tzinfo is not None:
        return dt.astimezone(timezone.utc).replace(tzinfo=None)
    return dt


def round_half_up(x: float) -> int:
    return int(math.floor(x + 0.5))


def format_day(dt: datetime) -> str:
    return f"{dt.year}/{dt.month:02d}/{dt.day:02d}"


def total_volume(entries: Iterable[WorkoutEntry]) -> float:
    return sum(e.volume for e in entries)


def classify_body_part(name: str, catalog: Mapping[str, Iterable[str]] | None = None) -> str | None:
    """Catalog membership first, then keywords in the name."""
    for part, names in (catalog or BASE_EXERCISES).items():
        if name in names:
            return part
    lowered = name.lower()
    for part, keywords in BODY_PART_KEYWORDS:
        if any(k in lowered for k in keywords):
            return part
    return None


def _in_month(dt: datetime, year: int, month: int) -> bool:
    return dt.year == year and dt.month == month


def _previous_month(now: datetime) -> tuple[int, int]:
    return (now.year - 1, 12) if now.month == 1 else (now.year, now.month - 1)


def training_days(entries: Iterable[WorkoutEntry]) -> set[date]:
    return {e.day for e in entries}


def strength_progress(entries: Sequence[WorkoutEntry], limit: int = STRENGTH_PROGRESS_LIMIT) -> list[StrengthProgress]:
    """Latest max-weight increase between consecutive sessions of each exercise."""
    by_name: dict[str, list[WorkoutEntry]] = {}
    for e in entries:
        by_name.setdefault(e.name, []).append(e)

    latest: dict[str, tuple[datetime, StrengthProgress]] = {}
    for name, history in by_name.items():
        if len(history) < 2:
            continue
        history = sorted(history, key=lambda e: e.performed_at)
        for previous, current in zip(history, history[1:]):
            improvement = current.max_weight - previous.max_weight
            if improvement <= 0:
                continue
            pct = improvement / previous.max_weight * 100 if previous.max_weight > 0 else 0.0
            latest[name] = (
                current.performed_at,
                StrengthProgress(
                    exercise=name,
                    current_max=current.max_weight,
                    previous_max=previous.max_weight,
                    improvement=improvement,
                    improvement_percentage=pct,
                    current_date=format_day(current.performed_at),
                    previous_date=format_day(previous.performed_at),
                ),
            )

    ranked = sorted(latest.values(), key=lambda item: item[0], reverse=True)
    return [progress for _, progress in ranked[:limit]]


def volume_summary(entries: Sequence[WorkoutEntry], now: datetime) -> VolumeSummary:
    now = naive_utc(now)
    week_ago = now - timedelta(days=7)
    two_weeks_ago = now - timedelta(days=14)
    month_ago = now - timedelta(days=30)
    two_months_ago = now - timedelta(days=60)

    this_week = total_volume(e for e in entries if e.performed_at >= week_ago)
    last_week = total_volume(e for e in entries if two_weeks_ago <= e.performed_at < week_ago)
    this_month = total_volume(e for e in entries if e.performed_at >= month_ago)
    last_month = total_volume(e for e in entries if two_months_ago <= e.performed_at < month_ago)
    improvement = (this_week - last_week) / last_week * 100 if last_week > 0 else 0.0
    return VolumeSummary(this_week, last_week, this_month, last_month, improvement)


def volume_chart(entries: Sequence[WorkoutEntry], period: VolumePeriod, now: datetime) -> list[VolumePoint]:
    """
    1week: seven daily buckets ending today.
    1month: six five-day buckets, the last one ending today.
    1year: twelve calendar months ending with the current one.
    """
    now = naive_utc(now)
    today = datetime.combine(now.date(), time.min)
    points: list[VolumePoint] = []

    if period == VolumePeriod.WEEK:
        for i in range(6, -1, -1):
            start = today - timedelta(days=i)
            end = start + timedelta(days=1)
            vol = total_volume(e for e in entries if start <= e.performed_at < end)
            points.append(VolumePoint(start.isoformat(), vol, f"{start.month}/{start.day}"))
    elif period == VolumePeriod.MONTH:
        for i in range(25, -1, -5):
            start = today - timedelta(days=i + 4)
            end = today - timedelta(days=i) + timedelta(days=1)
            last = end - timedelta(days=1)
            vol = total_volume(e for e in entries if start <= e.performed_at < end)
            label = f"{start.month}/{start.day}-{last.month}/{last.day}"
            points.append(VolumePoint(last.isoformat(), vol, label))
    else:
        for i in range(11, -1, -1):
            y, m = divmod(now.year * 12 + now.month - 1 - i, 12)
            start = datetime(y, m + 1, 1)
            ny, nm = divmod(y * 12 + m + 1, 12)
            end = datetime(ny, nm + 1, 1)
            vol = total_volume(e for e in entries if start <= e.performed_at < end)
            points.append(VolumePoint(start.isoformat(), vol, f"{start.year}/{start.month}"))
    return points


def body_part_balance(
    entries: Sequence[WorkoutEntry], catalog: Mapping[str, Iterable[str]] | None = None
) -> list[BodyPartBalance]:
    """Volume per major body part as a share of the busiest one, with a 1..10 level."""
    volumes = dict.fromkeys(BALANCE_PARTS, 0.0)
    for e in entries:
        part = classify_body_part(e.name, catalog)
        if part in volumes:
            volumes[part] += e.volume

    top = max(volumes.values())
    result = []
    for name, vol in volumes.items():
        pct = vol / top * 100 if top > 0 else 0.0
        result.append(BodyPartBalance(name=name, percentage=pct, level=min(int(pct // 10) + 1, MAX_LEVEL)))
    return result


def body_part_frequency(
    entries: Sequence[WorkoutEntry], catalog: Mapping[str, Iterable[str]] | None = None
) -> list[Share]:
    counts = Counter(classify_body_part(e.name, catalog) for e in entries)
    total = sum(counts[p] for p in BALANCE_PARTS)
    return [Share(p, counts[p] / total * 100 if total > 0 else 0.0) for p in BALANCE_PARTS]


def weekday_frequency(entries: Sequence[WorkoutEntry]) -> list[Share]:
    counts = [0] * 7
    for e in entries:
        counts[e.performed_at.weekday()] += 1
    top = max(counts)
    return [Share(day, counts[i] / top * 100 if top > 0 else 0.0) for i, day in enumerate(WEEKDAYS)]


def days_goal_progress(entries: Sequence[WorkoutEntry], monthly_target: int, now: datetime) -> DaysGoalProgress:
    now = naive_utc(now)
    days = len({e.day for e in entries if _in_month(e.performed_at, now.year, now.month)})
    rate = round_half_up(days / monthly_target * 100) if monthly_target > 0 else 0
    return DaysGoalProgress(monthly_target=monthly_target, current_month_days=days, achievement_rate=rate)


def weekly_training_days(entries: Sequence[WorkoutEntry], now: datetime) -> int:
    """Distinct training days in the current Monday-to-Sunday week."""
    now = naive_utc(now)
    monday = datetime.combine(now.date() - timedelta(days=now.weekday()), time.min)
    next_monday = monday + timedelta(days=7)
    return len({e.day for e in entries if monday <= e.performed_at < next_monday})


def training_streak(entries: Sequence[WorkoutEntry], now: datetime) -> int:
    """Consecutive training days ending today, or yesterday if today is still open."""
    days = training_days(entries)
    cursor = naive_utc(now).date()
    if cursor not in days:
        cursor -= timedelta(days=1)
    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def goal_progress(entries: Sequence[WorkoutEntry], name: str, target: float) -> GoalProgress:
    """Best weight on an exactly named exercise against a target weight."""
    current = max((e.max_weight for e in entries if e.name == name), default=0.0)
    progress = min(current / target * 100, 100.0) if target > 0 else 0.0
    return GoalProgress(name=name, target=target, current=current, progress=progress)


def overview(entries: Sequence[WorkoutEntry], now: datetime) -> Overview:
    now = naive_utc(now)
    py, pm = _previous_month(now)
    this_month = len({e.day for e in entries if _in_month(e.performed_at, now.year, now.month)})
    last_month = len({e.day for e in entries if _in_month(e.performed_at, py, pm)})
    if last_month == 0:
        comparison = 100 if this_month > 0 else 0
    else:
        comparison = round_half_up((this_month - last_month) / last_month * 100)
    bench = max((e.max_weight for e in entries if "bench press" in e.name.lower()), default=0.0)
    year_days = len({e.day for e in entries if e.performed_at.year == now.year})
    return Overview(
        this_month_days=this_month,
        last_month_comparison=comparison,
        max_bench_press=bench,
        year_training_days=year_days,
        year_progress=f"{year_days}/365",
    )


def build_report(
    entries: Sequence[WorkoutEntry],
    *,
    now: datetime,
    monthly_target: int,
    period: VolumePeriod = VolumePeriod.MONTH,
    catalog: Mapping[str, Iterable[str]] | None = None,
    goals: Iterable[tuple[str, float]] = (),
) -> AnalyticsReport:
    return AnalyticsReport(
        overview=overview(entries, now),
        strength_progress=strength_progress(entries),
        volume=volume_summary(entries, now),
        volume_chart=volume_chart(entries, period, now),
        body_part_balance=body_part_balance(entries, catalog),
        body_part_frequency=body_part_frequency(entries, catalog),
        weekday_frequency=weekday_frequency(entries),
        days_goal=days_goal_progress(entries, monthly_target, now),
        weekly_training_days=weekly_training_days(entries, now),
        streak=training_streak(entries, now),
        goals=[goal_progress(entries, name, target) for name, target in goals],
    )
