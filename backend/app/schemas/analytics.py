from app.schemas.base import CamelModel

class StrengthProgressRead(CamelModel):
    exercise: str
    current_max: float
    previous_max: float
    improvement: float
    improvement_percentage: float
    current_date: str
    previous_date: str

class VolumeSummaryRead(CamelModel):
    this_week: float
    last_week: float
    this_month: float
    last_month: float
    improvement: float

class VolumePointRead(CamelModel):
    date: str
    volume: float
    label: str

class BodyPartBalanceRead(CamelModel):
    name: str
    percentage: float
    level: int
    max_level: int

class ShareRead(CamelModel):
    name: str
    percentage: float

class DaysGoalProgressRead(CamelModel):
    monthly_target: int
    current_month_days: int
    achievement_rate: int

class GoalProgressRead(CamelModel):
    name: str
    target: float
    current: float
    progress: float

class OverviewRead(CamelModel):
    this_month_days: int
    last_month_comparison: int
    max_bench_press: float
    year_training_days: int
    year_progress: str

class AnalyticsRead(CamelModel):
    overview: OverviewRead
    strength_progress: list[StrengthProgressRead]
    volume: VolumeSummaryRead
    volume_chart: list[VolumePointRead]
    body_part_balance: list[BodyPartBalanceRead]
    body_part_frequency: list[ShareRead]
    weekday_frequency: list[ShareRead]
    days_goal: DaysGoalProgressRead
    weekly_training_days: int
    streak: int
    goals: list[GoalProgressRead]
