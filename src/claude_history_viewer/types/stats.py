"""Dashboard aggregate types."""

from dataclasses import dataclass, field


@dataclass
class DailyStats:
    date: str
    input_tokens: int = 0
    output_tokens: int = 0
    session_count: int = 0
    message_count: int = 0


@dataclass
class HourlyActivity:
    hour: int         # 0-23
    day: int          # 0 = Monday
    count: int = 0


@dataclass
class ProjectStats:
    name: str
    path: str
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    session_count: int = 0

    @property
    def total_tokens(self) -> int:
        return self.total_input_tokens + self.total_output_tokens


@dataclass
class DashboardStats:
    total_input_tokens: int = 0
    total_output_tokens: int = 0
    total_sessions: int = 0
    total_messages: int = 0
    daily_stats: list[DailyStats] = field(default_factory=list)
    hourly_activity: list[HourlyActivity] = field(default_factory=list)
    project_stats: list[ProjectStats] = field(default_factory=list)
    estimated_cost: float = 0.0
    avg_session_minutes: float = 0.0
