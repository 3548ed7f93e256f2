"""Dashboard statistics over every transcript in the projects root.

Each session is folded into its own SessionActivity; activities are then
merged into project and global totals. No state outlives a call.
"""

import logging
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from claude_history_viewer.types import (
    DailyStats,
    DashboardStats,
    HourlyActivity,
    ProjectStats,
)
from claude_history_viewer.types.messages import DISPLAYABLE_TYPES
from claude_history_viewer.services.jsonl_parser import extract_usage, iter_records, parse_timestamp
from claude_history_viewer.services.session_manager import list_jsonl_files, list_project_dirs
from claude_history_viewer.utils.path_codec import decode_project_name
from claude_history_viewer.utils.token_estimator import (
    INPUT_COST_PER_MILLION,
    OUTPUT_COST_PER_MILLION,
    calculate_cost,
)

logger = logging.getLogger(__name__)


@dataclass
class SessionActivity:
    """Everything one transcript contributes to the dashboard."""
    message_count: int = 0
    input_tokens: int = 0
    output_tokens: int = 0
    daily: dict[str, DailyStats] = field(default_factory=dict)
    hourly: Counter = field(default_factory=Counter)  # (day, hour) -> count
    first_ts: datetime | None = None
    last_ts: datetime | None = None

    @property
    def duration_seconds(self) -> float:
        """Span between earliest and latest timestamp, 0 if not positive."""
        if self.first_ts is None or self.last_ts is None:
            return 0.0
        return max(0.0, (self.last_ts - self.first_ts).total_seconds())

    def _day(self, date: str) -> DailyStats:
        if date not in self.daily:
            self.daily[date] = DailyStats(date=date)
        return self.daily[date]

    def add_record(self, raw: dict):
        timestamp = raw.get("timestamp")
        date = _date_key(timestamp)

        msg_type = raw.get("type")
        if isinstance(msg_type, str) and msg_type in DISPLAYABLE_TYPES:
            self.message_count += 1
            if date:
                self._day(date).message_count += 1
            dt = parse_timestamp(timestamp)
            if dt is not None:
                self.hourly[(dt.weekday(), dt.hour)] += 1
                if self.first_ts is None or dt < self.first_ts:
                    self.first_ts = dt
                if self.last_ts is None or dt > self.last_ts:
                    self.last_ts = dt

        usage = extract_usage(raw)
        if usage is not None:
            self.input_tokens += usage.input_tokens
            self.output_tokens += usage.output_tokens
            if date:
                day = self._day(date)
                day.input_tokens += usage.input_tokens
                day.output_tokens += usage.output_tokens


def scan_session_activity(file_path: str | Path) -> SessionActivity:
    """Fold one transcript into a SessionActivity. Unreadable files are empty."""
    activity = SessionActivity()
    try:
        for raw in iter_records(file_path):
            activity.add_record(raw)
    except OSError:
        logger.debug("Failed to read session %s", file_path, exc_info=True)
        return SessionActivity()
    return activity


class _DashboardFold:
    """Local accumulator merging session activities into dashboard totals."""

    def __init__(self):
        self.total_input_tokens = 0
        self.total_output_tokens = 0
        self.total_sessions = 0
        self.total_messages = 0
        self.duration_seconds = 0.0
        self.sessions_with_duration = 0
        self.daily: dict[str, DailyStats] = {}
        self.hourly: Counter = Counter()
        self.projects: list[ProjectStats] = []

    def add_session(self, activity: SessionActivity, project: ProjectStats):
        self.total_sessions += 1
        self.total_messages += activity.message_count
        self.total_input_tokens += activity.input_tokens
        self.total_output_tokens += activity.output_tokens
        project.session_count += 1
        project.total_input_tokens += activity.input_tokens
        project.total_output_tokens += activity.output_tokens

        for date, day in activity.daily.items():
            merged = self.daily.setdefault(date, DailyStats(date=date))
            merged.input_tokens += day.input_tokens
            merged.output_tokens += day.output_tokens
            merged.message_count += day.message_count
            merged.session_count += 1

        self.hourly.update(activity.hourly)

        duration = activity.duration_seconds
        if duration > 0:
            self.duration_seconds += duration
            self.sessions_with_duration += 1

    def result(self, input_cost_per_million: float, output_cost_per_million: float) -> DashboardStats:
        daily_stats = sorted(self.daily.values(), key=lambda d: d.date)
        hourly_activity = [
            HourlyActivity(hour=hour, day=day, count=count)
            for (day, hour), count in sorted(self.hourly.items())
            if count > 0
        ]
        project_stats = sorted(self.projects, key=lambda p: p.total_tokens, reverse=True)

        avg_session_minutes = 0.0
        if self.sessions_with_duration > 0:
            avg_session_minutes = (self.duration_seconds / self.sessions_with_duration) / 60

        return DashboardStats(
            total_input_tokens=self.total_input_tokens,
            total_output_tokens=self.total_output_tokens,
            total_sessions=self.total_sessions,
            total_messages=self.total_messages,
            daily_stats=daily_stats,
            hourly_activity=hourly_activity,
            project_stats=project_stats,
            estimated_cost=calculate_cost(
                self.total_input_tokens,
                self.total_output_tokens,
                input_cost_per_million,
                output_cost_per_million,
            ),
            avg_session_minutes=avg_session_minutes,
        )


def build_dashboard_stats(
    projects_root: Path | None,
    input_cost_per_million: float = INPUT_COST_PER_MILLION,
    output_cost_per_million: float = OUTPUT_COST_PER_MILLION,
) -> DashboardStats:
    """Aggregate messages, tokens and activity across every project.

    A missing projects root yields zeroed stats.
    """
    fold = _DashboardFold()
    if projects_root is None:
        return fold.result(input_cost_per_million, output_cost_per_million)

    for project_dir in list_project_dirs(projects_root):
        session_files = list_jsonl_files(project_dir)
        if not session_files:
            continue

        project = ProjectStats(name=decode_project_name(project_dir.name), path=str(project_dir))
        for jsonl_file in session_files:
            fold.add_session(scan_session_activity(jsonl_file), project)
        fold.projects.append(project)

    return fold.result(input_cost_per_million, output_cost_per_million)


def _date_key(timestamp) -> str:
    """Calendar date of a timestamp string: the part before the first "T"."""
    if not isinstance(timestamp, str):
        return ""
    return timestamp.split("T", 1)[0]
