"""
Dashboard aggregation.

Fetches stats and the session log concurrently and derives the headline
totals. Nothing is cached; every call refetches both lists.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field

logger = logging.getLogger(__name__)


@dataclass
class DashboardSummary:
    total_seconds: int = 0
    total_hours: float = 0.0
    subject_count: int = 0
    session_count: int = 0
    stats: list[dict] = field(default_factory=list)
    sessions: list[dict] = field(default_factory=list)

    def to_dict(self) -> dict:
        return asdict(self)


def summarize(stats: list[dict], sessions: list[dict]) -> DashboardSummary:
    total_seconds = sum(s["total_duration"] or 0 for s in stats)
    return DashboardSummary(
        total_seconds=total_seconds,
        total_hours=round(total_seconds / 3600, 1),
        subject_count=len(stats),
        session_count=len(sessions),
        stats=stats,
        sessions=sessions,
    )


def load_dashboard(client) -> DashboardSummary:
    """Fetch stats and sessions in parallel; wait for both before summarising."""
    with ThreadPoolExecutor(max_workers=2) as pool:
        stats_future = pool.submit(client.stats)
        sessions_future = pool.submit(client.list_sessions)
        try:
            stats = stats_future.result()
            sessions = sessions_future.result()
        except Exception as e:
            logger.error("Error fetching dashboard data: %s", e)
            return DashboardSummary()
    return summarize(stats, sessions)
