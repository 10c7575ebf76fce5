"""Dashboard roll-up of projects, tracked time, trends and ideas."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import numpy as np

from venture_backend.timing import minutes_to_hours, tracked_minutes

ACTIVE = "In Progress"
COMPLETED = "Completed"


@dataclass(frozen=True)
class DashboardSummary:
    total_projects: int = 0
    active_projects: int = 0
    completed_projects: int = 0
    total_minutes: int = 0
    total_hours: float = 0.0
    total_entries: int = 0
    top_trends: List[dict] = field(default_factory=list)
    top_ideas: List[dict] = field(default_factory=list)

    def to_dict(self):
        return {
            "projects": {
                "total": self.total_projects,
                "active": self.active_projects,
                "completed": self.completed_projects,
            },
            "timeTracking": {
                "totalHours": self.total_hours,
                "totalMinutes": self.total_minutes,
                "totalEntries": self.total_entries,
            },
            "marketTrends": self.top_trends,
            "businessIdeas": self.top_ideas,
        }


def top_by(records, key, n):
    """
    Copies of the ``n`` records with the largest ``key``; ties keep input order.
    """
    if not records or n <= 0:
        return []
    values = np.asarray([record[key] for record in records], dtype=float)
    order = np.argsort(-values, kind="stable")[:n]
    return [dict(records[i]) for i in order]


def aggregate(projects, time_entries, trends, ideas, top_n=3) -> DashboardSummary:
    projects = list(projects)
    time_entries = list(time_entries)
    statuses = [project.get("status") for project in projects]
    minutes = tracked_minutes(time_entries)

    return DashboardSummary(
        total_projects=len(projects),
        active_projects=statuses.count(ACTIVE),
        completed_projects=statuses.count(COMPLETED),
        total_minutes=minutes,
        total_hours=minutes_to_hours(minutes),
        total_entries=len(time_entries),
        top_trends=top_by(list(trends), "growth", top_n),
        top_ideas=top_by(list(ideas), "projectedROI", top_n),
    )
