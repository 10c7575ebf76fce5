import copy

from venture_backend.dashboard import aggregate, top_by
from venture_backend.ideas import IDEA_CATALOG
from venture_backend.trends import TREND_CATALOG

PROJECTS = [
    {"id": "1", "status": "In Progress"},
    {"id": "2", "status": "Completed"},
    {"id": "3", "status": "Planning"},
    {"id": "4", "status": "In Progress"},
    {"id": "5", "status": "in progress"},
]

ENTRIES = [
    {"id": "a", "status": "Completed", "durationMinutes": 45},
    {"id": "b", "status": "Completed", "durationMinutes": 100},
    {"id": "c", "status": "Running", "durationMinutes": 0},
]


def test_empty_inputs_give_zeroed_summary():
    summary = aggregate([], [], [], [])
    assert summary.to_dict() == {
        "projects": {"total": 0, "active": 0, "completed": 0},
        "timeTracking": {"totalHours": 0.0, "totalMinutes": 0, "totalEntries": 0},
        "marketTrends": [],
        "businessIdeas": [],
    }


def test_project_counts_use_exact_status():
    summary = aggregate(PROJECTS, [], [], [])
    assert (summary.total_projects, summary.active_projects, summary.completed_projects) == (5, 2, 1)


def test_time_totals():
    summary = aggregate([], ENTRIES, [], [])
    assert summary.total_minutes == 145
    assert summary.total_hours == 2.42
    assert summary.total_entries == 3


def test_top_trends_and_ideas_from_catalogs():
    summary = aggregate([], [], TREND_CATALOG, IDEA_CATALOG)
    assert [t["id"] for t in summary.top_trends] == [8, 1, 4]
    assert [i["id"] for i in summary.top_ideas] == [7, 4, 3]


def test_ties_keep_input_order():
    trends = [
        {"name": "a", "growth": 10},
        {"name": "b", "growth": 20},
        {"name": "c", "growth": 20},
        {"name": "d", "growth": 20},
    ]
    assert [t["name"] for t in top_by(trends, "growth", 2)] == ["b", "c"]


def test_inputs_are_not_mutated():
    trends = [dict(t) for t in TREND_CATALOG]
    ideas = [dict(i) for i in IDEA_CATALOG]
    before = copy.deepcopy((trends, ideas))
    summary = aggregate(PROJECTS, ENTRIES, trends, ideas)
    assert (trends, ideas) == before
    summary.top_trends[0]["growth"] = -1
    assert trends == before[0]


def test_aggregate_is_deterministic():
    first = aggregate(PROJECTS, ENTRIES, TREND_CATALOG, IDEA_CATALOG)
    second = aggregate(PROJECTS, ENTRIES, TREND_CATALOG, IDEA_CATALOG)
    assert first == second


def test_top_n_is_configurable():
    summary = aggregate([], [], TREND_CATALOG, IDEA_CATALOG, top_n=5)
    assert len(summary.top_trends) == 5
    assert aggregate([], [], TREND_CATALOG, IDEA_CATALOG, top_n=0).top_ideas == []
