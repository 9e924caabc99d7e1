"""Filtering over the static diet plan and exercise catalogue."""

from typing import Any, Optional

from fitplan.core.catalog_data import DIET_PLANS, EXERCISES, get_diet_plan, get_exercise


def _matches(entry: dict[str, Any], field: str, wanted: Optional[str]) -> bool:
    if not wanted or wanted.lower() == "all":
        return True
    return str(entry.get(field, "")).lower() == wanted.lower()


def _search(entry: dict[str, Any], query: Optional[str]) -> bool:
    if not query:
        return True
    q = query.strip().lower()
    return q in entry["title"].lower() or q in entry["description"].lower()


def list_diet_plans(
    category: Optional[str] = None,
    difficulty: Optional[str] = None,
    search: Optional[str] = None,
) -> list[dict[str, Any]]:
    return [
        {"id": pid, **plan}
        for pid, plan in sorted(DIET_PLANS.items())
        if _matches(plan, "category", category)
        and _matches(plan, "difficulty", difficulty)
        and _search(plan, search)
    ]


def list_exercises(
    category: Optional[str] = None,
    intensity: Optional[str] = None,
    search: Optional[str] = None,
) -> list[dict[str, Any]]:
    return [
        {"id": eid, **exercise}
        for eid, exercise in sorted(EXERCISES.items())
        if _matches(exercise, "category", category)
        and _matches(exercise, "intensity", intensity)
        and _search(exercise, search)
    ]


__all__ = ["list_diet_plans", "list_exercises", "get_diet_plan", "get_exercise"]
