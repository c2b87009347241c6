"""
Progress calculation for development plans.

Pure functions over plan_info dicts; nothing here touches the database.
Skill, category and IDP progress all go through compute_progress and
round_half_up so every view shows the same numbers.
"""

import math
from typing import Any, Dict, Iterable, List, Mapping, Optional, Set

from models.skill import SKILL_TYPES
from models.skill_development_plan import PlanProgress

# udemy, youtube, reading, tasks-as-a-whole
PROGRESS_UNITS = 4

RESOURCE_FLAGS = ("udemyRead", "youtubeRead", "readingRead")


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 always going up (round() is banker's)."""
    return int(math.floor(value + 0.5))


def completed_task_indices(plan_info: Mapping[str, Any]) -> Set[int]:
    """Distinct, in-range task indices marked complete."""
    total = len(plan_info.get("tasks") or [])
    indices = set()
    for index in plan_info.get("tasksRead") or []:
        # bool is an int subclass; JSON true must not count as task 1
        if isinstance(index, int) and not isinstance(index, bool) and 0 <= index < total:
            indices.add(index)
    return indices


def tasks_complete(plan_info: Mapping[str, Any]) -> bool:
    """
    All-or-nothing tasks bucket.

    Partial completion earns nothing, and a plan without tasks never earns
    the bucket.
    """
    total = len(plan_info.get("tasks") or [])
    return total > 0 and len(completed_task_indices(plan_info)) == total


def compute_progress(plan_info: Optional[Mapping[str, Any]]) -> int:
    """
    Map a plan's completion flags to a 0-100 percentage.

    Example:
        >>> compute_progress({
        ...     "udemyRead": True, "youtubeRead": True, "readingRead": False,
        ...     "tasks": ["t1", "t2"], "tasksRead": [0, 1],
        ... })
        75
    """
    if not plan_info:
        return 0

    completed = sum(1 for flag in RESOURCE_FLAGS if plan_info.get(flag) is True)
    if tasks_complete(plan_info):
        completed += 1

    return round_half_up(completed / PROGRESS_UNITS * 100)


def progress_status(percentage: int) -> str:
    """Cached plan state for a percentage: completed iff 100."""
    if percentage == 100:
        return PlanProgress.COMPLETED.value
    return PlanProgress.IN_PROGRESS.value


def average_progress(values: List[int]) -> int:
    """Mean of percentages with the shared rounding; 0 for no values."""
    if not values:
        return 0
    return round_half_up(sum(values) / len(values))


def compute_category_progress(
    skills: Iterable[Any],
    plan_infos_by_skill_id: Mapping[str, Mapping[str, Any]],
) -> int:
    """
    Mean progress of a category's skills.

    Args:
        skills: Skills of one category (anything with an ``id``)
        plan_infos_by_skill_id: plan_info dicts keyed by skill id; a skill
            without a plan counts as 0

    Returns:
        0-100, or 0 for an empty category
    """
    return average_progress([
        compute_progress(plan_infos_by_skill_id.get(skill.id))
        for skill in skills
    ])


def compute_idp_progress(
    skills: Iterable[Any],
    plan_infos_by_skill_id: Mapping[str, Mapping[str, Any]],
) -> Dict[str, Any]:
    """
    Bottom-up rollup for a whole IDP.

    Returns:
        {
            "overall": int,                       # mean over every skill
            "categories": {"technical": int, ...},
            "skills": {skill_id: int, ...}
        }
    """
    skills = list(skills)
    per_skill = {
        skill.id: compute_progress(plan_infos_by_skill_id.get(skill.id))
        for skill in skills
    }

    categories = {}
    for skill_type in SKILL_TYPES:
        category_skills = [s for s in skills if s.type == skill_type]
        categories[skill_type] = compute_category_progress(category_skills, plan_infos_by_skill_id)

    return {
        "overall": average_progress(list(per_skill.values())),
        "categories": categories,
        "skills": per_skill,
    }
