"""
Generate plans node - categorized skills to one plan per skill.
"""

from typing import Any, Dict

from agents.idp_planning.state import IDPPlanningState
from tools.plan_generator import PlanGenerator


def generate_plans_node(state: IDPPlanningState, plan_generator: PlanGenerator) -> Dict[str, Any]:
    """
    Returns:
        Dictionary with updates:
        - plans: Dict[str, Dict[str, Dict[str, Any]]]
    """
    return {"plans": plan_generator.generate_plans(state.get("skills") or {})}
