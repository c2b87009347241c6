"""
IDP planning graph construction.

Graph flow:
    START -> extract_skills -> generate_plans -> END

Both steps fall back to deterministic content when the text-generation
collaborator fails, so a run always ends with three skills per category
and a plan for each of them.
"""

from typing import Optional

from langgraph.graph import END, StateGraph

from agents.idp_planning.nodes import extract_skills_node, generate_plans_node
from agents.idp_planning.state import IDPPlanningState
from tools.plan_generator import PlanGenerator
from tools.skill_extractor import SkillExtractor


def create_idp_planning_graph(
    skill_extractor: Optional[SkillExtractor] = None,
    plan_generator: Optional[PlanGenerator] = None,
):
    """
    Build and compile the planning graph.

    Args:
        skill_extractor: Extractor used by the extract_skills node
        plan_generator: Generator used by the generate_plans node

    Returns:
        Compiled graph; invoke with {"appraisal_text": ...} or {"skills": ...}
    """
    skill_extractor = skill_extractor or SkillExtractor()
    plan_generator = plan_generator or PlanGenerator()

    workflow = StateGraph(IDPPlanningState)

    workflow.add_node("extract_skills", lambda state: extract_skills_node(state, skill_extractor))
    workflow.add_node("generate_plans", lambda state: generate_plans_node(state, plan_generator))

    workflow.set_entry_point("extract_skills")
    workflow.add_edge("extract_skills", "generate_plans")
    workflow.add_edge("generate_plans", END)

    return workflow.compile()
