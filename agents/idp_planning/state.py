"""
State schema for the IDP planning graph.

Flows from raw appraisal text to categorized skills to one plan per skill.
"""

from typing import Any, Dict, List, Optional, TypedDict


class IDPPlanningState(TypedDict, total=False):
    # Input
    appraisal_text: str

    # Set by extract_skills (or supplied up front to skip extraction)
    skills: Optional[Dict[str, List[str]]]  # {"technical": [...], "functional": [...], "behavioral": [...]}

    # Set by generate_plans
    plans: Dict[str, Dict[str, Dict[str, Any]]]  # {category: {skill name: plan_info}}
