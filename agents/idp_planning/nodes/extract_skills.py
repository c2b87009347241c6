"""
Extract skills node - appraisal text to categorized skills.
"""

import logging
from typing import Any, Dict

from agents.idp_planning.state import IDPPlanningState
from tools.skill_extractor import SkillExtractor

logger = logging.getLogger(__name__)


def extract_skills_node(state: IDPPlanningState, skill_extractor: SkillExtractor) -> Dict[str, Any]:
    """
    Run the skill extractor over the appraisal text.

    Skipped when the state already carries skills.

    Returns:
        Dictionary with updates:
        - skills: Dict[str, List[str]]
    """
    if state.get("skills"):
        logger.info("Skills supplied, skipping extraction")
        return {"skills": state["skills"]}

    skills = skill_extractor.extract_skills(state.get("appraisal_text", ""))
    return {"skills": skills}
