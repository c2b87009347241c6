"""
Skill extraction tool.

Derives a categorized skill list (technical, functional, behavioral) from
raw appraisal sheet content. Always returns exactly three skills per
category: when the collaborator fails or answers in the wrong shape the
fixed fallback set is used instead.
"""

import copy
import logging
from typing import Any, Dict, List, Optional

from models.skill import SKILL_TYPES
from utils.exceptions import ExternalServiceError, MalformedResponseError
from utils.llm_service import LLMService
from utils.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

SKILLS_PER_CATEGORY = 3

FALLBACK_SKILLS: Dict[str, List[str]] = {
    "technical": [
        "Deep understanding on Data Analysis",
        "Basic Programming in Python programming",
        "Use machine learning for image recognition",
    ],
    "functional": [
        "Lead cross-functional teams with effective Project Management",
        "Develop comprehensive Strategic Planning for long-term goals",
        "Build strong relationships through Stakeholder Management",
    ],
    "behavioral": [
        "Inspire and motivate teams through effective Leadership",
        "Communicate clearly and persuasively across all audiences",
        "Foster collaborative environment for Team Collaboration",
    ],
}

SKILLS_SCHEMA = {
    "technical": ["string", "string", "string"],
    "functional": ["string", "string", "string"],
    "behavioral": ["string", "string", "string"],
}


def fallback_skills() -> Dict[str, List[str]]:
    """Fresh copy of the fallback set, safe for callers to mutate."""
    return copy.deepcopy(FALLBACK_SKILLS)


def validate_skills(data: Any) -> Dict[str, List[str]]:
    """
    Check a collaborator reply against {category: [3 non-empty strings]}.

    Returns:
        The skills with surrounding whitespace stripped

    Raises:
        MalformedResponseError: on any deviation from the expected shape
    """
    if not isinstance(data, dict):
        raise MalformedResponseError(f"Expected a JSON object, got {type(data).__name__}")

    skills = {}
    for category in SKILL_TYPES:
        names = data.get(category)
        if not isinstance(names, list) or len(names) != SKILLS_PER_CATEGORY:
            raise MalformedResponseError(f"'{category}' must be a list of {SKILLS_PER_CATEGORY} skills")
        if not all(isinstance(name, str) and name.strip() for name in names):
            raise MalformedResponseError(f"'{category}' contains an empty or non-text skill")
        skills[category] = [name.strip() for name in names]

    return skills


class SkillExtractor:
    """
    Extracts development skills from appraisal data.
    """

    def __init__(self, llm_service: Optional[LLMService] = None, prompt_loader: Optional[PromptLoader] = None):
        self.llm_service = llm_service or LLMService()
        self.prompt_loader = prompt_loader or PromptLoader()

    def extract_skills(self, appraisal_text: str) -> Dict[str, List[str]]:
        """
        Extract three skills per category from appraisal content.

        Args:
            appraisal_text: CSV/free text of the appraisal sheet; may be empty
                or the "could not be retrieved" placeholder

        Returns:
            {"technical": [3], "functional": [3], "behavioral": [3]}.
            Never raises for collaborator failures.
        """
        system_prompt, human_prompt = self.prompt_loader.load_pair(
            "skill_extraction",
            appraisal_data=appraisal_text or "",
        )

        try:
            response = self.llm_service.generate_json(system_prompt, human_prompt, SKILLS_SCHEMA)
            skills = validate_skills(response)
        except (ExternalServiceError, MalformedResponseError) as e:
            logger.warning(f"Skill extraction failed, using fallback skills: {e}")
            return fallback_skills()

        logger.info(f"Extracted {sum(len(v) for v in skills.values())} skills from appraisal data")
        return skills
