"""
Development plan generation tool.

Turns a categorized skill list into one learning plan per skill (course,
video, article and a task list). The collaborator's answer is untrusted:
keys may not match the requested skill names and plans may be incomplete,
so every requested skill is matched, validated and, failing that, given a
deterministic default plan.
"""

import logging
from typing import Any, Dict, List, Mapping, Optional

from pydantic import ValidationError as PydanticValidationError

from models.plan_info import PlanInfo
from models.skill import SKILL_TYPES
from utils.exceptions import ExternalServiceError, MalformedResponseError
from utils.llm_service import LLMService
from utils.prompt_loader import PromptLoader

logger = logging.getLogger(__name__)

PLAN_RESOURCE_KEYS = {"udemy", "youtube", "reading", "tasks"}

PLAN_SCHEMA = {
    "technical": {
        "<skill name>": {
            "udemy": {"title": "string", "duration": "string", "link": "string"},
            "youtube": {"title": "string", "link": "string"},
            "reading": {"title": "string", "link": "string"},
            "tasks": ["string", "string", "string"],
        }
    },
    "functional": {"<skill name>": "same shape as above"},
    "behavioral": {"<skill name>": "same shape as above"},
}


def build_default_plan(skill_type: str, skill_name: str) -> Dict[str, Any]:
    """
    Deterministic plan for a skill the collaborator could not plan.

    Titles derive from the category, the first task from the first three
    words of the skill name.

    Example:
        >>> build_default_plan("technical", "Deep understanding on Data Analysis")["udemy"]
        {'title': 'Technical Skills Enhancement Course', 'duration': '8 hours', 'link': 'https://udemy.com'}
    """
    category = (skill_type or "").capitalize()
    focus = " ".join((skill_name or "").split()[:3])

    return {
        "udemy": {
            "title": f"{category} Skills Enhancement Course",
            "duration": "8 hours",
            "link": "https://udemy.com",
        },
        "youtube": {
            "title": f"Mastering {category} Skills - Complete Tutorial",
            "link": "https://youtube.com",
        },
        "reading": {
            "title": f"{category} Best Practices Guide",
            "link": "https://docs.example.com",
        },
        "tasks": [
            f"Complete practical exercise on {focus}",
            "Apply learnings in a real project scenario",
            "Share knowledge with team members",
            "Document key insights and improvements",
        ],
    }


def _first_word(name: str) -> str:
    words = name.lower().split()
    return words[0] if words else ""


def find_matching_key(candidates: Mapping[str, Any], skill_name: str) -> Optional[str]:
    """
    Find the response key that belongs to a requested skill name.

    Exact key first. Otherwise the first key (in insertion order) where the
    requested name's first word occurs in the key, or the key's first word
    occurs in the requested name, case-insensitively.
    """
    if skill_name in candidates:
        return skill_name

    name_lower = skill_name.lower()
    name_word = _first_word(skill_name)

    for key in candidates:
        if not isinstance(key, str):
            continue
        key_word = _first_word(key)
        if (name_word and name_word in key.lower()) or (key_word and key_word in name_lower):
            return key

    return None


def find_matching_plan(candidates: Any, skill_name: str) -> Optional[Dict[str, Any]]:
    """
    Matched and shape-validated plan for skill_name, or None.

    Completion flags and unknown keys are stripped; a plan that fails
    validation counts as unmatched.
    """
    if not isinstance(candidates, Mapping):
        return None

    key = find_matching_key(candidates, skill_name)
    if key is None:
        return None

    generated = candidates[key]
    if not isinstance(generated, Mapping):
        return None

    try:
        plan = PlanInfo.model_validate({k: v for k, v in generated.items() if k in PLAN_RESOURCE_KEYS})
    except PydanticValidationError as e:
        logger.warning(f"Generated plan for '{skill_name}' is invalid: {e.error_count()} error(s)")
        return None

    return plan.model_dump(include=PLAN_RESOURCE_KEYS)


class PlanGenerator:
    """
    Generates development plans for a batch of skills in one collaborator call.
    """

    def __init__(self, llm_service: Optional[LLMService] = None, prompt_loader: Optional[PromptLoader] = None):
        self.llm_service = llm_service or LLMService()
        self.prompt_loader = prompt_loader or PromptLoader()

    def generate_plans(self, skills: Mapping[str, List[str]]) -> Dict[str, Dict[str, Dict[str, Any]]]:
        """
        Generate one plan per requested skill.

        Args:
            skills: {"technical": [...], "functional": [...], "behavioral": [...]}

        Returns:
            {category: {requested skill name: plan_info}}, keyed by the
            requested names, without completion flags. Never raises for
            collaborator failures.
        """
        requested = {category: list(skills.get(category) or []) for category in SKILL_TYPES}

        response = self._request_plans(requested)

        plans: Dict[str, Dict[str, Dict[str, Any]]] = {}
        defaulted = 0
        for category, names in requested.items():
            generated = response.get(category) if response else None
            plans[category] = {}
            for name in names:
                plan = find_matching_plan(generated, name)
                if plan is None:
                    defaulted += 1
                    plan = build_default_plan(category, name)
                plans[category][name] = plan

        if defaulted:
            logger.warning(f"Using default plans for {defaulted} skill(s)")

        return plans

    def _request_plans(self, skills: Dict[str, List[str]]) -> Optional[Dict[str, Any]]:
        if not any(skills.values()):
            return None

        system_prompt, human_prompt = self.prompt_loader.load_pair(
            "plan_generation",
            technical=", ".join(skills["technical"]),
            functional=", ".join(skills["functional"]),
            behavioral=", ".join(skills["behavioral"]),
        )

        try:
            response = self.llm_service.generate_json(system_prompt, human_prompt, PLAN_SCHEMA)
        except (ExternalServiceError, MalformedResponseError) as e:
            logger.warning(f"Plan generation failed, falling back to default plans: {e}")
            return None

        if not isinstance(response, dict):
            logger.warning("Plan generation returned a non-object reply, falling back to default plans")
            return None

        return response
