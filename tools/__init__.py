from tools.skill_extractor import SkillExtractor
from tools.plan_generator import PlanGenerator, build_default_plan, find_matching_plan

__all__ = ["SkillExtractor", "PlanGenerator", "build_default_plan", "find_matching_plan"]
