from models.appraisal_source import AppraisalSource
from models.idp import IDP, IDPStatus
from models.skill import Skill, SkillType, SKILL_TYPES
from models.skill_development_plan import SkillDevelopmentPlan, PlanProgress
from models.plan_info import PlanInfo, CourseResource, VideoResource, ReadingResource

__all__ = [
    "AppraisalSource",
    "IDP",
    "IDPStatus",
    "Skill",
    "SkillType",
    "SKILL_TYPES",
    "SkillDevelopmentPlan",
    "PlanProgress",
    "PlanInfo",
    "CourseResource",
    "VideoResource",
    "ReadingResource",
]
