"""
Repositories module - Data Access Layer.

Each repository wraps a SQLModel session and handles persistence for one
domain entity.

Usage:
    from repositories import SkillRepository, DevelopmentPlanRepository

    skill_repo = SkillRepository(db_session)
    plan_repo = DevelopmentPlanRepository(db_session)

    skills = skill_repo.get_by_idp(idp_id)
    plan = plan_repo.get_or_create(skills[0].id)
"""

from repositories.base_repository import BaseRepository
from repositories.appraisal_source_repository import AppraisalSourceRepository
from repositories.idp_repository import IDPRepository
from repositories.skill_repository import SkillRepository
from repositories.development_plan_repository import DevelopmentPlanRepository

__all__ = [
    "BaseRepository",
    "AppraisalSourceRepository",
    "IDPRepository",
    "SkillRepository",
    "DevelopmentPlanRepository",
]
