from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, Field

from api.models.plan_schemas import PlanResponse
from api.models.planning_schemas import CategorizedPlans, CategorizedSkills, SKILLS_EXAMPLE


class IDPCreateRequest(BaseModel):
    """Schema for creating an Individual Development Plan"""
    appraisal_source_id: str = Field(..., min_length=1)
    name: Optional[str] = Field(default=None, description="Defaults to the current month, e.g. 'March 2025'")
    created_by: Optional[str] = Field(default=None, description="Profile id of the creator")

    class Config:
        json_schema_extra = {
            "example": {
                "appraisal_source_id": "6f1c2d3e-0000-4000-8000-000000000003",
                "name": "March 2025",
                "created_by": "mgr-001",
            }
        }


class IDPResponse(BaseModel):
    id: str
    name: str
    appraisal_source_id: str
    status: str = Field(..., description="initial, in_progress or completed")
    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class IDPListResponse(BaseModel):
    idps: List[IDPResponse]
    total: int


class SkillResponse(BaseModel):
    id: str
    idp_id: str
    name: str
    type: str


class SaveSkillsRequest(BaseModel):
    """Skills to store, with optional previously generated plans"""
    skills: CategorizedSkills
    plans: Optional[CategorizedPlans] = Field(
        default=None, description="Plans from /planning/generate-plans; generated when omitted"
    )

    class Config:
        json_schema_extra = {"example": {"skills": SKILLS_EXAMPLE}}


class SaveSkillsResponse(BaseModel):
    idp: IDPResponse
    skills: List[SkillResponse]
    plans: List[PlanResponse]


class SkillProgressResponse(BaseModel):
    skill: SkillResponse
    plan: Optional[PlanResponse] = None
    progress: int


class CategoryProgressResponse(BaseModel):
    progress: int
    skills: List[SkillProgressResponse]


class IDPOverviewResponse(BaseModel):
    """IDP with skills grouped by category and progress rolled up"""
    idp: IDPResponse
    progress: int = Field(..., description="Mean progress over all skills (0-100)")
    categories: Dict[str, CategoryProgressResponse]


def idp_to_response(idp) -> IDPResponse:
    return IDPResponse.model_validate(idp, from_attributes=True)


def skill_to_response(skill) -> SkillResponse:
    return SkillResponse.model_validate(skill, from_attributes=True)
