from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from api.models.planning_schemas import PLAN_INFO_EXAMPLE
from tools.progress_calculator import compute_progress


class PlanResponse(BaseModel):
    """Schema for a skill development plan"""
    id: str
    skill_id: str
    plan_info: Dict[str, Any]
    progress: str = Field(..., description="Cached state: in_progress or completed")
    progress_percentage: int = Field(..., ge=0, le=100, description="Computed completion (0-100)")
    version: int
    created_at: datetime
    updated_at: datetime

    class Config:
        json_schema_extra = {
            "example": {
                "id": "6f1c2d3e-0000-4000-8000-000000000001",
                "skill_id": "6f1c2d3e-0000-4000-8000-000000000002",
                "plan_info": {**PLAN_INFO_EXAMPLE, "udemyRead": True, "tasksRead": [0]},
                "progress": "in_progress",
                "progress_percentage": 25,
                "version": 3,
                "created_at": "2025-03-01T09:00:00",
                "updated_at": "2025-03-04T17:30:00",
            }
        }


class PlanListResponse(BaseModel):
    plans: List[PlanResponse]
    total: int


class PlanCreateRequest(BaseModel):
    """Schema for creating a plan explicitly"""
    skill_id: Optional[str] = Field(default=None, description="Skill to plan (required)")
    plan_info: Optional[Dict[str, Any]] = Field(default=None, description="Resources and tasks (required)")
    progress: str = Field(default="in_progress", description="in_progress or completed")

    class Config:
        json_schema_extra = {
            "example": {
                "skill_id": "6f1c2d3e-0000-4000-8000-000000000002",
                "plan_info": PLAN_INFO_EXAMPLE,
            }
        }


class PlanUpdateRequest(BaseModel):
    """Partial update: omitted fields are left unchanged"""
    plan_info: Optional[Dict[str, Any]] = None
    progress: Optional[str] = None


class MarkItemRequest(BaseModel):
    """Schema for marking one resource or task complete"""
    item_type: str = Field(..., description="udemy, youtube, reading or tasks")
    item_index: Optional[int] = Field(default=None, description="Task index (required for tasks)")

    class Config:
        json_schema_extra = {
            "example": {"item_type": "tasks", "item_index": 0}
        }


def plan_to_response(plan) -> PlanResponse:
    """Build the API view of a SkillDevelopmentPlan, with live progress."""
    return PlanResponse(
        id=plan.id,
        skill_id=plan.skill_id,
        plan_info=plan.plan_info,
        progress=plan.progress,
        progress_percentage=compute_progress(plan.plan_info),
        version=plan.version,
        created_at=plan.created_at,
        updated_at=plan.updated_at,
    )
