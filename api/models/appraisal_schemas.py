from datetime import datetime
from typing import List

from pydantic import BaseModel, Field

from api.models.planning_schemas import CategorizedSkills


class AppraisalSourceCreateRequest(BaseModel):
    """Schema for importing an appraisal sheet"""
    employee_id: str = Field(..., min_length=1, description="Profile id of the appraised employee")
    manager_id: str = Field(..., min_length=1, description="Profile id of the importing manager")
    sheet_url: str = Field(..., min_length=1, description="Google Sheets share link")

    class Config:
        json_schema_extra = {
            "example": {
                "employee_id": "emp-001",
                "manager_id": "mgr-001",
                "sheet_url": "https://docs.google.com/spreadsheets/d/1AbCdEfGhIjKlMnOp/edit#gid=0",
            }
        }


class AppraisalSourceResponse(BaseModel):
    id: str
    employee_id: str
    manager_id: str
    sheet_url: str
    created_at: datetime


class AppraisalSourceListResponse(BaseModel):
    appraisal_sources: List[AppraisalSourceResponse]
    total: int


class AnalyzeAppraisalResponse(BaseModel):
    """Skills extracted from an appraisal sheet"""
    appraisal_source_id: str
    skills: CategorizedSkills


def source_to_response(source) -> AppraisalSourceResponse:
    return AppraisalSourceResponse.model_validate(source, from_attributes=True)
