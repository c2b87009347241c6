import logging

from fastapi import APIRouter, Depends, HTTPException

from api.auth import verify_api_key
from api.dependencies import get_idp_service
from api.models.planning_schemas import (
    ExtractSkillsRequest,
    ExtractSkillsResponse,
    GeneratePlansRequest,
    GeneratePlansResponse,
    PlanningRunRequest,
    PlanningRunResponse,
)
from services.idp_service import IDPService

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/planning",
    tags=["Planning"],
    dependencies=[Depends(verify_api_key)]
)


@router.post("/extract-skills", response_model=ExtractSkillsResponse)
def extract_skills(
    request: ExtractSkillsRequest,
    service: IDPService = Depends(get_idp_service)
):
    """
    Extract three skills per category from appraisal content.

    Generation failures return the fallback skill set, never an error.
    """
    try:
        return ExtractSkillsResponse(skills=service.extract_skills(request.appraisal_text))
    except Exception as e:
        logger.exception("Failed to extract skills")
        raise HTTPException(status_code=500, detail="Failed to extract skills")


@router.post("/generate-plans", response_model=GeneratePlansResponse)
def generate_plans(
    request: GeneratePlansRequest,
    service: IDPService = Depends(get_idp_service)
):
    """Generate one plan per skill without saving anything."""
    try:
        return GeneratePlansResponse(plans=service.generate_plans(request.skills.model_dump()))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to generate plans")
        raise HTTPException(status_code=500, detail="Failed to generate plans")


@router.post("/run", response_model=PlanningRunResponse)
def run_planning(
    request: PlanningRunRequest,
    service: IDPService = Depends(get_idp_service)
):
    """Extract skills and generate their plans in one run."""
    try:
        return PlanningRunResponse(**service.plan_from_appraisal_text(request.appraisal_text))
    except Exception as e:
        logger.exception("Failed to run planning")
        raise HTTPException(status_code=500, detail="Failed to run planning")
