import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.auth import verify_api_key
from api.dependencies import get_idp_service
from api.models.idp_schemas import (
    CategoryProgressResponse,
    IDPCreateRequest,
    IDPListResponse,
    IDPOverviewResponse,
    IDPResponse,
    SaveSkillsRequest,
    SaveSkillsResponse,
    SkillProgressResponse,
    idp_to_response,
    skill_to_response,
)
from api.models.plan_schemas import plan_to_response
from services.idp_service import IDPService
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/idps",
    tags=["IDPs"],
    dependencies=[Depends(verify_api_key)]
)


@router.post("", response_model=IDPResponse, status_code=status.HTTP_201_CREATED)
def create_idp(
    request: IDPCreateRequest,
    service: IDPService = Depends(get_idp_service)
):
    """Create an IDP for an appraisal source, in status "initial"."""
    try:
        idp = service.create_idp(
            appraisal_source_id=request.appraisal_source_id,
            name=request.name,
            created_by=request.created_by,
        )
        return idp_to_response(idp)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to create IDP")
        raise HTTPException(status_code=500, detail=f"Failed to create IDP: {str(e)}")


@router.get("", response_model=IDPListResponse)
def list_idps(
    appraisal_source_id: Optional[str] = Query(None),
    service: IDPService = Depends(get_idp_service)
):
    idps = service.list_idps(appraisal_source_id=appraisal_source_id)
    return IDPListResponse(idps=[idp_to_response(i) for i in idps], total=len(idps))


@router.get("/{idp_id}", response_model=IDPOverviewResponse)
def get_idp_overview(
    idp_id: str,
    service: IDPService = Depends(get_idp_service)
):
    """
    IDP detail with skills grouped by category.

    Progress is recomputed from the plans on every request; skills without
    a plan count as 0%.
    """
    try:
        overview = service.get_idp_overview(idp_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to load IDP {idp_id}")
        raise HTTPException(status_code=500, detail="Failed to load IDP")

    categories = {
        category: CategoryProgressResponse(
            progress=data["progress"],
            skills=[
                SkillProgressResponse(
                    skill=skill_to_response(entry["skill"]),
                    plan=plan_to_response(entry["plan"]) if entry["plan"] is not None else None,
                    progress=entry["progress"],
                )
                for entry in data["skills"]
            ],
        )
        for category, data in overview["categories"].items()
    }
    return IDPOverviewResponse(
        idp=idp_to_response(overview["idp"]),
        progress=overview["progress"],
        categories=categories,
    )


@router.post("/{idp_id}/skills", response_model=SaveSkillsResponse, status_code=status.HTTP_201_CREATED)
def save_skills(
    idp_id: str,
    request: SaveSkillsRequest,
    service: IDPService = Depends(get_idp_service)
):
    """
    Save a skill batch and one development plan per skill.

    Supplied plans are matched to skills by name; anything unmatched (or
    everything, when no plans are supplied and generation fails) gets the
    default plan.
    """
    try:
        result = service.save_skills_and_plans(
            idp_id,
            skills=request.skills.model_dump(),
            plans=request.plans,
        )
        return SaveSkillsResponse(
            idp=idp_to_response(result["idp"]),
            skills=[skill_to_response(s) for s in result["skills"]],
            plans=[plan_to_response(p) for p in result["plans"]],
        )
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to save skills for IDP {idp_id}")
        raise HTTPException(status_code=500, detail="Failed to save skills and plans")
