import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.auth import verify_api_key
from api.dependencies import get_idp_service
from api.models.plan_schemas import (
    MarkItemRequest,
    PlanCreateRequest,
    PlanListResponse,
    PlanResponse,
    PlanUpdateRequest,
    plan_to_response,
)
from services.idp_service import IDPService
from utils.exceptions import ConflictError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/plans",
    tags=["Plans"],
    dependencies=[Depends(verify_api_key)]
)


@router.get("", response_model=PlanListResponse)
def get_plans(
    skill_id: Optional[str] = Query(None),
    idp_id: Optional[str] = Query(None),
    service: IDPService = Depends(get_idp_service)
):
    """
    Plans for one skill or for every skill of an IDP.

    Skills without a plan get a default plan created on the spot.
    """
    if bool(skill_id) == bool(idp_id):
        raise HTTPException(status_code=400, detail="Provide exactly one of skill_id or idp_id")

    try:
        if skill_id:
            plans = [service.get_or_create_plan(skill_id)]
        else:
            plans = service.get_or_create_plans_for_idp(idp_id)
        return PlanListResponse(plans=[plan_to_response(p) for p in plans], total=len(plans))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception("Failed to load plans")
        raise HTTPException(status_code=500, detail="Failed to load plans")


@router.post("", response_model=PlanResponse, status_code=status.HTTP_201_CREATED)
def create_plan(
    request: PlanCreateRequest,
    service: IDPService = Depends(get_idp_service)
):
    """Create a plan for a skill; an existing plan is returned unchanged."""
    try:
        plan = service.create_plan(request.skill_id, request.plan_info, request.progress)
        return plan_to_response(plan)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to create plan")
        raise HTTPException(status_code=500, detail="Failed to save plan")


@router.put("/{plan_id}", response_model=PlanResponse)
def update_plan(
    plan_id: str,
    request: PlanUpdateRequest,
    service: IDPService = Depends(get_idp_service)
):
    """Partial update; omitted fields keep their stored values."""
    try:
        plan = service.update_plan(plan_id, plan_info=request.plan_info, progress=request.progress)
        return plan_to_response(plan)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to update plan {plan_id}")
        raise HTTPException(status_code=500, detail="Failed to save plan")


@router.post("/by-skill/{skill_id}/complete", response_model=PlanResponse)
def mark_item_complete(
    skill_id: str,
    request: MarkItemRequest,
    service: IDPService = Depends(get_idp_service)
):
    """
    Mark one resource (udemy, youtube, reading) or one task complete.

    Marking an already completed item changes nothing.
    """
    try:
        plan = service.mark_item_complete(skill_id, request.item_type, request.item_index)
        return plan_to_response(plan)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except ConflictError as e:
        raise HTTPException(status_code=409, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to mark item complete for skill {skill_id}")
        raise HTTPException(status_code=500, detail="Failed to save progress")
