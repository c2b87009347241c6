import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from api.auth import verify_api_key
from api.dependencies import get_idp_service
from api.models.appraisal_schemas import (
    AnalyzeAppraisalResponse,
    AppraisalSourceCreateRequest,
    AppraisalSourceListResponse,
    AppraisalSourceResponse,
    source_to_response,
)
from services.idp_service import IDPService
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/appraisals",
    tags=["Appraisals"],
    dependencies=[Depends(verify_api_key)]
)


@router.post("", response_model=AppraisalSourceResponse, status_code=status.HTTP_201_CREATED)
def import_appraisal_source(
    request: AppraisalSourceCreateRequest,
    service: IDPService = Depends(get_idp_service)
):
    """
    Import an appraisal sheet for an employee.

    The sheet is only downloaded when it is analyzed.
    """
    try:
        source = service.import_appraisal_source(
            employee_id=request.employee_id,
            manager_id=request.manager_id,
            sheet_url=request.sheet_url,
        )
        return source_to_response(source)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception("Failed to import appraisal source")
        raise HTTPException(status_code=500, detail=f"Failed to import appraisal source: {str(e)}")


@router.get("", response_model=AppraisalSourceListResponse)
def list_appraisal_sources(
    employee_id: Optional[str] = Query(None),
    manager_id: Optional[str] = Query(None),
    service: IDPService = Depends(get_idp_service)
):
    """List appraisal sources, newest first."""
    sources = service.list_appraisal_sources(employee_id=employee_id, manager_id=manager_id)
    return AppraisalSourceListResponse(
        appraisal_sources=[source_to_response(s) for s in sources],
        total=len(sources),
    )


@router.post("/{source_id}/analyze", response_model=AnalyzeAppraisalResponse)
def analyze_appraisal_source(
    source_id: str,
    service: IDPService = Depends(get_idp_service)
):
    """
    Download the appraisal sheet and extract three skills per category.

    Unreachable sheets and generation failures still return the fallback skill set.
    """
    try:
        return AnalyzeAppraisalResponse(**service.analyze_appraisal_source(source_id))
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to analyze appraisal source {source_id}")
        raise HTTPException(status_code=500, detail=f"Failed to analyze appraisal source: {str(e)}")
