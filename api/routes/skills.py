import logging

from fastapi import APIRouter, Depends, HTTPException, Response, status

from api.auth import verify_api_key
from api.dependencies import get_idp_service
from services.idp_service import IDPService
from utils.exceptions import NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter(
    prefix="/skills",
    tags=["Skills"],
    dependencies=[Depends(verify_api_key)]
)


@router.delete("/{skill_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_skill(
    skill_id: str,
    service: IDPService = Depends(get_idp_service)
):
    """Delete a skill. Only skills without a development plan can be deleted."""
    try:
        service.delete_skill(skill_id)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    except Exception as e:
        logger.exception(f"Failed to delete skill {skill_id}")
        raise HTTPException(status_code=500, detail="Failed to delete skill")
    return Response(status_code=status.HTTP_204_NO_CONTENT)
