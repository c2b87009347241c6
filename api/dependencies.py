from fastapi import Depends
from sqlmodel import Session

from services.idp_service import IDPService
from utils.database import get_db


def get_idp_service(db: Session = Depends(get_db)) -> IDPService:
    """
    Per-request IDPService bound to the request's database session.

    Usage:
        @router.get("/example")
        def example(service: IDPService = Depends(get_idp_service)):
            ...
    """
    return IDPService(db)
