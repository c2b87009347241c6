"""
Repository for IDP entities.
"""
from typing import List, Optional

from sqlmodel import Session, select

from models.idp import IDP
from repositories.base_repository import BaseRepository


class IDPRepository(BaseRepository[IDP]):
    """Repository for Individual Development Plans."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, IDP)

    def list_idps(self, appraisal_source_id: Optional[str] = None) -> List[IDP]:
        """IDPs, newest first, optionally for one appraisal source."""
        statement = select(IDP)
        if appraisal_source_id is not None:
            statement = statement.where(IDP.appraisal_source_id == appraisal_source_id)
        statement = statement.order_by(IDP.created_at.desc())
        return list(self.db.exec(statement).all())

    def update_status(self, idp: IDP, status: str, updated_by: Optional[str] = None) -> IDP:
        """Set lifecycle status; no write when it is unchanged."""
        if idp.status == status:
            return idp
        idp.status = status
        if updated_by is not None:
            idp.updated_by = updated_by
        return self.update(idp)
