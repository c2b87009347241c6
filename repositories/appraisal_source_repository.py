"""
Repository for AppraisalSource entities.
"""
from typing import List, Optional

from sqlmodel import Session, select

from models.appraisal_source import AppraisalSource
from repositories.base_repository import BaseRepository


class AppraisalSourceRepository(BaseRepository[AppraisalSource]):
    """Repository for imported appraisal sheets."""

    def __init__(self, db_session: Session):
        super().__init__(db_session, AppraisalSource)

    def list_sources(
        self,
        employee_id: Optional[str] = None,
        manager_id: Optional[str] = None,
    ) -> List[AppraisalSource]:
        """
        Appraisal sources, newest first, optionally filtered by employee and/or manager.
        """
        statement = select(AppraisalSource)
        if employee_id is not None:
            statement = statement.where(AppraisalSource.employee_id == employee_id)
        if manager_id is not None:
            statement = statement.where(AppraisalSource.manager_id == manager_id)
        statement = statement.order_by(AppraisalSource.created_at.desc())
        return list(self.db.exec(statement).all())
