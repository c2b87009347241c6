from datetime import datetime
from enum import Enum
from typing import Optional
import uuid

from sqlmodel import SQLModel, Field


class IDPStatus(str, Enum):
    """Lifecycle of an Individual Development Plan"""
    INITIAL = "initial"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class IDP(SQLModel, table=True):
    """
    Individual Development Plan: one review cycle's skills and plans.
    """
    __tablename__ = "idps"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    name: str  # e.g. "March 2025"
    appraisal_source_id: str = Field(foreign_key="appraisal_sources.id", index=True)

    status: str = Field(default=IDPStatus.INITIAL.value, index=True)  # initial, in_progress, completed

    created_by: Optional[str] = None
    updated_by: Optional[str] = None
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
