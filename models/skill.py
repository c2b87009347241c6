from datetime import datetime
from enum import Enum
import uuid

from sqlmodel import SQLModel, Field


class SkillType(str, Enum):
    """Skill categories, in display order"""
    TECHNICAL = "technical"
    FUNCTIONAL = "functional"
    BEHAVIORAL = "behavioral"


SKILL_TYPES = [t.value for t in SkillType]


class Skill(SQLModel, table=True):
    """
    A skill to develop within an IDP.

    Created in a batch per IDP cycle. Immutable afterwards; it may only be
    deleted while it has no development plan.
    """
    __tablename__ = "skills"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    idp_id: str = Field(foreign_key="idps.id", index=True)

    name: str  # complete descriptive sentence
    type: str = Field(index=True)  # technical, functional, behavioral

    created_at: datetime = Field(default_factory=datetime.utcnow)
