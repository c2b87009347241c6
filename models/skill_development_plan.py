from datetime import datetime
from enum import Enum
from typing import Any, Dict
import uuid

from sqlmodel import SQLModel, Field, Column
from sqlalchemy import JSON


class PlanProgress(str, Enum):
    """Cached completion state of a development plan"""
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class SkillDevelopmentPlan(SQLModel, table=True):
    """
    Learning plan for exactly one skill.

    plan_info structure (JSON field):
        {
            "udemy": {"title": str, "duration": str, "link": str},
            "youtube": {"title": str, "link": str},
            "reading": {"title": str, "link": str},
            "tasks": [str, ...],
            "udemyRead": bool,      # optional completion flags
            "youtubeRead": bool,
            "readingRead": bool,
            "tasksRead": [int, ...]
        }

    progress is a cache of the computed percentage: "completed" iff 100%.
    version is bumped on every write and guards read-modify-write updates.
    """
    __tablename__ = "skill_development_plan"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)
    # One plan per skill, enforced by the database
    skill_id: str = Field(foreign_key="skills.id", unique=True, index=True)

    plan_info: Dict[str, Any] = Field(default_factory=dict, sa_column=Column(JSON, nullable=False))
    progress: str = Field(default=PlanProgress.IN_PROGRESS.value)

    version: int = Field(default=1)

    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
