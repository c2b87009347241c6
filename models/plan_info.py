"""
Pydantic shape of SkillDevelopmentPlan.plan_info.

Used to validate plan content coming from untrusted sources (the text
generation collaborator and API callers) before it is persisted.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field, StrictInt, model_validator


class CourseResource(BaseModel):
    title: str = Field(..., min_length=1)
    duration: str = ""
    link: str = ""


class VideoResource(BaseModel):
    title: str = Field(..., min_length=1)
    link: str = ""


class ReadingResource(BaseModel):
    title: str = Field(..., min_length=1)
    link: str = ""


class PlanInfo(BaseModel):
    """Resources, tasks and completion flags of one skill's plan"""

    # Field names match the stored JSON keys
    model_config = ConfigDict(extra="allow")

    udemy: CourseResource
    youtube: VideoResource
    reading: ReadingResource
    tasks: List[str] = Field(..., min_length=1)

    udemyRead: Optional[bool] = None
    youtubeRead: Optional[bool] = None
    readingRead: Optional[bool] = None
    tasksRead: Optional[List[StrictInt]] = None

    @model_validator(mode="after")
    def check_tasks_read(self) -> "PlanInfo":
        """Each completed task index must point at a task and appear once."""
        if not self.tasksRead:
            return self
        if len(set(self.tasksRead)) != len(self.tasksRead):
            raise ValueError("tasksRead contains repeated indices")
        out_of_range = [i for i in self.tasksRead if not 0 <= i < len(self.tasks)]
        if out_of_range:
            raise ValueError(f"tasksRead indices out of range: {out_of_range}")
        return self

    def to_json(self) -> Dict[str, Any]:
        """Dump for the JSON column, omitting unset completion flags."""
        return self.model_dump(exclude_none=True)
