from datetime import datetime
import uuid

from sqlmodel import SQLModel, Field


class AppraisalSource(SQLModel, table=True):
    """
    Externally authored performance-review data imported by a manager.

    The sheet itself lives outside the system (usually a Google Sheets share
    link); it is downloaded on demand when skills are extracted.
    """
    __tablename__ = "appraisal_sources"

    id: str = Field(default_factory=lambda: str(uuid.uuid4()), primary_key=True)

    # Identity store references (opaque profile ids)
    employee_id: str = Field(index=True)
    manager_id: str = Field(index=True)

    sheet_url: str

    created_at: datetime = Field(default_factory=datetime.utcnow)
