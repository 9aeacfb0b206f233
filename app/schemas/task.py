from datetime import datetime, UTC
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, field_validator

Label = Literal["work", "personal", "priority", "shopping", "home"]


def _strip_title(v):
    if v is None or not v.strip():
        raise ValueError("title cannot be empty")
    return v.strip()


class TaskCreate(BaseModel):
    title: str
    description: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _strip_title(v)


class TaskUpdate(BaseModel):
    """Fields the owner may change directly. Unset fields are left alone."""
    title: Optional[str] = None
    description: Optional[str] = None
    due_date: Optional[datetime] = None
    completed: Optional[bool] = None
    image_url: Optional[str] = None

    @field_validator("title")
    @classmethod
    def title_not_empty(cls, v):
        return _strip_title(v)

    @field_validator("completed")
    @classmethod
    def completed_not_null(cls, v):
        if v is None:
            raise ValueError("completed cannot be null")
        return v


class TaskOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    task_id: str
    user_id: str
    title: str
    description: Optional[str] = None
    label: Optional[Label] = None
    due_date: Optional[datetime] = None
    completed: bool = False
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("due_date", "created_at", "updated_at")
    @classmethod
    def as_utc(cls, v):
        # timestamps are stored in UTC; SQLite hands them back without tzinfo
        if v is not None and v.tzinfo is None:
            return v.replace(tzinfo=UTC)
        return v


class TaskPage(BaseModel):
    items: List[TaskOut]
    page: int
    limit: int
    total: int
    pages: int
