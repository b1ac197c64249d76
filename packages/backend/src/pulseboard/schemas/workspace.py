"""Pydantic schemas for projects and tasks.

Learn: Pydantic v2 models validate request/response data. Separate
"Create" schemas (input) from "Read" schemas (output) for clean APIs.
"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator


# ─── Projects ───────────────────────────────────────────

class ProjectCreate(BaseModel):
    """New project. Older clients send the title as "name"; both are accepted."""

    title: Optional[str] = Field(None, max_length=200)
    name: Optional[str] = Field(None, max_length=200)
    description: Optional[str] = None

    @model_validator(mode="after")
    def require_title(self):
        title = (self.title or self.name or "").strip()
        if not title:
            raise ValueError("title is required")
        self.title = title
        return self


class ProjectRead(BaseModel):
    id: uuid.UUID
    title: str
    description: Optional[str] = None
    progress: int
    created_at: datetime

    model_config = {"from_attributes": True}


# ─── Tasks ──────────────────────────────────────────────

class TaskCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=200)

    @field_validator("title")
    @classmethod
    def require_title(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("title is required")
        return value


class TaskRead(BaseModel):
    id: uuid.UUID
    title: str
    completed: bool
    project_id: Optional[uuid.UUID] = None
    created_at: datetime

    model_config = {"from_attributes": True}


class ProjectDetail(ProjectRead):
    """Project with its tasks."""
    tasks: list[TaskRead] = []
