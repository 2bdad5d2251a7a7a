from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from backend.app.models.base import EntityModel, RequiredText


class ProjectCategory(str, Enum):
    LAB = "lab"
    RESEARCH = "research"


class ProjectStatus(str, Enum):
    ONGOING = "ongoing"
    COMPLETED = "completed"
    UPCOMING = "upcoming"


class Project(EntityModel):
    title: RequiredText
    description: Optional[str] = None
    category: ProjectCategory
    image_url: Optional[str] = None
    image_file_id: Optional[str] = None
    highlights: list[str] = Field(default_factory=list)
    order: int = 0
    start_date: Optional[str] = None
    end_date: Optional[str] = None
    funding_agency: Optional[str] = None
    funding_amount: Optional[str] = None
    url: Optional[str] = None
    status: ProjectStatus = ProjectStatus.ONGOING
    tags: list[str] = Field(default_factory=list)
