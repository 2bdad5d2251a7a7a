"""
Student records. `publications` and `projects` hold identifiers of records in
other collections; a student never owns them.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from backend.app.models.base import EntityModel, RequiredText, Year


class StudentCategory(str, Enum):
    CURRENT = "current"
    ALUMNI = "alumni"
    OPPORTUNITY = "opportunity"


class Student(EntityModel):
    name: RequiredText
    category: StudentCategory
    email: Optional[str] = None
    photo_url: Optional[str] = None
    degree: Optional[str] = None
    research_area: Optional[str] = None
    start_year: Optional[Year] = None
    end_year: Optional[Year] = None
    linkedin: Optional[str] = None
    description: Optional[str] = None
    position: Optional[str] = None
    achievements: list[str] = Field(default_factory=list)
    publications: list[str] = Field(default_factory=list)
    projects: list[str] = Field(default_factory=list)
