from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from backend.app.models.base import EntityModel, RequiredText, Year


class CourseLevel(str, Enum):
    UNDERGRADUATE = "Undergraduate"
    GRADUATE = "Graduate"


class Semester(str, Enum):
    FALL = "Fall"
    SPRING = "Spring"
    SUMMER = "Summer"


class Course(EntityModel):
    code: RequiredText
    title: RequiredText
    description: Optional[str] = None
    level: CourseLevel
    semester: Semester
    year: Optional[Year] = None
    credits: int = Field(default=3, ge=0)
    syllabus: Optional[str] = None
    image_url: Optional[str] = None
    highlights: list[str] = Field(default_factory=list)
    order: int = 0
