from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import Field

from backend.app.models.base import EntityModel, RequiredText, Year


class PublicationCategory(str, Enum):
    JOURNAL = "journal"
    CONFERENCE = "conference"
    PATENT = "patent"


class Publication(EntityModel):
    title: RequiredText
    authors: RequiredText
    category: PublicationCategory
    venue: RequiredText
    year: Year
    doi: Optional[str] = None
    link: Optional[str] = None
    citation: Optional[str] = None
    abstract: Optional[str] = None
    tags: list[str] = Field(default_factory=list)
    pdf_file_id: Optional[str] = None
    featured: bool = False
