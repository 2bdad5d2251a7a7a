"""
Profile of the site owner. Only one record ever exists.
"""

from __future__ import annotations

from typing import Optional

from pydantic import AliasChoices, Field

from backend.app.models.base import EntityModel, RequiredText, Year


class EducationEntry(EntityModel):
    degree: str = ""
    institution: str = ""
    year: Optional[Year] = None


class SocialLink(EntityModel):
    platform: str = ""
    url: str = ""


class Profile(EntityModel):
    name: RequiredText
    title: RequiredText
    email: Optional[str] = None
    phone: Optional[str] = None
    office: Optional[str] = None
    department: Optional[str] = None
    institution: Optional[str] = Field(
        default=None,
        validation_alias=AliasChoices("institution", "university"),
    )
    bio: Optional[str] = None
    education: list[EducationEntry] = Field(default_factory=list)
    research_interests: list[str] = Field(default_factory=list)
    social_links: list[SocialLink] = Field(default_factory=list)
    profile_image: Optional[str] = None
    taglines: list[str] = Field(default_factory=list)
