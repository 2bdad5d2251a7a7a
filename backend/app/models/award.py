from __future__ import annotations

from typing import Optional

from backend.app.models.base import EntityModel, RequiredText, Year


class Award(EntityModel):
    title: RequiredText
    year: Year
    organization: RequiredText
    description: Optional[str] = None
    image_url: Optional[str] = None
    link: Optional[str] = None
