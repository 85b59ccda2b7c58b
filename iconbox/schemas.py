"""
Pydantic schemas for the icon manifest.
"""

from __future__ import annotations

from pydantic import BaseModel

MANIFEST_NAME = "Asonlino icon"
MANIFEST_DESCRIPTION = "By Asonlino"


class IconEntry(BaseModel):
    name: str
    url: str


class IconManifest(BaseModel):
    name: str = MANIFEST_NAME
    description: str = MANIFEST_DESCRIPTION
    icons: list[IconEntry]
