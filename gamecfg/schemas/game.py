"""Game schemas"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from .base import CamelModel
from .setting import SettingResponse
from .tag import TagResponse


class GameCreate(CamelModel):
    """Schema for registering a game"""

    name: str = Field(..., min_length=1, max_length=255)
    icon_url: Optional[str] = None
    tags: List[str] = []

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Game name must not be empty")
        return value

    @field_validator("tags")
    @classmethod
    def normalise_tags(cls, value: List[str]) -> List[str]:
        seen = []
        for tag in value:
            tag = tag.strip()
            if tag and tag not in seen:
                seen.append(tag)
        return seen


class GameUpdate(GameCreate):
    """Schema for updating a game (tags are replaced, not merged)"""


class GameSummary(CamelModel):
    """Game without nested collections"""

    id: str
    name: str
    icon_url: Optional[str] = None
    usage_count: int = 0
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class GameResponse(GameSummary):
    """Game with its tags and configuration files"""

    tags: List[TagResponse] = []
    setting_files: List[SettingResponse] = []


class SettingDetail(SettingResponse):
    """Setting with its owning game"""

    game: GameSummary
