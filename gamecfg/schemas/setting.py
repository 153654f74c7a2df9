"""Setting schemas"""

from datetime import datetime

from pydantic import Field

from .base import CamelModel


class SettingCreate(CamelModel):
    """Schema for adding a configuration file to a game"""

    name: str = Field(..., min_length=1, max_length=255)
    content: str = ""
    game_id: str = Field(..., min_length=1)


class SettingUpdate(CamelModel):
    """Schema for editing a configuration file"""

    name: str = Field(..., min_length=1, max_length=255)
    content: str


class SettingResponse(CamelModel):
    """Setting response"""

    id: str
    name: str
    content: str
    game_id: str
    created_at: datetime
    updated_at: datetime
