"""Pydantic schemas for validation"""

from .game import GameCreate, GameResponse, GameSummary, GameUpdate, SettingDetail
from .setting import SettingCreate, SettingResponse, SettingUpdate
from .tag import TagResponse, TagWithCount
from .upload import ImportedConfig, UploadedImage

__all__ = [
    "GameCreate",
    "GameUpdate",
    "GameResponse",
    "GameSummary",
    "SettingCreate",
    "SettingUpdate",
    "SettingResponse",
    "SettingDetail",
    "TagResponse",
    "TagWithCount",
    "UploadedImage",
    "ImportedConfig",
]
