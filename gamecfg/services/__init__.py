"""Services layer"""

from .file_store import FileStore
from .game_service import GameService
from .log_service import LogService
from .setting_service import SettingService
from .tag_service import TagService
from .usage_tracker import UsageTracker

__all__ = [
    "FileStore",
    "GameService",
    "LogService",
    "SettingService",
    "TagService",
    "UsageTracker",
]
