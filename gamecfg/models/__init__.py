"""Database models"""

from .game import Game
from .setting import Setting
from .tag import Tag, game_tags

__all__ = ["Game", "Setting", "Tag", "game_tags"]
