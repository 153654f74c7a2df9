"""Client-side API access and state"""

from .api_client import ApiError, GameCfgClient
from .controller import GameDetailController

__all__ = ["ApiError", "GameCfgClient", "GameDetailController"]
