"""Tag schemas"""

from .base import CamelModel


class TagResponse(CamelModel):
    """Tag attached to a game"""

    id: str
    name: str


class TagWithCount(TagResponse):
    """Tag with the number of games using it"""

    game_count: int = 0
