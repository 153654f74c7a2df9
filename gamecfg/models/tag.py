"""Tag model"""

from sqlalchemy import Column, ForeignKey, String, Table
from sqlalchemy.orm import relationship

from ..database import Base
from ._common import generate_id

game_tags = Table(
    "game_tags",
    Base.metadata,
    Column(
        "game_id",
        String(32),
        ForeignKey("games.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        String(32),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)


class Tag(Base):
    """Globally unique label attachable to many games"""

    __tablename__ = "tags"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(100), unique=True, nullable=False, index=True)

    games = relationship("Game", secondary=game_tags, back_populates="tags")

    def __repr__(self):
        return f"<Tag {self.name}>"
