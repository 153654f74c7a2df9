"""Game model"""

from sqlalchemy import Column, DateTime, Integer, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ._common import generate_id, utcnow
from .tag import game_tags


class Game(Base):
    """A game owning a collection of configuration files"""

    __tablename__ = "games"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False, index=True)
    icon_url = Column(Text)  # "/uploads/<file>" or None
    usage_count = Column(Integer, default=0, nullable=False, index=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    tags = relationship(
        "Tag", secondary=game_tags, back_populates="games", order_by="Tag.name"
    )
    setting_files = relationship(
        "Setting",
        back_populates="game",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Setting.created_at",
    )

    def __repr__(self):
        return f"<Game {self.id} - {self.name}>"
