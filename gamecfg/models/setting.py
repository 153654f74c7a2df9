"""Setting (configuration file) model"""

from sqlalchemy import Column, DateTime, ForeignKey, String, Text
from sqlalchemy.orm import relationship

from ..database import Base
from ._common import generate_id, utcnow


class Setting(Base):
    """Named text blob owned by exactly one game"""

    __tablename__ = "settings"

    id = Column(String(32), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    content = Column(Text, nullable=False, default="")
    game_id = Column(
        String(32),
        ForeignKey("games.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(
        DateTime(timezone=True), default=utcnow, onupdate=utcnow, index=True
    )

    game = relationship("Game", back_populates="setting_files")

    def __repr__(self):
        return f"<Setting {self.id} - {self.name}>"
