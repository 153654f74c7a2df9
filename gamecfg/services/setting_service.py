"""Setting (configuration file) service"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..exceptions import NotFoundError, ValidationError
from ..models._common import utcnow
from ..models.game import Game
from ..models.setting import Setting
from .log_service import log_service


class SettingService:
    """CRUD for configuration files owned by a game"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_setting(self, setting_id: str) -> Setting:
        """Get a setting with its owning game loaded"""
        result = await self.db.execute(
            select(Setting)
            .options(selectinload(Setting.game))
            .where(Setting.id == setting_id)
            .execution_options(populate_existing=True)
        )
        setting = result.scalar_one_or_none()
        if not setting:
            raise NotFoundError("Setting not found")
        return setting

    async def list_settings(self, game_id: Optional[str]) -> List[Setting]:
        """Settings of one game, most recently updated first"""
        if not game_id:
            raise ValidationError("gameId is required")

        result = await self.db.execute(
            select(Setting)
            .where(Setting.game_id == game_id)
            .order_by(Setting.updated_at.desc(), Setting.id.asc())
            .execution_options(populate_existing=True)
        )
        return list(result.scalars().all())

    async def create_setting(
        self, name: str, content: Optional[str], game_id: str
    ) -> Setting:
        """Add a configuration file to an existing game"""
        if not name or not game_id:
            raise ValidationError("Setting name and gameId are required")

        game = await self.db.get(Game, game_id)
        if not game:
            raise NotFoundError("Game not found")

        setting = Setting(name=name, content=content or "", game_id=game_id)
        self.db.add(setting)
        await self.db.commit()
        await self.db.refresh(setting)

        log_service.info(f"Created setting {setting.id} - {name} for game {game_id}")
        return setting

    async def update_setting(self, setting_id: str, name: str, content: str) -> Setting:
        """Overwrite name and content"""
        if not name:
            raise ValidationError("Setting name is required")

        setting = await self.db.get(Setting, setting_id)
        if not setting:
            raise NotFoundError("Setting not found")

        setting.name = name
        setting.content = content if content is not None else ""
        # onupdate only fires when a column changed; a re-save still counts
        setting.updated_at = utcnow()
        await self.db.commit()
        await self.db.refresh(setting)

        log_service.info(f"Updated setting {setting.id} - {name}")
        return setting

    async def delete_setting(self, setting_id: str) -> None:
        """Delete one configuration file"""
        setting = await self.db.get(Setting, setting_id)
        if not setting:
            raise NotFoundError("Setting not found")

        await self.db.delete(setting)
        await self.db.commit()

        log_service.info(f"Deleted setting {setting_id}")
