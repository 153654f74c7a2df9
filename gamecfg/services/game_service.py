"""Game management service"""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from ..config import settings
from ..exceptions import NotFoundError, ValidationError
from ..models.game import Game
from ..models.tag import Tag
from .log_service import log_service
from .tag_service import TagService


class GameService:
    """Create, look up, update and delete games and their tag links"""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tags = TagService(db)

    def _select_games(self):
        return (
            select(Game)
            .options(selectinload(Game.tags), selectinload(Game.setting_files))
            .execution_options(populate_existing=True)
        )

    async def get_game_by_id(self, game_id: str) -> Game:
        """Strict lookup by id"""
        result = await self.db.execute(
            self._select_games().where(Game.id == game_id)
        )
        game = result.scalar_one_or_none()
        if not game:
            raise NotFoundError("Game not found")
        return game

    async def find_by_name(self, identifier: str) -> Optional[Game]:
        """
        Best-effort name match for a slug-like identifier.

        Hyphens count as spaces and the result is a substring match on the
        name. When several games match, the earliest created one wins.
        """
        needle = identifier.replace("-", " ").strip()
        if not needle:
            return None
        result = await self.db.execute(
            self._select_games()
            .where(Game.name.contains(needle, autoescape=True))
            .order_by(Game.created_at.asc(), Game.id.asc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def get_game(self, identifier: str) -> Game:
        """
        Look up a game by id, falling back to a name match when enabled
        """
        try:
            return await self.get_game_by_id(identifier)
        except NotFoundError:
            if not settings.GAME_NAME_FALLBACK:
                raise

        game = await self.find_by_name(identifier)
        if not game:
            raise NotFoundError("Game not found")
        return game

    async def list_games(
        self, search: Optional[str] = None, tag_name: Optional[str] = None
    ) -> List[Game]:
        """List games, most used first"""
        query = self._select_games()

        if search:
            query = query.where(Game.name.contains(search, autoescape=True))
        if tag_name:
            query = query.where(Game.tags.any(Tag.name == tag_name))

        query = query.order_by(Game.usage_count.desc(), Game.name.asc())

        result = await self.db.execute(query)
        return list(result.scalars().all())

    async def create_game(
        self, name: str, icon_url: Optional[str] = None, tags: List[str] = None
    ) -> Game:
        """Create a game and attach its tags (created when missing)"""
        if not name or not name.strip():
            raise ValidationError("Game name must not be empty")

        tag_rows = await self.tags.connect_or_create(tags or [])

        game = Game(name=name.strip(), icon_url=icon_url, usage_count=0)
        game.tags = tag_rows
        self.db.add(game)
        await self.db.commit()

        log_service.info(f"Created game {game.id} - {game.name}")
        return await self.get_game_by_id(game.id)

    async def update_game(
        self,
        game_id: str,
        name: str,
        icon_url: Optional[str] = None,
        tags: List[str] = None,
    ) -> Game:
        """
        Overwrite name and icon and replace the full tag set.

        All existing tag links are removed before the new set is attached;
        both steps run in one transaction.
        """
        if not name or not name.strip():
            raise ValidationError("Game name must not be empty")

        game = await self.get_game_by_id(game_id)

        game.tags = []
        await self.db.flush()

        game.name = name.strip()
        game.icon_url = icon_url
        game.tags = await self.tags.connect_or_create(tags or [])
        await self.db.commit()

        log_service.info(f"Updated game {game.id} - {game.name}")
        return await self.get_game_by_id(game.id)

    async def delete_game(self, game_id: str) -> None:
        """Delete a game; its settings go with it, its tags survive"""
        game = await self.get_game_by_id(game_id)

        await self.db.delete(game)
        await self.db.commit()

        log_service.info(f"Deleted game {game_id} - {game.name}")
