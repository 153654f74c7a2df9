"""Tag lookup and connect-or-create"""

from typing import Dict, List, Tuple

from sqlalchemy import func, select
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.ext.asyncio import AsyncSession

from ..models._common import generate_id
from ..models.tag import Tag, game_tags


class TagService:
    """Tags are keyed by name; rows are created on first use and never deleted"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_by_names(self, names: List[str]) -> Dict[str, Tag]:
        """Map of existing tag name -> Tag for the given names"""
        if not names:
            return {}
        result = await self.db.execute(select(Tag).where(Tag.name.in_(names)))
        return {tag.name: tag for tag in result.scalars().all()}

    async def connect_or_create(self, names: List[str]) -> List[Tag]:
        """
        Return one Tag per distinct name, creating the missing ones.

        Order follows the input. Inserts skip names that already exist, so a
        concurrent writer creating the same tag is not an error; the row is
        re-read either way.
        """
        names = list(dict.fromkeys(names))
        if not names:
            return []

        existing = await self.get_by_names(names)
        missing = [name for name in names if name not in existing]
        if missing:
            stmt = (
                sqlite_insert(Tag)
                .values([{"id": generate_id(), "name": name} for name in missing])
                .on_conflict_do_nothing(index_elements=["name"])
            )
            await self.db.execute(stmt)
            existing = await self.get_by_names(names)

        return [existing[name] for name in names]

    async def list_with_counts(self) -> List[Tuple[Tag, int]]:
        """All tags with the number of games attached, ordered by name"""
        query = (
            select(Tag, func.count(game_tags.c.game_id))
            .outerjoin(game_tags, game_tags.c.tag_id == Tag.id)
            .group_by(Tag.id)
            .order_by(Tag.name.asc())
        )
        result = await self.db.execute(query)
        return [(tag, count) for tag, count in result.all()]
