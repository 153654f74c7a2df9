"""Service layer tests for games, settings and tags.

Tests cover:
- Game creation, lookup (id and name fallback), update, delete
- Tag connect-or-create and full replacement
- Setting CRUD and ordering
- Usage counter increments
"""

import pytest
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from gamecfg.config import settings
from gamecfg.database import AsyncSessionLocal
from gamecfg.exceptions import NotFoundError, ValidationError
from gamecfg.models import Setting, Tag
from gamecfg.services.game_service import GameService
from gamecfg.services.setting_service import SettingService
from gamecfg.services.tag_service import TagService
from gamecfg.services.usage_tracker import UsageTracker


async def count_tags(db: AsyncSession) -> int:
    result = await db.execute(select(func.count()).select_from(Tag))
    return result.scalar()


class TestCreateGame:
    """create_game"""

    async def test_new_game_defaults(self, db: AsyncSession):
        """A new game has an id, zero usage and no settings."""
        game = await GameService(db).create_game("Minecraft")

        assert game.id
        assert game.usage_count == 0
        assert game.setting_files == []
        assert game.tags == []

    async def test_ids_are_unique(self, db: AsyncSession):
        service = GameService(db)
        first = await service.create_game("Portal")
        second = await service.create_game("Portal")

        assert first.id != second.id

    @pytest.mark.parametrize("name", ["", "   "])
    async def test_empty_name_rejected(self, db: AsyncSession, name: str):
        with pytest.raises(ValidationError):
            await GameService(db).create_game(name)

    async def test_tags_attached(self, db: AsyncSession):
        game = await GameService(db).create_game("Dota 2", tags=["moba", "online"])

        assert sorted(t.name for t in game.tags) == ["moba", "online"]

    async def test_tag_reused_by_name(self, db: AsyncSession):
        """The same tag name always resolves to the same row."""
        service = GameService(db)
        first = await service.create_game("Quake", tags=["fps"])
        second = await service.create_game("Doom", tags=["fps", "classic"])

        fps_first = next(t for t in first.tags if t.name == "fps")
        fps_second = next(t for t in second.tags if t.name == "fps")
        assert fps_first.id == fps_second.id
        assert await count_tags(db) == 2

    async def test_duplicate_names_in_one_call(self, db: AsyncSession):
        game = await GameService(db).create_game("Rust", tags=["survival", "survival"])

        assert [t.name for t in game.tags] == ["survival"]


class TestGetGame:
    """get_game / get_game_by_id"""

    async def test_by_id(self, db: AsyncSession):
        service = GameService(db)
        created = await service.create_game("Terraria")

        found = await service.get_game(created.id)

        assert found.id == created.id

    async def test_missing(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await GameService(db).get_game("no-such-game")

    async def test_name_fallback_with_hyphens(self, db: AsyncSession):
        """counter-strike matches "Counter Strike 2"."""
        service = GameService(db)
        created = await service.create_game("Counter Strike 2")

        found = await service.get_game("counter-strike")

        assert found.id == created.id

    async def test_name_fallback_prefers_oldest(self, db: AsyncSession):
        """Several matches resolve to the earliest created game."""
        service = GameService(db)
        older = await service.create_game("Half Life")
        await service.create_game("Half Life 2")

        found = await service.get_game("half-life")

        assert found.id == older.id

    async def test_name_fallback_disabled(self, db: AsyncSession, monkeypatch):
        monkeypatch.setattr(settings, "GAME_NAME_FALLBACK", False)
        service = GameService(db)
        await service.create_game("Stardew Valley")

        with pytest.raises(NotFoundError):
            await service.get_game("stardew")

    async def test_strict_lookup_ignores_names(self, db: AsyncSession):
        service = GameService(db)
        await service.create_game("Factorio")

        with pytest.raises(NotFoundError):
            await service.get_game_by_id("factorio")


class TestUpdateGame:
    """update_game"""

    async def test_tags_replaced_not_merged(self, db: AsyncSession):
        service = GameService(db)
        game = await service.create_game("Skyrim", tags=["rpg", "open-world"])

        updated = await service.update_game(game.id, "Skyrim SE", tags=["rpg", "mods"])

        assert updated.name == "Skyrim SE"
        assert sorted(t.name for t in updated.tags) == ["mods", "rpg"]

    async def test_empty_tags_detach_all(self, db: AsyncSession):
        service = GameService(db)
        game = await service.create_game("Witcher 3", tags=["rpg"])

        updated = await service.update_game(game.id, "Witcher 3", tags=[])

        assert updated.tags == []
        # Tag rows are never deleted
        assert await count_tags(db) == 1

    async def test_icon_overwritten(self, db: AsyncSession):
        service = GameService(db)
        game = await service.create_game("Celeste", icon_url="/uploads/a.png")

        updated = await service.update_game(game.id, "Celeste", icon_url=None)

        assert updated.icon_url is None

    async def test_missing_game(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await GameService(db).update_game("missing", "Name")


class TestDeleteGame:
    """delete_game"""

    async def test_cascades_settings(self, db: AsyncSession):
        """Owned settings disappear with the game."""
        games = GameService(db)
        settings_service = SettingService(db)
        game = await games.create_game("Valheim", tags=["coop"])
        first = await settings_service.create_setting("graphics", "hi", game.id)
        second = await settings_service.create_setting("controls", "wasd", game.id)

        await games.delete_game(game.id)

        assert await settings_service.list_settings(game.id) == []
        for setting_id in (first.id, second.id):
            with pytest.raises(NotFoundError):
                await settings_service.get_setting(setting_id)

    async def test_tags_survive(self, db: AsyncSession):
        games = GameService(db)
        game = await games.create_game("Hades", tags=["roguelike"])

        await games.delete_game(game.id)

        rows = await TagService(db).list_with_counts()
        assert [(tag.name, count) for tag, count in rows] == [("roguelike", 0)]

    async def test_missing_game(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await GameService(db).delete_game("missing")


class TestListGames:
    """list_games"""

    async def test_ordered_by_usage(self, db: AsyncSession):
        service = GameService(db)
        quiet = await service.create_game("Quiet Game")
        busy = await service.create_game("Busy Game")
        tracker = UsageTracker()
        await tracker.increment(busy.id)
        await tracker.increment(busy.id)
        await tracker.increment(quiet.id)

        games = await service.list_games()

        assert [g.id for g in games] == [busy.id, quiet.id]
        assert [g.usage_count for g in games] == [2, 1]

    async def test_search_and_tag_combine(self, db: AsyncSession):
        service = GameService(db)
        await service.create_game("Racing Sim", tags=["racing"])
        match = await service.create_game("Rally Sim", tags=["racing", "sim"])
        await service.create_game("Flight Sim", tags=["sim"])

        by_search = await service.list_games(search="Sim")
        by_tag = await service.list_games(tag_name="racing")
        both = await service.list_games(search="Rally", tag_name="racing")

        assert len(by_search) == 3
        assert len(by_tag) == 2
        assert [g.id for g in both] == [match.id]

    async def test_search_treats_wildcards_literally(self, db: AsyncSession):
        service = GameService(db)
        await service.create_game("Plain")

        assert await service.list_games(search="%") == []


class TestSettings:
    """Setting CRUD"""

    async def test_create_and_list_newest_first(self, db: AsyncSession):
        game = await GameService(db).create_game("Minecraft")
        service = SettingService(db)
        older = await service.create_setting("video", "fullscreen=1", game.id)
        newer = await service.create_setting("audio", None, game.id)

        listed = await service.list_settings(game.id)

        assert [s.id for s in listed] == [newer.id, older.id]
        assert newer.content == ""

    async def test_update_moves_to_front(self, db: AsyncSession):
        game = await GameService(db).create_game("Minecraft")
        service = SettingService(db)
        first = await service.create_setting("video", "a", game.id)
        await service.create_setting("audio", "b", game.id)

        updated = await service.update_setting(first.id, "video", "fullscreen=0")
        listed = await service.list_settings(game.id)

        assert updated.content == "fullscreen=0"
        assert listed[0].id == first.id

    async def test_unchanged_resave_moves_to_front(self, db: AsyncSession):
        """Saving identical name and content still counts as an update."""
        game = await GameService(db).create_game("Minecraft")
        service = SettingService(db)
        first = await service.create_setting("video", "same", game.id)
        second = await service.create_setting("audio", "b", game.id)
        assert (await service.list_settings(game.id))[0].id == second.id

        await service.update_setting(first.id, "video", "same")

        listed = await service.list_settings(game.id)
        assert [s.id for s in listed] == [first.id, second.id]

    async def test_list_requires_game_id(self, db: AsyncSession):
        with pytest.raises(ValidationError):
            await SettingService(db).list_settings(None)

    async def test_create_requires_name(self, db: AsyncSession):
        game = await GameService(db).create_game("Minecraft")

        with pytest.raises(ValidationError):
            await SettingService(db).create_setting("", "x", game.id)

    async def test_create_for_missing_game(self, db: AsyncSession):
        with pytest.raises(NotFoundError):
            await SettingService(db).create_setting("video", "x", "missing")

    async def test_get_includes_game(self, db: AsyncSession):
        game = await GameService(db).create_game("Minecraft")
        service = SettingService(db)
        created = await service.create_setting("video", "x", game.id)

        found = await service.get_setting(created.id)

        assert found.game.name == "Minecraft"

    async def test_update_and_delete_missing(self, db: AsyncSession):
        service = SettingService(db)

        with pytest.raises(NotFoundError):
            await service.update_setting("missing", "n", "c")
        with pytest.raises(NotFoundError):
            await service.delete_setting("missing")

    async def test_delete(self, db: AsyncSession):
        game = await GameService(db).create_game("Minecraft")
        service = SettingService(db)
        created = await service.create_setting("video", "x", game.id)

        await service.delete_setting(created.id)

        result = await db.execute(select(func.count()).select_from(Setting))
        assert result.scalar() == 0


class TestUsageTracker:
    """Usage counter bumps"""

    async def test_increment_missing_game_is_noop(self):
        assert await UsageTracker().increment("missing") is True

    async def test_failure_is_swallowed(self):
        def broken_factory():
            raise RuntimeError("database is gone")

        assert await UsageTracker(session_factory=broken_factory).increment("x") is False

    async def test_increment_keeps_updated_at(self, db: AsyncSession):
        game = await GameService(db).create_game("Tetris")
        before = game.updated_at

        await UsageTracker().increment(game.id)

        async with AsyncSessionLocal() as other:
            reloaded = await GameService(other).get_game_by_id(game.id)
        assert reloaded.usage_count == 1
        assert reloaded.updated_at == before
