"""Client-side state for one game's detail view"""

from pathlib import PurePath
from typing import Optional

from ..schemas.game import GameResponse
from ..schemas.setting import SettingResponse
from ..services.log_service import log_service
from .api_client import ApiError, GameCfgClient


class GameDetailController:
    """
    Holds one Game aggregate (tags and settings included) and keeps it in
    step with the server.

    Each action calls the API first and patches the local copy only when
    the call succeeded; a failed call leaves the aggregate untouched and
    re-raises the ApiError after logging it.
    """

    def __init__(self, client: GameCfgClient):
        self.client = client
        self.game: Optional[GameResponse] = None
        self.selected_setting_id: Optional[str] = None
        self.redirect_to: Optional[str] = None

    def _require_game(self) -> GameResponse:
        if self.game is None:
            raise RuntimeError("No game loaded")
        return self.game

    def _select_first_if_unset(self):
        if self.selected_setting_id is None and self.game and self.game.setting_files:
            self.selected_setting_id = self.game.setting_files[0].id

    def get_setting(self, setting_id: str) -> Optional[SettingResponse]:
        game = self._require_game()
        for setting in game.setting_files:
            if setting.id == setting_id:
                return setting
        return None

    async def load(self, identifier: str) -> GameResponse:
        """Fetch the aggregate (by id or name)"""
        try:
            data = await self.client.get_game(identifier)
        except ApiError as e:
            log_service.error(f"Failed to load game {identifier}: {e}")
            raise

        self.game = GameResponse.model_validate(data)
        self.selected_setting_id = None
        self.redirect_to = None
        self._select_first_if_unset()
        return self.game

    async def add_setting(self, name: str, content: str = "") -> SettingResponse:
        """Create an empty (or pre-filled) configuration file"""
        game = self._require_game()
        try:
            data = await self.client.create_setting(name, content, game.id)
        except ApiError as e:
            log_service.error(f"Failed to add setting {name} to game {game.id}: {e}")
            raise

        setting = SettingResponse.model_validate(data)
        game.setting_files.append(setting)
        self._select_first_if_unset()
        return setting

    async def import_config_file(self, data: bytes, file_name: str) -> SettingResponse:
        """
        Upload a configuration file as text, then store it as a new setting
        named after the file without its extension.
        """
        game = self._require_game()
        try:
            imported = await self.client.upload_config(data, file_name)
        except ApiError as e:
            log_service.error(f"Failed to import {file_name}: {e}")
            raise

        name = PurePath(file_name).stem or file_name
        return await self.add_setting(name, imported["content"])

    async def save_setting(self, setting_id: str, content: str) -> SettingResponse:
        """Save new content for an existing setting"""
        current = self.get_setting(setting_id)
        if current is None:
            raise KeyError(setting_id)
        try:
            data = await self.client.update_setting(setting_id, current.name, content)
        except ApiError as e:
            log_service.error(f"Failed to save setting {setting_id}: {e}")
            raise

        updated = SettingResponse.model_validate(data)
        current.content = updated.content
        current.updated_at = updated.updated_at
        return current

    async def rename_setting(self, setting_id: str, name: str) -> SettingResponse:
        """Rename a setting, keeping its content"""
        current = self.get_setting(setting_id)
        if current is None:
            raise KeyError(setting_id)
        try:
            data = await self.client.update_setting(setting_id, name, current.content)
        except ApiError as e:
            log_service.error(f"Failed to rename setting {setting_id}: {e}")
            raise

        updated = SettingResponse.model_validate(data)
        current.name = updated.name
        current.updated_at = updated.updated_at
        return current

    async def delete_setting(self, setting_id: str) -> None:
        game = self._require_game()
        try:
            await self.client.delete_setting(setting_id)
        except ApiError as e:
            log_service.error(f"Failed to delete setting {setting_id}: {e}")
            raise

        game.setting_files = [s for s in game.setting_files if s.id != setting_id]
        if self.selected_setting_id == setting_id:
            self.selected_setting_id = (
                game.setting_files[0].id if game.setting_files else None
            )

    async def upload_icon(
        self, data: bytes, file_name: str, content_type: str
    ) -> GameResponse:
        """
        Upload a new icon and point the game at it.

        The game is re-saved with its current name and tags; the server's
        copy then replaces the local aggregate.
        """
        game = self._require_game()
        try:
            url = await self.client.upload_image(data, file_name, content_type)
        except ApiError as e:
            log_service.error(f"Icon upload failed for game {game.id}: {e}")
            raise

        try:
            updated = await self.client.update_game(
                game.id,
                name=game.name,
                icon_url=url,
                tags=[tag.name for tag in game.tags],
            )
        except ApiError as e:
            # The file stays on disk unreferenced until uploads are pruned
            log_service.error(f"Failed to set icon {url} on game {game.id}: {e}")
            raise

        self.game = GameResponse.model_validate(updated)
        return self.game

    async def delete_game(self) -> None:
        """Delete the game; the aggregate is gone so the view moves home"""
        game = self._require_game()
        try:
            await self.client.delete_game(game.id)
        except ApiError as e:
            log_service.error(f"Failed to delete game {game.id}: {e}")
            raise

        self.game = None
        self.selected_setting_id = None
        self.redirect_to = "/"
