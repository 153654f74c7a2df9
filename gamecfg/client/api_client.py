"""HTTP client for the GameCfg API"""

from typing import Any, Dict, List, Optional

import httpx

from ..services.log_service import log_service


class ApiError(Exception):
    """Non-2xx response from the API"""

    def __init__(self, status_code: int, message: str):
        super().__init__(f"{status_code}: {message}")
        self.status_code = status_code
        self.message = message


class GameCfgClient:
    """Thin async wrapper around the REST endpoints"""

    def __init__(
        self,
        base_url: str = "http://127.0.0.1:8000",
        transport: Optional[httpx.AsyncBaseTransport] = None,
        timeout: float = 30.0,
    ):
        self.base_url = base_url.rstrip("/")
        self.client = httpx.AsyncClient(
            base_url=self.base_url, transport=transport, timeout=timeout
        )

    async def close(self):
        await self.client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        await self.close()

    async def _request(self, method: str, path: str, **kwargs) -> Any:
        """Send a request and decode JSON, raising ApiError on failure"""
        try:
            response = await self.client.request(method, path, **kwargs)
        except httpx.HTTPError as e:
            log_service.error(f"API request {method} {path} failed: {e}")
            raise ApiError(0, str(e)) from e

        if response.is_error:
            try:
                message = response.json().get("error") or response.reason_phrase
            except ValueError:
                message = response.text or response.reason_phrase
            raise ApiError(response.status_code, message)

        return response.json()

    # Games

    async def list_games(
        self, search: Optional[str] = None, tag: Optional[str] = None
    ) -> List[Dict]:
        params = {}
        if search:
            params["search"] = search
        if tag:
            params["tag"] = tag
        return await self._request("GET", "/games", params=params)

    async def get_game(self, identifier: str) -> Dict:
        return await self._request("GET", f"/games/{identifier}")

    async def create_game(
        self, name: str, icon_url: Optional[str] = None, tags: List[str] = None
    ) -> Dict:
        return await self._request(
            "POST",
            "/games",
            json={"name": name, "iconUrl": icon_url, "tags": tags or []},
        )

    async def update_game(
        self,
        game_id: str,
        name: str,
        icon_url: Optional[str] = None,
        tags: List[str] = None,
    ) -> Dict:
        return await self._request(
            "PUT",
            f"/games/{game_id}",
            json={"name": name, "iconUrl": icon_url, "tags": tags or []},
        )

    async def delete_game(self, game_id: str) -> Dict:
        return await self._request("DELETE", f"/games/{game_id}")

    # Settings

    async def list_settings(self, game_id: str) -> List[Dict]:
        return await self._request("GET", "/settings", params={"gameId": game_id})

    async def get_setting(self, setting_id: str) -> Dict:
        return await self._request("GET", f"/settings/{setting_id}")

    async def create_setting(self, name: str, content: str, game_id: str) -> Dict:
        return await self._request(
            "POST",
            "/settings",
            json={"name": name, "content": content, "gameId": game_id},
        )

    async def update_setting(self, setting_id: str, name: str, content: str) -> Dict:
        return await self._request(
            "PUT", f"/settings/{setting_id}", json={"name": name, "content": content}
        )

    async def delete_setting(self, setting_id: str) -> Dict:
        return await self._request("DELETE", f"/settings/{setting_id}")

    # Tags / uploads

    async def list_tags(self) -> List[Dict]:
        return await self._request("GET", "/tags")

    async def upload_image(
        self, data: bytes, file_name: str, content_type: str
    ) -> str:
        """Upload an icon, returning its /uploads/ URL"""
        result = await self._request(
            "POST",
            "/upload",
            files={"file": (file_name, data, content_type)},
            data={"fileType": "image"},
        )
        return result["url"]

    async def upload_config(self, data: bytes, file_name: str) -> Dict:
        """Import a configuration file, returning {content, fileName}"""
        return await self._request(
            "POST",
            "/upload",
            files={"file": (file_name, data, "text/plain")},
            data={"fileType": "config"},
        )
