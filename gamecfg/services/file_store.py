"""Upload validation and storage"""

import asyncio
import secrets
import time
from pathlib import Path
from typing import Dict, List, Optional

from ..config import settings
from ..exceptions import InternalError, UnsupportedMediaError, ValidationError
from .log_service import log_service

FILE_TYPE_IMAGE = "image"
FILE_TYPE_CONFIG = "config"

# Used when an image arrives without an extension in its file name
IMAGE_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
    "image/webp": ".webp",
}


def file_extension(file_name: Optional[str]) -> str:
    """Lower-cased text after the last dot, with the dot ("" if none)"""
    if not file_name or "." not in file_name:
        return ""
    extension = file_name.rsplit(".", 1)[1].lower()
    return f".{extension}" if extension else ""


class FileStore:
    """Stores icon images on disk and reads imported config files as text"""

    def __init__(
        self,
        uploads_dir: Path = None,
        url_prefix: str = None,
        max_image_size: int = None,
        max_config_size: int = None,
        allowed_image_types: List[str] = None,
        allowed_config_extensions: List[str] = None,
    ):
        self.uploads_dir = uploads_dir or settings.UPLOADS_DIR
        self.url_prefix = (url_prefix or settings.UPLOADS_URL_PREFIX).rstrip("/")
        self.max_image_size = max_image_size or settings.MAX_IMAGE_SIZE
        self.max_config_size = max_config_size or settings.MAX_CONFIG_SIZE
        self.allowed_image_types = allowed_image_types or settings.ALLOWED_IMAGE_TYPES
        self.allowed_config_extensions = (
            allowed_config_extensions or settings.ALLOWED_CONFIG_EXTENSIONS
        )

    @staticmethod
    def generate_name(file_name: str, content_type: Optional[str] = None) -> str:
        """
        Collision-resistant file name: <ms timestamp>-<random><extension>
        """
        extension = file_extension(file_name)
        if not extension:
            extension = IMAGE_EXTENSIONS.get(content_type, "")
        return f"{int(time.time() * 1000)}-{secrets.token_hex(6)}{extension}"

    def url_for(self, stored_name: str) -> str:
        return f"{self.url_prefix}/{stored_name}"

    def path_for_url(self, url: str) -> Optional[Path]:
        """Map a stored upload URL back to its file, None for foreign URLs"""
        prefix = f"{self.url_prefix}/"
        if not url or not url.startswith(prefix):
            return None
        name = url[len(prefix):]
        if not name or "/" in name or name in (".", ".."):
            return None
        return self.uploads_dir / name

    def check_size(self, file_type: str, size: Optional[int]) -> None:
        """
        Reject an upload by its declared size before the body is read.
        Unknown sizes and fileTypes pass; the full checks run later.
        """
        if file_type == FILE_TYPE_IMAGE:
            limit = self.max_image_size
        elif file_type == FILE_TYPE_CONFIG:
            limit = self.max_config_size
        else:
            return
        if size is not None and size > limit:
            raise UnsupportedMediaError(
                f"File exceeds the size limit of {limit // (1024 * 1024)}MB"
            )

    async def store_upload(
        self, data: bytes, content_type: Optional[str], file_name: str
    ) -> str:
        """
        Validate and persist an image upload, returning its root-relative URL
        """
        if content_type not in self.allowed_image_types:
            raise UnsupportedMediaError(
                "Unsupported file type, only JPEG, PNG, GIF and WEBP are allowed"
            )
        self.check_size(FILE_TYPE_IMAGE, len(data))

        stored_name = self.generate_name(file_name, content_type)
        path = self.uploads_dir / stored_name

        try:
            await asyncio.to_thread(self.uploads_dir.mkdir, parents=True, exist_ok=True)
            await asyncio.to_thread(path.write_bytes, data)
        except OSError as e:
            log_service.error(f"Failed to save upload {file_name} to {path}: {e}")
            raise InternalError("File upload failed") from e

        url = self.url_for(stored_name)
        log_service.info(f"Stored upload {file_name} ({len(data)} bytes) as {url}")
        return url

    def read_upload_as_text(self, data: bytes, file_name: str) -> Dict[str, str]:
        """
        Validate an imported configuration file and decode it as UTF-8.

        Nothing is written to disk; the caller stores the content as a Setting.
        """
        extension = file_extension(file_name)
        if extension not in self.allowed_config_extensions:
            allowed = ", ".join(ext.lstrip(".") for ext in self.allowed_config_extensions)
            raise UnsupportedMediaError(
                f"Unsupported configuration file type, allowed: {allowed}"
            )
        self.check_size(FILE_TYPE_CONFIG, len(data))

        try:
            content = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise UnsupportedMediaError("Configuration file is not valid UTF-8 text") from e

        return {"content": content, "file_name": file_name}

    async def handle_upload(
        self,
        file_type: str,
        data: bytes,
        file_name: str,
        content_type: Optional[str] = None,
    ) -> Dict[str, str]:
        """Dispatch on the fileType discriminator"""
        if file_type == FILE_TYPE_IMAGE:
            return {"url": await self.store_upload(data, content_type, file_name)}
        if file_type == FILE_TYPE_CONFIG:
            return self.read_upload_as_text(data, file_name)
        raise ValidationError(f"Unsupported fileType: {file_type}")


file_store = FileStore()
