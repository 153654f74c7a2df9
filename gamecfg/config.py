"""Configuration management"""

from pathlib import Path
from typing import List, Optional

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///./data/gamecfg.db"

    # Directories
    BASE_DIR: Path = Path(__file__).parent.parent
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = DATA_DIR / "logs"
    PUBLIC_DIR: Path = BASE_DIR / "public"
    UPLOADS_DIR: Path = PUBLIC_DIR / "uploads"
    UPLOADS_URL_PREFIX: str = "/uploads"

    # Upload limits
    MAX_IMAGE_SIZE: int = 2 * 1024 * 1024
    MAX_CONFIG_SIZE: int = 1 * 1024 * 1024
    ALLOWED_IMAGE_TYPES: List[str] = [
        "image/jpeg",
        "image/png",
        "image/gif",
        "image/webp",
    ]
    ALLOWED_CONFIG_EXTENSIONS: List[str] = [
        ".cfg",
        ".vcfg",
        ".txt",
        ".ini",
        ".conf",
        ".config",
        ".json",
    ]

    # Game lookup / caching
    GAME_NAME_FALLBACK: bool = True  # "counter-strike" -> "Counter Strike 2"
    GAME_CACHE_MAX_AGE: int = 0  # seconds, 0 disables the header

    # Server
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: Optional[str] = None  # Comma-separated origins

    class Config:
        env_file = ".env"
        case_sensitive = True

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Ensure directories exist
        self.DATA_DIR.mkdir(exist_ok=True, parents=True)
        self.LOGS_DIR.mkdir(exist_ok=True, parents=True)
        self.UPLOADS_DIR.mkdir(exist_ok=True, parents=True)


# Global settings instance
settings = Settings()
