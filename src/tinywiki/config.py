"""Application configuration."""

from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    data_dir: Path = Path("data/pages")
    host: str = "127.0.0.1"
    port: int = 8080
    debug: bool = False
    app_title: str = "TinyWiki"
    front_page: str = Field(default="FrontPage", pattern=r"^[a-zA-Z0-9]+$")
    templates_dir: Path | None = None

    model_config = SettingsConfigDict(
        env_prefix="TINYWIKI_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
