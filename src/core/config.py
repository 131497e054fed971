"""Configuration Management."""

from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


class Settings(BaseSettings):
    """Builder and widget settings from environment."""

    model_config = SettingsConfigDict(
        env_prefix="HTMLBUILDER_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra environment variables
    )

    # Logging
    log_level: str = Field(default="INFO", description="Log level")
    json_logs: bool = Field(default=False, description="Use JSON log format")

    # Template grammar
    attribute_delimiter: str = Field(
        default=";", min_length=1, description="Separator between attributes inside brackets"
    )

    # Context menu geometry (headless, no layout engine)
    menu_width: int = Field(default=200, gt=0, description="Assumed menu width (px)")
    menu_item_height: int = Field(default=28, gt=0, description="Assumed item row height (px)")
    menu_separator_height: int = Field(default=9, ge=0, description="Assumed separator height (px)")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
