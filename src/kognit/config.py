from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from kognit.compression.base import DEFAULT_COMPRESSION_LEVEL
from kognit.types import ArchiveFormat

# ENV file should be in the same directory (only relevant for development; otherwise use ENV variables).
ENV_FILE = Path(__file__).parent / ".env"


# App config is read from ENV variables prefixed with "KOGNIT_" and the .env file.
# Invalid values lead to a validation error on startup.
class AppConfig(BaseSettings):
    default_format: ArchiveFormat = Field(
        description="Archive format used by encode if none is given", default=ArchiveFormat.ZIP
    )
    compression_level: int = Field(
        description="Compression level from 0 (no compression) to 9 (best compression)",
        default=DEFAULT_COMPRESSION_LEVEL,
        ge=0,
        le=9,
    )
    follow_symlinks: bool = Field(
        description="Archive the targets of symlinks. Otherwise symlinks are skipped.", default=False
    )
    log_level: str = Field(description="Level of the root logger used by the CLI", default="INFO")

    model_config = SettingsConfigDict(env_prefix="KOGNIT_", env_file=ENV_FILE)


def get_app_config() -> AppConfig:
    return AppConfig()
