"""Configuration management using Pydantic Settings"""

from datetime import datetime
from pathlib import Path
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # === Document Root ===
    help_doc_dir: Path = Field(
        default=Path("./doc/help"),
        description="Root folder of the help documents"
    )
    help_scheme: str = Field(
        default="help",
        description="Scheme of logical mailbox addresses, e.g. help://chapter/page.md"
    )

    # === Catalog Configuration ===
    cache_catalog: bool = Field(
        default=True,
        description="Reuse the catalog between mailbox opens while the root is unchanged"
    )
    header_max_lines: int = Field(
        default=-1,
        description="Max header fields to read per document (N < 0 means all)"
    )
    link_chapters: bool = Field(
        default=False,
        description="Thread every chapter head under the first catalog document"
    )

    # === Document Format ===
    doc_extension: str = Field(default=".md")
    index_filename: str = Field(default="index.md")
    header_marker: str = Field(default="---")

    # === Message Envelope ===
    subject_template: str = Field(
        default="[{title}]: {description}",
        description="Subject built from header fields, placeholders name header keys"
    )
    subject_max_length: int = Field(default=255)
    doc_epoch: str = Field(
        default="",
        description="Release date (YYYYMMDD) stamped on documents; empty uses build time"
    )
    doc_sender: str = Field(default="Helpbox <helpbox@localhost>")
    doc_organization: str = Field(default="Helpbox")

    # === Logging ===
    log_level: str = Field(default="INFO")

    @field_validator("doc_epoch")
    @classmethod
    def check_epoch(cls, value: str) -> str:
        if value:
            datetime.strptime(value, "%Y%m%d")
        return value


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get or create settings singleton"""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reload_settings() -> Settings:
    """Force reload settings"""
    global _settings
    _settings = Settings()
    return _settings
