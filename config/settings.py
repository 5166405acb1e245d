#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Settings - Centralized configuration management
"""

from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict

from .constants import (
    ANONYMOUS_PLACEHOLDER,
    CONTENTS_LABEL,
    COUNT_TEMPLATE,
    COVER_LABEL,
    DEFAULT_BOOK_CREATOR,
    DEFAULT_BOOK_SUBTITLE,
    DEFAULT_BOOK_TITLE,
    DEFAULT_LANGUAGE,
    LONG_POEM_MAX_CHARS,
    LONG_POEM_MAX_LINES,
    MAX_ASSET_SIZE_MB,
    OUTPUT_DIR,
    UNTITLED_PLACEHOLDER,
)


# Base directory
BASE_DIR = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    """Application settings"""

    model_config = SettingsConfigDict(
        env_prefix="INKVERSE_",
        env_file=str(BASE_DIR / ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Allow extra fields from .env that aren't defined in model
    )

    # ========== Book ==========
    book_title: str = DEFAULT_BOOK_TITLE
    book_subtitle: str = DEFAULT_BOOK_SUBTITLE
    book_creator: str = DEFAULT_BOOK_CREATOR
    language: str = DEFAULT_LANGUAGE

    # Placeholders for empty record fields
    untitled_placeholder: str = UNTITLED_PLACEHOLDER
    anonymous_placeholder: str = ANONYMOUS_PLACEHOLDER

    # Front matter labels
    cover_label: str = COVER_LABEL
    contents_label: str = CONTENTS_LABEL
    count_template: str = COUNT_TEMPLATE  # {count} = number of works

    # ========== Layout ==========
    # Tuned to one font and page size; not derived from a layout metric
    long_poem_max_chars: int = LONG_POEM_MAX_CHARS
    long_poem_max_lines: int = LONG_POEM_MAX_LINES
    page_size: str = "A4"  # A4 | A5 | B5 | letter

    # ========== Assets ==========
    max_asset_size_mb: float = MAX_ASSET_SIZE_MB

    # ========== Directories ==========
    output_dir: Path = BASE_DIR / OUTPUT_DIR

    @property
    def max_asset_bytes(self) -> int:
        """Decoded size limit for one embedded image"""
        return int(self.max_asset_size_mb * 1024 * 1024)

    def print_config(self):
        """Print configuration summary"""
        print("\n" + "=" * 70)
        print("CONFIGURATION")
        print("=" * 70)
        print(f"Book:            {self.book_title} ({self.book_subtitle})")
        print(f"Language:        {self.language}")
        print(f"Long poem:       > {self.long_poem_max_chars} chars or > {self.long_poem_max_lines} lines")
        print(f"Page size:       {self.page_size}")
        print(f"Output dir:      {self.output_dir}")
        print("=" * 70 + "\n")


# Global settings instance
settings = Settings()
