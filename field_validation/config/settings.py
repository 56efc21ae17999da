"""
Library-wide configuration via pydantic-settings.

Override any setting via environment variable prefixed with FV_
e.g., set FV_DEFAULT_LANGUAGE=en to force English messages everywhere,
or FV_IGNORE_UNKNOWN_RULES=true to tolerate unknown keys in schemas.
"""

from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="FV_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # --- Language selection ---
    default_language: Optional[str] = None   # when set, always wins over session hints
    fallback_language: str = "es"            # used when nothing else names a language
    session_language_key: str = "lang"

    # --- Schema handling ---
    ignore_unknown_rules: bool = False       # True: drop unknown rule keys with a warning
    schema_path: Optional[Path] = None       # JSON document read by SchemaLoader

    # --- Rendering ---
    html_error_class: str = "text-red-500 text-danger"


# Module-level singleton. Import this object; never instantiate Settings directly.
settings = Settings()
