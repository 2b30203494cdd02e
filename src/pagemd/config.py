"""Application configuration using Pydantic Settings.

Environment variables are automatically mapped to Settings fields.
"""

from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Every field has a default, so the core can be imported and used
    without any environment configured.
    """

    # --- Diagnostics ---
    pagemd_debug: bool = False

    # --- Profiles ---
    # JSON file holding the profile collection; empty means built-in profiles only
    profiles_path: str = ""

    # --- Output ---
    converter_name: str = "pagemd"
    # Empty keeps the title based "<slug>.md" names
    file_naming_pattern: Literal["", "tab_title", "domain_title", "timestamp", "custom_prefix"] = ""
    # Used by the custom_prefix pattern, e.g. "{date}_{host}_{title}"
    file_naming_template: str = ""

    # --- Network Interface ---
    host: str = "0.0.0.0"
    port: int = 8000

    @field_validator("converter_name")
    @classmethod
    def validate_converter_name(cls, value: str) -> str:
        """Reject blank converter names.

        Raises:
            ValueError: If the name is empty or whitespace only

        """
        if not value.strip():
            msg = "CONVERTER_NAME must not be blank"
            raise ValueError(msg)
        return value.strip()

    # --- Tool Metadata ---
    # Tool descriptions are stored here so they can be updated via environment
    # variables without code changes.
    tool_convert_page_desc: str = (
        "Convert the markup of a web page to Markdown.\n\n"
        "The conversion profile is picked automatically from the page URL and "
        "title unless profile_id is given. Returns the Markdown content, a "
        "suggested file name, its size in bytes and a checksum."
    )
    tool_detect_content_desc: str = (
        "Locate the main content of a web page and report title, author, "
        "publish date, word count, reading time and a 0-100 confidence score."
    )
    tool_match_profile_desc: str = (
        "Return the conversion profile that applies to a page and the rules that matched."
    )
    tool_list_profiles_desc: str = "List the available conversion profiles."

    # Tool argument descriptions
    arg_html_desc: str = "Full HTML markup of the page."
    arg_url_desc: str = "URL the markup was loaded from."
    arg_title_desc: str = "Page title as shown by the browser tab."
    arg_profile_id_desc: str = "Conversion profile id; leave empty for automatic selection."

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache
def get_settings() -> Settings:
    """Return cached settings instance.

    Uses lru_cache to ensure the .env file is only parsed once
    and all modules share the same settings instance.

    Returns:
        Settings instance with application configuration.

    """
    return Settings()


settings = get_settings()
