"""Application configuration management."""

from pydantic import AnyUrl, ConfigDict, Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Database
    database_url: AnyUrl
    database_echo: bool = False

    # Listing
    default_page_size: int = Field(default=15, ge=1, le=100)
    max_page_size: int = Field(default=100, ge=1, le=500)

    # Field limits
    cover_letter_max_length: int = Field(default=3000, ge=1)
    recruiter_notes_max_length: int = Field(default=2000, ge=1)
    remarks_max_length: int = Field(default=500, ge=1)

    model_config = ConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


settings = Settings()
