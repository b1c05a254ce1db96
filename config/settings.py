"""
ClientBook Configuration Settings
"""
from pathlib import Path
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    # Paths (use CLIENTBOOK_ prefix)
    data_path: Path = Field(
        default=Path("./data/clientbook.json"),
        alias="CLIENTBOOK_DATA_PATH",
        description="JSON file holding the address book"
    )
    prefs_path: Path = Field(
        default=Path("./data/preferences.json"),
        alias="CLIENTBOOK_PREFS_PATH",
        description="JSON file holding user preferences"
    )

    # Server
    port: int = Field(default=8000, alias="CLIENTBOOK_PORT")
    host: str = Field(default="127.0.0.1", alias="CLIENTBOOK_HOST")

    # Logging
    log_level: str = Field(default="INFO", alias="CLIENTBOOK_LOG_LEVEL")

    # Reminders
    last_met_overdue_days: int = Field(
        default=90,
        ge=0,
        alias="CLIENTBOOK_LAST_MET_OVERDUE_DAYS",
        description="Days since the last meeting before a client shows as overdue"
    )
    birthday_window_days: int = Field(
        default=7,
        ge=0,
        le=366,
        alias="CLIENTBOOK_BIRTHDAY_WINDOW_DAYS",
        description="How many days ahead birthday reminders look (today counts as day 0)"
    )

    # Populate a missing address book with sample clients
    seed_sample_data: bool = Field(default=True, alias="CLIENTBOOK_SEED_SAMPLE_DATA")


settings = Settings()
