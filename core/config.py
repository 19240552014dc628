"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List


class Settings(BaseSettings):
    """Pipeline settings with environment variable support"""

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore"
    )

    # Store
    DATABASE_PATH: str = "names.db"

    # Source documents
    DATA_DIR: str = "data"
    SOURCE_EXTENSION: str = ".html"
    YEARS: List[int] = list(range(2015, 2025))
    FEMALE_CAPTION_MARKER: str = "Pigenavne"

    # Intermediate artifact shared by the parser, the importer and the UI
    ARTIFACT_PATH: str = "parsed-names.json"

    # Load
    PROGRESS_INTERVAL: int = 100
    IMPORT_NOTES: str = "Imported from HTML files via CLI parser"

    # Statistics report
    STATS_GENDER_FILTER: str = "both"
    STATS_TOP_N: int = 20

    # Logging
    LOG_LEVEL: str = "INFO"


settings = Settings()
