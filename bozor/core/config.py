"""
Configuration settings for the Bozor search core
"""
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Search core settings"""

    # Application
    app_name: str = "Bozor Search Core"
    version: str = "1.0.0"
    environment: str = "development"

    # Logging
    log_level: str = "INFO"
    log_format: str = "json"

    # Typo correction
    typo_threshold: float = 0.7

    # Ranking
    default_max_radius: float = 10.0  # km
    # Other factors reach 210, so unboosted totals stay under the 1000 boost
    text_relevance_cap: float = Field(default=100.0, ge=0, lt=790)
    search_limit: int = 20

    # Rank tracking
    rank_window: int = 50
    rank_tracker_default_queries: int = 5

    # Recommendations
    similar_limit: int = 6

    # Concurrency
    scoring_workers: int = 8

    # Vocabulary (JSON file with synonym/keyword/brand tables)
    vocabulary_path: Optional[str] = None

    class Config:
        env_file = ".env"
        env_prefix = "BOZOR_"
        case_sensitive = False
        extra = "ignore"  # Allow extra fields from .env


# Global settings instance
settings = Settings()
