"""
Configuration module for the LidaCacau feed engine.
Loads and validates configuration from YAML file using Pydantic models.
"""

from pydantic import BaseModel, Field, field_validator
from typing import List, Optional, Union
import yaml
import os


class ProximityBracket(BaseModel):
    """Distance bucket: candidates within max_km earn points."""
    max_km: float
    points: int


class ScoringWeights(BaseModel):
    """Points for each relevance component."""
    job_preference_match: int = 100
    job_category_match: int = 30
    offer_preference_match: int = 50
    freshness_max: int = 50  # points for a brand-new candidate, one lost per hour
    job_price_divisor: float = 50.0
    offer_price_divisor: float = 20.0
    price_cap: int = 30
    extras_bonus: int = 10
    proximity_brackets: List[ProximityBracket] = Field(
        default_factory=lambda: [
            ProximityBracket(max_km=10, points=80),
            ProximityBracket(max_km=25, points=60),
            ProximityBracket(max_km=50, points=40),
            ProximityBracket(max_km=100, points=20),
        ]
    )

    @field_validator('proximity_brackets')
    @classmethod
    def _sort_brackets(cls, value: List[ProximityBracket]) -> List[ProximityBracket]:
        return sorted(value, key=lambda bracket: bracket.max_km)


class SourceConfig(BaseModel):
    """Candidate source settings (mock JSON file or REST API)."""
    adapter: str = "mock"
    base_url: Optional[str] = None
    data_path: str = "data/sample_feed.json"
    timeout: float = 20
    limit: int = 50


class StorageConfig(BaseModel):
    """Per-device key-value storage settings."""
    db_path: str = "data/feed.db"
    dismissed_key: str = "dismissed_jobs_v1"


class LocationConfig(BaseModel):
    """Fallback coordinate used when device geolocation is unavailable."""
    # Uruara/PA, on the Transamazonica
    default_latitude: float = -3.7167
    default_longitude: float = -53.7333


class FeedConfig(BaseModel):
    """Feed presentation defaults."""
    default_radius: Union[int, str] = "unbounded"


class Config(BaseModel):
    """Main configuration model."""
    source: SourceConfig = Field(default_factory=SourceConfig)
    storage: StorageConfig = Field(default_factory=StorageConfig)
    location: LocationConfig = Field(default_factory=LocationConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)
    scoring_weights: ScoringWeights = Field(default_factory=ScoringWeights)


def load_config(path: str = "config.yaml") -> Config:
    """
    Load and validate configuration from YAML file.

    Args:
        path: Path to configuration file (default: config.yaml)

    Returns:
        Validated Config object

    Raises:
        FileNotFoundError: If config file doesn't exist
        yaml.YAMLError: If YAML syntax is invalid
        ValueError: If the file is empty or the config structure is invalid
    """
    if not os.path.exists(path):
        raise FileNotFoundError(
            f"Configuration file not found: {path}\n"
            f"Please copy config.example.yaml to {path} and customize it."
        )

    try:
        with open(path, 'r') as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise yaml.YAMLError(
            f"Invalid YAML syntax in {path}: {e}"
        )

    if data is None:
        raise ValueError(f"Configuration file {path} is empty")

    try:
        config = Config(**data)
    except Exception as e:
        raise ValueError(
            f"Invalid configuration structure in {path}: {e}\n"
            f"Please check config.example.yaml for the correct format."
        )

    return config
