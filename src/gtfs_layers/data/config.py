from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class LayerConfig(BaseSettings):
    """Configuration for the layer transform.

    Automatically loads from environment variables and .env file.
    """

    model_config = SettingsConfigDict(env_file=".env", extra="ignore", populate_by_name=True)

    # Maximum perpendicular deviation, in input coordinate units (degrees)
    simplify_tolerance: float = Field(default=0.001, ge=0, alias="GTFS_SIMPLIFY_TOLERANCE")
    # False enables the radial-distance pre-pass (faster, less accurate)
    simplify_high_quality: bool = Field(default=True, alias="GTFS_SIMPLIFY_HIGH_QUALITY")


@lru_cache
def get_layer_config() -> LayerConfig:
    """Get layer configuration (cached singleton).

    Returns:
        LayerConfig with values from .env file or environment variables.
    """
    return LayerConfig()
