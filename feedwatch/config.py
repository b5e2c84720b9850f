"""Feed configuration - load from a YAML file.

Every recognized option is a field on FeedConfig; unknown keys are rejected
instead of being silently ignored.

Example (config/feed.example.yaml):

    name: jbisbee
    url: http://www.jbisbee.com/rdf/
    delay: 600
    cache_dir: /tmp/feedwatch
"""

from __future__ import annotations

import os
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

CACHE_DIR_ENV = "FEEDWATCH_CACHE_DIR"
DEFAULT_DELAY = 600


class FeedConfig(BaseModel):
    """Settings for one watched feed."""

    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., description="Feed key, used for logging and the cache file name")
    url: str | None = Field(default=None, description="Feed URL (only needed for fetching)")
    delay: int = Field(default=DEFAULT_DELAY, ge=1, description="Seconds between refreshes")
    headline_as_id: bool = Field(
        default=False,
        description="Identify headlines by md5 of their text instead of their link",
    )
    cache_dir: Path | None = Field(
        default=None,
        description="Directory for the raw payload cache; no caching when unset",
    )
    first_seen: float | None = Field(
        default=None,
        description="Fixed first-seen timestamp for every headline (replay/testing)",
    )
    timeout: float = Field(default=30, gt=0, description="HTTP timeout in seconds")
    debug: bool = False

    @field_validator("name")
    @classmethod
    def _name_is_usable(cls, value: str) -> str:
        value = value.strip()
        if not any(c.isalnum() for c in value):
            raise ValueError("name must contain at least one letter or digit")
        return value


def load_config(path: str | Path) -> FeedConfig:
    """
    Load feed configuration from YAML.

    ``FEEDWATCH_CACHE_DIR`` supplies ``cache_dir`` when the file has none.

    Raises:
        FileNotFoundError: If the file does not exist
        pydantic.ValidationError: If a value is invalid or a key is unknown
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Feed config not found: {path}")

    with open(path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Feed config must be a mapping: {path}")

    if not data.get("cache_dir") and os.environ.get(CACHE_DIR_ENV):
        data["cache_dir"] = os.environ[CACHE_DIR_ENV]

    return FeedConfig.model_validate(data)
