from __future__ import annotations

import sys
from typing import Literal

from loguru import logger
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from diabetes_risk.constants import DEFAULT_PROCESSING_DELAY_SECONDS, DEFAULT_RISK_THRESHOLD

RangePolicy = Literal["reject", "clamp", "pass"]


class Settings(BaseSettings):
    """Risk assessment configuration settings."""

    # Scoring
    risk_threshold: int = Field(default=DEFAULT_RISK_THRESHOLD, ge=0)
    range_policy: RangePolicy = "reject"

    # Simulated processing time before a result is revealed
    processing_delay_seconds: float = Field(default=DEFAULT_PROCESSING_DELAY_SECONDS, ge=0)

    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="DIABETES_RISK_",
        env_file=".env",
        env_file_encoding="utf-8",
    )


def configure_logging(level: str = "INFO") -> None:
    """Route loguru output to stderr at the given level."""
    logger.remove()
    logger.add(sys.stderr, level=level.upper())
