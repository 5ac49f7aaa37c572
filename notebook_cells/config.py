"""
Runtime settings for notebook-cells, read from the environment.
"""

import os
import sys
from typing import Literal

from pydantic import BaseModel, field_validator

Platform = Literal["mac", "other"]


def detect_platform() -> Platform:
    """Return "mac" when running on macOS, "other" everywhere else."""
    return "mac" if sys.platform == "darwin" else "other"


class Settings(BaseModel):
    """Process-wide settings."""
    platform: Platform = "other"
    theme: str = "light"
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _upper_level(cls, value: str) -> str:
        return value.upper()

    @property
    def is_mac(self) -> bool:
        return self.platform == "mac"

    @classmethod
    def from_env(cls) -> "Settings":
        """
        Build settings from NOTEBOOK_CELLS_* environment variables.

        NOTEBOOK_CELLS_PLATFORM overrides platform detection ("mac" or "other"),
        NOTEBOOK_CELLS_THEME picks the display theme and NOTEBOOK_CELLS_LOG_LEVEL
        the logging level.
        """
        return cls(
            platform=os.environ.get("NOTEBOOK_CELLS_PLATFORM") or detect_platform(),
            theme=os.environ.get("NOTEBOOK_CELLS_THEME", "light"),
            log_level=os.environ.get("NOTEBOOK_CELLS_LOG_LEVEL", "WARNING"),
        )
