"""atmo configuration from environment variables."""

from __future__ import annotations

import os
from typing import Optional

from atmo.core.constants import TID_MAX_CLOCK_ID


class Settings:
    """CLI settings, read from environment variables with defaults."""

    def __init__(self) -> None:
        self.log_level: str = os.getenv("ATMO_LOG_LEVEL", "WARNING").upper()
        self.debug: bool = os.getenv("ATMO_DEBUG", "").lower() in ("1", "true", "yes")
        clock_id = os.getenv("ATMO_TID_CLOCK_ID")
        self.tid_clock_id: Optional[int] = int(clock_id) if clock_id else None
        if self.tid_clock_id is not None and not 0 <= self.tid_clock_id <= TID_MAX_CLOCK_ID:
            raise ValueError(
                f"Invalid ATMO_TID_CLOCK_ID {self.tid_clock_id}. "
                f"Must be between 0 and {TID_MAX_CLOCK_ID}"
            )
