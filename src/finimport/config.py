"""Runtime configuration for imports."""

import os
from dataclasses import dataclass

DEFAULT_DB_URL = "sqlite:///finimport.db"


@dataclass
class ImportSettings:
    """Settings shared by the import pipeline and the CLI scripts."""

    db_url: str = DEFAULT_DB_URL
    pool_size: int = 4
    delimiter: str = ","
    # Off by default: only rows already in the store are treated as duplicates.
    dedupe_within_batch: bool = False

    @classmethod
    def from_env(cls) -> "ImportSettings":
        """Create settings from FINIMPORT_* environment variables."""
        return cls(
            db_url=os.getenv("FINIMPORT_DB_URL", DEFAULT_DB_URL),
            pool_size=int(os.getenv("FINIMPORT_POOL_SIZE", "4")),
            delimiter=os.getenv("FINIMPORT_DELIMITER", ","),
            dedupe_within_batch=os.getenv("FINIMPORT_DEDUPE_WITHIN_BATCH", "false").lower()
            == "true",
        )
