import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

BACKENDS = ("file", "memory")


class Config:
    def __init__(self):
        load_dotenv()

        self.store_backend: str = os.getenv("STORE_BACKEND", "file").lower()
        self.store_path: str = os.getenv("STORE_PATH", os.path.join("data", "store"))
        self.storage_prefix: str = os.getenv("STORAGE_PREFIX", "ojs_")

        self.log_file: str = os.getenv("LOG_FILE", "editorial_backend.log")
        self.log_level: str = os.getenv("LOG_LEVEL", "INFO").upper()

        self.recent_submissions_limit: int = int(
            os.getenv("RECENT_SUBMISSIONS_LIMIT", 8)
        )
        self._validate()

    @property
    def logging_level(self) -> int:
        return logging.getLevelName(self.log_level)

    def _validate(self):
        if self.store_backend not in BACKENDS:
            raise ValueError(
                f"STORE_BACKEND must be one of {', '.join(BACKENDS)}"
            )
        if not self.storage_prefix:
            raise ValueError("STORAGE_PREFIX cannot be empty")
        if not isinstance(logging.getLevelName(self.log_level), int):
            raise ValueError(f"Unknown LOG_LEVEL {self.log_level}")
        if self.recent_submissions_limit <= 0:
            raise ValueError("RECENT_SUBMISSIONS_LIMIT must be positive")


config = Config()
