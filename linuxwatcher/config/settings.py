"""Application settings — read from a hand-edited JSON file."""

import json
import logging
import os
from dataclasses import dataclass

from linuxwatcher.core.fetcher import (
    CONNECT_TIMEOUT, KERNEL_MAKEFILE_URL, PREFIX_BYTES, READ_TIMEOUT,
)

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = os.path.join(os.environ.get('LOCALAPPDATA', '.'), 'LinuxWatcher')


@dataclass
class AppSettings:
    """Application settings; the app only reads them."""
    # Fetch
    makefile_url: str = KERNEL_MAKEFILE_URL
    connect_timeout: float = CONNECT_TIMEOUT     # seconds
    read_timeout: float = READ_TIMEOUT           # seconds
    prefix_bytes: int = PREFIX_BYTES             # Max bytes read from the body

    # Appearance
    font_size: int = 20                          # Point size of the version string

    # Paths
    data_dir: str = ""

    def __post_init__(self):
        if not self.data_dir:
            self.data_dir = DEFAULT_DATA_DIR

    @staticmethod
    def load(path: str | None = None) -> 'AppSettings':
        """Load settings from JSON. Returns defaults if file doesn't exist."""
        if path is None:
            path = os.path.join(DEFAULT_DATA_DIR, 'settings.json')

        if not os.path.isfile(path):
            logger.info("No settings file, using defaults")
            return AppSettings()

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            settings = AppSettings(**{k: v for k, v in data.items()
                                      if k in AppSettings.__dataclass_fields__})
            logger.info("Loaded settings from %s", path)
            return settings
        except Exception as e:
            logger.warning("Failed to load settings: %s", e)
            return AppSettings()

    def ensure_dirs(self):
        """Create data directories if they don't exist."""
        os.makedirs(self.data_dir, exist_ok=True)
        os.makedirs(os.path.join(self.data_dir, 'logs'), exist_ok=True)
