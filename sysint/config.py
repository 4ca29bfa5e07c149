"""Configuration management for the PVFS2 client tools."""

import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Optional

from common.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_ENV_VAR = "PVFS2_CONFIG"


def default_config_path() -> Path:
    """Config file location, overridable with PVFS2_CONFIG."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override)
    return Path.home() / '.pvfs2' / 'config.json'


class Config:
    """Manages client configuration stored in JSON file."""

    def __init__(self, config_path: Path):
        """
        Initialize configuration manager.

        Args:
            config_path: Path to config JSON file (typically ~/.pvfs2/config.json)
        """
        self.config_path = config_path
        self.data = self._load()

    @staticmethod
    def defaults() -> dict:
        return {
            "gateway_host": os.environ.get("PVFS2_GATEWAY_HOST", "localhost"),
            "gateway_port": int(os.environ.get("PVFS2_GATEWAY_PORT", "3380")),
            "timeout": 30,
            "max_retries": 3,
            "retry_backoff_multiplier": 2,
            "tabfile": None,
        }

    def _load(self) -> dict:
        """
        Load configuration from file, creating defaults if necessary.

        Returns:
            Configuration dictionary
        """
        try:
            self.config_path.parent.mkdir(parents=True, exist_ok=True)
        except PermissionError:
            self.config_path = Path(tempfile.gettempdir()) / '.pvfs2' / 'config.json'
            self.config_path.parent.mkdir(parents=True, exist_ok=True)

        config = self.defaults()
        if not self.config_path.exists():
            self._write_defaults(config)
            return config

        try:
            with open(self.config_path, 'r') as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError(f"expected a JSON object, got {type(data).__name__}")
            config.update(data)
            return config
        except (ValueError, OSError) as e:
            logger.warning(f"Config file {self.config_path} is unreadable, using defaults: {e}")
            backup_path = self.config_path.with_suffix('.json.bak')
            try:
                shutil.copy(self.config_path, backup_path)
            except OSError as copy_error:
                logger.warning(f"Could not back up config file: {copy_error}")
            self._write_defaults(config)
            return config

    def _write_defaults(self, config: dict) -> None:
        try:
            with open(self.config_path, 'w') as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.warning(f"Could not write default config to {self.config_path}: {e}")

    def get_base_url(self) -> str:
        """
        Get cluster gateway base URL.

        Returns:
            Base URL string (e.g., "http://localhost:3380")
        """
        host = self.data.get('gateway_host', 'localhost')
        port = self.data.get('gateway_port', 3380)
        return f"http://{host}:{port}"

    def get_timeout(self) -> int:
        return self.data.get('timeout', 30)

    def get_retry_config(self) -> dict:
        """
        Get retry configuration for read requests.

        Returns:
            Dictionary with 'max_retries' and 'retry_backoff_multiplier'
        """
        return {
            'max_retries': self.data.get('max_retries', 3),
            'retry_backoff_multiplier': self.data.get('retry_backoff_multiplier', 2),
        }

    def get_tabfile(self) -> Optional[str]:
        """Explicit mount table path, or None to use the standard locations."""
        return self.data.get('tabfile')
