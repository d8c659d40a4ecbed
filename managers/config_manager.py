"""
FolderSync Client - Configuration Manager

Handles loading and saving client configuration from/to config.json.
Manages OS credential store integration for password storage.

Author: FolderSync Project
"""

import copy
import json
import logging
import sys
from pathlib import Path
from typing import Optional, Dict, Any, Union

# Configure logging
logger = logging.getLogger(__name__)


KEYRING_SERVICE = "FolderSync"

# Default configuration values
DEFAULT_CONFIG = {
    "server_url": "http://127.0.0.1",
    "server_port": 3002,
    "uploads_endpoint": "/uploads",
    "verify_ssl": True,
    "request_timeout": 30,
    "max_concurrent_uploads": 4,  # Upper bound on uploads in flight at once
    "email_address": None,  # Email stored in config, password in OS credential store
    "root_folders": [],  # Folders synced when none are given on the command line
    "ignore_names": [],  # Extra exact names skipped during the crawl
    "log_level": "INFO",
    "log_retention_days": 30
}


def get_base_dir() -> Path:
    """Directory holding config.json, logs and the ignore file."""
    if getattr(sys, 'frozen', False):
        # Running as compiled executable
        return Path(sys.executable).parent
    # Running as script
    return Path.cwd()


class ConfigManager:
    """
    Manages client configuration and credentials.

    Responsibilities:
    - Load/save config.json next to the executable (same location as logs folder)
    - Store/retrieve password from OS credential store via keyring
    - Provide configuration values to other modules
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional explicit path to config.json
        """
        if config_file:
            self.config_file = Path(config_file)
        else:
            self.config_file = get_base_dir() / "config.json"
        self.config: Dict[str, Any] = copy.deepcopy(DEFAULT_CONFIG)

    def load_config(self) -> Dict[str, Any]:
        """
        Load configuration from config.json.
        Creates default config if file doesn't exist.

        Returns:
            Configuration dictionary
        """
        if self.config_file.exists():
            logger.debug(f"Loading configuration from {self.config_file}")
            with open(self.config_file, 'r') as f:
                self.config = json.load(f)
            # Merge with defaults for any missing keys
            for key, value in DEFAULT_CONFIG.items():
                if key not in self.config:
                    self.config[key] = copy.deepcopy(value)
            logger.info("Configuration loaded successfully")
        else:
            logger.info(f"Configuration file not found, creating default at {self.config_file}")
            self.config = copy.deepcopy(DEFAULT_CONFIG)
            self.save_config()

        return self.config

    def save_config(self):
        """Save current configuration to config.json."""
        logger.debug(f"Saving configuration to {self.config_file}")
        with open(self.config_file, 'w') as f:
            json.dump(self.config, f, indent=2)
        logger.debug("Configuration saved successfully")

    def get(self, key: str, default=None) -> Any:
        """
        Get configuration value.

        Args:
            key: Configuration key
            default: Default value if key not found

        Returns:
            Configuration value
        """
        return self.config.get(key, default)

    def set(self, key: str, value: Any):
        """
        Set configuration value and save to file.

        Args:
            key: Configuration key
            value: Configuration value
        """
        self.config[key] = value
        self.save_config()

    def get_max_concurrent_uploads(self) -> int:
        """Concurrency cap for uploads, never below one."""
        try:
            return max(1, int(self.get("max_concurrent_uploads", 4)))
        except (TypeError, ValueError):
            logger.warning("Invalid max_concurrent_uploads in config, using 1")
            return 1

    def store_credentials(self, email_address: str, password: str):
        """
        Store credentials in OS credential store.

        Args:
            email_address: Account email to store
            password: Password to store (securely in OS credential store)
        """
        import keyring

        logger.info(f"Storing credentials for user: {email_address}")

        # Store email in config.json
        self.set("email_address", email_address)

        # Store password in OS credential store
        keyring.set_password(KEYRING_SERVICE, email_address, password)

        logger.debug("Credentials stored successfully")

    def get_credentials(self) -> Optional[tuple[str, str]]:
        """
        Retrieve credentials from OS credential store.

        Returns:
            Tuple of (email_address, password) or None if not found
        """
        import keyring

        logger.debug("Retrieving credentials from OS credential store")

        email_address = self.get("email_address")
        if not email_address:
            logger.debug("No email address found in configuration")
            return None

        password = keyring.get_password(KEYRING_SERVICE, email_address)
        if not password:
            logger.warning(f"No password found in credential store for user: {email_address}")
            return None

        logger.debug(f"Credentials retrieved successfully for user: {email_address}")
        return (email_address, password)
