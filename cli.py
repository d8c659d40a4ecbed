"""
FolderSync Client - CLI Mode Module

Implements the command-line operations. Uses stored credentials when
present, logs to a timestamped file and returns process exit codes.

Author: FolderSync Project
"""

import asyncio
import getpass
import sys
import logging
from pathlib import Path
from datetime import datetime
from typing import List, Optional

from managers import ConfigManager
from managers.config_manager import get_base_dir
from exceptions import FolderSyncAPIError, FolderSyncAuthError
from operations import SyncContext, SyncCoordinator, UploadCatalog
from version import VERSION


# Exit codes
EXIT_SUCCESS = 0
EXIT_FAILURE = 1
EXIT_CONFIG_ERROR = 2
EXIT_AUTH_ERROR = 3


def setup_cli_logging(config_manager: ConfigManager) -> Path:
    """
    Setup logging for CLI mode with timestamped log file.

    Creates log file with format: foldersync-YYYY-MM-DD-HH-MM-SS.log
    in a "logs" subdirectory next to the executable or in the current directory.

    Args:
        config_manager: ConfigManager instance for log settings

    Returns:
        Path to the created log file
    """
    log_level = config_manager.get("log_level", "INFO")

    timestamp = datetime.now().strftime("%Y-%m-%d-%H-%M-%S")
    log_filename = f"foldersync-{timestamp}.log"

    log_dir = get_base_dir() / "logs"
    log_dir.mkdir(exist_ok=True)

    log_file = log_dir / log_filename

    logging.basicConfig(
        level=getattr(logging, log_level.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        handlers=[
            logging.FileHandler(log_file),
            logging.StreamHandler(sys.stdout)  # Also output to console
        ]
    )

    logger = logging.getLogger(__name__)
    logger.info(f"FolderSync {VERSION} CLI Mode - Log file: {log_file}")
    logger.info(f"Log level: {log_level}")

    return log_file


def cleanup_old_logs(config_manager: ConfigManager, current_log: Path):
    """
    Delete log files older than retention period.

    Args:
        config_manager: ConfigManager instance for retention settings
        current_log: Path to current log file (don't delete this)
    """
    logger = logging.getLogger(__name__)
    retention_days = config_manager.get("log_retention_days", 30)

    if retention_days <= 0:
        return  # Retention disabled

    log_dir = current_log.parent
    cutoff_time = datetime.now().timestamp() - (retention_days * 86400)

    deleted_count = 0
    for log_file in log_dir.glob("foldersync-*.log"):
        if log_file == current_log:
            continue

        try:
            if log_file.stat().st_mtime < cutoff_time:
                log_file.unlink()
                deleted_count += 1
        except OSError as e:
            logger.warning(f"Failed to delete old log file {log_file}: {e}")

    if deleted_count > 0:
        logger.info(f"Deleted {deleted_count} old log file(s)")


def login_if_configured(config_manager: ConfigManager, api_client) -> bool:
    """
    Open a server session when credentials are stored.

    Returns:
        True if logged in, False if no credentials are stored

    Raises:
        FolderSyncAuthError: If the stored credentials are rejected
    """
    logger = logging.getLogger(__name__)
    credentials = config_manager.get_credentials()
    if not credentials:
        logger.info("No stored credentials, uploading without a session")
        return False

    email_address, password = credentials
    api_client.login(email_address, password)
    return True


def store_login(config_manager: ConfigManager, api_client, email_address: str, password: str):
    """
    Log in and, once the server accepts the credentials, store them.

    Raises:
        FolderSyncAuthError: If the credentials are rejected (nothing is stored)
    """
    logger = logging.getLogger(__name__)
    api_client.login(email_address, password)
    config_manager.store_credentials(email_address, password)
    logger.info(f"Stored credentials for {email_address}")


async def run_sync(context: SyncContext, folders: List[str]) -> SyncCoordinator:
    """Sync the given folders and wait for every upload to finish."""
    logger = logging.getLogger(__name__)
    coordinator = SyncCoordinator(context)

    def cli_progress_callback(message: str, current: int, total: int):
        if total > 0:
            percentage = (current / total) * 100
            logger.info(f"[{percentage:5.1f}%] {message}")
        else:
            logger.info(message)

    await coordinator.sync_all(folders, cli_progress_callback)
    logger.info(f"Waiting for {coordinator.in_flight} upload(s) to finish")
    await coordinator.drain()
    return coordinator


def run_cli_operation(operation: str, folders: Optional[List[str]] = None,
                      folder_ids: Optional[List[int]] = None,
                      config_file: Optional[str] = None,
                      email_address: Optional[str] = None) -> int:
    """
    Execute a CLI operation.

    Process:
    1. Load configuration and setup logging
    2. Build the sync context and API client
    3. Login when credentials are stored
    4. Execute requested operation
    5. Return appropriate exit code

    Args:
        operation: "sync", "list", "publish", "unpublish" or "login"
        folders: Root folders for sync
        folder_ids: Server folder ids for list/publish/unpublish
        config_file: Optional path to config.json
        email_address: Account email for login (defaults to the stored one)

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    logger = None
    context = None
    folders = list(folders or [])
    folder_ids = list(folder_ids or [])

    try:
        config_mgr = ConfigManager(config_file)
        config_mgr.load_config()
        log_file = setup_cli_logging(config_mgr)
        logger = logging.getLogger(__name__)

        cleanup_old_logs(config_mgr, log_file)

        logger.info("=" * 60)
        logger.info(f"Starting FolderSync CLI: {operation.upper()}")
        logger.info("=" * 60)

        context = SyncContext.from_config(config_mgr)
        api_client = context.api
        logger.info(f"Server: {api_client.base_url}")

        if operation == "sync":
            if not folders:
                folders = list(config_mgr.get("root_folders") or [])
            if not folders:
                logger.error("No folders given. Pass folders on the command line or set root_folders in config.")
                return EXIT_CONFIG_ERROR

            login_if_configured(config_mgr, api_client)
            coordinator = asyncio.run(run_sync(context, folders))

            transport = coordinator.transport
            logger.info("=" * 60)
            logger.info(f"SYNC COMPLETED: {transport.sent_count} sent, "
                        f"{len(context.tracker)} acknowledged, {transport.failed_count} failed")
            logger.info("=" * 60)
            return EXIT_SUCCESS

        if operation == "login":
            email_address = email_address or config_mgr.get("email_address")
            if not email_address:
                logger.error("login requires --email")
                return EXIT_CONFIG_ERROR

            password = getpass.getpass(f"Password for {email_address}: ")
            store_login(config_mgr, api_client, email_address, password)
            return EXIT_SUCCESS

        if not folder_ids:
            logger.error(f"{operation} requires --folder-ids")
            return EXIT_CONFIG_ERROR

        login_if_configured(config_mgr, api_client)

        if operation == "list":
            catalog = UploadCatalog()
            catalog.refresh(api_client, folder_ids)
            for category, count in catalog.counts().items():
                logger.info(f"{category}: {count} file(s)")
            return EXIT_SUCCESS
        elif operation == "publish":
            api_client.publish_folders(folder_ids)
            logger.info(f"Published folders {folder_ids}")
            return EXIT_SUCCESS
        elif operation == "unpublish":
            api_client.unpublish_folders(folder_ids)
            logger.info(f"Unpublished folders {folder_ids}")
            return EXIT_SUCCESS
        else:
            logger.error(f"Unknown operation: {operation}")
            return EXIT_FAILURE

    except FolderSyncAuthError as e:
        if logger:
            logger.error(f"Authentication failed: {e}")
        else:
            print(f"Authentication failed: {e}", file=sys.stderr)
        return EXIT_AUTH_ERROR

    except FolderSyncAPIError as e:
        if logger:
            logger.error(f"API Error: {e}")
        else:
            print(f"API Error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    except KeyboardInterrupt:
        if logger:
            logger.warning("Operation cancelled by user (Ctrl+C)")
        else:
            print("\nOperation cancelled by user", file=sys.stderr)
        return EXIT_FAILURE

    except Exception as e:
        if logger:
            logger.exception(f"Unexpected error: {e}")
        else:
            print(f"Unexpected error: {e}", file=sys.stderr)
        return EXIT_FAILURE

    finally:
        if context is not None:
            context.api.close()
