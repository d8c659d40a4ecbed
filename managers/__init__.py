"""
FolderSync Client - Managers Package

Contains manager classes for configuration and folder traversal.

Author: FolderSync Project
"""

from .config_manager import ConfigManager, DEFAULT_CONFIG
from .folder_walker import FolderWalker

__all__ = [
    'ConfigManager',
    'DEFAULT_CONFIG',
    'FolderWalker'
]
