"""Utilities for gentoo-devenv."""

from .config_manager import ConfigManager
from .project_detector import ProjectDetector

__all__ = [
    'ConfigManager',
    'ProjectDetector',
]
