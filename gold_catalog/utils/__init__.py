"""
Utility modules.

Common helpers for configuration loading and logging.
"""

from gold_catalog.utils.config_loader import AppConfig, load_config, load_env
from gold_catalog.utils.logging_config import setup_logging

__all__ = [
    "load_config",
    "load_env",
    "AppConfig",
    "setup_logging",
]
