"""
Logging utilities: framework-agnostic re-exports.

Re-exports from utils.logger and utils.logging_config so application code
imports from shared.logging only.
"""

from utils.logger import get_logger, hash_ip
from utils.logging_config import setup_logging

__all__ = [
    "get_logger",
    "hash_ip",
    "setup_logging",
]
