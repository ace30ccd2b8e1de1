"""
Utility modules for the DOM tree builder.
"""

from domtree.utils.config import Config
from domtree.utils.logging import setup_logging, log_exception

__all__ = [
    'Config',
    'setup_logging',
    'log_exception',
]
