"""
Utility functions and helpers.

Provides common utilities used across the codebase.
"""

from importgraph.utils.logging_config import setup_logging, parse_level
from importgraph.utils.validation import validate_entry
from importgraph.utils.fs import AsyncFileSystem
from importgraph.utils.concurrency import WaitGroup

__all__ = [
    "setup_logging",
    "parse_level",
    "validate_entry",
    "AsyncFileSystem",
    "WaitGroup",
]
