"""
Input validation utilities.

Classifies graph entry points before a build starts.
"""

import glob
import os
from pathlib import Path
from typing import Optional, Tuple


def validate_entry(entry: str) -> Tuple[str, bool, Optional[str]]:
    """
    Validate and classify a graph entry point.
    
    Args:
        entry: File path, directory path or glob pattern.
        
    Returns:
        Tuple of (entry_type, is_valid, error_message) where entry_type
        is "file", "directory", "pattern" or "unknown".
    """
    if not entry:
        return "unknown", False, "Entry cannot be empty"

    try:
        path_obj = Path(entry).resolve()
    except (OSError, RuntimeError) as e:
        return "unknown", False, f"Invalid path format: {e}"

    if path_obj.is_file():
        if not os.access(path_obj, os.R_OK):
            return "file", False, f"File is not readable: {entry}"
        return "file", True, None

    if path_obj.is_dir():
        return "directory", True, None

    if path_obj.exists():
        return "unknown", False, f"Entry is neither a file nor a directory: {entry}"

    if any(char in entry for char in "*?["):
        if glob.glob(entry, recursive=True):
            return "pattern", True, None
        return "pattern", False, f"Pattern matched no files: {entry}"

    return "unknown", False, f"Path does not exist: {entry}"
