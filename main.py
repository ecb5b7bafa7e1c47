#!/usr/bin/env python3
"""
Import Graph - Main Entry Point

Builds file dependency graphs from import statements and walks
their ancestors and descendants.
"""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent))

from importgraph.cli import main

if __name__ == "__main__":
    main()
