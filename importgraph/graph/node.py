"""
Node record of the dependency graph.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional


@dataclass
class Node:
    """
    One file in the dependency graph.

    ``children`` and ``parents`` behave as sets that keep insertion
    order. ``included`` is None until the include/exclude filters have
    classified the file.
    """

    path: str
    children: List[str] = field(default_factory=list)
    parents: List[str] = field(default_factory=list)
    processed: bool = False
    included: Optional[bool] = None
    is_file: Optional[bool] = None
    modified: Optional[datetime] = None

    def add_child(self, path: str) -> bool:
        """Add a child edge; returns False if it already existed."""
        if path in self.children:
            return False
        self.children.append(path)
        return True

    def add_parent(self, path: str) -> bool:
        """Add a parent edge; returns False if it already existed."""
        if path in self.parents:
            return False
        self.parents.append(path)
        return True

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "path": self.path,
            "children": list(self.children),
            "parents": list(self.parents),
            "processed": self.processed,
            "included": self.included,
            "modified": self.modified.isoformat() if self.modified else None,
        }
