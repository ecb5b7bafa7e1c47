"""
Custom exceptions for the import graph.

Provides a hierarchy of exceptions for the discovery, construction,
resolution and traversal phases, enabling precise error handling and
clear failure reporting.
"""


class ImportGraphError(Exception):
    """Base exception for all import graph errors."""

    def __init__(self, message: str, stage: str = None, details: dict = None):
        super().__init__(message)
        self.stage = stage
        self.details = details or {}

    def __str__(self):
        base_msg = super().__str__()
        if self.stage:
            return f"[{self.stage}] {base_msg}"
        return base_msg


class EntryInvalidError(ImportGraphError):
    """Raised when the entry point is neither a file nor a directory."""

    def __init__(self, path: str, reason: str = None):
        reason = reason or f"Entry is neither a file nor a directory: {path}"
        super().__init__(
            reason,
            stage="Discovery",
            details={"path": path, "reason": reason},
        )
        self.path = path


class BuildError(ImportGraphError):
    """Raised when graph construction fails."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message, stage="GraphConstruction", details=details)


class ReadFailureError(BuildError):
    """Raised when the content of a discovered file cannot be read."""

    def __init__(self, path: str, reason: str):
        super().__init__(
            f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )
        self.path = path


class UnresolvedReferenceError(ImportGraphError):
    """Raised when a reference maps to no file under any search directory."""

    def __init__(self, reference: str, referencing_path: str = None):
        super().__init__(
            f"Cannot resolve '{reference}'"
            + (f" referenced from {referencing_path}" if referencing_path else ""),
            stage="Resolution",
            details={"reference": reference, "referencing_path": referencing_path},
        )
        self.reference = reference
        self.referencing_path = referencing_path


class NodeNotFoundError(ImportGraphError):
    """Raised when a traversal starts from a file the graph does not contain."""

    def __init__(self, path: str):
        super().__init__(
            f"Graph doesn't contain {path}",
            stage="Traversal",
            details={"path": path},
        )
        self.path = path


class CyclicDependencyError(ImportGraphError):
    """Raised when a build order is requested for a cyclic graph."""

    def __init__(self, cycle: list):
        super().__init__(
            "Dependency cycle detected: " + " -> ".join(cycle),
            stage="Traversal",
            details={"cycle": cycle},
        )
        self.cycle = cycle
