"""
Reference extraction from file content.
"""

from importgraph.parsing.extractor import ReferenceExtractor, SyntaxRegistry

__all__ = [
    "ReferenceExtractor",
    "SyntaxRegistry",
]
