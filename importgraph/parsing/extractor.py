"""
Reference extraction from raw file content.

Turns the text of a source file into the ordered list of raw
reference strings it imports or requires. Matching is a regex
heuristic: it does not parse the host language, which is why the
syntax families are pluggable through :class:`SyntaxRegistry`.
"""

import logging
import re
from typing import Dict, List, Optional, Pattern, Sequence, Union

logger = logging.getLogger(__name__)

ES6_IMPORT_NAME = "es6"
SCSS_IMPORT_NAME = "scss"
COMMONJS_REQUIRE_NAME = "commonjs"
ALL_JS_NAME = "js"

ES6_IMPORT_REGEXP = re.compile(r"(\s|^)import\s(.+?);")
ES6_DYNAMIC_IMPORT_REGEXP = re.compile(r"import\((['\"`][^'\"`]+['\"`])\)")
SCSS_IMPORT_REGEXP = re.compile(r"(\s|^)@import\s(.+?);")
COMMONJS_REQUIRE_REGEXP = re.compile(r"(\s|^|=|\(|,)require\s*\((.+?)\)")

QUOTE_REGEXP = re.compile(r"[\"'](.+?)[\"']")
COMMENTS_REGEXP = re.compile(r"/\*.*?\*/|//[^\n\r]*", re.DOTALL)


class SyntaxRegistry:
    """
    Registry of named syntax families.

    Each family is an ordered list of regular expressions whose last
    capture group holds the quoted reference(s).
    """

    _syntaxes: Dict[str, List[Pattern]] = {}

    @classmethod
    def register(cls, name: str, patterns: Sequence[Pattern]) -> None:
        if name in cls._syntaxes:
            logger.warning(f"Overwriting existing syntax: {name}")
        cls._syntaxes[name] = list(patterns)
        logger.debug(f"Registered syntax {name} with {len(patterns)} pattern(s)")

    @classmethod
    def unregister(cls, name: str) -> None:
        cls._syntaxes.pop(name, None)

    @classmethod
    def get(cls, name: str) -> Optional[List[Pattern]]:
        return cls._syntaxes.get(name)

    @classmethod
    def has_syntax(cls, name: str) -> bool:
        return name in cls._syntaxes

    @classmethod
    def list_syntaxes(cls) -> List[str]:
        return list(cls._syntaxes.keys())


SyntaxRegistry.register(ES6_IMPORT_NAME, [ES6_IMPORT_REGEXP, ES6_DYNAMIC_IMPORT_REGEXP])
SyntaxRegistry.register(SCSS_IMPORT_NAME, [SCSS_IMPORT_REGEXP])
SyntaxRegistry.register(COMMONJS_REQUIRE_NAME, [COMMONJS_REQUIRE_REGEXP])
SyntaxRegistry.register(
    ALL_JS_NAME,
    [ES6_IMPORT_REGEXP, ES6_DYNAMIC_IMPORT_REGEXP, COMMONJS_REQUIRE_REGEXP],
)


class ReferenceExtractor:
    """
    Extracts raw reference strings from file content.

    Pure and synchronous: the same content and syntax always yield
    the same references, and malformed input never raises.
    """

    def __init__(
        self,
        dependency_pattern: Union[str, Pattern, Sequence[Pattern], None] = None,
    ):
        self.configure(dependency_pattern)

    def configure(
        self, dependency_pattern: Union[str, Pattern, Sequence[Pattern], None]
    ) -> None:
        """
        Select the syntax family used by :meth:`parse`.

        Args:
            dependency_pattern: A registered syntax name, a compiled
                pattern, a sequence of compiled patterns, or None for
                the default ``js`` family.
        """
        self.dependency_pattern = dependency_pattern or ALL_JS_NAME

    @property
    def syntax_regexps(self) -> List[Pattern]:
        pattern = self.dependency_pattern
        if isinstance(pattern, re.Pattern):
            return [pattern]
        if isinstance(pattern, str):
            regexps = SyntaxRegistry.get(pattern)
            if regexps is None:
                logger.warning(f"Unknown dependency pattern '{pattern}', using '{ALL_JS_NAME}'")
                regexps = SyntaxRegistry.get(ALL_JS_NAME)
            return regexps
        return list(pattern)

    def parse(self, content: Optional[str]) -> List[str]:
        """
        Extract references from file content.

        Args:
            content: Text of the file; None or empty gives no references.

        Returns:
            References ordered by pattern, then by position in the content.
        """
        if not content:
            return []

        content = COMMENTS_REGEXP.sub("", str(content))

        results = []
        for regexp in self.syntax_regexps:
            for match in regexp.finditer(content):
                group_count = len(match.groups())
                statement = match.group(group_count) if group_count else match.group(0)
                if not statement:
                    continue
                results.extend(q.group(1) for q in QUOTE_REGEXP.finditer(statement))
        return results
