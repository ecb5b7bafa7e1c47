"""
Configuration management for the import graph.

Provides centralized configuration for graph construction with
sensible defaults, environment overrides and JSON persistence.
"""

import os
import json
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Pattern, Sequence, Union

from dotenv import load_dotenv

DependencyPattern = Union[str, Pattern, Sequence[Pattern]]

ENV_PREFIX = "IMPORTGRAPH_"


def _split_list(value: str, separator: str = ",") -> List[str]:
    return [item.strip() for item in value.split(separator) if item.strip()]


@dataclass
class GraphOptions:
    """Options controlling how a dependency graph is built."""

    # Ordered search directories used to resolve references
    load_paths: List[str] = field(default_factory=lambda: [os.getcwd()])

    # Accepted file extensions; order encodes preference
    extensions: List[str] = field(default_factory=lambda: ["js"])

    # Filename infixes before the extension, only used when scanning a directory
    extension_prefixes: List[str] = field(default_factory=list)

    # Named syntax ("js", "es6", "scss", "commonjs") or custom compiled pattern(s)
    dependency_pattern: DependencyPattern = "js"

    # Path substrings; a file is kept only if it contains one of these
    include: List[str] = field(default_factory=list)

    # Path substrings; a matching file is never read or expanded
    exclude: List[str] = field(default_factory=list)

    # Store parents relative to the first load path that contains them
    relative_parents: bool = True

    def __post_init__(self):
        self.extensions = [ext.lstrip(".") for ext in self.extensions if ext]

        load_paths = []
        for load_path in self.load_paths:
            resolved = os.path.realpath(os.path.abspath(load_path))
            if resolved not in load_paths:
                load_paths.append(resolved)
        self.load_paths = load_paths


@dataclass
class ImportGraphConfig:
    """Master configuration."""

    graph: GraphOptions = field(default_factory=GraphOptions)

    # Enable verbose logging
    verbose: bool = False

    log_level: str = "WARNING"

    log_file: Optional[str] = None


class Config:
    """
    Central configuration manager providing access to all settings.

    Supports loading from environment variables (and a ``.env`` file)
    and from JSON configuration files.
    """

    _instance: Optional["Config"] = None
    _config: ImportGraphConfig = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._config = ImportGraphConfig()
        return cls._instance

    @classmethod
    def get(cls) -> ImportGraphConfig:
        """Get the current configuration."""
        if cls._instance is None:
            cls()
        return cls._instance._config

    @classmethod
    def reset(cls) -> None:
        """Drop the current configuration (mainly for testing)."""
        cls._instance = None

    @classmethod
    def load_from_file(cls, config_path: str) -> ImportGraphConfig:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file.

        Returns:
            Loaded ImportGraphConfig instance.
        """
        config_path = Path(config_path)
        if not config_path.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_path}")

        with open(config_path, "r") as f:
            data = json.load(f)

        instance = cls()
        instance._config = cls._dict_to_config(data)
        return instance._config

    @classmethod
    def load_from_env(cls, dotenv_path: Optional[str] = None) -> ImportGraphConfig:
        """
        Load configuration from environment variables.

        Variables are prefixed with IMPORTGRAPH_. A ``.env`` file is read
        first; variables already set in the environment take precedence.

        Returns:
            ImportGraphConfig with environment overrides applied.
        """
        load_dotenv(dotenv_path)

        instance = cls()
        config = instance._config
        options = config.graph

        if os.getenv(f"{ENV_PREFIX}LOAD_PATHS"):
            options.load_paths = _split_list(
                os.getenv(f"{ENV_PREFIX}LOAD_PATHS"), os.pathsep
            )

        if os.getenv(f"{ENV_PREFIX}EXTENSIONS"):
            options.extensions = _split_list(os.getenv(f"{ENV_PREFIX}EXTENSIONS"))

        if os.getenv(f"{ENV_PREFIX}EXTENSION_PREFIXES"):
            options.extension_prefixes = _split_list(
                os.getenv(f"{ENV_PREFIX}EXTENSION_PREFIXES")
            )

        if os.getenv(f"{ENV_PREFIX}DEPENDENCY_PATTERN"):
            options.dependency_pattern = os.getenv(f"{ENV_PREFIX}DEPENDENCY_PATTERN")

        if os.getenv(f"{ENV_PREFIX}INCLUDE"):
            options.include = _split_list(os.getenv(f"{ENV_PREFIX}INCLUDE"))

        if os.getenv(f"{ENV_PREFIX}EXCLUDE"):
            options.exclude = _split_list(os.getenv(f"{ENV_PREFIX}EXCLUDE"))

        # Re-run normalization on the overridden values
        options.__post_init__()

        if os.getenv(f"{ENV_PREFIX}VERBOSE"):
            config.verbose = os.getenv(f"{ENV_PREFIX}VERBOSE").lower() in ("true", "1", "yes")

        if os.getenv(f"{ENV_PREFIX}LOG_LEVEL"):
            config.log_level = os.getenv(f"{ENV_PREFIX}LOG_LEVEL").upper()

        if os.getenv(f"{ENV_PREFIX}LOG_FILE"):
            config.log_file = os.getenv(f"{ENV_PREFIX}LOG_FILE")

        return config

    @staticmethod
    def _dict_to_config(data: dict) -> ImportGraphConfig:
        """Convert a dictionary to ImportGraphConfig."""
        config = ImportGraphConfig()

        if "graph" in data:
            graph_data = dict(data["graph"])
            # Custom patterns are persisted as a list of regex sources
            if isinstance(graph_data.get("dependency_pattern"), list):
                graph_data["dependency_pattern"] = [
                    re.compile(source) for source in graph_data["dependency_pattern"]
                ]
            config.graph = GraphOptions(**graph_data)

        if "verbose" in data:
            config.verbose = data["verbose"]

        if "log_level" in data:
            config.log_level = data["log_level"]

        if "log_file" in data:
            config.log_file = data["log_file"]

        return config

    @classmethod
    def save_to_file(cls, config_path: str) -> None:
        """
        Save current configuration to a JSON file.

        Args:
            config_path: Path to save the configuration file.
        """
        config_path = Path(config_path)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        config = cls.get()
        data = cls._config_to_dict(config)

        with open(config_path, "w") as f:
            json.dump(data, f, indent=2)

    @staticmethod
    def _config_to_dict(config: ImportGraphConfig) -> dict:
        """Convert ImportGraphConfig to a dictionary."""
        pattern = config.graph.dependency_pattern
        if isinstance(pattern, re.Pattern):
            pattern = [pattern.pattern]
        elif not isinstance(pattern, str):
            pattern = [p.pattern for p in pattern]

        return {
            "graph": {
                "load_paths": config.graph.load_paths,
                "extensions": config.graph.extensions,
                "extension_prefixes": config.graph.extension_prefixes,
                "dependency_pattern": pattern,
                "include": config.graph.include,
                "exclude": config.graph.exclude,
                "relative_parents": config.graph.relative_parents,
            },
            "verbose": config.verbose,
            "log_level": config.log_level,
            "log_file": config.log_file,
        }
