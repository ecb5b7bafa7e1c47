"""
Unit tests for core module components.
"""

import json
import os
import re
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from importgraph.core.config import Config, GraphOptions, ImportGraphConfig
from importgraph.core.exceptions import (
    ImportGraphError,
    EntryInvalidError,
    BuildError,
    ReadFailureError,
    UnresolvedReferenceError,
    NodeNotFoundError,
    CyclicDependencyError,
)


class TestGraphOptions(unittest.TestCase):
    """Tests for graph construction options."""

    def test_defaults(self):
        """Test that default options match the documented defaults."""
        options = GraphOptions()

        self.assertEqual(options.load_paths, [os.path.realpath(os.getcwd())])
        self.assertEqual(options.extensions, ["js"])
        self.assertEqual(options.extension_prefixes, [])
        self.assertEqual(options.dependency_pattern, "js")
        self.assertEqual(options.include, [])
        self.assertEqual(options.exclude, [])
        self.assertTrue(options.relative_parents)

    def test_extensions_lose_leading_dot(self):
        """Test extension normalization."""
        options = GraphOptions(extensions=[".scss", "css"])

        self.assertEqual(options.extensions, ["scss", "css"])

    def test_load_paths_are_absolute_and_unique(self):
        """Test load path normalization keeps order and drops duplicates."""
        with tempfile.TemporaryDirectory() as tmpdir:
            real = os.path.realpath(tmpdir)
            options = GraphOptions(load_paths=[tmpdir, real + os.sep, "/"])

            self.assertEqual(options.load_paths, [real, "/"])


class TestConfig(unittest.TestCase):
    """Tests for configuration management."""

    def setUp(self):
        Config.reset()

    def tearDown(self):
        Config.reset()

    def test_default_config(self):
        """Test that default configuration is created correctly."""
        config = Config.get()

        self.assertIsInstance(config, ImportGraphConfig)
        self.assertIsInstance(config.graph, GraphOptions)
        self.assertFalse(config.verbose)
        self.assertEqual(config.log_level, "WARNING")
        self.assertIsNone(config.log_file)

    def test_singleton(self):
        """Test that the same configuration is returned until reset."""
        self.assertIs(Config.get(), Config.get())

    def test_config_save_and_load(self):
        """Test configuration serialization and deserialization."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            config = Config.get()
            config.graph = GraphOptions(
                load_paths=[tmpdir],
                extensions=["scss"],
                exclude=["vendor"],
                dependency_pattern="scss",
            )

            Config.save_to_file(str(config_path))

            with open(config_path) as f:
                data = json.load(f)
            self.assertIn("graph", data)
            self.assertEqual(data["graph"]["extensions"], ["scss"])

            Config.reset()
            loaded = Config.load_from_file(str(config_path))

            self.assertEqual(loaded.graph.extensions, ["scss"])
            self.assertEqual(loaded.graph.exclude, ["vendor"])
            self.assertEqual(loaded.graph.dependency_pattern, "scss")
            self.assertEqual(loaded.graph.load_paths, [os.path.realpath(tmpdir)])

    def test_custom_pattern_round_trip(self):
        """Test that a compiled custom pattern survives save and load."""
        with tempfile.TemporaryDirectory() as tmpdir:
            config_path = Path(tmpdir) / "config.json"
            Config.get().graph = GraphOptions(dependency_pattern=re.compile(r"use\s(.+)"))

            Config.save_to_file(str(config_path))
            loaded = Config.load_from_file(str(config_path))

            patterns = loaded.graph.dependency_pattern
            self.assertEqual(len(patterns), 1)
            self.assertEqual(patterns[0].pattern, r"use\s(.+)")

    def test_load_missing_file(self):
        """Test that a missing configuration file raises."""
        with self.assertRaises(FileNotFoundError):
            Config.load_from_file("/nonexistent/importgraph.json")

    def test_load_from_env(self):
        """Test environment variable overrides."""
        with tempfile.TemporaryDirectory() as tmpdir:
            env = {
                "IMPORTGRAPH_LOAD_PATHS": tmpdir,
                "IMPORTGRAPH_EXTENSIONS": "ts, .tsx",
                "IMPORTGRAPH_EXCLUDE": "node_modules,dist",
                "IMPORTGRAPH_DEPENDENCY_PATTERN": "es6",
                "IMPORTGRAPH_VERBOSE": "yes",
            }
            with mock.patch.dict(os.environ, env):
                config = Config.load_from_env(os.path.join(tmpdir, "missing.env"))

            self.assertEqual(config.graph.load_paths, [os.path.realpath(tmpdir)])
            self.assertEqual(config.graph.extensions, ["ts", "tsx"])
            self.assertEqual(config.graph.exclude, ["node_modules", "dist"])
            self.assertEqual(config.graph.dependency_pattern, "es6")
            self.assertTrue(config.verbose)

    def test_load_from_dotenv_file(self):
        """Test that a .env file feeds the environment overrides."""
        with tempfile.TemporaryDirectory() as tmpdir:
            dotenv_path = os.path.join(tmpdir, ".env")
            with open(dotenv_path, "w") as f:
                f.write("IMPORTGRAPH_INCLUDE=src\nIMPORTGRAPH_LOG_LEVEL=debug\n")

            with mock.patch.dict(os.environ, {}, clear=False):
                os.environ.pop("IMPORTGRAPH_INCLUDE", None)
                os.environ.pop("IMPORTGRAPH_LOG_LEVEL", None)
                config = Config.load_from_env(dotenv_path)

            self.assertEqual(config.graph.include, ["src"])
            self.assertEqual(config.log_level, "DEBUG")


class TestExceptions(unittest.TestCase):
    """Tests for the exception hierarchy."""

    def test_base_error_stage_prefix(self):
        """Test that the stage prefixes the message."""
        error = ImportGraphError("boom", stage="Test", details={"a": 1})

        self.assertEqual(str(error), "[Test] boom")
        self.assertEqual(error.details, {"a": 1})

    def test_base_error_without_stage(self):
        """Test the message without a stage."""
        self.assertEqual(str(ImportGraphError("boom")), "boom")

    def test_entry_invalid(self):
        """Test entry errors carry the path."""
        error = EntryInvalidError("/missing")

        self.assertIsInstance(error, ImportGraphError)
        self.assertEqual(error.path, "/missing")
        self.assertEqual(error.stage, "Discovery")
        self.assertIn("/missing", str(error))

    def test_read_failure_is_build_error(self):
        """Test read failures are build failures with the offending path."""
        error = ReadFailureError("/a.js", "Permission denied")

        self.assertIsInstance(error, BuildError)
        self.assertEqual(error.path, "/a.js")
        self.assertEqual(error.stage, "GraphConstruction")
        self.assertEqual(error.details["reason"], "Permission denied")

    def test_unresolved_reference(self):
        """Test unresolved reference details."""
        error = UnresolvedReferenceError("lodash", "/a.js")

        self.assertEqual(error.reference, "lodash")
        self.assertEqual(error.referencing_path, "/a.js")
        self.assertEqual(error.stage, "Resolution")
        self.assertIn("lodash", str(error))

    def test_node_not_found(self):
        """Test traversal errors."""
        error = NodeNotFoundError("/a.js")

        self.assertEqual(error.stage, "Traversal")
        self.assertIn("doesn't contain /a.js", str(error))

    def test_cyclic_dependency(self):
        """Test cycle errors list the cycle."""
        error = CyclicDependencyError(["/a.js", "/b.js"])

        self.assertEqual(error.cycle, ["/a.js", "/b.js"])
        self.assertIn("/a.js -> /b.js", str(error))


if __name__ == "__main__":
    unittest.main()
