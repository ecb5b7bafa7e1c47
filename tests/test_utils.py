"""
Unit tests for utility modules.
"""

import asyncio
import io
import logging
import os
import shutil
import tempfile
import unittest

from importgraph.utils.concurrency import WaitGroup
from importgraph.utils.fs import AsyncFileSystem
from importgraph.utils.logging_config import parse_level, setup_logging
from importgraph.utils.validation import validate_entry


class TestWaitGroup(unittest.IsolatedAsyncioTestCase):
    """Tests for the counted completion barrier."""

    async def test_wait_returns_immediately_when_idle(self):
        """Test waiting with nothing outstanding."""
        group = WaitGroup()

        await asyncio.wait_for(group.wait(), timeout=1)

        self.assertEqual(group.count, 0)

    async def test_wait_blocks_until_done(self):
        """Test the barrier opens when the counter reaches zero."""
        group = WaitGroup()
        group.add(2)
        waiter = asyncio.create_task(group.wait())

        await asyncio.sleep(0)
        self.assertFalse(waiter.done())

        group.done()
        await asyncio.sleep(0)
        self.assertFalse(waiter.done())

        group.done()
        await asyncio.wait_for(waiter, timeout=1)
        self.assertEqual(group.count, 0)

    async def test_reuse_after_zero(self):
        """Test new work closes the barrier again."""
        group = WaitGroup()
        group.add()
        group.done()
        group.add()

        waiter = asyncio.create_task(group.wait())
        await asyncio.sleep(0)
        self.assertFalse(waiter.done())

        group.done()
        await asyncio.wait_for(waiter, timeout=1)

    async def test_done_below_zero(self):
        """Test releasing more work than was added."""
        group = WaitGroup()

        with self.assertRaises(RuntimeError):
            group.done()


class TestAsyncFileSystem(unittest.IsolatedAsyncioTestCase):
    """Tests for the non-blocking filesystem adapter."""

    def setUp(self):
        self.tmpdir = os.path.realpath(tempfile.mkdtemp())
        self.fs = AsyncFileSystem()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    async def test_read_text_replaces_invalid_bytes(self):
        """Test undecodable content does not fail the read."""
        path = os.path.join(self.tmpdir, "latin.js")
        with open(path, "wb") as f:
            f.write(b"require('caf\xe9')")

        content = await self.fs.read_text(path)

        self.assertTrue(content.startswith("require('caf"))
        self.assertIn("\ufffd", content)

    async def test_read_missing_file(self):
        """Test read errors surface as OSError."""
        with self.assertRaises(OSError):
            await self.fs.read_text(os.path.join(self.tmpdir, "missing.js"))

    async def test_list_files_is_sorted_and_includes_hidden(self):
        """Test recursive listing order."""
        for name in ("b.js", ".hidden.js", "sub/a.js", "a.js"):
            path = os.path.join(self.tmpdir, name)
            os.makedirs(os.path.dirname(path), exist_ok=True)
            open(path, "w").close()

        files = await self.fs.list_files(self.tmpdir)

        self.assertEqual(
            [os.path.relpath(f, self.tmpdir) for f in files],
            [".hidden.js", "a.js", "b.js", os.path.join("sub", "a.js")],
        )

    async def test_predicates(self):
        """Test file and directory checks."""
        path = os.path.join(self.tmpdir, "a.js")
        open(path, "w").close()

        self.assertTrue(await self.fs.is_file(path))
        self.assertFalse(await self.fs.is_dir(path))
        self.assertTrue(await self.fs.is_dir(self.tmpdir))
        self.assertFalse(await self.fs.is_file(path + ".missing"))


class TestLoggingConfig(unittest.TestCase):
    """Tests for logging setup."""

    def tearDown(self):
        for handler in logging.root.handlers[:]:
            logging.root.removeHandler(handler)
            handler.close()

    def test_records_go_to_given_stream_and_file(self):
        """Test console and file handlers share level and format."""
        stream = io.StringIO()
        with tempfile.TemporaryDirectory() as tmpdir:
            log_file = os.path.join(tmpdir, "logs", "run.log")

            setup_logging(level="info", log_file=log_file, stream=stream)
            logging.getLogger("importgraph.test").info("built")
            logging.getLogger("importgraph.test").debug("hidden")
            for handler in logging.root.handlers:
                handler.flush()

            with open(log_file) as f:
                file_output = f.read()

        self.assertIn("| INFO     | importgraph.test | built", stream.getvalue())
        self.assertIn("built", file_output)
        self.assertNotIn("hidden", stream.getvalue())

    def test_asyncio_stays_quiet_at_debug(self):
        """Test the event loop logger is not raised to DEBUG."""
        setup_logging(level="DEBUG", stream=io.StringIO())

        self.assertEqual(logging.getLogger("asyncio").level, logging.WARNING)

    def test_parse_level(self):
        """Test level names are case insensitive and validated."""
        self.assertEqual(parse_level("debug"), logging.DEBUG)
        self.assertEqual(parse_level("WARNING"), logging.WARNING)
        with self.assertRaises(ValueError):
            parse_level("chatty")


class TestValidation(unittest.TestCase):
    """Tests for entry validation."""

    def setUp(self):
        self.tmpdir = os.path.realpath(tempfile.mkdtemp())
        self.file = os.path.join(self.tmpdir, "a.js")
        open(self.file, "w").close()

    def tearDown(self):
        shutil.rmtree(self.tmpdir)

    def test_file_entry(self):
        """Test a readable file."""
        self.assertEqual(validate_entry(self.file), ("file", True, None))

    def test_directory_entry(self):
        """Test a directory."""
        self.assertEqual(validate_entry(self.tmpdir), ("directory", True, None))

    def test_pattern_entry(self):
        """Test a glob pattern with matches."""
        entry_type, is_valid, _ = validate_entry(os.path.join(self.tmpdir, "*.js"))

        self.assertEqual(entry_type, "pattern")
        self.assertTrue(is_valid)

    def test_pattern_without_matches(self):
        """Test a glob pattern that matches nothing."""
        entry_type, is_valid, error = validate_entry(os.path.join(self.tmpdir, "*.scss"))

        self.assertEqual(entry_type, "pattern")
        self.assertFalse(is_valid)
        self.assertIn("matched no files", error)

    def test_missing_entry(self):
        """Test a path that does not exist."""
        entry_type, is_valid, error = validate_entry(os.path.join(self.tmpdir, "b.js"))

        self.assertEqual(entry_type, "unknown")
        self.assertFalse(is_valid)
        self.assertIn("does not exist", error)

    def test_empty_entry(self):
        """Test an empty entry."""
        self.assertFalse(validate_entry("")[1])


if __name__ == "__main__":
    unittest.main()
