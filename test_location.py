#!/usr/bin/env python3
"""Tests for source location resolution."""

import os
import unittest
from unittest.mock import MagicMock, Mock, patch

from specmeta.metadata.location import (
    PACKAGE_DIR,
    CallerFilter,
    SourceLocation,
    parse_frame,
    relative_path,
    resolve_location,
)


def _is_fake_framework(frame):
    return frame.startswith("/opt/framework/")


class TestSourceLocation(unittest.TestCase):

    def test_location_joins_file_and_line(self):
        self.assertEqual(SourceLocation("./spec/foo_spec.rb", 10).location, "./spec/foo_spec.rb:10")

    def test_location_renders_missing_file_as_empty(self):
        self.assertEqual(SourceLocation(None, 1).location, ":1")


class TestResolveLocation(unittest.TestCase):

    def test_explicit_override_wins(self):
        def body():
            pass

        loc = resolve_location(explicit=["./spec/foo_spec.rb", 10], block=body)
        self.assertEqual(loc.file_path, "./spec/foo_spec.rb")
        self.assertEqual(loc.line_number, 10)
        self.assertEqual(loc.location, "./spec/foo_spec.rb:10")

    def test_explicit_line_is_converted_to_int(self):
        loc = resolve_location(explicit=["./spec/foo_spec.rb", "42"])
        self.assertEqual(loc.line_number, 42)

    def test_explicit_absolute_path_is_made_relative(self):
        path = os.path.join(os.path.abspath("."), "spec", "bar_spec.py")
        loc = resolve_location(explicit=[path, 3])
        self.assertEqual(loc.file_path, os.path.join(".", "spec", "bar_spec.py"))

    def test_block_source_position(self):
        def body():
            pass

        loc = resolve_location(block=body)
        self.assertTrue(loc.file_path.endswith("test_location.py"))
        self.assertEqual(loc.line_number, body.__code__.co_firstlineno)

    def test_block_with_declared_source_location(self):
        class Body:
            source_location = ("./spec/declared_spec.py", 7)

        loc = resolve_location(block=Body())
        self.assertEqual(loc.location, "./spec/declared_spec.py:7")

    def test_explicit_override_wins_over_malformed_block(self):
        class OddBody:
            def source_location(self):
                return "not a pair"

        for block in (Mock(), MagicMock(), OddBody()):
            loc = resolve_location(explicit=["./spec/foo_spec.rb", 10], block=block)
            self.assertEqual(loc, SourceLocation("./spec/foo_spec.rb", 10))

    def test_malformed_block_falls_back_to_frames(self):
        class OddBody:
            source_location = (42, "x")

        for block in (Mock(), OddBody()):
            loc = resolve_location(
                block=block,
                frames=["/opt/framework/dsl.py:1", "/app/spec/widget_spec.py:12"],
                is_framework_frame=_is_fake_framework,
            )
            self.assertEqual(loc.location, "/app/spec/widget_spec.py:12")

    def test_block_without_position_falls_back_to_frames(self):
        loc = resolve_location(
            block=object(),
            frames=["/app/spec/widget_spec.py:12"],
            is_framework_frame=_is_fake_framework,
        )
        self.assertEqual(loc.location, "/app/spec/widget_spec.py:12")

    def test_first_non_framework_frame_is_used(self):
        frames = [
            "/opt/framework/core.py:100",
            "/opt/framework/dsl.py:20:4",
            "/app/spec/widget_spec.py:12:5",
            "/app/spec/other_spec.py:1",
        ]
        loc = resolve_location(frames=frames, is_framework_frame=_is_fake_framework)
        self.assertEqual(loc.file_path, "/app/spec/widget_spec.py")
        self.assertEqual(loc.line_number, 12)

    def test_inline_evaluation_has_no_file(self):
        loc = resolve_location(frames=["-e:1"], is_framework_frame=_is_fake_framework)
        self.assertIsNone(loc.file_path)
        self.assertEqual(loc.line_number, 1)
        self.assertEqual(loc.location, ":1")

    def test_python_inline_sources_have_no_file(self):
        for frame in ("<string>:3", "<stdin>:1"):
            loc = resolve_location(frames=[frame], is_framework_frame=_is_fake_framework)
            self.assertIsNone(loc.file_path)

    def test_only_framework_frames_degrades(self):
        loc = resolve_location(frames=["/opt/framework/core.py:1"], is_framework_frame=_is_fake_framework)
        self.assertEqual(loc, SourceLocation(None, 0))

    def test_unparseable_frame_degrades(self):
        loc = resolve_location(frames=["no line here"], is_framework_frame=_is_fake_framework)
        self.assertEqual(loc, SourceLocation(None, 0))

    def test_short_explicit_override_degrades(self):
        self.assertEqual(resolve_location(explicit=[]), SourceLocation(None, 0))

    def test_classifier_failure_degrades(self):
        def broken(frame):
            raise RuntimeError("boom")

        loc = resolve_location(frames=["/app/a.py:1"], is_framework_frame=broken)
        self.assertIsNone(loc.file_path)

    def test_default_stack_points_at_caller(self):
        loc = resolve_location()
        self.assertTrue(loc.file_path.endswith("test_location.py"))
        self.assertGreater(loc.line_number, 0)


class TestRelativePath(unittest.TestCase):

    def test_replaces_working_directory(self):
        path = os.path.join(os.path.abspath("."), "spec", "a_spec.py")
        self.assertEqual(relative_path(path), os.path.join(".", "spec", "a_spec.py"))

    def test_leaves_other_paths_alone(self):
        self.assertEqual(relative_path("/elsewhere/a_spec.py"), "/elsewhere/a_spec.py")

    def test_sentinel_is_absent(self):
        self.assertIsNone(relative_path("-e:1"))
        self.assertIsNone(relative_path(None))

    def test_missing_working_directory_keeps_raw_value(self):
        with patch("specmeta.metadata.location.os.path.abspath", side_effect=FileNotFoundError):
            self.assertEqual(relative_path("/app/a_spec.py"), "/app/a_spec.py")


class TestCallerFilter(unittest.TestCase):

    def test_package_frames_are_framework_frames(self):
        caller_filter = CallerFilter(patterns=[])
        self.assertTrue(caller_filter(os.path.join(PACKAGE_DIR, "metadata", "group.py") + ":10"))
        self.assertTrue(caller_filter("<frozen importlib._bootstrap>:241"))
        self.assertFalse(caller_filter("/app/spec/widget_spec.py:3"))

    def test_extra_patterns(self):
        caller_filter = CallerFilter(patterns=[r"/opt/framework/"])
        self.assertTrue(caller_filter("/opt/framework/dsl.py:5"))

    def test_invalid_patterns_are_skipped(self):
        caller_filter = CallerFilter(patterns=["(unclosed", r"/opt/framework/"])
        self.assertTrue(caller_filter("/opt/framework/dsl.py:5"))
        self.assertFalse(caller_filter("/app/spec/(unclosed_spec.py:3"))

    def test_first_non_framework_line(self):
        caller_filter = CallerFilter(patterns=[r"/opt/framework/"])
        frames = ["/opt/framework/dsl.py:5", "/app/spec/widget_spec.py:3"]
        self.assertEqual(caller_filter.first_non_framework_line(frames), "/app/spec/widget_spec.py:3")
        self.assertIsNone(caller_filter.first_non_framework_line(frames[:1]))

    def test_parse_frame(self):
        self.assertEqual(parse_frame("/a/b.py:12:7"), ("/a/b.py", "12"))
        self.assertEqual(parse_frame(None), (None, None))


if __name__ == "__main__":
    unittest.main()
