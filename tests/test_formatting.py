"""Unit tests for formatted rendering and Buffer.append_formatted."""

import unittest

from bytebuf.buffer import Buffer
from bytebuf.errors import FormatError, InvalidArgumentError
from bytebuf.formatting import render, render_into


class TestRender(unittest.TestCase):
    """Tests for the renderer functions."""

    def test_render_positional(self):
        self.assertEqual(render("%s=%d", ("answer", 42)), b"answer=42")

    def test_render_mapping(self):
        self.assertEqual(render("%(key)s:%(value)04d", ({"key": "id", "value": 7},)), b"id:0007")

    def test_render_single_tuple_argument(self):
        self.assertEqual(render("%s", ((1, 2),)), b"(1, 2)")

    def test_render_error(self):
        with self.assertRaises(FormatError) as ctx:
            render("%d", ("nope",))
        self.assertTrue(str(ctx.exception).startswith("cannot format string: "))
        self.assertIsInstance(ctx.exception.__cause__, TypeError)

    def test_render_encoding_error(self):
        with self.assertRaises(FormatError):
            render("%s", ("é",), encoding="ascii")

    def test_render_into_fits(self):
        window = memoryview(bytearray(8))
        self.assertEqual(render_into(window, "%s", ("abc",)), 3)
        self.assertEqual(bytes(window[:3]), b"abc")

    def test_render_into_reserves_terminator(self):
        window = memoryview(bytearray(3))
        self.assertEqual(render_into(window, "%s", ("abc",)), 3)
        self.assertEqual(bytes(window), b"\0\0\0")


class TestAppendFormatted(unittest.TestCase):
    """Tests for Buffer.append_formatted."""

    def test_append(self):
        buf = Buffer()
        buf.append_formatted("%s=%d;", "port", 8080)
        self.assertEqual(bytes(buf), b"port=8080;")
        self.assertEqual(buf.length, 10)

    def test_retry_grows_by_exact_shortfall(self):
        buf = Buffer()
        buf.append_formatted("%s", "x" * 20)
        self.assertEqual(bytes(buf), b"x" * 20)
        # One byte beyond the content is kept for the terminator
        self.assertEqual(buf.capacity, 21)

    def test_fits_without_growth(self):
        buf = Buffer(64)
        buf.append(b"a=")
        buf.append_formatted("%d", 12345)
        self.assertEqual(bytes(buf), b"a=12345")
        self.assertEqual(buf.capacity, 64)

    def test_append_after_skip(self):
        buf = Buffer(8)
        buf.append(b"abcdef")
        buf.skip(5)
        buf.append_formatted("%s", "ghijk")
        self.assertEqual(bytes(buf), b"fghijk")
        self.assertEqual(buf.skipped, 0)

    def test_mapping_argument(self):
        buf = Buffer()
        buf.append_formatted("%(user)s@%(host)s", {"user": "root", "host": "example.org"})
        self.assertEqual(bytes(buf), b"root@example.org")

    def test_empty_output(self):
        buf = Buffer()
        buf.append_formatted("%s", "")
        self.assertEqual(buf.length, 0)
        self.assertEqual(buf.skipped, 0)

    def test_literal_percent(self):
        buf = Buffer()
        buf.append_formatted("100%%")
        self.assertEqual(bytes(buf), b"100%")

    def test_empty_format(self):
        buf = Buffer()
        with self.assertRaises(InvalidArgumentError) as ctx:
            buf.append_formatted("")
        self.assertEqual(str(ctx.exception), "empty format string")
        self.assertEqual(buf.capacity, 0)

    def test_format_error_leaves_content(self):
        buf = Buffer()
        buf.append(b"keep")
        with self.assertRaises(FormatError):
            buf.append_formatted("%d %d", 1)
        self.assertEqual(bytes(buf), b"keep")

    def test_multibyte_output(self):
        buf = Buffer()
        buf.append_formatted("%s", "日本")
        self.assertEqual(bytes(buf), "日本".encode("utf-8"))


if __name__ == '__main__':
    unittest.main()
