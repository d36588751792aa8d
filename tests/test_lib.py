"""Tests for roundtrip.lib helpers."""

from roundtrip.lib.sequence_helpers import unzip, zip_with


class TestZipWith:
    def test_zip_with(self):
        assert zip_with(lambda a, b: a + b, [1, 2], [10, 20]) == [11, 22]

    def test_stops_at_shortest(self):
        assert zip_with(lambda a, b: (a, b), [1, 2, 3], "ab") == [(1, "a"), (2, "b")]

    def test_single_sequence(self):
        assert zip_with(str, [1, 2]) == ["1", "2"]


class TestUnzip:
    def test_unzip(self):
        assert unzip([(1, "a"), (2, "b")]) == ([1, 2], ["a", "b"])

    def test_empty(self):
        assert unzip([]) == ()
        assert unzip([], 3) == ([], [], [])
