# tests/unit/test_membership.py
"""Unit tests for unordered membership comparison."""

from browser_assertions.core.membership import same_members


class TestSameMembers:

    def test_order_is_ignored(self):
        assert same_members(["a", "b", "c"], ["c", "a", "b"])

    def test_duplicates_count(self):
        assert not same_members(["x", "x"], ["x"])
        assert not same_members(["x"], ["x", "x"])
        assert same_members(["x", "y", "x"], ["x", "x", "y"])

    def test_symmetric(self):
        a, b = ["a", "b"], ["a", "c"]
        assert same_members(a, b) == same_members(b, a)

    def test_empty(self):
        assert same_members([], [])
        assert not same_members([], [""])
