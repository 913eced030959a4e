"""Tests for utils.py — path normalization, alias joins, descriptor lists."""

from __future__ import annotations

import pytest

from mergedfs.utils import collapse_path, ensure_list, join_alias, normalize_path

# ---------------------------------------------------------------------------
# normalize_path
# ---------------------------------------------------------------------------


class TestNormalizePath:
    @pytest.mark.parametrize(
        ("input_path", "expected"),
        [
            pytest.param("", "/", id="empty"),
            pytest.param("foo.txt", "/foo.txt", id="no-leading-slash"),
            pytest.param("./foo.txt", "/foo.txt", id="dot-slash"),
            pytest.param("./", "/", id="dot-slash-only"),
            pytest.param("/", "/", id="root"),
            pytest.param("/foo/", "/foo/", id="trailing-slash-kept"),
            pytest.param("/foo//bar", "/foo//bar", id="double-slash-kept"),
            pytest.param("/foo/../bar", "/foo/../bar", id="dotdot-kept"),
            pytest.param(".hidden", "/.hidden", id="dotfile"),
            pytest.param("/NOT REAL", "/NOT REAL", id="spaces"),
        ],
    )
    def test_normalize(self, input_path: str, expected: str):
        assert normalize_path(input_path) == expected

    def test_result_always_absolute(self):
        for raw in ["a", "./a", "../a", "a/b/c", "/a"]:
            assert normalize_path(raw).startswith("/")


# ---------------------------------------------------------------------------
# collapse_path
# ---------------------------------------------------------------------------


class TestCollapsePath:
    @pytest.mark.parametrize(
        ("input_path", "expected"),
        [
            pytest.param("", "/", id="empty"),
            pytest.param("foo//bar/", "/foo/bar", id="slashes"),
            pytest.param("/foo/../bar", "/bar", id="dotdot"),
            pytest.param("//foo", "/foo", id="double-leading"),
            pytest.param("./a/./b", "/a/b", id="dots"),
        ],
    )
    def test_collapse(self, input_path: str, expected: str):
        assert collapse_path(input_path) == expected


# ---------------------------------------------------------------------------
# join_alias
# ---------------------------------------------------------------------------


class TestJoinAlias:
    @pytest.mark.parametrize(
        ("target", "subpath", "expected"),
        [
            pytest.param("/srv/data", "/a.txt", "/srv/data/a.txt", id="absolute-subpath"),
            pytest.param("/srv/data", "a.txt", "/srv/data/a.txt", id="relative-subpath"),
            pytest.param("/srv/data", "", "/srv/data", id="empty-subpath"),
            pytest.param("/srv/data/", "/a", "/srv/data/a", id="trailing-target"),
            pytest.param("/", "/a", "/a", id="root-target"),
            pytest.param("/", "", "/", id="root-empty"),
            pytest.param("/srv/data", "/../b", "/srv/b", id="dotdot"),
            pytest.param("/NOT REAL", "/tmp/x", "/NOT REAL/tmp/x", id="spaces"),
        ],
    )
    def test_join(self, target: str, subpath: str, expected: str):
        assert join_alias(target, subpath) == expected


# ---------------------------------------------------------------------------
# ensure_list
# ---------------------------------------------------------------------------


class TestEnsureList:
    def test_wraps_single(self):
        obj = object()
        assert ensure_list(obj) == [obj]

    def test_wraps_string(self):
        assert ensure_list("/some/path") == ["/some/path"]

    def test_copies_list(self):
        original = ["a", "b"]
        result = ensure_list(original)
        assert result == original
        assert result is not original

    def test_tuple_to_list(self):
        assert ensure_list(("a", "b")) == ["a", "b"]
