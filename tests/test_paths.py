"""Tests for paths module (enumerate_paths, enumerate_leaf_paths, resolve, pick_paths)."""

import logging
from collections import OrderedDict
from types import MappingProxyType

import pytest
from pydantic import ValidationError

from deeptype.config import PathOptions
from deeptype.paths import (
    PathNotFoundError,
    enumerate_leaf_paths,
    enumerate_paths,
    pick_paths,
    resolve,
)


SHAPE = {
    "user": {
        "name": "Ada",
        "address": {"city": "London", "geo": {"lat": 51.5, "lng": -0.1}},
        "tags": [{"id": 1}, {"id": 2}],
    },
    "active": True,
    "meta": None,
}


def _nested(depth: int) -> dict:
    """Build {'k': {'k': ... {'k': 'leaf'}}} with ``depth`` levels of keys."""
    value: object = "leaf"
    for _ in range(depth):
        value = {"k": value}
    return value  # type: ignore[return-value]


# ============================================================================
# Tests for enumerate_paths()
# ============================================================================


def test_enumerate_paths() -> None:
    assert enumerate_paths(SHAPE) == {
        "user",
        "user.name",
        "user.address",
        "user.address.city",
        "user.address.geo",
        "user.address.geo.lat",
        "user.address.geo.lng",
        "user.tags",
        "active",
        "meta",
    }


def test_enumerate_leaf_paths() -> None:
    expected = {
        "user.name",
        "user.address.city",
        "user.address.geo.lat",
        "user.address.geo.lng",
        "user.tags",
        "active",
        "meta",
    }
    assert enumerate_leaf_paths(SHAPE) == expected
    assert enumerate_paths(SHAPE, leaf_only=True) == expected


def test_sequences_are_leaves() -> None:
    """Mappings inside a list are never descended into."""
    paths = enumerate_paths({"items": [{"a": 1}], "pair": ({"b": 2},)})
    assert paths == {"items", "pair"}


def test_truncated_one_level() -> None:
    paths = enumerate_paths({"a": {"b": 1}}, max_depth=1)
    assert "a" in paths
    assert "a.b" not in paths


def test_max_depth_zero_is_empty() -> None:
    assert enumerate_paths(SHAPE, max_depth=0) == set()


@pytest.mark.parametrize("depth", [1, 5, 10])
def test_default_bound_allows_ten_levels(depth: int) -> None:
    deepest = ".".join(["k"] * depth)
    assert deepest in enumerate_paths(_nested(depth))


def test_default_bound_truncates_past_ten_levels() -> None:
    paths = enumerate_paths(_nested(12))
    assert max(len(path.split(".")) for path in paths) == 10
    assert len(paths) == 10


def test_leaf_only_drops_truncated_containers() -> None:
    """A container whose children fall past the bound contributes nothing."""
    assert enumerate_leaf_paths({"a": {"b": 1}, "c": 2}, max_depth=1) == {"c"}


def test_empty_container() -> None:
    assert enumerate_paths({"a": {}}) == {"a"}
    assert enumerate_leaf_paths({"a": {}}) == set()


def test_key_rendering() -> None:
    shape = {1: {"x": 1}, "": 2, ("t",): 3, 2.5: 4}
    assert enumerate_paths(shape) == {"1", "1.x"}


def test_keys_containing_separator_are_skipped() -> None:
    shape = {"a.b": 1, "a": {"b": 2}}
    assert enumerate_paths(shape) == {"a", "a.b"}
    assert resolve(shape, "a.b") == 2
    assert enumerate_paths({"a.b": 1}) == set()


def test_every_enumerated_path_resolves_with_dotted_keys() -> None:
    shape = {"x.y": {"z": 1}, "x": {"y.z": 2, "w": 3}}
    assert enumerate_paths(shape) == {"x", "x.w"}
    for path in enumerate_paths(shape):
        resolve(shape, path)


def test_skipped_key_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="deeptype.paths"):
        enumerate_paths({"a.b": 1})
    assert "not a path segment" in caplog.text


def test_any_mapping_counts_as_plain_object() -> None:
    shape = OrderedDict(a=MappingProxyType({"b": 1}))
    assert enumerate_paths(shape) == {"a", "a.b"}


def test_options_record_wins() -> None:
    options = PathOptions(max_depth=1, leaf_only=True)
    assert enumerate_paths({"a": {"b": 1}, "c": 2}, max_depth=5, options=options) == {"c"}


def test_negative_depth_rejected() -> None:
    with pytest.raises(ValidationError):
        enumerate_paths(SHAPE, max_depth=-1)


def test_truncation_is_logged(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.DEBUG, logger="deeptype.paths"):
        enumerate_paths({"a": {"b": 1}}, max_depth=1)
    assert "truncated" in caplog.text


def test_does_not_mutate() -> None:
    shape = {"a": {"b": 1}}
    enumerate_paths(shape)
    assert shape == {"a": {"b": 1}}


# ============================================================================
# Tests for resolve()
# ============================================================================


def test_resolve() -> None:
    assert resolve({"a": {"b": {"c": 1}}}, "a.b.c") == 1
    assert resolve(SHAPE, "user.address") == {"city": "London", "geo": {"lat": 51.5, "lng": -0.1}}
    assert resolve(SHAPE, "meta") is None


def test_resolve_missing_segment() -> None:
    with pytest.raises(PathNotFoundError) as excinfo:
        resolve({"a": {}}, "a.b.c")
    assert excinfo.value.path == "a.b.c"
    assert excinfo.value.segment == "b"


def test_resolve_through_scalar() -> None:
    with pytest.raises(PathNotFoundError, match="cannot descend into str"):
        resolve(SHAPE, "user.name.first")


def test_resolve_does_not_index_sequences() -> None:
    with pytest.raises(PathNotFoundError, match="cannot descend into list"):
        resolve(SHAPE, "user.tags.0")


@pytest.mark.parametrize("path", ["", "a..b", "a.", ".a"])
def test_resolve_empty_segment(path: str) -> None:
    with pytest.raises(PathNotFoundError, match="empty segment"):
        resolve({"a": {"b": 1}}, path)


def test_resolve_integer_keys() -> None:
    assert resolve({1: {"x": "one"}}, "1.x") == "one"
    assert resolve({"1": "str"}, "1") == "str"
    with pytest.raises(PathNotFoundError):
        resolve({1: "one"}, "01")


def test_resolve_round_trips_enumerated_paths() -> None:
    for path in enumerate_paths(SHAPE):
        resolve(SHAPE, path)


def test_resolve_past_max_depth() -> None:
    with pytest.raises(PathNotFoundError, match="maximum depth"):
        resolve(_nested(11), ".".join(["k"] * 11))
    assert resolve(_nested(11), ".".join(["k"] * 11), max_depth=11) == "leaf"


def test_resolve_options_record_wins() -> None:
    path = ".".join(["k"] * 11)
    assert resolve(_nested(11), path, max_depth=1, options=PathOptions(max_depth=11)) == "leaf"
    with pytest.raises(PathNotFoundError, match="maximum depth"):
        resolve(_nested(11), path, max_depth=11, options=PathOptions(max_depth=2))


def test_path_not_found_is_lookup_error() -> None:
    with pytest.raises(LookupError):
        resolve({}, "a")


# ============================================================================
# Tests for pick_paths()
# ============================================================================


def test_pick_paths() -> None:
    assert pick_paths(SHAPE, ["user.name", "user.address.geo.lat"]) == {
        "user.name": "Ada",
        "user.address.geo.lat": 51.5,
    }


def test_pick_paths_missing() -> None:
    with pytest.raises(PathNotFoundError):
        pick_paths(SHAPE, ["user.name", "user.email"])


def test_pick_paths_options_record_wins() -> None:
    paths = ["user.name", "user.address.geo.lat"]
    with pytest.raises(PathNotFoundError, match="maximum depth"):
        pick_paths(SHAPE, paths, options=PathOptions(max_depth=2))
    assert pick_paths(SHAPE, ["user.name"], max_depth=1, options=PathOptions(max_depth=2)) == {"user.name": "Ada"}
