"""
Dot-separated key paths over nested plain data.

Paths are enumerated and resolved against keyed mappings only; sequences are
opaque leaves and are never indexed into. Recursion is bounded by
``max_depth`` and anything past the bound is silently left out.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from deeptype._internal import format_key, is_plain_object
from deeptype.config import DEFAULT_MAX_DEPTH, PathOptions

logger = logging.getLogger(__name__)

SEPARATOR = "."

_MISSING = object()


class PathNotFoundError(LookupError):
    """Raised when a path does not address a value in the structure."""

    def __init__(self, path: str, segment: str | None = None, reason: str = "segment not found"):
        self.path = path
        self.segment = segment
        self.reason = reason
        where = f" at segment {segment!r}" if segment is not None else ""
        super().__init__(f"Path {path!r} not found{where}: {reason}")


def enumerate_paths(
    shape: Mapping[Any, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    leaf_only: bool = False,
    options: PathOptions | None = None,
) -> set[str]:
    """
    Enumerate every dot-joined key path of a nested mapping.

    A key holding a mapping contributes its own path followed by the paths of
    its children, enumerated one level shallower. Any other value (sequences
    included) contributes a single leaf path. With ``leaf_only`` the container
    paths are omitted.

    Args:
        shape: The mapping to walk
        max_depth: Number of levels to descend; 0 yields nothing
        leaf_only: Emit only terminal paths
        options: Ready-made options, overriding the keyword arguments

    Returns:
        The set of paths

    Example:
        >>> sorted(enumerate_paths({'a': {'b': 1}, 'c': [1, 2]}))
        ['a', 'a.b', 'c']
        >>> sorted(enumerate_paths({'a': {'b': 1}}, max_depth=1))
        ['a']
        >>> sorted(enumerate_paths({'a': {'b': 1}}, leaf_only=True))
        ['a.b']
    """
    if options is None:
        options = PathOptions(max_depth=max_depth, leaf_only=leaf_only)

    paths: set[str] = set()
    stack: list[tuple[str, Mapping[Any, Any], int]] = [("", shape, options.max_depth)]
    while stack:
        prefix, mapping, depth = stack.pop()
        if depth == 0:
            logger.debug("Path enumeration truncated below %r", prefix or "<root>")
            continue
        for key, value in mapping.items():
            segment = format_key(key, SEPARATOR)
            if segment is None:
                logger.debug("Skipping key %r under %r: not a path segment", key, prefix or "<root>")
                continue
            path = f"{prefix}{SEPARATOR}{segment}" if prefix else segment
            if is_plain_object(value):
                if not options.leaf_only:
                    paths.add(path)
                stack.append((path, value, depth - 1))
            else:
                paths.add(path)
    return paths


def enumerate_leaf_paths(shape: Mapping[Any, Any], max_depth: int = DEFAULT_MAX_DEPTH) -> set[str]:
    """Enumerate only the terminal paths of a nested mapping."""
    return enumerate_paths(shape, max_depth, leaf_only=True)


def _lookup(mapping: Mapping[Any, Any], segment: str) -> Any:
    if segment in mapping:
        return mapping[segment]
    # Integer keys are rendered with str() when enumerated
    try:
        index = int(segment)
    except ValueError:
        return _MISSING
    if str(index) == segment and index in mapping:
        return mapping[index]
    return _MISSING


def resolve(
    root: Any,
    path: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    options: PathOptions | None = None,
) -> Any:
    """
    Resolve a dot-separated path against a nested mapping.

    Args:
        root: The structure to resolve against
        path: Dot-separated key path, e.g. ``"a.b.c"``
        max_depth: Longest path, in segments, that can be resolved
        options: Ready-made options, overriding the keyword arguments

    Returns:
        The value at the final segment

    Raises:
        PathNotFoundError: If a segment is missing or empty, a non-mapping
            (including a sequence) is reached with segments remaining, or the
            path is longer than ``max_depth``

    Example:
        >>> resolve({'a': {'b': {'c': 1}}}, 'a.b.c')
        1
    """
    if options is None:
        options = PathOptions(max_depth=max_depth)
    max_depth = options.max_depth
    segments = path.split(SEPARATOR)
    if len(segments) > max_depth:
        raise PathNotFoundError(path, reason=f"deeper than the maximum depth of {max_depth}")

    current = root
    for segment in segments:
        if not segment:
            raise PathNotFoundError(path, segment, "empty segment")
        if not is_plain_object(current):
            raise PathNotFoundError(path, segment, f"cannot descend into {type(current).__name__}")
        current = _lookup(current, segment)
        if current is _MISSING:
            raise PathNotFoundError(path, segment)
    return current


def pick_paths(
    root: Any,
    paths: Iterable[str],
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    options: PathOptions | None = None,
) -> dict[str, Any]:
    """
    Resolve several paths at once.

    Example:
        >>> pick_paths({'a': {'b': 1, 'c': 2}}, ['a.b', 'a.c'])
        {'a.b': 1, 'a.c': 2}
    """
    if options is None:
        options = PathOptions(max_depth=max_depth)
    return {path: resolve(root, path, options=options) for path in paths}
