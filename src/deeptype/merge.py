"""
Shallow and broadcast-deep merges of plain mappings.

The deep variants reapply the *whole* patch at every nesting level instead of
aligning the patch's sub-mappings with the base's by path: a key named in the
patch is replaced wherever it occurs, at any depth.

    >>> deep_override({'id': 1, 'child': {'id': 2, 'name': 'x'}}, {'id': 0})
    {'id': 0, 'child': {'id': 0, 'name': 'x'}}

None of the functions mutate their arguments; values are carried over
as-is, not copied.
"""

import logging
from collections.abc import Callable, Iterable, Mapping
from typing import Any

from deeptype._internal import is_plain_object
from deeptype.config import DEFAULT_MAX_DEPTH, MergeOptions

logger = logging.getLogger(__name__)


def _require_mapping(value: Any, argument: str) -> None:
    if not is_plain_object(value):
        raise TypeError(f"{argument} must be a mapping, got {type(value).__name__}")


def override(base: Mapping[Any, Any], patch: Mapping[Any, Any]) -> dict[Any, Any]:
    """
    Replace the values of ``base`` with those of ``patch`` where keys overlap.

    Keys only in ``patch`` are not added.

    Example:
        >>> override({'x': 1, 'y': 2}, {'y': 9, 'z': 0})
        {'x': 1, 'y': 9}
    """
    _require_mapping(base, "base")
    _require_mapping(patch, "patch")
    return {key: patch[key] if key in patch else value for key, value in base.items()}


def inject(base: Mapping[Any, Any], extra: Mapping[Any, Any]) -> dict[Any, Any]:
    """
    Union of both mappings, ``extra`` winning on shared keys.

    Example:
        >>> inject({'x': 1}, {'y': 9})
        {'x': 1, 'y': 9}
    """
    _require_mapping(base, "base")
    _require_mapping(extra, "extra")
    return {**base, **extra}


def _broadcast(
    base: Mapping[Any, Any],
    patch: Mapping[Any, Any],
    depth: int,
    combine: Callable[[Mapping[Any, Any], Mapping[Any, Any]], dict[Any, Any]],
) -> dict[Any, Any]:
    if depth == 0:
        logger.debug("Deep merge truncated, leaving %d keys unprocessed", len(base))
        return dict(base)
    inner = {
        key: _broadcast(value, patch, depth - 1, combine) if is_plain_object(value) else value
        for key, value in base.items()
    }
    return combine(inner, patch)


def deep_override(
    base: Mapping[Any, Any],
    patch: Mapping[Any, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    options: MergeOptions | None = None,
) -> dict[Any, Any]:
    """
    Apply :func:`override` with the same ``patch`` at every nesting level.

    Nested mappings are processed first, then the current level is
    overridden, so a patched key holds the patch's value verbatim. At
    ``max_depth`` 0 the base is returned unprocessed.

    Example:
        >>> deep_override({'a': {'x': 1, 'y': 2}, 'x': 3}, {'x': 0})
        {'a': {'x': 0, 'y': 2}, 'x': 0}
    """
    if options is None:
        options = MergeOptions(max_depth=max_depth)
    _require_mapping(base, "base")
    _require_mapping(patch, "patch")
    return _broadcast(base, patch, options.max_depth, override)


def deep_inject(
    base: Mapping[Any, Any],
    extra: Mapping[Any, Any],
    max_depth: int = DEFAULT_MAX_DEPTH,
    *,
    options: MergeOptions | None = None,
) -> dict[Any, Any]:
    """
    Apply :func:`inject` with the same ``extra`` at every nesting level.

    Unlike :func:`deep_override` this adds the keys of ``extra`` to every
    nested mapping.

    Example:
        >>> deep_inject({'a': {'x': 1}}, {'v': 2})
        {'a': {'x': 1, 'v': 2}, 'v': 2}
    """
    if options is None:
        options = MergeOptions(max_depth=max_depth)
    _require_mapping(base, "base")
    _require_mapping(extra, "extra")
    return _broadcast(base, extra, options.max_depth, inject)


def overwrite(base: Mapping[Any, Any], other: Mapping[Any, Any]) -> dict[Any, Any]:
    """
    Drop the keys of ``other`` from ``base`` and append ``other``'s entries.

    Same contents as :func:`inject`, but overlapping keys move to the end.

    Example:
        >>> overwrite({'a': 1, 'b': 2}, {'a': 3})
        {'b': 2, 'a': 3}
    """
    _require_mapping(base, "base")
    _require_mapping(other, "other")
    return {**difference(base, other), **other}


def difference(base: Mapping[Any, Any], other: Mapping[Any, Any]) -> dict[Any, Any]:
    """Entries of ``base`` whose key is not in ``other``."""
    _require_mapping(base, "base")
    _require_mapping(other, "other")
    return {key: value for key, value in base.items() if key not in other}


def common(a: Mapping[Any, Any], b: Mapping[Any, Any]) -> dict[Any, Any]:
    """
    Entries present in both mappings with equal values.

    Example:
        >>> common({'a': 1, 'b': 2, 'c': 3}, {'a': 1, 'b': 5})
        {'a': 1}
    """
    _require_mapping(a, "a")
    _require_mapping(b, "b")
    return {key: value for key, value in a.items() if key in b and b[key] == value}


def omit_type(obj: Mapping[Any, Any], type_: type | tuple[type, ...]) -> dict[Any, Any]:
    """Drop the entries whose value is an instance of ``type_``."""
    _require_mapping(obj, "obj")
    return {key: value for key, value in obj.items() if not isinstance(value, type_)}


def defined(obj: Mapping[Any, Any]) -> dict[Any, Any]:
    """Drop the entries whose value is ``None``."""
    return omit_type(obj, type(None))


def overridable_string_union(
    defaults: Iterable[str],
    overrides: Mapping[str, Any] | None = None,
) -> frozenset[str]:
    """
    Resolve a set of enabled names from defaults and per-name switches.

    Every default starts enabled; ``overrides`` can switch names off with a
    value other than ``True`` or add new names with ``True``.

    Example:
        >>> sorted(overridable_string_union(['primary', 'secondary'], {'secondary': False, 'neutral': True}))
        ['neutral', 'primary']
    """
    flags: dict[str, Any] = dict.fromkeys(defaults, True)
    if overrides is not None:
        flags = overwrite(flags, overrides)
    return frozenset(key for key, value in flags.items() if isinstance(key, str) and value is True)
