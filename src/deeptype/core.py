"""
Nested paths over annotated record types.

These mirror the runtime operations of :mod:`deeptype.paths` for *types*:
TypedDicts, pydantic models, dataclasses and plain annotated classes. A field
whose type is itself such a record is descended into; every other field,
including ``list[...]`` and ``dict[...]`` fields, is a leaf.
"""

import logging
from collections.abc import Iterator
from typing import Any, Literal

from typing_extensions import Never, NotRequired, Required, TypedDict, get_origin, is_typeddict

from deeptype._internal import field_hints, is_object_type, unwrap
from deeptype.config import DEFAULT_MAX_DEPTH, PathOptions
from deeptype.paths import SEPARATOR, PathNotFoundError

logger = logging.getLogger(__name__)


class DelimiterCollisionError(ValueError):
    """Raised when a field name contains the delimiter used to join flattened keys."""


def _type_name(tp) -> str:
    tp = unwrap(tp)
    return getattr(get_origin(tp) or tp, "__name__", repr(tp))


def qualified_fields(cls: type) -> dict[str, Any]:
    """
    Return the fields of ``cls`` with optional TypedDict keys made explicit.

    Fields of a non-total TypedDict carry no ``NotRequired`` wrapper of their
    own; this adds it so the requirement survives a rebuild.
    """
    cls = unwrap(cls)
    hints = field_hints(cls)
    source = get_origin(cls) or cls
    if not is_typeddict(source):
        return hints
    optional = getattr(source, "__optional_keys__", frozenset())
    fields = {}
    for key, hint in hints.items():
        if key in optional and get_origin(hint) not in (NotRequired, Required):
            hint = NotRequired[hint]
        fields[key] = hint
    return fields


def to_typeddict(cls: type, *, name: str | None = None, closed: bool | None = None) -> type:
    """
    Convert an annotated class to a TypedDict with the same fields.

    Nested record types are kept as-is, not flattened.

    Args:
        cls: A TypedDict, pydantic model, dataclass or annotated class
        name: Name of the resulting type, defaults to the name of ``cls``
        closed: Passed through to ``TypedDict``

    Example:
        >>> class User:
        ...     name: str
        ...     age: int
        >>> to_typeddict(User).__annotations__
        {'name': <class 'str'>, 'age': <class 'int'>}
    """
    kwargs = {} if closed is None else {"closed": closed}
    type_name = name if name is not None else _type_name(cls)
    return TypedDict(type_name, qualified_fields(cls), **kwargs)  # type: ignore


def _walk(cls, depth: int, leaf_only: bool) -> Iterator[tuple[tuple[str, ...], Any]]:
    """Yield ``(path, hint)`` for every field reachable within ``depth`` levels, containers first."""
    if depth == 0:
        logger.debug("Field traversal truncated at %s", _type_name(cls))
        return
    for key, hint in qualified_fields(cls).items():
        if is_object_type(hint):
            if not leaf_only:
                yield (key,), hint
            for sub_path, sub_hint in _walk(hint, depth - 1, leaf_only):
                yield (key, *sub_path), sub_hint
        else:
            yield (key,), hint


def nested_keys(
    cls: type,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    leaf_only: bool = False,
    options: PathOptions | None = None,
):
    """
    Construct a ``Literal`` of every dot-joined field path of a record type.

    Returns ``Never`` when the type has no paths.

    Example:
        >>> class Address(TypedDict):
        ...     city: str
        >>> class Person(TypedDict):
        ...     name: str
        ...     address: Address
        >>> nested_keys(Person)
        typing.Literal['name', 'address', 'address.city']
    """
    if options is None:
        options = PathOptions(max_depth=max_depth, leaf_only=leaf_only)
    paths = [SEPARATOR.join(path) for path, _ in _walk(cls, options.max_depth, options.leaf_only)]
    if not paths:
        return Never
    return Literal[tuple(paths)]  # type: ignore


def deep_pick(
    cls: type,
    path: str,
    *,
    max_depth: int = DEFAULT_MAX_DEPTH,
    options: PathOptions | None = None,
):
    """
    Return the annotation of the field addressed by a dot-joined path.

    Qualifiers such as ``NotRequired`` are stripped from the result.

    Raises:
        PathNotFoundError: If a segment is not a field, or passes through a
            field that is not a record type

    Example:
        >>> class Address(TypedDict):
        ...     city: str
        >>> class Person(TypedDict):
        ...     address: Address
        >>> deep_pick(Person, 'address.city')
        <class 'str'>
    """
    if options is None:
        options = PathOptions(max_depth=max_depth)
    max_depth = options.max_depth
    segments = path.split(SEPARATOR)
    if len(segments) > max_depth:
        raise PathNotFoundError(path, reason=f"deeper than the maximum depth of {max_depth}")

    current = cls
    for segment in segments:
        if not is_object_type(current):
            raise PathNotFoundError(path, segment, f"{_type_name(current)} has no fields")
        fields = field_hints(current)
        if segment not in fields:
            raise PathNotFoundError(path, segment, f"not a field of {_type_name(current)}")
        current = fields[segment]
    return unwrap(current)


def flatten(
    cls: type,
    *,
    key_delimiter: str = "_",
    name: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
    options: PathOptions | None = None,
) -> type:
    """
    Flatten a nested record type into a single TypedDict.

    Every field is kept, and the fields of nested record types are added
    under keys joined with ``key_delimiter``, each container before its
    children.

    Raises:
        DelimiterCollisionError: If a field name contains ``key_delimiter``

    Example:
        >>> class Child:
        ...     x: float
        >>> class Parent:
        ...     a: int
        ...     c: Child
        >>> list(flatten(Parent).__annotations__)
        ['a', 'c', 'c_x']
    """
    if options is None:
        options = PathOptions(max_depth=max_depth)
    fields: dict[str, Any] = {}
    for path, hint in _walk(cls, options.max_depth, leaf_only=False):
        key = path[-1]
        if key_delimiter in key:
            owner = cls
            for segment in path[:-1]:
                owner = field_hints(owner)[segment]
            raise DelimiterCollisionError(
                f"The delimiter '{key_delimiter}' occurs in the field name '{key}' on the class {_type_name(owner)}"
            )
        fields[key_delimiter.join(path)] = hint

    type_name = name if name is not None else _type_name(cls)
    return TypedDict(type_name, fields)  # type: ignore
