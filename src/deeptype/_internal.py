"""Internal utility functions - not part of the public API."""

import builtins
import dataclasses
import types
from collections.abc import Mapping
from typing import Annotated, Any, ClassVar, Generic, TypeVar, Union
from typing_extensions import (
    NotRequired,
    ReadOnly,
    Required,
    get_args,
    get_origin,
    get_original_bases,
    get_type_hints,
    is_typeddict,
)

from pydantic import BaseModel


_WRAPPERS = (Required, NotRequired, ReadOnly)


def is_plain_object(value: Any) -> bool:
    """
    Check if a value is a keyed mapping that traversal may descend into.

    Sequences, strings, ``None`` and scalars are leaves.

    >>> is_plain_object({'a': 1})
    True
    >>> is_plain_object([{'a': 1}])
    False
    """
    return isinstance(value, Mapping)


def format_key(key: Any, separator: str = ".") -> str | None:
    """Render a mapping key as a path segment, or None if it cannot be one."""
    if isinstance(key, bool):
        return None
    if isinstance(key, str):
        # A key holding the separator could not be told apart from a nested path
        if not key or separator in key:
            return None
        return key
    if isinstance(key, int):
        return str(key)
    return None


def unwrap(type_hint):
    """Strip Required/NotRequired/ReadOnly/Annotated qualifiers from a hint."""
    while True:
        origin = get_origin(type_hint)
        if origin in _WRAPPERS or origin is Annotated:
            type_hint = get_args(type_hint)[0]
        else:
            return type_hint


def is_object_type(tp) -> bool:
    """
    Check if an annotation describes a keyed record with enumerable fields.

    TypedDicts (generic ones included), pydantic models, dataclasses and plain
    classes with annotations count. Sequence and mapping generics, unions and
    builtin types are leaves.
    """
    tp = unwrap(tp)
    origin = get_origin(tp)
    if origin is not None:
        # Subscripted generic TypedDict, e.g. WithV[int]
        return is_typeddict(origin)
    if not isinstance(tp, type):
        return False
    if is_typeddict(tp) or dataclasses.is_dataclass(tp):
        return True
    if issubclass(tp, BaseModel):
        return tp is not BaseModel
    if tp.__module__ == builtins.__name__:
        return False
    return bool(getattr(tp, '__annotations__', None))


def field_hints(tp) -> dict[str, Any]:
    """
    Return the declared fields of an object-shaped type.

    Required/NotRequired qualifiers are kept; ClassVars are dropped. Pydantic
    models contribute their ``model_fields`` only.
    """
    tp = unwrap(tp)
    origin = get_origin(tp)
    if origin is not None and is_typeddict(origin):
        return _resolve_generic_hints(origin, get_args(tp))
    if isinstance(tp, type) and issubclass(tp, BaseModel):
        return {key: field.annotation for key, field in tp.model_fields.items()}
    hints = get_type_hints(tp, include_extras=True)
    return {
        key: value
        for key, value in hints.items()
        if get_origin(value) is not ClassVar and value is not ClassVar
    }


def _substitute_type_vars(type_hint, type_map: dict):
    """
    Recursively substitute type variables in a type hint with concrete types.

    Internal helper for resolving generic TypedDicts.
    """
    if isinstance(type_hint, TypeVar):
        return type_map.get(type_hint, type_hint)

    origin = get_origin(type_hint)
    if origin is not None:
        args = get_args(type_hint)
        if args:
            new_args = tuple(_substitute_type_vars(arg, type_map) for arg in args)
            if origin is Annotated:
                return Annotated[(new_args[0], *args[1:])]
            if origin in _WRAPPERS:
                return origin[new_args[0]]
            if origin is Union or origin is types.UnionType:
                return Union[new_args]
            return origin[new_args]

    return type_hint


def _resolve_generic_hints(generic_class: type, type_args: tuple[object, ...]) -> dict[str, Any]:
    """
    Resolve the fields of a generic TypedDict against concrete type arguments.

    For example, given WithV[int] where WithV is Generic[V], every V in the
    annotations of WithV is replaced by int.
    """
    type_params = []
    for base in get_original_bases(generic_class):
        origin = get_origin(base)
        if origin is not None:
            if origin is Generic or (isinstance(origin, type) and issubclass(origin, Generic)):
                type_params.extend(get_args(base))

    type_map = dict(zip(type_params, type_args))

    annotations = get_type_hints(generic_class, include_extras=True)

    return {key: _substitute_type_vars(value, type_map) for key, value in annotations.items()}


def td_eq(a: type, b: type) -> bool:
    """
    Test if two typeddicts have the same name, fields and types, and parameters.

    Internal helper used for test assertions.
    """
    return td_diff(a, b) == ""


def td_diff(a: type, b: type) -> str:
    """
    Generate a human-readable diff between two TypedDicts.

    Parameters
    ----------
    a : type
        First TypedDict to compare
    b : type
        Second TypedDict to compare

    Returns
    -------
    str
        A description of the differences, empty if the types are equal.

    Examples
    --------
    >>> from typing_extensions import TypedDict
    >>> A = TypedDict('User', {'name': str, 'age': int})
    >>> B = TypedDict('User', {'name': str, 'age': str})
    >>> print(td_diff(A, B))
    TypedDict differences:
      Field 'age': int != str
    """
    differences = []

    if a.__name__ != b.__name__:
        differences.append(f"Different names: '{a.__name__}' != '{b.__name__}'")

    a_annots = a.__annotations__
    b_annots = b.__annotations__

    if list(a_annots) != list(b_annots) and set(a_annots) == set(b_annots):
        differences.append(f"Field order differs: {list(a_annots)} != {list(b_annots)}")

    for key in a_annots:
        if key not in b_annots:
            differences.append(f"Field '{key}' missing in {b.__name__} (expected: {_format_type(a_annots[key])})")
    for key in b_annots:
        if key not in a_annots:
            differences.append(f"Extra field '{key}' in {b.__name__}: {_format_type(b_annots[key])}")

    for key in a_annots:
        if key in b_annots and a_annots[key] != b_annots[key]:
            differences.append(f"Field '{key}': {_format_type(a_annots[key])} != {_format_type(b_annots[key])}")

    a_required = getattr(a, '__required_keys__', frozenset())
    b_required = getattr(b, '__required_keys__', frozenset())
    if a_required != b_required:
        differences.append(f"Required keys: {sorted(a_required)} != {sorted(b_required)}")

    a_closed = getattr(a, '__closed__', None)
    b_closed = getattr(b, '__closed__', None)
    if a_closed != b_closed:
        differences.append(f"Different 'closed' parameter: {a_closed} != {b_closed}")

    if not differences:
        return ""

    return "TypedDict differences:\n  " + "\n  ".join(differences)


def _format_type(tp) -> str:
    """Format a type annotation as a readable string."""
    origin = get_origin(tp)
    if origin is not None:
        args = get_args(tp)
        origin_name = getattr(origin, '__name__', None) or getattr(origin, '_name', None) or str(origin)
        if args:
            return f"{origin_name}[{', '.join(_format_type(arg) for arg in args)}]"
        return origin_name

    if hasattr(tp, '__name__'):
        return tp.__name__

    return str(tp)


def assert_type_equals(
    actual: type,
    expected: type,
    *,
    msg: str | None = None
) -> None:
    """
    Assert that two TypedDict types are equal, with helpful error messages.

    Raises
    ------
    AssertionError
        If the types are not equal, with a detailed diff in the message
    """
    diff = td_diff(actual, expected)
    if diff:
        error_msg = diff if msg is None else f"{msg}\n{diff}"
        raise AssertionError(error_msg)
