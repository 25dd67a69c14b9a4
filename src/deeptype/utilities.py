"""
Record-type transformations over TypedDicts.

These are type-to-type functions: each takes a record type (TypedDict,
pydantic model, dataclass or annotated class) and builds a new TypedDict.
Field requirement is expressed with ``Required``/``NotRequired`` on the
result, so the output can be compared or inspected at runtime.

Reference: https://www.typescriptlang.org/docs/handbook/utility-types.html
"""

import types
from typing import Any, Literal, Union

from typing_extensions import Never, NotRequired, Required, TypedDict, get_args, get_origin

from deeptype._internal import is_object_type, unwrap
from deeptype.config import DEFAULT_MAX_DEPTH, MergeOptions
from deeptype.core import _type_name, qualified_fields


def _bare(hint):
    """Strip a Required/NotRequired qualifier, keeping any others."""
    if get_origin(hint) in (Required, NotRequired):
        return get_args(hint)[0]
    return hint


def _is_optional(hint) -> bool:
    return get_origin(hint) is NotRequired


def _build(name: str, fields: dict[str, Any]) -> type:
    return TypedDict(name, fields)  # type: ignore


def _check_keys(cls, fields: dict[str, Any], keys: tuple[str, ...]) -> None:
    missing_keys = set(keys) - set(fields)
    if missing_keys:
        raise ValueError(f"Keys {sorted(missing_keys)} not found in {_type_name(cls)}")


def partial(cls: type, *, name: str | None = None) -> type:
    """
    Constructs a type with every field of ``cls`` optional.

    TypeScript equivalent: Partial<T>

    Args:
        cls: The record type to make partial
        name: Optional custom name for the resulting type

    Returns:
        A new TypedDict with all fields wrapped in NotRequired

    Example:
        >>> class User(TypedDict):
        ...     name: str
        ...     age: int
        >>> PartialUser = partial(User)
        >>> # PartialUser has name: NotRequired[str], age: NotRequired[int]
    """
    fields = {key: NotRequired[_bare(hint)] for key, hint in qualified_fields(cls).items()}
    return _build(name if name is not None else f"Partial{_type_name(cls)}", fields)


def _deep_partial_hint(hint, depth: int):
    if depth == 0:
        return hint
    if is_object_type(hint):
        return deep_partial(hint, max_depth=depth)
    if get_origin(hint) is list:
        args = get_args(hint)
        if args and is_object_type(args[0]):
            return list[deep_partial(args[0], max_depth=depth)]
    return hint


def deep_partial(cls: type, *, name: str | None = None, max_depth: int = DEFAULT_MAX_DEPTH) -> type:
    """
    Constructs a type with every field optional, recursing into nested records.

    TypeScript equivalent: DeepPartial<T>

    Record-typed fields and the items of ``list[...]`` fields are replaced by
    their own deep-partial types, down to ``max_depth`` levels. With
    ``max_depth`` 0 the fields are copied unchanged.

    Args:
        cls: The record type to make deeply partial
        name: Optional custom name for the resulting type
        max_depth: Number of record levels to rewrite

    Returns:
        A new TypedDict whose fields, and nested fields, are all NotRequired

    Example:
        >>> class Address(TypedDict):
        ...     city: str
        >>> class Person(TypedDict):
        ...     name: str
        ...     address: Address
        >>> DeepPartialPerson = deep_partial(Person)
        >>> # address: NotRequired[DeepPartialAddress], whose city is NotRequired too
    """
    depth = MergeOptions(max_depth=max_depth).max_depth
    type_name = name if name is not None else f"DeepPartial{_type_name(cls)}"
    if depth == 0:
        return _build(type_name, qualified_fields(cls))
    fields = {
        key: NotRequired[_deep_partial_hint(unwrap(hint), depth - 1)]
        for key, hint in qualified_fields(cls).items()
    }
    return _build(type_name, fields)


def deep_partial_except(
    cls: type,
    keys: tuple[str, ...],
    *,
    name: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> type:
    """
    Constructs a deep-partial type that keeps the fields ``keys`` exactly as declared.

    TypeScript equivalent: DeepPartialExcept<T, K> = DeepPartial<T> & Pick<T, K>

    Args:
        cls: The record type to make deeply partial
        keys: Field names to carry over unchanged
        name: Optional custom name for the resulting type
        max_depth: Number of record levels to rewrite

    Returns:
        A new TypedDict, deeply partial apart from ``keys``

    Raises:
        ValueError: If a key is not a field of ``cls``

    Example:
        >>> class Person(TypedDict):
        ...     id: int
        ...     name: str
        >>> sorted(deep_partial_except(Person, ('id',)).__required_keys__)
        ['id']
    """
    fields = qualified_fields(cls)
    _check_keys(cls, fields, keys)
    depth = MergeOptions(max_depth=max_depth).max_depth

    result = {}
    for key, hint in fields.items():
        if key in keys or depth == 0:
            # The Pick<T, K> side wins over the DeepPartial<T> side
            result[key] = hint
        else:
            result[key] = NotRequired[_deep_partial_hint(unwrap(hint), depth - 1)]

    type_name = name if name is not None else f"DeepPartialExcept{_type_name(cls)}"
    return _build(type_name, result)


def pick(cls: type, keys: tuple[str, ...], *, name: str | None = None) -> type:
    """
    Constructs a type by picking the fields ``keys`` from ``cls``.

    TypeScript equivalent: Pick<T, K>

    Raises:
        ValueError: If a key is not a field of ``cls``
    """
    fields = qualified_fields(cls)
    _check_keys(cls, fields, keys)
    picked = {key: hint for key, hint in fields.items() if key in keys}
    return _build(name if name is not None else f"Pick{_type_name(cls)}", picked)


def omit(cls: type, keys: tuple[str, ...], *, name: str | None = None) -> type:
    """Constructs a type by omitting the fields ``keys`` from ``cls``."""
    fields = {key: hint for key, hint in qualified_fields(cls).items() if key not in keys}
    return _build(name if name is not None else f"Omit{_type_name(cls)}", fields)


def demand(cls: type, keys: tuple[str, ...], *, name: str | None = None) -> type:
    """
    Constructs a type with the fields ``keys`` made required.

    TypeScript equivalent: Demand<T, K>

    Example:
        >>> class Draft(TypedDict, total=False):
        ...     title: str
        ...     body: str
        >>> Titled = demand(Draft, ('title',))
        >>> sorted(Titled.__required_keys__)
        ['title']
    """
    fields = qualified_fields(cls)
    _check_keys(cls, fields, keys)
    demanded = {key: Required[_bare(hint)] if key in keys else hint for key, hint in fields.items()}
    return _build(name if name is not None else f"Demand{_type_name(cls)}", demanded)


def loosen(cls: type, keys: tuple[str, ...], *, name: str | None = None) -> type:
    """Constructs a type with the fields ``keys`` made optional."""
    fields = qualified_fields(cls)
    _check_keys(cls, fields, keys)
    loosened = {key: NotRequired[_bare(hint)] if key in keys else hint for key, hint in fields.items()}
    return _build(name if name is not None else f"Loosen{_type_name(cls)}", loosened)


def loosen_deeply(
    cls: type,
    keys: tuple[str, ...],
    *,
    name: str | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> type:
    """
    Constructs a type with the fields ``keys`` made deeply partial.

    TypeScript equivalent: LoosenDeeply<T, K> = Omit<T, K> & DeepPartial<Pick<T, K>>

    Every other field is kept as declared. Field order follows ``cls``.

    Args:
        cls: The record type to loosen
        keys: Field names to make deeply partial
        name: Optional custom name for the resulting type
        max_depth: Number of record levels to rewrite under each key

    Returns:
        A new TypedDict with ``keys`` optional all the way down

    Raises:
        ValueError: If a key is not a field of ``cls``
    """
    fields = qualified_fields(cls)
    _check_keys(cls, fields, keys)
    depth = MergeOptions(max_depth=max_depth).max_depth

    result = {}
    for key, hint in fields.items():
        if key not in keys or depth == 0:
            result[key] = hint
        else:
            result[key] = NotRequired[_deep_partial_hint(unwrap(hint), depth - 1)]

    type_name = name if name is not None else f"LoosenDeeply{_type_name(cls)}"
    return _build(type_name, result)


def difference(cls: type, other: type, *, name: str | None = None) -> type:
    """Constructs a type from the fields of ``cls`` that ``other`` does not declare."""
    other_fields = qualified_fields(other)
    fields = {key: hint for key, hint in qualified_fields(cls).items() if key not in other_fields}
    return _build(name if name is not None else f"Difference{_type_name(cls)}", fields)


def common(cls: type, other: type, *, name: str | None = None) -> type:
    """
    Constructs a type from the fields both types declare with the same type.

    Example:
        >>> class A(TypedDict):
        ...     x: int
        ...     y: str
        >>> class B(TypedDict):
        ...     x: int
        ...     y: bytes
        >>> list(common(A, B).__annotations__)
        ['x']
    """
    other_fields = qualified_fields(other)
    fields = {
        key: hint
        for key, hint in qualified_fields(cls).items()
        if key in other_fields and unwrap(other_fields[key]) == unwrap(hint)
    }
    return _build(name if name is not None else f"Common{_type_name(cls)}", fields)


def overwrite(cls: type, other: type, *, name: str | None = None) -> type:
    """
    Constructs a type with the fields of ``cls``, replaced by ``other``'s where they overlap.

    TypeScript equivalent: Overwrite<T, U>

    Fields only in ``other`` are added.
    """
    other_fields = qualified_fields(other)
    # Fields of cls first, in their own order, then everything other declares
    fields = {key: hint for key, hint in qualified_fields(cls).items() if key not in other_fields}
    fields.update(other_fields)
    return _build(name if name is not None else f"Overwrite{_type_name(cls)}", fields)


def _normalize(tp):
    return type(None) if tp is None else tp


def _is_union(tp) -> bool:
    return get_origin(tp) in (Union, types.UnionType)


def _is_assignable(hint, target) -> bool:
    hint = _normalize(unwrap(hint))
    target = _normalize(unwrap(target))
    if target is Any or hint == target:
        return True
    # A union fits only if every member does
    if _is_union(hint):
        return all(_is_assignable(member, target) for member in get_args(hint))
    if _is_union(target):
        return any(_is_assignable(hint, member) for member in get_args(target))
    if not isinstance(target, type):
        return False
    origin = get_origin(hint)
    if origin is Literal:
        return all(isinstance(value, target) for value in get_args(hint))
    if origin is not None:
        # list[int] is assignable to list
        return isinstance(origin, type) and issubclass(origin, target)
    return isinstance(hint, type) and issubclass(hint, target)


def type_keys(cls: type, tp) -> Any:
    """
    Construct a ``Literal`` of the fields of ``cls`` whose type is assignable to ``tp``.

    TypeScript equivalent: TypeKeys<O, T>

    Args:
        cls: The record type to inspect
        tp: The type each selected field must be assignable to

    Returns:
        ``Literal`` of the matching field names, or ``Never`` when none match

    Example:
        >>> class Row(TypedDict):
        ...     id: int
        ...     label: str
        ...     count: int
        >>> type_keys(Row, int)
        typing.Literal['id', 'count']
    """
    keys = [key for key, hint in qualified_fields(cls).items() if _is_assignable(hint, tp)]
    if not keys:
        return Never
    return Literal[tuple(keys)]  # type: ignore


def undefined_keys(cls: type) -> Any:
    """
    Construct a ``Literal`` of the fields of ``cls`` annotated as ``None``.

    TypeScript equivalent: UndefinedKeys<T>

    Example:
        >>> class Event(TypedDict):
        ...     name: str
        ...     removed: None
        >>> undefined_keys(Event)
        typing.Literal['removed']
    """
    return type_keys(cls, None)


def omit_type(cls: type, tp, *, name: str | None = None) -> type:
    """Constructs a type without the fields whose type is assignable to ``tp``."""
    fields = {key: hint for key, hint in qualified_fields(cls).items() if not _is_assignable(hint, tp)}
    return _build(name if name is not None else f"OmitType{_type_name(cls)}", fields)


def defined(cls: type, *, name: str | None = None) -> type:
    """Constructs a type without the fields annotated as ``None``."""
    return omit_type(cls, None, name=name if name is not None else f"Defined{_type_name(cls)}")


def omit_required(cls: type, *, name: str | None = None) -> type:
    """Constructs a type from the optional fields of ``cls`` only."""
    fields = {key: hint for key, hint in qualified_fields(cls).items() if _is_optional(hint)}
    return _build(name if name is not None else f"OmitRequired{_type_name(cls)}", fields)


def omit_optional(cls: type, *, name: str | None = None) -> type:
    """Constructs a type from the required fields of ``cls`` only."""
    fields = {key: hint for key, hint in qualified_fields(cls).items() if not _is_optional(hint)}
    return _build(name if name is not None else f"OmitOptional{_type_name(cls)}", fields)
