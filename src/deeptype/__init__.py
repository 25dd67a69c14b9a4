from .config import (
    DEFAULT_MAX_DEPTH,
    MergeOptions,
    PathOptions,
    TemplateMarkers,
    TokenizerOptions,
)
from .core import DelimiterCollisionError, deep_pick, flatten, nested_keys, to_typeddict
from .merge import (
    common,
    deep_inject,
    deep_override,
    defined,
    difference,
    inject,
    omit_type,
    overridable_string_union,
    override,
    overwrite,
)
from .paths import (
    PathNotFoundError,
    enumerate_leaf_paths,
    enumerate_paths,
    pick_paths,
    resolve,
)
from .strings import (
    CaseStyle,
    camel_case_to_snake_case,
    convert_case,
    snake_to_camel,
    split_case_to_words,
    split_words,
    to_camel_case,
    to_kebab_case,
    to_pascal_case,
    to_snake_case,
)
from .templates import parameters_typeddict, parametrize, render
from .utilities import (
    deep_partial,
    deep_partial_except,
    demand,
    loosen,
    loosen_deeply,
    omit,
    omit_optional,
    omit_required,
    partial,
    pick,
    type_keys,
    undefined_keys,
)
from ._internal import is_plain_object

__all__ = [
    # Configuration
    "DEFAULT_MAX_DEPTH",
    "MergeOptions",
    "PathOptions",
    "TemplateMarkers",
    "TokenizerOptions",
    # Nested paths over data
    "enumerate_paths",
    "enumerate_leaf_paths",
    "resolve",
    "pick_paths",
    "is_plain_object",
    # Merging
    "override",
    "deep_override",
    "inject",
    "deep_inject",
    "overwrite",
    "difference",
    "common",
    "omit_type",
    "defined",
    "overridable_string_union",
    # Words and case styles
    "split_words",
    "split_case_to_words",
    "camel_case_to_snake_case",
    "to_pascal_case",
    "to_camel_case",
    "to_snake_case",
    "to_kebab_case",
    "snake_to_camel",
    "CaseStyle",
    "convert_case",
    # Templates
    "parametrize",
    "parameters_typeddict",
    "render",
    # Nested paths over record types
    "to_typeddict",
    "flatten",
    "nested_keys",
    "deep_pick",
    # Record-type utilities (see deeptype.utilities for the rest)
    "partial",
    "deep_partial",
    "deep_partial_except",
    "pick",
    "omit",
    "demand",
    "loosen",
    "loosen_deeply",
    "type_keys",
    "undefined_keys",
    "omit_required",
    "omit_optional",
    # Exceptions
    "PathNotFoundError",
    "DelimiterCollisionError",
]
