"""Tests for the shared classification predicates."""

from collections import OrderedDict
from dataclasses import dataclass
from typing import List, Optional

import pytest
from pydantic import BaseModel
from typing_extensions import NotRequired, TypedDict

from deeptype._internal import format_key, is_object_type, is_plain_object, td_diff


class Record(TypedDict):
    a: int


class Model(BaseModel):
    a: int


@dataclass
class Point:
    x: int


class Plain:
    a: int


class Bare:
    pass


@pytest.mark.parametrize(
    "value, expected",
    [
        ({}, True),
        ({"a": 1}, True),
        (OrderedDict(), True),
        ([], False),
        ((), False),
        ("abc", False),
        (None, False),
        (1, False),
        ({1, 2}, False),
    ],
)
def test_is_plain_object(value, expected: bool) -> None:
    assert is_plain_object(value) is expected


@pytest.mark.parametrize(
    "key, expected",
    [
        ("name", "name"),
        (3, "3"),
        ("", None),
        ("a.b", None),
        (True, None),
        (2.5, None),
        (("t",), None),
    ],
)
def test_format_key(key, expected) -> None:
    assert format_key(key) == expected


def test_format_key_custom_separator() -> None:
    assert format_key("a.b", "/") == "a.b"
    assert format_key("a/b", "/") is None


@pytest.mark.parametrize(
    "tp, expected",
    [
        (Record, True),
        (NotRequired[Record], True),
        (Model, True),
        (Point, True),
        (Plain, True),
        (Bare, False),
        (BaseModel, False),
        (int, False),
        (str, False),
        (dict, False),
        (list[Record], False),
        (List[Model], False),
        (dict[str, Record], False),
        (Optional[Record], False),
    ],
)
def test_is_object_type(tp, expected: bool) -> None:
    assert is_object_type(tp) is expected


def test_td_diff() -> None:
    a = TypedDict("User", {"name": str, "age": int})
    b = TypedDict("User", {"name": str, "age": str})
    assert td_diff(a, b) == "TypedDict differences:\n  Field 'age': int != str"
    assert td_diff(a, a) == ""
