"""
Word splitting and case conversion.

Strings are split on delimiter characters and before every uppercase
character. Runs of capitals are not grouped, so every capital starts a new
word:

    >>> split_words('HTTPServer')
    ['', 'h', 't', 't', 'p', 'server']

Empty words are kept in the sequence; they add no characters when joined.
"""

import enum
from collections.abc import Iterable

from deeptype.config import DEFAULT_WORD_DELIMITERS, TokenizerOptions


def split_words(
    text: str,
    word_delimiters: Iterable[str] = DEFAULT_WORD_DELIMITERS,
    *,
    options: TokenizerOptions | None = None,
) -> list[str]:
    """
    Split a string into lowercase words by delimiters and uppercase letters.

    Each delimiter, and each uppercase character, closes the current word
    even when it is empty. A boundary at the very end of the input does not
    produce a trailing empty word.

    Args:
        text: The string to split
        word_delimiters: Characters treated as explicit word separators
        options: Ready-made options, overriding ``word_delimiters``

    Returns:
        The words, in order

    Example:
        >>> split_words('foo bar_baz')
        ['foo', 'bar', 'baz']
        >>> split_words('fooBar')
        ['foo', 'bar']
        >>> split_words('foo__bar')
        ['foo', '', 'bar']
    """
    if options is None:
        options = TokenizerOptions(word_delimiters=frozenset(word_delimiters))
    delimiters = options.word_delimiters

    words: list[str] = []
    current: list[str] = []
    for char in text:
        if char in delimiters:
            words.append("".join(current))
            current = []
        elif char.isupper():
            words.append("".join(current))
            current = [char.lower()]
        else:
            current.append(char.lower())
    if current:
        words.append("".join(current))
    return words


def camel_case_to_snake_case(text: str) -> str:
    """
    Prefix every uppercase character with an underscore and lowercase everything.

    Example:
        >>> camel_case_to_snake_case('fooBarBaz')
        'foo_bar_baz'
    """
    return "".join(f"_{char.lower()}" if char.isupper() else char.lower() for char in text)


def split_case_to_words(text: str) -> list[str]:
    """Decompose an identifier in any case style into its words."""
    return split_words(text)


def _words(words: str | Iterable[str]) -> list[str]:
    if isinstance(words, str):
        return split_words(words)
    return list(words)


def _capitalize(word: str) -> str:
    # str.capitalize would lowercase the rest of the word
    return word[:1].upper() + word[1:]


def to_pascal_case(words: str | Iterable[str]) -> str:
    """
    Capitalize every word and concatenate.

    A string argument is split with :func:`split_words` first.

    Example:
        >>> to_pascal_case(['foo', 'bar'])
        'FooBar'
    """
    return "".join(_capitalize(word) for word in _words(words))


def to_camel_case(words: str | Iterable[str]) -> str:
    """
    Like :func:`to_pascal_case` with the first letter lowercased.

    Example:
        >>> to_camel_case('foo-bar')
        'fooBar'
    """
    pascal = to_pascal_case(words)
    return pascal[:1].lower() + pascal[1:]


def to_snake_case(words: str | Iterable[str]) -> str:
    """
    Lowercase every word and join with underscores.

    Example:
        >>> to_snake_case(['Foo', 'bar'])
        'foo_bar'
    """
    return "_".join(word.lower() for word in _words(words))


def to_kebab_case(words: str | Iterable[str]) -> str:
    """Lowercase every word and join with hyphens."""
    return "-".join(word.lower() for word in _words(words))


def snake_to_camel(text: str) -> str:
    """
    Convert a snake_case string to camelCase.

    The first word is kept as-is, the others are capitalized.

    Example:
        >>> snake_to_camel('foo_bar')
        'fooBar'
    """
    first, *rest = text.split("_")
    return first + "".join(_capitalize(word) for word in rest)


class CaseStyle(enum.Enum):
    PASCAL = "PascalCase"
    CAMEL = "camelCase"
    SNAKE = "snake_case"
    KEBAB = "kebab-case"


_JOINERS = {
    CaseStyle.PASCAL: to_pascal_case,
    CaseStyle.CAMEL: to_camel_case,
    CaseStyle.SNAKE: to_snake_case,
    CaseStyle.KEBAB: to_kebab_case,
}


def convert_case(text: str, style: CaseStyle | str) -> str:
    """
    Re-case an identifier into ``style``.

    ``style`` may be a :class:`CaseStyle` or its value, e.g. ``"kebab-case"``.

    Example:
        >>> convert_case('fooBar', CaseStyle.KEBAB)
        'foo-bar'
    """
    return _JOINERS[CaseStyle(style)](split_case_to_words(text))
