"""
Placeholder extraction from space-separated templates.

A placeholder is recognised only when both markers sit inside a single
space-separated token, so ``"{{first name}}"`` is not a parameter.
"""

from collections.abc import Iterator, Mapping
from typing import Any

from typing_extensions import TypedDict

from deeptype.config import TemplateMarkers


def _markers(open: str, close: str | None, options: TemplateMarkers | None) -> TemplateMarkers:
    if options is not None:
        return options
    return TemplateMarkers(open=open, close=close)


def _find(token: str, markers: TemplateMarkers) -> tuple[int, int] | None:
    """Return the span of the name between the first open marker and the next close."""
    start = token.find(markers.open)
    if start == -1:
        return None
    start += len(markers.open)
    end = token.find(markers.close_marker, start)
    if end == -1:
        return None
    return start, end


def _iter_names(template: str, markers: TemplateMarkers) -> Iterator[str]:
    for token in template.split(" "):
        span = _find(token, markers)
        if span is not None:
            yield token[span[0]:span[1]]


def parametrize(
    template: str,
    open: str,
    close: str | None = None,
    *,
    options: TemplateMarkers | None = None,
) -> dict[str, type]:
    """
    Extract the placeholder names of a template.

    Each name maps to ``str``: every placeholder is a plain string parameter.

    Args:
        template: Space-separated template text
        open: Opening marker
        close: Closing marker, defaults to ``open``
        options: Ready-made markers, overriding ``open`` and ``close``

    Returns:
        Mapping of parameter name to ``str``, in order of first appearance

    Example:
        >>> parametrize('{{foo}} bar {{baz}}', '{{', '}}')
        {'foo': <class 'str'>, 'baz': <class 'str'>}
        >>> parametrize('$user$ logged in', '$')
        {'user': <class 'str'>}
    """
    markers = _markers(open, close, options)
    return dict.fromkeys(_iter_names(template, markers), str)


def parameters_typeddict(
    template: str,
    open: str,
    close: str | None = None,
    *,
    name: str = "Parameters",
) -> type:
    """
    Build a TypedDict with one ``str`` field per placeholder of a template.

    Example:
        >>> Params = parameters_typeddict('Hello {name}!', '{', '}')
        >>> Params.__annotations__
        {'name': <class 'str'>}
    """
    return TypedDict(name, parametrize(template, open, close))  # type: ignore


def render(
    template: str,
    open: str,
    values: Mapping[str, Any],
    close: str | None = None,
) -> str:
    """
    Substitute every recognised placeholder with ``str(values[name])``.

    Only the first placeholder of each token is substituted, mirroring
    :func:`parametrize`.

    Raises:
        KeyError: If a placeholder has no value

    Example:
        >>> render('{{greeting}}, {{name}}!', '{{', {'greeting': 'Hi', 'name': 'Ada'}, '}}')
        'Hi, Ada!'
    """
    markers = _markers(open, close, None)
    rendered = []
    for token in template.split(" "):
        span = _find(token, markers)
        if span is None:
            rendered.append(token)
            continue
        start, end = span
        key = token[start:end]
        if key not in values:
            raise KeyError(f"No value for template parameter {key!r}")
        prefix = token[:start - len(markers.open)]
        suffix = token[end + len(markers.close_marker):]
        rendered.append(f"{prefix}{values[key]}{suffix}")
    return " ".join(rendered)
