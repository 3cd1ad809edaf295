"""Amplify: Email Template Rendering.

Only the placeholders named in a template's ``variables`` list are
substituted. Any other ``{{token}}`` in the content is left as written.
"""

from typing import Any, Mapping, Sequence

import markdown


def substitute(content: str, variables: Sequence[str], values: Mapping[str, Any]) -> str:
    """Replace every ``{{name}}`` for each listed name, in listed order.

    A name with no value (or a None value) becomes the empty string.
    """
    for name in variables:
        value = values.get(name)
        content = content.replace("{{" + name + "}}", "" if value is None else str(value))
    return content


def to_html(content: str) -> str:
    return markdown.markdown(content)


def render(content: str, variables: Sequence[str], values: Mapping[str, Any]) -> str:
    """Substitute placeholders, then convert the result to sendable HTML."""
    return to_html(substitute(content, variables, values))
