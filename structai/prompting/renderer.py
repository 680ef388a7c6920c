"""Placeholder substitution for prompt templates."""

from collections.abc import Mapping


def render(template: str | None, variables: Mapping[str, str] | None) -> str | None:
    """
    Replace ``{{name}}`` placeholders with values from ``variables``.

    Every occurrence of a known placeholder is replaced; unknown placeholders
    are left verbatim. Substituted values are never re-scanned, so a value
    containing ``{{other}}`` stays literal.
    """
    if not template or not variables:
        return template

    # Single pass over the original template keeps substitution non-recursive
    pieces: list[str] = []
    cursor = 0
    while True:
        start = template.find("{{", cursor)
        if start == -1:
            break
        end = template.find("}}", start + 2)
        if end == -1:
            break

        name = template[start + 2 : end]
        if name in variables:
            pieces.append(template[cursor:start])
            pieces.append(str(variables[name]))
            cursor = end + 2
        else:
            # Keep "{{" and resume inside, so "{{{{a}}" still finds "{{a}}"
            pieces.append(template[cursor : start + 2])
            cursor = start + 2

    pieces.append(template[cursor:])
    return "".join(pieces)
