"""Turn a blueprint URI template into a structured collection URL.

A template such as ``/users/{id}/posts?sort=asc&page=`` is decomposed the way
API-testing clients expect:

1. One leading and one trailing slash are stripped.
2. Every ``{name}`` placeholder becomes the ``:name`` path-variable marker.
3. The result is split on the first ``?`` into a path and a query portion.
4. The path is split on ``/`` into ordered segments.
5. The query is split on ``&`` and each pair on its first ``=``; pairs whose
   key is empty are dropped.
6. Each ``:name`` segment is resolved against the parameter definitions;
   a segment without a documented definition is an error.
7. ``raw`` is the host placeholder, a slash, and the rewritten template.

No normalisation beyond that is attempted: RFC 6570 operators such as
``{?page}`` pass through the same substitution as plain placeholders.
"""

from __future__ import annotations

import re
from collections.abc import Sequence

from blueman.exceptions import UnresolvedVariableError
from blueman.models import Parameter, QueryParam, Url, UrlVariable

_PLACEHOLDER_RE = re.compile(r"\{([^}]+)\}")

VARIABLE_MARKER = ":"


def resolve_url(
    template: str,
    parameters: Sequence[Parameter],
    host: str = "{{HOST}}",
) -> Url:
    """Decompose *template* into a :class:`~blueman.models.Url`.

    Args:
        template: The combined URI template (group, resource, and action
            templates concatenated).
        parameters: Parameter definitions available to the template,
            least specific first.
        host: Host placeholder prefixed to ``raw`` and used as ``host``.

    Returns:
        The structured URL.

    Raises:
        UnresolvedVariableError: If a ``:name`` segment has no matching
            parameter definition, or the definition has no description.

    Example::

        url = resolve_url("/items/{id}?full=1", [Parameter(name="id", example="7", description="")])
        url.raw       # "{{HOST}}/items/:id?full=1"
        url.path      # ["items", ":id"]
        url.query     # [QueryParam(key="full", value="1")]
        url.variable  # [UrlVariable(key="id", value="7", ...)]
    """
    rewritten = _PLACEHOLDER_RE.sub(
        lambda m: VARIABLE_MARKER + m.group(1), _strip_slashes(template)
    )
    path_part, _, query_part = rewritten.partition("?")
    path = path_part.split("/")

    return Url(
        raw=f"{host}/{rewritten}",
        host=[host],
        path=path,
        query=parse_query(query_part),
        variable=[
            _resolve_variable(segment[len(VARIABLE_MARKER):], parameters, template)
            for segment in path
            if segment.startswith(VARIABLE_MARKER)
        ],
    )


def parse_query(query: str) -> list[QueryParam]:
    """Split a query string into ordered pairs, dropping empty keys.

    A pair without ``=`` keeps a ``None`` value; anything after the first
    ``=`` (including further ``=`` characters) is the value.
    """
    params: list[QueryParam] = []
    for pair in query.split("&"):
        key, sep, value = pair.partition("=")
        if not key:
            continue
        params.append(QueryParam(key=key, value=value if sep else None))
    return params


def find_parameter(name: str, parameters: Sequence[Parameter]) -> Parameter | None:
    """Return the most specific definition named *name*, or ``None``.

    *parameters* is ordered least specific first (group, resource, action),
    so the last match wins.
    """
    # Later definitions shadow earlier ones; a first-match lookup would let a
    # group definition hide the action's own.
    for param in reversed(parameters):
        if param.name == name:
            return param
    return None


def _resolve_variable(
    name: str, parameters: Sequence[Parameter], template: str
) -> UrlVariable:
    param = find_parameter(name, parameters)
    if param is None:
        raise UnresolvedVariableError(
            f"URI template '{template}' uses variable '{name}' "
            "but no parameter with that name is defined"
        )
    if param.description is None:
        raise UnresolvedVariableError(
            f"Parameter '{name}' in URI template '{template}' has no description"
        )
    return UrlVariable(
        key=name,
        value=param.example if param.example is not None else "",
        description=param.description.strip(),
        type=param.type,
    )


def _strip_slashes(template: str) -> str:
    """Remove at most one leading and one trailing slash."""
    if template.startswith("/"):
        template = template[1:]
    if template.endswith("/"):
        template = template[:-1]
    return template
