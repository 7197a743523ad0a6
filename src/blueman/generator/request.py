"""Map one blueprint action to one collection item.

Only the first example's first request and first response are used; further
examples, requests, and responses describe alternative transactions that a
single collection request cannot represent, so they are ignored.
"""

from __future__ import annotations

import logging
from typing import Any

from blueman.exceptions import MissingExampleError
from blueman.generator.url import resolve_url
from blueman.models import (
    Action,
    CollectionItem,
    Header,
    Payload,
    Request,
    RequestBody,
    RequestHeader,
    Resource,
    ResourceGroup,
)

logger = logging.getLogger(__name__)

_ACCEPT = "accept"
_CONTENT_TYPE = "content-type"


def map_action(
    group: ResourceGroup,
    resource: Resource,
    action: Action,
    auth: dict[str, Any],
    host: str = "{{HOST}}",
) -> CollectionItem:
    """Build the :class:`~blueman.models.CollectionItem` for *action*.

    Args:
        group: The resource group containing *resource*.
        resource: The resource containing *action*.
        action: The action to map.
        auth: Auth descriptor copied unchanged into the request.
        host: Host placeholder for the request URL.

    Returns:
        A collection item whose name and description mirror the action.

    Raises:
        MissingExampleError: If the action has no example, or its first
            example lacks a request or a response.
        UnresolvedVariableError: If a path variable cannot be resolved
            (propagated from :func:`~blueman.generator.url.resolve_url`).
    """
    request_payload, response_payload = _first_transaction(resource, action)

    template = f"{group.uri_template}{resource.uri_template}{action.uri_template}"
    parameters = [*group.parameters, *resource.parameters, *action.parameters]
    url = resolve_url(template, parameters, host=host)

    logger.debug("Mapped %s %s", action.method, url.raw)

    return CollectionItem(
        name=action.name,
        description=action.description,
        request=Request(
            url=url,
            auth=auth,
            method=action.method,
            headers=_build_headers(request_payload, response_payload),
            body=_build_body(request_payload),
            description=action.description,
        ),
    )


def _first_transaction(resource: Resource, action: Action) -> tuple[Payload, Payload]:
    label = f"{action.method} {action.name or resource.name or resource.uri_template}".strip()
    if not action.examples:
        raise MissingExampleError(f"Action '{label}' has no examples")
    example = action.examples[0]
    if not example.requests:
        raise MissingExampleError(f"Action '{label}' has no example request")
    if not example.responses:
        raise MissingExampleError(f"Action '{label}' has no example response")
    return example.requests[0], example.responses[0]


def _build_headers(request: Payload, response: Payload) -> list[RequestHeader]:
    """Copy request headers and add ``Accept`` from the response's ``Content-Type``.

    Header names compare case-insensitively. An existing ``Accept`` header is
    never touched; if the response declares several ``Content-Type`` headers
    the first one is used.
    """
    headers = [RequestHeader(key=h.name, value=h.value) for h in request.headers]
    if _find_header(request.headers, _ACCEPT) is None:
        content_type = _find_header(response.headers, _CONTENT_TYPE)
        if content_type is not None:
            headers.append(RequestHeader(key="Accept", value=content_type.value))
    return headers


def _find_header(headers: list[Header], name: str) -> Header | None:
    for header in headers:
        if header.name.lower() == name:
            return header
    return None


def _build_body(request: Payload) -> RequestBody | None:
    # Only non-empty strings count; whitespace-only bodies still yield an empty raw body.
    if isinstance(request.body, str) and request.body != "":
        return RequestBody(mode="raw", raw=request.body.strip())
    return None
