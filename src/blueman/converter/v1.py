"""Convert the intermediate v2.0.0 collection into the v1.0.0 format.

The v1 format is flat: requests live in a single ``requests`` array and
folders reference them by id through their ``order`` lists. Headers are a
newline-separated ``"Key: value"`` string, path variables a plain mapping,
and auth is expressed as a ``currentHelper`` plus ``helperAttributes``.

Folder and request ids are UUID5 values derived from the collection name and
the item's position, so converting the same collection twice yields the
same ids. Only the collection's own id (taken from ``info._postman_id``)
changes between runs.
"""

from __future__ import annotations

import uuid
from typing import Any, Optional

from pydantic import ValidationError

from blueman.converter.base import CollectionConverter
from blueman.exceptions import ConversionError
from blueman.models import Collection, CollectionItem, Request

SOURCE_VERSION = "2.0.0"
TARGET_VERSION = "1.0.0"

_AUTH_HELPERS = {
    "awsv4": "awsSigV4",
    "basic": "basicAuth",
    "bearer": "bearerAuth",
    "digest": "digestAuth",
    "hawk": "hawkAuth",
    "ntlm": "ntlmAuth",
    "oauth1": "oAuth1",
    "oauth2": "oAuth2",
}


class V1Converter(CollectionConverter):
    """In-process converter from collection schema 2.0.0 to 1.0.0."""

    async def convert(
        self,
        collection: dict[str, Any],
        *,
        from_version: str,
        to_version: str,
    ) -> dict[str, Any]:
        if (from_version, to_version) != (SOURCE_VERSION, TARGET_VERSION):
            raise ConversionError(
                f"Unsupported conversion {from_version} -> {to_version}; "
                f"only {SOURCE_VERSION} -> {TARGET_VERSION} is available"
            )
        try:
            parsed = Collection.model_validate(collection)
        except ValidationError as exc:
            raise ConversionError(f"Invalid {from_version} collection: {exc}") from exc
        return to_v1(parsed)


def to_v1(collection: Collection) -> dict[str, Any]:
    """Build the v1.0.0 document for *collection*."""
    collection_id = collection.info.postman_id
    name = collection.info.name
    folders: list[dict[str, Any]] = []
    requests: list[dict[str, Any]] = []

    for group_index, group in enumerate(collection.item):
        folder_id = stable_id(name, str(group_index))
        order: list[str] = []
        for item_index, item in enumerate(group.item):
            request_id = stable_id(name, f"{group_index}/{item_index}")
            requests.append(_request(item, request_id, collection_id, folder_id))
            order.append(request_id)
        folders.append(
            {
                "id": folder_id,
                "name": group.name,
                "description": group.description,
                "order": order,
                "folders_order": [],
                "collectionId": collection_id,
            }
        )

    return {
        "id": collection_id,
        "name": name,
        "description": collection.info.description,
        "auth": collection.auth or None,
        "variables": [{"key": v.key, "value": v.value} for v in collection.variable],
        "order": [],
        "folders": folders,
        "folders_order": [f["id"] for f in folders],
        "requests": requests,
    }


def stable_id(collection_name: str, position: str) -> str:
    """Deterministic id for the folder or request at *position*."""
    return str(uuid.uuid5(uuid.NAMESPACE_URL, f"blueman:{collection_name}:{position}"))


def _request(
    item: CollectionItem, request_id: str, collection_id: str, folder_id: str
) -> dict[str, Any]:
    request = item.request
    url = request.url
    helper, attributes = _auth_helper(request.auth)

    converted: dict[str, Any] = {
        "id": request_id,
        "name": item.name,
        "description": request.description,
        "url": url.raw,
        "method": request.method,
        "headers": "".join(f"{h.key}: {h.value}\n" for h in request.headers),
        "headerData": [{"key": h.key, "value": h.value} for h in request.headers],
        "queryParams": [
            {
                "key": q.key,
                "value": q.value,
                "equals": q.value is not None,
                "description": "",
            }
            for q in url.query
        ],
        "pathVariables": {v.key: v.value for v in url.variable},
        "pathVariableData": [
            {"key": v.key, "value": v.value, "description": v.description}
            for v in url.variable
        ],
        "auth": request.auth or None,
        "currentHelper": helper,
        "helperAttributes": attributes,
        "collectionId": collection_id,
        "folder": folder_id,
    }
    converted.update(_body(request))
    return converted


def _body(request: Request) -> dict[str, Any]:
    if request.body is None:
        return {"dataMode": "params", "data": []}
    return {"dataMode": request.body.mode, "data": [], "rawModeData": request.body.raw}


def _auth_helper(auth: dict[str, Any]) -> tuple[Optional[str], Optional[dict[str, Any]]]:
    """Map a v2 auth descriptor to v1's ``currentHelper``/``helperAttributes``."""
    helper = _AUTH_HELPERS.get(str(auth.get("type", "")))
    if helper is None:
        return None, None
    params = auth.get(auth["type"])
    attributes = {"id": helper}
    if isinstance(params, dict):
        attributes.update(params)
    return helper, attributes
