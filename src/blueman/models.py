"""Canonical Pydantic models shared across all blueman modules.

This is the single source of truth for data shapes in the project. The
models fall into three groups:

**Configuration** -- :class:`GeneratorConfig`, the constants that steer the
generator (reserved metadata keys, host placeholder, schema versions).

**Description AST models** -- produced by a
:class:`~blueman.parser.base.DescriptionParser` from API Blueprint text and
consumed by the generator:
    :class:`MetadataEntry`, :class:`Header`, :class:`Payload`,
    :class:`Example`, :class:`Parameter`, :class:`ActionAttributes`,
    :class:`Action`, :class:`Resource`, :class:`ResourceGroup`, and
    :class:`Blueprint`.

These accept the camelCase keys drafter emits (``uriTemplate``,
``resourceGroups``) and silently ignore everything else drafter adds
(``element``, ``content``, source maps).

**Collection output models** -- produced by the generator and serialised
with :meth:`Collection.to_dict`:
    :class:`QueryParam`, :class:`UrlVariable`, :class:`Url`,
    :class:`RequestHeader`, :class:`RequestBody`, :class:`Request`,
    :class:`CollectionItem`, :class:`ItemGroup`, :class:`CollectionInfo`,
    :class:`CollectionVariable`, :class:`Collection`,
    :class:`EnvironmentValue`, :class:`Environment`, and :class:`Dump`.

Output models are frozen; once the generator has built them nothing
reassigns their fields.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator


# --- Configuration ---


class GeneratorConfig(BaseModel):
    """Constants that steer collection and environment generation.

    There is no configuration file: the defaults below are what the CLI
    uses, and tests or embedding code can pass an alternative instance
    through :func:`~blueman.pipeline.generate`.

    Example::

        config = GeneratorConfig(host_variable="BASE_URL")
        config.host_placeholder  # "{{BASE_URL}}"
    """

    model_config = ConfigDict(frozen=True)

    host_variable: str = Field(
        default="HOST", description="Variable name used as the URL host placeholder"
    )
    format_key: str = Field(
        default="FORMAT", description="Metadata key holding the blueprint format marker"
    )
    auth_key: str = Field(
        default="AUTH", description="Metadata key holding the auth descriptor"
    )
    env_key: str = Field(
        default="ENV", description="Metadata key holding named alternate environments"
    )
    schema_url: str = Field(
        default="https://schema.getpostman.com/json/collection/v2.0.0/collection.json",
        description="Schema identifier written into the intermediate collection",
    )
    source_version: str = Field(
        default="2.0.0", description="Schema version of the intermediate collection"
    )
    target_version: str = Field(
        default="1.0.0", description="Schema version of the final collection"
    )

    @property
    def reserved_keys(self) -> frozenset[str]:
        """Top-level metadata keys that never become variables."""
        return frozenset((self.format_key, self.auth_key, self.env_key))

    @property
    def host_placeholder(self) -> str:
        """The ``{{HOST}}`` style placeholder prefixed to every URL."""
        return "{{" + self.host_variable + "}}"


# --- Description AST ---


class MetadataEntry(BaseModel):
    """A single ``KEY: value`` line from the blueprint's metadata section."""

    name: str
    value: Any = ""


class Header(BaseModel):
    """A header declared on an example request or response."""

    name: str
    value: str = ""


class Payload(BaseModel):
    """An example request or response.

    ``body`` is kept as ``Any`` because hand-written ASTs may carry
    non-string bodies; only non-empty strings make it into a request.
    """

    name: str = ""
    description: str = ""
    headers: list[Header] = Field(default_factory=list)
    body: Any = None


class Example(BaseModel):
    """A transaction example: ordered requests and responses."""

    name: str = ""
    description: str = ""
    requests: list[Payload] = Field(default_factory=list)
    responses: list[Payload] = Field(default_factory=list)


class Parameter(BaseModel):
    """A URI parameter definition.

    ``description`` is ``None`` when the source omits it entirely, which is
    distinct from an empty description and treated as an error when the
    parameter backs a path variable.
    """

    name: str
    description: Optional[str] = None
    type: str = ""
    required: bool = True
    default: Any = ""
    example: Any = None
    values: list[Any] = Field(default_factory=list)


class ActionAttributes(BaseModel):
    """Drafter's ``attributes`` block on an action."""

    model_config = ConfigDict(populate_by_name=True)

    relation: str = ""
    uri_template: str = Field(default="", alias="uriTemplate")


class Action(BaseModel):
    """One HTTP operation on a resource, with its examples.

    Drafter nests the action's own URI template under ``attributes``; a
    plain ``uriTemplate`` key on the action is accepted as well and moved
    there during validation.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    method: str = "GET"
    parameters: list[Parameter] = Field(default_factory=list)
    attributes: ActionAttributes = Field(default_factory=ActionAttributes)
    examples: list[Example] = Field(default_factory=list)

    @model_validator(mode="before")
    @classmethod
    def _lift_uri_template(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        for key in ("uriTemplate", "uri_template"):
            if key in data:
                attributes = data.get("attributes") or {}
                if isinstance(attributes, dict):
                    attributes = {**attributes}
                    attributes.setdefault("uriTemplate", data[key])
                    data = {**data, "attributes": attributes}
                break
        return data

    @property
    def uri_template(self) -> str:
        return self.attributes.uri_template


class Resource(BaseModel):
    """A resource: a URI template shared by a list of actions."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    uri_template: str = Field(default="", alias="uriTemplate")
    parameters: list[Parameter] = Field(default_factory=list)
    actions: list[Action] = Field(default_factory=list)


class ResourceGroup(BaseModel):
    """A named group of resources, becoming one folder in the collection.

    Drafter ASTs never set ``uri_template`` on a group; hand-written ASTs
    may use it as a path prefix for every resource in the group.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    uri_template: str = Field(default="", alias="uriTemplate")
    parameters: list[Parameter] = Field(default_factory=list)
    resources: list[Resource] = Field(default_factory=list)


class Blueprint(BaseModel):
    """Root of a parsed API Blueprint description."""

    model_config = ConfigDict(populate_by_name=True)

    name: str = ""
    description: str = ""
    metadata: list[MetadataEntry] = Field(default_factory=list)
    resource_groups: list[ResourceGroup] = Field(
        default_factory=list, alias="resourceGroups"
    )


# --- Collection output ---


_FROZEN = ConfigDict(frozen=True, populate_by_name=True)


class QueryParam(BaseModel):
    """A ``key=value`` pair from the URI template's query portion.

    ``value`` is ``None`` when the pair has no ``=``; it is then omitted
    from the serialised document.
    """

    model_config = _FROZEN

    key: str
    value: Optional[str] = None


class UrlVariable(BaseModel):
    """A ``:name`` path variable resolved against its parameter definition."""

    model_config = _FROZEN

    key: str
    value: Any = ""
    description: str = ""
    type: str = ""


class Url(BaseModel):
    """A structured request URL."""

    model_config = _FROZEN

    raw: str
    host: list[str]
    path: list[str] = Field(default_factory=list)
    query: list[QueryParam] = Field(default_factory=list)
    variable: list[UrlVariable] = Field(default_factory=list)


class RequestHeader(BaseModel):
    model_config = _FROZEN

    key: str
    value: str = ""


class RequestBody(BaseModel):
    model_config = _FROZEN

    mode: str = "raw"
    raw: str = ""


class Request(BaseModel):
    """The request half of a collection item."""

    model_config = _FROZEN

    url: Url
    auth: dict[str, Any] = Field(default_factory=dict)
    method: str
    headers: list[RequestHeader] = Field(default_factory=list)
    body: Optional[RequestBody] = None
    description: str = ""


class CollectionItem(BaseModel):
    """One request in the collection, produced from one blueprint action."""

    model_config = _FROZEN

    name: str
    description: str = ""
    request: Request


class ItemGroup(BaseModel):
    """A folder of collection items, produced from one resource group."""

    model_config = _FROZEN

    name: str
    description: str = ""
    item: list[CollectionItem] = Field(default_factory=list)


class CollectionInfo(BaseModel):
    model_config = _FROZEN

    name: str
    description: str = ""
    postman_id: str = Field(alias="_postman_id")
    schema_: str = Field(alias="schema")


class CollectionVariable(BaseModel):
    model_config = _FROZEN

    key: str
    value: Any


class Collection(BaseModel):
    """The intermediate (pre-conversion) collection.

    See Also:
        :class:`~blueman.converter.v1.V1Converter`: turns the dict form of
        this model into the final versioned document.
    """

    model_config = _FROZEN

    info: CollectionInfo
    variable: list[CollectionVariable] = Field(default_factory=list)
    auth: dict[str, Any] = Field(default_factory=dict)
    item: list[ItemGroup] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        """Serialise to the JSON-ready dict handed to the converter."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class EnvironmentValue(BaseModel):
    model_config = _FROZEN

    name: str
    key: str
    value: Any
    type: str = "text"


class Environment(BaseModel):
    """A named set of variables, importable alongside the collection."""

    model_config = _FROZEN

    id: str
    name: str
    timestamp: int = Field(description="Creation time in milliseconds since the epoch")
    synced: bool = False
    values: list[EnvironmentValue] = Field(default_factory=list)


class Dump(BaseModel):
    """The final document: converted collections plus environments."""

    model_config = _FROZEN

    version: int = 1
    collections: list[dict[str, Any]] = Field(default_factory=list)
    environments: list[Environment] = Field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)
