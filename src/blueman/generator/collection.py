"""Assemble the intermediate collection from a parsed blueprint.

The collection mirrors the blueprint's hierarchy one level deep: each
resource group becomes a folder, and every action of every resource in the
group becomes a request inside that folder, in document order.

Top-level metadata feeds two other parts of the collection:

* Scalar, non-reserved keys become collection variables (``HOST`` being
  the one every request URL refers to).
* The ``AUTH`` subtree becomes the auth descriptor of every request.
"""

from __future__ import annotations

import logging
import uuid
from typing import Any, Optional

from blueman.generator.metadata import MetadataTree
from blueman.generator.request import map_action
from blueman.models import (
    Blueprint,
    Collection,
    CollectionInfo,
    CollectionVariable,
    GeneratorConfig,
    ItemGroup,
)

logger = logging.getLogger(__name__)


def assemble_collection(
    blueprint: Blueprint,
    tree: MetadataTree,
    config: Optional[GeneratorConfig] = None,
) -> Collection:
    """Build the intermediate :class:`~blueman.models.Collection`.

    Args:
        blueprint: The parsed description.
        tree: Metadata tree built from ``blueprint.metadata``.
        config: Generator settings; defaults to :class:`GeneratorConfig`.

    Returns:
        The collection, with a freshly generated ``_postman_id``.

    Raises:
        MissingExampleError: Propagated from the action mapper.
        UnresolvedVariableError: Propagated from the URL resolver.
    """
    config = config or GeneratorConfig()
    auth = auth_descriptor(tree, config)

    groups = [
        ItemGroup(
            name=group.name,
            description=group.description,
            item=[
                map_action(group, resource, action, auth, host=config.host_placeholder)
                for resource in group.resources
                for action in resource.actions
            ],
        )
        for group in blueprint.resource_groups
    ]
    logger.debug(
        "Assembled %d groups with %d requests",
        len(groups),
        sum(len(g.item) for g in groups),
    )

    return Collection(
        info=CollectionInfo(
            name=blueprint.name,
            description=blueprint.description,
            postman_id=str(uuid.uuid4()),
            schema_=config.schema_url,
        ),
        variable=[
            CollectionVariable(key=key, value=value)
            for key, value in collection_variables(tree, config)
        ],
        auth=auth,
        item=groups,
    )


def collection_variables(
    tree: MetadataTree, config: GeneratorConfig
) -> list[tuple[str, Any]]:
    """Return top-level scalar metadata, minus the reserved keys, in tree order.

    Shared with :mod:`blueman.generator.environment` so the default
    environment carries exactly the collection variables.
    """
    return tree.scalars(exclude=config.reserved_keys)


def auth_descriptor(tree: MetadataTree, config: GeneratorConfig) -> dict[str, Any]:
    """Return the auth subtree as a plain dict, or ``{}`` when absent or scalar."""
    subtree = tree.subtree(config.auth_key)
    return subtree.to_dict() if subtree is not None else {}
