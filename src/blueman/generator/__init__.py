"""Collection generator -- the blueprint-to-collection transformation core.

This sub-package turns a parsed :class:`~blueman.models.Blueprint` into the
intermediate collection and its environments. Everything here is a pure,
synchronous function of its inputs.

Typical usage::

    from blueman.generator import (
        assemble_collection,
        build_metadata_tree,
        generate_environments,
    )

    tree = build_metadata_tree(blueprint.metadata)
    collection = assemble_collection(blueprint, tree)
    environments = generate_environments(blueprint.name, tree)

Sub-modules:

* :mod:`~blueman.generator.metadata` -- Dotted metadata keys to a nested
  :class:`~blueman.generator.metadata.MetadataTree`.
* :mod:`~blueman.generator.url` -- URI templates to structured URLs with
  path segments, query pairs, and resolved path variables.
* :mod:`~blueman.generator.request` -- One action to one collection item.
* :mod:`~blueman.generator.collection` -- Walks groups, resources, and
  actions into the collection skeleton.
* :mod:`~blueman.generator.environment` -- Default and named environments.
"""

from blueman.generator.collection import assemble_collection
from blueman.generator.environment import generate_environments
from blueman.generator.metadata import MetadataTree, build_metadata_tree
from blueman.generator.request import map_action
from blueman.generator.url import resolve_url

__all__ = [
    "MetadataTree",
    "assemble_collection",
    "build_metadata_tree",
    "generate_environments",
    "map_action",
    "resolve_url",
]
