"""Derive environments from the metadata tree.

Every run yields a default environment named after the collection. Each
child of the ``ENV`` metadata subtree yields one more, so::

    HOST: https://api.example.com
    ENV.staging.HOST: https://staging.example.com

produces ``"My API"`` and ``"My API (staging)"``.
"""

from __future__ import annotations

import hashlib
import logging
import time
from typing import Any, Optional

from blueman.generator.collection import collection_variables
from blueman.generator.metadata import MetadataTree
from blueman.models import Environment, EnvironmentValue, GeneratorConfig

logger = logging.getLogger(__name__)


def generate_environments(
    name: str,
    tree: MetadataTree,
    config: Optional[GeneratorConfig] = None,
    timestamp: Optional[int] = None,
) -> list[Environment]:
    """Build the default environment plus one per ``ENV`` child.

    Args:
        name: Collection display name.
        tree: Metadata tree of the description.
        config: Generator settings; defaults to :class:`GeneratorConfig`.
        timestamp: Creation time in milliseconds; defaults to now. All
            environments of one run share it.

    Returns:
        Environments in order: default first, then ``ENV`` children in
        tree order. A scalar ``ENV`` child yields an environment with no
        values.
    """
    config = config or GeneratorConfig()
    if timestamp is None:
        timestamp = int(time.time() * 1000)

    environments = [
        _environment(name, collection_variables(tree, config), timestamp)
    ]

    env_tree = tree.subtree(config.env_key)
    if env_tree is not None:
        for child in env_tree:
            child_tree = env_tree.subtree(child)
            if child_tree is None:
                logger.debug("%s.%s is not a group of variables", config.env_key, child)
            variables = child_tree.scalars() if child_tree is not None else []
            environments.append(
                _environment(f"{name} ({child})", variables, timestamp)
            )

    return environments


def environment_id(name: str) -> str:
    """Stable identifier for an environment: the SHA-1 hex digest of its name."""
    return hashlib.sha1(name.encode("utf-8")).hexdigest()


def _environment(
    name: str, variables: list[tuple[str, Any]], timestamp: int
) -> Environment:
    return Environment(
        id=environment_id(name),
        name=name,
        timestamp=timestamp,
        synced=False,
        values=[
            EnvironmentValue(name=key, key=key, value=value, type="text")
            for key, value in variables
        ],
    )
