"""Build a nested configuration tree from flat, dotted metadata keys.

API Blueprint metadata is a flat list of ``KEY: value`` lines. blueman
reads dots in the key as nesting, so::

    HOST: https://api.example.com
    AUTH.type: basic
    AUTH.basic.username: demo
    ENV.staging.HOST: https://staging.example.com

becomes::

    {
        "HOST": "https://api.example.com",
        "AUTH": {"type": "basic", "basic": {"username": "demo"}},
        "ENV": {"staging": {"HOST": "https://staging.example.com"}},
    }

Each node of the resulting :class:`MetadataTree` is either a scalar or a
nested ``MetadataTree``. Entries are applied in order and the last write
wins: a repeated key overwrites the earlier value, and a scalar that is
later used as a parent is replaced by an empty subtree (nothing is merged).
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping
from typing import Any, Union

from blueman.models import MetadataEntry

Scalar = Union[str, int, float, bool]
"""Leaf value types that can become collection or environment variables."""

_SCALAR_TYPES = (str, int, float, bool)


def is_scalar(value: Any) -> bool:
    """Return True if *value* is a leaf that can become a variable."""
    return isinstance(value, _SCALAR_TYPES)


class MetadataTree(Mapping[str, Any]):
    """Read-only nested mapping produced by :func:`build_metadata_tree`.

    Values are scalars, nested ``MetadataTree`` instances, or (rarely) other
    structured values a hand-written AST supplied verbatim, such as lists.
    Key order follows first insertion, as in a regular ``dict``.
    """

    __slots__ = ("_nodes",)

    def __init__(self, nodes: dict[str, Any] | None = None) -> None:
        self._nodes: dict[str, Any] = dict(nodes or {})

    def __getitem__(self, key: str) -> Any:
        return self._nodes[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._nodes)

    def __len__(self) -> int:
        return len(self._nodes)

    def __repr__(self) -> str:
        return f"MetadataTree({self._nodes!r})"

    def subtree(self, key: str) -> MetadataTree | None:
        """Return the nested tree under *key*, or ``None`` if absent or scalar."""
        node = self._nodes.get(key)
        return node if isinstance(node, MetadataTree) else None

    def scalars(self, exclude: Iterable[str] = ()) -> list[tuple[str, Scalar]]:
        """Return ``(key, value)`` pairs for scalar children, in tree order.

        Args:
            exclude: Keys to leave out even when their value is scalar.
        """
        skipped = set(exclude)
        return [
            (key, value)
            for key, value in self._nodes.items()
            if key not in skipped and is_scalar(value)
        ]

    def to_dict(self) -> dict[str, Any]:
        """Return a plain, deep-copied ``dict`` version of the tree."""
        return {
            key: value.to_dict() if isinstance(value, MetadataTree) else value
            for key, value in self._nodes.items()
        }


def build_metadata_tree(entries: Iterable[MetadataEntry]) -> MetadataTree:
    """Fold ordered metadata entries into a :class:`MetadataTree`.

    Args:
        entries: Metadata entries in document order.

    Returns:
        The nested tree. Empty key segments (``"A..B"``) produce
        empty-string keys rather than errors.

    Example::

        tree = build_metadata_tree([
            MetadataEntry(name="A.B.C", value="v"),
        ])
        tree["A"]["B"]["C"]  # "v"
    """
    root: dict[str, Any] = {}

    for entry in entries:
        *parents, leaf = entry.name.split(".")
        node = root
        for segment in parents:
            child = node.get(segment)
            if not isinstance(child, dict):
                child = {}
                node[segment] = child
            node = child
        node[leaf] = _copy_value(entry.value)

    return _freeze(root)


def _copy_value(value: Any) -> Any:
    """Copy structured values so later entries never alias the input AST."""
    if isinstance(value, Mapping):
        return {str(k): _copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_copy_value(v) for v in value]
    return value


def _freeze(nodes: dict[str, Any]) -> MetadataTree:
    return MetadataTree(
        {
            key: _freeze(value) if isinstance(value, dict) else value
            for key, value in nodes.items()
        }
    )
