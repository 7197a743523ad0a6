"""Abstract interface for collection schema converters.

The converter is the second external collaborator of the pipeline: it takes
the intermediate collection (as a JSON-ready dict) and rewrites it into the
schema version the output document is published in.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class CollectionConverter(ABC):
    """Base class for converters between collection schema versions."""

    @abstractmethod
    async def convert(
        self,
        collection: dict[str, Any],
        *,
        from_version: str,
        to_version: str,
    ) -> dict[str, Any]:
        """Convert *collection* from *from_version* to *to_version*.

        Args:
            collection: The intermediate collection, as produced by
                :meth:`~blueman.models.Collection.to_dict`.
            from_version: Schema version of *collection* (e.g. ``"2.0.0"``).
            to_version: Desired schema version (e.g. ``"1.0.0"``).

        Returns:
            The converted collection document.

        Raises:
            ConversionError: If the version pair is unsupported or the
                input is not a valid collection.
        """
