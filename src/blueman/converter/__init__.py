"""Collection schema converters.

* :mod:`~blueman.converter.base` -- The :class:`CollectionConverter` interface.
* :mod:`~blueman.converter.v1` -- :class:`V1Converter`, 2.0.0 to 1.0.0.
"""

from blueman.converter.base import CollectionConverter
from blueman.converter.v1 import V1Converter

__all__ = ["CollectionConverter", "V1Converter"]
