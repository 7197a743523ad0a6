"""Abstract interface for description parsers.

A parser turns raw description text into a :class:`~blueman.models.Blueprint`
AST. It is the first of the two external collaborators of the pipeline;
:mod:`blueman.pipeline` only ever calls :meth:`DescriptionParser.parse`, so
tests can inject a fake returning a synthetic AST.

Concrete parsers:

* :class:`~blueman.parser.drafter.DrafterParser` -- runs the ``drafter``
  command-line parser.
* :class:`~blueman.parser.ast_parser.AstParser` -- reads an AST that was
  already rendered to JSON or YAML.
* :class:`~blueman.parser.detect.AutoParser` -- picks one of the above by
  looking at the text.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import ValidationError

from blueman.exceptions import DescriptionParseError
from blueman.models import Blueprint


class DescriptionParser(ABC):
    """Base class for parsers producing a :class:`~blueman.models.Blueprint`."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short parser name used in diagnostics."""

    @abstractmethod
    async def parse(self, text: str, *, require_name: bool = True) -> Blueprint:
        """Parse *text* into a blueprint AST.

        Args:
            text: The raw description, exactly as read from the input file.
            require_name: Reject descriptions that do not declare an API name.

        Returns:
            The parsed AST.

        Raises:
            DescriptionParseError: If the text cannot be parsed.
        """


def blueprint_from_ast(data: Any, *, require_name: bool = True) -> Blueprint:
    """Validate a decoded AST into a :class:`~blueman.models.Blueprint`.

    Accepts either the bare AST or drafter's parse-result wrapper
    (``{"ast": {...}, "error": ..., "warnings": [...]}``).

    Raises:
        DescriptionParseError: If the data is not a valid AST, the wrapper
            reports an error, or *require_name* is set and the name is empty.
    """
    if isinstance(data, dict) and isinstance(data.get("ast"), dict):
        _raise_wrapped_error(data.get("error"))
        data = data["ast"]

    if not isinstance(data, dict):
        raise DescriptionParseError(
            f"Description AST must be an object (got {type(data).__name__})"
        )

    try:
        blueprint = Blueprint.model_validate(data)
    except ValidationError as exc:
        raise DescriptionParseError(f"Invalid description AST: {exc}") from exc

    if require_name and not blueprint.name.strip():
        raise DescriptionParseError("Expected API name, e.g. '# <API Name>'")

    return blueprint


def _raise_wrapped_error(error: Any) -> None:
    """Raise for a non-zero error block in a drafter parse result."""
    if not isinstance(error, dict) or not error.get("code"):
        return
    message = error.get("message") or "unknown error"
    raise DescriptionParseError(f"Drafter error {error['code']}: {message}")
