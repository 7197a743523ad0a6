"""Pick a parser by looking at the description text."""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import yaml

from blueman.models import Blueprint
from blueman.parser.ast_parser import AstParser
from blueman.parser.base import DescriptionParser
from blueman.parser.drafter import DrafterParser

logger = logging.getLogger(__name__)


def looks_like_ast(text: str) -> bool:
    """Return True if *text* decodes to a mapping shaped like a blueprint AST.

    API Blueprint markdown almost never decodes to a mapping, and when it
    does (``FORMAT: 1A`` alone is valid YAML) it lacks ``resourceGroups``.
    """
    data: Any = None
    try:
        data = json.loads(text)
    except json.JSONDecodeError:
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError:
            return False

    if not isinstance(data, dict):
        return False
    if isinstance(data.get("ast"), dict):
        data = data["ast"]
    return "resourceGroups" in data or "resource_groups" in data


class AutoParser(DescriptionParser):
    """Delegates to :class:`AstParser` for serialised ASTs, else to drafter.

    Args:
        ast_parser: Parser used for JSON/YAML ASTs.
        blueprint_parser: Parser used for API Blueprint markdown.
    """

    def __init__(
        self,
        ast_parser: Optional[DescriptionParser] = None,
        blueprint_parser: Optional[DescriptionParser] = None,
    ) -> None:
        self._ast_parser = ast_parser or AstParser()
        self._blueprint_parser = blueprint_parser or DrafterParser()

    @property
    def name(self) -> str:
        return "auto"

    def select(self, text: str) -> DescriptionParser:
        """Return the parser that should handle *text*."""
        return self._ast_parser if looks_like_ast(text) else self._blueprint_parser

    async def parse(self, text: str, *, require_name: bool = True) -> Blueprint:
        parser = self.select(text)
        logger.debug("Parsing description with the %s parser", parser.name)
        return await parser.parse(text, require_name=require_name)
