"""Parse descriptions that are already serialised ASTs (JSON or YAML)."""

from __future__ import annotations

import json
from typing import Any

import yaml

from blueman.exceptions import DescriptionParseError
from blueman.models import Blueprint
from blueman.parser.base import DescriptionParser, blueprint_from_ast


class AstParser(DescriptionParser):
    """Reads a blueprint AST rendered as JSON or YAML.

    Useful for pre-rendered ASTs (``drafter -t ast -f yaml api.apib``) and for
    environments without drafter installed.
    """

    @property
    def name(self) -> str:
        return "ast"

    async def parse(self, text: str, *, require_name: bool = True) -> Blueprint:
        return blueprint_from_ast(load_ast_document(text), require_name=require_name)


def load_ast_document(content: str) -> Any:
    """Decode *content* as JSON, falling back to YAML.

    JSON is tried first because every JSON document is also YAML, but the
    JSON decoder is stricter and faster.

    Raises:
        DescriptionParseError: If the content is neither JSON nor YAML.
    """
    try:
        return json.loads(content)
    except json.JSONDecodeError as json_error:
        try:
            return yaml.safe_load(content)
        except yaml.YAMLError as yaml_error:
            raise DescriptionParseError(
                "Failed to parse AST as JSON or YAML"
                f"\n  JSON error: {json_error}"
                f"\n  YAML error: {yaml_error}"
            ) from yaml_error
