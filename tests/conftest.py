"""Shared test fixtures for blueman.

Provides the sample ASTs under ``tests/fixtures``, builders for small
synthetic ASTs, and fake collaborators so the pipeline can be exercised
without drafter installed.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import pytest

from blueman.converter.base import CollectionConverter
from blueman.models import Blueprint
from blueman.output import reset_output
from blueman.parser.base import DescriptionParser


_FIXTURES_DIR = Path(__file__).parent / "fixtures"


# ---------------------------------------------------------------------------
# Auto-reset global output state between tests
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _reset_output_between_tests() -> None:
    """Reset the global OutputManager after every test.

    The OutputManager's Rich console caches ``sys.stderr`` at creation
    time. When Typer's CliRunner redirects the stream during a test the
    cached reference goes stale, so a fresh manager is forced afterwards.
    """
    yield
    reset_output()


# ---------------------------------------------------------------------------
# AST fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def notes_ast_raw() -> dict[str, Any]:
    """Drafter-shaped AST of the Notes API, as a plain dict."""
    with open(_FIXTURES_DIR / "notes_ast.json", encoding="utf-8") as f:
        return json.load(f)


@pytest.fixture
def notes_blueprint(notes_ast_raw: dict[str, Any]) -> Blueprint:
    return Blueprint.model_validate(notes_ast_raw)


@pytest.fixture
def fixtures_dir() -> Path:
    return _FIXTURES_DIR


@pytest.fixture
def demo_ast_path() -> Path:
    """Path of the small YAML AST: one group, one action, HOST metadata."""
    return _FIXTURES_DIR / "demo_ast.yaml"


# ---------------------------------------------------------------------------
# AST builders
# ---------------------------------------------------------------------------


def _make_payload(headers: dict[str, str] | None = None, body: Any = None) -> dict[str, Any]:
    return {
        "headers": [{"name": k, "value": v} for k, v in (headers or {}).items()],
        "body": body,
    }


def _make_action(
    name: str = "List Items",
    method: str = "GET",
    uri_template: str = "",
    parameters: list[dict[str, Any]] | None = None,
    request: dict[str, Any] | None = None,
    response: dict[str, Any] | None = None,
    description: str = "",
) -> dict[str, Any]:
    """Build an action dict with a single request/response example."""
    return {
        "name": name,
        "description": description,
        "method": method,
        "parameters": parameters or [],
        "attributes": {"uriTemplate": uri_template},
        "examples": [
            {
                "requests": [request if request is not None else _make_payload()],
                "responses": [response if response is not None else _make_payload()],
            }
        ],
    }


def _make_blueprint(
    name: str = "Demo",
    metadata: dict[str, Any] | None = None,
    groups: list[dict[str, Any]] | None = None,
) -> Blueprint:
    """Build a :class:`Blueprint` from compact keyword arguments."""
    return Blueprint.model_validate(
        {
            "name": name,
            "description": "",
            "metadata": [{"name": k, "value": v} for k, v in (metadata or {}).items()],
            "resourceGroups": groups or [],
        }
    )


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------


class FakeParser(DescriptionParser):
    """Returns a fixed blueprint and records the text it was given."""

    def __init__(self, blueprint: Blueprint) -> None:
        self.blueprint = blueprint
        self.calls: list[tuple[str, bool]] = []

    @property
    def name(self) -> str:
        return "fake"

    async def parse(self, text: str, *, require_name: bool = True) -> Blueprint:
        self.calls.append((text, require_name))
        return self.blueprint


class PassthroughConverter(CollectionConverter):
    """Returns the intermediate collection unchanged, tagged with the versions."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []

    async def convert(
        self,
        collection: dict[str, Any],
        *,
        from_version: str,
        to_version: str,
    ) -> dict[str, Any]:
        self.calls.append((from_version, to_version))
        return collection


@pytest.fixture
def passthrough_converter() -> PassthroughConverter:
    return PassthroughConverter()


@pytest.fixture
def make_payload():
    """Builder for request/response payload dicts."""
    return _make_payload


@pytest.fixture
def make_action():
    """Builder for action dicts with a single request/response example."""
    return _make_action


@pytest.fixture
def make_blueprint():
    """Builder for :class:`Blueprint` instances from compact arguments."""
    return _make_blueprint


@pytest.fixture
def fake_parser():
    """Factory for :class:`FakeParser` instances: ``fake_parser(blueprint)``."""
    return FakeParser
