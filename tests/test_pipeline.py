"""Tests for blueman.pipeline -- parser, generator, and converter wired together."""

from __future__ import annotations

import asyncio
import json
from pathlib import Path
from typing import Any

import pytest

from blueman.converter import V1Converter
from blueman.exceptions import (
    DescriptionError,
    MissingExampleError,
    UnresolvedVariableError,
)
from blueman.models import Blueprint, Dump
from blueman.parser import AstParser
from blueman.pipeline import generate, render, run


def _strip_run_ids(document: dict[str, Any]) -> dict[str, Any]:
    """Remove the per-run collection id wherever the v1 document repeats it."""
    document = json.loads(json.dumps(document))
    for collection in document["collections"]:
        collection.pop("id")
        for entry in collection["folders"] + collection["requests"]:
            entry.pop("collectionId")
    return document


class TestGenerate:
    """The in-memory pipeline."""

    def test_passes_collection_to_converter(
        self, fake_parser, notes_blueprint: Blueprint, passthrough_converter
    ) -> None:
        parser = fake_parser(notes_blueprint)
        dump = asyncio.run(generate("text", parser, passthrough_converter, timestamp=7))

        assert parser.calls == [("text", True)]
        assert passthrough_converter.calls == [("2.0.0", "1.0.0")]
        collection = dump.collections[0]
        assert collection["info"]["name"] == "Notes API"
        assert [i["name"] for i in collection["item"][0]["item"]] == [
            "List Notes",
            "Create a Note",
            "Retrieve a Note",
        ]
        assert [e.name for e in dump.environments] == [
            "Notes API",
            "Notes API (staging)",
            "Notes API (local)",
        ]
        assert all(e.timestamp == 7 for e in dump.environments)

    def test_demo_scenario(self, demo_ast_path) -> None:
        text = demo_ast_path.read_text(encoding="utf-8")
        dump = asyncio.run(generate(text, AstParser(), V1Converter(), timestamp=0))

        assert dump.version == 1
        collection = dump.collections[0]
        assert collection["variables"] == [{"key": "HOST", "value": "example.test"}]
        assert [r["name"] for r in collection["requests"]] == ["List Items"]
        assert collection["requests"][0]["url"] == "{{HOST}}/items"
        assert len(dump.environments) == 1
        assert dump.environments[0].name == "Demo"

    def test_repeatable_apart_from_collection_id(self, notes_ast_raw: dict[str, Any]) -> None:
        text = json.dumps(notes_ast_raw)
        first = asyncio.run(generate(text, AstParser(), V1Converter(), timestamp=1)).to_dict()
        second = asyncio.run(generate(text, AstParser(), V1Converter(), timestamp=1)).to_dict()

        assert first != second
        assert _strip_run_ids(first) == _strip_run_ids(second)

    def test_missing_example_aborts(self, make_action, make_blueprint, fake_parser, passthrough_converter) -> None:
        action = make_action(name="Broken")
        action["examples"] = []
        blueprint = make_blueprint(groups=[{"resources": [{"uriTemplate": "/x", "actions": [action]}]}])

        with pytest.raises(MissingExampleError):
            asyncio.run(generate("", fake_parser(blueprint), passthrough_converter))
        assert passthrough_converter.calls == []

    def test_unresolved_variable_aborts(self, make_action, make_blueprint, fake_parser, passthrough_converter) -> None:
        blueprint = make_blueprint(
            groups=[{"resources": [{"uriTemplate": "/users/{id}", "actions": [make_action()]}]}]
        )
        with pytest.raises(UnresolvedVariableError):
            asyncio.run(generate("", fake_parser(blueprint), passthrough_converter))


class TestRender:
    def test_two_space_indent(self) -> None:
        text = render(Dump(collections=[{"name": "Café"}]))
        assert text.startswith('{\n  "version": 1,\n  "collections": [\n    {')
        assert "Café" in text
        assert json.loads(text)["environments"] == []


class TestRun:
    """File in, document out."""

    def test_writes_output_file(self, demo_ast_path, tmp_path: Path) -> None:
        output = tmp_path / "out" / "demo.json"
        dump = asyncio.run(run(demo_ast_path, output))

        written = json.loads(output.read_text(encoding="utf-8"))
        assert written == json.loads(render(dump))
        assert written["environments"][0]["values"] == [
            {"name": "HOST", "key": "HOST", "value": "example.test", "type": "text"}
        ]
        assert written["environments"][0]["synced"] is False

    def test_writes_stdout(self, demo_ast_path, capsys: pytest.CaptureFixture[str]) -> None:
        asyncio.run(run(demo_ast_path))
        out = capsys.readouterr().out
        assert out.endswith("}\n")
        assert json.loads(out)["collections"][0]["name"] == "Demo"

    def test_injected_collaborators(
        self, fake_parser, tmp_path: Path, notes_blueprint: Blueprint, passthrough_converter
    ) -> None:
        source = tmp_path / "api.apib"
        source.write_text("# Notes API\n", encoding="utf-8")
        parser = fake_parser(notes_blueprint)
        output = tmp_path / "notes.json"

        asyncio.run(run(source, output, parser=parser, converter=passthrough_converter))

        assert parser.calls == [("# Notes API\n", True)]
        assert json.loads(output.read_text())["collections"][0]["info"]["name"] == "Notes API"

    def test_nothing_written_on_failure(self, tmp_path: Path) -> None:
        source = tmp_path / "broken.yaml"
        source.write_text(
            "name: Broken\nresourceGroups:\n  - resources:\n"
            "      - uriTemplate: /users/{id}\n        actions:\n          - method: GET\n",
            encoding="utf-8",
        )
        output = tmp_path / "out.json"

        with pytest.raises(DescriptionError):
            asyncio.run(run(source, output))
        assert not output.exists()
