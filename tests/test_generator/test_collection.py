"""Tests for blueman.generator.collection."""

from __future__ import annotations

import uuid

from blueman.generator.collection import assemble_collection, auth_descriptor
from blueman.generator.metadata import build_metadata_tree
from blueman.models import Blueprint, CollectionVariable, GeneratorConfig


def _assemble(blueprint: Blueprint, config: GeneratorConfig | None = None):
    return assemble_collection(blueprint, build_metadata_tree(blueprint.metadata), config)


class TestAssembleCollection:
    """Collection skeleton from the AST and metadata tree."""

    def test_demo_scenario(self, make_action, make_blueprint) -> None:
        blueprint = make_blueprint(
            name="Demo",
            metadata={"HOST": "example.test"},
            groups=[
                {
                    "name": "Items",
                    "uriTemplate": "/items",
                    "resources": [{"name": "Items", "actions": [make_action(name="List Items")]}],
                }
            ],
        )
        collection = _assemble(blueprint)

        assert collection.variable == [CollectionVariable(key="HOST", value="example.test")]
        assert len(collection.item) == 1
        assert [i.name for i in collection.item[0].item] == ["List Items"]
        assert collection.item[0].item[0].request.url.raw == "{{HOST}}/items"

    def test_info(self) -> None:
        blueprint = Blueprint(name="Notes", description="About notes")
        collection = _assemble(blueprint)
        assert collection.info.name == "Notes"
        assert collection.info.description == "About notes"
        assert collection.info.schema_ == (
            "https://schema.getpostman.com/json/collection/v2.0.0/collection.json"
        )
        assert uuid.UUID(collection.info.postman_id).version == 4

    def test_fresh_id_each_call(self) -> None:
        blueprint = Blueprint(name="Notes")
        assert _assemble(blueprint).info.postman_id != _assemble(blueprint).info.postman_id

    def test_variables_skip_reserved_and_structured(self, make_blueprint) -> None:
        blueprint = make_blueprint(
            metadata={
                "FORMAT": "1A",
                "HOST": "example.test",
                "AUTH.type": "basic",
                "ENV.prod.HOST": "prod.test",
                "VERSION": 2,
                "BETA": False,
                "LIMITS.max": 10,
            }
        )
        collection = _assemble(blueprint)
        assert [(v.key, v.value) for v in collection.variable] == [
            ("HOST", "example.test"),
            ("VERSION", 2),
            ("BETA", False),
        ]

    def test_scalar_reserved_keys_are_still_excluded(self, make_blueprint) -> None:
        blueprint = make_blueprint(metadata={"AUTH": "none", "ENV": "x", "HOST": "h"})
        collection = _assemble(blueprint)
        assert [v.key for v in collection.variable] == ["HOST"]
        assert collection.auth == {}

    def test_auth_from_metadata_reaches_every_request(self, notes_blueprint: Blueprint) -> None:
        collection = _assemble(notes_blueprint)
        expected = {"type": "basic", "basic": {"username": "demo", "password": "secret"}}
        assert collection.auth == expected
        for group in collection.item:
            for item in group.item:
                assert item.request.auth == expected

    def test_groups_and_actions_in_order(self, notes_blueprint: Blueprint) -> None:
        collection = _assemble(notes_blueprint)
        assert [g.name for g in collection.item] == ["Notes"]
        assert [i.name for i in collection.item[0].item] == [
            "List Notes",
            "Create a Note",
            "Retrieve a Note",
        ]

    def test_multiple_groups_flatten_resources(self, make_action, make_blueprint) -> None:
        blueprint = make_blueprint(
            groups=[
                {
                    "name": "A",
                    "resources": [
                        {"uriTemplate": "/a1", "actions": [make_action(name="a1-get"), make_action(name="a1-post", method="POST")]},
                        {"uriTemplate": "/a2", "actions": [make_action(name="a2-get")]},
                    ],
                },
                {"name": "B", "resources": []},
            ]
        )
        collection = _assemble(blueprint)
        assert [g.name for g in collection.item] == ["A", "B"]
        assert [i.name for i in collection.item[0].item] == ["a1-get", "a1-post", "a2-get"]
        assert collection.item[1].item == []

    def test_custom_host_variable(self, make_action, make_blueprint) -> None:
        blueprint = make_blueprint(
            groups=[{"name": "G", "resources": [{"uriTemplate": "/x", "actions": [make_action()]}]}]
        )
        collection = _assemble(blueprint, GeneratorConfig(host_variable="BASE"))
        assert collection.item[0].item[0].request.url.raw == "{{BASE}}/x"

    def test_to_dict_uses_document_keys(self, notes_blueprint: Blueprint) -> None:
        data = _assemble(notes_blueprint).to_dict()
        assert set(data["info"]) == {"name", "description", "_postman_id", "schema"}
        create = data["item"][0]["item"][1]["request"]
        assert create["body"] == {"mode": "raw", "raw": '{"title": "Buy milk"}'}
        listing = data["item"][0]["item"][0]["request"]
        assert "body" not in listing
        assert listing["url"]["query"] == [{"key": "page,limit"}]


class TestAuthDescriptor:
    def test_absent(self) -> None:
        assert auth_descriptor(build_metadata_tree([]), GeneratorConfig()) == {}

    def test_plain_dict(self, make_blueprint) -> None:
        tree = build_metadata_tree(make_blueprint(metadata={"AUTH.type": "noauth"}).metadata)
        result = auth_descriptor(tree, GeneratorConfig())
        assert result == {"type": "noauth"}
        assert type(result) is dict
