"""End-to-end pipeline: description text in, dump document out.

The pipeline wires the two external collaborators around the pure
generator::

    text --parser--> Blueprint --generator--> Collection + environments
         --converter--> Dump

Both collaborators are injected, so the whole pipeline runs in tests with a
synthetic AST and a fake converter. Any collaborator failure propagates
unchanged; nothing is retried.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional

from blueman.converter import CollectionConverter, V1Converter
from blueman.generator import (
    assemble_collection,
    build_metadata_tree,
    generate_environments,
)
from blueman.models import Dump, GeneratorConfig
from blueman.output import write_document
from blueman.parser import AutoParser, DescriptionParser, read_description

logger = logging.getLogger(__name__)


async def generate(
    text: str,
    parser: DescriptionParser,
    converter: CollectionConverter,
    config: Optional[GeneratorConfig] = None,
    timestamp: Optional[int] = None,
) -> Dump:
    """Run parser, generator, and converter over *text*.

    Args:
        text: Raw description text.
        parser: Collaborator producing the AST.
        converter: Collaborator producing the final collection version.
        config: Generator settings; defaults to :class:`GeneratorConfig`.
        timestamp: Environment creation time in ms; defaults to now.

    Returns:
        The dump document with one collection and its environments.

    Raises:
        DescriptionParseError: From the parser.
        DescriptionError: From the generator (missing examples, unresolved
            variables).
        ConversionError: From the converter.
    """
    config = config or GeneratorConfig()

    blueprint = await parser.parse(text, require_name=True)
    tree = build_metadata_tree(blueprint.metadata)
    collection = assemble_collection(blueprint, tree, config)
    environments = generate_environments(
        blueprint.name, tree, config, timestamp=timestamp
    )
    logger.debug(
        "Generated %d groups and %d environments for %r",
        len(collection.item),
        len(environments),
        blueprint.name,
    )

    converted = await converter.convert(
        collection.to_dict(),
        from_version=config.source_version,
        to_version=config.target_version,
    )
    return Dump(version=1, collections=[converted], environments=environments)


def render(dump: Dump) -> str:
    """Serialise *dump* as pretty-printed JSON (2-space indent)."""
    return json.dumps(dump.to_dict(), indent=2, ensure_ascii=False)


async def run(
    input_path: Path,
    output_path: Optional[Path] = None,
    parser: Optional[DescriptionParser] = None,
    converter: Optional[CollectionConverter] = None,
    config: Optional[GeneratorConfig] = None,
) -> Dump:
    """Read *input_path*, generate the dump, and write it.

    The document goes to *output_path* when given (atomically), otherwise to
    stdout. Nothing is written if any step fails.

    Raises:
        InputReadError: If the description cannot be read.
        OutputWriteError: If the output file cannot be written.
        BluemanError: Any other failure from :func:`generate`.
    """
    text = read_description(input_path)
    dump = await generate(
        text,
        parser or AutoParser(),
        converter or V1Converter(),
        config=config,
    )
    write_document(render(dump), output_path)
    return dump
