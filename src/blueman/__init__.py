"""blueman -- Convert API Blueprint descriptions into Postman collections.

This package reads an API Blueprint description (through the ``drafter``
parser or a pre-rendered AST), turns its resource groups and actions into a
request collection, derives environments from the description's metadata,
and emits a Postman dump document (collection format v1 plus environments).

Typical workflow::

    blueman api.apib                # print the dump to stdout
    blueman api.apib postman.json   # write it to a file

Modules:
    app: Typer application and CLI entry point.
    pipeline: Parser -> generator -> converter orchestration.
    models: Pydantic models shared across the entire package.
    exceptions: Exception hierarchy with exit-code mapping.
    exit_codes: Numeric exit codes following clig.dev conventions.
    output: stdout/stderr discipline and atomic document writes.
    config: Data directory resolution and atomic file writes.

Sub-packages:
    generator: Metadata tree, URL resolution, and collection/environment building.
    parser: Description parsers (drafter, serialised AST, auto-detection).
    converter: Collection schema version converters.
"""

__version__ = "0.1.0"
