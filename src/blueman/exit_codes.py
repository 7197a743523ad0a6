"""Numeric process exit codes following `clig.dev <https://clig.dev/>`_ conventions.

Each constant maps to a specific failure category and is referenced by the
corresponding :class:`~blueman.exceptions.BluemanError` subclass.
Shell wrappers and CI jobs can inspect the exit code to tell a broken
description apart from a missing file without parsing stderr.

Example::

    $ blueman api.apib collection.json
    $ echo $?
    4   # EXIT_PARSE_ERROR -- drafter rejected the blueprint
"""

EXIT_SUCCESS = 0
"""The document was generated successfully."""

EXIT_GENERIC_FAILURE = 1
"""An unclassified error occurred."""

EXIT_INVALID_USAGE = 2
"""The command was invoked with invalid arguments (reported by Typer)."""

EXIT_INPUT_ERROR = 3
"""The input description could not be read."""

EXIT_PARSE_ERROR = 4
"""The description parser rejected the input text."""

EXIT_DESCRIPTION_ERROR = 5
"""The parsed description lacks data the generator requires (examples, parameters)."""

EXIT_CONVERSION_ERROR = 6
"""The collection could not be converted to the target schema version."""

EXIT_OUTPUT_ERROR = 7
"""The output document could not be written."""
