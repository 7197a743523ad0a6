"""Exception hierarchy for blueman.

All exceptions inherit from :class:`BluemanError`, which carries an
``exit_code`` attribute mapped to a constant from :mod:`blueman.exit_codes`.
The top-level handler in :func:`blueman.app.main` catches ``BluemanError``
and exits with the matching code, while unexpected exceptions produce a
crash log and exit with :data:`EXIT_GENERIC_FAILURE`.

Subclass hierarchy::

    BluemanError (exit 1)
    +-- InvalidUsageError          (exit 2)
    +-- InputReadError             (exit 3)
    +-- DescriptionParseError      (exit 4)
    +-- DescriptionError           (exit 5)
    |   +-- MissingExampleError
    |   +-- UnresolvedVariableError
    +-- ConversionError            (exit 6)
    +-- OutputWriteError           (exit 7)
"""

from blueman.exit_codes import (
    EXIT_CONVERSION_ERROR,
    EXIT_DESCRIPTION_ERROR,
    EXIT_GENERIC_FAILURE,
    EXIT_INPUT_ERROR,
    EXIT_INVALID_USAGE,
    EXIT_OUTPUT_ERROR,
    EXIT_PARSE_ERROR,
)


class BluemanError(Exception):
    """Base exception for all blueman errors.

    Every subclass sets a class-level ``exit_code`` corresponding to one of
    the constants in :mod:`blueman.exit_codes`. The entry point catches
    this exception type and calls ``sys.exit(exc.exit_code)``.

    Args:
        message: Human-readable error description printed to stderr.
        exit_code: Optional override for the class-level exit code.
    """

    exit_code: int = EXIT_GENERIC_FAILURE

    def __init__(self, message: str, exit_code: int | None = None):
        super().__init__(message)
        if exit_code is not None:
            self.exit_code = exit_code


class InvalidUsageError(BluemanError):
    """Raised when the OUTPUT argument is unusable (a directory, or the input file itself)."""

    exit_code = EXIT_INVALID_USAGE


class InputReadError(BluemanError):
    """Raised when the description file cannot be read."""

    exit_code = EXIT_INPUT_ERROR


class DescriptionParseError(BluemanError):
    """Raised when the parser rejects the description text (or cannot run at all)."""

    exit_code = EXIT_PARSE_ERROR


class DescriptionError(BluemanError):
    """Raised when a parsed description is missing data the generator depends on."""

    exit_code = EXIT_DESCRIPTION_ERROR


class MissingExampleError(DescriptionError):
    """Raised when an action has no example, or its first example has no request or response."""


class UnresolvedVariableError(DescriptionError):
    """Raised when a URI variable has no parameter definition, or the definition has no description."""


class ConversionError(BluemanError):
    """Raised when the collection cannot be converted between schema versions."""

    exit_code = EXIT_CONVERSION_ERROR


class OutputWriteError(BluemanError):
    """Raised when the generated document cannot be written to the output path."""

    exit_code = EXIT_OUTPUT_ERROR
