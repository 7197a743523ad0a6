"""Typer application and CLI entry point for blueman.

Usage::

    blueman api.apib                   # print the dump document to stdout
    blueman api.apib collection.json   # write it to a file

The :func:`main` function is the console-script entry point declared in
``pyproject.toml``. Known failures (:class:`~blueman.exceptions.BluemanError`)
exit with their own code; anything unexpected is written to a crash log
under the data directory.
"""

from __future__ import annotations

import asyncio
import signal
import sys
import traceback
from datetime import datetime
from pathlib import Path
from typing import Any, Optional

import typer

from blueman.exit_codes import EXIT_GENERIC_FAILURE


app = typer.Typer(
    name="blueman",
    help="Convert an API Blueprint description into a Postman collection and environments.",
    add_completion=False,
    rich_markup_mode="rich",
)


@app.command()
def convert(
    input_path: Path = typer.Argument(
        ...,
        metavar="INPUT",
        help="API Blueprint (.apib) or pre-rendered JSON/YAML AST.",
    ),
    output_path: Optional[Path] = typer.Argument(
        None,
        metavar="[OUTPUT]",
        help="Destination file. Prints to stdout when omitted.",
    ),
) -> None:
    """Generate the collection and environments for INPUT.

    Args:
        input_path: Description file to convert.
        output_path: Optional destination file for the JSON document.
    """
    from blueman.output import OutputManager, info, set_output, success, warning
    from blueman.pipeline import run

    if output_path is None:
        # stdout carries the document; keep stderr to warnings and errors.
        set_output(OutputManager(quiet=True))
    else:
        _check_output_path(input_path, output_path)

    info(f"Converting {input_path}...")
    dump = asyncio.run(run(input_path, output_path))

    if not any(collection.get("requests") for collection in dump.collections):
        warning("The description declares no requests; the collection is empty.")
    if output_path is not None:
        success(
            f"Wrote {output_path} "
            f"({len(dump.environments)} environment{'s' if len(dump.environments) != 1 else ''})"
        )


def _check_output_path(input_path: Path, output_path: Path) -> None:
    """Reject an OUTPUT that is a directory or the description itself.

    Raises:
        InvalidUsageError: If *output_path* cannot receive the document.
    """
    from blueman.exceptions import InvalidUsageError

    if output_path.is_dir():
        raise InvalidUsageError(f"OUTPUT must be a file path, not a directory: {output_path}")
    if input_path.exists() and output_path.exists() and output_path.samefile(input_path):
        raise InvalidUsageError(f"OUTPUT would overwrite the input description: {output_path}")


def _setup_signal_handlers() -> None:
    """Install a SIGINT handler so Ctrl-C exits cleanly."""

    def _handler(signum: int, frame: Any) -> None:  # noqa: ANN401
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)

    signal.signal(signal.SIGINT, _handler)


def _write_crash_log(exc: Exception) -> str:
    """Write a crash traceback to disk and return the log file path.

    Args:
        exc: The unhandled exception to log.

    Returns:
        Absolute path to the written crash log file.
    """
    from blueman.config import get_data_dir

    logs_dir = get_data_dir() / "logs"
    logs_dir.mkdir(parents=True, exist_ok=True)
    timestamp = datetime.now().strftime("%Y%m%d-%H%M%S")
    log_path = logs_dir / f"crash-{timestamp}.log"
    log_path.write_text(
        "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    )
    return str(log_path)


def main() -> None:
    """CLI entry point invoked by the ``blueman`` console script.

    Usage errors are reported by Typer itself (exit 2).
    :class:`~blueman.exceptions.BluemanError` instances exit with their
    ``exit_code``, Ctrl-C exits 130, and anything else produces a crash log
    and a generic failure exit.

    Raises:
        SystemExit: Always raised.
    """
    _setup_signal_handlers()
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt:
        sys.stderr.write("\nCancelled.\n")
        sys.exit(130)
    except Exception as exc:
        from blueman.exceptions import BluemanError
        from blueman.output import error

        if isinstance(exc, BluemanError):
            error(str(exc))
            sys.exit(exc.exit_code)
        else:
            log_path = _write_crash_log(exc)
            error(f"Unexpected error. Debug log: {log_path}")
            sys.exit(EXIT_GENERIC_FAILURE)
