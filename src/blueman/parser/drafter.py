"""Parse API Blueprint text with the ``drafter`` command-line tool.

Drafter is the reference API Blueprint parser. It is invoked as a
subprocess, fed the description on stdin, and asked for the AST serialised
as JSON::

    drafter --format json --type ast

The subprocess runs through :func:`asyncio.create_subprocess_exec`, so the
parse is a single awaitable request/response with no partial results.
"""

from __future__ import annotations

import asyncio
import json
import shutil
from typing import Optional

from blueman.exceptions import DescriptionParseError
from blueman.models import Blueprint
from blueman.parser.base import DescriptionParser, blueprint_from_ast

DEFAULT_EXECUTABLE = "drafter"


class DrafterParser(DescriptionParser):
    """Runs drafter and validates its AST output.

    Args:
        executable: Drafter binary name or path. Resolved on ``PATH`` when
            not absolute.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE) -> None:
        self._executable = executable

    @property
    def name(self) -> str:
        return "drafter"

    async def parse(self, text: str, *, require_name: bool = True) -> Blueprint:
        executable = self._resolve_executable()
        try:
            proc = await asyncio.create_subprocess_exec(
                executable,
                "--format",
                "json",
                "--type",
                "ast",
                stdin=asyncio.subprocess.PIPE,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            stdout, stderr = await proc.communicate(text.encode("utf-8"))
        except OSError as exc:
            raise DescriptionParseError(f"Failed to run {executable}: {exc}") from exc

        if proc.returncode != 0:
            detail = stderr.decode("utf-8", errors="replace").strip()
            raise DescriptionParseError(
                f"drafter exited with status {proc.returncode}"
                + (f": {detail}" if detail else "")
            )

        try:
            data = json.loads(stdout.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise DescriptionParseError(f"drafter produced invalid JSON: {exc}") from exc

        return blueprint_from_ast(data, require_name=require_name)

    def _resolve_executable(self) -> str:
        found: Optional[str] = shutil.which(self._executable)
        if found is None:
            raise DescriptionParseError(
                f"'{self._executable}' not found on PATH. Install drafter "
                "(https://github.com/apiaryio/drafter) or pass a pre-rendered "
                "JSON/YAML AST instead."
            )
        return found
