"""Tests for blueman.parser.loader."""

from __future__ import annotations

from pathlib import Path

import pytest

from blueman.exceptions import InputReadError
from blueman.exit_codes import EXIT_INPUT_ERROR
from blueman.parser.loader import read_description


class TestReadDescription:
    def test_reads_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "api.apib"
        path.write_text("# Café API\n", encoding="utf-8")
        assert read_description(path) == "# Café API\n"

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(InputReadError, match="not found") as exc_info:
            read_description(tmp_path / "missing.apib")
        assert exc_info.value.exit_code == EXIT_INPUT_ERROR

    def test_directory(self, tmp_path: Path) -> None:
        with pytest.raises(InputReadError, match="not found"):
            read_description(tmp_path)

    def test_not_utf8(self, tmp_path: Path) -> None:
        path = tmp_path / "latin1.apib"
        path.write_bytes("# Caf\xe9\n".encode("latin-1"))
        with pytest.raises(InputReadError, match="not valid UTF-8"):
            read_description(path)
