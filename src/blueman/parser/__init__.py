"""Description parsers -- turn raw description text into a blueprint AST.

This sub-package covers the first half of the blueman pipeline: reading the
input file and producing a :class:`~blueman.models.Blueprint`.

Typical usage::

    from blueman.parser import AutoParser, read_description

    text = read_description(Path("api.apib"))
    blueprint = await AutoParser().parse(text)

Sub-modules:

* :mod:`~blueman.parser.base` -- The :class:`DescriptionParser` interface
  and AST validation shared by all parsers.
* :mod:`~blueman.parser.drafter` -- Runs the ``drafter`` CLI.
* :mod:`~blueman.parser.ast_parser` -- Reads JSON/YAML serialised ASTs.
* :mod:`~blueman.parser.detect` -- Chooses between the two.
* :mod:`~blueman.parser.loader` -- File I/O.
"""

from blueman.parser.ast_parser import AstParser
from blueman.parser.base import DescriptionParser, blueprint_from_ast
from blueman.parser.detect import AutoParser, looks_like_ast
from blueman.parser.drafter import DrafterParser
from blueman.parser.loader import read_description

__all__ = [
    "AstParser",
    "AutoParser",
    "DescriptionParser",
    "DrafterParser",
    "blueprint_from_ast",
    "looks_like_ast",
    "read_description",
]
