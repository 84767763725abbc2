"""
Varion - dialogue scripting language parser.

Provides:
- Script parsing into a Dialogue model
- Nodes with metadata, actions, body text and choices
- Fail-fast parse errors with line numbers
"""

from varion.errors import ParseErrorKind, ScriptParseError
from varion.models import Action, Choice, Dialogue, Node
from varion.parser import ScriptParser, parse, parse_file

__all__ = [
    "Action",
    "Choice",
    "Dialogue",
    "Node",
    "ParseErrorKind",
    "ScriptParseError",
    "ScriptParser",
    "parse",
    "parse_file",
]
