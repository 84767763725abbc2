"""
Dialogue data model - the parsed form of a Varion script.

Models are data-only containers built on Pydantic:
- Validation on assignment
- Structural equality (two parses of the same script compare equal)
- No unknown fields

Usage:
    dialogue = parse(script)
    node = dialogue.get_node("start")
    for choice in node.choices:
        print(choice.text, "->", choice.target_node)
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ScriptModel(BaseModel):
    """
    Base class for all parsed script models.

    Only the parser builds these; callers own the result once
    parsing completes.
    """

    model_config = ConfigDict(
        # Validate on assignment
        validate_assignment=True,
        # Unknown fields are a programming error
        extra='forbid',
    )


class Action(ScriptModel):
    """A side-effect command attached to a node. Never executed here."""
    command: str


class Choice(ScriptModel):
    """A player-facing option leading to another node."""
    text: str
    target_node: str                  # Not checked against declared nodes
    condition: Optional[str] = None   # Opaque expression, None = always shown

    @property
    def is_conditional(self) -> bool:
        return self.condition is not None


class Node(ScriptModel):
    """A single named dialogue node."""
    name: str
    meta: dict[str, str] = Field(default_factory=dict)
    actions: list[Action] = Field(default_factory=list)
    body: str = ""
    choices: list[Choice] = Field(default_factory=list)

    @property
    def has_choices(self) -> bool:
        return len(self.choices) > 0

    def append_body(self, line: str) -> None:
        """Append a body line, separated from earlier lines by one newline."""
        if self.body:
            self.body = f"{self.body}\n{line}"
        else:
            self.body = line


class Dialogue(ScriptModel):
    """A complete parsed script: nodes keyed by name."""
    nodes: dict[str, Node] = Field(default_factory=dict)

    def get_node(self, name: str) -> Optional[Node]:
        """Get a node by name."""
        return self.nodes.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self.nodes
