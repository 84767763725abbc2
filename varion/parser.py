"""
Varion script parser - converts dialogue scripts to a Dialogue model.

Supports a simple line-oriented format:

```
:: start
@who: NPC
@action: set help_requested = 0

Welcome! What can I do for you?

* I need help! => ask_help
@if reputation > 5
* Tell me a secret. => secret
* Bye. => end @if has_met_npc
```

- `:: name` opens a node
- `@key: value` sets metadata, `@action: command` adds an action
- `@if condition` gates the very next choice
- `* text => target [@if condition]` adds a choice
- blank lines are ignored, anything else is body text
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from varion.errors import ParseErrorKind, ScriptParseError
from varion.models import Action, Choice, Dialogue, Node

logger = logging.getLogger(__name__)


class ScriptParser:
    """
    Parses Varion scripts in a single pass.

    Holds no state between calls, so one instance can be shared.
    """

    # Line markers
    NODE_MARKER = '::'
    CONDITION_MARKER = '@if'
    META_MARKER = '@'
    ACTION_MARKER = 'action:'
    CHOICE_MARKER = '*'
    ARROW = '=>'

    def parse_file(self, path: str | Path) -> Dialogue:
        """Parse a script file."""
        path = Path(path)
        logger.info(f"Parsing script {path}")
        with open(path, 'r', encoding='utf-8') as f:
            content = f.read()

        return self.parse_string(content)

    def parse_string(self, script: str) -> Dialogue:
        """Parse a script string. Raises ScriptParseError on the first bad line."""
        dialogue = Dialogue()
        current_node: Optional[Node] = None
        pending_condition: Optional[str] = None

        for line_num, line in enumerate(self._split_lines(script), start=1):
            stripped = line.strip()

            if not stripped:
                continue

            # Node declaration
            if stripped.startswith(self.NODE_MARKER):
                if current_node is not None:
                    self._store_node(dialogue, current_node)
                    current_node = None
                if pending_condition is not None:
                    raise self._error(
                        ParseErrorKind.DANGLING_CONDITION_BEFORE_NODE,
                        "Dangling @if condition before new node.",
                        line_num,
                    )

                name = stripped[len(self.NODE_MARKER):].strip()
                if not name:
                    raise self._error(
                        ParseErrorKind.MISSING_NODE_NAME,
                        "Node declaration '::' must be followed by a name.",
                        line_num,
                    )
                current_node = Node(name=name)
                pending_condition = None
                continue

            # Condition for the next choice
            if stripped.startswith(self.CONDITION_MARKER):
                if current_node is None:
                    raise self._error(
                        ParseErrorKind.CONDITION_OUTSIDE_NODE,
                        "@if condition found outside of a node.",
                        line_num,
                    )
                if pending_condition is not None:
                    raise self._error(
                        ParseErrorKind.CONSECUTIVE_CONDITIONS,
                        "Consecutive @if conditions are not allowed.",
                        line_num,
                    )
                pending_condition = stripped[len(self.CONDITION_MARKER):].strip()
                continue

            if current_node is None:
                raise self._error(
                    ParseErrorKind.CONTENT_OUTSIDE_NODE,
                    "Content found outside of a node declaration. "
                    "Every line must belong to a node starting with '::'.",
                    line_num,
                )

            # Meta or action line
            if stripped.startswith(self.META_MARKER):
                if pending_condition is not None:
                    raise self._error(
                        ParseErrorKind.CONDITION_FOLLOWED_BY_NON_CHOICE,
                        "@if must be immediately followed by a choice, not a meta/action line.",
                        line_num,
                    )
                self._parse_meta_line(current_node, stripped, line_num)
                continue

            # Choice
            if stripped.startswith(self.CHOICE_MARKER):
                choice = self._parse_choice(stripped, pending_condition, line_num)
                current_node.choices.append(choice)
                pending_condition = None
                continue

            # Regular text line
            if pending_condition is not None:
                raise self._error(
                    ParseErrorKind.CONDITION_FOLLOWED_BY_NON_CHOICE,
                    "@if must be immediately followed by a choice, not body text.",
                    line_num,
                )
            current_node.append_body(line)

        # Don't forget the last node
        if current_node is not None:
            if pending_condition is not None:
                raise self._error(
                    ParseErrorKind.DANGLING_CONDITION_AT_EOF,
                    "Dangling @if condition at end of file.",
                )
            self._store_node(dialogue, current_node)

        logger.debug(f"Parsed {len(dialogue.nodes)} nodes")
        return dialogue

    def _split_lines(self, script: str) -> list[str]:
        """Split on newlines only, dropping the \\r of a \\r\\n ending."""
        lines = script.split('\n')
        if lines and lines[-1] == '':
            lines.pop()
        return [line[:-1] if line.endswith('\r') else line for line in lines]

    def _parse_meta_line(self, node: Node, stripped: str, line_num: int) -> None:
        """Apply an `@key: value` or `@action: command` line to the node."""
        meta_line = stripped[len(self.META_MARKER):]

        if meta_line.startswith(self.ACTION_MARKER):
            command = meta_line[len(self.ACTION_MARKER):].strip()
            node.actions.append(Action(command=command))
            return

        key, sep, value = meta_line.partition(':')
        if not sep:
            raise self._error(
                ParseErrorKind.INVALID_META_OR_ACTION_LINE,
                f"Invalid meta or action line: {stripped}",
                line_num,
            )
        node.meta[key.strip()] = value.strip()

    def _parse_choice(
        self,
        stripped: str,
        pending_condition: Optional[str],
        line_num: int,
    ) -> Choice:
        """Build a choice from a `* text => target [@if condition]` line."""
        choice_line = stripped[len(self.CHOICE_MARKER):]
        parts = [part.strip() for part in choice_line.split(self.ARROW)]
        if len(parts) != 2:
            raise self._error(
                ParseErrorKind.INVALID_CHOICE_FORMAT,
                f"Invalid choice format: {choice_line}",
                line_num,
            )

        text, rest = parts
        target, marker, inline_condition = rest.partition(self.CONDITION_MARKER)
        if marker:
            target = target.strip()
            inline_condition = inline_condition.strip()
            if pending_condition is not None:
                raise self._error(
                    ParseErrorKind.DUAL_CONDITION_CONFLICT,
                    "A choice cannot have both a preceding @if and an inline @if.",
                    line_num,
                )
            condition: Optional[str] = inline_condition
        else:
            condition = pending_condition

        return Choice(text=text, target_node=target, condition=condition)

    def _store_node(self, dialogue: Dialogue, node: Node) -> None:
        """Finalize a node into the dialogue, replacing any earlier namesake."""
        if node.name in dialogue.nodes:
            logger.warning(f"Node '{node.name}' declared more than once; keeping the last declaration")
        dialogue.nodes[node.name] = node
        logger.debug(
            f"Finalized node '{node.name}': {len(node.actions)} actions, "
            f"{len(node.choices)} choices"
        )

    def _error(
        self,
        kind: ParseErrorKind,
        message: str,
        line_num: Optional[int] = None,
    ) -> ScriptParseError:
        error = ScriptParseError(kind, message, line_num)
        logger.debug(f"Parse failed: {error}")
        return error


def parse(script: str) -> Dialogue:
    """Parse a Varion script string into a Dialogue."""
    return ScriptParser().parse_string(script)


def parse_file(path: str | Path) -> Dialogue:
    """Parse a Varion script file into a Dialogue."""
    return ScriptParser().parse_file(path)
