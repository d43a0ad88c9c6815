"""Message collection for a single verification run."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Set, Tuple

INFO = 'info'
WARNING = 'warning'
ERROR = 'error'


@dataclass
class Message:
    """One diagnostic produced by a verification run.

    Rollup messages summarize the whole stylesheet and have no position or
    evidence.
    """
    type: str
    message: str
    line: Optional[int] = None
    col: Optional[int] = None
    evidence: Optional[str] = None
    rule: Any = None
    rollup: bool = False

    @property
    def rule_id(self) -> Optional[str]:
        return getattr(self.rule, 'id', None)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'type': self.type,
            'line': self.line,
            'col': self.col,
            'message': self.message,
            'evidence': self.evidence,
            'rule': self.rule_id,
            'rollup': self.rollup,
        }


@dataclass
class LintReport:
    """Sorted messages and named statistics of one verification run."""
    messages: List[Message] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    @property
    def errors(self) -> List[Message]:
        return [m for m in self.messages if m.type == ERROR]

    @property
    def warnings(self) -> List[Message]:
        return [m for m in self.messages if m.type == WARNING]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'messages': [m.to_dict() for m in self.messages],
            'stats': dict(self.stats),
        }


def _position(position) -> Tuple[int, int]:
    """Read line and col from an object or a mapping, defaulting to 1."""
    if position is None:
        return 1, 1
    if isinstance(position, dict):
        line, col = position.get('line'), position.get('col')
    else:
        line, col = getattr(position, 'line', None), getattr(position, 'col', None)
    return line or 1, col or 1


class Reporter:
    """Collects messages reported by rules during one run.

    Args:
        lines: Source lines, used to attach evidence to messages
        ruleset: Rule id to level (0, 1 or 2)
        allow: Line number to rule ids exempted on that line
        ignore: Inclusive line ranges where rule reports are dropped
    """

    def __init__(self, lines: List[str], ruleset: Dict[str, int],
                 allow: Optional[Dict[int, Set[str]]] = None,
                 ignore: Optional[List[Tuple[int, int]]] = None):
        self.lines = lines
        self.ruleset = ruleset
        self.allow = allow or {}
        self.ignore = ignore or []
        self.messages: List[Message] = []
        self.stats: Dict[str, Any] = {}

    def _evidence(self, line: int) -> Optional[str]:
        if 1 <= line <= len(self.lines):
            return self.lines[line - 1]
        return None

    def _add(self, type_: str, message: str, position, rule) -> None:
        line, col = _position(position)
        self.messages.append(Message(type_, message, line, col, self._evidence(line), rule))

    def is_suppressed(self, line: int, rule_id: Optional[str]) -> bool:
        """Whether a report for rule_id on line is allowed or ignored."""
        if rule_id in self.allow.get(line, ()):
            return True
        return any(start <= line <= end for start, end in self.ignore)

    def error(self, message: str, position=None, rule=None) -> None:
        """Add an error regardless of ruleset, allow and ignore settings."""
        self._add(ERROR, message, position, rule)

    def report(self, message: str, position, rule) -> None:
        """Add a message from rule, unless suppressed on its line.

        The message is an error when the rule runs at level 2 and a warning
        otherwise.
        """
        line, _ = _position(position)
        rule_id = getattr(rule, 'id', None)
        if self.is_suppressed(line, rule_id):
            return
        type_ = ERROR if self.ruleset.get(rule_id) == 2 else WARNING
        self._add(type_, message, position, rule)

    def info(self, message: str, position=None, rule=None) -> None:
        self._add(INFO, message, position, rule)

    def rollup_error(self, message: str, rule) -> None:
        self.messages.append(Message(ERROR, message, rule=rule, rollup=True))

    def rollup_warn(self, message: str, rule) -> None:
        self.messages.append(Message(WARNING, message, rule=rule, rollup=True))

    def stat(self, name: str, value: Any) -> None:
        self.stats[name] = value


__all__ = ['Message', 'LintReport', 'Reporter', 'INFO', 'WARNING', 'ERROR']
