"""Syntax units and events emitted by the CSS parser.

Every unit and event carries the 1-based ``line`` and ``col`` of the source
token it was built from, so rules can hand any of them straight to the
reporter as a position.
"""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass
class SyntaxUnit:
    """A piece of source text with its position."""
    text: str
    line: int = 1
    col: int = 1
    type: str = ''

    def __str__(self) -> str:
        return self.text


@dataclass
class PropertyName(SyntaxUnit):
    """A property name, without any IE hack character.

    ``vendor_pos`` is the length of the vendor prefix (``-webkit-`` gives 8),
    0 when the name has none.
    """
    hack: Optional[str] = None
    vendor_pos: int = 0

    def __str__(self) -> str:
        return (self.hack or '') + self.text


@dataclass
class PropertyValuePart(SyntaxUnit):
    """One component of a property value."""
    number: Optional[float] = None
    units: str = ''
    uri: Optional[str] = None
    name: Optional[str] = None
    prefix: Optional[str] = None

    @property
    def is0(self) -> bool:
        return self.number is not None and self.number == 0


@dataclass
class PropertyValue(SyntaxUnit):
    """A whole property value, whitespace-normalized."""
    parts: List[PropertyValuePart] = field(default_factory=list)


@dataclass
class Invalid(SyntaxUnit):
    """Validation failure attached to a property event."""
    message: str = ''


@dataclass
class Combinator(SyntaxUnit):
    """Selector combinator: descendant, child, adjacent-sibling or sibling."""
    element_name = None
    modifiers = ()


@dataclass
class SelectorSubPart(SyntaxUnit):
    """A simple selector following the element name.

    ``type`` is one of id, class, attribute, pseudo, nesting, or the name of a
    selector-list function (not, is, where, has, matches, any) whose parsed
    selectors are in ``args``.
    """
    name: Optional[str] = None
    args: Optional[List['Selector']] = None
    operator: Optional[SyntaxUnit] = None
    value: Optional[str] = None


@dataclass
class SelectorPart(SyntaxUnit):
    """A compound selector: optional element name plus modifiers."""
    element_name: Optional[str] = None
    modifiers: List[SelectorSubPart] = field(default_factory=list)


@dataclass
class Selector(SyntaxUnit):
    """A complex selector: compounds separated by combinators."""
    parts: list = field(default_factory=list)

    @property
    def compounds(self) -> List[SelectorPart]:
        return [part for part in self.parts if isinstance(part, SelectorPart)]


@dataclass
class ParserEvent:
    type: str
    line: int = 1
    col: int = 1


@dataclass
class RuleEvent(ParserEvent):
    """startrule / endrule. ``empty`` is only meaningful on endrule."""
    selectors: List[Selector] = field(default_factory=list)
    empty: bool = False


@dataclass
class AtRuleEvent(ParserEvent):
    """start/end events of block at-rules.

    ``keyword`` is the lowercase at-keyword without ``@`` and prefix,
    ``prelude`` the normalized text between the keyword and the block.
    """
    keyword: str = ''
    prelude: str = ''
    prefix: Optional[str] = None
    empty: bool = False


@dataclass
class PropertyEvent(ParserEvent):
    property: Optional[PropertyName] = None
    value: Optional[PropertyValue] = None
    important: bool = False
    in_parens: bool = False
    invalid: Optional[Invalid] = None


@dataclass
class StatementEvent(ParserEvent):
    """@import, @charset and @namespace."""
    text: str = ''
    uri: Optional[str] = None
    media: str = ''
    prefix: Optional[str] = None


@dataclass
class SelectorEvent(ParserEvent):
    """A selector() condition inside @supports."""
    selector: Optional[Selector] = None


@dataclass
class MessageEvent(ParserEvent):
    """Recoverable parse error or warning."""
    message: str = ''


__all__ = [
    'SyntaxUnit', 'PropertyName', 'PropertyValuePart', 'PropertyValue', 'Invalid',
    'Combinator', 'SelectorSubPart', 'SelectorPart', 'Selector',
    'ParserEvent', 'RuleEvent', 'AtRuleEvent', 'PropertyEvent',
    'StatementEvent', 'SelectorEvent', 'MessageEvent',
]
