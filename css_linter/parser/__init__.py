"""CSS parser emitting structural events."""

from .cache import SelectorCache
from .emitter import EventTarget
from .events import (
    AtRuleEvent, Combinator, Invalid, MessageEvent, ParserEvent, PropertyEvent,
    PropertyName, PropertyValue, PropertyValuePart, RuleEvent, Selector,
    SelectorEvent, SelectorPart, SelectorSubPart, StatementEvent, SyntaxUnit,
)
from .parser import Parser
from .validation import PropertyValidator

__all__ = [
    'Parser',
    'SelectorCache',
    'EventTarget',
    'PropertyValidator',
    'SyntaxUnit',
    'PropertyName',
    'PropertyValue',
    'PropertyValuePart',
    'Invalid',
    'Combinator',
    'Selector',
    'SelectorPart',
    'SelectorSubPart',
    'ParserEvent',
    'RuleEvent',
    'AtRuleEvent',
    'PropertyEvent',
    'StatementEvent',
    'SelectorEvent',
    'MessageEvent',
]
