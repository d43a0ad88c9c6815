"""Rule catalog.

Importing this package registers every rule in RULES.
"""

from . import compatibility, layout, parsing, properties, selectors
from .registry import RULES, Rule, get_rule_list, get_ruleset, register_rule
from .util import (
    get_prop_name, register_rule_events, register_shorthand_events, shorthands, shorthands_for,
)

__all__ = [
    'RULES',
    'Rule',
    'register_rule',
    'get_rule_list',
    'get_ruleset',
    'get_prop_name',
    'register_rule_events',
    'register_shorthand_events',
    'shorthands',
    'shorthands_for',
    'compatibility',
    'layout',
    'parsing',
    'properties',
    'selectors',
]
