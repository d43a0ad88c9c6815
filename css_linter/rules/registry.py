"""Rule registry."""

import logging
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional

from ..utils.error import RuleRegistrationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Rule:
    """A registered lint rule.

    ``init(rule, parser, reporter)`` subscribes the rule's listeners to a
    parser for one run. Any state the rule needs lives in the closures it
    creates there.
    """
    id: str
    init: Callable = field(repr=False, compare=False)
    name: str = ''
    desc: str = ''
    url: Optional[str] = None
    browsers: str = 'All'
    tags: tuple = ()


# Rule id -> Rule, in registration order
RULES: Dict[str, Rule] = {}


def register_rule(rule_id: str, name: str = '', desc: str = '', url: Optional[str] = None,
                  browsers: str = 'All', tags=(), registry: Optional[Dict[str, Rule]] = None):
    """Decorator registering an ``init`` function as a rule.

    Args:
        rule_id: Unique rule id
        name: Human readable name
        desc: One line description, also used as message by some rules
        url: Documentation link
        browsers: Affected browsers
        tags: Free-form tags
        registry: Registry to add the rule to, RULES by default

    Raises:
        RuleRegistrationError: If rule_id is already registered
    """
    target = RULES if registry is None else registry

    def decorator(init: Callable) -> Callable:
        if rule_id in target:
            raise RuleRegistrationError(f"Rule '{rule_id}' is already registered")
        target[rule_id] = Rule(rule_id, init, name, desc, url, browsers, tuple(tags))
        logger.debug(f"Registered rule {rule_id}")
        return init

    return decorator


def get_rule_list(registry: Optional[Dict[str, Rule]] = None) -> List[Rule]:
    """Return registered rules sorted by id."""
    rules = RULES if registry is None else registry
    return sorted(rules.values(), key=lambda rule: rule.id)


def get_ruleset(registry: Optional[Dict[str, Rule]] = None) -> Dict[str, int]:
    """Return the default ruleset: every registered rule as a warning."""
    rules = RULES if registry is None else registry
    return {rule_id: 1 for rule_id in rules}


__all__ = ['Rule', 'RULES', 'register_rule', 'get_rule_list', 'get_ruleset']
