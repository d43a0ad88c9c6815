"""Property name and value validation."""

import logging
from typing import FrozenSet, Optional

from cssutils import profile

from .events import Invalid, PropertyName, PropertyValue, PropertyValuePart
from .properties import GLOBAL_KEYWORDS, KNOWN_PROPERTIES, VALUE_GRAMMARS

logger = logging.getLogger(__name__)

# Part types accepted by each abbreviated grammar type
TYPE_MATCHES = {
    '<int>': ('integer',),
    '<num>': ('integer', 'number'),
    '<pct>': ('percentage',),
    '<len>': ('length',),
}


class PropertyValidator:
    """Checks property names and a subset of property values.

    Names are known when cssutils' profiles or the local table list them.
    Custom properties and vendor-prefixed names are never reported.
    """

    def __init__(self, extra_names: Optional[FrozenSet[str]] = None):
        self.known_names = frozenset(name.lower() for name in profile.knownNames) \
            | KNOWN_PROPERTIES | (extra_names or frozenset())
        logger.debug(f"Property validator knows {len(self.known_names)} names")

    def is_known(self, name: str) -> bool:
        name = name.lower()
        return name.startswith('-') or name in self.known_names

    def validate(self, name: PropertyName, value: PropertyValue) -> Optional[Invalid]:
        """Validate one declaration.

        Args:
            name: Property name without hack character
            value: Parsed property value

        Returns:
            Invalid describing the first problem found, or None
        """
        if not self.is_known(name.text):
            return Invalid(name.text, name.line, name.col, 'invalid',
                           message=f'Unknown property "{name.text}".')

        grammar = VALUE_GRAMMARS.get(name.text.lower())
        if not grammar or len(value.parts) != 1:
            return None
        part = value.parts[0]
        if part.type == 'function' or (part.type == 'identifier' and part.name in GLOBAL_KEYWORDS):
            return None
        # vendor keywords such as -webkit-sticky
        if part.type == 'identifier' and part.name.startswith('-'):
            return None
        if _matches(grammar, part):
            return None
        return Invalid(value.text, value.line, value.col, 'invalid',
                       message=f'Expected {grammar} but found "{value.text}".')


def _matches(grammar: str, part: PropertyValuePart) -> bool:
    for alternative in grammar.split('|'):
        alternative = alternative.strip()
        if alternative in TYPE_MATCHES:
            if part.type in TYPE_MATCHES[alternative]:
                return True
            # unitless zero is a valid length
            if alternative == '<len>' and part.type in ('integer', 'number') and part.is0:
                return True
        elif part.type == 'identifier' and part.name == alternative:
            return True
    return False


__all__ = ['PropertyValidator']
