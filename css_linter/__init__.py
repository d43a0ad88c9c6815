"""CSS Linter: rule-based checking of CSS stylesheets."""

from .core import LintReport, Linter, Message, get_linter, verify
from .rules import get_rule_list, get_ruleset, register_rule
from .utils import error
from .utils.config import VERSION

__version__ = VERSION

__all__ = [
    'verify',
    'get_linter',
    'Linter',
    'LintReport',
    'Message',
    'get_rule_list',
    'get_ruleset',
    'register_rule',
    'error',
    'VERSION',
]
