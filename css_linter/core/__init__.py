"""Core verification functionality."""

from .directives import apply_embedded_overrides, find_directive_start
from .engine import Linter, OverrideSnapshot, get_linter, unabbreviate, verify
from .reporter import LintReport, Message, Reporter

__all__ = [
    'verify',
    'get_linter',
    'unabbreviate',
    'Linter',
    'OverrideSnapshot',
    'LintReport',
    'Message',
    'Reporter',
    'apply_embedded_overrides',
    'find_directive_start',
]
