"""Utilities for CSS Linter."""

from .config import VERSION, PARSER_OPTIONS, normalize_ruleset, load_ruleset_file
from .error import (
    CSSLinterError,
    ConfigurationError,
    FileOperationError,
    RuleRegistrationError,
    CSSSyntaxError,
)
from .file import safe_read_file, collect_css_files
from .logging import setup_logging

__all__ = [
    'VERSION',
    'PARSER_OPTIONS',
    'normalize_ruleset',
    'load_ruleset_file',
    'CSSLinterError',
    'ConfigurationError',
    'FileOperationError',
    'RuleRegistrationError',
    'CSSSyntaxError',
    'safe_read_file',
    'collect_css_files',
    'setup_logging',
]
