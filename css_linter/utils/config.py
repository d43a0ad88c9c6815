"""Configuration utility for CSS Linter."""

import os
from typing import Any, Dict

import orjson

from .error import ConfigurationError

# Project version
VERSION = "1.0.0"

# Parser flags used for every verification run
PARSER_OPTIONS = {
    'star_hack': True,
    'underscore_hack': True,
    'ie_filters': True,
    'strict': False,
}

# Maximum number of parsed selector groups kept between runs
SELECTOR_CACHE_SIZE = 4096

# Supported file extensions
CSS_EXTENSIONS = ['.css']

# Ruleset levels as authored by users (in rulesets and in embedded directives)
RULESET_LEVELS = {
    # error
    'true': 2,
    '2': 2,
    # warning
    '': 1,
    '1': 1,
    # ignore
    'false': 0,
    '0': 0,
}

# Default name of a per-project ruleset file
RULESET_FILE = '.csslintrc'

# Logging
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'
LOG_LEVEL = 'WARNING'

# Output settings
ENABLE_COLOR = True
DEFAULT_FORMAT = 'text'
OUTPUT_FORMATS = ['text', 'compact', 'json']


def normalize_level(value: Any):
    """Convert a user supplied ruleset value to a level.

    Args:
        value: Level as int, bool or string

    Returns:
        0, 1 or 2, or None when the value is malformed
    """
    if isinstance(value, bool):
        return 2 if value else 0
    if isinstance(value, int):
        return value if value in (0, 1, 2) else None
    if isinstance(value, str):
        return RULESET_LEVELS.get(value.strip().lower())
    return None


def normalize_ruleset(ruleset: Dict[str, Any]) -> Dict[str, int]:
    """Return a fresh ruleset with malformed entries dropped."""
    normalized = {}
    for rule_id, value in (ruleset or {}).items():
        if not isinstance(rule_id, str):
            continue
        level = normalize_level(value)
        if level is not None:
            normalized[rule_id] = level
    return normalized


def load_ruleset_file(path: str) -> Dict[str, int]:
    """Load a JSON ruleset file.

    The file holds an object mapping rule ids to levels, either at the top
    level or under a ``"rules"`` key.

    Args:
        path: Path to the ruleset file

    Returns:
        Normalized ruleset

    Raises:
        ConfigurationError: If the file cannot be read or is not a JSON object
    """
    try:
        with open(path, 'rb') as f:
            data = orjson.loads(f.read())
    except (OSError, orjson.JSONDecodeError) as e:
        raise ConfigurationError(f"Failed to load ruleset file {path}: {e}")

    if isinstance(data, dict) and isinstance(data.get('rules'), dict):
        data = data['rules']
    if not isinstance(data, dict):
        raise ConfigurationError(f"Ruleset file {path} must contain a JSON object")
    return normalize_ruleset(data)


def find_ruleset_file(directory: str = '.'):
    """Return the path of the ruleset file in directory, if there is one."""
    path = os.path.join(directory, RULESET_FILE)
    return path if os.path.isfile(path) else None


# Exported config
__all__ = [
    'VERSION', 'PARSER_OPTIONS', 'SELECTOR_CACHE_SIZE', 'CSS_EXTENSIONS',
    'RULESET_LEVELS', 'RULESET_FILE',
    'LOG_FORMAT', 'LOG_DATE_FORMAT', 'LOG_LEVEL',
    'ENABLE_COLOR', 'DEFAULT_FORMAT', 'OUTPUT_FORMATS',
    'normalize_level', 'normalize_ruleset', 'load_ruleset_file', 'find_ruleset_file',
]
