"""Verification engine: runs the rule catalog over a stylesheet."""

import logging
import re
import threading
import traceback
from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple

from ..parser import Parser, SelectorCache
from ..rules import RULES, Rule, get_rule_list, get_ruleset
from ..utils.config import PARSER_OPTIONS, normalize_ruleset
from .directives import apply_embedded_overrides, find_directive_start
from .reporter import LintReport, Reporter

logger = logging.getLogger(__name__)

NEWLINES = re.compile(r'\r\n?|\f')

ABBREVIATION_PATTERN = re.compile(r'([-<])(int|len|num|pct|rel-(?:hsl|hwb|lab|lch|rgb))(?=\W)')
ABBREVIATIONS = {
    'int': 'integer',
    'len': 'length',
    'num': 'number',
    'pct': 'percentage',
    'rel-hsl': 'h-s-l-alpha-none',
    'rel-hwb': 'h-w-b-alpha-none',
    'rel-lab': 'l-a-b-alpha-none',
    'rel-lch': 'l-c-h-alpha-none',
    'rel-rgb': 'r-g-b-alpha-none',
}

FATAL_MESSAGE = 'Fatal error, cannot continue!\n'


def unabbreviate(message: str) -> str:
    """Expand grammar abbreviations such as ``<int>`` in a message."""
    if '<' not in message:
        return message
    return ABBREVIATION_PATTERN.sub(
        lambda match: match.group(1) + ABBREVIATIONS[match.group(2)], message)


@dataclass(frozen=True)
class OverrideSnapshot:
    """Ruleset and directive results of a run, compared between runs."""
    ruleset: Tuple[Tuple[str, int], ...]
    allow: Tuple[Tuple[int, Tuple[str, ...]], ...]
    ignore: Tuple[Tuple[int, int], ...]

    @classmethod
    def build(cls, ruleset, allow, ignore) -> 'OverrideSnapshot':
        return cls(
            tuple(sorted(ruleset.items())),
            tuple(sorted((line, tuple(sorted(ids))) for line, ids in allow.items())),
            tuple(ignore),
        )


class Linter:
    """Runs registered rules over CSS text.

    A Linter keeps a selector cache between runs. The cache is cleared
    whenever the effective ruleset or directives differ from the previous run.

    Args:
        rules: Rule id to Rule, the global registry by default
        parser_options: Overrides for the parser flags
        cache_size: Selector cache size
    """

    def __init__(self, rules: Optional[Dict[str, Rule]] = None,
                 parser_options: Optional[Dict[str, bool]] = None,
                 cache_size: Optional[int] = None):
        self.rules = RULES if rules is None else rules
        self.parser_options = dict(PARSER_OPTIONS, **(parser_options or {}))
        self.cache = SelectorCache(cache_size) if cache_size else SelectorCache()
        self._previous: Optional[OverrideSnapshot] = None
        self._lock = threading.Lock()

    def get_rule_list(self):
        return get_rule_list(self.rules)

    def get_ruleset(self) -> Dict[str, int]:
        return get_ruleset(self.rules)

    def _reuse_cache(self, snapshot: OverrideSnapshot) -> bool:
        with self._lock:
            reuse = self._previous is None or self._previous == snapshot
            self._previous = snapshot
        if not reuse:
            logger.debug("Ruleset or directives changed, clearing selector cache")
        return reuse

    def verify(self, text: str, ruleset: Optional[Dict[str, Any]] = None) -> LintReport:
        """Lint one stylesheet.

        Args:
            text: CSS source
            ruleset: Rule id to level; every rule as a warning when omitted

        Returns:
            LintReport with messages sorted by position, rollups last
        """
        text = NEWLINES.sub('\n', text)
        working = self.get_ruleset() if ruleset is None else normalize_ruleset(ruleset)
        allow: Dict[int, set] = {}
        ignore = []
        if find_directive_start(text) >= 0:
            apply_embedded_overrides(text, working, allow, ignore)

        reuse_cache = self._reuse_cache(OverrideSnapshot.build(working, allow, ignore))
        # parse errors are always errors
        working['errors'] = 2

        parser = Parser(cache=self.cache, **self.parser_options)
        reporter = Reporter(text.split('\n'), working, allow, ignore)

        active = 0
        for rule_id, level in working.items():
            rule = self.rules.get(rule_id)
            if not level or rule is None:
                continue
            mark = parser.mark()
            try:
                rule.init(rule, parser, reporter)
                active += 1
            except Exception as e:
                parser.rollback(mark)
                logger.error(f"Failed to initialize rule {rule_id}: {e}")
                reporter.info(f'Rule "{rule_id}" could not be initialized: {e}', None, rule)
        logger.debug(f"Activated {active} rules")

        try:
            parser.parse(text, reuse_cache=reuse_cache)
        except Exception as e:
            logger.warning(f"Fatal error while parsing: {e}")
            position = {'line': getattr(e, 'line', None), 'col': getattr(e, 'col', None)}
            reporter.error(FATAL_MESSAGE + traceback.format_exc(), position)

        messages = sorted(
            reporter.messages,
            key=lambda m: (1, 0, 0) if m.rollup else (0, m.line or 0, m.col or 0))
        for message in messages:
            message.message = unabbreviate(message.message)
        return LintReport(messages, reporter.stats)


_default_linter: Optional[Linter] = None
_default_lock = threading.Lock()


def get_linter() -> Linter:
    """Return the shared Linter used by verify()."""
    global _default_linter
    with _default_lock:
        if _default_linter is None:
            _default_linter = Linter()
        return _default_linter


def verify(text: str, ruleset: Optional[Dict[str, Any]] = None) -> LintReport:
    """Lint CSS text with the shared Linter.

    Args:
        text: CSS source
        ruleset: Rule id to level (0 off, 1 warning, 2 error)

    Returns:
        LintReport
    """
    return get_linter().verify(text, ruleset)


__all__ = ['Linter', 'OverrideSnapshot', 'verify', 'get_linter', 'unabbreviate']
