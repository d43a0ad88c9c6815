"""Inline ``/* csslint ... */`` directives.

Three forms are understood, each inside its own comment:

    /* csslint allow: rule1, rule2 */     exempt rules on the comment's line
    /* csslint ignore:start */ ...
    /* csslint ignore:end */              drop rule reports between the two lines
    /* csslint rule1:2, rule2:false */    change rule levels for the whole text

Level ``2``/``true`` means error, ``1``/empty/omitted means warning and
``0``/``false`` disables the rule.
"""

import logging
import re
from typing import Dict, List, Set, Tuple

from ..utils.config import RULESET_LEVELS

logger = logging.getLogger(__name__)

DIRECTIVE_PATTERN = re.compile(r'/\*\s*csslint\s+((?:[^*]|\*(?!/))+?)\*/', re.I)
PROBE_PATTERN = re.compile('csslint', re.I)


def find_directive_start(text: str) -> int:
    """Return where directive scanning must start, or -1 if it can be skipped.

    Scanning starts at the last comment opening before the first ``csslint``
    that follows a comment opening, which is where the earliest possible
    directive begins.
    """
    first = text.find('/*')
    if first < 0:
        return -1
    match = PROBE_PATTERN.search(text, first + 2)
    if not match:
        return -1
    return text.rfind('/*', 0, match.start() + 1)


def apply_embedded_overrides(text: str, ruleset: Dict[str, int],
                             allow: Dict[int, Set[str]],
                             ignore: List[Tuple[int, int]]) -> None:
    """Apply every directive in text.

    Args:
        text: Source text with normalized newlines
        ruleset: Working ruleset, updated in place
        allow: Allow table, updated in place
        ignore: Ignore ranges, appended to in place
    """
    start = find_directive_start(text)
    if start < 0:
        return

    ignore_start = None
    line = 1
    pos = 0
    for match in DIRECTIVE_PATTERN.finditer(text, start):
        line += text.count('\n', pos, match.start())
        pos = match.start()

        body = match.group(1).lower()
        command, sep, args = body.partition(':')
        command = command.strip()

        if command == 'allow' and sep:
            ids = {rule_id.strip() for rule_id in args.split(',') if rule_id.strip()}
            if ids:
                allow.setdefault(line, set()).update(ids)
        elif command == 'ignore' and sep:
            if 'start' in args:
                if ignore_start is None:
                    ignore_start = line
            elif 'end' in args and ignore_start is not None:
                ignore.append((ignore_start, line))
                ignore_start = None
        else:
            _apply_levels(body, ruleset)

    if ignore_start is not None:
        last_line = text.count('\n') + 1
        logger.debug(f"Closing ignore range opened on line {ignore_start} at end of text")
        ignore.append((ignore_start, last_line))


def _apply_levels(body: str, ruleset: Dict[str, int]) -> None:
    for item in body.split(','):
        rule_id, _, level = item.partition(':')
        rule_id = rule_id.strip()
        if not rule_id:
            continue
        ruleset[rule_id] = RULESET_LEVELS.get(level.strip(), 1)


__all__ = ['DIRECTIVE_PATTERN', 'find_directive_start', 'apply_embedded_overrides']
