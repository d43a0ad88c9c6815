"""Helpers over tinycss2 component values."""

import re
from typing import List, Optional, Tuple

VENDOR_PREFIX = re.compile(r'^-([a-z0-9]+)-(?=.)', re.I)

SKIPPED_TYPES = ('whitespace', 'comment')


def position(node) -> Tuple[int, int]:
    return node.source_line, node.source_column


def is_literal(node, *values: str) -> bool:
    return node.type == 'literal' and node.value in values


def strip_whitespace(nodes: list) -> list:
    """Drop leading and trailing whitespace and comments."""
    start, end = 0, len(nodes)
    while start < end and nodes[start].type in SKIPPED_TYPES:
        start += 1
    while end > start and nodes[end - 1].type in SKIPPED_TYPES:
        end -= 1
    return nodes[start:end]


def significant(nodes: list) -> list:
    return [node for node in nodes if node.type not in SKIPPED_TYPES]


def split_on_literal(nodes: list, value: str) -> List[list]:
    """Split nodes at every top-level literal equal to value."""
    groups = [[]]
    for node in nodes:
        if is_literal(node, value):
            groups.append([])
        else:
            groups[-1].append(node)
    return groups


def normalize_text(nodes: list) -> str:
    """Serialize nodes with every run of whitespace collapsed to one space."""
    out = []
    pending_space = False
    for node in nodes:
        if node.type in SKIPPED_TYPES:
            pending_space = bool(out)
            continue
        if pending_space:
            out.append(' ')
            pending_space = False
        out.append(node.serialize())
    return ''.join(out)


def split_vendor(name: str) -> Tuple[Optional[str], str]:
    """Split ``-webkit-foo`` into ``('-webkit-', 'foo')``.

    Custom property names (``--foo``) have no vendor prefix.
    """
    if name.startswith('--'):
        return None, name
    match = VENDOR_PREFIX.match(name)
    if not match:
        return None, name
    return match.group(0), name[match.end():]


__all__ = [
    'position', 'is_literal', 'strip_whitespace', 'significant',
    'split_on_literal', 'normalize_text', 'split_vendor',
]
