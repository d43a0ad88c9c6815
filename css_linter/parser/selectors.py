"""Selector parsing over tinycss2 component values."""

from typing import List, Optional

from ..utils.error import CSSSyntaxError
from .events import Combinator, Selector, SelectorPart, SelectorSubPart, SyntaxUnit
from .tokens import (
    is_literal, normalize_text, position, split_on_literal, split_vendor, strip_whitespace,
)

COMBINATORS = {
    '>': 'child',
    '+': 'adjacent-sibling',
    '~': 'sibling',
}

# Functional pseudo-classes whose argument is a selector list
SELECTOR_FUNCTIONS = frozenset(['not', 'is', 'where', 'has', 'matches', 'any'])

ATTRIBUTE_OPERATORS = frozenset(['=', '~=', '|=', '^=', '$=', '*='])


def _unexpected(node) -> CSSSyntaxError:
    line, col = position(node)
    return CSSSyntaxError(f"Unexpected token '{node.serialize()}' in selector.", line, col)


def parse_selector_group(nodes: list, line: int = 1, col: int = 1,
                         relative: bool = False) -> List[Selector]:
    """Parse a comma separated selector list.

    Args:
        nodes: Component values of the selector list
        line: Line reported when the list is empty
        col: Column reported when the list is empty
        relative: Allow a leading combinator (as in ``:has(> img)``)

    Returns:
        List of selectors

    Raises:
        CSSSyntaxError: If any selector in the list is malformed
    """
    return [parse_selector(group, line, col, relative)
            for group in split_on_literal(nodes, ',')]


def parse_selector(nodes: list, line: int = 1, col: int = 1,
                   relative: bool = False) -> Selector:
    nodes = strip_whitespace(nodes)
    if not nodes:
        raise CSSSyntaxError("Expected a selector.", line, col)

    parts = []
    compound = []
    whitespace = None

    def flush():
        if compound:
            parts.append(parse_compound(compound))
            del compound[:]

    for node in nodes:
        if node.type in ('whitespace', 'comment'):
            if compound:
                flush()
                whitespace = node
            continue
        if node.type == 'literal' and node.value in COMBINATORS:
            flush()
            if (not parts and not relative) or (parts and isinstance(parts[-1], Combinator)):
                raise _unexpected(node)
            node_line, node_col = position(node)
            parts.append(Combinator(node.value, node_line, node_col, COMBINATORS[node.value]))
            whitespace = None
            continue
        if not compound and whitespace is not None and parts and isinstance(parts[-1], SelectorPart):
            ws_line, ws_col = position(whitespace)
            parts.append(Combinator(' ', ws_line, ws_col, 'descendant'))
        whitespace = None
        compound.append(node)
    flush()

    if isinstance(parts[-1], Combinator):
        last = parts[-1]
        raise CSSSyntaxError("Expected a selector after combinator.", last.line, last.col)

    first_line, first_col = position(nodes[0])
    return Selector(normalize_text(nodes), first_line, first_col, 'selector', parts=parts)


def _element_name(nodes: list, i: int):
    """Read ``el``, ``*``, ``ns|el``, ``*|*`` or ``|el`` starting at i."""
    def is_name(node):
        return node.type == 'ident' or is_literal(node, '*')

    n = len(nodes)
    if i < n and is_literal(nodes[i], '|') and i + 1 < n and is_name(nodes[i + 1]):
        return '|' + nodes[i + 1].serialize(), i + 2
    if i < n and is_name(nodes[i]):
        text = nodes[i].serialize()
        if (i + 2 < n and is_literal(nodes[i + 1], '|') and is_name(nodes[i + 2])):
            return text + '|' + nodes[i + 2].serialize(), i + 3
        return text, i + 1
    return None, i


def parse_compound(nodes: list) -> SelectorPart:
    """Parse a compound selector such as ``a.b#c[d]:hover``."""
    line, col = position(nodes[0])
    element_name, i = _element_name(nodes, 0)
    modifiers = []
    n = len(nodes)

    while i < n:
        node = nodes[i]
        node_line, node_col = position(node)
        if node.type == 'hash':
            modifiers.append(SelectorSubPart(node.serialize(), node_line, node_col, 'id',
                                             name=node.value))
            i += 1
        elif is_literal(node, '.') and i + 1 < n and nodes[i + 1].type == 'ident':
            modifiers.append(SelectorSubPart('.' + nodes[i + 1].serialize(), node_line, node_col,
                                             'class', name=nodes[i + 1].value))
            i += 2
        elif node.type == '[] block':
            modifiers.append(parse_attribute(node))
            i += 1
        elif is_literal(node, ':'):
            modifier, i = parse_pseudo(nodes, i)
            modifiers.append(modifier)
        elif is_literal(node, '&'):
            modifiers.append(SelectorSubPart('&', node_line, node_col, 'nesting'))
            i += 1
        else:
            raise _unexpected(node)

    return SelectorPart(normalize_text(nodes), line, col, 'part',
                        element_name=element_name, modifiers=modifiers)


def parse_pseudo(nodes: list, i: int):
    """Parse ``:name``, ``::name`` or ``:name(...)`` starting at the first colon."""
    line, col = position(nodes[i])
    colons = ':'
    i += 1
    if i < len(nodes) and is_literal(nodes[i], ':'):
        colons = '::'
        i += 1
    if i >= len(nodes):
        raise CSSSyntaxError("Expected a pseudo-class or pseudo-element name.", line, col)

    node = nodes[i]
    if node.type == 'ident':
        return SelectorSubPart(colons + node.serialize(), line, col, 'pseudo',
                               name=node.lower_value), i + 1
    if node.type == 'function':
        text = colons + node.serialize()
        _, base = split_vendor(node.lower_name)
        if colons == ':' and base in SELECTOR_FUNCTIONS:
            arg_line, arg_col = position(node)
            args = parse_selector_group(node.arguments, arg_line, arg_col,
                                        relative=base == 'has')
            return SelectorSubPart(text, line, col, base, name=base, args=args), i + 1
        return SelectorSubPart(text, line, col, 'pseudo', name=node.lower_name), i + 1
    raise _unexpected(node)


def parse_attribute(block) -> SelectorSubPart:
    """Parse the contents of an attribute selector block."""
    line, col = position(block)
    nodes = [node for node in block.content if node.type not in ('whitespace', 'comment')]
    text = '[' + normalize_text(block.content).strip() + ']'

    i = 0
    name: Optional[str] = None
    # [ns|attr], [*|attr], [|attr]
    if len(nodes) >= 3 and (nodes[0].type == 'ident' or is_literal(nodes[0], '*')) \
            and is_literal(nodes[1], '|') and nodes[2].type == 'ident':
        name, i = nodes[2].value, 3
    elif len(nodes) >= 2 and is_literal(nodes[0], '|') and nodes[1].type == 'ident':
        name, i = nodes[1].value, 2
    elif nodes and nodes[0].type == 'ident':
        name, i = nodes[0].value, 1
    if name is None:
        raise CSSSyntaxError("Expected an attribute name.", line, col)

    operator = None
    value = None
    if i < len(nodes):
        node = nodes[i]
        op_line, op_col = position(node)
        if node.type == 'literal' and node.value in ATTRIBUTE_OPERATORS:
            op, i = node.value, i + 1
        elif (node.type == 'literal' and node.value in '~|^$*' and i + 1 < len(nodes)
              and is_literal(nodes[i + 1], '=')):
            op, i = node.value + '=', i + 2
        else:
            raise _unexpected(node)
        operator = SyntaxUnit(op, op_line, op_col, 'operator')

        if i >= len(nodes) or nodes[i].type not in ('ident', 'string'):
            raise CSSSyntaxError("Expected an attribute value.", op_line, op_col)
        value = nodes[i].value
        i += 1
        # case-sensitivity flag
        if i < len(nodes) and nodes[i].type == 'ident' and nodes[i].lower_value in ('i', 's'):
            i += 1
    if i < len(nodes):
        raise _unexpected(nodes[i])

    return SelectorSubPart(text, line, col, 'attribute', name=name,
                           operator=operator, value=value)


__all__ = ['parse_selector_group', 'parse_selector', 'parse_compound',
           'parse_pseudo', 'parse_attribute']
