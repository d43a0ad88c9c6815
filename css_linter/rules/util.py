"""Helpers shared by rules."""

from functools import lru_cache
from typing import Callable, Dict, List, Optional

# Block event categories, each fired as start<name> and end<name>
BLOCK_EVENTS = (
    'container',
    'fontface',
    'keyframerule',
    'media',
    'page',
    'pagemargin',
    'rule',
    'supports',
    'viewport',
)

WSC = 'width|style|color'
TBLR = 'top|bottom|left|right'

# (shorthand, pattern, *groups). ``%`` stands for the shorthand and each
# digit for every alternative of the matching group.
SHORTHAND_TABLE = (
    ('animation', '%-1',
     'name|duration|timing-function|delay|iteration-count|direction|fill-mode|play-state'),
    ('background', '%-1', 'image|size|position|repeat|origin|clip|attachment|color'),
    ('border', '%-1-2', TBLR, WSC),
    ('border-top', '%-1', WSC),
    ('border-left', '%-1', WSC),
    ('border-right', '%-1', WSC),
    ('border-bottom', '%-1', WSC),
    ('border-block-end', '%-1', WSC),
    ('border-block-start', '%-1', WSC),
    ('border-image', '%-1', 'source|slice|width|outset|repeat'),
    ('border-inline-end', '%-1', WSC),
    ('border-inline-start', '%-1', WSC),
    ('border-radius', 'border-1-2-radius', 'top|bottom', 'left|right'),
    ('border-color', 'border-1-color', TBLR),
    ('border-style', 'border-1-style', TBLR),
    ('border-width', 'border-1-width', TBLR),
    ('column-rule', '%-1', WSC),
    ('columns', 'column-1', 'width|count'),
    ('flex', '%-1', 'grow|shrink|basis'),
    ('flex-flow', 'flex-1', 'direction|wrap'),
    ('font', '%-style|%-variant|%-weight|%-stretch|%-size|%-family|line-height'),
    ('grid', '%-1',
     'template-rows|template-columns|template-areas|'
     'auto-rows|auto-columns|auto-flow|column-gap|row-gap'),
    ('grid-area', 'grid-1-2', 'row|column', 'start|end'),
    ('grid-column', '%-1', 'start|end'),
    ('grid-gap', 'grid-1-gap', 'row|column'),
    ('grid-row', '%-1', 'start|end'),
    ('grid-template', '%-1', 'columns|rows|areas'),
    ('list-style', 'list-1', 'type|position|image'),
    ('margin', '%-1', TBLR),
    ('mask', '%-1', 'image|mode|position|size|repeat|origin|clip|composite'),
    ('outline', '%-1', WSC),
    ('padding', '%-1', TBLR),
    ('text-decoration', '%-1', 'color|style|line'),
    ('text-emphasis', '%-1', 'style|color'),
    ('transition', '%-1', 'delay|duration|property|timing-function'),
)


def expand_shorthand(shorthand: str, pattern: str, *groups: str) -> List[str]:
    """Expand a table entry into the list of its longhand names.

    >>> expand_shorthand('border-radius', 'border-1-2-radius', 'top|bottom', 'left|right')
    ['border-top-left-radius', 'border-bottom-left-radius', 'border-top-right-radius', 'border-bottom-right-radius']
    """
    result = pattern.replace('%', shorthand)
    for i, group in enumerate(groups, 1):
        result = '|'.join(result.replace(str(i), word) for word in group.split('|'))
    return result.split('|')


@lru_cache(maxsize=None)
def _tables():
    table = {}
    owners = {}
    for shorthand, pattern, *groups in SHORTHAND_TABLE:
        longhands = expand_shorthand(shorthand, pattern, *groups)
        table[shorthand] = longhands
        for longhand in longhands:
            owners[longhand] = shorthand
    return table, owners


def shorthands() -> Dict[str, List[str]]:
    """Shorthand name -> its longhand names."""
    return _tables()[0]


def shorthands_for() -> Dict[str, str]:
    """Longhand name -> the shorthand that covers it.

    A longhand listed by several shorthands maps to the last one in the table.
    """
    return _tables()[1]


def get_prop_name(prop) -> str:
    """Return the lowercase property name without vendor prefix."""
    name = prop.text.lower()
    return name[prop.vendor_pos:] if prop.vendor_pos else name


def register_rule_events(parser, start: Optional[Callable] = None,
                         prop: Optional[Callable] = None,
                         end: Optional[Callable] = None) -> None:
    """Subscribe start/end to every block category and prop to properties."""
    for category in BLOCK_EVENTS:
        if start:
            parser.add_listener('start' + category, start)
        if end:
            parser.add_listener('end' + category, end)
    if prop:
        parser.add_listener('property', prop)


def register_shorthand_events(parser, prop: Optional[Callable] = None,
                              end: Optional[Callable] = None) -> None:
    """Track longhands per block, grouped by the shorthand covering them.

    Args:
        parser: Parser to subscribe to
        prop: Called as ``prop(event, props, name)`` for a shorthand
            declared in a block that already has bucketed longhands
        end: Called as ``end(event, props)`` at the end of a block that has
            bucketed longhands

    ``props`` maps shorthand -> {longhand: property event}.
    """
    table = shorthands()
    owners = shorthands_for()
    stack = []
    state = {'props': None}

    def on_start(event):
        stack.append(state['props'])
        state['props'] = None

    def on_property(event):
        if not stack or event.in_parens:
            return
        name = get_prop_name(event.property)
        owner = owners.get(name)
        props = state['props']
        if owner:
            if props is None:
                props = state['props'] = {}
            props.setdefault(owner, {})[name] = event
        elif prop and props and name in table:
            prop(event, props, name)

    def on_end(event):
        if end and state['props']:
            end(event, state['props'])
        state['props'] = stack.pop() if stack else None

    register_rule_events(parser, start=on_start, prop=on_property, end=on_end)


__all__ = [
    'BLOCK_EVENTS', 'SHORTHAND_TABLE', 'expand_shorthand', 'shorthands', 'shorthands_for',
    'get_prop_name', 'register_rule_events', 'register_shorthand_events',
]
