"""Rules about box model and layout properties."""

import re

from .registry import register_rule
from .util import get_prop_name, register_rule_events

WIKI = 'https://github.com/CSSLint/csslint/wiki/'

SIZE_PROPS = {
    'width': ('border', 'border-left', 'border-right', 'padding', 'padding-left', 'padding-right'),
    'height': ('border', 'border-bottom', 'border-top', 'padding', 'padding-bottom', 'padding-top'),
}

ZERO_VALUE = re.compile(r'^0+\D*$')


def _box_sides(parts):
    """Expand 1 to 4 box values into (top, right, bottom, left)."""
    if len(parts) == 1:
        return parts[0], parts[0], parts[0], parts[0]
    if len(parts) == 2:
        return parts[0], parts[1], parts[0], parts[1]
    if len(parts) == 3:
        return parts[0], parts[1], parts[2], parts[1]
    return tuple(parts[:4])


def _padding_affects(value, size: str) -> bool:
    if not value.parts:
        return False
    top, right, bottom, left = _box_sides(value.parts)
    sides = (left, right) if size == 'width' else (top, bottom)
    return any(not side.is0 for side in sides)


@register_rule(
    'box-model',
    name='Beware of broken box size',
    desc="Don't use width or height when using padding or border.",
    url=WIKI + 'Beware-of-box-model-size',
)
def box_model(rule, parser, reporter):
    stack = []
    props = None

    def start(event):
        nonlocal props
        stack.append(props)
        props = {}

    def prop(event):
        if props is None or event.in_parens:
            return
        name = get_prop_name(event.property)
        value = event.value
        if name in SIZE_PROPS['width'] or name in SIZE_PROPS['height']:
            if not ZERO_VALUE.match(value.text) and not (name == 'border' and value.text.lower() == 'none'):
                props[name] = event
        elif name == 'box-sizing':
            props[name] = event
        elif name in SIZE_PROPS and value.parts and value.parts[0].type in ('length', 'percentage'):
            props[name] = event

    def end(event):
        nonlocal props
        if 'box-sizing' not in props:
            for size, names in SIZE_PROPS.items():
                if size not in props:
                    continue
                for name in names:
                    found = props.get(name)
                    if not found:
                        continue
                    if name == 'padding' and not _padding_affects(found.value, size):
                        continue
                    reporter.report(f'No box-sizing and {size} in {name}', found.property, rule)
        props = stack.pop()

    register_rule_events(parser, start=start, prop=prop, end=end)


# Value each property is checked against; 1 means any value is reported
DISPLAY_CHECKED = {
    'display': 1,
    'float': 'none',
    'height': 1,
    'width': 1,
    'margin': 1,
    'margin-left': 1,
    'margin-right': 1,
    'margin-bottom': 1,
    'margin-top': 1,
    'padding': 1,
    'padding-left': 1,
    'padding-right': 1,
    'padding-bottom': 1,
    'padding-top': 1,
    'vertical-align': 1,
}
INLINE_IGNORED = ('height', 'width', 'margin', 'margin-top', 'margin-bottom')
TABLE_IGNORED = ('margin', 'margin-left', 'margin-right', 'margin-top', 'margin-bottom', 'float')


@register_rule(
    'display-property-grouping',
    name='Require properties appropriate for display',
    desc="Certain properties shouldn't be used with certain display property values.",
    url=WIKI + 'Require-properties-appropriate-for-display',
)
def display_property_grouping(rule, parser, reporter):
    stack = []
    props = None

    def report_property(name, display, message=None):
        found = props.get(name)
        if found and DISPLAY_CHECKED[name] != found.value.text.lower():
            reporter.report(message or f'"{name}" can\'t be used with display: {display}.',
                            found.property, rule)

    def start(event):
        nonlocal props
        stack.append(props)
        props = {}

    def prop(event):
        if props is None or event.in_parens:
            return
        name = get_prop_name(event.property)
        if name in DISPLAY_CHECKED:
            props[name] = event

    def end(event):
        nonlocal props
        display = props.get('display')
        if display:
            value = display.value.text.lower()
            if value == 'inline':
                for name in INLINE_IGNORED:
                    report_property(name, value)
                report_property('float', value,
                                '"display:inline" has no effect on floated elements '
                                '(but may be used to fix the IE6 double-margin bug).')
            elif value == 'block':
                report_property('vertical-align', value)
            elif value == 'inline-block':
                report_property('float', value)
            elif value.startswith('table-'):
                for name in TABLE_IGNORED:
                    report_property(name, value)
        props = stack.pop()

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'floats',
    name='Disallow too many floats',
    desc='This rule tests if the float property is used too many times',
    url=WIKI + 'Disallow-too-many-floats',
)
def floats(rule, parser, reporter):
    count = 0

    def prop(event):
        nonlocal count
        if (not event.in_parens and get_prop_name(event.property) == 'float'
                and event.value.text.lower() != 'none'):
            count += 1

    def end_stylesheet(event):
        reporter.stat('floats', count)
        if count >= 10:
            reporter.rollup_warn(
                f"Too many floats ({count}), you're probably using them for layout. "
                'Consider using a grid system instead.', rule)

    parser.add_listener('property', prop)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'outline-none',
    name='Disallow outline: none',
    desc='Use of outline: none or outline: 0 should be limited to :focus rules.',
    url=WIKI + 'Disallow-outline%3Anone',
    tags=['Accessibility'],
)
def outline_none(rule, parser, reporter):
    stack = []

    def start(event):
        selectors = getattr(event, 'selectors', None)
        stack.append({
            'event': event,
            'selectors': selectors,
            'count': 0,
            'outline': False,
        } if selectors else None)

    def prop(event):
        current = stack[-1] if stack else None
        if not current or event.in_parens:
            return
        current['count'] += 1
        if (get_prop_name(event.property) == 'outline'
                and event.value.text.lower() in ('none', '0')):
            current['outline'] = True

    def end(event):
        current = stack.pop() if stack else None
        if not current or not current['outline']:
            return
        if not any(':focus' in selector.text.lower() for selector in current['selectors']):
            reporter.report('Outlines should only be modified using :focus.', current['event'], rule)
        elif current['count'] == 1:
            reporter.report("Outlines shouldn't be hidden unless other visual changes are made.",
                            current['event'], rule)

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'text-indent',
    name='Disallow negative text-indent',
    desc='Checks for text indent less than -99px',
    url=WIKI + 'Disallow-negative-text-indent',
)
def text_indent(rule, parser, reporter):
    stack = []

    def start(event):
        stack.append({'indent': None, 'ltr': False})

    def prop(event):
        if not stack or event.in_parens:
            return
        frame = stack[-1]
        name = get_prop_name(event.property)
        parts = event.value.parts
        if name == 'text-indent' and parts and parts[0].number is not None and parts[0].number < -99:
            frame['indent'] = event.property
        elif name == 'direction' and event.value.text.lower() == 'ltr':
            frame['ltr'] = True

    def end(event):
        frame = stack.pop()
        if frame['indent'] and not frame['ltr']:
            reporter.report(
                'Negative "text-indent" doesn\'t work well with RTL. '
                'If you use "text-indent" for image replacement, '
                'explicitly set "direction" for that item to "ltr".',
                frame['indent'], rule)

    register_rule_events(parser, start=start, prop=prop, end=end)


__all__ = ['box_model', 'display_property_grouping', 'floats', 'outline_none', 'text_indent']
