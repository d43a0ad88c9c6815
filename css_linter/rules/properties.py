"""Rules about declarations and their values."""

import re

from .registry import register_rule
from .util import get_prop_name, register_rule_events, register_shorthand_events, shorthands

WIKI = 'https://github.com/CSSLint/csslint/wiki/'

BACKGROUND_IMAGE = re.compile(r'^(-(webkit|moz|ms|o)-)?background(-image)?$', re.I)


@register_rule(
    'duplicate-background-images',
    name='Disallow duplicate background images',
    desc='Every background-image should be unique. Use a common class for e.g. sprites.',
    url=WIKI + 'Disallow-duplicate-background-images',
)
def duplicate_background_images(rule, parser, reporter):
    seen = {}

    def prop(event):
        if not BACKGROUND_IMAGE.match(event.property.text):
            return
        for part in event.value.parts:
            if part.type != 'uri' or part.uri is None:
                continue
            first = seen.get(part.uri)
            if first is None:
                seen[part.uri] = event
            else:
                reporter.report(
                    f'Background image "{part.uri}" was used multiple times, '
                    f'first declared at line {first.line}, col {first.col}.',
                    event, rule)

    parser.add_listener('property', prop)


@register_rule(
    'duplicate-properties',
    name='Disallow duplicate properties',
    desc='Duplicate properties must appear one after the other. '
         'Exact duplicates are always reported.',
    url=WIKI + 'Disallow-duplicate-properties',
)
def duplicate_properties(rule, parser, reporter):
    stack = []

    def start(event):
        stack.append({'values': {}, 'last_name': None})

    def prop(event):
        if not stack or event.in_parens:
            return
        frame = stack[-1]
        name = event.property.text.lower()
        value = event.value.text
        last = frame['values'].get(name)
        if last is not None:
            duplicate = last == value
            if duplicate or frame['last_name'] != name:
                kind = 'Duplicate' if duplicate else 'Ungrouped duplicate'
                reporter.report(f'{kind} "{event.property}".', event, rule)
        frame['values'][name] = value
        frame['last_name'] = name

    def end(event):
        stack.pop()

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'empty-rules',
    name='Disallow empty rules',
    desc='Rules without any properties specified should be removed.',
    url=WIKI + 'Disallow-empty-rules',
)
def empty_rules(rule, parser, reporter):
    def end_rule(event):
        if event.empty:
            reporter.report('Empty rule.', event.selectors[0] if event.selectors else event, rule)

    parser.add_listener('endrule', end_rule)


@register_rule(
    'font-faces',
    name="Don't use too many web fonts",
    desc='Too many different web fonts in the same stylesheet.',
    url=WIKI + 'Don%27t-use-too-many-web-fonts',
)
def font_faces(rule, parser, reporter):
    count = 0

    def start_fontface(event):
        nonlocal count
        count += 1

    def end_stylesheet(event):
        if count > 5:
            reporter.rollup_warn(f'Too many @font-face declarations ({count}).', rule)

    parser.add_listener('startfontface', start_fontface)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'font-sizes',
    name='Disallow too many font sizes',
    desc='Checks the number of font-size declarations.',
    url=WIKI + 'Don%27t-use-too-many-font-size-declarations',
)
def font_sizes(rule, parser, reporter):
    count = 0

    def prop(event):
        nonlocal count
        if not event.in_parens and get_prop_name(event.property) == 'font-size':
            count += 1

    def end_stylesheet(event):
        reporter.stat('font-sizes', count)
        if count >= 10:
            reporter.rollup_warn(
                f'Too many font-size declarations ({count}), abstraction needed.', rule)

    parser.add_listener('property', prop)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'important',
    name='Disallow !important',
    desc='Be careful when using !important declaration',
    url=WIKI + 'Disallow-%21important',
)
def important(rule, parser, reporter):
    count = 0

    def prop(event):
        nonlocal count
        if event.important:
            count += 1
            reporter.report('!important.', event, rule)

    def end_stylesheet(event):
        reporter.stat('important', count)
        if count >= 10:
            reporter.rollup_warn(
                f'Too many !important declarations ({count}), '
                'try to use less than 10 to avoid specificity issues.', rule)

    parser.add_listener('property', prop)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'known-properties',
    name='Require use of known properties',
    desc='Properties should be known (per CSS specification) or be a vendor-prefixed property.',
    url=WIKI + 'Require-use-of-known-properties',
)
def known_properties(rule, parser, reporter):
    def prop(event):
        if event.invalid:
            reporter.report(event.invalid.message, event.invalid, rule)

    parser.add_listener('property', prop)


@register_rule(
    'order-alphabetical',
    name='Alphabetical order',
    desc='Assure properties are in alphabetical order',
)
def order_alphabetical(rule, parser, reporter):
    stack = []

    def start(event):
        stack.append({'last': '', 'failed': False})

    def prop(event):
        if not stack or event.in_parens:
            return
        frame = stack[-1]
        if frame['failed']:
            return
        name = get_prop_name(event.property)
        if name < frame['last']:
            reporter.report(f'Non-alphabetical order: "{name}".', event, rule)
            frame['failed'] = True
        frame['last'] = name

    def end(event):
        stack.pop()

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'shorthand',
    name='Require shorthand properties',
    desc='Use shorthand properties where possible.',
    url=WIKI + 'Require-shorthand-properties',
)
def shorthand(rule, parser, reporter):
    table = shorthands()

    def end(event, props):
        for name, events in props.items():
            if len(events) == len(table[name]):
                message = f'"{name}" shorthand can replace "' + '" + "'.join(events) + '"'
                for longhand in events.values():
                    reporter.report(message, longhand, rule)

    register_shorthand_events(parser, end=end)


@register_rule(
    'shorthand-overrides',
    name='Avoid shorthands that override individual properties',
    desc='Avoid shorthands like `background: foo` that follow individual properties '
         'like `background-image: bar` thus overriding them',
)
def shorthand_overrides(rule, parser, reporter):
    def prop(event, props, name):
        overridden = props.pop(name, None)
        if overridden:
            reporter.report(
                f'"{event.property}" overrides "' + '" + "'.join(overridden) + '" above.',
                event, rule)

    register_shorthand_events(parser, prop=prop)


@register_rule(
    'zero-units',
    name='Disallow units for 0 values',
    desc="You don't need to specify units when a value is 0.",
    url=WIKI + 'Disallow-units-for-zero-values',
)
def zero_units(rule, parser, reporter):
    def prop(event):
        for part in event.value.parts:
            if part.is0 and part.units and part.type not in ('time', 'percentage'):
                reporter.report('"0" value with redundant units.', part, rule)

    parser.add_listener('property', prop)


__all__ = [
    'duplicate_background_images', 'duplicate_properties', 'empty_rules', 'font_faces',
    'font_sizes', 'important', 'known_properties', 'order_alphabetical', 'shorthand',
    'shorthand_overrides', 'zero_units',
]
