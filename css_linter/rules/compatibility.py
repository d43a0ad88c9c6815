"""Rules about vendor prefixes, browser hacks and global at-rules."""

import re

from .registry import register_rule
from .util import register_rule_events

WIKI = 'https://github.com/CSSLint/csslint/wiki/'

# Property -> vendors shipping a compatible prefixed variant.
# See http://peter.sh/experiments/vendor-prefixed-css-property-overview/
COMPATIBLE_PREFIXES = {
    'animation': 'webkit',
    'animation-delay': 'webkit',
    'animation-direction': 'webkit',
    'animation-duration': 'webkit',
    'animation-fill-mode': 'webkit',
    'animation-iteration-count': 'webkit',
    'animation-name': 'webkit',
    'animation-play-state': 'webkit',
    'animation-timing-function': 'webkit',
    'appearance': 'webkit moz',
    'border-end': 'webkit moz',
    'border-end-color': 'webkit moz',
    'border-end-style': 'webkit moz',
    'border-end-width': 'webkit moz',
    'border-image': 'webkit moz o',
    'border-radius': 'webkit',
    'border-start': 'webkit moz',
    'border-start-color': 'webkit moz',
    'border-start-style': 'webkit moz',
    'border-start-width': 'webkit moz',
    'box-align': 'webkit moz',
    'box-direction': 'webkit moz',
    'box-flex': 'webkit moz',
    'box-lines': 'webkit',
    'box-ordinal-group': 'webkit moz',
    'box-orient': 'webkit moz',
    'box-pack': 'webkit moz',
    'column-count': 'webkit moz ms',
    'column-gap': 'webkit moz ms',
    'column-rule': 'webkit moz ms',
    'column-rule-color': 'webkit moz ms',
    'column-rule-style': 'webkit moz ms',
    'column-rule-width': 'webkit moz ms',
    'column-width': 'webkit moz ms',
    'flex': 'webkit ms',
    'flex-basis': 'webkit',
    'flex-direction': 'webkit ms',
    'flex-flow': 'webkit',
    'flex-grow': 'webkit',
    'flex-shrink': 'webkit',
    'hyphens': 'epub moz',
    'line-break': 'webkit ms',
    'margin-end': 'webkit moz',
    'margin-start': 'webkit moz',
    'marquee-speed': 'webkit wap',
    'marquee-style': 'webkit wap',
    'padding-end': 'webkit moz',
    'padding-start': 'webkit moz',
    'tab-size': 'moz o',
    'text-size-adjust': 'webkit ms',
    'transform': 'webkit ms',
    'transform-origin': 'webkit ms',
    'user-modify': 'webkit moz',
    'user-select': 'webkit moz ms',
    'word-break': 'epub ms',
    'writing-mode': 'epub ms',
}

VARIATIONS = {
    prop: [f'-{vendor}-{prop}' for vendor in vendors.split()]
    for prop, vendors in COMPATIBLE_PREFIXES.items()
}
PREFIXED_NAMES = frozenset(name for names in VARIATIONS.values() for name in names)


def _join_names(names):
    if len(names) == 1:
        return names[0]
    if len(names) == 2:
        return ' and '.join(names)
    return ', '.join(names)


@register_rule(
    'compatible-vendor-prefixes',
    name='Require compatible vendor prefixes',
    desc='Include all compatible vendor prefixes to reach a wider range of users.',
    url=WIKI + 'Require-compatible-vendor-prefixes',
)
def compatible_vendor_prefixes(rule, parser, reporter):
    stack = []
    keyframes_prefix = None

    def start_keyframes(event):
        nonlocal keyframes_prefix
        keyframes_prefix = event.prefix

    def end_keyframes(event):
        nonlocal keyframes_prefix
        keyframes_prefix = None

    def start(event):
        stack.append([])

    def prop(event):
        if not stack or event.in_parens:
            return
        name = event.property.text.lower()
        if name not in PREFIXED_NAMES:
            return
        if keyframes_prefix and name.startswith(keyframes_prefix):
            return
        stack[-1].append(event.property)

    def end(event):
        properties = stack.pop()
        groups = {}
        for name in properties:
            text = name.text.lower()
            for prop_name, variations in VARIATIONS.items():
                if text not in variations:
                    continue
                group = groups.setdefault(prop_name, {'actual': [], 'nodes': []})
                if text not in group['actual']:
                    group['actual'].append(text)
                    group['nodes'].append(name)

        for prop_name, group in groups.items():
            actual = group['actual']
            full = VARIATIONS[prop_name]
            if len(full) <= len(actual):
                continue
            for item in full:
                if item not in actual:
                    reporter.report(
                        f'"{item}" is compatible with {_join_names(actual)} '
                        'and should be included as well.',
                        group['nodes'][0], rule)

    parser.add_listener('startkeyframes', start_keyframes)
    parser.add_listener('endkeyframes', end_keyframes)
    for category in ('rule', 'keyframerule'):
        parser.add_listener('start' + category, start)
        parser.add_listener('end' + category, end)
    parser.add_listener('property', prop)


GRADIENT = re.compile(r'(-|^)gradient$')


@register_rule(
    'gradients',
    name='Require all gradient definitions',
    desc='When using a vendor-prefixed gradient, make sure to use them all.',
    url=WIKI + 'Require-all-gradient-definitions',
)
def gradients(rule, parser, reporter):
    stack = []

    def start(event):
        stack.append(None)

    def prop(event):
        if not stack or event.in_parens or not event.value.parts:
            return
        part = event.value.parts[0]
        if part.prefix and part.name and GRADIENT.search(part.name):
            if stack[-1] is None:
                stack[-1] = {'-moz-': part, '-webkit-': part}
            stack[-1].pop(part.prefix, None)

    def end(event):
        missing = stack.pop()
        if missing:
            prefixes = list(missing)
            suffix = 'es' if len(prefixes) > 1 else ''
            reporter.report(f"Missing {','.join(prefixes)} prefix{suffix} for gradient.",
                            missing[prefixes[0]], rule)

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'star-property-hack',
    name='Disallow properties with a star prefix',
    desc='Checks for the star property hack (targets IE6/7)',
    url=WIKI + 'Disallow-star-hack',
)
def star_property_hack(rule, parser, reporter):
    def prop(event):
        if event.property.hack == '*':
            reporter.report('IE star prefix.', event.property, rule)

    parser.add_listener('property', prop)


@register_rule(
    'underscore-property-hack',
    name='Disallow properties with an underscore prefix',
    desc='Checks for the underscore property hack (targets IE6)',
    url=WIKI + 'Disallow-underscore-hack',
)
def underscore_property_hack(rule, parser, reporter):
    def prop(event):
        if event.property.hack == '_':
            reporter.report('IE underscore prefix.', event.property, rule)

    parser.add_listener('property', prop)


# Vendor-prefixed property -> standard property
VENDOR_STANDARDS = {
    '-webkit-border-radius': 'border-radius',
    '-webkit-border-top-left-radius': 'border-top-left-radius',
    '-webkit-border-top-right-radius': 'border-top-right-radius',
    '-webkit-border-bottom-left-radius': 'border-bottom-left-radius',
    '-webkit-border-bottom-right-radius': 'border-bottom-right-radius',
    '-o-border-radius': 'border-radius',
    '-o-border-top-left-radius': 'border-top-left-radius',
    '-o-border-top-right-radius': 'border-top-right-radius',
    '-o-border-bottom-left-radius': 'border-bottom-left-radius',
    '-o-border-bottom-right-radius': 'border-bottom-right-radius',
    '-moz-border-radius': 'border-radius',
    '-moz-border-radius-topleft': 'border-top-left-radius',
    '-moz-border-radius-topright': 'border-top-right-radius',
    '-moz-border-radius-bottomleft': 'border-bottom-left-radius',
    '-moz-border-radius-bottomright': 'border-bottom-right-radius',
    '-moz-column-count': 'column-count',
    '-webkit-column-count': 'column-count',
    '-moz-column-gap': 'column-gap',
    '-webkit-column-gap': 'column-gap',
    '-moz-column-rule': 'column-rule',
    '-webkit-column-rule': 'column-rule',
    '-moz-column-rule-style': 'column-rule-style',
    '-webkit-column-rule-style': 'column-rule-style',
    '-moz-column-rule-color': 'column-rule-color',
    '-webkit-column-rule-color': 'column-rule-color',
    '-moz-column-rule-width': 'column-rule-width',
    '-webkit-column-rule-width': 'column-rule-width',
    '-moz-column-width': 'column-width',
    '-webkit-column-width': 'column-width',
    '-webkit-column-span': 'column-span',
    '-webkit-columns': 'columns',
    '-moz-box-shadow': 'box-shadow',
    '-webkit-box-shadow': 'box-shadow',
    '-moz-transform': 'transform',
    '-webkit-transform': 'transform',
    '-o-transform': 'transform',
    '-ms-transform': 'transform',
    '-moz-transform-origin': 'transform-origin',
    '-webkit-transform-origin': 'transform-origin',
    '-o-transform-origin': 'transform-origin',
    '-ms-transform-origin': 'transform-origin',
    '-moz-box-sizing': 'box-sizing',
    '-webkit-box-sizing': 'box-sizing',
}


@register_rule(
    'vendor-prefix',
    name='Require standard property with vendor prefix',
    desc='When using a vendor-prefixed property, make sure to include the standard one.',
    url=WIKI + 'Require-standard-property-with-vendor-prefix',
)
def vendor_prefix(rule, parser, reporter):
    stack = []

    def start(event):
        stack.append({'props': {}, 'count': 0})

    def prop(event):
        if not stack or event.in_parens:
            return
        frame = stack[-1]
        frame['count'] += 1
        name = event.property.text.lower()
        frame['props'].setdefault(name, []).append((event.property, frame['count']))

    def end(event):
        props = stack.pop()['props']
        for actual, occurrences in props.items():
            needed = VENDOR_STANDARDS.get(actual)
            if not needed:
                continue
            unit, position = occurrences[0]
            if needed not in props:
                reporter.report(
                    f'Missing standard property "{needed}" to go along with "{actual}".',
                    unit, rule)
            elif props[needed][0][1] < position:
                reporter.report(
                    f'Standard property "{needed}" should come after '
                    f'vendor-prefixed property "{actual}".',
                    unit, rule)

    register_rule_events(parser, start=start, prop=prop, end=end)


@register_rule(
    'globals-in-document',
    name='Warn about global @ rules inside @-moz-document',
    desc='Warn about @import, @charset, @namespace inside @-moz-document',
)
def globals_in_document(rule, parser, reporter):
    depth = 0
    finished = 0

    def start_document(event):
        nonlocal depth
        depth += 1

    def end_document(event):
        nonlocal depth, finished
        depth -= 1
        finished += 1

    def check(event):
        if depth and finished:
            reporter.report(
                f'A nested @{event.type} is valid only if this @-moz-document section '
                'is the first one matched for any given URL.', event, rule)

    parser.add_listener('startdocument', start_document)
    parser.add_listener('enddocument', end_document)
    for event_type in ('import', 'charset', 'namespace'):
        parser.add_listener(event_type, check)


@register_rule(
    'import',
    name='Disallow @import',
    desc="Don't use @import, use <link> instead.",
    url=WIKI + 'Disallow-%40import',
)
def import_rule(rule, parser, reporter):
    def on_import(event):
        reporter.report('@import prevents parallel downloads, use <link> instead.', event, rule)

    parser.add_listener('import', on_import)


__all__ = [
    'compatible_vendor_prefixes', 'gradients', 'star_property_hack',
    'underscore_property_hack', 'vendor_prefix', 'globals_in_document', 'import_rule',
]
