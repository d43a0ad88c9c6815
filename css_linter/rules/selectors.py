"""Rules about selectors."""

import re

from .registry import register_rule

WIKI = 'https://github.com/CSSLint/csslint/wiki/'

HEADING = re.compile(r'^h([1-6])$', re.I)


@register_rule(
    'ids',
    name='Disallow IDs in selectors',
    desc='Selectors should not contain IDs.',
    url=WIKI + 'Disallow-IDs-in-selectors',
)
def ids(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            count = sum(1 for part in selector.parts
                        for modifier in part.modifiers if modifier.type == 'id')
            if count:
                suffix = '!' * count if count > 1 else '.'
                reporter.report(f'Id in selector{suffix}', selector, rule)

    parser.add_listener('startrule', start_rule)


# Pseudo definition flags
COLON = 1           # allowed with ":"
DOUBLE_COLON = 2    # allowed with "::"
FUNC = 4            # must be a function
FUNC_TOO = 8        # allowed both as a function and as a plain name
WEBKIT = 0x10
MOZ = 0x20
DEPRECATED = 0xDEAD0000

PSEUDOS = {
    # elements
    'after': COLON + DOUBLE_COLON,
    'backdrop': DOUBLE_COLON,
    'before': COLON + DOUBLE_COLON,
    'cue': DOUBLE_COLON,
    'cue-region': DOUBLE_COLON,
    'file-selector-button': DOUBLE_COLON,
    'first-letter': COLON + DOUBLE_COLON,
    'first-line': COLON + DOUBLE_COLON,
    'grammar-error': DOUBLE_COLON,
    'highlight': DOUBLE_COLON + FUNC,
    'marker': DOUBLE_COLON,
    'part': DOUBLE_COLON + FUNC,
    'placeholder': DOUBLE_COLON + MOZ,
    'selection': DOUBLE_COLON + MOZ,
    'slotted': DOUBLE_COLON + FUNC,
    'spelling-error': DOUBLE_COLON,
    'target-text': DOUBLE_COLON,
    # classes
    'active': COLON,
    'any-link': COLON + MOZ + WEBKIT,
    'autofill': COLON + WEBKIT,
    'blank': COLON,
    'checked': COLON,
    'current': COLON + FUNC_TOO,
    'default': COLON,
    'defined': COLON,
    'dir': COLON + FUNC,
    'disabled': COLON,
    'drop': COLON,
    'empty': COLON,
    'enabled': COLON,
    'first': COLON,
    'first-child': COLON,
    'first-of-type': COLON,
    'focus': COLON,
    'focus-visible': COLON,
    'focus-within': COLON,
    'fullscreen': COLON,
    'future': COLON,
    'has': COLON + FUNC,
    'host': COLON + FUNC_TOO,
    'host-context': COLON + FUNC,
    'hover': COLON,
    'in-range': COLON,
    'indeterminate': COLON,
    'invalid': COLON,
    'is': COLON + FUNC,
    'lang': COLON + FUNC,
    'last-child': COLON,
    'last-of-type': COLON,
    'left': COLON,
    'link': COLON,
    'local-link': COLON,
    'not': COLON + FUNC,
    'nth-child': COLON + FUNC,
    'nth-col': COLON + FUNC,
    'nth-last-child': COLON + FUNC,
    'nth-last-col': COLON + FUNC,
    'nth-last-of-type': COLON + FUNC,
    'nth-of-type': COLON + FUNC,
    'only-child': COLON,
    'only-of-type': COLON,
    'optional': COLON,
    'out-of-range': COLON,
    'past': COLON,
    'paused': COLON,
    'picture-in-picture': COLON,
    'placeholder-shown': COLON,
    'playing': COLON,
    'read-only': COLON,
    'read-write': COLON,
    'required': COLON,
    'right': COLON,
    'root': COLON,
    'scope': COLON,
    'state': COLON + FUNC,
    'target': COLON,
    'target-within': COLON,
    'user-invalid': COLON,
    'valid': COLON,
    'visited': COLON,
    'where': COLON + FUNC,
    'xr-overlay': COLON,
    # ::-webkit-scrollbar states
    'corner-present': COLON,
    'decrement': COLON,
    'double-button': COLON,
    'end': COLON,
    'horizontal': COLON,
    'increment': COLON,
    'no-button': COLON,
    'single-button': COLON,
    'start': COLON,
    'vertical': COLON,
    'window-inactive': COLON + MOZ,
}

# Pseudos that only exist with a vendor prefix
PREFIXED_PSEUDOS = {
    'any': COLON + FUNC + MOZ + WEBKIT,
    'calendar-picker-indicator': DOUBLE_COLON + WEBKIT,
    'clear-button': DOUBLE_COLON + WEBKIT,
    'color-swatch': DOUBLE_COLON + WEBKIT,
    'color-swatch-wrapper': DOUBLE_COLON + WEBKIT,
    'date-and-time-value': DOUBLE_COLON + WEBKIT,
    'datetime-edit': DOUBLE_COLON + WEBKIT,
    'datetime-edit-ampm-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-day-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-fields-wrapper': DOUBLE_COLON + WEBKIT,
    'datetime-edit-hour-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-millisecond-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-minute-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-month-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-second-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-text': DOUBLE_COLON + WEBKIT,
    'datetime-edit-week-field': DOUBLE_COLON + WEBKIT,
    'datetime-edit-year-field': DOUBLE_COLON + WEBKIT,
    'details-marker': DOUBLE_COLON + WEBKIT + DEPRECATED,
    'drag': COLON + WEBKIT,
    'drag-over': COLON + MOZ,
    'file-upload-button': DOUBLE_COLON + WEBKIT,
    'focus-inner': DOUBLE_COLON + MOZ,
    'focusring': COLON + MOZ,
    'full-page-media': COLON + WEBKIT,
    'full-screen': COLON + MOZ + WEBKIT,
    'full-screen-ancestor': COLON + MOZ + WEBKIT,
    'inner-spin-button': DOUBLE_COLON + WEBKIT,
    'input-placeholder': COLON + DOUBLE_COLON + WEBKIT + MOZ,
    'loading': COLON + MOZ,
    'media-controls': DOUBLE_COLON + WEBKIT,
    'media-controls-current-time-display': DOUBLE_COLON + WEBKIT,
    'media-controls-enclosure': DOUBLE_COLON + WEBKIT,
    'media-controls-fullscreen-button': DOUBLE_COLON + WEBKIT,
    'media-controls-mute-button': DOUBLE_COLON + WEBKIT,
    'media-controls-overlay-enclosure': DOUBLE_COLON + WEBKIT,
    'media-controls-overlay-play-button': DOUBLE_COLON + WEBKIT,
    'media-controls-panel': DOUBLE_COLON + WEBKIT,
    'media-controls-play-button': DOUBLE_COLON + WEBKIT,
    'media-controls-time-remaining-display': DOUBLE_COLON + WEBKIT,
    'media-controls-timeline': DOUBLE_COLON + WEBKIT,
    'media-controls-timeline-container': DOUBLE_COLON + WEBKIT,
    'media-controls-toggle-closed-captions-button': DOUBLE_COLON + WEBKIT,
    'media-controls-volume-slider': DOUBLE_COLON + WEBKIT,
    'media-slider-container': DOUBLE_COLON + WEBKIT,
    'media-slider-thumb': DOUBLE_COLON + WEBKIT,
    'media-text-track-container': DOUBLE_COLON + WEBKIT,
    'media-text-track-display': DOUBLE_COLON + WEBKIT,
    'media-text-track-region': DOUBLE_COLON + WEBKIT,
    'media-text-track-region-container': DOUBLE_COLON + WEBKIT,
    'meter-bar': DOUBLE_COLON + WEBKIT,
    'meter-even-less-good-value': DOUBLE_COLON + WEBKIT,
    'meter-inner-element': DOUBLE_COLON + WEBKIT,
    'meter-optimum-value': DOUBLE_COLON + WEBKIT,
    'meter-suboptimum-value': DOUBLE_COLON + WEBKIT,
    'outer-spin-button': DOUBLE_COLON + WEBKIT,
    'progress-bar': DOUBLE_COLON + WEBKIT,
    'progress-inner-element': DOUBLE_COLON + WEBKIT,
    'progress-value': DOUBLE_COLON + WEBKIT,
    'resizer': DOUBLE_COLON + WEBKIT,
    'scrollbar': DOUBLE_COLON + WEBKIT,
    'scrollbar-button': DOUBLE_COLON + WEBKIT,
    'scrollbar-corner': DOUBLE_COLON + WEBKIT,
    'scrollbar-thumb': DOUBLE_COLON + WEBKIT,
    'scrollbar-track': DOUBLE_COLON + WEBKIT,
    'scrollbar-track-piece': DOUBLE_COLON + WEBKIT,
    'search-cancel-button': DOUBLE_COLON + WEBKIT,
    'search-decoration': DOUBLE_COLON + WEBKIT,
    'slider-container': DOUBLE_COLON + WEBKIT,
    'slider-runnable-track': DOUBLE_COLON + WEBKIT,
    'slider-thumb': DOUBLE_COLON + WEBKIT,
    'textfield-decoration-container': DOUBLE_COLON + WEBKIT,
}

PSEUDO_PATTERN = re.compile(r'^(:+)(?:-(\w+)-)?([^(]+)(\()?', re.I)


def pseudo_problems(text: str):
    """Return the problems found in a pseudo selector such as ``::-moz-selection``.

    Each problem is a message prefix followed by the offending text.
    """
    match = PSEUDO_PATTERN.match(text.lower())
    if not match:
        return []
    whole = match.group(0)
    colons, prefix, name, paren = match.groups('')
    prefixed = PREFIXED_PSEUDOS.get(name)
    flags = PSEUDOS.get(name) or prefixed
    shown = text[:len(whole)]
    if not flags:
        return [f'Unknown pseudo {shown}']

    problems = []
    if len(colons) > 1:
        if not flags & DOUBLE_COLON:
            problems.append('Must use : in')
    elif not flags & COLON and whole != ':-moz-placeholder':
        problems.append('Must use :: in')

    if paren:
        if not flags & (FUNC | FUNC_TOO):
            problems.append('Unexpected ( in')
    elif flags & FUNC:
        problems.append('Must use ( after')

    if prefix:
        if (not flags & (WEBKIT | MOZ)
                or (prefix == 'webkit' and not flags & WEBKIT)
                or (prefix == 'moz' and not flags & MOZ)):
            problems.append('Unexpected prefix in')
    elif prefixed:
        if flags & WEBKIT and flags & MOZ:
            needed = '-webkit- or -moz-'
        elif flags & WEBKIT:
            needed = '-webkit-'
        else:
            needed = '-moz-'
        problems.append(f'Must use {needed} prefix in')

    if flags & DEPRECATED:
        problems.append('Deprecated')
    return [f'{problem} {shown}' for problem in problems]


@register_rule(
    'known-pseudos',
    name='Require use of known pseudo selectors',
    url='https://developer.mozilla.org/docs/Learn/CSS/Building_blocks/Selectors/'
        'Pseudo-classes_and_pseudo-elements',
)
def known_pseudos(rule, parser, reporter):
    def check_selector(selector):
        for part in selector.parts:
            for modifier in part.modifiers:
                if modifier.type == 'pseudo':
                    for problem in pseudo_problems(modifier.text):
                        reporter.report(problem, modifier, rule)
                elif modifier.args:
                    for arg in modifier.args:
                        check_selector(arg)

    def start_rule(event):
        for selector in event.selectors:
            check_selector(selector)

    def supports_selector(event):
        check_selector(event.selector)

    parser.add_listener('startrule', start_rule)
    parser.add_listener('supportsSelector', supports_selector)


@register_rule(
    'overqualified-elements',
    name='Disallow overqualified elements',
    desc="Don't use classes or IDs with elements (a.foo or a#foo).",
    url=WIKI + 'Disallow-overqualified-elements',
)
def overqualified_elements(rule, parser, reporter):
    classes = {}

    def report(part, modifier):
        reporter.report(
            f'"{part}" is overqualified, just use "{modifier}" without element name.',
            part, rule)

    def start_rule(event):
        for selector in event.selectors:
            for part in selector.parts:
                for modifier in part.modifiers:
                    if part.element_name and modifier.type == 'id':
                        report(part, modifier)
                    elif modifier.type == 'class':
                        classes.setdefault(modifier.text, []).append((part, modifier))

    # a class used once, and with an element, is overqualified
    def end_stylesheet(event):
        for uses in classes.values():
            part, modifier = uses[0]
            if part.element_name and len(uses) == 1:
                report(part, modifier)

    parser.add_listener('startrule', start_rule)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'qualified-headings',
    name='Disallow qualified headings',
    desc='Headings should not be qualified (namespaced).',
    url=WIKI + 'Disallow-qualified-headings',
)
def qualified_headings(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            for i, part in enumerate(selector.parts):
                name = part.element_name
                if i and name and HEADING.match(name):
                    reporter.report(f'Heading "{name}" should not be qualified.', part, rule)

    parser.add_listener('startrule', start_rule)


@register_rule(
    'regex-selectors',
    name='Disallow selectors that look like regexs',
    desc='Selectors that look like regular expressions are slow and should be avoided.',
    url=WIKI + 'Disallow-selectors-that-look-like-regular-expressions',
)
def regex_selectors(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            for part in selector.parts:
                for modifier in part.modifiers:
                    operator = modifier.operator if modifier.type == 'attribute' else None
                    if operator and len(operator.text) == 2:
                        reporter.report(f'Slow attribute selector {operator}.', operator, rule)

    parser.add_listener('startrule', start_rule)


@register_rule(
    'selector-newline',
    name='Disallow new-line characters in selectors',
    desc='New line in selectors is likely a forgotten comma and not a descendant combinator.',
)
def selector_newline(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            parts = selector.parts
            for current, following in zip(parts, parts[1:]):
                if current.type == 'descendant' and following.line > current.line:
                    reporter.report('Line break in selector (forgot a comma?)', following, rule)

    parser.add_listener('startrule', start_rule)


@register_rule(
    'simple-not',
    name='Require use of simple selectors inside :not()',
    desc='A complex selector inside :not() is only supported by CSS4-compliant browsers.',
)
def simple_not(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            for part in selector.parts:
                for modifier in part.modifiers:
                    if modifier.name != 'not' or not modifier.args:
                        continue
                    first = modifier.args[0]
                    compound = first.parts[0]
                    size = len(compound.modifiers) + (1 if compound.element_name else 0)
                    if len(modifier.args) > 1 or len(first.parts) > 1 or size > 1:
                        reporter.report('Complex selector inside :not().', first, rule)

    parser.add_listener('startrule', start_rule)


@register_rule(
    'unique-headings',
    name='Headings should only be defined once',
    desc='Headings should be defined only once.',
    url=WIKI + 'Headings-should-only-be-defined-once',
)
def unique_headings(rule, parser, reporter):
    headings = [0] * 6

    def start_rule(event):
        for selector in event.selectors:
            part = selector.parts[-1]
            match = HEADING.match(part.element_name or '')
            if not match or any(modifier.type == 'pseudo' for modifier in part.modifiers):
                continue
            level = int(match.group(1)) - 1
            headings[level] += 1
            if headings[level] > 1:
                reporter.report(f'Heading {part.element_name} has already been defined.',
                                part, rule)

    def end_stylesheet(event):
        stats = [f'{count} H{level}s' for level, count in enumerate(headings, 1) if count > 1]
        if stats:
            reporter.rollup_warn(', '.join(stats), rule)

    parser.add_listener('startrule', start_rule)
    parser.add_listener('endstylesheet', end_stylesheet)


@register_rule(
    'universal-selector',
    name='Disallow universal selector',
    desc='The universal selector (*) is known to be slow.',
    url=WIKI + 'Disallow-universal-selector',
)
def universal_selector(rule, parser, reporter):
    def start_rule(event):
        for selector in event.selectors:
            part = selector.parts[-1]
            if part.element_name == '*':
                reporter.report(rule.desc, part, rule)

    parser.add_listener('startrule', start_rule)


@register_rule(
    'unqualified-attributes',
    name='Disallow unqualified attribute selectors',
    desc='Unqualified attribute selectors are known to be slow.',
    url=WIKI + 'Disallow-unqualified-attribute-selectors',
)
def unqualified_attributes(rule, parser, reporter):
    def check(part):
        if (part.element_name or '*') != '*':
            return
        attribute = None
        for modifier in part.modifiers:
            if modifier.type in ('class', 'id'):
                return
            if modifier.type == 'attribute':
                attribute = modifier
        if attribute:
            reporter.report(rule.desc, attribute, rule)

    def start_rule(event):
        for selector in event.selectors:
            check(selector.parts[-1])

    parser.add_listener('startrule', start_rule)


__all__ = [
    'ids', 'known_pseudos', 'overqualified_elements', 'qualified_headings', 'regex_selectors',
    'selector_newline', 'simple_not', 'unique_headings', 'universal_selector',
    'unqualified_attributes', 'pseudo_problems',
]
