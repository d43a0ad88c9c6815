"""Tests for the rule catalog."""

import pytest

from css_linter.core.reporter import ERROR, WARNING
from css_linter.parser.values import make_property_name
from css_linter.rules import (
    RULES, get_prop_name, get_rule_list, get_ruleset, register_rule, shorthands, shorthands_for,
)
from css_linter.rules.selectors import pseudo_problems
from css_linter.rules.util import expand_shorthand
from css_linter.utils.error import RuleRegistrationError


@pytest.fixture
def check(lint):
    """Run one rule as a warning and return its message texts."""
    def run(rule_id, text):
        return [m.message for m in lint(text, {rule_id: 1}, rule_id=rule_id)]

    return run


class TestRegistry:
    """Tests for rule registration."""

    def test_catalog(self):
        assert set(RULES) == {
            'box-model', 'display-property-grouping', 'floats', 'outline-none', 'text-indent',
            'duplicate-background-images', 'duplicate-properties', 'empty-rules', 'font-faces',
            'font-sizes', 'important', 'known-properties', 'order-alphabetical', 'shorthand',
            'shorthand-overrides', 'zero-units',
            'compatible-vendor-prefixes', 'gradients', 'star-property-hack',
            'underscore-property-hack', 'vendor-prefix', 'globals-in-document', 'import',
            'ids', 'known-pseudos', 'overqualified-elements', 'qualified-headings',
            'regex-selectors', 'selector-newline', 'simple-not', 'unique-headings',
            'universal-selector', 'unqualified-attributes',
            'errors', 'warnings',
        }

    def test_rule_list_sorted(self):
        ids = [rule.id for rule in get_rule_list()]
        assert ids == sorted(ids)

    def test_default_ruleset(self):
        ruleset = get_ruleset()
        assert set(ruleset) == set(RULES)
        assert set(ruleset.values()) == {1}

    def test_duplicate_registration(self):
        registry = {}

        @register_rule('sample', registry=registry)
        def first(rule, parser, reporter):
            pass

        with pytest.raises(RuleRegistrationError):
            @register_rule('sample', registry=registry)
            def second(rule, parser, reporter):
                pass

    def test_metadata(self):
        rule = RULES['ids']
        assert rule.name == 'Disallow IDs in selectors'
        assert rule.url.endswith('Disallow-IDs-in-selectors')
        assert rule.browsers == 'All'


class TestUtil:
    """Tests for rule helpers."""

    def test_expand_shorthand(self):
        assert expand_shorthand('margin', '%-1', 'top|bottom') == ['margin-top', 'margin-bottom']
        assert expand_shorthand('border-radius', 'border-1-2-radius', 'top|bottom', 'left|right') == [
            'border-top-left-radius', 'border-bottom-left-radius',
            'border-top-right-radius', 'border-bottom-right-radius',
        ]

    def test_shorthand_tables(self):
        assert shorthands()['padding'] == ['padding-top', 'padding-bottom', 'padding-left', 'padding-right']
        assert shorthands_for()['flex-grow'] == 'flex'
        assert shorthands_for()['border-top-color'] == 'border-color'

    def test_get_prop_name(self):
        assert get_prop_name(make_property_name('-WebKit-Transform', 1, 1)) == 'transform'
        assert get_prop_name(make_property_name('Color', 1, 1)) == 'color'


class TestLayoutRules:
    """box-model, display-property-grouping, outline-none, text-indent."""

    def test_box_model(self, check):
        assert check('box-model', '.a { width: 100px; padding: 10px; }') == [
            'No box-sizing and width in padding']
        assert check('box-model', '.a { height: 10px; border-top: 1px solid; }') == [
            'No box-sizing and height in border-top']

    def test_box_model_exemptions(self, check):
        assert check('box-model', '.a { width: 100px; padding: 10px; box-sizing: border-box; }') == []
        assert check('box-model', '.a { height: 10px; padding: 0 10px; }') == []
        assert check('box-model', '.a { width: 10px; border: none; padding: 0; }') == []
        assert check('box-model', '.a { width: auto; padding: 10px; }') == []

    def test_display_property_grouping(self, check):
        assert check('display-property-grouping', '.a { display: inline; width: 100px; }') == [
            '"width" can\'t be used with display: inline.']
        assert check('display-property-grouping', '.a { display: inline-block; float: left; }') == [
            '"float" can\'t be used with display: inline-block.']
        assert check('display-property-grouping', '.a { display: block; width: 100px; }') == []

    def test_outline_none(self, lint):
        messages = lint('a { outline: none; }', {'outline-none': 1}, rule_id='outline-none')
        assert [m.message for m in messages] == ['Outlines should only be modified using :focus.']
        assert (messages[0].line, messages[0].col) == (1, 1)

    def test_outline_none_with_focus(self, check):
        assert check('outline-none', 'a:focus { outline: 0; }') == [
            "Outlines shouldn't be hidden unless other visual changes are made."]
        assert check('outline-none', 'a:focus { outline: 0; border: 1px solid red; }') == []

    def test_text_indent(self, check):
        message = check('text-indent', '.a { text-indent: -100px; }')
        assert len(message) == 1
        assert message[0].startswith('Negative "text-indent"')
        assert check('text-indent', '.a { text-indent: -100px; direction: ltr; }') == []
        assert check('text-indent', '.a { text-indent: -99px; }') == []


class TestPropertyRules:
    """Rules looking at declarations."""

    def test_duplicate_background_images(self, check):
        messages = check('duplicate-background-images',
                         '.a { background: url(x.png); }\n.b { background-image: url(x.png); }')
        assert len(messages) == 1
        assert messages[0].startswith('Background image "x.png" was used multiple times')
        assert check('duplicate-background-images',
                     '.a { background: url(x.png); }\n.b { background: url(y.png); }') == []

    def test_duplicate_properties(self, check):
        assert check('duplicate-properties', 'a { color: red; color: red; }') == ['Duplicate "color".']
        assert check('duplicate-properties', 'a { color: red; color: blue; }') == []
        assert check('duplicate-properties', 'a { color: red; background: x; color: blue; }') == [
            'Ungrouped duplicate "color".']

    def test_duplicate_properties_per_block(self, check):
        assert check('duplicate-properties', 'a { color: red; } b { color: red; }') == []

    def test_empty_rules(self, check):
        assert check('empty-rules', 'a {}\nb { }\nc { color: red; }') == ['Empty rule.', 'Empty rule.']

    def test_font_faces(self, check):
        face = '@font-face { font-family: f; src: url(f.woff); }\n'
        assert check('font-faces', face * 5) == []
        assert check('font-faces', face * 6) == ['Too many @font-face declarations (6).']

    def test_font_sizes(self, linter):
        text = '\n'.join(f'.s{i} {{ font-size: {i + 10}px; }}' for i in range(10))
        report = linter.verify(text, {'font-sizes': 1})
        assert [m.message for m in report.messages] == [
            'Too many font-size declarations (10), abstraction needed.']
        assert report.stats['font-sizes'] == 10

    def test_important(self, check):
        assert check('important', 'a { color: red !important; }') == ['!important.']

    def test_important_rollup(self, lint):
        text = '\n'.join(f'.a{i} {{ color: red !important; }}' for i in range(10))
        messages = lint(text, {'important': 1})
        assert len(messages) == 11
        assert messages[-1].message.startswith('Too many !important declarations (10)')

    def test_known_properties(self, check):
        assert check('known-properties', 'a { colour: red; }') == ['Unknown property "colour".']
        assert check('known-properties', 'a { -webkit-foo: 1; --custom: 2; color: red; }') == []

    def test_known_properties_values(self, check):
        assert check('known-properties', 'a { float: middle; }') == [
            'Expected left | right | none | inline-start | inline-end but found "middle".']
        assert check('known-properties', 'a { opacity: 0.5; z-index: 10; }') == []
        assert check('known-properties', 'a { position: -webkit-sticky; position: sticky; }') == []

    def test_order_alphabetical(self, check):
        assert check('order-alphabetical', 'a { color: red; background: blue; }') == [
            'Non-alphabetical order: "background".']
        assert check('order-alphabetical',
                     'a { -webkit-box-shadow: none; box-shadow: none; color: red; }') == []

    def test_shorthand(self, check):
        text = 'a { margin-top: 0; margin-right: 0; margin-bottom: 0; margin-left: 0; }'
        messages = check('shorthand', text)
        assert messages == [
            '"margin" shorthand can replace "margin-top" + "margin-right" + '
            '"margin-bottom" + "margin-left"'] * 4
        assert check('shorthand', 'a { margin-top: 0; margin-right: 0; margin-bottom: 0; }') == []

    def test_shorthand_overrides(self, check):
        assert check('shorthand-overrides',
                     'a { background-image: url(x.png); background: red; }') == [
            '"background" overrides "background-image" above.']
        assert check('shorthand-overrides',
                     'a { background: red; background-image: url(x.png); }') == []

    def test_zero_units(self, lint):
        messages = lint('a { margin: 0px; transition-delay: 0s; width: 0%; top: 1px; }',
                        {'zero-units': 1}, rule_id='zero-units')
        assert [(m.message, m.col) for m in messages] == [('"0" value with redundant units.', 13)]


class TestCompatibilityRules:
    """Vendor prefixes, hacks and global at-rules."""

    def test_compatible_vendor_prefixes(self, check):
        assert check('compatible-vendor-prefixes', '.a { -webkit-column-count: 2; }') == [
            '"-moz-column-count" is compatible with -webkit-column-count and should be included as well.',
            '"-ms-column-count" is compatible with -webkit-column-count and should be included as well.',
        ]
        text = '.a { -webkit-column-count: 2; -moz-column-count: 2; -ms-column-count: 2; }'
        assert check('compatible-vendor-prefixes', text) == []

    def test_compatible_vendor_prefixes_in_keyframes(self, check):
        text = '@-webkit-keyframes x { from { -webkit-transform: none; } }'
        assert check('compatible-vendor-prefixes', text) == []

    def test_gradients(self, check):
        assert check('gradients', '.a { background: -webkit-linear-gradient(red, blue); }') == [
            'Missing -moz- prefix for gradient.']
        text = ('.a { background: -webkit-linear-gradient(red, blue); '
                'background: -moz-linear-gradient(red, blue); }')
        assert check('gradients', text) == []
        assert check('gradients', '.a { background: linear-gradient(red, blue); }') == []

    def test_star_property_hack(self, check):
        assert check('star-property-hack', 'a { *color: red; }') == ['IE star prefix.']

    def test_underscore_property_hack(self, check):
        assert check('underscore-property-hack', 'a { _color: red; }') == ['IE underscore prefix.']

    def test_vendor_prefix(self, check):
        assert check('vendor-prefix', '.a { -moz-border-radius: 5px; }') == [
            'Missing standard property "border-radius" to go along with "-moz-border-radius".']
        assert check('vendor-prefix', '.a { border-radius: 5px; -webkit-border-radius: 5px; }') == [
            'Standard property "border-radius" should come after vendor-prefixed property '
            '"-webkit-border-radius".']
        assert check('vendor-prefix', '.a { -webkit-border-radius: 5px; border-radius: 5px; }') == []

    def test_globals_in_document(self, check):
        text = ('@-moz-document url-prefix() { a { color: red; } }\n'
                '@-moz-document url-prefix() { @import "x.css"; }')
        assert check('globals-in-document', text) == [
            'A nested @import is valid only if this @-moz-document section '
            'is the first one matched for any given URL.']
        assert check('globals-in-document', '@-moz-document url-prefix() { @import "x.css"; }') == []

    def test_import(self, check):
        assert check('import', '@import "a.css";') == [
            '@import prevents parallel downloads, use <link> instead.']


class TestParsingRules:
    """errors and warnings."""

    def test_warnings(self, lint):
        messages = lint('@foo bar;', {'warnings': 1}, rule_id='warnings')
        assert [(m.type, m.message) for m in messages] == [(WARNING, 'Unknown @ rule: @foo.')]
        messages = lint('@foo bar;', {'warnings': 2}, rule_id='warnings')
        assert [m.type for m in messages] == [ERROR]

    def test_errors(self, lint, broken_css):
        messages = lint(broken_css, {'errors': 2, 'warnings': 1})
        assert [(m.type, m.rule_id, m.line) for m in messages] == [
            (ERROR, 'errors', 1), (WARNING, 'warnings', 3)]


class TestSelectorRules:
    """Rules looking at selectors."""

    def test_ids(self, check):
        assert check('ids', '#a { color: red; }') == ['Id in selector.']
        assert check('ids', '#a #b { color: red; }') == ['Id in selector!!']
        assert check('ids', '.a { color: red; }') == []

    def test_known_pseudos(self, check):
        assert check('known-pseudos', 'a:hovr { color: red; }') == ['Unknown pseudo :hovr']
        assert check('known-pseudos', 'a::hover { color: red; }') == ['Must use : in ::hover']
        assert check('known-pseudos', 'a:not(:hovr) { color: red; }') == ['Unknown pseudo :hovr']
        assert check('known-pseudos', '@supports selector(a:hovr) { }') == ['Unknown pseudo :hovr']
        assert check('known-pseudos',
                     'a:hover, p::before, li:nth-child(2n+1), ::-webkit-scrollbar { color: red; }') == []

    @pytest.mark.parametrize('text, problems', [
        (':hover', []),
        (':before', []),
        ('::selection', []),
        (':not', ['Must use ( after :not']),
        (':hover(', ['Unexpected ( in :hover(']),
        ('::scrollbar', ['Must use -webkit- prefix in ::scrollbar']),
        ('::-moz-scrollbar', ['Unexpected prefix in ::-moz-scrollbar']),
        ('::-webkit-details-marker', ['Deprecated ::-webkit-details-marker']),
        (':first-line', []),
        (':selection', ['Must use :: in :selection']),
        (':Hovr', ['Unknown pseudo :Hovr']),
    ])
    def test_pseudo_problems(self, text, problems):
        assert pseudo_problems(text) == problems

    def test_overqualified_elements(self, check):
        assert check('overqualified-elements', 'div.foo { color: red; }') == [
            '"div.foo" is overqualified, just use ".foo" without element name.']
        assert check('overqualified-elements', 'li.active { color: red; } a.active { color: red; }') == []
        assert check('overqualified-elements', 'div#x { color: red; }') == [
            '"div#x" is overqualified, just use "#x" without element name.']

    def test_qualified_headings(self, check):
        assert check('qualified-headings', '.foo h1 { color: red; }') == [
            'Heading "h1" should not be qualified.']
        assert check('qualified-headings', 'h1 { color: red; }') == []

    def test_regex_selectors(self, check):
        assert check('regex-selectors', '[class*=foo] { color: red; }') == ['Slow attribute selector *=.']
        assert check('regex-selectors', '[class=foo] { color: red; }') == []

    def test_selector_newline(self, check):
        assert check('selector-newline', '.a\n.b { color: red; }') == [
            'Line break in selector (forgot a comma?)']
        assert check('selector-newline', '.a,\n.b { color: red; }') == []
        assert check('selector-newline', '.a .b { color: red; }') == []

    def test_simple_not(self, check):
        assert check('simple-not', 'a:not(.b .c) { color: red; }') == ['Complex selector inside :not().']
        assert check('simple-not', 'a:not(.b) { color: red; }') == []

    def test_unique_headings(self, lint):
        messages = lint('h1 { color: red; }\nh1 { color: blue; }\nh1:hover { color: green; }',
                        {'unique-headings': 1})
        assert [(m.message, m.rollup) for m in messages] == [
            ('Heading h1 has already been defined.', False),
            ('2 H1s', True),
        ]

    def test_universal_selector(self, check):
        assert check('universal-selector', '.a * { color: red; }') == [
            'The universal selector (*) is known to be slow.']
        assert check('universal-selector', '* .a { color: red; }') == []

    def test_unqualified_attributes(self, check):
        assert check('unqualified-attributes', '[type=text] { color: red; }') == [
            'Unqualified attribute selectors are known to be slow.']
        assert check('unqualified-attributes', 'input[type=text] { color: red; }') == []
        assert check('unqualified-attributes', '.a[type=text] { color: red; }') == []
