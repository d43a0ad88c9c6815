"""Tests for the verification engine."""

import pytest

from css_linter import verify
from css_linter.core import Linter, OverrideSnapshot, unabbreviate
from css_linter.core.reporter import ERROR, INFO, WARNING
from css_linter.rules import RULES, register_rule


def floats_css(count):
    return '\n'.join(f'.f{i} {{ float: left; }}' for i in range(count))


class TestVerify:
    """Tests for Linter.verify."""

    def test_too_many_floats(self, lint):
        messages = lint(floats_css(10), {'floats': 1})
        assert len(messages) == 1
        assert messages[0].rollup
        assert messages[0].type == WARNING
        assert 'Too many floats (10)' in messages[0].message

    def test_nine_floats_are_fine(self, lint):
        assert lint(floats_css(9), {'floats': 1}) == []

    def test_id_reported_as_error(self, lint):
        messages = lint('a#x{color:red}', {'ids': 2})
        assert len(messages) == 1
        message = messages[0]
        assert message.type == ERROR
        assert 'Id in selector' in message.message
        assert (message.line, message.col) == (1, 1)
        assert message.evidence == 'a#x{color:red}'

    def test_ignore_block_suppresses_rule(self, lint):
        text = ('/* csslint ignore:start */\n'
                '.a {}\n'
                '/* csslint ignore:end */\n'
                '.b {}\n')
        messages = lint(text, {'empty-rules': 1})
        assert [(m.rule_id, m.line) for m in messages] == [('empty-rules', 4)]

    def test_allow_comment_exempts_its_line(self, lint):
        text = '.a {} /* csslint allow: empty-rules */\n.b {}'
        messages = lint(text, {'empty-rules': 1})
        assert [m.line for m in messages] == [2]

    def test_directive_changes_level(self, lint):
        messages = lint('/* csslint ids:2 */\n#a { color: red; }', rule_id='ids')
        assert [m.type for m in messages] == [ERROR]

    def test_directive_disables_rule(self, lint):
        assert lint('/* csslint empty-rules:false */\n.a {}', rule_id='empty-rules') == []

    def test_grammar_names_are_expanded(self, lint):
        messages = lint('a { z-index: foo; }', {'known-properties': 1})
        assert len(messages) == 1
        assert '<integer>' in messages[0].message
        assert '<int>' not in messages[0].message

    @pytest.mark.parametrize('level, expected', [
        (2, [ERROR]),
        (1, [WARNING]),
        ('true', [ERROR]),
        ('', [WARNING]),
        (0, []),
        ('false', []),
    ])
    def test_levels(self, lint, level, expected):
        messages = lint('.a {}', {'empty-rules': level})
        assert [m.type for m in messages] == expected

    def test_parse_errors_are_always_errors(self, lint):
        messages = lint('a { color }', {'errors': 0})
        assert [m.type for m in messages] == [ERROR]
        assert messages[0].rule_id == 'errors'

    def test_messages_sorted_with_rollups_last(self, lint):
        text = '\n'.join(f'.a{i} {{ color: red !important; }}' for i in range(10))
        text = '.empty {}\n' + text
        messages = lint(text, {'important': 1, 'empty-rules': 1})
        assert messages[0].rule_id == 'empty-rules'
        assert messages[-1].rollup
        lines = [m.line for m in messages[:-1]]
        assert lines == sorted(lines)

    def test_newlines_are_normalized(self, lint):
        messages = lint('a {}\r\nb {}\rc {}', {'empty-rules': 1})
        assert [m.line for m in messages] == [1, 2, 3]
        assert messages[1].evidence == 'b {}'

    def test_default_ruleset_warns(self, lint):
        messages = lint('#a { color: red; }')
        assert messages
        assert all(m.type == WARNING for m in messages)

    def test_no_problems(self, linter, sample_css):
        report = linter.verify(sample_css, {'errors': 2, 'known-properties': 1})
        assert report.messages == []

    def test_stats(self, linter):
        report = linter.verify('a { float: left; font-size: 1em; }',
                               {'floats': 1, 'font-sizes': 1})
        assert report.stats == {'floats': 1, 'font-sizes': 1}

    def test_shared_verify(self):
        report = verify('.a {}', {'empty-rules': 2})
        assert [m.message for m in report.errors] == ['Empty rule.']


class TestRuleFailures:
    """Rules that raise are contained by the engine."""

    def test_listener_failure_is_fatal_error(self):
        registry = {}

        @register_rule('explode', registry=registry)
        def explode(rule, parser, reporter):
            def start_rule(event):
                raise RuntimeError('boom')

            parser.add_listener('startrule', start_rule)

        report = Linter(rules=registry).verify('a { color: red; }', {'explode': 1})
        assert len(report.messages) == 1
        message = report.messages[0]
        assert message.type == ERROR
        assert message.message.startswith('Fatal error, cannot continue!\n')
        assert 'RuntimeError: boom' in message.message

    def test_init_failure_is_isolated(self):
        registry = {}

        @register_rule('broken', registry=registry)
        def broken(rule, parser, reporter):
            raise ValueError('bad init')

        @register_rule('empty', registry=registry)
        def empty(rule, parser, reporter):
            def end_rule(event):
                if event.empty:
                    reporter.report('Empty.', event, rule)

            parser.add_listener('endrule', end_rule)

        report = Linter(rules=registry).verify('a {}', {'broken': 1, 'empty': 1})
        by_type = {m.type: m for m in report.messages}
        assert set(by_type) == {INFO, WARNING}
        assert 'could not be initialized' in by_type[INFO].message
        assert by_type[WARNING].message == 'Empty.'

    def test_failed_init_detaches_listeners(self):
        registry = {}

        @register_rule('half', registry=registry)
        def half(rule, parser, reporter):
            def end_rule(event):
                reporter.report('Still listening.', event, rule)

            parser.add_listener('endrule', end_rule)
            raise ValueError('bad init')

        report = Linter(rules=registry).verify('a {}', {'half': 1})
        assert [m.type for m in report.messages] == [INFO]

    def test_global_registry_untouched(self):
        assert 'explode' not in RULES
        assert 'broken' not in RULES


class TestSelectorCacheReuse:
    """The selector cache survives runs with identical overrides."""

    def test_same_ruleset_reuses_cache(self, linter):
        linter.verify('a {} b {}')
        assert len(linter.cache) == 2
        hits = linter.cache.get_stats()['hits']
        linter.verify('a {} b {}')
        stats = linter.cache.get_stats()
        assert stats['hits'] == hits + 2
        assert stats['clears'] == 0

    def test_changed_ruleset_clears_cache(self, linter):
        linter.verify('a {} b {}')
        linter.verify('a {} b {}', {'ids': 2})
        assert linter.cache.get_stats()['clears'] == 1

    def test_changed_directives_clear_cache(self, linter):
        linter.verify('a {}')
        linter.verify('a {} /* csslint allow: ids */')
        assert linter.cache.get_stats()['clears'] == 1

    def test_nested_selector_not_reused_at_top_level(self, linter):
        expected = ["Unexpected token '>' in selector."]
        assert [m.message for m in Linter().verify('\n> a{color:red}').messages] == expected
        linter.verify('x{\n> a{color:red}}')
        assert [m.message for m in linter.verify('\n> a{color:red}').messages] == expected

    def test_snapshot_is_order_independent(self):
        first = OverrideSnapshot.build({'a': 1, 'b': 2}, {1: {'x', 'y'}}, [(1, 2)])
        second = OverrideSnapshot.build({'b': 2, 'a': 1}, {1: {'y', 'x'}}, [(1, 2)])
        assert first == second


class TestUnabbreviate:
    """Tests for unabbreviate."""

    def test_expands_types(self):
        assert unabbreviate('Expected <int> or <len>, not <pct>.') == \
            'Expected <integer> or <length>, not <percentage>.'

    def test_expands_relative_color(self):
        assert unabbreviate('Expected <rel-rgb>.') == 'Expected <r-g-b-alpha-none>.'

    def test_leaves_other_text(self):
        assert unabbreviate('plain-int text') == 'plain-int text'
        assert unabbreviate('Expected <integer>.') == 'Expected <integer>.'
