"""Tests for the message reporter."""

import pytest

from css_linter.core.reporter import ERROR, INFO, WARNING, LintReport, Message, Reporter
from css_linter.rules import Rule


def make_rule(rule_id):
    return Rule(rule_id, lambda rule, parser, reporter: None)


class TestReporter:
    """Tests for Reporter."""

    @pytest.fixture
    def rule(self):
        return make_rule('sample')

    def test_level_two_is_error(self, rule):
        reporter = Reporter(['a {}'], {'sample': 2})
        reporter.report('Problem.', {'line': 1, 'col': 3}, rule)
        message = reporter.messages[0]
        assert message.type == ERROR
        assert (message.line, message.col) == (1, 3)
        assert message.evidence == 'a {}'
        assert message.rule_id == 'sample'

    def test_level_one_is_warning(self, rule):
        reporter = Reporter(['a {}'], {'sample': 1})
        reporter.report('Problem.', {'line': 1, 'col': 1}, rule)
        assert reporter.messages[0].type == WARNING

    def test_allow_exempts_only_its_line(self, rule):
        reporter = Reporter(['a {}', 'b {}'], {'sample': 1}, allow={1: {'sample'}})
        reporter.report('Problem.', {'line': 1, 'col': 1}, rule)
        reporter.report('Problem.', {'line': 2, 'col': 1}, rule)
        assert [m.line for m in reporter.messages] == [2]

    def test_allow_is_per_rule(self, rule):
        reporter = Reporter(['a {}'], {'sample': 1}, allow={1: {'other'}})
        reporter.report('Problem.', {'line': 1, 'col': 1}, rule)
        assert len(reporter.messages) == 1

    def test_ignore_range_is_inclusive(self, rule):
        reporter = Reporter(['x'] * 5, {'sample': 1}, ignore=[(2, 4)])
        for line in range(1, 6):
            reporter.report('Problem.', {'line': line, 'col': 1}, rule)
        assert [m.line for m in reporter.messages] == [1, 5]

    def test_error_bypasses_suppression(self, rule):
        reporter = Reporter(['a {}'], {'sample': 1}, allow={1: {'sample'}}, ignore=[(1, 1)])
        reporter.error('Broken.', {'line': 1, 'col': 1}, rule)
        assert reporter.messages[0].type == ERROR

    def test_position_defaults(self, rule):
        reporter = Reporter(['a {}'], {'sample': 1})
        reporter.error('Broken.')
        message = reporter.messages[0]
        assert (message.line, message.col) == (1, 1)
        assert message.rule is None

    def test_evidence_out_of_range(self, rule):
        reporter = Reporter(['a {}'], {'sample': 1})
        reporter.info('Note.', {'line': 7, 'col': 1}, rule)
        message = reporter.messages[0]
        assert message.type == INFO
        assert message.evidence is None

    def test_position_from_object(self, rule):
        class Unit:
            line = 3
            col = 4

        reporter = Reporter(['', '', 'abcd'], {'sample': 1})
        reporter.report('Problem.', Unit(), rule)
        assert (reporter.messages[0].line, reporter.messages[0].col) == (3, 4)

    def test_rollups_have_no_position(self, rule):
        reporter = Reporter([], {'sample': 1})
        reporter.rollup_warn('Too many.', rule)
        reporter.rollup_error('Far too many.', rule)
        assert [m.type for m in reporter.messages] == [WARNING, ERROR]
        assert all(m.rollup and m.line is None and m.evidence is None for m in reporter.messages)

    def test_stats(self):
        reporter = Reporter([], {})
        reporter.stat('floats', 3)
        reporter.stat('floats', 4)
        assert reporter.stats == {'floats': 4}


class TestLintReport:
    """Tests for LintReport."""

    def test_errors_and_warnings(self):
        report = LintReport([
            Message(ERROR, 'a', 1, 1),
            Message(WARNING, 'b', 2, 1),
            Message(INFO, 'c', 3, 1),
        ])
        assert [m.message for m in report.errors] == ['a']
        assert [m.message for m in report.warnings] == ['b']

    def test_to_dict(self):
        rule = make_rule('ids')
        report = LintReport([Message(WARNING, 'Id in selector.', 1, 1, '#a {}', rule)],
                            {'floats': 0})
        data = report.to_dict()
        assert data['stats'] == {'floats': 0}
        assert data['messages'][0] == {
            'type': 'warning',
            'line': 1,
            'col': 1,
            'message': 'Id in selector.',
            'evidence': '#a {}',
            'rule': 'ids',
            'rollup': False,
        }
