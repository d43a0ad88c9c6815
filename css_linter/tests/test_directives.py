"""Tests for inline csslint directives."""

from css_linter.core.directives import apply_embedded_overrides, find_directive_start


def apply(text, ruleset=None):
    ruleset = dict(ruleset or {})
    allow = {}
    ignore = []
    apply_embedded_overrides(text, ruleset, allow, ignore)
    return ruleset, allow, ignore


class TestFindDirectiveStart:
    """Tests for find_directive_start."""

    def test_no_comment(self):
        assert find_directive_start('csslint a {}') == -1

    def test_word_must_follow_comment_opening(self):
        assert find_directive_start('a { color: red } /* csslint') == 17

    def test_comment_without_directive(self):
        assert find_directive_start('/* plain comment */ a {}') == -1

    def test_points_at_comment_opening(self):
        text = 'a {}\n/* CSSLint ids:2 */'
        assert find_directive_start(text) == text.index('/*')

    def test_word_before_first_comment_is_skipped(self):
        text = '.csslint {}\n/* other */\n/* csslint ids:2 */'
        start = find_directive_start(text)
        assert 0 < start <= text.index('/* csslint')


class TestApplyEmbeddedOverrides:
    """Tests for apply_embedded_overrides."""

    def test_levels(self):
        ruleset, allow, ignore = apply('/* csslint ids:2, empty-rules:false, important */')
        assert ruleset == {'ids': 2, 'empty-rules': 0, 'important': 1}
        assert allow == {}
        assert ignore == []

    def test_level_words(self):
        ruleset, _, _ = apply('/* csslint ids: true, floats: 0, zero-units: 1 */')
        assert ruleset == {'ids': 2, 'floats': 0, 'zero-units': 1}

    def test_unrecognized_level_is_warning(self):
        ruleset, _, _ = apply('/* csslint ids:bogus */', {'ids': 2})
        assert ruleset == {'ids': 1}

    def test_directive_is_case_insensitive(self):
        ruleset, _, _ = apply('/* CSSLINT IDS:2 */')
        assert ruleset == {'ids': 2}

    def test_allow_uses_comment_line(self):
        text = 'a {}\n\n.b {} /* csslint allow: ids, empty-rules */\n'
        _, allow, _ = apply(text)
        assert allow == {3: {'ids', 'empty-rules'}}

    def test_allow_merges_on_same_line(self):
        text = '/* csslint allow: ids */ /* csslint allow: important */'
        _, allow, _ = apply(text)
        assert allow == {1: {'ids', 'important'}}

    def test_ignore_range(self):
        text = 'a {}\n/* csslint ignore:start */\nb {}\n/* csslint ignore:end */\nc {}'
        _, _, ignore = apply(text)
        assert ignore == [(2, 4)]

    def test_nested_start_is_absorbed(self):
        text = ('/* csslint ignore:start */\n/* csslint ignore:start */\n'
                '/* csslint ignore:end */\n/* csslint ignore:end */')
        _, _, ignore = apply(text)
        assert ignore == [(1, 3)]

    def test_open_range_closes_at_last_line(self):
        text = 'a {}\n/* csslint ignore:start */\nb {}\nc {}\n'
        _, _, ignore = apply(text)
        assert ignore == [(2, 5)]

    def test_multiline_directive_body(self):
        text = '/* csslint\n   ids:2,\n   important:0 */'
        ruleset, _, _ = apply(text)
        assert ruleset == {'ids': 2, 'important': 0}

    def test_leaves_other_comments_alone(self):
        text = '/* csslint-ish remark */ /* not csslint ids:2 */'
        ruleset, allow, ignore = apply(text)
        assert (ruleset, allow, ignore) == ({}, {}, [])
