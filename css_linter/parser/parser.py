"""Event-driven CSS parser.

The source is tokenized with tinycss2 into a tree of component values, then
walked depth-first. Every structural element is announced to the listeners
registered on the parser, in document order:

    startstylesheet
      startrule ... property ... endrule
      startmedia ... endmedia
      import / charset / namespace
      error / warning
    endstylesheet

Recoverable problems are reported as ``error`` or ``warning`` events and
parsing resumes with the next statement.
"""

import logging
from functools import lru_cache
from typing import List, Optional

import tinycss2

from ..utils.config import PARSER_OPTIONS
from ..utils.error import CSSSyntaxError
from .cache import SelectorCache
from .emitter import EventTarget
from .events import (
    AtRuleEvent, MessageEvent, ParserEvent, PropertyEvent, RuleEvent,
    SelectorEvent, StatementEvent,
)
from .selectors import parse_selector_group
from .tokens import (
    is_literal, normalize_text, position, significant, split_on_literal, split_vendor,
    strip_whitespace,
)
from .validation import PropertyValidator
from .values import make_property_name, make_property_value

logger = logging.getLogger(__name__)

# Statement contexts
STYLESHEET = 'stylesheet'
GROUP = 'group'
DOCUMENT = 'document'
STYLE = 'style'
DECLARATIONS = 'declarations'
PAGE = 'page'
KEYFRAMES = 'keyframes'

RULE_CONTEXTS = (STYLESHEET, GROUP, DOCUMENT, STYLE)
DECLARATION_CONTEXTS = (STYLE, DECLARATIONS, PAGE)

PAGE_MARGINS = frozenset([
    'top-left-corner', 'top-left', 'top-center', 'top-right', 'top-right-corner',
    'bottom-left-corner', 'bottom-left', 'bottom-center', 'bottom-right',
    'bottom-right-corner', 'left-top', 'left-middle', 'left-bottom',
    'right-top', 'right-middle', 'right-bottom',
])

# Grouping at-rules that have start/end events
EVENT_GROUPS = frozenset(['media', 'supports', 'container'])

# Grouping at-rules walked without events of their own
SILENT_GROUPS = frozenset(['layer', 'scope', 'starting-style'])

# Descriptor blocks that are accepted but not inspected
SKIPPED_AT_RULES = frozenset([
    'counter-style', 'property', 'font-palette-values', 'font-feature-values',
    'color-profile', 'position-try', 'view-transition',
])

GLOBAL_STATEMENTS = ('charset', 'import', 'namespace')

CDO_CDC = ('<!--', '-->')


@lru_cache(maxsize=1)
def default_validator() -> PropertyValidator:
    return PropertyValidator()


class Parser(EventTarget):
    """Parses CSS text and fires events for each construct found.

    Args:
        star_hack: Accept ``*prop`` declarations
        underscore_hack: Treat ``_prop`` as ``prop`` with an underscore hack
        ie_filters: Accept ``progid:`` filter values
        strict: Report warnings as errors
        cache: Selector cache, shared between parser instances if given
        validator: Property validator
    """

    def __init__(self, star_hack: bool = PARSER_OPTIONS['star_hack'],
                 underscore_hack: bool = PARSER_OPTIONS['underscore_hack'],
                 ie_filters: bool = PARSER_OPTIONS['ie_filters'],
                 strict: bool = PARSER_OPTIONS['strict'],
                 cache: Optional[SelectorCache] = None,
                 validator: Optional[PropertyValidator] = None):
        super().__init__()
        self.star_hack = star_hack
        self.underscore_hack = underscore_hack
        self.ie_filters = ie_filters
        self.strict = strict
        self.cache = cache if cache is not None else SelectorCache()
        self.validator = validator or default_validator()
        self._preamble = True
        self._document_depth = 0

    def parse(self, text: str, reuse_cache: bool = True) -> None:
        """Parse text, firing events to registered listeners.

        Args:
            text: CSS source
            reuse_cache: Keep selectors parsed by earlier runs

        Raises:
            Exception: Whatever a listener raises
        """
        if not reuse_cache:
            self.cache.clear()
        self._preamble = True
        self._document_depth = 0

        nodes = tinycss2.parse_component_value_list(text, skip_comments=True)
        self.fire(ParserEvent('startstylesheet', 1, 1))
        self._block(nodes, STYLESHEET)

        lines = text.replace('\r\n', '\n').replace('\r', '\n').replace('\f', '\n').split('\n')
        self.fire(ParserEvent('endstylesheet', len(lines), len(lines[-1]) + 1))

    # Messages

    def _error(self, message: str, line: int, col: int) -> None:
        self.fire(MessageEvent('error', line, col, message=message))

    def _warning(self, message: str, line: int, col: int) -> None:
        if self.strict:
            self._error(message, line, col)
        else:
            self.fire(MessageEvent('warning', line, col, message=message))

    def _unexpected(self, node) -> None:
        line, col = position(node)
        self._error(f"Unexpected token '{node.serialize()}'.", line, col)

    # Statements

    def _block(self, nodes: list, context: str) -> int:
        """Process the statements of a block, returning how many there were."""
        count = 0
        statement: list = []
        for node in nodes:
            if node.type == 'error':
                line, col = position(node)
                self._error(node.message, line, col)
                continue
            if context == STYLESHEET and is_literal(node, *CDO_CDC):
                continue
            if is_literal(node, ';'):
                count += self._statement(statement, None, context)
                statement = []
            elif node.type == '{} block':
                if context in DECLARATION_CONTEXTS and self._is_custom_property(statement):
                    statement.append(node)
                    continue
                count += self._statement(statement, node, context)
                statement = []
            else:
                statement.append(node)
        count += self._statement(statement, None, context)
        return count

    @staticmethod
    def _is_custom_property(statement: list) -> bool:
        nodes = strip_whitespace(statement)
        return bool(nodes) and nodes[0].type == 'ident' and nodes[0].value.startswith('--')

    def _statement(self, prelude: list, block, context: str) -> int:
        prelude = strip_whitespace(prelude)
        if not prelude and block is None:
            return 0

        if prelude and prelude[0].type == 'at-keyword':
            self._at_rule(prelude[0], strip_whitespace(prelude[1:]), block, context)
            return 1

        if context == STYLESHEET:
            self._preamble = False

        if block is not None:
            if context in RULE_CONTEXTS:
                self._style_rule(prelude, block, context)
            elif context == KEYFRAMES:
                self._keyframe_rule(prelude, block)
            else:
                line, col = position(prelude[0] if prelude else block)
                self._error("Unexpected '{'.", line, col)
            return 1

        if context in DECLARATION_CONTEXTS:
            self._declaration(prelude)
        elif context == KEYFRAMES:
            self._unexpected(prelude[0])
        else:
            line, col = position(prelude[0])
            self._error(f"Expected '{{' after '{normalize_text(prelude)}'.", line, col)
        return 1

    def _style_rule(self, prelude: list, block, context: str) -> None:
        line, col = position(prelude[0] if prelude else block)
        relative = context == STYLE
        key = (normalize_text(prelude), line, col, relative)
        try:
            selectors = self.cache.get_or_parse(
                key, lambda: parse_selector_group(prelude, line, col, relative=relative))
        except CSSSyntaxError as e:
            self._error(e.message, e.line, e.col)
            return

        self.fire(RuleEvent('startrule', line, col, selectors=selectors))
        count = self._block(block.content, STYLE)
        self.fire(RuleEvent('endrule', line, col, selectors=selectors, empty=count == 0))

    def _keyframe_rule(self, prelude: list, block) -> None:
        line, col = position(prelude[0] if prelude else block)
        for group in split_on_literal(prelude, ','):
            group = strip_whitespace(group)
            valid = len(group) == 1 and (
                group[0].type == 'percentage'
                or (group[0].type == 'ident' and group[0].lower_value in ('from', 'to')))
            if not valid:
                node = group[0] if group else block
                err_line, err_col = position(node)
                self._error("Expected 'from', 'to' or a percentage.", err_line, err_col)
                return

        text = normalize_text(prelude)
        self.fire(AtRuleEvent('startkeyframerule', line, col, keyword='keyframe', prelude=text))
        count = self._block(block.content, DECLARATIONS)
        self.fire(AtRuleEvent('endkeyframerule', line, col, keyword='keyframe', prelude=text,
                              empty=count == 0))

    # Declarations

    def _declaration(self, nodes: list, in_parens: bool = False) -> None:
        first = nodes[0]
        line, col = position(first)
        hack = None
        i = 0

        if is_literal(first, '*'):
            if not self.star_hack:
                self._error("Illegal star hack in property name.", line, col)
                return
            hack = '*'
            i = 1
        if i >= len(nodes) or nodes[i].type != 'ident':
            self._unexpected(nodes[i] if i < len(nodes) else first)
            return

        name = nodes[i].value
        if hack is None and name.startswith('_') and self.underscore_hack:
            hack = '_'
            name = name[1:]
        i += 1

        while i < len(nodes) and nodes[i].type == 'whitespace':
            i += 1
        if i >= len(nodes) or not is_literal(nodes[i], ':'):
            self._error(f"Expected ':' after property name '{nodes[i - 1].serialize()}'.",
                        line, col)
            return

        value_nodes = strip_whitespace(nodes[i + 1:])
        important = False
        tail = significant(value_nodes)[-2:]
        if (len(tail) == 2 and is_literal(tail[0], '!')
                and tail[1].type == 'ident' and tail[1].lower_value == 'important'):
            important = True
            bang = next(index for index in range(len(value_nodes) - 1, -1, -1)
                        if value_nodes[index] is tail[0])
            value_nodes = strip_whitespace(value_nodes[:bang])

        custom = name.startswith('--')
        if not value_nodes and not custom:
            self._error(f"Expected a value for '{name}'.", line, col)
            return
        if not self.ie_filters and any(
                n.type == 'ident' and n.lower_value == 'progid' for n in value_nodes):
            value_line, value_col = position(value_nodes[0])
            self._error("IE filters are not allowed.", value_line, value_col)
            return

        prop = make_property_name(name, line, col, hack)
        value_line, value_col = position(value_nodes[0]) if value_nodes else (line, col)
        value = make_property_value(value_nodes, value_line, value_col)
        invalid = None
        if not in_parens and not custom:
            invalid = self.validator.validate(prop, value)

        self.fire(PropertyEvent('property', line, col, property=prop, value=value,
                                important=important, in_parens=in_parens, invalid=invalid))

    # At-rules

    def _at_rule(self, keyword, prelude: list, block, context: str) -> None:
        line, col = position(keyword)
        prefix, name = split_vendor(keyword.lower_value)

        if context in (DECLARATIONS, KEYFRAMES) or (context == PAGE and name not in PAGE_MARGINS):
            self._error(f"@{keyword.value} not allowed here.", line, col)
            return

        if name in GLOBAL_STATEMENTS:
            self._global_statement(name, keyword, prelude, block, context)
            return

        if context == STYLESHEET and not (name == 'layer' and block is None):
            self._preamble = False

        if name in EVENT_GROUPS:
            if name == 'supports':
                self._supports_condition(prelude)
            self._group(name, prefix, keyword, prelude, block, context)
        elif name == 'document':
            self._document_depth += 1
            try:
                self._group(name, prefix, keyword, prelude, block, DOCUMENT)
            finally:
                self._document_depth -= 1
        elif name in SILENT_GROUPS:
            if block is not None:
                self._block(block.content, STYLE if context == STYLE else GROUP)
        elif name == 'page':
            self._descriptor_block('page', prefix, keyword, prelude, block, PAGE)
        elif name in PAGE_MARGINS and context == PAGE:
            self._descriptor_block('pagemargin', prefix, keyword, prelude, block, DECLARATIONS)
        elif name == 'font-face':
            self._descriptor_block('fontface', prefix, keyword, prelude, block, DECLARATIONS)
        elif name == 'viewport':
            self._descriptor_block('viewport', prefix, keyword, prelude, block, DECLARATIONS)
        elif name == 'keyframes':
            self._descriptor_block('keyframes', prefix, keyword, prelude, block, KEYFRAMES)
        elif name in SKIPPED_AT_RULES:
            logger.debug(f"Skipping @{keyword.value} at {line}:{col}")
        else:
            self._warning(f"Unknown @ rule: @{keyword.value}.", line, col)

    def _group(self, name, prefix, keyword, prelude, block, context) -> None:
        if block is None:
            line, col = position(keyword)
            self._error(f"Expected '{{' after @{keyword.value}.", line, col)
            return
        inner = context if context in (STYLE, DOCUMENT) else GROUP
        self._descriptor_block(name, prefix, keyword, prelude, block, inner)

    def _descriptor_block(self, event_name, prefix, keyword, prelude, block, inner) -> None:
        line, col = position(keyword)
        if block is None:
            self._error(f"Expected '{{' after @{keyword.value}.", line, col)
            return
        text = normalize_text(prelude)
        base = split_vendor(keyword.lower_value)[1]
        self.fire(AtRuleEvent('start' + event_name, line, col, keyword=base,
                              prelude=text, prefix=prefix))
        count = self._block(block.content, inner)
        self.fire(AtRuleEvent('end' + event_name, line, col, keyword=base,
                              prelude=text, prefix=prefix, empty=count == 0))

    def _global_statement(self, name, keyword, prelude, block, context) -> None:
        line, col = position(keyword)
        if block is not None:
            self._error(f"Unexpected '{{' after @{keyword.value}.", line, col)
            return

        if self._document_depth == 0:
            allowed = context == STYLESHEET and self._preamble
            if allowed and name == 'charset':
                allowed = (line, col) == (1, 1)
            if not allowed:
                self._warning(f"@{name} not allowed here.", line, col)

        uri = None
        media: List = []
        text = normalize_text(prelude)
        if name == 'import':
            uri = _uri(prelude[0]) if prelude else None
            media = prelude[1:]
            if uri is None:
                self._error("Expected a URI after @import.", line, col)
                return
        elif name == 'namespace':
            target = [n for n in prelude if n.type != 'whitespace']
            uri = _uri(target[-1]) if target else None
            if uri is None:
                self._error("Expected a URI after @namespace.", line, col)
                return
        elif name == 'charset':
            if not prelude or prelude[0].type != 'string':
                self._error("Expected a string after @charset.", line, col)
                return
            text = prelude[0].value

        prefix = split_vendor(keyword.lower_value)[0]
        self.fire(StatementEvent(name, line, col, text=text, uri=uri,
                                 media=normalize_text(media).strip(), prefix=prefix))

    def _supports_condition(self, nodes: list) -> None:
        """Fire events for the declarations and selector() tests of a condition."""
        for node in nodes:
            if node.type == '() block':
                content = strip_whitespace(node.content)
                if self._looks_like_declaration(content):
                    self._declaration(content, in_parens=True)
                else:
                    self._supports_condition(content)
            elif node.type == 'function' and node.lower_name == 'selector':
                line, col = position(node)
                try:
                    selectors = parse_selector_group(node.arguments, line, col)
                except CSSSyntaxError as e:
                    self._error(e.message, e.line, e.col)
                    continue
                for selector in selectors:
                    self.fire(SelectorEvent('supportsSelector', selector.line, selector.col,
                                            selector=selector))

    @staticmethod
    def _looks_like_declaration(nodes: list) -> bool:
        i = 1 if nodes and is_literal(nodes[0], '*') else 0
        if i >= len(nodes) or nodes[i].type != 'ident':
            return False
        rest = [n for n in nodes[i + 1:] if n.type != 'whitespace']
        return bool(rest) and is_literal(rest[0], ':')


def _uri(node) -> Optional[str]:
    if node.type in ('string', 'url'):
        return node.value
    if node.type == 'function' and node.lower_name == 'url':
        for arg in node.arguments:
            if arg.type == 'string':
                return arg.value
    return None


__all__ = ['Parser', 'default_validator']
