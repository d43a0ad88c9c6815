#!/usr/bin/env python3
"""
Command-line interface for CSS Linter.
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

import colorama
import orjson
from colorama import Fore, Style
from tqdm import tqdm

from css_linter.core import Linter
from css_linter.core.reporter import ERROR, INFO, WARNING
from css_linter.utils.config import (
    DEFAULT_FORMAT, ENABLE_COLOR, OUTPUT_FORMATS, VERSION,
    find_ruleset_file, load_ruleset_file,
)
from css_linter.utils.error import CSSLinterError
from css_linter.utils.file import collect_css_files, safe_read_file
from css_linter.utils.logging import setup_logging

logger = logging.getLogger(__name__)

TYPE_COLORS = {
    ERROR: Fore.RED,
    WARNING: Fore.YELLOW,
    INFO: Fore.BLUE,
}


def split_ids(value: str) -> List[str]:
    return [rule_id.strip() for rule_id in value.split(',') if rule_id.strip()]


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog='css-lint',
        description='Check CSS files for problems'
    )

    parser.add_argument(
        'files',
        help='CSS files or directories to check',
        nargs='*'
    )

    # Ruleset options
    parser.add_argument(
        '--errors',
        help='Comma separated rule ids to report as errors',
        type=split_ids,
        default=[]
    )
    parser.add_argument(
        '--warnings',
        help='Comma separated rule ids to report as warnings',
        type=split_ids,
        default=[]
    )
    parser.add_argument(
        '--ignore',
        help='Comma separated rule ids to turn off',
        type=split_ids,
        default=[]
    )
    parser.add_argument(
        '--config',
        help='JSON ruleset file (defaults to .csslintrc in the current directory)'
    )
    parser.add_argument(
        '--list-rules',
        help='List available rules and exit',
        action='store_true'
    )

    # Output options
    parser.add_argument(
        '--format',
        help='Output format',
        choices=OUTPUT_FORMATS,
        default=DEFAULT_FORMAT
    )
    parser.add_argument(
        '--no-color',
        help='Disable colored output',
        action='store_true'
    )
    parser.add_argument(
        '--progress',
        help='Show a progress bar while checking files',
        action='store_true'
    )

    # Other options
    parser.add_argument(
        '-q', '--quiet',
        help='Only report files with problems',
        action='store_true'
    )
    parser.add_argument(
        '-v', '--verbose',
        help='Enable verbose output',
        action='store_true'
    )
    parser.add_argument(
        '--version',
        action='version',
        version=f'%(prog)s {VERSION}'
    )

    return parser.parse_args(argv)


def build_ruleset(args: argparse.Namespace, linter: Linter) -> Dict[str, int]:
    """Combine the default ruleset, the ruleset file and command line ids.

    Raises:
        ConfigurationError: If the ruleset file is invalid
    """
    ruleset = linter.get_ruleset()
    config = args.config or find_ruleset_file()
    if config:
        logger.debug(f"Loading ruleset from {config}")
        ruleset.update(load_ruleset_file(config))

    for ids, level in ((args.errors, 2), (args.warnings, 1), (args.ignore, 0)):
        for rule_id in ids:
            if rule_id not in linter.rules:
                logger.warning(f"Unknown rule: {rule_id}")
            ruleset[rule_id] = level
    return ruleset


class OutputFormatter:
    """Formats lint reports for the terminal."""

    def __init__(self, output_format: str = DEFAULT_FORMAT, color: bool = ENABLE_COLOR,
                 quiet: bool = False):
        self.output_format = output_format
        self.color = color
        self.quiet = quiet
        if color:
            colorama.init()

    def _paint(self, text: str, color: str) -> str:
        if not self.color:
            return text
        return f"{color}{text}{Style.RESET_ALL}"

    def format_file(self, path: str, report) -> str:
        if self.output_format == 'compact':
            return self._compact(path, report)
        return self._text(path, report)

    def _text(self, path: str, report) -> str:
        messages = report.messages
        if not messages:
            return '' if self.quiet else f"css-lint: No problems found in {path}."

        lines = [f"css-lint: There {'is' if len(messages) == 1 else 'are'} "
                 f"{len(messages)} problem{'' if len(messages) == 1 else 's'} in {path}."]
        for i, message in enumerate(messages, 1):
            label = self._paint(message.type.capitalize(), TYPE_COLORS.get(message.type, ''))
            lines.append('')
            if message.rollup:
                lines.append(f"{i}: {label}")
            else:
                lines.append(f"{i}: {label} at line {message.line}, col {message.col}")
            lines.append(message.message)
            if message.evidence is not None:
                lines.append(message.evidence)
        return '\n'.join(lines)

    def _compact(self, path: str, report) -> str:
        if not report.messages:
            return '' if self.quiet else f"{path}: Lint Free!"

        lines = []
        for message in report.messages:
            label = self._paint(message.type.capitalize(), TYPE_COLORS.get(message.type, ''))
            rule_id = f" ({message.rule_id})" if message.rule_id else ''
            if message.rollup:
                lines.append(f"{path}: {label} - {message.message}{rule_id}")
            else:
                lines.append(f"{path}: line {message.line}, col {message.col}, "
                             f"{label} - {message.message}{rule_id}")
        return '\n'.join(lines)

    @staticmethod
    def format_json(results: list) -> str:
        return orjson.dumps(results, option=orjson.OPT_INDENT_2).decode()


def list_rules(linter: Linter) -> None:
    for rule in linter.get_rule_list():
        print(f"{rule.id}")
        if rule.desc:
            print(f"  {rule.desc}")


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI."""
    args = parse_args(argv)
    setup_logging('DEBUG' if args.verbose else 'WARNING')

    linter = Linter()
    if args.list_rules:
        list_rules(linter)
        return 0
    if not args.files:
        logger.error("No files given")
        return 1

    try:
        ruleset = build_ruleset(args, linter)
    except CSSLinterError as e:
        logger.error(f"Error: {e}")
        return 1

    color = ENABLE_COLOR and not args.no_color and sys.stdout.isatty()
    formatter = OutputFormatter(args.format, color=color, quiet=args.quiet)
    files = collect_css_files(args.files)

    status = 0
    results = []
    outputs = []
    for path in tqdm(files, desc="Linting", unit="file", disable=not args.progress):
        try:
            text = safe_read_file(path)
        except CSSLinterError as e:
            logger.error(f"Error: {e}")
            results.append({'file': path, 'error': str(e)})
            status = 1
            continue

        report = linter.verify(text, ruleset)
        if report.errors:
            status = 1
        if args.format == 'json':
            results.append(dict(report.to_dict(), file=path))
        else:
            output = formatter.format_file(path, report)
            if output:
                outputs.append(output)

    if args.format == 'json':
        print(formatter.format_json(results))
    elif outputs:
        print('\n\n'.join(outputs))
    return status


if __name__ == '__main__':
    sys.exit(main())
