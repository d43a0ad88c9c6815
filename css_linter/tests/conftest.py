"""Pytest configuration for CSS Linter tests."""

import logging

import pytest

from css_linter.core import Linter

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


@pytest.fixture
def linter():
    """Return a fresh linter with its own selector cache."""
    return Linter()


@pytest.fixture
def lint(linter):
    """Return a helper running the linter and returning its messages.

    With ``rule_id`` given, only messages of that rule are returned.
    """
    def run(text, ruleset=None, rule_id=None):
        report = linter.verify(text, ruleset)
        if rule_id is None:
            return report.messages
        return [m for m in report.messages if m.rule_id == rule_id]

    return run


@pytest.fixture(scope='session')
def sample_css():
    """Return sample CSS content for testing."""
    return """
    body {
        color: #333;
        font-family: Arial, sans-serif;
        margin: 0;
        padding: 20px;
    }

    .container {
        max-width: 1200px;
        margin: 0 auto;
    }

    .header {
        background-color: #f5f5f5;
        padding: 10px;
        border-bottom: 1px solid #ddd;
    }

    @media (max-width: 768px) {
        .content {
            flex-direction: column;
        }
    }
    """


@pytest.fixture(scope='session')
def broken_css():
    """Return CSS with recoverable syntax errors."""
    return "a { color }\nb { color: red; }\n@import 'late.css';\n"
