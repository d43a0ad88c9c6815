"""Error utility for CSS Linter."""


class CSSLinterError(Exception):
    """Base exception for CSS Linter."""
    pass


class ConfigurationError(CSSLinterError):
    """Raised when a ruleset or configuration is invalid."""
    pass


class FileOperationError(CSSLinterError):
    """Raised when file operations fail."""
    pass


class RuleRegistrationError(CSSLinterError):
    """Raised when a rule id is registered twice."""
    pass


class CSSSyntaxError(CSSLinterError):
    """Raised by the parser for a recoverable syntax error.

    Carries the position of the offending token so the parser can turn it
    into an ``error`` event and resume with the next statement.
    """

    def __init__(self, message: str, line: int = 1, col: int = 1):
        super().__init__(message)
        self.message = message
        self.line = line
        self.col = col


# Exported exceptions
__all__ = [
    'CSSLinterError',
    'ConfigurationError',
    'FileOperationError',
    'RuleRegistrationError',
    'CSSSyntaxError',
]
