"""Rules turning parser messages into lint messages."""

from .registry import register_rule


@register_rule(
    'errors',
    name='Parsing Errors',
    desc='This rule looks for recoverable syntax errors.',
)
def errors(rule, parser, reporter):
    def on_error(event):
        reporter.error(event.message, event, rule)

    parser.add_listener('error', on_error)


@register_rule(
    'warnings',
    name='Parsing warnings',
    desc='This rule looks for parser warnings.',
)
def warnings(rule, parser, reporter):
    def on_warning(event):
        reporter.report(event.message, event, rule)

    parser.add_listener('warning', on_warning)


__all__ = ['errors', 'warnings']
