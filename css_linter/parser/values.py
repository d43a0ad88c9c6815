"""Property name and value construction."""

from .events import PropertyName, PropertyValue, PropertyValuePart
from .tokens import normalize_text, position, split_vendor

LENGTH_UNITS = frozenset([
    'px', 'em', 'rem', 'ex', 'rex', 'ch', 'rch', 'ic', 'ric', 'cap', 'rcap',
    'lh', 'rlh', 'vw', 'vh', 'vi', 'vb', 'vmin', 'vmax',
    'svw', 'svh', 'lvw', 'lvh', 'dvw', 'dvh', 'cqw', 'cqh', 'cqi', 'cqb', 'cqmin', 'cqmax',
    'cm', 'mm', 'q', 'in', 'pt', 'pc',
])
ANGLE_UNITS = frozenset(['deg', 'rad', 'grad', 'turn'])
TIME_UNITS = frozenset(['s', 'ms'])
FREQUENCY_UNITS = frozenset(['hz', 'khz'])
RESOLUTION_UNITS = frozenset(['dpi', 'dpcm', 'dppx', 'x'])
FLEX_UNITS = frozenset(['fr'])

UNIT_TYPES = (
    (LENGTH_UNITS, 'length'),
    (ANGLE_UNITS, 'angle'),
    (TIME_UNITS, 'time'),
    (FREQUENCY_UNITS, 'frequency'),
    (RESOLUTION_UNITS, 'resolution'),
    (FLEX_UNITS, 'flex'),
)


def unit_type(unit: str) -> str:
    for units, kind in UNIT_TYPES:
        if unit in units:
            return kind
    return 'dimension'


def make_property_name(text: str, line: int, col: int, hack=None) -> PropertyName:
    prefix, _ = split_vendor(text.lower())
    return PropertyName(
        text=text, line=line, col=col, type='property',
        hack=hack, vendor_pos=len(prefix) if prefix else 0,
    )


def make_part(node) -> PropertyValuePart:
    """Classify one tinycss2 component value."""
    line, col = position(node)
    text = node.serialize()
    kind = node.type

    if kind == 'number':
        return PropertyValuePart(
            text, line, col, 'integer' if node.is_integer else 'number', number=node.value)
    if kind == 'percentage':
        return PropertyValuePart(text, line, col, 'percentage', number=node.value, units='%')
    if kind == 'dimension':
        return PropertyValuePart(
            text, line, col, unit_type(node.lower_unit), number=node.value, units=node.lower_unit)
    if kind == 'hash':
        return PropertyValuePart(text, line, col, 'color')
    if kind == 'ident':
        return PropertyValuePart(text, line, col, 'identifier', name=node.lower_value)
    if kind == 'string':
        return PropertyValuePart(text, line, col, 'string')
    if kind == 'url':
        return PropertyValuePart(text, line, col, 'uri', uri=node.value)
    if kind == 'unicode-range':
        return PropertyValuePart(text, line, col, 'unicode-range')
    if kind == 'function':
        if node.lower_name == 'url':
            args = [arg for arg in node.arguments if arg.type == 'string']
            return PropertyValuePart(
                text, line, col, 'uri', uri=args[0].value if args else None, name='url')
        prefix, name = split_vendor(node.lower_name)
        return PropertyValuePart(text, line, col, 'function', name=name, prefix=prefix)
    if kind == 'literal':
        return PropertyValuePart(text, line, col, 'operator')
    return PropertyValuePart(text, line, col, 'block')


def make_property_value(nodes: list, line: int = 1, col: int = 1) -> PropertyValue:
    """Build a PropertyValue from the stripped value nodes of a declaration.

    line and col position an empty value.
    """
    parts = [make_part(node) for node in nodes if node.type not in ('whitespace', 'comment')]
    if parts:
        line, col = parts[0].line, parts[0].col
    return PropertyValue(normalize_text(nodes), line, col, 'value', parts=parts)


__all__ = ['unit_type', 'make_property_name', 'make_part', 'make_property_value']
