# -*- encoding: utf-8 -*-
# @File   : codec.py
# @Time   : 2026/10/18 15:03:24

"""Typed values <-> raw field text.

Parsers take the trimmed raw value and raise `UnparsableValue`,
formatters give the text written after the separator.

KNOWN QUIRK of `parse_int()`: the text is *validated* as a base 10, 8 or 16
`strtol` literal, but then *parsed* as base 10 only, from its leading digits.
So `0x10` reads as `0`, `1f` reads as `1`, and `ff` is no number at all.
Existing files rely on it, so don't "fix" it here.
"""

from math import isinf
from re import IGNORECASE
from re import compile as regex
from typing import Any, Callable, NamedTuple

from .model import UnparsableValue

_TRUTHY = ('TRUE', '1')
_FALSY = ('FALSE', '0')

# strtol() literals, fully consumed. base 8 is a subset of base 10,
# still listed to keep the check order obvious.
_INT_LITERALS = (
    regex(r'[+-]?[0-9]+'),
    regex(r'[+-]?[0-7]+'),
    regex(r'[+-]?(?:0[xX])?[0-9a-fA-F]+'),
)
_DEC_PREFIX = regex(r'[+-]?[0-9]+')
_LONG_MIN, _LONG_MAX = -(1 << 63), (1 << 63) - 1

# strtod() accepts the longest valid prefix and ignores the rest.
_FLOAT_PREFIX = regex(
    r'[+-]?(?:'
    r'(?P<special>inf(?:inity)?|nan)'
    r'|0x(?P<hexmant>[0-9a-f]+\.?[0-9a-f]*|\.[0-9a-f]+)(?:p[+-]?[0-9]+)?'
    r'|(?P<mant>[0-9]+\.?[0-9]*|\.[0-9]+)(?:e[+-]?[0-9]+)?'
    r')',
    IGNORECASE)


def parse_bool(raw: str) -> bool:
    # ASCII letters only: `str.upper()` also maps the long s to "S".
    upper = raw.upper() if raw.isascii() else raw
    if upper in _TRUTHY:
        return True
    elif upper in _FALSY:
        return False
    raise UnparsableValue(raw, bool)


def format_bool(value: bool) -> str:
    return 'true' if value else 'false'


def is_int_literal(raw: str) -> bool:
    return any(i.fullmatch(raw) for i in _INT_LITERALS)


def parse_int(raw: str) -> int:
    if not is_int_literal(raw):
        raise UnparsableValue(raw, int)
    # validated above, but re-parsed as decimal. see module docstring.
    m = _DEC_PREFIX.match(raw)
    if m is None:
        raise UnparsableValue(raw, int)
    value = int(m.group(0))
    if not _LONG_MIN <= value <= _LONG_MAX:
        raise UnparsableValue(raw, int)
    return value


def format_int(value: int) -> str:
    return '%d' % value


def parse_float(raw: str) -> float:
    m = _FLOAT_PREFIX.match(raw)
    if m is None:
        raise UnparsableValue(raw, float)
    literal = m.group(0)
    if m['special']:
        return float(literal)

    try:
        if m['hexmant'] is not None:
            value, mantissa = float.fromhex(literal), m['hexmant']
        else:
            value, mantissa = float(literal), m['mant']
    except OverflowError:
        raise UnparsableValue(raw, float) from None

    # out of range: overflow, or a non-zero literal rounded down to zero.
    if isinf(value) or (value == 0.0 and mantissa.strip('0.')):
        raise UnparsableValue(raw, float)
    return value


def format_float(value: float) -> str:
    # shortest text that reads back to the same float.
    return repr(float(value))


def parse_str(raw: str) -> str:
    return raw


def format_str(value: str) -> str:
    return str(value)


class ValueCodec(NamedTuple):
    parse: Callable[[str], Any]
    format: Callable[[Any], str]


BOOL = ValueCodec(parse_bool, format_bool)
INT = ValueCodec(parse_int, format_int)
FLOAT = ValueCodec(parse_float, format_float)
STR = ValueCodec(parse_str, format_str)
