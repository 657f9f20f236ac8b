"""Operator semantics for postfix expression evaluation.

Arithmetic promotes to REAL when either operand is REAL; two INTEGER
operands give an INTEGER, with `/` and `MOD` truncating toward zero and
`DIV` flooring. Comparisons need numbers, logical operators need
BOOLEANs, `&` joins STRINGs and `=`/`<>` need operands of the same
primitive type.
"""

from typing import Any, Optional
import math

from pseudo.errors import Position, fail
from pseudo.types import ArrayVal, ObjectVal, PointerVal, NullVal, is_number, type_name, type_of

UNARY_OPS = ('!', '_+', '_-')
ARITHMETIC_OPS = ('+', '-', '*', '/', '//', '%')
COMPARISON_OPS = ('<', '>', '<=', '>=')
EQUALITY_OPS = ('=', '!=')
LOGICAL_OPS = ('&&', '||')

# Names used in messages
DISPLAY = {
    '//': 'DIV', '%': 'MOD', '!=': '<>', '&&': 'AND', '||': 'OR', '!': 'NOT',
    '_+': 'unary +', '_-': 'unary -',
}


def display(op: str) -> str:
    return DISPLAY.get(op, op)


def _trunc_div(a: int, b: int) -> int:
    q = abs(a) // abs(b)
    return q if (a >= 0) == (b >= 0) else -q


def _numeric(op: str, value: Any, pos: Optional[Position]):
    if not is_number(value):
        raise fail('InvalidOperation',
                   f"'{display(op)}' can only be performed on INTEGER or REAL, not {type_name(value)}", pos)


def arithmetic(op: str, a: Any, b: Any, pos: Optional[Position] = None) -> Any:
    _numeric(op, a, pos)
    _numeric(op, b, pos)
    if op in ('/', '//', '%') and b == 0:
        raise fail('InvalidOperation', 'division by zero', pos)
    if isinstance(a, float) or isinstance(b, float):
        a, b = float(a), float(b)
        if op == '+':
            return a + b
        if op == '-':
            return a - b
        if op == '*':
            return a * b
        if op == '/':
            return a / b
        if op == '//':
            return float(math.floor(a / b))
        return math.fmod(a, b)
    if op == '+':
        return a + b
    if op == '-':
        return a - b
    if op == '*':
        return a * b
    if op == '/':
        return _trunc_div(a, b)
    if op == '//':
        return a // b
    return a - b * _trunc_div(a, b)


def compare(op: str, a: Any, b: Any, pos: Optional[Position] = None) -> bool:
    _numeric(op, a, pos)
    _numeric(op, b, pos)
    if op == '<':
        return a < b
    if op == '>':
        return a > b
    if op == '<=':
        return a <= b
    return a >= b


def values_equal(a: Any, b: Any, pos: Optional[Position] = None) -> bool:
    for value in (a, b):
        if isinstance(value, (ArrayVal, ObjectVal, PointerVal, NullVal)):
            raise fail('InvalidOperation', f"cannot compare values of type {type_name(value)}", pos)
    ta, tb = type_of(a), type_of(b)
    if ta != tb:
        raise fail('TypeMismatch', f"cannot compare types {ta!r} AND {tb!r}", pos)
    return a == b


def logical(op: str, a: Any, b: Any, pos: Optional[Position] = None) -> bool:
    for value in (a, b):
        if not isinstance(value, bool):
            raise fail('InvalidOperation',
                       f"'{display(op)}' can only be performed on BOOLEAN, not {type_name(value)}", pos)
    return (a and b) if op == '&&' else (a or b)


def concat(a: Any, b: Any, pos: Optional[Position] = None) -> str:
    for value in (a, b):
        if not isinstance(value, str):
            raise fail('InvalidOperation', f"'&' can only be performed on STRING, not {type_name(value)}", pos)
    return a + b


def apply_binary(op: str, a: Any, b: Any, pos: Optional[Position] = None) -> Any:
    if op in ARITHMETIC_OPS:
        return arithmetic(op, a, b, pos)
    if op in COMPARISON_OPS:
        return compare(op, a, b, pos)
    if op in EQUALITY_OPS:
        equal = values_equal(a, b, pos)
        return equal if op == '=' else not equal
    if op in LOGICAL_OPS:
        return logical(op, a, b, pos)
    if op == '&':
        return concat(a, b, pos)
    raise fail('InternalError', f"unknown binary operator {op!r}", pos)


def apply_unary(op: str, a: Any, pos: Optional[Position] = None) -> Any:
    if op == '!':
        if not isinstance(a, bool):
            raise fail('InvalidOperation', f"'NOT' can only be performed on BOOLEAN, not {type_name(a)}", pos)
        return not a
    if op in ('_+', '_-'):
        _numeric(op, a, pos)
        return -a if op == '_-' else a
    raise fail('InternalError', f"unknown unary operator {op!r}", pos)
