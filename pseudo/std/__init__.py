"""The builtin function library.

Arguments reach the native functions as their canonical text (see
`pseudo.types.to_text`) after the interpreter has checked arity and
argument types against the table entry; each function parses what it
needs back out of that text.
"""

from typing import Any, Dict, List
import datetime
import math
import random

from pseudo.builtin_function import BuiltinFunction
from pseudo.errors import Position, fail
from pseudo.types import TypeSpec, parse_integer, parse_real
from .io import BasicIO

INTEGER = TypeSpec.integer()
REAL = TypeSpec.real()
STRING = TypeSpec.string()
BOOLEAN = TypeSpec.boolean()
DATE = TypeSpec.date()


def populate_builtins(basic_io: BasicIO) -> Dict[str, BuiltinFunction]:
    builtins: Dict[str, BuiltinFunction] = {}

    def register(name, params, return_type, fn):
        builtins[name] = BuiltinFunction(name, params, return_type, fn)

    def std_left(args: List[str], pos: Position) -> Any:
        text, length = args[0], int(args[1])
        if length < 0:
            raise fail('InvalidArgument', f'LEFT length cannot be negative, got {length}', pos)
        if length > len(text):
            raise fail('InvalidArgument', f'LEFT length {length} exceeds the length of "{text}"', pos)
        return text[:length]

    def std_right(args: List[str], pos: Position) -> Any:
        text, length = args[0], int(args[1])
        if length < 0:
            raise fail('InvalidArgument', f'RIGHT length cannot be negative, got {length}', pos)
        if length > len(text):
            raise fail('InvalidArgument', f'RIGHT length {length} exceeds the length of "{text}"', pos)
        return text[len(text) - length:]

    def std_mid(args: List[str], pos: Position) -> Any:
        text, start, length = args[0], int(args[1]), int(args[2])
        if start < 1:
            raise fail('InvalidArgument', f'MID start must be at least 1, got {start}', pos)
        if length < 0:
            raise fail('InvalidArgument', f'MID length cannot be negative, got {length}', pos)
        if start + length > len(text) + 1:
            raise fail('InvalidArgument', f'MID range {start}..{start + length - 1} exceeds the length of "{text}"',
                       pos)
        return text[start - 1:start - 1 + length]

    def std_length(args: List[str], pos: Position) -> Any:
        return len(args[0])

    def std_to_upper(args: List[str], pos: Position) -> Any:
        return args[0].upper()

    def std_to_lower(args: List[str], pos: Position) -> Any:
        return args[0].lower()

    def std_num_to_str(args: List[str], pos: Position) -> Any:
        return args[0]

    def std_str_to_num(args: List[str], pos: Position) -> Any:
        try:
            return parse_integer(args[0])
        except ValueError:
            pass
        try:
            return parse_real(args[0])
        except ValueError:
            raise fail('InvalidArgument', f'"{args[0]}" is not a valid number', pos)

    def std_is_num(args: List[str], pos: Position) -> Any:
        try:
            parse_real(args[0])
        except ValueError:
            return False
        return True

    def std_asc(args: List[str], pos: Position) -> Any:
        if len(args[0]) != 1:
            raise fail('InvalidArgument', f'ASC expects a single character, got "{args[0]}"', pos)
        return ord(args[0])

    def std_chr(args: List[str], pos: Position) -> Any:
        code = int(args[0])
        if not 0 <= code <= 255:
            raise fail('InvalidArgument', f'CHR expects a value between 0 and 255, got {code}', pos)
        return chr(code)

    def std_int(args: List[str], pos: Position) -> Any:
        try:
            return int(args[0])
        except ValueError:
            pass
        try:
            return math.trunc(float(args[0]))
        except (ValueError, OverflowError):
            raise fail('InvalidArgument', f'{args[0]} has no integer part', pos)

    def std_rand(args: List[str], pos: Position) -> Any:
        upper = int(args[0])
        if upper < 1:
            raise fail('InvalidArgument', f'RAND expects a value of at least 1, got {upper}', pos)
        return random.random() * upper

    def std_day(args: List[str], pos: Position) -> Any:
        return datetime.date.fromisoformat(args[0]).day

    def std_month(args: List[str], pos: Position) -> Any:
        return datetime.date.fromisoformat(args[0]).month

    def std_year(args: List[str], pos: Position) -> Any:
        return datetime.date.fromisoformat(args[0]).year

    def std_dayindex(args: List[str], pos: Position) -> Any:
        # Sunday is 1
        return datetime.date.fromisoformat(args[0]).isoweekday() % 7 + 1

    def std_setdate(args: List[str], pos: Position) -> Any:
        day, month, year = (int(arg) for arg in args)
        try:
            return datetime.date(year, month, day)
        except ValueError:
            raise fail('InvalidArgument', f'{day}/{month}/{year} is not a valid date', pos)

    def std_today(args: List[str], pos: Position) -> Any:
        return datetime.date.today()

    def std_eof(args: List[str], pos: Position) -> Any:
        return basic_io.eof(args[0], pos)

    register('LEFT', (STRING, INTEGER), STRING, std_left)
    register('RIGHT', (STRING, INTEGER), STRING, std_right)
    register('MID', (STRING, INTEGER, INTEGER), STRING, std_mid)
    register('LENGTH', (STRING,), INTEGER, std_length)
    register('TO_UPPER', (STRING,), STRING, std_to_upper)
    register('TO_LOWER', (STRING,), STRING, std_to_lower)
    register('NUM_TO_STR', None, STRING, std_num_to_str)
    register('STR_TO_NUM', (STRING,), None, std_str_to_num)
    register('IS_NUM', (STRING,), BOOLEAN, std_is_num)
    register('ASC', (STRING,), INTEGER, std_asc)
    register('CHR', (INTEGER,), STRING, std_chr)
    register('INT', None, INTEGER, std_int)
    register('RAND', (INTEGER,), REAL, std_rand)
    register('DAY', (DATE,), INTEGER, std_day)
    register('MONTH', (DATE,), INTEGER, std_month)
    register('YEAR', (DATE,), INTEGER, std_year)
    register('DAYINDEX', (DATE,), INTEGER, std_dayindex)
    register('SETDATE', (INTEGER, INTEGER, INTEGER), DATE, std_setdate)
    register('TODAY', (), DATE, std_today)
    register('EOF', (STRING,), BOOLEAN, std_eof)
    return builtins
