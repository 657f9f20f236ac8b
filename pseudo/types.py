"""Runtime values and type descriptors for the pseudocode interpreter.

Primitive values are plain Python objects: `int` for INTEGER, `float` for
REAL, `bool` for BOOLEAN, `str` for STRING (and CHAR, a one character
string) and `datetime.date` for DATE. Composite values are the dataclasses
defined here. Arrays keep a flat list of storage cells together with the
declared bounds of every dimension, objects (records and class instances)
keep a property map, enumeration values remember their family.

Every slot that can be written to is a `Cell`. A cell knows the declared
type of what it holds, so assignments can be checked without going back to
the declaration. Aliases (BYREF parameters, fields bound inside a method,
pointers) are simply further names for the same cell object.

`check_value` raises a Python `TypeError` on mismatch; callers convert it
into a `PseudoError` carrying the right kind and source position.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Tuple
import datetime
import math
import re


@dataclass(frozen=True)
class TypeSpec:
    """A declared variable type.

    `kind` is one of 'Integer', 'Real', 'Boolean', 'Char', 'String', 'Date',
    'Array', 'Custom', 'Pointer' or 'Null'. An array type holds its element
    type in `args` and its inclusive bounds in `bounds`; a two dimensional
    `ARRAY[1:3, 1:2] OF INTEGER` is
    `array(array(integer(), 1, 2), 1, 3)`. Custom types carry the name of a
    record, class, enumeration or pointer definition.
    """
    kind: str
    args: Tuple['TypeSpec', ...] = ()
    bounds: Tuple[int, int] = (0, 0)
    name: str = ''

    def __repr__(self) -> str:
        if self.kind == 'Array':
            dims = ", ".join(f"{lower}:{upper}" for lower, upper in self.shape())
            return f"ARRAY[{dims}] OF {self.element()!r}"
        if self.kind == 'Custom':
            return self.name
        if self.kind == 'Pointer':
            return f"^{self.args[0]!r}"
        return self.kind.upper()

    def shape(self) -> List[Tuple[int, int]]:
        dims = []
        spec = self
        while spec.kind == 'Array':
            dims.append(spec.bounds)
            spec = spec.args[0]
        return dims

    def element(self) -> 'TypeSpec':
        spec = self
        while spec.kind == 'Array':
            spec = spec.args[0]
        return spec

    # Convenience constructors
    @staticmethod
    def integer() -> 'TypeSpec':
        return TypeSpec('Integer')

    @staticmethod
    def real() -> 'TypeSpec':
        return TypeSpec('Real')

    @staticmethod
    def boolean() -> 'TypeSpec':
        return TypeSpec('Boolean')

    @staticmethod
    def char() -> 'TypeSpec':
        return TypeSpec('Char')

    @staticmethod
    def string() -> 'TypeSpec':
        return TypeSpec('String')

    @staticmethod
    def date() -> 'TypeSpec':
        return TypeSpec('Date')

    @staticmethod
    def array(elem: 'TypeSpec', lower: int, upper: int) -> 'TypeSpec':
        return TypeSpec('Array', (elem,), (lower, upper))

    @staticmethod
    def custom(name: str) -> 'TypeSpec':
        return TypeSpec('Custom', name=name)

    @staticmethod
    def pointer(target: 'TypeSpec') -> 'TypeSpec':
        return TypeSpec('Pointer', (target,))

    @staticmethod
    def null() -> 'TypeSpec':
        return TypeSpec('Null')


BASIC_TYPES = {
    'INTEGER': TypeSpec.integer(),
    'REAL': TypeSpec.real(),
    'BOOLEAN': TypeSpec.boolean(),
    'CHAR': TypeSpec.char(),
    'STRING': TypeSpec.string(),
    'DATE': TypeSpec.date(),
}

DEFAULT_DATE = datetime.date(1, 1, 1)


class NullVal:
    """Marker for an unset slot, e.g. a pointer that points nowhere."""
    def __repr__(self) -> str:
        return 'NULL'

    def __eq__(self, other: Any) -> bool:
        return isinstance(other, NullVal)

    def __hash__(self) -> int:
        return 0


@dataclass
class ErrorVal:
    """Kind and message of a reported error."""
    name: str
    message: str

    def __repr__(self) -> str:
        return f"Error(name={self.name!r}, message={self.message!r})"


@dataclass(eq=False)
class Cell:
    """A storage slot shared by every name that aliases it."""
    value: Any
    spec: TypeSpec


@dataclass
class ArrayVal:
    """An N-dimensional array stored as a flat list of cells.

    `shape` lists the inclusive (lower, upper) bounds of each dimension in
    declaration order; cells are laid out with the last dimension varying
    fastest.
    """
    elem_type: TypeSpec
    shape: List[Tuple[int, int]]
    cells: List[Cell]

    def spec(self) -> TypeSpec:
        spec = self.elem_type
        for lower, upper in reversed(self.shape):
            spec = TypeSpec.array(spec, lower, upper)
        return spec

    def flat_index(self, indices: List[int]) -> int:
        """Map per-dimension indices to a position in `cells`.

        Raises ValueError when the number of indices does not match the
        number of dimensions and IndexError when an index is out of range.
        """
        if len(indices) != len(self.shape):
            raise ValueError(
                f"array has {len(self.shape)} dimension(s) but {len(indices)} index(es) were given")
        stride = 1
        offset = 0
        for index, (lower, upper) in zip(reversed(indices), reversed(self.shape)):
            if not lower <= index <= upper:
                raise IndexError(f"Index out of bounds: {index} is not in range of {lower}..{upper}")
            offset += (index - lower) * stride
            stride *= upper - lower + 1
        return offset


@dataclass
class FieldProp:
    cell: Cell
    private: bool = False


@dataclass
class MethodProp:
    defn: Any
    private: bool = False
    owner: str = ''


@dataclass
class ObjectVal:
    """A record value or class instance."""
    type_name: str
    props: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self) -> str:
        return f"Object({self.type_name})"


@dataclass(frozen=True)
class EnumVal:
    family: str
    name: str


@dataclass(eq=False)
class PointerVal:
    cell: Cell


def type_of(value: Any) -> TypeSpec:
    """Return the runtime type of a value."""
    if isinstance(value, bool):
        return TypeSpec.boolean()
    if isinstance(value, int):
        return TypeSpec.integer()
    if isinstance(value, float):
        return TypeSpec.real()
    if isinstance(value, str):
        return TypeSpec.string()
    if isinstance(value, datetime.date):
        return TypeSpec.date()
    if isinstance(value, ArrayVal):
        return value.spec()
    if isinstance(value, ObjectVal):
        return TypeSpec.custom(value.type_name)
    if isinstance(value, EnumVal):
        return TypeSpec.custom(value.family)
    if isinstance(value, PointerVal):
        return TypeSpec.pointer(value.cell.spec)
    if isinstance(value, NullVal):
        return TypeSpec.null()
    raise TypeError(f"unknown runtime value {value!r}")


def type_name(value: Any) -> str:
    return repr(type_of(value))


def is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_value(value: Any, spec: TypeSpec, defs: Any = None) -> bool:
    """Check that a value may be stored in a slot of type `spec`.

    Types must match exactly. A CHAR slot accepts a one character string.
    When a definition table is given, a Custom type naming a pointer
    definition accepts pointers whose target cell has the pointed-to type.
    Raises TypeError on mismatch.
    """
    if spec.kind == 'Char':
        if isinstance(value, str) and len(value) == 1:
            return True
        raise TypeError(f"cannot assign {type_name(value)} to CHAR")
    if spec.kind == 'Custom' and defs is not None:
        target = defs.pointer_target(spec.name)
        if target is not None:
            if isinstance(value, PointerVal) and value.cell.spec == target:
                return True
            raise TypeError(f"cannot assign {type_name(value)} to {spec!r}")
    actual = type_of(value)
    if actual != spec:
        raise TypeError(f"cannot assign {actual!r} to {spec!r}")
    return True


def default_value(spec: TypeSpec, defs: Any = None) -> Any:
    """Build the initial value of a freshly declared slot of type `spec`."""
    kind = spec.kind
    if kind == 'Integer':
        return 0
    if kind == 'Real':
        return 0.0
    if kind in ('String', 'Char'):
        return ''
    if kind == 'Boolean':
        return False
    if kind == 'Date':
        return DEFAULT_DATE
    if kind == 'Array':
        elem = spec.element()
        shape = spec.shape()
        count = 1
        for lower, upper in shape:
            if upper < lower:
                raise ValueError(f"invalid array bounds {lower}:{upper}")
            count *= upper - lower + 1
        return ArrayVal(elem, shape, [Cell(default_value(elem, defs), elem) for _ in range(count)])
    if kind == 'Custom':
        if defs is None:
            raise TypeError(f"cannot build a default value for {spec!r}")
        return defs.default_for(spec.name)
    if kind in ('Pointer', 'Null'):
        return NullVal()
    raise TypeError(f"unknown type spec: {spec}")


def copy_value(value: Any) -> Any:
    """Deep-copy composite values; primitives are immutable and returned as is."""
    if isinstance(value, ArrayVal):
        cells = [Cell(copy_value(c.value), c.spec) for c in value.cells]
        return ArrayVal(value.elem_type, list(value.shape), cells)
    if isinstance(value, ObjectVal):
        props = {}
        for name, prop in value.props.items():
            if isinstance(prop, FieldProp):
                props[name] = FieldProp(Cell(copy_value(prop.cell.value), prop.cell.spec), prop.private)
            else:
                props[name] = prop
        return ObjectVal(value.type_name, props)
    return value


def format_real(value: float) -> str:
    """Shortest round-tripping decimal form, without exponent or trailing '.0'."""
    if math.isnan(value):
        return 'NaN'
    if math.isinf(value):
        return 'inf' if value > 0 else '-inf'
    text = format(Decimal(repr(value)), 'f')
    if '.' in text:
        text = text.rstrip('0').rstrip('.')
    if text == '-0':
        text = '0'
    return text


def format_date(value: datetime.date) -> str:
    return f"{value.day:02d}-{value.month:02d}-{value.year:04d}"


def to_string(value: Any) -> str:
    """Convert a value to the text OUTPUT and WRITEFILE produce."""
    if isinstance(value, bool):
        return 'TRUE' if value else 'FALSE'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return format_real(value)
    if isinstance(value, str):
        return value
    if isinstance(value, datetime.date):
        return format_date(value)
    if isinstance(value, EnumVal):
        return value.name
    if isinstance(value, NullVal):
        return 'NULL'
    if isinstance(value, ArrayVal):
        return '[' + ', '.join(to_string(c.value) for c in value.cells) + ']'
    if isinstance(value, ObjectVal):
        return f"<{value.type_name}>"
    if isinstance(value, PointerVal):
        return f"<pointer to {value.cell.spec!r}>"
    return str(value)


def to_text(value: Any) -> str:
    """Canonical text handed to builtin functions."""
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, datetime.date):
        return value.isoformat()
    return to_string(value)


_INTEGER_RE = re.compile(r'[+-]?\d+')
_REAL_RE = re.compile(r'[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?|[+-]?(inf|infinity|nan)', re.IGNORECASE)
_DATE_RE = re.compile(r'(\d{1,2})/(\d{1,2})/(\d{1,4})')


def parse_integer(text: str) -> int:
    if not _INTEGER_RE.fullmatch(text):
        raise ValueError(f"{text!r} is not an integer")
    return int(text)


def parse_real(text: str) -> float:
    if not _REAL_RE.fullmatch(text):
        raise ValueError(f"{text!r} is not a real number")
    return float(text)


def parse_boolean(text: str) -> bool:
    lowered = text.lower()
    if lowered == 'true':
        return True
    if lowered == 'false':
        return False
    raise ValueError(f"{text!r} is not a boolean")


def parse_date(text: str) -> datetime.date:
    """Parse a `dd/mm/yyyy` date."""
    match = _DATE_RE.fullmatch(text)
    if not match:
        raise ValueError(f"{text!r} is not a date")
    day, month, year = (int(part) for part in match.groups())
    return datetime.date(year, month, day)
