import datetime

import pytest

from pseudo.types import (
    Cell, EnumVal, NullVal, ObjectVal, FieldProp, PointerVal, TypeSpec, check_value,
    copy_value, default_value, format_real, parse_boolean, parse_date, parse_integer, parse_real,
    to_string, to_text, type_of,
)

INTEGER = TypeSpec.integer()


def grid():
    return default_value(TypeSpec.array(TypeSpec.array(INTEGER, 1, 2), 1, 3))


def test_typespec_repr():
    assert repr(INTEGER) == 'INTEGER'
    assert repr(TypeSpec.array(TypeSpec.array(INTEGER, 1, 2), 1, 3)) == 'ARRAY[1:3, 1:2] OF INTEGER'
    assert repr(TypeSpec.custom('student')) == 'student'
    assert repr(TypeSpec.pointer(TypeSpec.real())) == '^REAL'


def test_flat_index_layout():
    array = grid()
    assert len(array.cells) == 6
    assert array.flat_index([1, 1]) == 0
    assert array.flat_index([2, 2]) == array.flat_index([2, 1]) + 1
    assert array.flat_index([3, 2]) == 5


def test_flat_index_bounds():
    array = grid()
    with pytest.raises(IndexError):
        array.flat_index([0, 1])
    with pytest.raises(IndexError):
        array.flat_index([4, 1])
    with pytest.raises(ValueError):
        array.flat_index([1])


def test_default_values():
    assert default_value(INTEGER) == 0
    assert isinstance(default_value(TypeSpec.real()), float)
    assert default_value(TypeSpec.string()) == ''
    assert default_value(TypeSpec.boolean()) is False
    assert default_value(TypeSpec.date()) == datetime.date(1, 1, 1)
    assert all(cell.value == 0 and cell.spec == INTEGER for cell in grid().cells)


def test_default_value_rejects_empty_bounds():
    with pytest.raises(ValueError):
        default_value(TypeSpec.array(INTEGER, 5, 1))


def test_check_value():
    assert check_value(3, INTEGER)
    with pytest.raises(TypeError):
        check_value('3', INTEGER)
    with pytest.raises(TypeError):
        check_value(3.0, INTEGER)
    with pytest.raises(TypeError):
        check_value(True, INTEGER)
    assert check_value('a', TypeSpec.char())
    with pytest.raises(TypeError):
        check_value('ab', TypeSpec.char())


def test_copy_value_is_deep():
    array = grid()
    copied = copy_value(array)
    copied.cells[0].value = 9
    assert array.cells[0].value == 0

    obj = ObjectVal('point', {'x': FieldProp(Cell(1, INTEGER))})
    clone = copy_value(obj)
    clone.props['x'].cell.value = 2
    assert obj.props['x'].cell.value == 1


def test_type_of():
    assert type_of(True) == TypeSpec.boolean()
    assert type_of(1) == INTEGER
    assert type_of(1.0) == TypeSpec.real()
    assert type_of(EnumVal('season', 'Spring')) == TypeSpec.custom('season')
    assert type_of(NullVal()) == TypeSpec.null()
    assert type_of(PointerVal(Cell(1, INTEGER))) == TypeSpec.pointer(INTEGER)
    assert type_of(grid()) == TypeSpec.array(TypeSpec.array(INTEGER, 1, 2), 1, 3)


def test_format_real():
    assert format_real(3.5) == '3.5'
    assert format_real(2.0) == '2'
    assert format_real(0.1) == '0.1'
    assert format_real(-0.0) == '0'
    assert format_real(1e20) == '100000000000000000000'


def test_to_string():
    assert to_string(True) == 'TRUE'
    assert to_string(datetime.date(2024, 3, 2)) == '02-03-2024'
    assert to_string(NullVal()) == 'NULL'
    assert to_string(ObjectVal('pet')) == '<pet>'
    assert to_string(grid()) == '[0, 0, 0, 0, 0, 0]'


def test_to_text():
    assert to_text(False) == 'false'
    assert to_text(datetime.date(2024, 3, 2)) == '2024-03-02'
    assert to_text(1.5) == '1.5'


def test_parsers():
    assert parse_integer('-12') == -12
    with pytest.raises(ValueError):
        parse_integer('1.5')
    assert parse_real('1.5') == 1.5
    assert parse_real('3') == 3.0
    with pytest.raises(ValueError):
        parse_real('abc')
    assert parse_boolean('TRUE') is True
    with pytest.raises(ValueError):
        parse_boolean('yes')
    assert parse_date('2/3/2024') == datetime.date(2024, 3, 2)
    with pytest.raises(ValueError):
        parse_date('31/02/2024')
