import pytest

from pseudo.errors import PseudoError
from pseudo.interpreter import run_program

TYPES = '''
TYPE IntPointer = ^INTEGER
TYPE Season = (Spring, Summer, Autumn, Winter)
TYPE Colour = (Red, Green)
DECLARE P : IntPointer
DECLARE Count : INTEGER
DECLARE Ratio : REAL
DECLARE Now : Season
DECLARE Paint : Colour
'''


def output(source, capsys):
    run_program(source)
    return capsys.readouterr().out.strip().splitlines()


def error_of(source):
    with pytest.raises(PseudoError) as excinfo:
        run_program(source)
    return excinfo.value


def test_pointer_shares_cell(capsys):
    source = TYPES + '''
P <- ^Count
P^ <- 5
Count <- Count + 1
OUTPUT P^, " ", Count
'''
    assert output(source, capsys) == ['6 6']


def test_null_pointer_read():
    assert error_of(TYPES + 'OUTPUT P^\n').name == 'InvalidOperation'


def test_null_pointer_write():
    assert error_of(TYPES + 'P^ <- 3\n').name == 'InvalidOperation'


def test_pointer_target_type_checked():
    assert error_of(TYPES + 'P <- ^Ratio\n').name == 'TypeMismatch'


def test_enum_default_and_equality(capsys):
    source = TYPES + '''
OUTPUT Now
Now <- Winter
OUTPUT Now = Winter, Now <> Spring
'''
    assert output(source, capsys) == ['Spring', 'TRUETRUE']


def test_enums_of_different_types_do_not_compare():
    assert error_of(TYPES + 'OUTPUT Now = Red\n').name == 'TypeMismatch'


def test_enum_assignment_type_checked():
    assert error_of(TYPES + 'Now <- Green\n').name == 'TypeMismatch'


def test_enum_variant_is_constant():
    assert error_of(TYPES + 'Spring <- Summer\n').name == 'ImmutableAssignment'
