import pytest

from pseudo.errors import PseudoError
from pseudo.interpreter import run_program

COUNTER = '''
CLASS Counter
    PRIVATE Total : INTEGER
    PUBLIC Label : STRING
    PUBLIC PROCEDURE NEW(Start : INTEGER)
        Total <- Start
        Label <- "counter"
    ENDPROCEDURE
    PUBLIC PROCEDURE Add(N : INTEGER)
        Total <- Total + N
    ENDPROCEDURE
    PUBLIC FUNCTION Value() RETURNS INTEGER
        RETURN Total
    ENDFUNCTION
    PRIVATE PROCEDURE Reset()
        Total <- 0
    ENDPROCEDURE
    PUBLIC PROCEDURE Clear()
        CALL Reset()
    ENDPROCEDURE
ENDCLASS
DECLARE A, B : Counter
A <- NEW Counter(5)
'''


def output(source, capsys):
    run_program(source)
    return capsys.readouterr().out.strip().splitlines()


def error_of(source):
    with pytest.raises(PseudoError) as excinfo:
        run_program(source)
    return excinfo.value


def test_constructor_and_methods(capsys):
    source = COUNTER + '''
CALL A.Add(2)
OUTPUT A.Label, " ", A.Value()
'''
    assert output(source, capsys) == ['counter 7']


def test_objects_are_copied_on_assignment(capsys):
    source = COUNTER + '''
B <- A
CALL B.Add(1)
OUTPUT A.Value(), " ", B.Value()
'''
    assert output(source, capsys) == ['5 6']


def test_private_method_callable_from_inside(capsys):
    source = COUNTER + '''
CALL A.Clear()
OUTPUT A.Value()
'''
    assert output(source, capsys) == ['0']


def test_public_field_write(capsys):
    source = COUNTER + '''
A.Label <- "renamed"
OUTPUT A.Label
'''
    assert output(source, capsys) == ['renamed']


def test_private_field_is_hidden():
    err = error_of(COUNTER + 'OUTPUT A.Total\n')
    assert err.name == 'InvalidPropertyAccess'


def test_private_method_is_hidden():
    err = error_of(COUNTER + 'CALL A.Reset()\n')
    assert err.name == 'InvalidPropertyAccess'


def test_unknown_property():
    assert error_of(COUNTER + 'OUTPUT A.Missing\n').name == 'InvalidPropertyAccess'
    assert error_of(COUNTER + 'CALL A.Missing()\n').name == 'InvalidPropertyAccess'


def test_method_is_not_a_field():
    assert error_of(COUNTER + 'OUTPUT A.Add\n').name == 'InvalidPropertyAccess'


def test_property_of_non_object():
    assert error_of('DECLARE N : INTEGER\nOUTPUT N.Size\n').name == 'InvalidPropertyAccess'


def test_constructor_missing():
    source = '''
CLASS Box
    PUBLIC Size : INTEGER
ENDCLASS
DECLARE B : Box
B.Size <- 3
B <- NEW Box()
'''
    assert error_of(source).name == 'ConstructorMissing'


def test_constructor_private():
    source = '''
CLASS Box
    PRIVATE PROCEDURE NEW()
    ENDPROCEDURE
ENDCLASS
DECLARE B : Box
B <- NEW Box()
'''
    assert error_of(source).name == 'ConstructorPrivate'


def test_constructor_arguments_checked():
    assert error_of(COUNTER + 'B <- NEW Counter("x")\n').name == 'ParameterTypeMismatch'


def test_class_type_checked_on_assignment():
    source = COUNTER + '''
CLASS Other
    PUBLIC PROCEDURE NEW()
    ENDPROCEDURE
ENDCLASS
A <- NEW Other()
'''
    assert error_of(source).name == 'TypeMismatch'


def test_inheritance_and_super(capsys):
    source = '''
CLASS Shape
    PRIVATE Name : STRING
    PUBLIC PROCEDURE NEW(N : STRING)
        Name <- N
    ENDPROCEDURE
    PUBLIC FUNCTION Describe() RETURNS STRING
        RETURN "shape " & Name
    ENDFUNCTION
    PUBLIC FUNCTION Sides() RETURNS INTEGER
        RETURN 0
    ENDFUNCTION
ENDCLASS
CLASS Square INHERITS Shape
    PUBLIC PROCEDURE NEW()
        CALL SUPER.NEW("square")
    ENDPROCEDURE
    PUBLIC FUNCTION Describe() RETURNS STRING
        RETURN SUPER.Describe() & " with " & NUM_TO_STR(Sides()) & " sides"
    ENDFUNCTION
    PUBLIC FUNCTION Sides() RETURNS INTEGER
        RETURN 4
    ENDFUNCTION
ENDCLASS
DECLARE S : Square
S <- NEW Square()
OUTPUT S.Describe()
'''
    assert output(source, capsys) == ['shape square with 4 sides']


def test_super_without_base():
    source = '''
CLASS Lonely
    PUBLIC PROCEDURE NEW()
        CALL SUPER.NEW()
    ENDPROCEDURE
ENDCLASS
DECLARE L : Lonely
L <- NEW Lonely()
'''
    assert error_of(source).name == 'InvalidPropertyAccess'


def test_method_result_in_chain(capsys):
    source = '''
TYPE Inner
    DECLARE Value : INTEGER
ENDTYPE
CLASS Holder
    PUBLIC Item : Inner
    PUBLIC PROCEDURE NEW(V : INTEGER)
        Item.Value <- V
    ENDPROCEDURE
    PUBLIC FUNCTION Get() RETURNS Inner
        RETURN Item
    ENDFUNCTION
ENDCLASS
DECLARE H : Holder
H <- NEW Holder(9)
OUTPUT H.Get().Value, " ", H.Item.Value
'''
    assert output(source, capsys) == ['9 9']


def test_cannot_assign_through_method_result():
    source = '''
CLASS Holder
    PUBLIC Item : INTEGER
    PUBLIC PROCEDURE NEW()
    ENDPROCEDURE
    PUBLIC FUNCTION Me() RETURNS Holder
        RETURN NEW Holder()
    ENDFUNCTION
ENDCLASS
DECLARE H : Holder
H <- NEW Holder()
H.Me().Item <- 3
'''
    assert error_of(source).name == 'InvalidOperation'


def test_free_routine_called_from_method_uses_global_names(capsys):
    source = '''
PROCEDURE Helper()
    OUTPUT "global helper"
ENDPROCEDURE
PROCEDURE Runner()
    CALL Helper()
ENDPROCEDURE
CLASS Widget
    PUBLIC PROCEDURE NEW()
    ENDPROCEDURE
    PUBLIC PROCEDURE Helper()
        OUTPUT "method helper"
    ENDPROCEDURE
    PUBLIC PROCEDURE Go()
        CALL Helper()
        CALL Runner()
        CALL Helper()
    ENDPROCEDURE
ENDCLASS
DECLARE W : Widget
W <- NEW Widget()
CALL W.Go()
'''
    assert output(source, capsys) == ['method helper', 'global helper', 'method helper']
