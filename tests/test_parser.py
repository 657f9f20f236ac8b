import datetime

import pytest

from pseudo.ast import (
    Assignment, CallStmt, Case, ClassDef, Composite, Constant, Declare, Dereference, EnumDef,
    For, FunctionCall, FunctionDef, If, Literal, Op, ProcedureDef, Reference, Var,
)
from pseudo.errors import PseudoError
from pseudo.parser import parse_program
from pseudo.types import TypeSpec


def postfix(expr):
    out = []
    for item in expr.items:
        if isinstance(item, Op):
            out.append(item.op)
        elif isinstance(item, Literal):
            out.append(item.value)
        elif isinstance(item, Var):
            out.append(item.name)
        else:
            out.append(type(item).__name__)
    return out


def single(source):
    program = parse_program(source)
    assert len(program.body) == 1
    return program.body[0]


def test_precedence_is_postfix():
    stmt = single('x <- 1 + 2 * 3\n')
    assert isinstance(stmt, Assignment)
    assert postfix(stmt.value) == [1, 2, 3, '*', '+']


def test_parentheses_and_left_associativity():
    assert postfix(single('x <- (1 + 2) * 3').value) == [1, 2, '+', 3, '*']
    assert postfix(single('x <- 8 - 4 - 2').value) == [8, 4, '-', 2, '-']


def test_operator_markers():
    stmt = single('x <- NOT a AND b <> c OR d DIV 2 = e MOD 3')
    assert postfix(stmt.value) == ['a', '!', 'b', 'c', '!=', '&&', 'd', 2, '//', 'e', 3, '%', '=', '||']
    assert postfix(single('x <- -a & "s"').value) == ['a', '_-', 's', '&']


def test_identifiers_are_lowercased():
    stmt = single('DECLARE Total, COUNT : INTEGER')
    assert isinstance(stmt, Declare)
    assert stmt.names == ['total', 'count']
    assert stmt.var_type == TypeSpec.integer()


def test_array_type():
    stmt = single('DECLARE Grid : ARRAY[1:3, 0:1] OF REAL')
    assert stmt.var_type == TypeSpec.array(TypeSpec.array(TypeSpec.real(), 0, 1), 1, 3)


def test_literals():
    stmt = single("OUTPUT 1, 2.5, \"text\", 'c', TRUE, 02/03/2024")
    kinds = [(e.items[0].kind, e.items[0].value) for e in stmt.values]
    assert kinds == [
        ('Integer', 1), ('Real', 2.5), ('String', 'text'), ('Char', 'c'), ('Boolean', True),
        ('Date', datetime.date(2024, 3, 2)),
    ]


def test_constant_negative_literal():
    stmt = single('CONSTANT Lowest = -5')
    assert isinstance(stmt, Constant)
    assert stmt.name == 'lowest'
    assert stmt.value.value == -5


def test_comments_and_blank_lines():
    program = parse_program('// header\n\nOUTPUT 1 // trailing\n\n   \nOUTPUT 2\n')
    assert len(program.body) == 2


def test_if_else():
    stmt = single('IF a > 1\n  THEN\n    OUTPUT 1\n  ELSE\n    OUTPUT 2\nENDIF\n')
    assert isinstance(stmt, If)
    assert len(stmt.then_body) == 1 and len(stmt.else_body) == 1


def test_for_with_step():
    stmt = single('FOR i <- 10 TO 1 STEP -3\n  OUTPUT i\nNEXT i\n')
    assert isinstance(stmt, For)
    assert stmt.var == 'i'
    assert postfix(stmt.step) == [3, '_-']


def test_next_must_match():
    with pytest.raises(PseudoError) as excinfo:
        parse_program('FOR i <- 1 TO 2\nNEXT j\n')
    assert excinfo.value.name == 'SyntaxError'


def test_case():
    stmt = single('CASE OF x\n  1 : OUTPUT "one"\n  2 TO 5 : OUTPUT "few"\n  OTHERWISE : OUTPUT "many"\nENDCASE\n')
    assert isinstance(stmt, Case)
    assert [c.value.value for c in stmt.clauses] == [1, 2]
    assert stmt.clauses[1].upper.value == 5
    assert len(stmt.otherwise) == 1


def test_procedure_and_function():
    program = parse_program(
        'PROCEDURE Swap(BYREF A : INTEGER, B : INTEGER)\n'
        'ENDPROCEDURE\n'
        'FUNCTION Twice(N : INTEGER) RETURNS INTEGER\n'
        '  RETURN N * 2\n'
        'ENDFUNCTION\n'
    )
    proc, func = program.body
    assert isinstance(proc, ProcedureDef) and isinstance(func, FunctionDef)
    assert [(p.name, p.byref) for p in proc.params] == [('a', True), ('b', False)]
    assert func.return_type == TypeSpec.integer()


def test_class_definition():
    stmt = single(
        'CLASS Cat INHERITS Pet\n'
        '  PRIVATE Lives : INTEGER\n'
        '  PUBLIC PROCEDURE NEW()\n'
        '    Lives <- 9\n'
        '  ENDPROCEDURE\n'
        'ENDCLASS\n'
    )
    assert isinstance(stmt, ClassDef)
    assert (stmt.name, stmt.base) == ('cat', 'pet')
    field, ctor = stmt.members
    assert isinstance(field, Declare) and field.private
    assert isinstance(ctor, ProcedureDef) and ctor.name == 'new' and not ctor.private


def test_enum_keeps_variant_spelling():
    stmt = single('TYPE Season = (Spring, Summer)')
    assert isinstance(stmt, EnumDef)
    assert stmt.name == 'season'
    assert stmt.variants == ['Spring', 'Summer']


def test_call_forms():
    plain = single('CALL Tick')
    assert isinstance(plain, CallStmt)
    assert isinstance(plain.call.items[0], FunctionCall)
    method = single('CALL Pet.Rename("Tom")').call.items[0]
    assert isinstance(method, Composite)
    assert [type(p).__name__ for p in method.parts] == ['Var', 'FunctionCall']


def test_pointers():
    stmt = single('P <- ^Count')
    assert isinstance(stmt.value.items[0], Reference)
    stmt = single('P^ <- 3')
    assert isinstance(stmt.target, Dereference)


def test_cannot_assign_to_call():
    with pytest.raises(PseudoError) as excinfo:
        parse_program('Total() <- 3\n')
    assert excinfo.value.name == 'SyntaxError'


def test_syntax_error_position():
    with pytest.raises(PseudoError) as excinfo:
        parse_program('DECLARE x : INTEGER\nx <- <- 3\n')
    assert excinfo.value.name == 'SyntaxError'
    assert excinfo.value.pos.line == 2


def test_unterminated_block():
    with pytest.raises(PseudoError) as excinfo:
        parse_program('WHILE TRUE\n  OUTPUT 1\n')
    assert excinfo.value.name == 'SyntaxError'
