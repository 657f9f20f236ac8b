"""Parser for the pseudocode language.

Source text is normalised by `preprocess` and parsed with a Lark LALR
grammar. Statements are line oriented: every statement ends at a newline,
blank lines and `//` comments are ignored. Keywords are upper case;
identifiers are case-insensitive and stored in lower case.

The `ASTTransformer` turns the parse tree into the nodes of `pseudo.ast`.
Expressions are emitted in postfix order: each binary rule yields the
items of its left operand, then those of its right operand, then the
operator marker, so precedence and associativity are fixed by the grammar
and the interpreter only needs a value stack.

The `parse_program` function is the public entry point and returns a
`Main` node. Syntax errors are raised as `PseudoError` with kind
`SyntaxError`.
"""

from __future__ import annotations

from typing import Any, List

from lark import Lark, Transformer, v_args
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken, VisitError

from .ast import (
    Main, Expression, Op, Literal, Var, ArrayVar, FunctionCall, Composite, CreateObject,
    Reference, Dereference, Declare, Constant, RecordDef, EnumDef, PointerDef, Param, ProcedureDef,
    FunctionDef, ClassDef, Assignment, Input, Output, If, Case, CaseClause, While, Repeat, For,
    Return, CallStmt, OpenFile, ReadFile, WriteFile, CloseFile, Seek, GetRecord, PutRecord,
)
from .errors import Position, PseudoError, fail
from .types import BASIC_TYPES, TypeSpec, parse_date


def preprocess(source: str) -> str:
    """Normalise line endings and make sure the last statement is terminated."""
    source = source.lstrip('\ufeff').replace('\r\n', '\n').replace('\r', '\n')
    if not source.endswith('\n'):
        source += '\n'
    return source


PSEUDO_GRAMMAR = r"""
    start: _NL* body
    body: (statement _NL+)*

    ?statement: declare_stmt
              | constant_stmt
              | record_def
              | enum_def
              | pointer_def
              | assign_stmt
              | input_stmt
              | output_stmt
              | if_stmt
              | case_stmt
              | while_stmt
              | repeat_stmt
              | for_stmt
              | procedure_def
              | function_def
              | class_def
              | return_stmt
              | call_stmt
              | openfile_stmt
              | readfile_stmt
              | writefile_stmt
              | closefile_stmt
              | seek_stmt
              | getrecord_stmt
              | putrecord_stmt

    // Declarations
    declare_stmt: "DECLARE" name_list ":" type
    name_list: NAME ("," NAME)*
    constant_stmt: "CONSTANT" NAME ("=" | "<-") const_value
    ?const_value: literal
                | "-" literal -> negative_literal

    record_def: "TYPE" NAME _NL+ (declare_stmt _NL+)* "ENDTYPE"
    enum_def: "TYPE" NAME "=" "(" variants ")"
    variants: NAME ("," NAME)*
    pointer_def: "TYPE" NAME "=" "^" type

    ?type: basic_type
         | array_type
         | NAME -> custom_type
    !basic_type: "INTEGER" | "REAL" | "BOOLEAN" | "CHAR" | "STRING" | "DATE"
    array_type: "ARRAY" "[" bound ("," bound)* "]" "OF" type
    bound: signed_int ":" signed_int
    !signed_int: "-"? INT

    procedure_def: "PROCEDURE" routine_name params _NL+ body "ENDPROCEDURE"
    function_def: "FUNCTION" routine_name params "RETURNS" type _NL+ body "ENDFUNCTION"
    ?routine_name: NAME
                 | "NEW" -> constructor_name
    params: ("(" [param ("," param)*] ")")?
    param: pass_mode? NAME ":" type
    !pass_mode: "BYREF" | "BYVAL"

    class_def: "CLASS" NAME inherits? _NL+ (class_member _NL+)* "ENDCLASS"
    inherits: "INHERITS" NAME
    class_member: visibility? (field_decl | declare_stmt | procedure_def | function_def)
    !visibility: "PUBLIC" | "PRIVATE"
    field_decl: name_list ":" type

    // Simple statements
    assign_stmt: target "<-" expr
    ?target: access
           | access "^" -> deref
    input_stmt: "INPUT" target
    output_stmt: "OUTPUT" expr ("," expr)*
    return_stmt: "RETURN" expr
    call_stmt: "CALL" access

    // Control flow
    if_stmt: "IF" expr _NL* "THEN" _NL+ body else_clause? "ENDIF"
    else_clause: "ELSE" _NL+ body
    case_stmt: "CASE" "OF" expr _NL+ case_clause* otherwise_clause? "ENDCASE"
    case_clause: case_label ":" _NL* body
    case_label: const_value ("TO" const_value)?
    otherwise_clause: "OTHERWISE" ":"? _NL* body
    while_stmt: "WHILE" expr "DO"? _NL+ body "ENDWHILE"
    repeat_stmt: "REPEAT" _NL+ body "UNTIL" expr
    for_stmt: "FOR" NAME "<-" expr "TO" expr step_clause? _NL+ body "NEXT" NAME?
    step_clause: "STEP" expr

    // Files
    openfile_stmt: "OPENFILE" expr "FOR" file_mode
    !file_mode: "READ" | "WRITE" | "APPEND" | "RANDOM"
    readfile_stmt: "READFILE" expr "," target
    writefile_stmt: "WRITEFILE" expr "," expr
    closefile_stmt: "CLOSEFILE" expr
    seek_stmt: "SEEK" expr "," expr
    getrecord_stmt: "GETRECORD" expr "," target
    putrecord_stmt: "PUTRECORD" expr "," target

    // Expressions with precedence
    expr: logic
    ?logic: comparison
          | logic "AND" comparison -> and_op
          | logic "OR" comparison -> or_op
    ?comparison: sum
               | comparison "=" sum -> eq_op
               | comparison "<>" sum -> ne_op
               | comparison "<" sum -> lt_op
               | comparison ">" sum -> gt_op
               | comparison "<=" sum -> le_op
               | comparison ">=" sum -> ge_op
    ?sum: product
        | sum "+" product -> add_op
        | sum "-" product -> sub_op
    ?product: unary
            | product "*" unary -> mul_op
            | product "/" unary -> div_op
            | product "DIV" unary -> intdiv_op
            | product "MOD" unary -> mod_op
            | product "&" unary -> concat_op
    ?unary: primary
          | "-" unary -> neg_op
          | "+" unary -> pos_op
          | "NOT" unary -> not_op
    ?primary: literal
            | access
            | access "^" -> deref
            | "^" access -> reference
            | "NEW" NAME "(" [args] ")" -> new_object
            | "(" expr ")"

    access: segment ("." segment)*
    segment: NAME -> var_seg
           | NAME "[" args "]" -> index_seg
           | NAME "(" [args] ")" -> call_seg
           | "NEW" "(" [args] ")" -> constructor_call_seg
    args: expr ("," expr)*

    literal: INT -> int_lit
           | REAL -> real_lit
           | STRING -> string_lit
           | CHAR_LIT -> char_lit
           | DATE_LIT -> date_lit
           | TRUE -> true_lit
           | FALSE -> false_lit

    // Tokens
    TRUE: "TRUE"
    FALSE: "FALSE"
    NAME: /[A-Za-z_][A-Za-z0-9_]*/
    INT: /\d+/
    REAL.2: /\d+\.\d+/
    DATE_LIT.3: /\d{1,2}\/\d{1,2}\/\d{4}/
    STRING: /"[^"\n]*"/
    CHAR_LIT: /'[^'\n]'/
    _NL: /(\n[\t ]*)+/

    %import common.WS_INLINE
    %ignore WS_INLINE

    // Comments
    COMMENT: /\/\/[^\n]*/
    %ignore COMMENT
"""


PSEUDO_PARSER = Lark(
    PSEUDO_GRAMMAR,
    parser='lalr',
    propagate_positions=True,
    maybe_placeholders=False,
)


def _pos(meta) -> Position:
    return Position.from_meta(meta)


def _name(token) -> str:
    return str(token).lower()


def _items(operand: Any) -> List[Any]:
    """Postfix items of an operand: a bare operand node, a parenthesised Expression or a list."""
    if isinstance(operand, Expression):
        return list(operand.items)
    if isinstance(operand, list):
        return operand
    return [operand]


def _binary(op: str):
    def handler(self, meta, items):
        left, right = items
        return _items(left) + _items(right) + [Op(op, _pos(meta))]
    return handler


def _unary(op: str):
    def handler(self, meta, items):
        return _items(items[0]) + [Op(op, _pos(meta))]
    return handler


def _is_call(node: Any) -> bool:
    if isinstance(node, FunctionCall):
        return True
    return isinstance(node, Composite) and isinstance(node.parts[-1], FunctionCall)


def _storage(node: Any, pos: Position) -> Any:
    if _is_call(node):
        raise fail('SyntaxError', 'the result of a call cannot be assigned to', pos)
    return node


@v_args(meta=True)
class ASTTransformer(Transformer):
    """Transforms the raw parse tree into an AST."""

    def start(self, meta, items):
        return Main(items[0], _pos(meta))

    def body(self, meta, items):
        return list(items)

    # Declarations

    def name_list(self, meta, items):
        return [_name(item) for item in items]

    def declare_stmt(self, meta, items):
        return Declare(items[0], items[1], False, _pos(meta))

    def field_decl(self, meta, items):
        return Declare(items[0], items[1], False, _pos(meta))

    def constant_stmt(self, meta, items):
        return Constant(_name(items[0]), items[1], _pos(meta))

    def negative_literal(self, meta, items):
        literal = items[0]
        if literal.kind not in ('Integer', 'Real'):
            raise fail('SyntaxError', f'cannot negate a {literal.kind.upper()} literal', _pos(meta))
        return Literal(-literal.value, literal.kind, _pos(meta))

    def record_def(self, meta, items):
        return RecordDef(_name(items[0]), list(items[1:]), _pos(meta))

    def variants(self, meta, items):
        return [str(item) for item in items]

    def enum_def(self, meta, items):
        return EnumDef(_name(items[0]), items[1], _pos(meta))

    def pointer_def(self, meta, items):
        return PointerDef(_name(items[0]), items[1], _pos(meta))

    def basic_type(self, meta, items):
        return BASIC_TYPES[str(items[0])]

    def custom_type(self, meta, items):
        return TypeSpec.custom(_name(items[0]))

    def array_type(self, meta, items):
        spec = items[-1]
        for lower, upper in reversed(items[:-1]):
            spec = TypeSpec.array(spec, lower, upper)
        return spec

    def bound(self, meta, items):
        return (items[0], items[1])

    def signed_int(self, meta, items):
        return int(''.join(str(item) for item in items))

    def constructor_name(self, meta, items):
        return 'new'

    def params(self, meta, items):
        return list(items)

    def pass_mode(self, meta, items):
        return str(items[0]) == 'BYREF'

    def param(self, meta, items):
        byref = False
        if isinstance(items[0], bool):
            byref = items[0]
            items = items[1:]
        return Param(_name(items[0]), items[1], byref, _pos(meta))

    def procedure_def(self, meta, items):
        name, params, body = items
        return ProcedureDef(_name(name), params, body, False, _pos(meta))

    def function_def(self, meta, items):
        name, params, return_type, body = items
        return FunctionDef(_name(name), params, return_type, body, False, _pos(meta))

    def inherits(self, meta, items):
        return _name(items[0])

    def visibility(self, meta, items):
        return str(items[0])

    def class_member(self, meta, items):
        member = items[-1]
        if len(items) == 2:
            member.private = items[0] == 'PRIVATE'
        return member

    def class_def(self, meta, items):
        base = None
        members = []
        for item in items[1:]:
            if isinstance(item, str):
                base = item
            else:
                members.append(item)
        return ClassDef(_name(items[0]), base, members, _pos(meta))

    # Simple statements

    def assign_stmt(self, meta, items):
        return Assignment(_storage(items[0], _pos(meta)), items[1], _pos(meta))

    def input_stmt(self, meta, items):
        return Input(_storage(items[0], _pos(meta)), _pos(meta))

    def output_stmt(self, meta, items):
        return Output(list(items), _pos(meta))

    def return_stmt(self, meta, items):
        return Return(items[0], _pos(meta))

    def call_stmt(self, meta, items):
        target = items[0]
        # CALL Name and CALL obj.Name without parentheses
        if isinstance(target, Var):
            target = FunctionCall(target.name, [], target.pos)
        elif isinstance(target, Composite) and isinstance(target.parts[-1], Var):
            last = target.parts[-1]
            target = Composite(target.parts[:-1] + [FunctionCall(last.name, [], last.pos)], target.pos)
        if not _is_call(target):
            raise fail('SyntaxError', 'CALL needs a procedure call', _pos(meta))
        return CallStmt(Expression([target], _pos(meta)), _pos(meta))

    # Control flow

    def if_stmt(self, meta, items):
        else_body = items[2] if len(items) > 2 else []
        return If(items[0], items[1], else_body, _pos(meta))

    def else_clause(self, meta, items):
        return items[0]

    def case_stmt(self, meta, items):
        clauses = [item for item in items[1:] if isinstance(item, CaseClause)]
        otherwise = None
        if isinstance(items[-1], list):
            otherwise = items[-1]
        return Case(items[0], clauses, otherwise, _pos(meta))

    def case_clause(self, meta, items):
        (value, upper), body = items
        return CaseClause(value, upper, body, _pos(meta))

    def case_label(self, meta, items):
        return (items[0], items[1] if len(items) > 1 else None)

    def otherwise_clause(self, meta, items):
        return items[0]

    def while_stmt(self, meta, items):
        return While(items[0], items[1], _pos(meta))

    def repeat_stmt(self, meta, items):
        return Repeat(items[0], items[1], _pos(meta))

    def step_clause(self, meta, items):
        return items[0]

    def for_stmt(self, meta, items):
        var = _name(items[0])
        start, end = items[1], items[2]
        rest = list(items[3:])
        step = rest.pop(0) if isinstance(rest[0], Expression) else None
        body = rest[0]
        if len(rest) > 1 and _name(rest[1]) != var:
            raise fail('SyntaxError', f'NEXT {_name(rest[1])} does not match FOR {var}', _pos(meta))
        return For(var, start, end, step, body, _pos(meta))

    # Files

    def file_mode(self, meta, items):
        return str(items[0])

    def openfile_stmt(self, meta, items):
        return OpenFile(items[0], items[1], _pos(meta))

    def readfile_stmt(self, meta, items):
        return ReadFile(items[0], _storage(items[1], _pos(meta)), _pos(meta))

    def writefile_stmt(self, meta, items):
        return WriteFile(items[0], items[1], _pos(meta))

    def closefile_stmt(self, meta, items):
        return CloseFile(items[0], _pos(meta))

    def seek_stmt(self, meta, items):
        return Seek(items[0], items[1], _pos(meta))

    def getrecord_stmt(self, meta, items):
        return GetRecord(items[0], _storage(items[1], _pos(meta)), _pos(meta))

    def putrecord_stmt(self, meta, items):
        return PutRecord(items[0], _storage(items[1], _pos(meta)), _pos(meta))

    # Expressions

    def expr(self, meta, items):
        return Expression(_items(items[0]), _pos(meta))

    and_op = _binary('&&')
    or_op = _binary('||')
    eq_op = _binary('=')
    ne_op = _binary('!=')
    lt_op = _binary('<')
    gt_op = _binary('>')
    le_op = _binary('<=')
    ge_op = _binary('>=')
    add_op = _binary('+')
    sub_op = _binary('-')
    mul_op = _binary('*')
    div_op = _binary('/')
    intdiv_op = _binary('//')
    mod_op = _binary('%')
    concat_op = _binary('&')
    neg_op = _unary('_-')
    pos_op = _unary('_+')
    not_op = _unary('!')

    def deref(self, meta, items):
        return Dereference(items[0], _pos(meta))

    def reference(self, meta, items):
        return Reference(_storage(items[0], _pos(meta)), _pos(meta))

    def new_object(self, meta, items):
        args = items[1] if len(items) > 1 else []
        return CreateObject(_name(items[0]), args, _pos(meta))

    def access(self, meta, items):
        if len(items) == 1:
            return items[0]
        return Composite(list(items), _pos(meta))

    def var_seg(self, meta, items):
        return Var(_name(items[0]), _pos(meta))

    def index_seg(self, meta, items):
        return ArrayVar(_name(items[0]), items[1], _pos(meta))

    def call_seg(self, meta, items):
        args = items[1] if len(items) > 1 else []
        return FunctionCall(_name(items[0]), args, _pos(meta))

    def constructor_call_seg(self, meta, items):
        return FunctionCall('new', items[0] if items else [], _pos(meta))

    def args(self, meta, items):
        return list(items)

    # Literals

    def int_lit(self, meta, items):
        return Literal(int(items[0]), 'Integer', _pos(meta))

    def real_lit(self, meta, items):
        return Literal(float(items[0]), 'Real', _pos(meta))

    def string_lit(self, meta, items):
        return Literal(str(items[0])[1:-1], 'String', _pos(meta))

    def char_lit(self, meta, items):
        return Literal(str(items[0])[1:-1], 'Char', _pos(meta))

    def date_lit(self, meta, items):
        try:
            return Literal(parse_date(str(items[0])), 'Date', _pos(meta))
        except ValueError:
            raise fail('SyntaxError', f'{items[0]} is not a valid date', _pos(meta))

    def true_lit(self, meta, items):
        return Literal(True, 'Boolean', _pos(meta))

    def false_lit(self, meta, items):
        return Literal(False, 'Boolean', _pos(meta))


def _describe(e: UnexpectedInput) -> str:
    if isinstance(e, UnexpectedToken):
        if e.token.type == '$END':
            return 'unexpected end of input'
        if e.token.type == '_NL':
            return 'unexpected end of line'
        return f"unexpected '{e.token}'"
    if isinstance(e, UnexpectedCharacters):
        return f"unexpected character {e.char!r}"
    if isinstance(e, UnexpectedEOF):
        return 'unexpected end of input'
    return str(e)


def parse_program(source: str) -> Main:
    """Parse pseudocode source into a `Main` AST node."""
    pre = preprocess(source)
    try:
        tree = PSEUDO_PARSER.parse(pre)
        return ASTTransformer().transform(tree)
    except UnexpectedInput as e:
        line = max(getattr(e, 'line', 0) or 0, 0)
        column = max(getattr(e, 'column', 0) or 0, 0)
        raise fail('SyntaxError', _describe(e), Position(line, column, line, column))
    except VisitError as e:
        if isinstance(e.orig_exc, PseudoError):
            raise e.orig_exc
        raise
