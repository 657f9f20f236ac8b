"""Abstract Syntax Tree (AST) definitions for the pseudocode language.

Statements form ordinary trees. Expressions are flat: an `Expression`
holds its operands and `Op` markers already arranged in postfix order, so
the interpreter evaluates them with a single value stack. Operands that
contain sub-expressions (array indices, call arguments) hold nested
`Expression` nodes.

Every node carries the `Position` of the source text it came from.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, List, Optional

from .errors import Position
from .types import TypeSpec


@dataclass
class Node:
    """Base class for all AST nodes."""
    pass


@dataclass
class Main(Node):
    body: List[Node]
    pos: Position = field(default_factory=Position)


# Expressions

@dataclass
class Expression(Node):
    items: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class Op(Node):
    op: str
    pos: Position = field(default_factory=Position)


@dataclass
class Literal(Node):
    value: Any
    kind: str  # 'Integer', 'Real', 'String', 'Char', 'Boolean' or 'Date'
    pos: Position = field(default_factory=Position)


@dataclass
class Var(Node):
    name: str
    pos: Position = field(default_factory=Position)


@dataclass
class ArrayVar(Node):
    name: str
    indices: List[Expression]
    pos: Position = field(default_factory=Position)


@dataclass
class FunctionCall(Node):
    name: str
    args: List[Expression]
    pos: Position = field(default_factory=Position)


@dataclass
class Composite(Node):
    """A chain such as `a.b[1].c(x)`; every part is a Var, ArrayVar or FunctionCall."""
    parts: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class CreateObject(Node):
    class_name: str
    args: List[Expression]
    pos: Position = field(default_factory=Position)


@dataclass
class Reference(Node):
    target: Node
    pos: Position = field(default_factory=Position)


@dataclass
class Dereference(Node):
    target: Node
    pos: Position = field(default_factory=Position)


# Declarations

@dataclass
class Declare(Node):
    names: List[str]
    var_type: TypeSpec
    private: bool = False
    pos: Position = field(default_factory=Position)


@dataclass
class Constant(Node):
    name: str
    value: Literal
    pos: Position = field(default_factory=Position)


@dataclass
class RecordDef(Node):
    name: str
    fields: List[Declare]
    pos: Position = field(default_factory=Position)


@dataclass
class EnumDef(Node):
    name: str
    variants: List[str]
    pos: Position = field(default_factory=Position)


@dataclass
class PointerDef(Node):
    name: str
    target: TypeSpec
    pos: Position = field(default_factory=Position)


@dataclass
class Param(Node):
    name: str
    var_type: TypeSpec
    byref: bool = False
    pos: Position = field(default_factory=Position)


@dataclass
class ProcedureDef(Node):
    name: str
    params: List[Param]
    body: List[Node]
    private: bool = False
    pos: Position = field(default_factory=Position)


@dataclass
class FunctionDef(Node):
    name: str
    params: List[Param]
    return_type: TypeSpec
    body: List[Node]
    private: bool = False
    pos: Position = field(default_factory=Position)


@dataclass
class ClassDef(Node):
    name: str
    base: Optional[str]
    members: List[Node]  # Declare, ProcedureDef and FunctionDef nodes
    pos: Position = field(default_factory=Position)


# Statements

@dataclass
class Assignment(Node):
    target: Node
    value: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class Input(Node):
    target: Node
    pos: Position = field(default_factory=Position)


@dataclass
class Output(Node):
    values: List[Expression]
    pos: Position = field(default_factory=Position)


@dataclass
class If(Node):
    condition: Expression
    then_body: List[Node]
    else_body: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class CaseClause(Node):
    value: Literal
    upper: Optional[Literal]  # set for `low TO high` labels
    body: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class Case(Node):
    subject: Expression
    clauses: List[CaseClause]
    otherwise: Optional[List[Node]]
    pos: Position = field(default_factory=Position)


@dataclass
class While(Node):
    condition: Expression
    body: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class Repeat(Node):
    body: List[Node]
    condition: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class For(Node):
    var: str
    start: Expression
    end: Expression
    step: Optional[Expression]
    body: List[Node]
    pos: Position = field(default_factory=Position)


@dataclass
class Return(Node):
    value: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class CallStmt(Node):
    call: Expression
    pos: Position = field(default_factory=Position)


# File statements

@dataclass
class OpenFile(Node):
    filename: Expression
    mode: str
    pos: Position = field(default_factory=Position)


@dataclass
class ReadFile(Node):
    filename: Expression
    target: Node
    pos: Position = field(default_factory=Position)


@dataclass
class WriteFile(Node):
    filename: Expression
    value: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class CloseFile(Node):
    filename: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class Seek(Node):
    filename: Expression
    position: Expression
    pos: Position = field(default_factory=Position)


@dataclass
class GetRecord(Node):
    filename: Expression
    target: Node
    pos: Position = field(default_factory=Position)


@dataclass
class PutRecord(Node):
    filename: Expression
    source: Node
    pos: Position = field(default_factory=Position)
