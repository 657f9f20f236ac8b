"""Global table of named definitions.

Procedures, functions, classes, records, enumerations and pointer types
share one namespace. A name is defined once for the lifetime of the
interpreter; definitions take effect at the point the declaring statement
executes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pseudo.ast import ClassDef, Declare, EnumDef, FunctionDef, Param, PointerDef, ProcedureDef, RecordDef
from pseudo.errors import Position, fail
from pseudo.types import (
    EnumVal, FieldProp, MethodProp, NullVal, ObjectVal, TypeSpec, Cell, copy_value, default_value
)


@dataclass
class Routine:
    name: str
    params: List[Param]
    body: List[Any]
    returns: bool
    return_type: Optional[TypeSpec] = None
    pos: Position = field(default_factory=Position)

    @property
    def kind(self) -> str:
        return 'function' if self.returns else 'procedure'


@dataclass
class RecordDefn:
    name: str
    props: Dict[str, FieldProp]

    def instantiate(self) -> ObjectVal:
        return copy_value(ObjectVal(self.name, self.props))


@dataclass
class ClassDefn:
    name: str
    base: Optional[str]
    props: Dict[str, Any]

    def instantiate(self) -> ObjectVal:
        return copy_value(ObjectVal(self.name, self.props))


@dataclass
class EnumDefn:
    name: str
    variants: List[str]


@dataclass
class PointerDefn:
    name: str
    target: TypeSpec


class DefinitionTable:
    def __init__(self):
        self.definitions: Dict[str, Any] = {}

    def __contains__(self, name: str) -> bool:
        return name in self.definitions

    def get(self, name: str) -> Any:
        return self.definitions.get(name)

    def lookup(self, name: str, pos: Optional[Position] = None) -> Any:
        if name not in self.definitions:
            raise fail('NotDeclared', f'{name} is not declared', pos)
        return self.definitions[name]

    def declare(self, name: str, defn: Any, pos: Optional[Position] = None) -> Any:
        if name in self.definitions:
            raise fail('AlreadyDeclared', f'{name} is already declared', pos)
        self.definitions[name] = defn
        return defn

    def pointer_target(self, name: str) -> Optional[TypeSpec]:
        defn = self.definitions.get(name)
        return defn.target if isinstance(defn, PointerDefn) else None

    def default_for(self, name: str, pos: Optional[Position] = None) -> Any:
        defn = self.lookup(name, pos)
        if isinstance(defn, (ClassDefn, RecordDefn)):
            return defn.instantiate()
        if isinstance(defn, EnumDefn):
            return EnumVal(defn.name, defn.variants[0])
        if isinstance(defn, PointerDefn):
            return NullVal()
        raise fail('TypeMismatch', f'{name} is a {defn.kind}, not a type', pos)

    def _default(self, spec: TypeSpec, pos: Position) -> Any:
        try:
            return default_value(spec, self)
        except ValueError as e:
            raise fail('InvalidOperation', str(e), pos)

    def _fields(self, decl: Declare, props: Dict[str, Any], owner: str):
        for name in decl.names:
            if name in props:
                raise fail('AlreadyDeclared', f'property {name} already exists in {owner}', decl.pos)
            props[name] = FieldProp(Cell(self._default(decl.var_type, decl.pos), decl.var_type), decl.private)

    # Builders for the declaring statements

    def define_routine(self, node: Any) -> Routine:
        return self.declare(node.name, self.routine(node), node.pos)

    @staticmethod
    def routine(node: Any) -> Routine:
        if isinstance(node, FunctionDef):
            return Routine(node.name, node.params, node.body, True, node.return_type, node.pos)
        return Routine(node.name, node.params, node.body, False, None, node.pos)

    def define_record(self, node: RecordDef) -> RecordDefn:
        if node.name in self.definitions:
            raise fail('AlreadyDeclared', f'{node.name} is already declared', node.pos)
        props: Dict[str, Any] = {}
        for decl in node.fields:
            self._fields(decl, props, node.name)
        return self.declare(node.name, RecordDefn(node.name, props), node.pos)

    def define_enum(self, node: EnumDef) -> EnumDefn:
        if len({variant.lower() for variant in node.variants}) != len(node.variants):
            raise fail('AlreadyDeclared', f'duplicate variant in enumeration {node.name}', node.pos)
        return self.declare(node.name, EnumDefn(node.name, list(node.variants)), node.pos)

    def define_pointer(self, node: PointerDef) -> PointerDefn:
        return self.declare(node.name, PointerDefn(node.name, node.target), node.pos)

    def define_class(self, node: ClassDef) -> ClassDefn:
        if node.name in self.definitions:
            raise fail('AlreadyDeclared', f'{node.name} is already declared', node.pos)
        inherited: Dict[str, Any] = {}
        if node.base is not None:
            base = self.lookup(node.base, node.pos)
            if not isinstance(base, ClassDefn):
                raise fail('TypeMismatch', f'{node.base} is not a class', node.pos)
            inherited = dict(base.instantiate().props)
        own: Dict[str, Any] = {}
        for member in node.members:
            if isinstance(member, Declare):
                self._fields(member, own, node.name)
            elif isinstance(member, (ProcedureDef, FunctionDef)):
                if member.name in own:
                    raise fail('AlreadyDeclared', f'property {member.name} already exists in {node.name}',
                               member.pos)
                own[member.name] = MethodProp(self.routine(member), member.private, node.name)
        inherited.update(own)
        return self.declare(node.name, ClassDefn(node.name, node.base, inherited), node.pos)
