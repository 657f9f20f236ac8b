"""Tree-walking interpreter for the pseudocode language.

The `Interpreter` owns all runtime state of one program run: the scope
stack, the definition table, the open files and the builtin library.
Statements are executed one at a time by `execute`; expressions arrive in
postfix order and are evaluated with a value stack by `evaluate`. Field,
array and method chains (`a.b[1].c(x)`) resolve to storage cells, which is
also how BYREF parameters, method receivers and pointers share state.

Debug output goes to `debug.txt` when `debug_level` is above zero.
"""

import builtins as py_builtins
import sys
from typing import Any, List, Optional, Tuple

from .ast import (
    Main, Node, Expression, Op, Literal, Var, ArrayVar, FunctionCall, Composite, CreateObject,
    Reference, Dereference, Declare, Constant, RecordDef, EnumDef, PointerDef, ProcedureDef,
    FunctionDef, ClassDef, Assignment, Input, Output, If, Case, CaseClause, While, Repeat, For,
    Return, CallStmt, OpenFile, ReadFile, WriteFile, CloseFile, Seek, GetRecord, PutRecord,
)
from .builtin_function import BuiltinFunction
from .definitions import ClassDefn, DefinitionTable, Routine
from .environment import Environment
from .errors import Position, PseudoError, ReturnSignal, fail
from .operators import UNARY_OPS, apply_binary, apply_unary
from .parser import parse_program
from .std import populate_builtins
from .std.io import BasicIO, fill_record, record_to_json
from .types import (
    ArrayVal, Cell, EnumVal, FieldProp, MethodProp, NullVal, ObjectVal, PointerVal, TypeSpec,
    check_value, copy_value, default_value, is_number, parse_boolean, parse_date, parse_integer,
    parse_real, to_string, to_text, type_name, type_of,
)

__all__ = ['Interpreter', 'PseudoError', 'parse_program', 'run_program', 'compile_module']

# Each pseudocode call nests about ten Python frames.
RECURSION_LIMIT = 20_000


def parse_input(text: str, spec: TypeSpec) -> Any:
    """Convert a line typed by the user into a value for a slot of type `spec`."""
    kind = spec.kind
    if kind == 'Integer':
        return parse_integer(text.strip())
    if kind == 'Real':
        return parse_real(text.strip())
    if kind == 'Boolean':
        return parse_boolean(text.strip())
    if kind == 'String':
        return text
    if kind == 'Char':
        if len(text) != 1:
            raise ValueError(f"{text!r} is not a single character")
        return text
    if kind == 'Date':
        return parse_date(text.strip())
    raise ValueError(f"cannot read a {spec!r} from the console")


class Interpreter:
    """Core interpreter that executes a pseudocode AST."""
    def __init__(self, debug_level: int = 0, debug_file: str = 'debug.txt', isolate_scopes: bool = False):
        self.defs = DefinitionTable()
        self.env = Environment(self.defs, isolate_frames=isolate_scopes)
        self.files = BasicIO()
        self.builtins = populate_builtins(self.files)
        # (receiver, class that defines the running method) for each method call in progress,
        # None while a free routine runs
        self.receivers: List[Optional[Tuple[ObjectVal, str]]] = []
        self.debug_level = debug_level
        self.debug_fp = open(debug_file, 'w') if debug_level > 0 else None
        if sys.getrecursionlimit() < RECURSION_LIMIT:
            sys.setrecursionlimit(RECURSION_LIMIT)

    @property
    def receiver(self) -> Optional[Tuple[ObjectVal, str]]:
        return self.receivers[-1] if self.receivers else None

    def debug(self, msg: str):
        if self.debug_fp:
            self.debug_fp.write(msg + '\n')
            self.debug_fp.flush()

    def run(self, program: Main) -> None:
        try:
            result = self.execute_block(program.body)
            if isinstance(result, ReturnSignal):
                raise fail('InvalidOperation', 'RETURN used outside of a function', result.pos)
        except RecursionError:
            raise fail('StackOverflow', 'program nests too deeply', program.pos)
        finally:
            self.files.close_all()
            if self.debug_fp:
                self.debug_fp.close()
                self.debug_fp = None

    ###########################################################################
    # Statements
    ###########################################################################

    def execute_block(self, statements: List[Node]) -> Optional[ReturnSignal]:
        for stmt in statements:
            result = self.execute(stmt)
            # propagate return signals
            if isinstance(result, ReturnSignal):
                return result
        return None

    def execute(self, node: Node) -> Optional[ReturnSignal]:
        if self.debug_level >= 1:
            self.debug(f"line {node.pos.line}: {type(node).__name__}")
        if isinstance(node, Declare):
            for name in node.names:
                self.env.declare(name, self.default_for(node.var_type, node.pos), node.var_type, True, node.pos)
                if self.debug_level >= 2:
                    self.debug(f"declare {name}: {node.var_type!r}")
            return None
        if isinstance(node, Constant):
            value = node.value.value
            self.env.declare(node.name, value, type_of(value), False, node.pos)
            if self.debug_level >= 2:
                self.debug(f"constant {node.name} = {to_string(value)}")
            return None
        if isinstance(node, Assignment):
            value = self.evaluate(node.value)
            self.write_target(node.target, value, node.pos)
            return None
        if isinstance(node, Output):
            print(''.join(to_string(self.evaluate(expr)) for expr in node.values))
            return None
        if isinstance(node, Input):
            self.execute_input(node)
            return None
        if isinstance(node, If):
            if self.condition(node.condition, 'IF'):
                return self.execute_block(node.then_body)
            return self.execute_block(node.else_body)
        if isinstance(node, While):
            while self.condition(node.condition, 'WHILE'):
                res = self.execute_block(node.body)
                if isinstance(res, ReturnSignal):
                    return res
            return None
        if isinstance(node, Repeat):
            while True:
                res = self.execute_block(node.body)
                if isinstance(res, ReturnSignal):
                    return res
                if self.condition(node.condition, 'UNTIL'):
                    return None
        if isinstance(node, For):
            return self.execute_for(node)
        if isinstance(node, Case):
            return self.execute_case(node)
        if isinstance(node, Return):
            return ReturnSignal(self.evaluate(node.value), node.pos)
        if isinstance(node, CallStmt):
            self.evaluate(node.call)
            return None
        if isinstance(node, (ProcedureDef, FunctionDef)):
            defn = self.defs.define_routine(node)
            if self.debug_level >= 2:
                self.debug(f"define {defn.kind} {defn.name}")
            return None
        if isinstance(node, RecordDef):
            self.defs.define_record(node)
            if self.debug_level >= 2:
                self.debug(f"define record {node.name}")
            return None
        if isinstance(node, ClassDef):
            self.defs.define_class(node)
            if self.debug_level >= 2:
                self.debug(f"define class {node.name}")
            return None
        if isinstance(node, EnumDef):
            self.defs.define_enum(node)
            for variant in node.variants:
                self.env.declare(variant.lower(), EnumVal(node.name, variant), TypeSpec.custom(node.name), False,
                                 node.pos)
            if self.debug_level >= 2:
                self.debug(f"define enumeration {node.name}")
            return None
        if isinstance(node, PointerDef):
            self.defs.define_pointer(node)
            if self.debug_level >= 2:
                self.debug(f"define pointer type {node.name} = ^{node.target!r}")
            return None
        if isinstance(node, (OpenFile, ReadFile, WriteFile, CloseFile, Seek, GetRecord, PutRecord)):
            self.execute_file(node)
            return None
        raise fail('InternalError', f"execute: unexpected node type {type(node).__name__}", node.pos)

    def default_for(self, spec: TypeSpec, pos: Position) -> Any:
        try:
            return default_value(spec, self.defs)
        except ValueError as e:
            raise fail('InvalidOperation', str(e), pos)

    def condition(self, expr: Expression, what: str) -> bool:
        value = self.evaluate(expr)
        if not isinstance(value, bool):
            raise fail('TypeMismatch', f"{what} condition must be BOOLEAN, not {type_name(value)}", expr.pos)
        if self.debug_level >= 3:
            self.debug(f"{what} condition -> {to_string(value)}")
        return value

    def integer(self, expr: Expression, what: str) -> int:
        value = self.evaluate(expr)
        if not is_number(value) or isinstance(value, float):
            raise fail('TypeMismatch', f"{what} must be INTEGER, not {type_name(value)}", expr.pos)
        return value

    def execute_for(self, node: For) -> Optional[ReturnSignal]:
        start = self.integer(node.start, 'FOR start')
        end = self.integer(node.end, 'FOR end')
        step = self.integer(node.step, 'FOR step') if node.step is not None else 1
        if step == 0:
            raise fail('InvalidOperation', 'FOR step cannot be 0', node.step.pos)
        variable = self.env.current.variables.get(node.var)
        if variable is None:
            variable = self.env.declare(node.var, start, TypeSpec.integer(), True, node.pos)
        elif variable.spec != TypeSpec.integer():
            raise fail('TypeMismatch', f"FOR variable {node.var} must be INTEGER, not {variable.spec!r}", node.pos)
        elif not variable.mutable:
            raise fail('ImmutableAssignment', f"cannot assign to constant {node.var}", node.pos)
        current = start
        while (current <= end) if step > 0 else (current >= end):
            variable.cell.value = current
            if self.debug_level >= 3:
                self.debug(f"FOR {node.var} = {current}")
            current += step
            res = self.execute_block(node.body)
            if isinstance(res, ReturnSignal):
                return res
        return None

    def execute_case(self, node: Case) -> Optional[ReturnSignal]:
        subject = self.evaluate(node.subject)
        for clause in node.clauses:
            if self.case_matches(subject, clause):
                return self.execute_block(clause.body)
        if node.otherwise is not None:
            return self.execute_block(node.otherwise)
        return None

    def case_matches(self, subject: Any, clause: CaseClause) -> bool:
        low = clause.value.value
        if clause.upper is None:
            return type_of(subject) == type_of(low) and subject == low
        high = clause.upper.value
        if all(is_number(v) for v in (subject, low, high)) or all(isinstance(v, str) for v in (subject, low, high)):
            return low <= subject <= high
        raise fail('TypeMismatch', f"cannot match a {type_name(subject)} against the range "
                                   f"{to_string(low)} TO {to_string(high)}", clause.pos)

    def execute_input(self, node: Input):
        cell = self.resolve_cell(node.target, write=True)
        try:
            text = py_builtins.input()
        except EOFError:
            text = ''
        try:
            value = parse_input(text.rstrip('\r\n'), cell.spec)
        except ValueError:
            raise fail('InvalidInputValue', f"input is not {cell.spec!r}", node.pos)
        self.env.store(cell, value, node.pos)

    def execute_file(self, node: Node):
        filename = self.evaluate(node.filename)
        if not isinstance(filename, str):
            raise fail('TypeMismatch', f"file name must be a STRING, not {type_name(filename)}", node.filename.pos)
        if isinstance(node, OpenFile):
            self.files.open_file(filename, node.mode, node.pos)
        elif isinstance(node, CloseFile):
            self.files.close_file(filename, node.pos)
        elif isinstance(node, ReadFile):
            line = self.files.read_line(filename, node.pos)
            self.write_target(node.target, line, node.pos)
        elif isinstance(node, WriteFile):
            value = self.evaluate(node.value)
            self.files.write_line(filename, to_string(value), node.pos)
        elif isinstance(node, Seek):
            self.files.seek(filename, self.integer(node.position, 'SEEK position'), node.pos)
        elif isinstance(node, GetRecord):
            cell = self.resolve_cell(node.target, write=True)
            if not isinstance(cell.value, ObjectVal):
                raise fail('TypeMismatch', f"GETRECORD needs a record, not {type_name(cell.value)}", node.pos)
            record = copy_value(cell.value)
            fill_record(record, self.files.get_record(filename, node.pos), self.defs, node.pos)
            self.env.store(cell, record, node.pos)
        else:
            value = self.resolve_cell(node.source, write=False).value
            if not isinstance(value, ObjectVal):
                raise fail('TypeMismatch', f"PUTRECORD needs a record, not {type_name(value)}", node.pos)
            self.files.put_record(filename, record_to_json(value, node.pos), node.pos)
        if self.debug_level >= 2:
            self.debug(f"{type(node).__name__} {filename}")

    ###########################################################################
    # Expressions
    ###########################################################################

    def evaluate(self, expr: Expression) -> Any:
        stack: List[Any] = []
        for item in expr.items:
            if isinstance(item, Op):
                if item.op in UNARY_OPS:
                    if not stack:
                        raise fail('InternalError', f"missing operand for {item.op}", item.pos)
                    stack.append(apply_unary(item.op, stack.pop(), item.pos))
                else:
                    if len(stack) < 2:
                        raise fail('InternalError', f"missing operand for {item.op}", item.pos)
                    right = stack.pop()
                    left = stack.pop()
                    stack.append(apply_binary(item.op, left, right, item.pos))
            else:
                stack.append(self.evaluate_operand(item))
        if len(stack) != 1:
            raise fail('InternalError', 'malformed expression', expr.pos)
        if self.debug_level >= 4:
            self.debug(f"expression at {expr.pos} -> {to_string(stack[0])}")
        return stack[0]

    def evaluate_operand(self, node: Node) -> Any:
        if isinstance(node, Literal):
            return node.value
        if isinstance(node, Var):
            return self.env.lookup(node.name, node.pos).value
        if isinstance(node, FunctionCall):
            return self.call_named(node)
        if isinstance(node, CreateObject):
            return self.create_object(node)
        if isinstance(node, Reference):
            return PointerVal(self.resolve_cell(node.target, write=True))
        if isinstance(node, (ArrayVar, Composite, Dereference)):
            return self.resolve_cell(node, write=False).value
        if isinstance(node, Expression):
            return self.evaluate(node)
        raise fail('InternalError', f"evaluate: unexpected node type {type(node).__name__}", node.pos)

    ###########################################################################
    # Storage cells: variables, array elements, fields and pointers
    ###########################################################################

    def write_target(self, target: Node, value: Any, pos: Position):
        if isinstance(target, Var):
            self.env.assign(target.name, value, pos)
        else:
            self.env.store(self.resolve_cell(target, write=True), value, pos)

    def resolve_cell(self, node: Node, write: bool) -> Cell:
        if isinstance(node, Var):
            if write:
                return self.env.lookup_mut(node.name, node.pos).cell
            return self.env.lookup(node.name, node.pos).cell
        if isinstance(node, ArrayVar):
            base = self.resolve_cell(Var(node.name, node.pos), write)
            return self.index_cell(base.value, node.indices, node.name, node.pos)
        if isinstance(node, Dereference):
            pointer = self.resolve_cell(node.target, write=False).value
            return self.deref(pointer, node.pos)
        if isinstance(node, Composite):
            return self.resolve_composite(node, write)
        raise fail('InvalidOperation', 'expression does not name a storage location', node.pos)

    def deref(self, pointer: Any, pos: Position) -> Cell:
        if isinstance(pointer, PointerVal):
            return pointer.cell
        if isinstance(pointer, NullVal):
            raise fail('InvalidOperation', 'cannot dereference a NULL pointer', pos)
        raise fail('TypeMismatch', f"cannot dereference a {type_name(pointer)}", pos)

    def index_cell(self, array: Any, indices: List[Expression], name: str, pos: Position) -> Cell:
        if not isinstance(array, ArrayVal):
            raise fail('TypeMismatch', f"{name} is a {type_name(array)}, not an array", pos)
        values = [self.integer(index, 'array index') for index in indices]
        try:
            return array.cells[array.flat_index(values)]
        except ValueError as e:
            raise fail('MissingIndices', f"{name}: {e}", pos)
        except IndexError as e:
            raise fail('IndexOutOfBounds', str(e), pos)

    def resolve_composite(self, node: Composite, write: bool) -> Cell:
        parts = node.parts
        base = parts[0]
        if self.is_super_call(parts):
            cell = Cell(self.call_super(parts[1]), TypeSpec.null())
            rest = parts[2:]
        elif isinstance(base, FunctionCall):
            if write:
                raise fail('InvalidOperation', 'cannot assign through the result of a call', base.pos)
            cell = Cell(self.call_named(base), TypeSpec.null())
            rest = parts[1:]
        else:
            cell = self.resolve_cell(base, write)
            rest = parts[1:]
        for part in rest:
            if isinstance(part, FunctionCall):
                if write:
                    raise fail('InvalidOperation', 'cannot assign through the result of a call', part.pos)
                cell = Cell(self.call_method(cell.value, part), TypeSpec.null())
            else:
                cell = self.property_cell(cell.value, part)
        return cell

    def property_cell(self, obj: Any, part: Node) -> Cell:
        name = part.name
        if not isinstance(obj, ObjectVal):
            raise fail('InvalidPropertyAccess', f"cannot access property {name} of a {type_name(obj)}", part.pos)
        prop = obj.props.get(name)
        if prop is None:
            raise fail('InvalidPropertyAccess', f"{obj.type_name} has no property {name}", part.pos)
        if not isinstance(prop, FieldProp):
            raise fail('InvalidPropertyAccess', f"{name} is a method of {obj.type_name}, not a field", part.pos)
        if prop.private:
            raise fail('InvalidPropertyAccess', f"property {name} of {obj.type_name} is private", part.pos)
        if isinstance(part, ArrayVar):
            return self.index_cell(prop.cell.value, part.indices, name, part.pos)
        return prop.cell

    ###########################################################################
    # Calls
    ###########################################################################

    def call_named(self, node: FunctionCall) -> Any:
        builtin = self.builtins.get(node.name.upper())
        if builtin is not None:
            return self.call_builtin(builtin, node)
        if self.receiver is not None:
            obj = self.receiver[0]
            prop = obj.props.get(node.name)
            if isinstance(prop, MethodProp):
                return self.invoke_method(obj, prop, node.args, node.pos)
        defn = self.defs.lookup(node.name, node.pos)
        if not isinstance(defn, Routine):
            raise fail('InvalidOperation', f"{node.name} is not a procedure or function", node.pos)
        bound = self.bind_arguments(defn, node.args, node.pos)
        self.receivers.append(None)
        try:
            return self.run_routine(defn, bound, node.pos)
        finally:
            self.receivers.pop()

    def call_builtin(self, builtin: BuiltinFunction, node: FunctionCall) -> Any:
        if len(node.args) != builtin.arity:
            raise fail('InvalidArgumentCount',
                       f"{builtin.name} expects {builtin.arity} argument(s), got {len(node.args)}", node.pos)
        values = [self.evaluate(arg) for arg in node.args]
        expected = builtin.expected(values[0] if values else None)
        for value, spec, arg in zip(values, expected, node.args):
            if type_of(value) != spec:
                raise fail('ParameterTypeMismatch',
                           f"cannot pass {type_name(value)} to {builtin.name} parameter of type {spec!r}", arg.pos)
        if self.debug_level >= 2:
            self.debug(f"call builtin {builtin.name}")
        return builtin.fn([to_text(value) for value in values], node.pos)

    @staticmethod
    def reference_target(arg: Expression) -> Optional[Node]:
        if len(arg.items) != 1:
            return None
        item = arg.items[0]
        if isinstance(item, (Var, ArrayVar, Dereference)):
            return item
        if isinstance(item, Composite) and not isinstance(item.parts[-1], FunctionCall):
            return item
        return None

    def bind_arguments(self, defn: Routine, args: List[Expression], pos: Position) -> List[Any]:
        """Evaluate call arguments in the caller's scope.

        BYVAL parameters get a copy of the argument value, BYREF parameters
        get the storage cell the argument names.
        """
        if len(args) != len(defn.params):
            raise fail('InvalidArgumentCount',
                       f"{defn.name} expects {len(defn.params)} argument(s), got {len(args)}", pos)
        bound: List[Any] = []
        for param, arg in zip(defn.params, args):
            if param.byref:
                target = self.reference_target(arg)
                if target is None:
                    raise fail('InvalidOperation',
                               f"argument for BYREF parameter {param.name} must be a variable", arg.pos)
                cell = self.resolve_cell(target, write=True)
                if cell.spec != param.var_type:
                    raise fail('ParameterTypeMismatch',
                               f"cannot pass {cell.spec!r} to BYREF parameter {param.name} of type "
                               f"{param.var_type!r}", arg.pos)
                bound.append(cell)
            else:
                value = self.evaluate(arg)
                try:
                    check_value(value, param.var_type, self.defs)
                except TypeError:
                    raise fail('ParameterTypeMismatch',
                               f"cannot pass {type_name(value)} to parameter {param.name} of type "
                               f"{param.var_type!r}", arg.pos)
                bound.append(copy_value(value))
        return bound

    def run_routine(self, defn: Routine, bound: List[Any], pos: Position, frame: bool = True) -> Any:
        if self.debug_level >= 2:
            self.debug(f"call {defn.kind} {defn.name}")
        self.env.enter_scope(frame)
        if self.debug_level >= 4:
            self.debug(f"enter scope {self.env.depth}")
        try:
            for param, arg in zip(defn.params, bound):
                if param.byref:
                    self.env.bind_alias(param.name, arg, param.pos)
                else:
                    self.env.declare(param.name, arg, param.var_type, True, param.pos)
            result = self.execute_block(defn.body)
        except RecursionError:
            raise fail('StackOverflow', f"too many nested calls of {defn.name}", pos)
        finally:
            if self.debug_level >= 4:
                self.debug(f"exit scope {self.env.depth}")
            self.env.exit_scope()
        if isinstance(result, ReturnSignal):
            if not defn.returns:
                raise fail('InvalidOperation', f"cannot RETURN a value from procedure {defn.name}", result.pos)
            try:
                check_value(result.value, defn.return_type, self.defs)
            except TypeError as e:
                raise fail('TypeMismatch', f"function {defn.name} returns {defn.return_type!r}: {e}", result.pos)
            return result.value
        if defn.returns:
            raise fail('MissingReturn', f"function {defn.name} ended without RETURN", pos)
        return NullVal()

    def invoke_method(self, obj: ObjectVal, method: MethodProp, args: List[Expression], pos: Position) -> Any:
        bound = self.bind_arguments(method.defn, args, pos)
        self.env.enter_scope()
        self.receivers.append((obj, method.owner))
        try:
            for name, prop in obj.props.items():
                if isinstance(prop, FieldProp):
                    self.env.bind_alias(name, prop.cell, pos)
            return self.run_routine(method.defn, bound, pos, frame=False)
        finally:
            self.receivers.pop()
            self.env.exit_scope()

    def call_method(self, obj: Any, part: FunctionCall) -> Any:
        if not isinstance(obj, ObjectVal):
            raise fail('InvalidPropertyAccess', f"cannot call method {part.name} on a {type_name(obj)}", part.pos)
        prop = obj.props.get(part.name)
        if not isinstance(prop, MethodProp):
            raise fail('InvalidPropertyAccess', f"{obj.type_name} has no method {part.name}", part.pos)
        if prop.private:
            raise fail('InvalidPropertyAccess', f"method {part.name} of {obj.type_name} is private", part.pos)
        return self.invoke_method(obj, prop, part.args, part.pos)

    def is_super_call(self, parts: List[Node]) -> bool:
        return (len(parts) > 1 and isinstance(parts[0], Var) and parts[0].name == 'super'
                and isinstance(parts[1], FunctionCall) and self.receiver is not None
                and self.env.find('super') is None)

    def call_super(self, part: FunctionCall) -> Any:
        obj, owner = self.receiver
        owner_defn = self.defs.lookup(owner, part.pos)
        if owner_defn.base is None:
            raise fail('InvalidPropertyAccess', f"class {owner} has no base class", part.pos)
        base = self.defs.lookup(owner_defn.base, part.pos)
        prop = base.props.get(part.name)
        if not isinstance(prop, MethodProp):
            raise fail('InvalidPropertyAccess', f"{base.name} has no method {part.name}", part.pos)
        return self.invoke_method(obj, prop, part.args, part.pos)

    def create_object(self, node: CreateObject) -> ObjectVal:
        defn = self.defs.lookup(node.class_name, node.pos)
        if not isinstance(defn, ClassDefn):
            raise fail('TypeMismatch', f"{node.class_name} is not a class", node.pos)
        ctor = defn.props.get('new')
        if not isinstance(ctor, MethodProp):
            raise fail('ConstructorMissing', f"class {defn.name} has no NEW constructor", node.pos)
        if ctor.private:
            raise fail('ConstructorPrivate', f"constructor of class {defn.name} is private", node.pos)
        obj = defn.instantiate()
        if self.debug_level >= 2:
            self.debug(f"construct {defn.name}")
        self.invoke_method(obj, ctor, node.args, node.pos)
        return copy_value(obj)


def run_program(source: str, debug_level: int = 0, isolate_scopes: bool = False) -> Interpreter:
    """Convenience function to parse and run a program from a source string."""
    ast_program = parse_program(source)
    interpreter = Interpreter(debug_level=debug_level, isolate_scopes=isolate_scopes)
    interpreter.run(ast_program)
    return interpreter


def compile_module(file_path: str, debug_level: int = 0) -> Interpreter:
    """Parse and run a program file, returning the interpreter instance."""
    with open(file_path, 'r', encoding='utf-8') as f:
        source = f.read()
    return run_program(source, debug_level=debug_level)
