from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional
from pseudo.errors import Position, fail
from pseudo.types import Cell, TypeSpec, check_value, copy_value


@dataclass
class Variable:
    """A name bound to a storage cell; aliases share the cell of another binding."""
    cell: Cell
    mutable: bool = True
    alias: bool = False

    @property
    def value(self) -> Any:
        return self.cell.value

    @property
    def spec(self) -> TypeSpec:
        return self.cell.spec


@dataclass
class Scope:
    kind: str  # 'global' or 'local'
    frame: bool = True  # first scope of a call frame
    variables: Dict[str, Variable] = field(default_factory=dict)


class Environment:
    """Stack of scopes; the global scope sits at the bottom and is never popped.

    By default lookups search every scope from the top of the stack down to
    the global scope. With `isolate_frames` a lookup only sees the scopes
    of the innermost call frame and then the global scope.
    """
    def __init__(self, defs: Any = None, isolate_frames: bool = False):
        self.defs = defs
        self.isolate_frames = isolate_frames
        self.scopes: List[Scope] = [Scope('global')]

    @property
    def depth(self) -> int:
        return len(self.scopes)

    @property
    def current(self) -> Scope:
        return self.scopes[-1]

    def enter_scope(self, frame: bool = True):
        self.scopes.append(Scope('local', frame))

    def exit_scope(self):
        if len(self.scopes) == 1:
            raise RuntimeError('cannot exit the global scope')
        self.scopes.pop()

    def _visible(self) -> Iterator[Scope]:
        if not self.isolate_frames:
            yield from reversed(self.scopes)
            return
        for scope in reversed(self.scopes[1:]):
            yield scope
            if scope.frame:
                break
        yield self.scopes[0]

    def declare(self, name: str, value: Any, spec: TypeSpec, mutable: bool = True,
                pos: Optional[Position] = None) -> Variable:
        if name in self.current.variables:
            raise fail('AlreadyDeclared', f'{name} is already declared', pos)
        variable = Variable(Cell(value, spec), mutable)
        self.current.variables[name] = variable
        return variable

    def bind_alias(self, name: str, cell: Cell, pos: Optional[Position] = None) -> Variable:
        if name in self.current.variables:
            raise fail('AlreadyDeclared', f'{name} is already declared', pos)
        variable = Variable(cell, True, alias=True)
        self.current.variables[name] = variable
        return variable

    def find(self, name: str) -> Optional[Variable]:
        for scope in self._visible():
            if name in scope.variables:
                return scope.variables[name]
        return None

    def lookup(self, name: str, pos: Optional[Position] = None) -> Variable:
        variable = self.find(name)
        if variable is None:
            raise fail('NotDeclared', f'{name} is not declared', pos)
        return variable

    def lookup_mut(self, name: str, pos: Optional[Position] = None) -> Variable:
        variable = self.lookup(name, pos)
        if not variable.mutable:
            raise fail('ImmutableAssignment', f'cannot assign to constant {name}', pos)
        return variable

    def store(self, cell: Cell, value: Any, pos: Optional[Position] = None):
        """Write a copy of `value` into `cell` after checking its type."""
        try:
            check_value(value, cell.spec, self.defs)
        except TypeError as e:
            raise fail('TypeMismatch', str(e), pos)
        cell.value = copy_value(value)

    def assign(self, name: str, value: Any, pos: Optional[Position] = None):
        variable = self.lookup_mut(name, pos)
        self.store(variable.cell, value, pos)
