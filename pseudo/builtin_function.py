from dataclasses import dataclass
from typing import Any, Optional, Tuple
from pseudo.types import TypeSpec, is_number


@dataclass
class BuiltinFunction:
    """A native function callable from pseudocode.

    `params` lists the expected argument types. `None` marks a function with
    one numeric parameter whose expected type is taken from the argument
    itself (INTEGER for an integer, REAL otherwise).
    """
    name: str
    params: Optional[Tuple[TypeSpec, ...]]
    return_type: Optional[TypeSpec]
    fn: Any

    @property
    def arity(self) -> int:
        return 1 if self.params is None else len(self.params)

    def expected(self, first: Any = None) -> Tuple[TypeSpec, ...]:
        if self.params is not None:
            return self.params
        if is_number(first) and not isinstance(first, float):
            return (TypeSpec.integer(),)
        return (TypeSpec.real(),)

    def __repr__(self) -> str:
        return f"<builtin {self.name}>"
