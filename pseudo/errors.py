from dataclasses import dataclass
from typing import Any, Optional
from pseudo.types import ErrorVal


@dataclass(frozen=True)
class Position:
    """Source span of a node: 1-based line and column, end inclusive."""
    line: int = 0
    column: int = 0
    end_line: int = 0
    end_column: int = 0

    @staticmethod
    def from_meta(meta) -> 'Position':
        if getattr(meta, 'empty', True):
            return Position()
        return Position(meta.line, meta.column, meta.end_line, meta.end_column)

    @staticmethod
    def from_token(token) -> 'Position':
        return Position(token.line, token.column, token.end_line, token.end_column)

    def __str__(self) -> str:
        return f"line {self.line}, column {self.column}"


class PseudoError(Exception):
    """Exception type used to propagate pseudocode runtime and syntax errors."""
    def __init__(self, err: ErrorVal, pos: Optional[Position] = None):
        text = f"{err.name}: {err.message}"
        if pos is not None and pos.line:
            text += f" ({pos})"
        super().__init__(text)
        self.err = err
        self.pos = pos

    @property
    def name(self) -> str:
        return self.err.name

    @property
    def message(self) -> str:
        return self.err.message


def fail(name: str, message: str, pos: Optional[Position] = None) -> PseudoError:
    return PseudoError(ErrorVal(name, message), pos)


class ReturnSignal:
    """Carries a RETURN value up through nested statement blocks."""
    def __init__(self, value: Any, pos: Optional[Position] = None):
        self.value = value
        self.pos = pos

    def __repr__(self) -> str:
        return f"ReturnSignal({self.value!r})"
