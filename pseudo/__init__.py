# Pseudocode interpreter package
# This package provides a parser and interpreter for CIE-style pseudocode.
from .interpreter import run_program, compile_module, parse_program, Interpreter, PseudoError

__all__ = [
    'run_program',
    'compile_module',
    'parse_program',
    'Interpreter',
    'PseudoError',
]
