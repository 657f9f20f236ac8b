"""CLI entry point for the pseudocode interpreter.

Usage:
    python -m pseudo [-v|-vv|-vvv|-vvvv] [--isolate-scopes] <program_file>
    python -m pseudo [-v...] --emit-ast <program_file>
    python -m pseudo [-v...] --ast <ast_json_file>

Options:
  -v                Increase debug verbosity (can be repeated)
  --isolate-scopes  Hide the caller's local variables from called routines
  --emit-ast        Parse the given program file and emit an AST JSON file
  --ast             Execute a previously emitted AST JSON file

Debug information is written to `debug.txt` in the current directory when
verbosity is greater than zero. Errors are reported on stderr together
with the offending source line and the process exits with status 1.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional

from .interpreter import parse_program, Interpreter, PseudoError
from .ast import Main
from .ast_json import ast_to_obj, ast_from_obj


def report(e: PseudoError, source: Optional[str] = None) -> None:
    print(f"Runtime error: {e}", file=sys.stderr)
    if source is None or e.pos is None or not e.pos.line:
        return
    lines = source.splitlines()
    if e.pos.line <= len(lines):
        print(f"  {lines[e.pos.line - 1]}", file=sys.stderr)
        print("  " + " " * max(e.pos.column - 1, 0) + "^", file=sys.stderr)


def read_source(path: Path) -> str:
    if not path.exists():
        print(f"Error: file {path} not found", file=sys.stderr)
        sys.exit(1)
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def main(argv: Optional[List[str]] = None) -> None:
    parser = argparse.ArgumentParser(description="Pseudocode interpreter")
    parser.add_argument('-v', action='count', default=0, help='increase debug verbosity (can be repeated)')
    parser.add_argument('--isolate-scopes', action='store_true',
                        help="hide the caller's local variables from called procedures and functions")
    group = parser.add_mutually_exclusive_group()
    group.add_argument('--emit-ast', metavar='PROGRAM_FILE', help='emit AST JSON for the given program file')
    group.add_argument('--ast', metavar='AST_JSON_FILE', help='execute AST from a JSON file')
    parser.add_argument('program', nargs='?', help='pseudocode program file to execute')
    args = parser.parse_args(argv)

    # Emit AST mode
    if args.emit_ast:
        program_file = Path(args.emit_ast)
        source = read_source(program_file)
        try:
            ast_program = parse_program(source)
        except PseudoError as e:
            report(e, source)
            sys.exit(1)
        obj = ast_to_obj(ast_program)
        out_path = program_file.with_name(program_file.name + '.ast.json')
        with open(out_path, 'w', encoding='utf-8') as out:
            json.dump(obj, out, ensure_ascii=False, indent=2)
        print(str(out_path))
        return

    # Execute from AST JSON
    if args.ast:
        ast_path = Path(args.ast)
        try:
            ast_program = ast_from_obj(json.loads(read_source(ast_path)))
        except (ValueError, TypeError, KeyError) as e:
            print(f"Error: {ast_path} is not a valid AST file: {e}", file=sys.stderr)
            sys.exit(1)
        if not isinstance(ast_program, Main):
            print(f"Error: {ast_path} does not hold a program", file=sys.stderr)
            sys.exit(1)
        interpreter = Interpreter(debug_level=args.v, isolate_scopes=args.isolate_scopes)
        try:
            interpreter.run(ast_program)
        except PseudoError as e:
            report(e)
            sys.exit(1)
        return

    # Default: execute source file
    if not args.program:
        parser.error('missing program file; or use --emit-ast/--ast')
    source = read_source(Path(args.program))
    try:
        ast_program = parse_program(source)
        interpreter = Interpreter(debug_level=args.v, isolate_scopes=args.isolate_scopes)
        interpreter.run(ast_program)
    except PseudoError as e:
        report(e, source)
        sys.exit(1)


if __name__ == '__main__':
    main()
