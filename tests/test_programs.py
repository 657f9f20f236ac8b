import builtins
from pathlib import Path

from pseudo.interpreter import parse_program, Interpreter

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def run_example(name):
    source = (EXAMPLES / name).read_text(encoding='utf-8')
    ast = parse_program(source)
    interp = Interpreter()
    interp.run(ast)
    return interp


def test_hello(capsys):
    run_example('hello.pseudo')
    out = capsys.readouterr().out.strip()
    assert out == 'Hello World!!'


def test_arithmetic(capsys):
    run_example('arithmetic.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['3', '3', '3.5', '1', '-4', '-3', '14', '20', 'A is 7 and B is 2']


def test_bubble_sort(capsys):
    interp = run_example('bubble_sort.pseudo')
    out = capsys.readouterr().out.strip()
    assert out == '[1, 2, 3, 4, 5]'
    # loop variables stay declared after the loops
    assert interp.env.lookup('i').value == 4


def test_factorial(capsys):
    run_example('factorial.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['120', '2432902008176640000']


def test_swap(capsys):
    run_example('swap.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['2 1', '2']


def test_pets(capsys):
    run_example('pets.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['pet Rex', 'cat Tom with 8 lives']


def test_records(capsys):
    run_example('records.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['Ada 90 [0, 90, 0]', 'Spring', 'autumn', '42']


def test_grades(capsys):
    run_example('grades.pseudo')
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['3', 'pass']


def test_notes(capsys, tmp_path, monkeypatch):
    source = (EXAMPLES / 'notes.pseudo').read_text(encoding='utf-8')
    monkeypatch.chdir(tmp_path)
    Interpreter().run(parse_program(source))
    out = capsys.readouterr().out.strip().splitlines()
    assert out == ['first', '42', 'TRUE']
    assert (tmp_path / 'notes.txt').read_text(encoding='utf-8') == 'first\n42\nTRUE\n'


def test_greeting(capsys, monkeypatch):
    answers = iter(['Ada', '41'])
    monkeypatch.setattr(builtins, 'input', lambda prompt='': next(answers))
    run_example('greeting.pseudo')
    out = capsys.readouterr().out.strip()
    assert out == 'Hello Ada, next year you will be 42'
