import datetime

import pytest

from pseudo.errors import PseudoError
from pseudo.interpreter import run_program
from pseudo.std import populate_builtins
from pseudo.std.io import BasicIO


def output(source, capsys):
    run_program(source)
    return capsys.readouterr().out.strip().splitlines()


def error_of(source):
    with pytest.raises(PseudoError) as excinfo:
        run_program(source)
    return excinfo.value


def test_string_functions(capsys):
    source = '''
OUTPUT LEFT("HELLO", 3)
OUTPUT RIGHT("HELLO", 2)
OUTPUT MID("HELLO", 2, 3)
OUTPUT LENGTH("HELLO")
OUTPUT TO_UPPER("MiXed"), TO_LOWER("MiXed")
'''
    assert output(source, capsys) == ['HEL', 'LO', 'ELL', '5', 'MIXEDmixed']


def test_names_are_case_insensitive(capsys):
    assert output('OUTPUT length("abc"), Left("abc", 1)\n', capsys) == ['3a']


def test_length_errors():
    for call in ('LEFT("HI", 5)', 'RIGHT("HI", 3)', 'MID("HELLO", 0, 1)', 'MID("HELLO", 4, 3)', 'LEFT("HI", -1)'):
        err = error_of(f'OUTPUT {call}\n')
        assert err.name == 'InvalidArgument', call


def test_numeric_conversions(capsys):
    source = '''
OUTPUT NUM_TO_STR(42) & "|" & NUM_TO_STR(3.5)
OUTPUT STR_TO_NUM("12") + 1
OUTPUT STR_TO_NUM("1.5") * 2
OUTPUT IS_NUM("12.5"), IS_NUM("abc")
OUTPUT INT(-3.7), " ", INT(8)
'''
    assert output(source, capsys) == ['42|3.5', '13', '3', 'TRUEFALSE', '-3 8']


def test_str_to_num_rejects_text():
    assert error_of('OUTPUT STR_TO_NUM("ten")\n').name == 'InvalidArgument'


def test_characters(capsys):
    assert output('OUTPUT CHR(65), ASC("A"), ASC(\'z\')\n', capsys) == ['A65122']
    assert error_of('OUTPUT ASC("AB")\n').name == 'InvalidArgument'
    assert error_of('OUTPUT CHR(256)\n').name == 'InvalidArgument'


def test_rand_range():
    fn = populate_builtins(BasicIO())['RAND'].fn
    for _ in range(200):
        value = fn(['1'], None)
        assert isinstance(value, float)
        assert 0 <= value < 1
    assert 0 <= fn(['6'], None) < 6


def test_rand_needs_positive_bound():
    assert error_of('OUTPUT RAND(0)\n').name == 'InvalidArgument'


def test_dates(capsys):
    source = '''
DECLARE D : DATE
D <- SETDATE(25, 12, 2023)
OUTPUT D
OUTPUT DAY(D), "/", MONTH(D), "/", YEAR(D)
OUTPUT DAYINDEX(D), " ", DAYINDEX(24/12/2023)
'''
    assert output(source, capsys) == ['25-12-2023', '25/12/2023', '2 1']


def test_setdate_validates():
    assert error_of('OUTPUT SETDATE(31, 2, 2023)\n').name == 'InvalidArgument'


def test_today():
    interp = run_program('DECLARE D : DATE\nD <- TODAY()\n')
    assert interp.env.lookup('d').value == datetime.date.today()


def test_argument_count():
    assert error_of('OUTPUT LEFT("abc")\n').name == 'InvalidArgumentCount'
    assert error_of('OUTPUT TODAY(1)\n').name == 'InvalidArgumentCount'


def test_argument_types():
    assert error_of('OUTPUT LENGTH(5)\n').name == 'ParameterTypeMismatch'
    assert error_of('OUTPUT INT("5")\n').name == 'ParameterTypeMismatch'
    assert error_of('OUTPUT LEFT("abc", 1.0)\n').name == 'ParameterTypeMismatch'


def test_eof_needs_read_mode(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    err = error_of('OPENFILE "out.txt" FOR WRITE\nOUTPUT EOF("out.txt")\n')
    assert err.name == 'FileModeMismatch'
