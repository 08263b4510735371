'''
RPN command line tests
'''

import io

from prompt_toolkit.application import create_app_session
from prompt_toolkit.input import create_pipe_input
from prompt_toolkit.output import DummyOutput

from rpn_calculator.cli import CLI, InteractiveInput
from rpn_calculator.evaluation import format_number, format_dump
from rpn_calculator.machine import StackDump, MemoryDump

from pytest import mark, raises


@mark.parametrize('number, text', [
    (10.0, '10'),
    (-3.0, '-3'),
    (-0.0, '0'),
    (2.5, '2.5'),
    (0.1 + 0.2, '0.30000000000000004'),
    (2.0 ** 53, '9007199254740992'),
    (1e300, '1e+300'),
])
def test_format_number(number, text):
    assert format_number(number) == text


def test_format_dump():
    assert format_dump(StackDump((1.0, 2.5))) == 'STACK:\n\t1\n\t2.5'
    assert format_dump(MemoryDump(())) == 'MEMORY:\n\t(empty)'


def test_expression(capsys):
    assert CLI().run(args=['-e', '5', '1', '2', '+', '4', '*', '+', '3',
                           '-']) == 0
    out, err = capsys.readouterr()
    assert out == '14\n'
    assert err == ''


def test_quoted_expression(capsys):
    assert CLI().run(args=['-e', '1 2 ? + 3 /']) == 0
    out, _ = capsys.readouterr()
    assert out == 'STACK:\n\t1\n\t2\n1\n'


def test_expression_error(capsys):
    assert CLI().run(args=['-e', '3 0 /']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert "Division by zero: '/' at token 2" in err


def test_empty_expression(capsys):
    assert CLI().run(args=['-e']) == 1
    _, err = capsys.readouterr()
    assert 'Malformed expression: 0 value(s)' in err


def test_stdin(monkeypatch, capsys):
    monkeypatch.setattr('sys.stdin', io.StringIO('5 !\n\n@\n2 8 +\n'))
    assert CLI().run(args=[]) == 1
    out, err = capsys.readouterr()
    assert out == '10\n'
    # Memory does not survive from one line to the next.
    assert 'Malformed expression' in err
    assert "Memory undefined: '@' at token 0" in err


def test_dump(capsys):
    assert CLI().run(args=['-D', '-e', '-3 4 x']) == 0
    out, _ = capsys.readouterr()
    assert out.splitlines() == [
        '[kind]\t<repr(text)>\t<index>',
        "number\t'-3'\t0",
        "number\t'4'\t1",
        "operator\t'x'\t2",
    ]


def test_dump_bad_token(capsys):
    assert CLI().run(args=['-D', '-e', '1 y']) == 1
    _, err = capsys.readouterr()
    assert "Couldn't lex 'y' at token 1" in err


def test_raw_grammar(capsys):
    assert CLI().run(args=['-G']) == 0
    out, _ = capsys.readouterr()
    assert '(?<number>' in out
    assert '(?<operator>' in out


def test_test_info(capsys):
    assert CLI().run(args=['-t']) == 0
    out, _ = capsys.readouterr()
    assert 'STACK:\n\t10\n\t20\n30\n' in out
    assert 'MEMORY:\n\t70\n70\n' in out


def test_exclusive_actions(capsys):
    with raises(SystemExit) as info:
        CLI().run(args=['-D', '-G'])
    assert info.value.code == 2


def test_out_of_range_fails(capsys):
    assert CLI().run(args=['-e', '1e308 10 *']) == 1
    out, err = capsys.readouterr()
    assert out == ''
    assert "Result out of range (inf): '*' at token 2" in err


def test_interactive_input():
    with create_pipe_input() as pipe:
        pipe.send_text('2 8 +\r1 ?\r\x04')
        with create_app_session(input=pipe, output=DummyOutput()):
            assert list(InteractiveInput('$ ')) == ['2 8 +', '1 ?']


def test_prompt(capsys):
    with create_pipe_input() as pipe:
        pipe.send_text('2 8 +\r\r5 !\r3 X 1 -\r\x04')
        with create_app_session(input=pipe, output=DummyOutput()):
            assert CLI().run(args=['-p', '$ ']) == 1
    out, err = capsys.readouterr()
    assert out == '10\n'
    assert 'Malformed expression: 0 value(s)' in err
    assert "Stack underflow: 'X' at token 1" in err
