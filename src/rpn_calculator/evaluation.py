from collections import namedtuple

from .util import RPNError
from .lexer import Lexer
from .machine import Machine


class Evaluation(namedtuple('Evaluation', 'value error emitted')):
    '''
    Outcome of evaluating one expression.

    Exactly one of ``value`` and ``error`` is set. ``emitted`` holds the
    StackDump/MemoryDump snapshots produced before evaluation stopped.
    '''
    __slots__ = ()

    @property
    def ok(self):
        return self.error is None


def evaluate(line, lexer=None):
    '''
    Evaluate an RPN expression on a fresh machine.

    Never raises RPNError: failures are returned in the Evaluation.
    '''
    lexer = lexer or Lexer()
    machine = Machine()
    try:
        value = machine.run(lexer.lex(line))
    except RPNError as e:
        return Evaluation(None, e, tuple(machine.emitted))
    return Evaluation(value, None, tuple(machine.emitted))


# Largest magnitude below which every integer is exactly a float.
_EXACT = 2 ** 53


def format_number(number):
    '''
    Integral values without a fractional part, everything else as the
    shortest repr that reads back to the same float.
    '''
    number = float(number)
    if number.is_integer() and abs(number) <= _EXACT:
        return str(int(number))
    return repr(number)


def format_dump(snapshot):
    '''
    Render a StackDump or MemoryDump: a title line, then one value per line.
    '''
    lines = ['{}:'.format(snapshot.title)]
    if snapshot.values:
        lines.extend('\t' + format_number(value) for value in snapshot.values)
    else:
        lines.append('\t(empty)')
    return '\n'.join(lines)
