'''
RPN calculator.

Evaluates whitespace separated Reverse Polish Notation expressions: operands
first, then the operator, so no parentheses or precedence.

Operators:

- ``+ - * / ^``: arithmetic on the two topmost values, second from top on the
  left.
- ``x`` (or ``X``): swap the two topmost values.
- ``!``: pop the top into the memory slot. ``@``: push a copy of it back.
- ``?``: dump the stack. ``&``: dump every value ever stored with ``!``.

An expression has to reduce to exactly one value. Each evaluation starts
from an empty stack and an empty memory slot.
'''

from .util import (RPNError, MalformedToken, UnknownOperator, StackUnderflow,
                   DivisionByZero, MemoryUndefined, MalformedExpression,
                   InvalidOperation)
from .machine import Machine, Number, Operator, StackDump, MemoryDump
from .lexer import Lexer, tokenize
from .evaluation import Evaluation, evaluate, format_number, format_dump
from .cli import CLI


__all__ = ('Machine', 'Lexer', 'CLI', 'Number', 'Operator', 'StackDump',
           'MemoryDump', 'Evaluation', 'evaluate', 'tokenize',
           'format_number', 'format_dump', 'RPNError', 'MalformedToken',
           'UnknownOperator', 'StackUnderflow', 'DivisionByZero',
           'MemoryUndefined', 'MalformedExpression', 'InvalidOperation')
