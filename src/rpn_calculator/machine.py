from collections import deque, namedtuple
import math
import operator

from .util import (StackUnderflow, DivisionByZero, MemoryUndefined,
                   UnknownOperator, MalformedExpression, InvalidOperation,
                   wrap_user_errors, _at)


# Lexemes the machine consumes.
Number = namedtuple('Number', 'value index text', defaults=(None, None))
Operator = namedtuple('Operator', 'symbol index', defaults=(None,))


class StackDump(namedtuple('StackDump', 'values')):
    '''
    Snapshot of the stack emitted by ``?``, bottom of the stack first.
    '''
    __slots__ = ()
    title = 'STACK'


class MemoryDump(namedtuple('MemoryDump', 'values')):
    '''
    Snapshot of every value stored with ``!``, oldest first.
    '''
    __slots__ = ()
    title = 'MEMORY'


@wrap_user_errors('Cannot raise {0} to {1}')
def _power(base, exponent):
    # math.pow raises on complex results and overflow instead of returning
    # a complex number or inf.
    return math.pow(base, exponent)


class Machine:
    '''
    Arithmetic stack machine (RPN calculator).

    Takes Number and Operator lexemes and runs them. One machine evaluates
    one expression: the stack, memory slot and memory history all start
    empty and are never shared between machines.

    Nothing is printed. ``?`` and ``&`` append snapshots to ``emitted`` for
    the caller to show.
    '''

    def __init__(self):
        '''
        Create empty stack machine.
        '''
        self.stack = deque()
        self.memory = None
        self.history = []
        self.emitted = []

    def feed(self, token):
        '''
        Push a Number, or apply an Operator to the stack.
        '''
        if isinstance(token, Number):
            self._pshstack(float(token.value))
            return
        if not isinstance(token, Operator):
            raise UnknownOperator(token)
        try:
            f = type(self).OPERATORS[token.symbol]
        except (KeyError, TypeError):
            raise UnknownOperator(token.symbol, token.index) from None
        try:
            f(self, token)
        except InvalidOperation as e:
            e.index, e.symbol = token.index, token.symbol
            e.args = ('{}: {!r}{}'.format(e.args[0], token.symbol,
                                          _at(token.index)),)
            raise

    def run(self, tokens):
        '''
        Feed every token, left to right, and return the single result.

        Stops on the first error. An expression must reduce to exactly one
        value.
        '''
        for token in tokens:
            self.feed(token)
        if len(self.stack) != 1:
            raise MalformedExpression(len(self.stack))
        return self.stack[-1]

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, token, n=1):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise StackUnderflow(token.symbol, token.index, n, len(self.stack))
        return [self.stack.pop() for _ in range(n)]

    def _pshresult(self, value):
        '''
        Push an operation's result, which has to be a finite number.
        '''
        if not math.isfinite(value):
            raise InvalidOperation('Result out of range ({})'.format(value))
        self._pshstack(value)

    def _binary(f):
        def apply(self, token):
            right, left = self._popstack(token, n=2)
            self._pshresult(f(left, right))
        apply.__name__ = f.__name__
        apply.__doc__ = f.__doc__
        return apply

    add = _binary(operator.__add__)
    subtract = _binary(operator.__sub__)
    multiply = _binary(operator.__mul__)
    power = _binary(_power)

    def divide(self, token):
        '''
        Divide the second element by the top one. Zero divisors are errors.
        '''
        right, left = self._popstack(token, n=2)
        if right == 0:
            raise DivisionByZero(token.symbol, token.index)
        self._pshresult(left / right)

    def exchange(self, token):
        '''
        Swap two elements at top of stack.
        '''
        self._pshstack(*self._popstack(token, n=2))

    def store(self, token):
        '''
        Pop top of stack into the memory slot, logging it in the history.
        '''
        value, = self._popstack(token)
        self.memory = value
        self.history.append(value)

    def recall(self, token):
        '''
        Push a copy of the memory slot.
        '''
        if self.memory is None:
            raise MemoryUndefined(token.symbol, token.index)
        self._pshstack(self.memory)

    def dumpstack(self, token):
        self.emitted.append(StackDump(tuple(self.stack)))

    def dumpmemory(self, token):
        self.emitted.append(MemoryDump(tuple(self.history)))

    # Language mapping to stack operations. Every operator is one character.
    OPERATORS = {
        '+': add,
        '-': subtract,
        '*': multiply,
        '/': divide,
        '^': power,
        '!': store,
        '@': recall,
        '?': dumpstack,
        '&': dumpmemory,
        # Exchange
        'x': exchange,
        'X': exchange,
    }

    del _binary


__all__ = ('Machine', 'Number', 'Operator', 'StackDump', 'MemoryDump')
