from functools import wraps


class RPNError(Exception):
    '''
    Base of every evaluation failure.

    :param message: Human readable description, also ``args[0]``.
    :param index: Position of the offending token, if any.
    :param symbol: Offending operator or text, if any.
    '''
    def __init__(self, message, index=None, symbol=None):
        super().__init__(message)
        self.index = index
        self.symbol = symbol

    @property
    def kind(self):
        return type(self).__name__


def _at(index):
    return '' if index is None else ' at token {}'.format(index)


class MalformedToken(RPNError):
    def __init__(self, text, index):
        super().__init__("Couldn't lex {0!r}{1}".format(text, _at(index)),
                         index, text)


class UnknownOperator(RPNError):
    def __init__(self, symbol, index=None):
        super().__init__('Unknown operator {0!r}{1}'.format(symbol,
                                                            _at(index)),
                         index, symbol)


class StackUnderflow(RPNError):
    def __init__(self, symbol, index, needed, found):
        super().__init__('Stack underflow: {0!r}{1} needs {2} element(s), '
                         'found {3}'.format(symbol, _at(index), needed, found),
                         index, symbol)
        self.needed = needed
        self.found = found


class DivisionByZero(RPNError):
    def __init__(self, symbol, index):
        super().__init__('Division by zero: {0!r}{1}'.format(symbol,
                                                            _at(index)),
                         index, symbol)


class MemoryUndefined(RPNError):
    def __init__(self, symbol, index):
        super().__init__('Memory undefined: {0!r}{1} recalled before any '
                         'store'.format(symbol, _at(index)),
                         index, symbol)


class MalformedExpression(RPNError):
    def __init__(self, leftover):
        super().__init__('Malformed expression: {} value(s) left on stack, '
                         'expected 1'.format(leftover))
        self.leftover = leftover


class InvalidOperation(RPNError):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator converting unexpected exceptions into InvalidOperation.

    Passes through RPNErrors. ``fmt`` is formatted with the wrapped call's
    arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except Exception as e:
                raise InvalidOperation(fmt.format(*args, **kwargs)) from e
        return wrapper
    return decorator
