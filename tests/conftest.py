from pytest import Item, fixture

from rpn_calculator.lexer import Lexer
from rpn_calculator.machine import Machine


@fixture
def lexer() -> Lexer:
    return Lexer()


@fixture
def machine() -> Machine:
    '''
    Fresh, empty machine.
    '''
    return Machine()


def pytest_assertion_pass(item: Item,
                          lineno: int,
                          orig: str,
                          expl: str) -> None:
    '''
    Log every passing assertion, with the expression it checked.

    Only active with enable_assertion_pass_hook; use with pytest -rP.
    '''
    print('given', item.name + ':' + str(lineno), str(orig))
    print('actual', item.name + ':' + str(lineno),
          '\n'.join(str(expl).splitlines()[:-2]))
