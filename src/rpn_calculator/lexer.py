from functools import reduce
import math
import operator

import regex

from .util import MalformedToken
from .machine import Machine, Number, Operator


class Lexer:
    '''
    Lexer for the RPN *regular* grammar.

    For consistency, for now, needs to be instantiated, despite holding no
    internal state.
    '''
    SIGN = r'[+-]?'
    # Integral part of a number
    INTEGRAL = r'''
                # DO NOT REPEAT ME! I REPEAT MYSELF INTERNALLY!
                (?:
                    # 1, 12, or the 1 in 1_200.
                    \d{1,3}
                    (?:
                        # The 4, 45, etc. in 1234, 12345, etc.
                        \d
                        |
                        # Thousands separators
                        (?:
                            _\d{3}
                        )
                    )*
                )
                '''
    # Fractional part of a number
    FRACTIONAL = r'''
                  (?:
                      # 25, 0625, or 333_333_3
                      \d{1,3}
                      (?:
                          \d
                          |
                          _\d{1,3}
                      )*
                  )
                  '''
    EXPONENT = r'''
                (?:
                    [eE]
                    [+-]?
                    \d+
                )
                '''
    # Number, of any kind supported by grammar.
    # String formatting and regex is a tricky business, because of the braces.
    # It works here. Be careful in general!
    NUMBER = r'''
              {SIGN}
              (?:
                  (?:
                      # 1, 12, 1_200, 1_200. (notice trailing dot), 1.3
                      {INTEGRAL}
                      (?:
                          \.
                          {FRACTIONAL}?
                      )?
                  )|(?:
                      # .2, 0.200_2
                      \.
                      {FRACTIONAL}
                  )
              )
              {EXPONENT}?
              '''.format(SIGN=SIGN, INTEGRAL=INTEGRAL, FRACTIONAL=FRACTIONAL,
                         EXPONENT=EXPONENT)

    assert not [operator
                for operator
                in Machine.OPERATORS
                if len(operator) != 1]
    OPERATOR = r'(?:' + r'|'.join(map(regex.escape, Machine.OPERATORS)) + r')'

    # All possible lexemes. Whitespace separates them, so never part of one.
    LEXEME = r'(?<number>' + NUMBER + r')|' \
             r'(?<operator>' + OPERATOR + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.POSIX,
                    regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def lex(self, line):
        '''
        Take a line and yield a Number or Operator per whitespace separated
        word.

        Lazy, and stops with MalformedToken on the first word that is
        neither. Starts over from ``line`` on every call.
        '''
        for index, word in enumerate(line.split()):
            match = regex.fullmatch(type(self).LEXEME, word,
                                    flags=type(self).FLAGS)
            if match is None:
                raise MalformedToken(word, index)
            token = self.parse(match, index)
            # Out of float range, e.g. 1e400
            if isinstance(token, Number) and not math.isfinite(token.value):
                raise MalformedToken(word, index)
            yield token

    def parse(self, match, index=None):
        '''
        Turn a lexeme match into the Number or Operator it denotes.
        '''
        groups = self.matchedgroups(match)
        if 'number' in groups:
            text = groups['number']
            return Number(float(text.replace('_', '')), index, text)
        return Operator(groups['operator'], index)

    def matchedgroups(self, match):
        '''
        Return the named groups the lexeme matched.
        '''
        return {key: value
                for key, value
                in match.groupdict().items()
                if value}


def tokenize(line):
    '''
    Return every lexeme of ``line`` as a list.
    '''
    return list(Lexer().lex(line))
