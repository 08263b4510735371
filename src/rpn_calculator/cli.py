from argparse import ArgumentParser, REMAINDER, OPTIONAL
from importlib.metadata import version, PackageNotFoundError
import logging
import sys

from prompt_toolkit import PromptSession

from .util import RPNError
from .lexer import Lexer
from .evaluation import evaluate, format_dump, format_number


logger = logging.getLogger(__name__)


class InteractiveInput:
    def __init__(self, prompt):
        self.prompt = prompt

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    vi_mode=True,
                                    enable_suspend=True,
                                    enable_open_in_editor=True,
                                    # Nothing outlives one expression, not
                                    # even history.
                                    history=None,
                                    prompt_continuation=' ' * len(self.prompt),
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


def _distribution_version():
    try:
        return version('rpn-calculator')
    except PackageNotFoundError:
        return 'unknown'


class CLI:
    '''
    Command line interface to RPN system.

    Every expression gets a fresh machine; nothing carries over between them.
    '''

    DEFAULT_PROMPT = '> '
    DEMO = [
        ('STACK DUMP', 'Equation: 10 + 20', '10 20 ? +'),
        ('MEMORY DUMP', 'Equation: temp = 50 + 20', '50 20 + ! & @'),
    ]

    def _show(self, evaluation):
        '''
        Print dumps then the result, or the error on stderr.

        Return True on success.
        '''
        for snapshot in evaluation.emitted:
            print(format_dump(snapshot))
        if evaluation.ok:
            print(format_number(evaluation.value))
            return True
        error = evaluation.error
        print(error.args[0], file=sys.stderr)
        logger.debug('%s at token %s', error.kind, error.index,
                     exc_info=error)
        return False

    def executor(self):
        '''
        Run machine (RPN calculator) on every expression.
        '''
        lexer = Lexer()
        status = 0
        for line in self.args.expressions:
            logger.debug('evaluating %r', line)
            if not self._show(evaluate(line, lexer)):
                status = 1
        return status

    def dumper(self):
        '''
        Dump every lexeme's kind, text, and position.
        '''
        lexer = Lexer()
        status = 0
        print('[kind]\t<repr(text)>\t<index>')
        for line in self.args.expressions:
            try:
                for token in lexer.lex(line):
                    text = getattr(token, 'text', None) or token.symbol
                    print(type(token).__name__.lower(), repr(text),
                          token.index, sep='\t')
            except RPNError as e:
                print(e.args[0], file=sys.stderr)
                status = 1
        return status

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)
        return 0

    def test_info(self):
        '''
        Walk through the stack and memory dumps on canned expressions.
        '''
        status = 0
        for title, equation, expression in self.DEMO:
            print('\t==={}===\n'.format(title))
            print(equation)
            print('Expression:', expression)
            if not self._show(evaluate(expression)):
                status = 1
            print()
        return status

    def _lines(self):
        '''
        Yield non-blank input lines, opening the input on first use.
        '''
        for line in self._prompting_input():
            if line.strip():
                yield line

    def _prompting_input(self):
        '''
        Return prompting stdin iterator, if either:

        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or sys.stdin.isatty() and sys.stdout.isatty():
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT)
        return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(
            prog='rpn-calc',
            description='Reverse Polish Notation (RPN) calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true',
                                          help='log tokens and tracebacks')
        self.argument_parser.add_argument('--version', action='version',
                                          version=_distribution_version())
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions',
                                       help='expression to evaluate')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper),
                                      ('-t', '--test-info', self.test_info)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=None)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.

        Return exit status: 0 if every expression succeeded, 1 otherwise.
        '''
        self.args = self.argument_parser.parse_args(args)
        logging.basicConfig(
            level=logging.DEBUG if self.args.verbose else logging.WARNING,
            format='%(levelname)s %(name)s: %(message)s',
            stream=sys.stderr)
        if self.args.expressions is None:
            self.args.expressions = self._lines()
        else:
            # -e takes the rest of the command line as one expression.
            self.args.expressions = [' '.join(self.args.expressions)]
        try:
            return self.args.action()
        except KeyboardInterrupt:
            return 1


def main():
    sys.exit(CLI().run())
