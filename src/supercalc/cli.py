from os import isatty, path
import sys
from argparse import ArgumentParser, REMAINDER, OPTIONAL
import logging
import traceback

from prompt_toolkit import PromptSession
from prompt_toolkit.history import FileHistory

from .environment import Environment
from .lexer import Lexer
from .machine import calculate
from .parser import parse
from .rewriter import rewrite_calls
from .util import CalcError, wrap_user_errors


PRECISION_USAGE = 'Usage: :precision N ({}..{})'.format(
    Environment.MIN_PRECISION, Environment.MAX_PRECISION)


class InteractiveInput:
    def __init__(self, prompt, history=None):
        self.prompt = prompt
        self.history = history

    def __iter__(self):
        try:
            session = PromptSession(message=self.prompt,
                                    enable_suspend=True,
                                    history=self.history,
                                    prompt_continuation=' ' * len(self.prompt),
                                    # Certainly not! But be explicit.
                                    erase_when_done=False)
            while True:
                yield session.prompt()
        except EOFError:
            return


class CLI:
    '''
    Command line interface to the calculator.
    '''

    DEFAULT_PROMPT = '> '
    HISTORY_FILE = '~/.supercalc_history'
    BANNER = 'SuperCalc. Type :help for help. Ctrl+C/Ctrl+D to quit.'
    HELP = '\n'.join([
        'Commands: :help, :vars, :clear, :precision N, :quit',
        'Functions: sin, cos, tan, asin, acos, atan, sqrt, cbrt, log/ln, '
        'log10, exp, abs, floor, ceil, round, pow',
        'Constants: pi, e',
        'Examples: sin(pi/2), pow(2,8), x=5, 3*x^2 + 1',
    ])

    def printhelp(self, environment, argument):
        '''
        Print commands, functions, and examples.
        '''
        print(type(self).HELP)

    def printvars(self, environment, argument):
        '''
        Print every variable, sorted by name.
        '''
        for name, value in sorted(environment.vars.items()):
            print(name, '=', environment.format(value))

    def clear(self, environment, argument):
        '''
        Forget user variables, keeping pi and e.
        '''
        environment.clear()
        print('[ok] variables cleared')

    @wrap_user_errors(PRECISION_USAGE)
    def storeprecision(self, environment, argument):
        '''
        Set display precision.
        '''
        if not environment.set_precision(int(argument)):
            raise CalcError(PRECISION_USAGE)
        print('[ok] precision =', environment.precision)

    def quit(self, environment, argument):
        '''
        Stop reading input.
        '''
        return True

    # Shell commands, matched on the whole line; anything else is an
    # expression.
    COMMANDS = {
        ':help': printhelp,
        ':vars': printvars,
        ':clear': clear,
        ':quit': quit,
    }
    # Commands taking an argument, matched on the start of the line.
    PREFIX_COMMANDS = {
        ':precision': storeprecision,
    }

    def _command(self, line):
        '''
        Return the command line invokes and its argument, or (None, None).
        '''
        command = type(self).COMMANDS.get(line)
        if command is not None:
            return command, ''
        for prefix, command in type(self).PREFIX_COMMANDS.items():
            if line.startswith(prefix):
                return command, line[len(prefix):].strip()
        return None, None

    def _lines(self):
        '''
        Yield stripped, non-empty input lines.
        '''
        for line in self.args.expressions:
            line = line.strip()
            if line:
                yield line

    def _report(self, error):
        if self.args.verbose:
            traceback.print_exception(type(error), error,
                                      error.__traceback__, file=sys.stderr)
        print('[error]', error.args[0], file=sys.stderr)

    def dumper(self):
        '''
        Dump each line's rewritten text and RPN, without evaluating.
        '''
        for line in self._lines():
            try:
                rewritten = rewrite_calls(line)
                rpn = parse(rewritten)
            except CalcError as e:
                self._report(e)
                continue
            print(rewritten)
            print(*(node.value for node in rpn), sep='\t')

    def executor(self):
        '''
        Run the calculator on every line.
        '''
        environment = Environment(precision=self.args.precision)
        if self._interactive():
            print(type(self).BANNER)
        for line in self._lines():
            command, argument = self._command(line)
            try:
                if command is not None:
                    if command(self, environment, argument):
                        break
                    continue
                result = calculate(line, environment)
            # Abort entire rest of line, makes sense anyway
            except CalcError as e:
                self._report(e)
                continue
            value = environment.format(result.value)
            if result.name is None:
                print('=', value)
            else:
                print('[ok]', result.name, '=', value)

    def raw_grammar(self):
        '''
        Print current internally defined grammar.
        '''
        print(Lexer.LEXEME)

    def _prompting_input(self):
        '''
        Return prompting stdin.__iter__ decorator...

        If either:
        - prompt explicitly specified.
        - both stdin/out are a tty
        '''
        if self.args.prompt or \
           isatty(sys.stdin.fileno()) and isatty(sys.stdout.fileno()):
            history = FileHistory(path.expanduser(self.HISTORY_FILE))
            return InteractiveInput(prompt=self.args.prompt or
                                    self.DEFAULT_PROMPT,
                                    history=history)
        else:
            return sys.stdin

    def __init__(self):
        '''
        Create ready to run CLI.

        Does not run or parse command line arguments.
        '''
        self.argument_parser = ArgumentParser(description='Infix calculator')
        self.argument_parser.add_argument('-v', '--verbose',
                                          action='store_true')
        self.argument_parser.add_argument('-k', '--precision',
                                          type=int,
                                          default=Environment.DEFAULT_PRECISION)
        int_nonint_groups = self.argument_parser.add_mutually_exclusive_group()
        int_nonint_groups.add_argument('-e', '--expression',
                                       nargs=REMAINDER,
                                       dest='expressions')
        int_nonint_groups.add_argument('-p', '--prompt',
                                       nargs=OPTIONAL,
                                       const=self.DEFAULT_PROMPT)
        main_groups = self.argument_parser.add_mutually_exclusive_group()
        for short_, long_, action in [('-G', '--raw-grammar',
                                       self.raw_grammar),
                                      ('-D', '--dump', self.dumper)]:
            main_groups.add_argument(short_, long_,
                                     action='store_const',
                                     const=action,
                                     dest='action')
        self.argument_parser.set_defaults(action=self.executor,
                                          expressions=sys.stdin)

    def _interactive(self):
        return isinstance(self.args.expressions, InteractiveInput)

    def run(self, *, args=None):
        '''
        Run CLI, given these args, or previously passed CLI args.
        '''
        self.args = self.argument_parser.parse_args(args)
        if not Environment.MIN_PRECISION <= self.args.precision <= \
           Environment.MAX_PRECISION:
            self.argument_parser.error(PRECISION_USAGE)
        if self.args.verbose:
            logging.basicConfig(level=logging.DEBUG,
                                format='%(name)s: %(message)s')
        if self.args.expressions is sys.stdin:
            self.args.expressions = self._prompting_input()
        try:
            self.args.action()
        except KeyboardInterrupt:
            sys.exit(1)
