from collections import namedtuple
import logging
import operator

from .functions import Binding, power, resolve
from .parser import INVALID_ASSIGNMENT, NEGATE, OPERATORS, NodeKind, parse
from .rewriter import rewrite_calls
from .util import (ArityError, DomainError, ParseError, ShapeError,
                   UndefinedNameError, wrap_user_errors)


logger = logging.getLogger(__name__)


def divide(left, right):
    if right == 0.0:
        raise DomainError('Division by zero')
    return left / right


ARITHMETIC = {
    '+': operator.__add__,
    '-': operator.__sub__,
    '*': operator.__mul__,
    '/': divide,
    '^': power,
    NEGATE: operator.__neg__,
}

# name is the assigned variable, None when the line was a plain expression.
Result = namedtuple('Result', ['value', 'name'])


def assignment_target(rpn):
    '''
    Return the variable an RPN sequence assigns to, or None.

    Raises ParseError unless the sequence is either free of assignment
    markers or shaped exactly name, =, expression.
    '''
    markers = [index
               for index, node
               in enumerate(rpn)
               if node.kind is NodeKind.ASSIGN]
    if not markers:
        return None
    if len(rpn) < 3 or markers != [1] or \
       rpn[0].kind is not NodeKind.REFERENCE:
        raise ParseError(INVALID_ASSIGNMENT)
    return rpn[0].value


class Machine:
    '''
    Arithmetic stack machine.

    Runs one RPN sequence against an environment. Lives for a single
    evaluation: the operand stack starts empty and the environment is not kept
    afterwards.
    '''

    def __init__(self, environment):
        self.environment = environment
        self.stack = []

    def evaluate(self, rpn):
        '''
        Evaluate rpn, performing the assignment it describes, if any.

        The environment only changes once the right hand side has a value.
        '''
        name = assignment_target(rpn)
        if name is None:
            return self.run(rpn)
        value = self.run(rpn[2:])
        self.environment.vars[name] = value
        return value

    def run(self, rpn):
        '''
        Run assignment free rpn, returning the single value it leaves.
        '''
        for node in rpn:
            if node.kind is NodeKind.NUMBER:
                self._pshstack(node.value)
            elif node.kind is NodeKind.REFERENCE:
                self._reference(node.value)
            elif node.kind is NodeKind.OPERATOR:
                self._operate(node.value)
            # Separators only mattered to the parser.
        if len(self.stack) != 1:
            raise ShapeError('Invalid expression')
        return self.stack.pop()

    def _reference(self, name):
        binding, target = resolve(name, self.environment.vars)
        if binding is Binding.UNARY:
            self._apply(name, target, 1,
                        'Missing argument for function {}'.format(name))
        elif binding is Binding.BINARY:
            self._apply(name, target, 2,
                        'Missing arguments for function {}'.format(name))
        elif binding is Binding.VARIABLE:
            self._pshstack(target)
        else:
            raise UndefinedNameError('Undefined variable: {}'.format(name))

    def _operate(self, symbol):
        self._apply(symbol, ARITHMETIC[symbol], OPERATORS[symbol].arity,
                    'Insufficient stack (operator {})'.format(symbol))

    @wrap_user_errors('Cannot apply {1}')
    def _apply(self, name, f, arity, missing):
        '''
        Pop arity operands, leftmost deepest, and push f of them.
        '''
        # If you don't reverse, you'll do 2**9 when you say 9 2 ^ instead of
        # 9**2.
        args = reversed(self._popstack(arity, missing))
        self._pshstack(f(*args))

    def _pshstack(self, *new):
        '''
        Push all elements onto stack, leftmost at the bottom.
        '''
        self.stack.extend(new)

    def _popstack(self, n, message):
        '''
        Pop specified number of args from stack, topmost first.
        '''
        if len(self.stack) < n:
            raise ArityError(message)
        return [self.stack.pop() for _ in range(n)]


def evaluate(rpn, environment):
    '''
    Evaluate rpn on a fresh Machine.
    '''
    return Machine(environment).evaluate(rpn)


def calculate(line, environment):
    '''
    Run one line of user input through the whole pipeline.

    Returns a Result. On error, raises a CalcError and leaves environment as
    it was.
    '''
    rpn = parse(rewrite_calls(line))
    name = assignment_target(rpn)
    value = evaluate(rpn, environment)
    logger.debug('%r evaluated to %r', line, value)
    return Result(value, name)
