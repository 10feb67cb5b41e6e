'''
Infix calculator.

Takes a line of ordinary mathematical notation, say ``3*x^2 + 1`` or
``sin(pi/2)``, and either evaluates it or assigns it to a variable. Numbers are
doubles throughout; precision only affects display.

A line goes through four stages:

- rewriter: ``pow(2, 8)`` becomes ``(2  8) pow``, moving names after their
  arguments.
- lexer: text to tokens, scientific notation included.
- parser: shunting-yard, tokens to RPN.
- machine: a stack machine runs the RPN against an Environment, which holds
  the variables (``pi`` and ``e`` to begin with).

Not intended to be a programming language! One expression or assignment per
line, no control flow, no complex numbers.
'''

from .cli import CLI
from .environment import Environment
from .lexer import Lexer
from .machine import Machine, calculate, evaluate
from .parser import Parser, parse
from .rewriter import rewrite_calls


__all__ = ('CLI', 'Environment', 'Lexer', 'Machine', 'Parser',
           'calculate', 'evaluate', 'parse', 'rewrite_calls')
