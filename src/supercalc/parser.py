'''
Shunting-yard translation of infix token streams into RPN.
'''

from collections import namedtuple
from enum import Enum
import logging

from .lexer import Lexer, TokenKind, OPERATOR_KINDS
from .util import ParseError


logger = logging.getLogger(__name__)

OperatorInfo = namedtuple('OperatorInfo',
                          ['precedence', 'right_associative', 'arity'])

# Tag of unary minus, kept apart from binary minus.
NEGATE = 'u-'

OPERATORS = {
    '+': OperatorInfo(1, False, 2),
    '-': OperatorInfo(1, False, 2),
    '*': OperatorInfo(2, False, 2),
    '/': OperatorInfo(2, False, 2),
    # Below ^, so that -2^2 is -(2^2).
    NEGATE: OperatorInfo(3, True, 1),
    '^': OperatorInfo(4, True, 2),
}


class NodeKind(Enum):
    NUMBER = 'number'
    REFERENCE = 'reference'
    OPERATOR = 'operator'
    SEPARATOR = 'separator'
    ASSIGN = 'assign'
    # Only ever on the operator stack.
    GROUP = 'group'


Node = namedtuple('Node', ['kind', 'value'])

SEPARATOR = Node(NodeKind.SEPARATOR, ',')
ASSIGN = Node(NodeKind.ASSIGN, '=')
GROUP = Node(NodeKind.GROUP, '(')

INVALID_ASSIGNMENT = 'Invalid assignment. Use: name = expression'

# Tokens after which a minus has no left operand.
_PREFIX_CONTEXT = OPERATOR_KINDS | {
    TokenKind.END,
    TokenKind.LPAREN,
    TokenKind.COMMA,
    TokenKind.ASSIGN,
}


class Parser:
    '''
    Infix to RPN translator.

    Like the lexer, holds no state between calls.
    '''

    def __init__(self, lexer=None):
        self.lexer = lexer or Lexer()

    def parse(self, text):
        '''
        Return the RPN nodes of text, a list of Nodes.

        References are left unresolved: whether a name is a function or a
        variable is for the machine to decide.
        '''
        output = []
        stack = []
        previous = TokenKind.END
        for token in self.lexer.lex(text):
            kind = token.kind
            if kind is TokenKind.END:
                break
            elif kind is TokenKind.NUMBER:
                output.append(Node(NodeKind.NUMBER, token.value))
            elif kind is TokenKind.IDENTIFIER:
                output.append(Node(NodeKind.REFERENCE, token.value))
            elif kind is TokenKind.COMMA:
                self._unwind(stack, output, 'Comma out of context')
                output.append(SEPARATOR)
            elif kind is TokenKind.LPAREN:
                stack.append(GROUP)
            elif kind is TokenKind.RPAREN:
                self._unwind(stack, output, 'Unbalanced parentheses')
                stack.pop()
            elif kind is TokenKind.ASSIGN:
                # Remember where the target ends, the marker goes there.
                stack.append(Node(NodeKind.ASSIGN, len(output)))
            else:
                self._push_operator(stack, output, token.value,
                                    prefix=previous in _PREFIX_CONTEXT)
            previous = kind

        while stack:
            entry = stack.pop()
            if entry is GROUP:
                raise ParseError('Unbalanced parentheses')
            elif entry.kind is NodeKind.ASSIGN:
                # Only valid as the outermost, last thing to close.
                if stack:
                    raise ParseError(INVALID_ASSIGNMENT)
                output.insert(entry.value, ASSIGN)
            else:
                output.append(entry)
        logger.debug('parsed %r as %s', text, ' '.join(
            str(node.value) for node in output))
        return output

    def _unwind(self, stack, output, message):
        '''
        Move everything above the innermost group onto the output.

        The group itself stays on the stack.
        '''
        while stack and stack[-1] is not GROUP:
            entry = stack.pop()
            if entry.kind is NodeKind.ASSIGN:
                raise ParseError(INVALID_ASSIGNMENT)
            output.append(entry)
        if not stack:
            raise ParseError(message)

    def _push_operator(self, stack, output, symbol, prefix):
        if prefix and symbol == '-':
            # Nothing to its left to bind, so nothing to pop.
            stack.append(Node(NodeKind.OPERATOR, NEGATE))
            return
        incoming = OPERATORS[symbol]
        while stack and stack[-1].kind is NodeKind.OPERATOR:
            top = OPERATORS[stack[-1].value]
            if top.precedence > incoming.precedence or \
               (top.precedence == incoming.precedence and
                    not incoming.right_associative):
                output.append(stack.pop())
            else:
                break
        stack.append(Node(NodeKind.OPERATOR, symbol))


def parse(text):
    '''
    Parse text with a fresh Parser.
    '''
    return Parser().parse(text)
