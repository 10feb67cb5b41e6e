'''
Rewrite function call syntax into postfix friendly groups.

``name(a, b)`` becomes ``(a  b) name``: the arguments, space-joined, inside
the call's own parentheses, followed by the name. Once the parser has emitted
the group, the name lands right after its arguments, which is exactly where a
stack machine wants a function.

Argument text is copied verbatim. Calls nested inside another call's arguments
are *not* rewritten, so ``pow(pow(2, 3), 2)`` does not evaluate.
'''

import logging

import regex

from .util import ParseError


logger = logging.getLogger(__name__)

# A name directly followed (whitespace aside) by an opening parenthesis.
CALL = regex.compile(r'(?<name>[A-Za-z_][A-Za-z0-9_]*)\s*\(')


def _split_arguments(text, start):
    '''
    Split the parenthesized argument list opening at text[start].

    Returns the arguments and the index just past the closing parenthesis.
    '''
    depth = 0
    arguments = []
    current = []
    for index in range(start, len(text)):
        char = text[index]
        if char == '(':
            depth += 1
            if depth > 1:
                current.append(char)
        elif char == ')':
            depth -= 1
            if depth == 0:
                arguments.append(''.join(current))
                return arguments, index + 1
            current.append(char)
        elif char == ',' and depth == 1:
            arguments.append(''.join(current))
            current = []
        else:
            current.append(char)
    raise ParseError('Unbalanced parentheses in function call')


def rewrite_calls(text):
    '''
    Return text with every top level ``name(args...)`` rewritten.
    '''
    pieces = []
    position = 0
    for match in iter(lambda: CALL.search(text, position), None):
        pieces.append(text[position:match.start()])
        arguments, position = _split_arguments(text, match.end() - 1)
        pieces.append('(' + ' '.join(arguments) + ') ' + match.group('name'))
    pieces.append(text[position:])
    rewritten = ''.join(pieces)
    logger.debug('rewrote %r as %r', text, rewritten)
    return rewritten
