from collections import namedtuple
from enum import Enum
from functools import reduce
import operator

import regex

from .util import LexicalError


class TokenKind(Enum):
    NUMBER = 'number'
    IDENTIFIER = 'identifier'
    LPAREN = '('
    RPAREN = ')'
    COMMA = ','
    PLUS = '+'
    MINUS = '-'
    STAR = '*'
    SLASH = '/'
    CARET = '^'
    ASSIGN = '='
    END = 'end'


# value is a float for NUMBER, the name for IDENTIFIER, the symbol otherwise.
Token = namedtuple('Token', ['kind', 'value'])

END = Token(TokenKind.END, None)

OPERATOR_KINDS = frozenset({
    TokenKind.PLUS,
    TokenKind.MINUS,
    TokenKind.STAR,
    TokenKind.SLASH,
    TokenKind.CARET,
})


class Lexer:
    '''
    Lexer for infix expressions.

    Holds no state beyond the cursor handed to next_token, so one instance can
    be shared.
    '''
    NUMBER = r'''
              (?:
                  (?:
                      # 1, 12, 1. (notice trailing dot), 1.5
                      [0-9]+
                      (?:
                          \.
                          [0-9]*
                      )?
                  )|(?:
                      # .5, and the lone dot, which float() rejects
                      \.
                      [0-9]*
                  )
              )
              (?:
                  # 1e5, 1E-5, but not 1e or 1e+ (left for the next token)
                  [eE]
                  [+-]?
                  [0-9]+
              )?
              '''
    IDENTIFIER = r'[A-Za-z_][A-Za-z0-9_]*'
    PUNCTUATION = r'[()+\-*/^=,]'
    SPACE = r'\s+'

    # All possible lexemes.
    LEXEME = r'(?<space>' + SPACE + r')|' \
             r'(?<number>' + NUMBER + r')|' \
             r'(?<identifier>' + IDENTIFIER + r')|' \
             r'(?<punctuation>' + PUNCTUATION + r')'
    # Default regex flags for matching lexemes
    FLAGS = reduce(operator.__or__,
                   {regex.VERSION1,
                    regex.VERBOSE},
                   0)

    def __init__(self):
        self.pattern = regex.compile(type(self).LEXEME, flags=type(self).FLAGS)

    def next_token(self, text, position=0):
        '''
        Return the token starting at or after position, and where it ends.

        Whitespace is skipped. Past the end of text, always returns END.
        '''
        while position < len(text):
            match = self.pattern.match(text, position)
            if match is None:
                raise LexicalError(
                    'Invalid symbol: {}'.format(text[position]))
            position = match.end()
            if match.lastgroup != 'space':
                return self._token(match), position
        return END, position

    def lex(self, text):
        '''
        Yield every token of text, END included.
        '''
        position = 0
        while True:
            token, position = self.next_token(text, position)
            yield token
            if token.kind is TokenKind.END:
                return

    def _token(self, match):
        lexeme = match.group(0)
        if match.lastgroup == 'number':
            return Token(TokenKind.NUMBER, self._convert(lexeme))
        elif match.lastgroup == 'identifier':
            return Token(TokenKind.IDENTIFIER, lexeme)
        return Token(TokenKind(lexeme), lexeme)

    def _convert(self, lexeme):
        try:
            return float(lexeme)
        except ValueError:
            raise LexicalError('Invalid number: {}'.format(lexeme)) from None
