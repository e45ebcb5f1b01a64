# -*- coding: utf-8 -*-
"""
    parml.lexer
    ~~~~~~~~~~~

    Splits parml source into tokens.  The lexer only knows about groups,
    symbols, string literals, the equals marker and braced Python
    expressions.  Expressions are passed on verbatim, checking that they are
    valid Python is left to the parser.

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
import re
from collections import namedtuple

from parml.errors import UnbalancedGroup, UnterminatedGroup


SYMBOL = 'SYMBOL'
LITERAL = 'LITERAL'
EQUALS = 'EQUALS'
OPEN = 'OPEN'
CLOSE = 'CLOSE'
EXPR = 'EXPR'

ATOMS = (SYMBOL, LITERAL, EXPR)

Token = namedtuple('Token', 'kind value pos')

_whitespace_re = re.compile(r'(?:\s+|;[^\n]*)+')
_symbol_re = re.compile(r'[^\s(){}="\';]+')
_literal_res = {
    '"':    re.compile(r'"((?:[^"\\]|\\.)*)"', re.S),
    "'":    re.compile(r"'((?:[^'\\]|\\.)*)'", re.S)
}
_escape_re = re.compile(r'\\(.)', re.S)
_escapes = {'n': '\n', 't': '\t', 'r': '\r', '\\': '\\', '"': '"', "'": "'"}

# python string literals have to be skipped as a whole inside expressions,
# otherwise braces in f-strings or dict literals in strings would count.
_pystring = (r'[rRbBuUfF]{0,2}(?:"""(?:[^\\]|\\.)*?"""|\'\'\'(?:[^\\]|\\.)*?\'\'\''
             r'|"(?:[^"\\\n]|\\.)*"|\'(?:[^\'\\\n]|\\.)*\')')
_expr_token_re = re.compile(r'%s|([{}])|[^{}"\']+' % _pystring, re.S)


def _unescape(value):
    return _escape_re.sub(lambda m: _escapes.get(m.group(1), m.group(0)),
                          value)


class Lexer:
    """
    Tokenize the given parml source.  The lexer implements the iterator
    protocol and yields `Token` tuples in the form ``(kind, value, pos)``
    where `pos` is a ``(filename, lineno, offset)`` tuple.

    Groups have to balance.  A closing parenthesis without an open group
    raises an `UnbalancedGroup` error, running out of source while a group
    is open raises `UnterminatedGroup` at the position of the open
    parenthesis.  Unterminated string literals and expressions are reported
    as `UnbalancedGroup` too.

    `lineno` is the line number of the first source line which is useful if
    the source is embedded into a larger file.
    """

    def __init__(self, source, filename=None, lineno=1):
        self.source = source
        self.filename = filename
        self.lineno = lineno
        self.pos = 0
        self._groups = []

    def __iter__(self):
        return self

    def __next__(self):
        source = self.source
        match = _whitespace_re.match(source, self.pos)
        if match is not None:
            self.pos = match.end()
        pos = self.pos

        if pos >= len(source):
            if self._groups:
                self.fail('group is never closed', self._groups[-1],
                          UnterminatedGroup)
            raise StopIteration()

        char = source[pos]
        if char == '(':
            self._groups.append(pos)
            return self.make_token(OPEN, char, pos + 1)
        elif char == ')':
            if not self._groups:
                self.fail('unbalanced closing parenthesis', pos)
            self._groups.pop()
            return self.make_token(CLOSE, char, pos + 1)
        elif char == '=':
            return self.make_token(EQUALS, char, pos + 1)
        elif char in _literal_res:
            match = _literal_res[char].match(source, pos)
            if match is None:
                self.fail('unterminated string literal', pos)
            return self.make_token(LITERAL, _unescape(match.group(1)),
                                   match.end())
        elif char == '{':
            return self.read_expression()
        elif char == '}':
            self.fail('unbalanced closing brace', pos)

        match = _symbol_re.match(source, pos)
        return self.make_token(SYMBOL, match.group(), match.end())

    def read_expression(self):
        """
        Read a braced python expression starting at the current position.
        Nested braces are counted, string literals are skipped.
        """
        source = self.source
        start = self.pos
        pos = start + 1
        level = 1
        while level:
            match = _expr_token_re.match(source, pos)
            if match is None:
                if pos >= len(source):
                    self.fail('expression is never closed', start)
                self.fail('unterminated string literal in expression', pos)
            brace = match.group(1)
            if brace == '{':
                level += 1
            elif brace == '}':
                level -= 1
            pos = match.end()
        return self.make_token(EXPR, source[start + 1:pos - 1], pos)

    def make_pos(self, pos):
        """Return a position tuple for an index into the source."""
        lineno = self.lineno + self.source.count('\n', 0, pos)
        offset = pos - (self.source.rfind('\n', 0, pos) + 1)
        return (self.filename, lineno, offset)

    def make_token(self, kind, value, end):
        """Create a token starting at the current position and advance."""
        token = Token(kind, value, self.make_pos(self.pos))
        self.pos = end
        return token

    def fail(self, msg, pos, cls=UnbalancedGroup):
        """Fail with an error at the given source index."""
        raise cls(msg, *self.make_pos(pos))


def tokenize(source, filename=None, lineno=1):
    """Return a list with all tokens of the source."""
    return list(Lexer(source, filename, lineno))
