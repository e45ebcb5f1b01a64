# -*- coding: utf-8 -*-
"""
    parml.parser
    ~~~~~~~~~~~~

    Implements a parml parser that returns a syntax tree of immutable
    named tuples.

    The only ambiguity in the grammar is between attributes and child
    elements.  It is resolved with a window of two tokens: a group whose
    first two atoms are a symbol and ``=`` is always an attribute, anything
    else starting with a symbol is an element.  Attribute groups keep their
    place among the children and render as a marker of their own, attributes
    written inline go into the opening marker of the element::

        (a href = "/" "home")       ->  <a href="/">home</a>
        (head (title = "Hello"))    ->  <head><title="Hello"></head>
        (p (em "hi"))               ->  <p><em>hi</em></p>

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
from collections import namedtuple

from genshi.template.base import TemplateSyntaxError
from genshi.template.eval import Expression as CompiledExpression

from parml.errors import ParserError, UnterminatedGroup, EmptyTagPosition, \
                         MalformedAttribute, IllegalChildrenOnVoidElement
from parml.lexer import Lexer, SYMBOL, LITERAL, EQUALS, OPEN, CLOSE, EXPR


DOCTYPE = '!doctype'
COMMENT = '!--'
RESERVED = frozenset([DOCTYPE, COMMENT])
VOID_ELEMENTS = frozenset(['area', 'base', 'br', 'col', 'embed', 'hr', 'img',
                           'input', 'link', 'meta', 'source', 'track', 'wbr'])

Document = namedtuple('Document', 'nodes filename')
Element = namedtuple('Element', 'tag attrs children void pos')
Attribute = namedtuple('Attribute', 'name value pos')
Text = namedtuple('Text', 'value pos')
Expression = namedtuple('Expression', 'source code pos')
Comment = namedtuple('Comment', 'children pos')


class Parser:
    """
    A recursive descent parser for parml source.  Groups are classified
    by their first two tokens, there is no backtracking.

    Bare symbols inside an element that are not followed by ``=`` become
    attributes without a value (``(input disabled)``), symbols followed by
    ``=`` are inline attributes (``(a href = "/")``).  Tags listed in
    `void_elements` and ``!DOCTYPE`` are self-closing and must not have
    children.  ``!DOCTYPE`` takes a single bare symbol, ``(!DOCTYPE html)``.
    """

    def __init__(self, source, filename=None, lineno=1, lookup='strict',
                 void_elements=VOID_ELEMENTS):
        self.filename = filename
        self.lookup = lookup
        self.void_elements = frozenset(tag.lower() for tag in void_elements)
        self._lexer = Lexer(source, filename, lineno)
        self._tokens = []
        self._index = 0
        self.parsed = False
        self.result = None

    def fail(self, msg, pos, cls=ParserError):
        """Fail with an error at a position tuple."""
        raise cls(msg, *pos)

    def peek_kind(self):
        """Return the kind of the next token or `None` at the end."""
        if self._index < len(self._tokens):
            return self._tokens[self._index].kind

    def next_token(self):
        """Consume and return the next token."""
        try:
            token = self._tokens[self._index]
        except IndexError:
            self.fail('unexpected end of source',
                      self._lexer.make_pos(self._lexer.pos), UnterminatedGroup)
        self._index += 1
        return token

    def parse(self):
        """
        Start the parsing.

        :return: the `Document`.
        :raises ParserError: if the parml source is not well formed.
        :raises RuntimeError: if the source is already parsed
        """
        if self.parsed:
            raise RuntimeError('source already parsed')
        self._tokens = list(self._lexer)
        nodes = []
        while self.peek_kind() is not None:
            nodes.append(self.parse_node())
        self.parsed = True
        self.result = Document(tuple(nodes), self.filename)
        return self.result

    def parse_node(self):
        """Parse a node on the document level."""
        token = self.next_token()
        if token.kind == OPEN:
            node = self.parse_group(token)
            if isinstance(node, Attribute):
                self.fail('attribute %r has no element to belong to' %
                          node.name, token.pos, MalformedAttribute)
            return node
        elif token.kind == LITERAL:
            return Text(token.value, token.pos)
        elif token.kind == EXPR:
            return self.make_expression(token)
        self.fail('expected a group, string or expression', token.pos,
                  EmptyTagPosition)

    def parse_group(self, open_token):
        """
        Parse the group opened by `open_token`.  The result is either an
        `Attribute`, an `Element` or a `Comment`.
        """
        first = self.next_token()
        if first.kind == CLOSE:
            self.fail('empty group, expected a tag or attribute name',
                      open_token.pos, EmptyTagPosition)

        if first.kind == SYMBOL and self.peek_kind() == EQUALS:
            self.next_token()
            attr = self.parse_attribute_value(first)
            token = self.next_token()
            if token.kind != CLOSE:
                self.fail('attribute %r takes exactly one value' %
                          first.value, token.pos, MalformedAttribute)
            return attr

        # reserved tags may be quoted, mostly because "!DOCTYPE" looks
        # better that way.
        if first.kind == SYMBOL or (first.kind == LITERAL and
                                    first.value.lower() in RESERVED):
            tag = first.value
        else:
            self.fail('expected a tag name', first.pos, EmptyTagPosition)

        key = tag.lower()
        if key == DOCTYPE:
            return self.parse_doctype(tag, open_token)
        elif key == COMMENT:
            return self.parse_comment(open_token)
        return self.parse_element(tag, open_token)

    def parse_attribute_value(self, name):
        """
        Parse the value of the attribute `name`.  The ``=`` is already
        consumed.
        """
        token = self.next_token()
        if token.kind in (LITERAL, SYMBOL):
            value = Text(token.value, token.pos)
        elif token.kind == EXPR:
            value = self.make_expression(token)
        else:
            self.fail('attribute %r has no value' % name.value, token.pos,
                      MalformedAttribute)
        return Attribute(name.value, value, name.pos)

    def parse_body(self, inline_groups=False):
        """
        Parse everything up to the end of the current group.  Attribute
        groups are children unless `inline_groups` is true, then they are
        added to the attributes like inline ones.

        :return: a tuple of the attribute and the child lists.
        """
        attrs = []
        children = []
        while 1:
            token = self.next_token()
            kind = token.kind
            if kind == CLOSE:
                break
            elif kind == OPEN:
                node = self.parse_group(token)
                if inline_groups and isinstance(node, Attribute):
                    attrs.append(node)
                else:
                    children.append(node)
            elif kind == SYMBOL:
                if self.peek_kind() == EQUALS:
                    self.next_token()
                    attrs.append(self.parse_attribute_value(token))
                else:
                    attrs.append(Attribute(token.value, None, token.pos))
            elif kind == LITERAL:
                children.append(Text(token.value, token.pos))
            elif kind == EXPR:
                children.append(self.make_expression(token))
            else:
                self.fail("'=' without an attribute name", token.pos,
                          MalformedAttribute)
        return attrs, children

    def parse_element(self, tag, open_token):
        # void elements have no children section to hold attribute groups
        void = tag.lower() in self.void_elements
        attrs, children = self.parse_body(void)
        if void and children:
            self.fail('void element %r cannot have children' % tag,
                      children[0].pos, IllegalChildrenOnVoidElement)
        return Element(tag, tuple(attrs), tuple(children), void,
                       open_token.pos)

    def parse_doctype(self, tag, open_token):
        attrs, children = self.parse_body(True)
        if children:
            self.fail('%s cannot have children' % tag, children[0].pos,
                      IllegalChildrenOnVoidElement)
        if len(attrs) != 1 or attrs[0].value is not None:
            self.fail('%s takes exactly one bare symbol, e.g. (%s html)' %
                      (tag, tag), open_token.pos, MalformedAttribute)
        return Element(tag, tuple(attrs), (), True, open_token.pos)

    def parse_comment(self, open_token):
        attrs, children = self.parse_body(True)
        if attrs:
            self.fail('comments cannot have attributes', attrs[0].pos,
                      MalformedAttribute)
        for child in children:
            if not isinstance(child, (Text, Expression)):
                self.fail('comments may only contain strings and '
                          'expressions', child.pos)
        return Comment(tuple(children), open_token.pos)

    def make_expression(self, token):
        """
        Compile the python expression of an `EXPR` token.

        :raises TemplateSyntaxError: if the expression is not valid python.
        """
        source = token.value.strip()
        if not source:
            raise TemplateSyntaxError('empty expression', *token.pos)
        try:
            code = CompiledExpression(source, token.pos[0], token.pos[1],
                                      lookup=self.lookup)
        except SyntaxError as e:
            raise TemplateSyntaxError(e, *token.pos)
        return Expression(source, code, token.pos)


def parse(source, filename=None, lineno=1, **options):
    """Parse parml source and return the `Document`."""
    return Parser(source, filename, lineno, **options).parse()
