# -*- coding: utf-8 -*-
"""
    parml.generator
    ~~~~~~~~~~~~~~~

    Lowers a parsed document into an emission plan.  The plan is a stream of
    ``(kind, data, pos)`` events in the spirit of a genshi markup stream,
    only that the events describe output operations instead of markup::

        (a href = {url} "home")

    is lowered to::

        LITERAL         '<a'
        LITERAL         ' '
        ATTR_OPEN       'href'
        ATTR_VALUE      Expression('url')
        ATTR_CLOSE      None
        CHILDREN_OPEN   None
        LITERAL         'home'
        CHILDREN_CLOSE  'a'

    and then coalesced so that only the steps that depend on run time data
    are left between literal text::

        LITERAL         '<a href="'
        ATTR_VALUE      Expression('url')
        LITERAL         '">home</a>'

    Attribute groups among the children of an element, as in
    ``(head (title = "Hello"))``, are lowered to a marker of their own
    at their position, ``<title="Hello">``.

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
from itertools import chain

from genshi.core import StreamEventKind

from parml.errors import IllegalChildrenOnVoidElement
from parml.parser import Element, Attribute, Text, Expression, Comment


LITERAL = StreamEventKind('LITERAL')
ATTR_OPEN = StreamEventKind('ATTR_OPEN')
ATTR_VALUE = StreamEventKind('ATTR_VALUE')
ATTR_CLOSE = StreamEventKind('ATTR_CLOSE')
CHILDREN_OPEN = StreamEventKind('CHILDREN_OPEN')
EXPR = StreamEventKind('EXPR')
CHILDREN_CLOSE = StreamEventKind('CHILDREN_CLOSE')


class Generator:
    """
    Walks a `Document` depth first and yields the primitive emission
    events.  The generator can be iterated over more than once.
    """

    def __init__(self, document):
        self.document = document

    def __iter__(self):
        for node in self.document.nodes:
            for event in self.lower(node):
                yield event

    def lower(self, node):
        """Return an iterable of the events for a single node."""
        if isinstance(node, Element):
            return self.lower_element(node)
        elif isinstance(node, Text):
            return [(LITERAL, node.value, node.pos)]
        elif isinstance(node, Expression):
            return [(EXPR, node, node.pos)]
        elif isinstance(node, Attribute):
            return self.lower_attribute_marker(node)
        elif isinstance(node, Comment):
            return self.lower_comment(node)
        raise TypeError('cannot lower %r' % (node,))

    def lower_element(self, element):
        pos = element.pos
        yield LITERAL, '<' + element.tag, pos
        for attr in element.attrs:
            if attr.value is None:
                yield LITERAL, ' ' + attr.name, attr.pos
            else:
                yield LITERAL, ' ', attr.pos
                for event in self.lower_attribute(attr):
                    yield event

        if element.void:
            if element.children:
                raise IllegalChildrenOnVoidElement(
                    'void element %r cannot have children' % element.tag,
                    *element.children[0].pos)
            yield LITERAL, '>', pos
            return

        yield CHILDREN_OPEN, None, pos
        for child in element.children:
            for event in self.lower(child):
                yield event
        yield CHILDREN_CLOSE, element.tag, pos

    def lower_attribute(self, attr):
        yield ATTR_OPEN, attr.name, attr.pos
        yield ATTR_VALUE, attr.value, attr.value.pos
        yield ATTR_CLOSE, None, attr.pos

    def lower_attribute_marker(self, attr):
        yield LITERAL, '<', attr.pos
        for event in self.lower_attribute(attr):
            yield event
        yield LITERAL, '>', attr.pos

    def lower_comment(self, comment):
        yield LITERAL, '<!-- ', comment.pos
        for child in comment.children:
            for event in self.lower(child):
                yield event
        yield LITERAL, ' -->', comment.pos


def _static_text(kind, data):
    """
    Return the output text of a statically known event or `None` if the
    event depends on run time data.
    """
    if kind is LITERAL:
        return data
    elif kind is ATTR_OPEN:
        return '%s="' % data
    elif kind is ATTR_VALUE:
        if isinstance(data, Text):
            return data.value
        return None
    elif kind is ATTR_CLOSE:
        return '"'
    elif kind is CHILDREN_OPEN:
        return '>'
    elif kind is CHILDREN_CLOSE:
        return '</%s>' % data


def coalesce(stream):
    """
    Folds static events into `LITERAL` events and merges adjacent ones.
    What remains are `LITERAL` events and `EXPR` / `ATTR_VALUE` events
    carrying an `Expression` node.
    """
    textbuf = []
    textpos = None
    for kind, data, pos in chain(stream, [(None, None, None)]):
        text = _static_text(kind, data) if kind else None
        if text is not None:
            textbuf.append(text)
            if textpos is None:
                textpos = pos
        else:
            if textbuf:
                value = ''.join(textbuf)
                textbuf = []
                if value:
                    yield LITERAL, value, textpos
                textpos = None
            if kind:
                yield kind, data, pos


def generate(document):
    """Return the coalesced emission plan of a document as a tuple."""
    return tuple(coalesce(Generator(document)))
