# -*- coding: utf-8 -*-
"""
    parml.errors
    ~~~~~~~~~~~~

    The errors raised while compiling a parml template.  All of them are
    detected before anything is rendered and all of them are genshi
    `TemplateSyntaxError`\\s, so they carry the usual filename, line and
    offset information.

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
from genshi.template.base import TemplateSyntaxError


class ParserError(TemplateSyntaxError):
    """
    Generic parser error.  Subclasses name the actual problem.
    """

    def __init__(self, msg, filename=None, lineno=-1, offset=-1):
        TemplateSyntaxError.__init__(self, msg, filename, lineno, offset)
        self.offset = offset


class UnbalancedGroup(ParserError):
    """
    Raised if a group, string literal or expression delimiter has no
    matching counterpart.
    """


class UnterminatedGroup(UnbalancedGroup):
    """
    Raised if the source ends while a group is still open.
    """


class EmptyTagPosition(ParserError):
    """
    Raised if a group does not start with a tag or attribute name.
    """


class MalformedAttribute(ParserError):
    """
    Raised for attributes without a value, with more than one value or
    without an element to attach to.
    """


class IllegalChildrenOnVoidElement(ParserError):
    """
    Raised if a self-closing element is given content.
    """
