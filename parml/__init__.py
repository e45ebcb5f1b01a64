# -*- coding: utf-8 -*-
"""
    parml
    ~~~~~

    Parenthesized Markup Language.  A small templating language that
    describes markup trees with nested groups, in the tradition of the
    s-expression HTML generators of the Lisp world.  Templates are parsed
    and lowered into a plan of output steps once, rendering only evaluates
    the embedded Python expressions.

    This piece of HTML::

        <!DOCTYPE html>
        <html lang="en">
          <head><title>Page Title</title></head>
          <body>
            <div class="content">
              <p>Hello World!</p>
              <input type="checkbox" checked>
            </div>
          </body>
        </html>

    Looks like this in parml::

        (!DOCTYPE html)
        (html lang = en
          (head (title "Page Title"))
          ; a comment that will not appear in the output
          (body
            (div class = content
              (p "Hello " {name} "!")
              (input type = checkbox checked))))

    Attributes are written inline, ``name = value`` or just ``name``, and
    go into the opening tag.  A group whose first two atoms are a name and
    ``=`` is always an attribute too, but it keeps its place among the
    children and renders as a marker of its own, so ``(head (title =
    "Hello"))`` is ``<head><title="Hello"></head>`` while ``(title
    "Hello")`` is a title element.

    Expressions are written in braces and are evaluated with genshi's
    expression evaluator.  Nothing is escaped unless the template is
    created with ``escape=True``.

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
from parml.errors import ParserError, UnbalancedGroup, UnterminatedGroup, \
                         EmptyTagPosition, MalformedAttribute, \
                         IllegalChildrenOnVoidElement
from parml.generator import generate
from parml.parser import parse
from parml.templating import Template, compile, template
