# -*- coding: utf-8 -*-
"""
    parml.templating
    ~~~~~~~~~~~~~~~~

    Implements the parml template and the ways to create one.

    :copyright: Copyright 2026 by the parml authors.
    :license: BSD.
"""
import functools
import inspect
import linecache
import logging
import threading

from genshi.core import Markup, escape
from genshi.util import LRUCache

from parml.generator import LITERAL, ATTR_VALUE, generate
from parml.parser import Parser, VOID_ELEMENTS


log = logging.getLogger(__name__)

_cache = LRUCache(100)
_cache_lock = threading.RLock()


def to_text(value):
    """
    The default formatter.  `None` renders as nothing, strings (and thus
    `Markup` objects) are used as they are and everything else is
    converted with `str`.
    """
    if value is None:
        return ''
    if isinstance(value, str):
        return value
    return str(value)


class Template:
    """
    A compiled parml template.  The source is parsed and lowered into an
    emission plan when the template is created, rendering only evaluates
    the embedded expressions::

        >>> tmpl = Template('(p class = greeting "Hello " {name})')
        >>> print(tmpl.render(name='World'))
        <p class="greeting">Hello World</p>

    Nothing is escaped per default.  Pass ``escape=True`` to escape the
    results of expressions with genshi's `escape`.  `Markup` objects, which
    includes the output of other templates, are never escaped.

    `formatter` converts the value of an expression into text, `lookup` is
    the genshi lookup mode for names (``'strict'`` or ``'lenient'``) and
    `void_elements` overrides the set of self-closing tags.
    """

    void_elements = VOID_ELEMENTS
    default_lookup = 'strict'
    escape = False
    formatter = staticmethod(to_text)

    def __init__(self, source, filename=None, lineno=1, lookup=None,
                 escape=None, formatter=None, void_elements=None):
        self.source = source
        self.filename = filename
        self.lookup = lookup or self.default_lookup
        if escape is not None:
            self.escape = escape
        if formatter is not None:
            self.formatter = formatter
        if void_elements is not None:
            self.void_elements = frozenset(void_elements)
        self.plan = generate(self._parse(source, lineno))
        log.debug('compiled template %s into %d steps',
                  filename or '<string>', len(self.plan))

    def __repr__(self):
        return '<%s "%s">' % (type(self).__name__, self.filename or '<string>')

    def _parse(self, source, lineno):
        parser = Parser(source, self.filename, lineno, lookup=self.lookup,
                        void_elements=self.void_elements)
        return parser.parse()

    def _render(self, data):
        formatter = self.formatter
        for kind, value, pos in self.plan:
            if kind is LITERAL:
                yield value
                continue
            text = formatter(value.code.evaluate(data))
            if self.escape:
                text = escape(text, quotes=kind is ATTR_VALUE)
            yield text

    def render(self, *args, **kwargs):
        """
        Render the template.  The data for the expressions can be passed
        as a mapping, as keyword arguments or both.

        :return: the output as a `Markup` string.
        """
        if len(args) > 1:
            raise TypeError('render() takes at most one positional '
                            'argument (%d given)' % len(args))
        if args:
            data = dict(args[0])
            data.update(kwargs)
        else:
            data = kwargs
        return Markup(''.join(self._render(data)))


def compile(source, **options):
    """
    Return a `Template` for the source.  Templates are cached by their
    source and options so compiling the same source twice is cheap.
    """
    if 'void_elements' in options:
        options['void_elements'] = frozenset(options['void_elements'])
    key = (source, tuple(sorted(options.items())))
    _cache_lock.acquire()
    try:
        try:
            tmpl = _cache[key]
        except KeyError:
            tmpl = _cache[key] = Template(source, **options)
        else:
            log.debug('template cache hit for %r', tmpl)
        return tmpl
    finally:
        _cache_lock.release()


def _docstring_lineno(func):
    """Guess the line of the docstring of a function."""
    code = func.__code__
    lines = linecache.getlines(code.co_filename)
    for lineno in range(code.co_firstlineno, len(lines) + 1):
        line = lines[lineno - 1]
        if '"""' in line or "'''" in line:
            return lineno
    return code.co_firstlineno


class TemplateFunction:
    """
    A template defined in the docstring of a function.  Calling it renders
    the template with the arguments bound to the parameters of the
    function, defaults included.  The function body is never executed.
    """

    def __init__(self, func, **options):
        if func.__doc__ is None:
            raise TypeError('%s has no template in its docstring' %
                            func.__name__)
        functools.update_wrapper(self, func)
        self.signature = inspect.signature(func)
        self.template = Template(func.__doc__,
                                 filename=func.__code__.co_filename,
                                 lineno=_docstring_lineno(func), **options)

    def __call__(self, *args, **kwargs):
        bound = self.signature.bind(*args, **kwargs)
        bound.apply_defaults()
        return self.template.render(bound.arguments)


def template(func=None, **options):
    """
    Decorator that compiles the docstring of a function into a template
    at definition time::

        @template
        def greeting(name, punctuation='!'):
            '''(p "Hello " {name} {punctuation})'''

        greeting('World') == '<p>Hello World!</p>'

    Syntax errors in the template are raised when the module defining the
    function is imported.  Keyword arguments are passed on to `Template`.
    """
    if func is None:
        return lambda func: TemplateFunction(func, **options)
    return TemplateFunction(func, **options)
