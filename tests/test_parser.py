import pytest
from genshi.template.base import TemplateSyntaxError

from parml.errors import ParserError, UnbalancedGroup, EmptyTagPosition, \
                         MalformedAttribute, IllegalChildrenOnVoidElement
from parml.parser import Parser, parse, Element, Attribute, Text, \
                         Expression, Comment


def root(source, **options):
    nodes = parse(source, **options).nodes
    assert len(nodes) == 1
    return nodes[0]


def test_attribute_shape_wins_over_child_element():
    head = root('(head (title = "Hello"))')
    assert head.tag == 'head'
    assert head.attrs == ()
    attr, = head.children
    assert isinstance(attr, Attribute)
    assert attr.name == 'title'
    assert attr.value.value == 'Hello'


def test_group_without_equals_is_a_child_element():
    head = root('(head (title "Hello"))')
    assert head.attrs == ()
    title, = head.children
    assert isinstance(title, Element)
    assert title.tag == 'title'
    assert [child.value for child in title.children] == ['Hello']


def test_order_is_preserved_and_duplicates_are_kept():
    p = root('(p class = a (class = "b") "x" (class = "c") (b "y") class = d)')
    assert [(a.name, a.value.value) for a in p.attrs] == [
        ('class', 'a'), ('class', 'd')]
    assert [type(child) for child in p.children] == [
        Attribute, Text, Attribute, Element]
    assert [p.children[0].value.value, p.children[2].value.value] == [
        'b', 'c']


def test_attribute_groups_of_void_elements_go_into_the_opening_marker():
    img = root('(img (src = "a.png") alt = x)')
    assert img.children == ()
    assert [a.name for a in img.attrs] == ['src', 'alt']


def test_inline_and_flag_attributes():
    el = root('(input type = checkbox disabled)')
    assert el.void
    assert [(a.name, a.value and a.value.value) for a in el.attrs] == [
        ('type', 'checkbox'), ('disabled', None)]


def test_attribute_with_expression_value():
    a = root('(a href = {url})')
    value = a.attrs[0].value
    assert isinstance(value, Expression)
    assert value.source == 'url'


def test_expression_children_are_compiled():
    p = root('(p { name.upper() })')
    expr, = p.children
    assert isinstance(expr, Expression)
    assert expr.source == 'name.upper()'
    assert expr.code.evaluate({'name': 'x'}) == 'X'


def test_document_level_nodes():
    nodes = parse('"text" (p) {value}').nodes
    assert [type(node) for node in nodes] == [Text, Element, Expression]


def test_unknown_tags_are_elements():
    el = root('(my-widget "x")')
    assert el.tag == 'my-widget'
    assert not el.void


@pytest.mark.parametrize('source', ['(!DOCTYPE html)', '("!DOCTYPE" html)',
                                    '(!doctype html)'])
def test_doctype(source):
    el = root(source)
    assert el.void
    assert el.children == ()
    assert el.attrs[0][:2] == ('html', None)


def test_comment():
    comment = root('(!-- "note" {x})')
    assert isinstance(comment, Comment)
    assert [type(child) for child in comment.children] == [Text, Expression]


def test_void_elements_can_be_configured():
    assert root('(x-icon)', void_elements=['x-icon']).void
    assert not root('(br)', void_elements=()).void


def test_nodes_are_immutable():
    el = root('(p)')
    with pytest.raises(AttributeError):
        el.tag = 'div'


def test_positions_point_to_the_group():
    el = parse('\n  (p)', filename='page.parml').nodes[0]
    assert el.pos == ('page.parml', 2, 2)


def test_parse_twice():
    parser = Parser('(p)')
    parser.parse()
    with pytest.raises(RuntimeError):
        parser.parse()


@pytest.mark.parametrize('source', [
    '(html (attr =))',
    '(p =)',
    '(p (a = "x" "y"))',
    '(p (a = (b)))',
    '(p = "x")',
    '(p "x" = "y")',
    '(!DOCTYPE)',
    '(!DOCTYPE html xml)',
    '(!DOCTYPE lang = "en")',
    '(!-- lang = "en")',
])
def test_malformed_attribute(source):
    with pytest.raises(MalformedAttribute):
        parse(source)


@pytest.mark.parametrize('source', [
    '()',
    '(p ())',
    '("x" (b))',
    '({tag} "x")',
    '(= x)',
    'html',
])
def test_empty_tag_position(source):
    with pytest.raises(EmptyTagPosition):
        parse(source)


@pytest.mark.parametrize('source', [
    '(br "text")',
    '(img (src = "a.png") (span))',
    '(!DOCTYPE html (p))',
    '(!DOCTYPE html "x")',
])
def test_illegal_children_on_void_element(source):
    with pytest.raises(IllegalChildrenOnVoidElement):
        parse(source)


def test_comment_rejects_elements():
    with pytest.raises(ParserError):
        parse('(!-- (p))')


def test_lexer_errors_propagate():
    with pytest.raises(UnbalancedGroup):
        parse('(html (head)')


@pytest.mark.parametrize('source', ['(p {1 +})', '(p {})', '(a (b = { }))'])
def test_invalid_expression(source):
    with pytest.raises(TemplateSyntaxError) as excinfo:
        parse(source)
    assert not isinstance(excinfo.value, ParserError)


def test_errors_carry_position():
    with pytest.raises(MalformedAttribute) as excinfo:
        parse('(p\n  (a =))', filename='page.parml', lineno=5)
    assert excinfo.value.filename == 'page.parml'
    assert excinfo.value.lineno == 6
    assert excinfo.value.offset == 6
