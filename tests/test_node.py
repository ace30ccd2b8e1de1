"""
Tests for tree mutation, traversal, cloning and paths.
"""

import logging

import pytest

from domtree.dom import (
    CData, Comment, Document, DocumentType, Element, Node, NodeCollection, NodeType,
    StructuralViolationError, Text
)


def names(node):
    return [child.name for child in node.children]


class TestCanInsert:
    @pytest.mark.parametrize('leaf', [Text('t'), Comment('c'), DocumentType()])
    def test_no_elements_under_leaf_nodes(self, leaf):
        with pytest.raises(StructuralViolationError):
            leaf.append(Element('div'))

    def test_no_text_under_comment(self):
        with pytest.raises(StructuralViolationError):
            Comment('c').append(Text('t'))

    def test_no_insert_into_itself(self):
        div = Element('div')
        with pytest.raises(StructuralViolationError):
            div.append(div)

    def test_same_node_is_structural(self):
        with pytest.raises(StructuralViolationError):
            Element('div').append(Element('div'))

    def test_no_insert_of_parent_into_child(self):
        parent = Element('ul')
        child = Element('li')
        parent.append(child)
        with pytest.raises(StructuralViolationError):
            child.append(parent)

    def test_grandparent_check_is_shallow(self):
        a, b, c = Element('a'), Element('b'), Element('c')
        a.append(b)
        b.append(c)
        assert c.append(a) is c
        assert a.parent is c

    def test_no_insert_into_self_closing(self):
        with pytest.raises(StructuralViolationError):
            Element('br').append(Text('x'))

    def test_failed_insert_changes_nothing(self):
        br = Element('br')
        span = Element('span')
        with pytest.raises(StructuralViolationError):
            br.append(span)
        assert span.parent is None
        assert br.children.length == 0


class TestAppendPrepend:
    def test_append_links_parent(self):
        ul, li = Element('ul'), Element('li')
        assert ul.append(li) is ul
        assert li.parent is ul
        assert ul.is_parent_of(li)
        assert li.is_child_of(ul)

    def test_append_to(self):
        ul, li = Element('ul'), Element('li')
        assert li.append_to(ul) is li
        assert ul.item(0) is li

    def test_prepend(self):
        div = Element('div').append(Element('b'))
        div.prepend(Element('a'))
        assert names(div) == ['a', 'b']
        Element('z').prepend_to(div)
        assert names(div) == ['z', 'a', 'b']

    def test_owner_document_is_inherited(self):
        doc = Document()
        div = doc.create_element('div').append_to(doc)
        p = Element('p')
        div.append(p)
        assert p.owner_document is doc

        orphan = Element('span')
        doc.append(orphan)
        assert orphan.owner_document is doc

    def test_append_text_comment_cdata(self):
        div = Element('div').append_text('t').append_comment('c').append_cdata('d')
        assert div.to_string() == 't<!--c--><![CDATA[d]]>'
        assert [child.node_type for child in div.children] == [
            NodeType.TEXT_NODE, NodeType.COMMENT_NODE, NodeType.CDATA_SECTION_NODE]


class TestSiblingInsertion:
    @pytest.fixture
    def tree(self):
        parent = Element('div')
        a, c = Element('a'), Element('c')
        parent.append(a).append(c)
        return parent, a, c

    def test_before(self, tree):
        parent, a, c = tree
        b = Element('b')
        assert c.before(b) is c
        assert names(parent) == ['a', 'b', 'c']
        assert b.parent is parent

    def test_after(self, tree):
        parent, a, c = tree
        b = Element('b')
        assert a.after(b) is a
        assert names(parent) == ['a', 'b', 'c']
        assert b.parent is parent

    def test_append_after_and_before(self, tree):
        parent, a, c = tree
        assert Element('b').append_after(a).parent is parent
        Element('z').append_before(a)
        assert names(parent) == ['z', 'a', 'b', 'c']

    def test_before_after_removal(self, tree):
        parent, a, c = tree
        b = Element('b')
        parent.append(b)
        parent.remove(c)
        b.before(Element('x'))
        assert names(parent) == ['a', 'x', 'b']

    def test_detached_target(self):
        with pytest.raises(StructuralViolationError):
            Element('a').before(Element('b'))
        with pytest.raises(StructuralViolationError):
            Element('a').after(Element('b'))
        with pytest.raises(StructuralViolationError):
            Element('b').append_after(Element('a'))
        with pytest.raises(StructuralViolationError):
            Element('b').append_before(Element('a'))

    def test_sibling_rules_checked(self, tree):
        parent, a, c = tree
        with pytest.raises(StructuralViolationError):
            a.after(parent)
        assert names(parent) == ['a', 'c']


class TestReplaceRemove:
    def test_replace(self):
        parent = Element('div')
        old = Element('br')
        parent.append(old)
        new = Element('hr')
        assert old.replace(new) is new
        assert parent.item(0) is new
        assert new.parent is parent
        assert parent.children.length == 1

    def test_replace_same_node(self):
        parent = Element('div')
        old = Element('br')
        parent.append(old)
        with pytest.raises(StructuralViolationError):
            old.replace(Element('br'))

    def test_replace_detached(self):
        with pytest.raises(StructuralViolationError):
            Element('br').replace(Element('hr'))

    def test_replace_child(self):
        parent = Element('div')
        old, new = Element('br'), Element('hr')
        parent.append(old)
        assert parent.replace_child(old, new) is parent
        assert names(parent) == ['hr']

    def test_replace_child_missing(self):
        with pytest.raises(StructuralViolationError):
            Element('div').replace_child(Element('br'), Element('hr'))

    def test_remove_keeps_parent_reference(self):
        parent = Element('div')
        child = Element('br')
        parent.append(child)
        assert parent.remove(child) is parent
        assert not parent.has_children()
        assert child.parent is parent

    def test_remove_non_child(self):
        with pytest.raises(StructuralViolationError):
            Element('div').remove(Element('br'))

    def test_do_empty(self):
        div = Element('div').append(Element('a')).append(Element('b'))
        assert div.do_empty() is div
        assert not div.has_children()


class TestTraversal:
    @pytest.fixture
    def ul(self):
        ul = Element('ul')
        for name in ('a', 'b', 'c'):
            ul.append(Element(name))
        return ul

    def test_item_first_last(self, ul):
        assert ul.item(1).name == 'b'
        assert ul.first().name == 'a'
        assert ul.last().name == 'c'
        with pytest.raises(StructuralViolationError):
            ul.item(9)
        with pytest.raises(StructuralViolationError):
            Text('x').item(0)
        with pytest.raises(StructuralViolationError):
            Element('ul').first()

    def test_prev_next(self, ul):
        a, b, c = ul.children.to_list()
        assert a.prev() is None
        assert c.next() is None
        assert b.prev() is a
        assert b.next() is c

    def test_prev_next_detached(self):
        assert Element('a').prev() is None
        assert Element('a').next() is None

    def test_prev_all_next_all_siblings(self, ul):
        a, b, c = ul.children.to_list()
        assert isinstance(b.siblings(), NodeCollection)
        assert b.prev_all().to_list() == [a]
        assert b.next_all().to_list() == [c]
        assert [n.name for n in b.siblings()] == ['a', 'c']
        assert a.prev_all().length == 0
        assert c.next_all().length == 0

    def test_iter_descendants(self):
        div = Element('div').append(Element('p').append_text('x')).append(Element('br'))
        assert [n.name for n in div.iter_descendants()] == ['p', '#text', 'br']


class TestPath:
    def test_path_to_root(self):
        doc = Document()
        html = doc.create_element('html').append_to(doc)
        body = doc.create_element('body').append_to(html)
        div = doc.create_element('div').append_to(body)
        assert div.get_path() == '#document/html/body/div'

    def test_path_counter_is_shared(self):
        doc = Document()
        body = doc.create_element('body').append_to(doc)
        first = doc.create_element('p', None, 'one').append_to(body)
        doc.create_element('p', None, 'two').append_to(body)

        start = Node.path_counter.value
        assert first.get_path() == '#document/body/p[%d]' % start
        assert first.get_path() == '#document/body/p[%d]' % (start + 1)

    def test_detached_path(self):
        assert Element('div').get_path() == 'div'


class TestClone:
    def test_shallow_clone(self, caplog):
        div = Element('div', None, {'id': 'x', 'title': 't', 'class': 'a'}).set_style('color', 'red')
        div.append(Element('p'))

        with caplog.at_level(logging.WARNING):
            clone = div.do_clone()

        assert 'duplicate element IDs' in caplog.text
        assert clone is not div
        assert clone.id == 'x'
        assert clone.get_attribute('title') == 't'
        assert clone.get_attribute_object('title').owner_element is clone
        assert clone.get_class_text() == 'a'
        assert clone.get_style('color') == 'red'
        assert not clone.has_children()

    def test_clone_collections_are_independent(self):
        div = Element('div').add_class('a')
        clone = div.do_clone()
        clone.add_class('b')
        assert div.get_class_text() == 'a'

    def test_is_clone_of(self):
        div = Element('div', None, {'title': 't'})
        clone = div.do_clone()
        assert clone == div
        assert clone.is_clone_of(div)
        assert not div.is_clone_of(clone)
        assert not Element('div', None, {'title': 't'}).is_clone_of(div)

    def test_deep_clone_moves_children(self):
        div = Element('div')
        p = Element('p')
        div.append(p)

        clone = div.do_clone(deep=True)

        assert clone.item(0) is p
        assert p.parent is clone
        assert div.item(0) is p

    def test_clone_keeps_owner_document(self):
        doc = Document()
        div = doc.create_element('div')
        assert div.do_clone().owner_document is doc

    @pytest.mark.parametrize('node, content', [
        (Text('x'), 'x'),
        (Comment('x'), '<!--x-->'),
        (CData('x'), '<![CDATA[x]]>'),
    ])
    def test_clone_leaf(self, node, content):
        clone = node.do_clone()
        assert clone.get_content() == content
        assert clone.is_clone_of(node)

    def test_document_cannot_be_cloned(self):
        with pytest.raises(StructuralViolationError):
            Document().do_clone()


class TestInnerText:
    def test_get_inner_text(self, page):
        doc, body, div, pre = page
        assert pre.get_inner_text() == 'i0i1'
        assert div.get_inner_text() == 'The DIV text...i0i1'

    def test_inner_text_of_leaf_nodes(self):
        element = Element('p').append_text('a &amp; b').append_comment('note').append_cdata('c')
        assert element.get_inner_text() == 'a & b'

    def test_set_inner_text(self, page):
        doc, body, div, pre = page
        pre.set_inner_text('pre..')
        assert pre.to_string() == 'pre..'
        assert pre.children.length == 1
