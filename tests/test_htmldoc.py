from bloodhound.htmldoc import Node, NodeType, parse_html


def _tags(document):
    return [n.data for n in document.descendants() if n.type is NodeType.ELEMENT]


def test_root_is_document():
    document = parse_html("<p>hi</p>")
    assert document.type is NodeType.DOCUMENT


def test_elements_in_preorder():
    document = parse_html("<head><title>T</title></head><body><p>x</p></body>")
    assert _tags(document) == ["head", "title", "body", "p"]


def test_doctype_node():
    document = parse_html("<!DOCTYPE html><p>x</p>")
    first = next(document.descendants())
    assert first.type is NodeType.DOCTYPE
    assert first.data == "html"


def test_void_element_has_no_children():
    document = parse_html('<form><input type="hidden"><p>after</p></form>')
    form = document.children[0]
    assert [child.data for child in form.children] == ["input", "p"]
    assert form.children[0].children == []


def test_attr_map_and_valueless_attribute():
    document = parse_html('<input type="hidden" disabled>')
    node = document.children[0]
    assert node.attr_map() == {"type": "hidden", "disabled": ""}


def test_text_node_and_charrefs():
    document = parse_html("<p>a &amp; b</p>")
    texts = [n.data for n in document.descendants() if n.type is NodeType.TEXT]
    assert texts == ["a & b"]


def test_comment_node():
    document = parse_html("<!-- note --><p>x</p>")
    comments = [n for n in document.descendants() if n.type is NodeType.COMMENT]
    assert [c.data for c in comments] == [" note "]


def test_unmatched_end_tag_ignored():
    document = parse_html("<div></span><p>x</p></div>")
    div = document.children[0]
    assert [child.data for child in div.children] == ["p"]


def test_descendants_excludes_self():
    leaf = Node(NodeType.TEXT, "leaf")
    middle = Node(NodeType.ELEMENT, "b", children=[leaf])
    root = Node(NodeType.ELEMENT, "a", children=[middle])
    assert list(root.descendants()) == [middle, leaf]
    assert list(leaf.descendants()) == []