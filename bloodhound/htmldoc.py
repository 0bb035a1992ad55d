"""A lenient HTML document tree built on the standard library parser."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from enum import Enum
from html.parser import HTMLParser


class NodeType(Enum):
    """Kinds of node in a parsed document."""

    ERROR = "error"
    TEXT = "text"
    DOCUMENT = "document"
    ELEMENT = "element"
    COMMENT = "comment"
    DOCTYPE = "doctype"


@dataclass
class Node:
    """A document node; ``data`` is the tag name for elements, text otherwise."""

    type: NodeType
    data: str = ""
    attrs: list[tuple[str, str]] = field(default_factory=list)
    children: list[Node] = field(default_factory=list, repr=False)

    def descendants(self) -> Iterator[Node]:
        """Yield every node below this one in depth-first pre-order."""
        stack = list(reversed(self.children))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children))

    def attr_map(self) -> dict[str, str]:
        """Return the attributes as a dict; later duplicates win."""
        return dict(self.attrs)


_VOID_ELEMENTS = frozenset(
    {
        "area", "base", "br", "col", "embed", "hr", "img", "input",
        "link", "meta", "param", "source", "track", "wbr",
    }
)


class _TreeBuilder(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.document = Node(NodeType.DOCUMENT)
        self._open: list[Node] = [self.document]

    @property
    def _current(self) -> Node:
        return self._open[-1]

    def _append(self, node: Node) -> None:
        self._current.children.append(node)

    def handle_starttag(self, tag, attrs):
        node = Node(NodeType.ELEMENT, tag, [(k, v or "") for k, v in attrs])
        self._append(node)
        if tag not in _VOID_ELEMENTS:
            self._open.append(node)

    def handle_startendtag(self, tag, attrs):
        self._append(Node(NodeType.ELEMENT, tag, [(k, v or "") for k, v in attrs]))

    def handle_endtag(self, tag):
        for depth in range(len(self._open) - 1, 0, -1):
            if self._open[depth].data == tag:
                del self._open[depth:]
                return

    def handle_data(self, data):
        siblings = self._current.children
        if siblings and siblings[-1].type is NodeType.TEXT:
            siblings[-1].data += data
        else:
            self._append(Node(NodeType.TEXT, data))

    def handle_comment(self, data):
        self._append(Node(NodeType.COMMENT, data))

    def handle_decl(self, decl):
        name = decl
        if decl[:7].lower() == "doctype":
            name = decl[7:].strip()
        self._append(Node(NodeType.DOCTYPE, name.lower()))

    def handle_pi(self, data):
        self._append(Node(NodeType.COMMENT, data))


def parse_html(text: str) -> Node:
    """Parse HTML text into a tree rooted at a document node."""
    builder = _TreeBuilder()
    builder.feed(text)
    builder.close()
    return builder.document