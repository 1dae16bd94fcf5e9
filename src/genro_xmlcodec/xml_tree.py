# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Light element tree built from a SAX parse.

The decoder needs three things a plain SAX stream does not give at once:
the children of an element before deciding its shape, the element's own
text, and the comments with their position in the document. XmlTreeBuilder
collects them into XmlNode objects in a single pass.

The parser runs without namespace processing: prefixed names
(`xs:element`, `xsi:nil`) are kept literally and `xmlns` declarations
arrive as ordinary attributes.
"""

from __future__ import annotations

import io
from typing import Any
from xml import sax
from xml.sax import handler as sax_handler
from xml.sax.xmlreader import InputSource

from .node_path import COMMENT_STEP


class XmlNode:
    """One element of the parsed document."""

    __slots__ = ('name', 'attributes', 'text_parts', 'children', 'comments', 'parent')

    def __init__(self, name: str, attributes: dict[str, str], parent: XmlNode | None = None):
        self.name = name
        self.attributes = attributes
        self.text_parts: list[str] = []
        self.children: list[XmlNode] = []
        self.comments: list[XmlComment] = []
        self.parent = parent

    @property
    def text(self) -> str:
        """Direct text content (children excluded), stripped."""
        return ''.join(self.text_parts).strip()

    def position(self) -> int | None:
        """1-based position among same-named siblings, None if unique."""
        if self.parent is None:
            return None
        same = [c for c in self.parent.children if c.name == self.name]
        if len(same) == 1:
            return None
        return next(i for i, c in enumerate(same, 1) if c is self)

    @property
    def xpath(self) -> str:
        """Absolute XPath-like location, e.g. /root/cars/car[2]."""
        steps = []
        node: XmlNode | None = self
        while node is not None:
            position = node.position()
            steps.append(node.name if position is None else f'{node.name}[{position}]')
            node = node.parent
        return '/' + '/'.join(reversed(steps))

    def __repr__(self) -> str:
        return f'<XmlNode {self.name} children={len(self.children)}>'


class XmlComment:
    """A comment and the element containing it (None outside the root)."""

    __slots__ = ('text', 'parent')

    def __init__(self, text: str, parent: XmlNode | None):
        self.text = text
        self.parent = parent

    @property
    def xpath(self) -> str:
        """XPath-like location, e.g. /root/cars/comment()[2]."""
        if self.parent is None:
            return f'/{COMMENT_STEP}'
        siblings = self.parent.comments
        if len(siblings) == 1:
            return f'{self.parent.xpath}/{COMMENT_STEP}'
        return f'{self.parent.xpath}/{COMMENT_STEP}[{siblings.index(self) + 1}]'


class XmlTreeBuilder(sax_handler.ContentHandler, sax_handler.LexicalHandler):
    """SAX handler producing an XmlNode tree.

    After parsing, `root` holds the document element and `comments`
    every comment of the document, in document order.
    """

    def __init__(self) -> None:
        super().__init__()
        self.root: XmlNode | None = None
        self.comments: list[XmlComment] = []
        self._stack: list[XmlNode] = []

    @classmethod
    def parse(cls, source: str | bytes) -> XmlTreeBuilder:
        """Parse a document and return the filled builder.

        Raises:
            xml.sax.SAXParseException: if the document is not well-formed.
        """
        builder = cls()
        parser = sax.make_parser()
        parser.setContentHandler(builder)
        parser.setProperty(sax_handler.property_lexical_handler, builder)
        inpsrc = InputSource()
        if isinstance(source, str):
            inpsrc.setCharacterStream(io.StringIO(source))
        else:
            inpsrc.setByteStream(io.BytesIO(source))
        parser.parse(inpsrc)
        return builder

    def startElement(self, name: str, attrs: Any) -> None:
        parent = self._stack[-1] if self._stack else None
        node = XmlNode(name, dict(attrs.items()), parent)
        if parent is None:
            self.root = node
        else:
            parent.children.append(node)
        self._stack.append(node)

    def endElement(self, name: str) -> None:
        self._stack.pop()

    def characters(self, content: str) -> None:
        if self._stack:
            self._stack[-1].text_parts.append(content)

    def comment(self, content: str) -> None:
        parent = self._stack[-1] if self._stack else None
        item = XmlComment(content, parent)
        if parent is not None:
            parent.comments.append(item)
        self.comments.append(item)

