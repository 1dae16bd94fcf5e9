# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""XML decoder: XML document text -> value.

By default comments, attributes, namespaces and the root element are
stripped, so the result is plain data. Each of them can be kept through
DecoderConfig, in which case it is reported under the reserved keys of
values.py and can be fed back to the encoder.

A child whose name is the singular of its parent name is flattened into
a list, which is how the encoder writes lists with singularize_words
enabled. Without it the singular of a name is the name itself, so only
children named like their parent are flattened:

    >>> xml = '''<?xml version="1.0" encoding="UTF-8"?>
    ... <root>
    ...   <foo>bar</foo>
    ...   <bars>
    ...     <bar>yes</bar>
    ...     <bar>no</bar>
    ...   </bars>
    ... </root>'''
    >>> XmlDecoder.decode(xml, singularize_words=True)
    {'foo': 'bar', 'bars': ['yes', 'no']}
    >>> XmlDecoder.decode(xml)
    {'foo': 'bar', 'bars': {'bar': ['yes', 'no']}}

Comments are located in a separate pass: every comment's XPath-like
location is parsed once into a NodePath and indexed by its element path;
the main pass then attaches them under @comment when it reaches that
element.
"""

from __future__ import annotations

import logging
from collections import Counter
from typing import Any
from xml import sax

from genro_tytx import from_tytx

from .config import DecoderConfig
from .errors import InvalidInput, MalformedXml, XmlRecursionError
from .node_path import NodePath
from .pluralize import to_singular
from .values import ATTRIBUTES, COMMENT, NAMESPACES, TEXT
from .xml_tree import XmlNode, XmlTreeBuilder

logger = logging.getLogger(__name__)

XSI_NIL = 'xsi:nil'


def _is_namespace_declaration(name: str) -> bool:
    return name == 'xmlns' or name.startswith('xmlns:')


class XmlDecoder:
    """Decode an XML document into dicts, lists and strings.

    Example:
        >>> decoder = XmlDecoder('<root><a x="1">b</a></root>', strip_attributes=False)
        >>> decoder.to_array()
        {'a': {'@attributes': {'x': '1'}, '@text': 'b'}}
    """

    def __init__(self, source: str | bytes, config: DecoderConfig | None = None, **options: Any):
        """Initialize the decoder.

        Args:
            source: XML document as str or bytes.
            config: Decoder configuration; defaults to DecoderConfig().
            **options: DecoderConfig fields overriding config.

        Raises:
            InvalidInput: if source is not str/bytes or an option is unknown.
        """
        if not isinstance(source, (str, bytes)):
            raise InvalidInput(f'XML decoder accepts only str or bytes, got {type(source).__name__}')
        if config is None:
            config = DecoderConfig.from_options(options)
        elif options:
            config = config.replace(**options)
        self.source = source
        self.config = config
        self._comments: dict[NodePath, list[str]] = {}

    @classmethod
    def decode(
        cls,
        source: str | bytes,
        config: DecoderConfig | None = None,
        as_object: bool = False,
        **options: Any,
    ) -> Any:
        """Decode source; as_object=True returns the object view."""
        decoder = cls(source, config=config, **options)
        return decoder.to_object() if as_object else decoder.to_array()

    def is_valid(self) -> bool:
        """True if the source is well-formed XML. Never raises."""
        try:
            XmlTreeBuilder.parse(self.source)
        except (sax.SAXException, ValueError):
            return False
        return True

    def to_array(self) -> Any:
        """Decode to plain dicts, lists and scalars.

        Raises:
            MalformedXml: if the source is not well-formed.
            XmlRecursionError: if nesting exceeds max_recursion_depth.
        """
        return self._to_primitive()

    def to_object(self) -> Any:
        """Decode to the object view: mappings become SimpleNamespace."""
        from .json_bridge import decode_json, encode_json

        return decode_json(encode_json(self._to_primitive()), as_object=True)

    def to_json(self, pretty: bool = False) -> str:
        """Decode and re-encode as JSON text."""
        from .json_bridge import encode_json

        return encode_json(self._to_primitive(), pretty=pretty)

    # ------------------------------------------------------------------
    # main logic

    def _to_primitive(self) -> Any:
        try:
            builder = XmlTreeBuilder.parse(self.source)
        except sax.SAXParseException as exc:
            raise MalformedXml(
                f'Provided XML is not valid: {exc.getMessage()}',
                exc.getLineNumber(),
                exc.getColumnNumber(),
            ) from exc

        root = builder.root
        logger.debug(f"Decoding XML document with root '{root.name}'")
        root_path = NodePath().child(root.name)
        self._comments = {} if self.config.strip_comments else self._index_comments(builder, root_path)

        value = self._process(root, root_path)
        if not self.config.strip_namespaces:
            value = self._add_namespaces(root, value)

        if self.config.strip_root:
            return value
        return {root.name: value}

    def _index_comments(self, builder: XmlTreeBuilder, root_path: NodePath) -> dict[NodePath, list[str]]:
        """Map each element path to the comments it contains.

        Each comment's XPath-like location is parsed once into a NodePath;
        the element path is its parent. Comments outside the document
        element are given to the root.
        """
        index: dict[NodePath, list[str]] = {}
        for comment in builder.comments:
            path = NodePath.from_xpath(comment.xpath)
            element_path = path.parent if len(path) > 1 else root_path
            index.setdefault(element_path, []).append(comment.text)
        logger.debug(f'Indexed {len(builder.comments)} comment(s) in {len(index)} element(s)')
        return index

    def _process(self, root: XmlNode, root_path: NodePath) -> Any:
        """Convert the element tree to a value.

        The tree is walked bottom-up with an explicit stack, so the only
        nesting limit is max_recursion_depth (root is level 1).
        """
        limit = self.config.max_recursion_depth
        values: dict[int, Any] = {}
        stack: list[tuple[XmlNode, int, NodePath, bool]] = [(root, 1, root_path, False)]

        while stack:
            node, depth, path, expanded = stack.pop()
            if depth > limit:
                raise XmlRecursionError(depth, limit)
            if expanded:
                children = [(child.name, values.pop(id(child))) for child in node.children]
                values[id(node)] = self._element(node, path, children)
                continue
            stack.append((node, depth, path, True))
            for child, child_path in reversed(self._child_paths(node, path)):
                stack.append((child, depth + 1, child_path, False))

        return values[id(root)]

    @staticmethod
    def _child_paths(node: XmlNode, path: NodePath) -> list[tuple[XmlNode, NodePath]]:
        counts = Counter(child.name for child in node.children)
        seen: Counter[str] = Counter()
        result = []
        for child in node.children:
            seen[child.name] += 1
            position = seen[child.name] if counts[child.name] > 1 else None
            result.append((child, path.child(child.name, position)))
        return result

    def _element(self, node: XmlNode, path: NodePath, children: list[tuple[str, Any]]) -> Any:
        """Build the value of one element from its already converted children."""
        text = node.text
        attributes = self._attributes(node)
        comments = self._comments.get(path)

        if not children:
            if not attributes and not comments:
                if node.attributes.get(XSI_NIL) == 'true' and not text:
                    return None
                return self._scalar(text)
            return self._compose({}, attributes, text, comments)

        output: dict[str, Any] = {}
        singular = to_singular(node.name, self.config)
        flat_key = None
        promoted: set[str] = set()

        for name, element in children:
            if singular == name:
                # flatten
                output.setdefault(name, []).append(element)
                flat_key = name
            elif name in output:
                if name not in promoted:
                    output[name] = [output[name]]
                    promoted.add(name)
                output[name].append(element)
            else:
                output[name] = element

        if flat_key is not None and len(output) == 1 and not attributes and not text and not comments:
            return output[flat_key]
        return self._compose(output, attributes, text, comments)

    def _compose(
        self,
        children: dict[str, Any],
        attributes: dict[str, Any],
        text: str,
        comments: list[str] | None,
    ) -> dict[str, Any]:
        """Build an element mapping: @attributes, children, @text, @comment."""
        result: dict[str, Any] = {}
        if attributes:
            result[ATTRIBUTES] = attributes
        result.update(children)
        if text:
            result[TEXT] = self._scalar(text)
        if comments:
            result[COMMENT] = comments[0] if len(comments) == 1 else list(comments)
        return result

    def _attributes(self, node: XmlNode) -> dict[str, Any]:
        if self.config.strip_attributes:
            return {}
        return {
            name: self._scalar(value)
            for name, value in node.attributes.items()
            if not _is_namespace_declaration(name) and not (name == XSI_NIL and value == 'true')
        }

    def _add_namespaces(self, root: XmlNode, value: Any) -> Any:
        """Report the root namespace declarations under @attributes.@namespaces."""
        namespaces = [
            {'name': name.partition(':')[2], 'uri': uri}
            for name, uri in root.attributes.items()
            if _is_namespace_declaration(name)
        ]
        if not namespaces:
            return value

        if isinstance(value, list):
            value = {to_singular(root.name, self.config): value}
        elif not isinstance(value, dict):
            value = {} if value in ('', None) else {TEXT: value}

        attributes = dict(value.get(ATTRIBUTES) or {})
        attributes[NAMESPACES] = namespaces
        return {ATTRIBUTES: attributes, **{k: v for k, v in value.items() if k != ATTRIBUTES}}

    def _scalar(self, text: str) -> Any:
        if self.config.typed_values and text:
            try:
                return from_tytx(text)
            except (ValueError, ArithmeticError):
                # plain text that merely looks like value::TYPE
                return text
        return text
