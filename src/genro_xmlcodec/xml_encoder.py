# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""XML encoder: value -> XML document text.

Supports attributes, namespaces, CDATA and comments through the reserved
keys of values.py, singular expansion of lists (`products` ->
`<products><product/>...</products>`), `xsi:nil` marking of None and
per-node interception hooks.

Example:
    >>> from genro_xmlcodec.xml_encoder import XmlEncoder
    >>> xml = XmlEncoder.encode('root', {
    ...     'shop': 'supercars.com',
    ...     'cars': [{'model': 'Golf'}, {'model': 'Rapid'}],
    ... }, singularize_words=True)
    >>> print(xml)
    <?xml version="1.0" encoding="UTF-8"?>
    <root>
     <shop>supercars.com</shop>
     <cars>
      <car>
       <model>Golf</model>
      </car>
      <car>
       <model>Rapid</model>
      </car>
     </cars>
    </root>

Hooks replace the default output for every node with a given name:

    >>> def price(writer, name, value):
    ...     writer.start_element(name)
    ...     writer.write_attribute('currency', 'EUR')
    ...     writer.write_text(str(value))
    ...     writer.end_element()
    >>> XmlEncoder.encode('root', {'price': 10}, hooks={'price': price})
"""

from __future__ import annotations

import datetime
import logging
import re
from collections.abc import Callable, Mapping
from typing import Any

from genro_tytx import to_tytx

from .config import EncoderConfig
from .errors import InvalidElementName, InvalidInput, InvalidRootName
from .pluralize import to_singular
from .values import (
    ATTRIBUTES,
    CDATA,
    COMMENT,
    NAMESPACES,
    TEXT,
    ValueKind,
    is_text_pair,
    kind_of,
)
from .xml_writer import XmlWriter

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = 'application/xml; charset=utf-8'

# Hook signature: (writer, node_name, node_value)
NodeHook = Callable[[XmlWriter, str, Any], None]

# XML 1.0 Name production, https://www.w3.org/TR/xml/#NT-Name
_NAME_START_CHARS = (
    r':A-Z_a-z\xC0-\xD6\xD8-\xF6\xF8-\u02FF\u0370-\u037D\u037F-\u1FFF\u200C-\u200D'
    r'\u2070-\u218F\u2C00-\u2FEF\u3001-\uD7FF\uF900-\uFDCF\uFDF0-\uFFFD\U00010000-\U000EFFFF'
)
_NAME_CHARS = _NAME_START_CHARS + r'.\-0-9\xB7\u0300-\u036F\u203F-\u2040'
_XML_NAME = re.compile(f'[{_NAME_START_CHARS}][{_NAME_CHARS}]*')

XSI_NIL = 'xsi:nil'


def is_valid_element_name(name: Any) -> bool:
    """True if name is a string matching the XML Name production."""
    return isinstance(name, str) and _XML_NAME.fullmatch(name) is not None


def _split_attributes(content: dict) -> tuple[Any, dict]:
    """Separate @attributes from the rest of an element mapping."""
    if ATTRIBUTES not in content:
        return None, content
    return content[ATTRIBUTES], {k: v for k, v in content.items() if k != ATTRIBUTES}


class XmlEncoder:
    """Encode a mapping into an XML document under a named root element.

    The encoder never modifies the value it is given. Each call to
    load() uses a fresh XmlWriter, so one instance can be loaded many
    times and instances can be used from different threads.
    """

    content_type = XML_CONTENT_TYPE

    def __init__(
        self,
        root: str,
        value: dict | list | tuple,
        config: EncoderConfig | None = None,
        hooks: Mapping[str, NodeHook] | None = None,
        **options: Any,
    ):
        """Initialize the encoder.

        Args:
            root: Root element name.
            value: Mapping to encode. A list is accepted but its indexes
                are not valid element names, so load() will fail.
            config: Encoder configuration; defaults to EncoderConfig().
            hooks: Node name -> callable(writer, name, value) replacing
                the default output for that name.
            **options: EncoderConfig fields overriding config.

        Raises:
            InvalidRootName: if root is empty or not a string.
            InvalidInput: if value is not a mapping/list, a hook is not
                callable, or an option is unknown.
        """
        if not isinstance(root, str) or not root:
            raise InvalidRootName(root)
        if not isinstance(value, (dict, list, tuple)):
            raise InvalidInput(f'XML encoder accepts a mapping, got {type(value).__name__}')
        if config is None:
            config = EncoderConfig.from_options(options)
        elif options:
            config = config.replace(**options)
        hooks = dict(hooks or {})
        for name, hook in hooks.items():
            if not callable(hook):
                raise InvalidInput(f'Hook for node {name!r} must be callable')

        self.root = root
        self.value = value
        self.config = config
        self.hooks = hooks
        self.writer: XmlWriter | None = None

    @classmethod
    def encode(
        cls,
        root: str,
        value: dict | list | tuple,
        config: EncoderConfig | None = None,
        hooks: Mapping[str, NodeHook] | None = None,
        **options: Any,
    ) -> str:
        """Encode value and return the XML document text."""
        return cls(root, value, config=config, hooks=hooks, **options).load()

    def load(self) -> str:
        """Return the serialized document."""
        return self._serialize()

    def __str__(self) -> str:
        return self._serialize()

    # ------------------------------------------------------------------
    # main loop

    def _serialize(self) -> str:
        logger.debug(f"Encoding XML document with root '{self.root}'")
        self.writer = XmlWriter(indent_string=self.config.indent_string)
        self.writer.start_document(self.config.document_version)

        self._assert_element_name(self.root)
        self.writer.start_element(self.root)

        data = self.value
        if isinstance(data, dict):
            attributes, data = _split_attributes(data)
            self._write_attributes(attributes)

        self._rotate(data)

        self.writer.end_element()
        self.writer.end_document()
        result = self.writer.output()
        logger.debug(f'Encoded XML document of {len(result)} characters')
        return result

    def _rotate(self, data: dict | list | tuple) -> None:
        """Emit every entry of a mapping (or, failing later, of a list)."""
        items = data.items() if isinstance(data, dict) else enumerate(data)
        for node, item in items:
            self._emit(node, item)

    def _emit(self, node: Any, item: Any) -> None:
        """Emit one node/value pair."""
        hook = self.hooks.get(node) if isinstance(node, str) else None
        if hook is not None:
            hook(self.writer, node, item)
            return

        if node == COMMENT:
            self._write_comments(item)
        elif node == CDATA:
            self.writer.write_cdata(self._to_text(item))
        elif node == TEXT:
            self._write_text(item)
        elif isinstance(item, dict):
            if is_text_pair(item):
                self._handle_text_pair(node, item)
            else:
                self._handle_nested(node, item)
        elif isinstance(item, (list, tuple)):
            self._handle_singular(node, item)
        else:
            self._handle_element(node, item)

    # ------------------------------------------------------------------
    # node handlers

    def _handle_text_pair(self, node: Any, item: dict) -> None:
        """Element given as {@text: ..., @attributes: ...}.

        Scalar text is written escaped, so any string round-trips through
        the decoder. Hooks can write unescaped markup with writer.write_raw.
        """
        text = item[TEXT]
        attributes = item[ATTRIBUTES]
        if isinstance(text, dict):
            self._handle_nested(node, text, attributes)
        elif isinstance(text, (list, tuple)):
            self._handle_singular(node, text, attributes)
        else:
            self._assert_element_name(node)
            self.writer.start_element(node)
            self._write_attributes(attributes)
            if text is None and self.config.nil_on_null and XSI_NIL not in (attributes or {}):
                self.writer.write_attribute(XSI_NIL, 'true')
            self._write_text(text)
            self.writer.end_element()

    def _handle_nested(self, node: Any, content: dict | list | tuple, attributes: Any = None) -> None:
        """Element with child nodes."""
        self._assert_element_name(node)
        self.writer.start_element(node)
        self._write_attributes(attributes)
        if isinstance(content, dict):
            own_attributes, content = _split_attributes(content)
            self._write_attributes(own_attributes)
        self._rotate(content)
        self.writer.end_element()

    def _handle_singular(self, node: Any, items: list | tuple, attributes: Any = None) -> None:
        """List value: one wrapper with singular children, or repeated siblings."""
        self._assert_element_name(node)
        singular = to_singular(node, self.config)
        wrap = self.config.singularize_words and singular != node

        if wrap:
            self.writer.start_element(node)
            self._write_attributes(attributes)
            for subitem in items:
                self._emit(singular, subitem)
            self.writer.end_element()
            return

        for subitem in items:
            if isinstance(subitem, (list, tuple)):
                self._handle_nested(node, subitem, attributes)
            elif attributes:
                self._emit(node, {TEXT: subitem, ATTRIBUTES: attributes})
            else:
                self._emit(node, subitem)

    def _handle_element(self, node: Any, item: Any) -> None:
        """Scalar or None value."""
        self._assert_element_name(node)
        if item is None and self.config.nil_on_null:
            self.writer.start_element(node)
            self.writer.write_attribute(XSI_NIL, 'true')
            self.writer.end_element()
        else:
            self.writer.write_element(node, self._to_text(item))

    # ------------------------------------------------------------------
    # attributes, namespaces, text

    def _write_attributes(self, attributes: Any) -> None:
        if not attributes:
            return
        if not isinstance(attributes, dict):
            raise InvalidInput(f'{ATTRIBUTES} must be a mapping, got {type(attributes).__name__}')
        for name, value in attributes.items():
            if name == NAMESPACES:
                namespaces = [value] if isinstance(value, dict) else value
                for namespace in namespaces:
                    self._handle_namespace(namespace)
            else:
                self._assert_element_name(name)
                self.writer.write_attribute(name, self._to_text(value))

    def _handle_namespace(self, namespace: Any) -> None:
        """Write one {name, uri, content} namespace declaration.

        name forms:
            ''/None or 'xmlns'   -> xmlns="uri"
            'p' or 'xmlns:p'     -> xmlns:p="uri"
            'p:local'            -> xmlns:p="uri" p:local="content"
        """
        if not isinstance(namespace, dict):
            raise InvalidInput(f'Namespace declaration must be a mapping, got {namespace!r}')
        uri = namespace.get('uri')
        if uri is None:
            raise InvalidInput(f'Namespace declaration {namespace!r} has no uri')
        name = namespace.get('name') or ''
        prefix, _, local = name.partition(':')
        if prefix == 'xmlns':
            prefix, local = local, ''

        if prefix:
            self._assert_element_name(prefix)
        self.writer.write_namespace(prefix or None, str(uri))

        content = namespace.get('content')
        if local and content is not None:
            self.writer.write_attribute(f'{prefix}:{local}', self._to_text(content))

    def _write_comments(self, item: Any) -> None:
        comments = item if isinstance(item, (list, tuple)) else [item]
        for comment in comments:
            self.writer.write_comment(self._to_text(comment))

    def _write_text(self, item: Any) -> None:
        if isinstance(item, dict):
            self._rotate(item)
            return
        text = self._to_text(item)
        if text:
            self.writer.write_text(text)

    def _to_text(self, value: Any) -> str:
        """Convert a scalar to element/attribute text."""
        kind = kind_of(value)
        if kind is ValueKind.NULL:
            return ''
        if kind is not ValueKind.SCALAR:
            raise InvalidInput(f'Expected a scalar, got {type(value).__name__}')
        if isinstance(value, str):
            return value
        if self.config.typed_values:
            encoded = to_tytx(value, _force_suffix=True)
            if isinstance(encoded, str):
                return encoded
        if isinstance(value, bool):
            return 'true' if value else 'false'
        if isinstance(value, (datetime.date, datetime.time)):
            return value.isoformat()
        return str(value)

    @staticmethod
    def _assert_element_name(name: Any) -> None:
        if not is_valid_element_name(name):
            raise InvalidElementName(name)
