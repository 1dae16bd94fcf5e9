# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""In-memory XML writer.

XmlWriter buffers an indented XML document in memory. The encoder drives
it and hands it to interception hooks, which may write anything through
the same public methods.

Example:
    >>> writer = XmlWriter(indent_string='  ')
    >>> writer.start_document('1.0')
    >>> writer.start_element('root')
    >>> writer.write_attribute('id', 7)
    >>> writer.write_element('name', 'test')
    >>> writer.end_document()
    >>> print(writer.output())
    <?xml version="1.0" encoding="UTF-8"?>
    <root id="7">
      <name>test</name>
    </root>
"""

from __future__ import annotations

from typing import Any
from xml.sax import saxutils

from .errors import InvalidInput, XmlCodecError


class _Frame:
    """Open element state."""

    __slots__ = ('name', 'start_open', 'has_children', 'inline', 'declared')

    def __init__(self, name: str):
        self.name = name
        self.start_open = True
        self.has_children = False
        self.inline = False
        self.declared: set[str] = set()


class XmlWriter:
    """Buffered XML writer with indentation.

    Indentation is suppressed inside any element that received text
    (text, raw or CDATA), so mixed content is written exactly.
    """

    def __init__(self, indent_string: str = ' ', encoding: str = 'UTF-8'):
        self.indent_string = indent_string
        self.encoding = encoding
        self._parts: list[str] = []
        self._stack: list[_Frame] = []

    # ------------------------------------------------------------------
    # document

    def start_document(self, version: str = '1.0') -> None:
        self._parts.append(f'<?xml version="{version}" encoding="{self.encoding}"?>')

    def end_document(self) -> None:
        while self._stack:
            self.end_element()
        self._parts.append('\n')

    def output(self) -> str:
        return ''.join(self._parts)

    @property
    def depth(self) -> int:
        return len(self._stack)

    # ------------------------------------------------------------------
    # elements

    def start_element(self, name: str) -> None:
        self._open_child()
        self._parts.append(f'<{name}')
        self._stack.append(_Frame(name))

    def end_element(self) -> None:
        if not self._stack:
            raise XmlCodecError('end_element() called with no open element')
        frame = self._stack.pop()
        if frame.start_open:
            self._parts.append('/>')
            return
        if frame.has_children and not frame.inline:
            self._newline(len(self._stack))
        self._parts.append(f'</{frame.name}>')

    def write_element(self, name: str, text: str | None = None) -> None:
        """Write a complete element; empty text gives a self-closed tag."""
        self.start_element(name)
        if text:
            self.write_text(text)
        self.end_element()

    # ------------------------------------------------------------------
    # attributes

    def write_attribute(self, name: str, value: Any) -> None:
        """Write one attribute on the open start tag.

        Raises:
            InvalidInput: if the element already has an attribute with that name.
        """
        frame = self._open_start_tag('attribute')
        if name in frame.declared:
            raise InvalidInput(f'Duplicate attribute {name!r} on element <{frame.name}>')
        self._parts.append(f' {name}={saxutils.quoteattr(str(value))}')
        frame.declared.add(name)

    def write_namespace(self, prefix: str | None, uri: str) -> None:
        """Declare `xmlns:prefix="uri"` (or `xmlns="uri"` without prefix) once per element."""
        name = f'xmlns:{prefix}' if prefix else 'xmlns'
        frame = self._open_start_tag('namespace')
        if name in frame.declared:
            return
        self.write_attribute(name, uri or '')

    # ------------------------------------------------------------------
    # content

    def write_text(self, text: str) -> None:
        self._write_inline(saxutils.escape(text))

    def write_raw(self, text: str) -> None:
        self._write_inline(text)

    def write_cdata(self, text: str) -> None:
        self._write_inline('<![CDATA[' + text.replace(']]>', ']]]]><![CDATA[>') + ']]>')

    def write_comment(self, text: str) -> None:
        if '--' in text or text.endswith('-'):
            raise InvalidInput(f'Comment {text!r} cannot contain "--" or end with "-"')
        self._open_child()
        self._parts.append(f'<!--{text}-->')

    # ------------------------------------------------------------------
    # internals

    def _open_start_tag(self, what: str) -> _Frame:
        if not self._stack or not self._stack[-1].start_open:
            raise XmlCodecError(f'Cannot write {what}: no element start tag is open')
        return self._stack[-1]

    def _close_start_tag(self) -> None:
        if self._stack and self._stack[-1].start_open:
            self._parts.append('>')
            self._stack[-1].start_open = False

    def _open_child(self) -> None:
        """Prepare the buffer for a child node (element or comment)."""
        self._close_start_tag()
        if self._stack:
            parent = self._stack[-1]
            parent.has_children = True
            if parent.inline:
                return
        if self._parts:
            self._newline(len(self._stack))

    def _write_inline(self, chunk: str) -> None:
        if not self._stack:
            raise XmlCodecError('Cannot write text outside of an element')
        self._close_start_tag()
        self._stack[-1].inline = True
        self._parts.append(chunk)

    def _newline(self, level: int) -> None:
        self._parts.append('\n' + self.indent_string * level)
