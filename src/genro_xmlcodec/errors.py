# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Exception hierarchy for genro_xmlcodec.

All errors raised by the encoder, the decoder and the JSON bridge derive
from XmlCodecError, so callers can catch the whole family at once. Each
concrete class also derives from the closest builtin (ValueError,
RecursionError) for code that only knows the builtins.

Classes:
    XmlCodecError - base class
    InvalidInput - bad arguments (non-string source, unknown option...)
    InvalidRootName - empty or non-string root element name
    InvalidElementName - a node name violates the XML Name production
    MalformedXml - the document cannot be parsed
    MalformedJson - the JSON text cannot be parsed
    XmlRecursionError - nesting deeper than max_recursion_depth
"""

from __future__ import annotations

from typing import Any


class XmlCodecError(Exception):
    """Base exception for genro_xmlcodec."""
    pass


class InvalidInput(XmlCodecError, ValueError):
    """Raised when an encoder/decoder is constructed with bad arguments."""
    pass


class InvalidRootName(InvalidInput):
    """Raised when the root element name is empty or not a string."""

    def __init__(self, root: Any):
        super().__init__(f'Root element must be a non-empty string, got {root!r}')
        self.root = root


class InvalidElementName(XmlCodecError, ValueError):
    """Raised when a node name is not a valid XML element name.

    Typical cause: a list passed where a mapping is expected, so the
    numeric indexes end up as element names.
    """

    def __init__(self, name: Any):
        super().__init__(f'Node {name!r} is not a valid XML element name')
        self.name = name


class MalformedXml(XmlCodecError, ValueError):
    """Raised when the XML text is not well-formed."""

    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        if line is not None:
            message = f'{message} (line {line}, column {column})'
        super().__init__(message)
        self.line = line
        self.column = column


class MalformedJson(XmlCodecError, ValueError):
    """Raised when the JSON text cannot be decoded."""
    pass


class XmlRecursionError(XmlCodecError, RecursionError):
    """Raised when the document is nested deeper than allowed."""

    def __init__(self, depth: int, limit: int):
        super().__init__(
            f'Maximum recursion depth of processing XML has been exceeded ({depth} > {limit})'
        )
        self.depth = depth
        self.limit = limit
