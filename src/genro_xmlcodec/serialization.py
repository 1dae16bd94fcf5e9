# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Functional API.

Shortcuts over XmlEncoder, XmlDecoder and the JSON bridge:

- **to_xml** / **from_xml**: value <-> XML document
- **is_valid_xml**: well-formedness probe, never raises
- **xml_to_json** / **json_to_xml**: chain the XML codec with JSON

Example:
    >>> from genro_xmlcodec import to_xml, from_xml
    >>>
    >>> data = {'shop': 'supercars.com', 'cars': [{'model': 'Golf'}, {'model': 'Rapid'}]}
    >>> xml = to_xml('root', data)
    >>> from_xml(xml) == data
    True
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .config import DecoderConfig, EncoderConfig
from .json_bridge import MsDateFormat, decode_json
from .xml_decoder import XmlDecoder
from .xml_encoder import NodeHook, XmlEncoder


def to_xml(
    root: str,
    value: dict | list | tuple,
    filename: str | None = None,
    config: EncoderConfig | None = None,
    hooks: Mapping[str, NodeHook] | None = None,
    **options: Any,
) -> str | None:
    """Serialize value to an XML document.

    Args:
        root: Root element name.
        value: Mapping to serialize.
        filename: Optional file path to write to. If provided, returns None.
        config: Encoder configuration.
        hooks: Node name -> callable(writer, name, value).
        **options: EncoderConfig fields.

    Returns:
        XML string if filename is None, else None (written to file).
    """
    result = XmlEncoder.encode(root, value, config=config, hooks=hooks, **options)
    if filename:
        with open(filename, 'w', encoding='utf-8') as f:
            f.write(result)
        return None
    return result


def from_xml(
    source: str | bytes,
    config: DecoderConfig | None = None,
    as_object: bool = False,
    **options: Any,
) -> Any:
    """Deserialize an XML document.

    Args:
        source: XML document as str or bytes.
        config: Decoder configuration.
        as_object: Return mappings as SimpleNamespace.
        **options: DecoderConfig fields.
    """
    return XmlDecoder.decode(source, config=config, as_object=as_object, **options)


def is_valid_xml(source: Any) -> bool:
    """True if source is a well-formed XML document. Never raises."""
    if not isinstance(source, (str, bytes)):
        return False
    return XmlDecoder(source).is_valid()


def xml_to_json(source: str | bytes, pretty: bool = False, **options: Any) -> str:
    """Decode XML (DecoderConfig options) and return it as JSON text."""
    return XmlDecoder(source, **options).to_json(pretty=pretty)


def json_to_xml(
    root: str,
    source: str | bytes,
    ms_date: MsDateFormat | None = None,
    hooks: Mapping[str, NodeHook] | None = None,
    **options: Any,
) -> str:
    """Decode JSON text and encode it as XML (EncoderConfig options).

    Raises:
        MalformedJson: if source is not valid JSON.
        InvalidInput, InvalidElementName: if the JSON document is not an object.
    """
    return XmlEncoder.encode(root, decode_json(source, ms_date=ms_date), hooks=hooks, **options)
