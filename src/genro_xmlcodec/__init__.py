# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""genro_xmlcodec - value <-> XML transcoding.

Converts dicts, lists and scalars to XML documents and back, keeping
attributes, namespaces, CDATA, comments and mixed text in reserved keys
(@attributes, @namespaces, @cdata, @comment, @text), so a decoded
document can be encoded again.

Example:
    >>> from genro_xmlcodec import to_xml, from_xml
    >>> xml = to_xml('root', {'cars': [{'model': 'Golf'}]}, singularize_words=True)
    >>> from_xml(xml, singularize_words=True)
    {'cars': [{'model': 'Golf'}]}
"""

from .config import DecoderConfig, EncoderConfig
from .errors import (
    InvalidElementName,
    InvalidInput,
    InvalidRootName,
    MalformedJson,
    MalformedXml,
    XmlCodecError,
    XmlRecursionError,
)
from .json_bridge import MsDateFormat, decode_json, encode_json, is_valid_json, parse_ms_date, to_ms_date
from .node_path import NodePath, PathSegment
from .pluralize import to_singular
from .serialization import from_xml, is_valid_xml, json_to_xml, to_xml, xml_to_json
from .values import ATTRIBUTES, CDATA, COMMENT, NAMESPACES, TEXT, ValueKind, kind_of
from .xml_decoder import XmlDecoder
from .xml_encoder import XmlEncoder, is_valid_element_name
from .xml_writer import XmlWriter

__version__ = '0.1.0'

__all__ = [
    'ATTRIBUTES',
    'CDATA',
    'COMMENT',
    'DecoderConfig',
    'EncoderConfig',
    'InvalidElementName',
    'InvalidInput',
    'InvalidRootName',
    'MalformedJson',
    'MalformedXml',
    'MsDateFormat',
    'NAMESPACES',
    'NodePath',
    'PathSegment',
    'TEXT',
    'ValueKind',
    'XmlCodecError',
    'XmlDecoder',
    'XmlEncoder',
    'XmlRecursionError',
    'XmlWriter',
    'decode_json',
    'encode_json',
    'from_xml',
    'is_valid_element_name',
    'is_valid_json',
    'is_valid_xml',
    'json_to_xml',
    'kind_of',
    'parse_ms_date',
    'to_ms_date',
    'to_singular',
    'to_xml',
    'xml_to_json',
]
