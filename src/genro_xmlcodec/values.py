# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Value model shared by the XML encoder and decoder.

A value is one of:
    - None (null)
    - a scalar: str, int, float, Decimal, bool, date/time
    - a list (or tuple): ordered sequence of values, no keys
    - a dict: mapping of str -> value, insertion ordered

Inside a dict describing one XML element, a few keys are reserved and
interpreted by the codec instead of being emitted as child elements:

    @attributes  attribute name -> scalar (may hold @namespaces)
    @namespaces  list (or single dict) of {name, uri, content}
    @text        text content next to attributes/children
    @cdata       raw text written as a CDATA section
    @comment     one comment string or a list of them
"""

from __future__ import annotations

import datetime
from decimal import Decimal
from enum import Enum
from typing import Any, Union

from .errors import InvalidInput

ATTRIBUTES = '@attributes'
NAMESPACES = '@namespaces'
TEXT = '@text'
CDATA = '@cdata'
COMMENT = '@comment'

SCALAR_TYPES = (
    str, int, float, Decimal, bool,
    datetime.date, datetime.time, datetime.datetime,
)

# Recursive alias, documentation only
Value = Union[None, str, int, float, Decimal, bool, list['Value'], dict[str, 'Value']]


class ValueKind(Enum):
    """Tag of the value sum type."""

    NULL = 'null'
    SCALAR = 'scalar'
    LIST = 'list'
    MAP = 'map'


def kind_of(value: Any) -> ValueKind:
    """Classify a value.

    Raises:
        InvalidInput: if the value is none of null, scalar, list, map.
    """
    if value is None:
        return ValueKind.NULL
    if isinstance(value, dict):
        return ValueKind.MAP
    if isinstance(value, (list, tuple)):
        return ValueKind.LIST
    if isinstance(value, SCALAR_TYPES):
        return ValueKind.SCALAR
    raise InvalidInput(f'Unsupported value type: {type(value).__name__}')


def is_text_pair(value: Any) -> bool:
    """True for the {@text, @attributes} shape describing one element."""
    return isinstance(value, dict) and len(value) == 2 and TEXT in value and ATTRIBUTES in value
