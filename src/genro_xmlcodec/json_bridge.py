# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Value <-> JSON bridge.

Thin layer over the standard json module used by the decoder to build
its object view and by the serialization helpers to chain XML and JSON.
It also understands Microsoft JSON dates (`/Date(1425556377427+0100)/`).

Example:
    >>> text = encode_json({'when': '/Date(1425556377427)/'})
    >>> decode_json(text, ms_date=MsDateFormat())
    {'when': '2015-03-05 11:52:57'}
"""

from __future__ import annotations

import datetime
import json
import re
from dataclasses import dataclass
from decimal import Decimal
from types import SimpleNamespace
from typing import Any
from zoneinfo import ZoneInfo

from .errors import InvalidInput, MalformedJson

_MS_DATE = re.compile(r'(\\?/)?Date\((\d{10})(\d{3})([+-]\d{4})?\)(\\?/)?')

_INT64_MIN = -(2 ** 63)
_INT64_MAX = 2 ** 63 - 1


@dataclass(frozen=True)
class MsDateFormat:
    """How MS JSON dates are rendered.

    Attributes:
        timeformat: strftime format of the rendered date.
        timezone: IANA zone used when the date carries no offset (UTC if None).
    """

    timeformat: str = '%Y-%m-%d %H:%M:%S'
    timezone: str | None = None

    def tzinfo(self) -> datetime.tzinfo:
        return ZoneInfo(self.timezone) if self.timezone else datetime.timezone.utc


def _json_default(value: Any) -> Any:
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (datetime.date, datetime.time)):
        return value.isoformat()
    if isinstance(value, SimpleNamespace):
        return vars(value)
    raise InvalidInput(f'Value of type {type(value).__name__} is not JSON serializable')


def encode_json(value: Any, pretty: bool = False) -> str:
    """Encode a value as JSON text (Decimal as exact string, dates as ISO)."""
    return json.dumps(value, ensure_ascii=False, indent=2 if pretty else None, default=_json_default)


def _parse_int_keeping_bigint(text: str) -> int | str:
    number = int(text)
    if _INT64_MIN <= number <= _INT64_MAX:
        return number
    return text


def decode_json(
    text: str | bytes,
    as_object: bool = False,
    bigint_as_string: bool = False,
    ms_date: MsDateFormat | None = None,
) -> Any:
    """Decode JSON text.

    Args:
        text: JSON document.
        as_object: Return mappings as SimpleNamespace (object view).
        bigint_as_string: Keep integers outside the int64 range as strings.
        ms_date: If given, render MS JSON dates found in strings with it.

    Raises:
        InvalidInput: if text is not str/bytes.
        MalformedJson: if text is not valid JSON.
    """
    if not isinstance(text, (str, bytes)):
        raise InvalidInput(f'JSON decoder accepts only str or bytes, got {type(text).__name__}')
    try:
        result = json.loads(text, parse_int=_parse_int_keeping_bigint if bigint_as_string else None)
    except json.JSONDecodeError as exc:
        raise MalformedJson(f'{exc.msg} (line {exc.lineno}, column {exc.colno})') from exc
    except UnicodeDecodeError as exc:
        raise MalformedJson(f'Malformed UTF-8 characters: {exc.reason}') from exc

    if ms_date is not None:
        result = _walk_strings(result, lambda s: replace_ms_dates(s, ms_date))
    if as_object:
        result = _to_namespace(result)
    return result


def is_valid_json(text: Any) -> bool:
    """True if text is valid JSON. Never raises."""
    if not isinstance(text, (str, bytes)):
        return False
    try:
        json.loads(text)
    except ValueError:
        return False
    return True


# ----------------------------------------------------------------------
# MS JSON dates


def _render_ms_date(match: re.Match, fmt: MsDateFormat) -> str:
    seconds, millis, offset = int(match.group(2)), int(match.group(3)), match.group(4)
    moment = datetime.datetime.fromtimestamp(seconds, tz=datetime.timezone.utc)
    moment += datetime.timedelta(milliseconds=millis)
    if offset:
        sign = -1 if offset[0] == '-' else 1
        delta = datetime.timedelta(hours=int(offset[1:3]), minutes=int(offset[3:5]))
        tz: datetime.tzinfo = datetime.timezone(sign * delta)
    else:
        tz = fmt.tzinfo()
    return moment.astimezone(tz).strftime(fmt.timeformat)


def replace_ms_dates(text: str, fmt: MsDateFormat) -> str:
    """Replace every MS JSON date in text with its rendering."""
    return _MS_DATE.sub(lambda match: _render_ms_date(match, fmt), text)


def parse_ms_date(text: str, fmt: MsDateFormat | None = None) -> str:
    """Render one MS JSON date, e.g. '/Date(1425556377427+0100)/'.

    Returns '' for empty text.

    Raises:
        InvalidInput: if text holds no MS JSON date.
    """
    if not text:
        return ''
    match = _MS_DATE.search(text)
    if match is None:
        raise InvalidInput(f'{text!r} is not a MS JSON date')
    return _render_ms_date(match, fmt or MsDateFormat())


def to_ms_date(value: datetime.datetime | datetime.date | str | None = None, timezone: str | None = None) -> str:
    """Convert a date to MS JSON format '/Date(milliseconds)/'.

    Args:
        value: datetime, date, ISO string or None for now.
        timezone: IANA zone for naive values (UTC if None).
    """
    tz = ZoneInfo(timezone) if timezone else datetime.timezone.utc
    if value is None:
        moment = datetime.datetime.now(tz)
    elif isinstance(value, str):
        moment = datetime.datetime.fromisoformat(value)
    elif isinstance(value, datetime.datetime):
        moment = value
    elif isinstance(value, datetime.date):
        moment = datetime.datetime(value.year, value.month, value.day)
    else:
        raise InvalidInput(f'Cannot convert {type(value).__name__} to a MS JSON date')
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=tz)
    return f'/Date({round(moment.timestamp() * 1000)})/'


# ----------------------------------------------------------------------
# walkers


def _walk_strings(value: Any, func: Any) -> Any:
    if isinstance(value, str):
        return func(value)
    if isinstance(value, list):
        return [_walk_strings(v, func) for v in value]
    if isinstance(value, dict):
        return {k: _walk_strings(v, func) for k, v in value.items()}
    return value


def _to_namespace(value: Any) -> Any:
    if isinstance(value, list):
        return [_to_namespace(v) for v in value]
    if isinstance(value, dict):
        return SimpleNamespace(**{k: _to_namespace(v) for k, v in value.items()})
    return value
