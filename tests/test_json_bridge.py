# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the JSON bridge."""

import datetime
from decimal import Decimal
from types import SimpleNamespace

import pytest

from genro_xmlcodec import (
    InvalidInput,
    MalformedJson,
    MsDateFormat,
    decode_json,
    encode_json,
    is_valid_json,
    parse_ms_date,
    to_ms_date,
)


class TestEncodeJson:
    def test_plain(self):
        assert encode_json({'a': 1, 'b': [True, None]}) == '{"a": 1, "b": [true, null]}'

    def test_unicode_not_escaped(self):
        assert encode_json({'maker': 'Škoda'}) == '{"maker": "Škoda"}'

    def test_decimal_as_string(self):
        assert encode_json({'amount': Decimal('1.10')}) == '{"amount": "1.10"}'

    def test_dates_as_iso(self):
        value = {'day': datetime.date(2025, 1, 15), 'at': datetime.datetime(2025, 1, 15, 10, 30)}
        assert encode_json(value) == '{"day": "2025-01-15", "at": "2025-01-15T10:30:00"}'

    def test_namespace(self):
        assert encode_json(SimpleNamespace(a=1)) == '{"a": 1}'

    def test_pretty(self):
        assert encode_json({'a': 1}, pretty=True) == '{\n  "a": 1\n}'

    def test_unsupported(self):
        with pytest.raises(InvalidInput):
            encode_json({'a': object()})


class TestDecodeJson:
    def test_plain(self):
        assert decode_json('{"a": [1, "x", null]}') == {'a': [1, 'x', None]}

    def test_bytes(self):
        assert decode_json('{"maker": "Škoda"}'.encode()) == {'maker': 'Škoda'}

    def test_object_view(self):
        result = decode_json('{"a": {"b": 1}, "items": [{"c": 2}]}', as_object=True)
        assert result.a.b == 1
        assert result.items[0].c == 2

    def test_bigint_as_string(self):
        text = '{"big": 9223372036854775808, "small": 42, "neg": -9223372036854775809}'
        assert decode_json(text, bigint_as_string=True) == {
            'big': '9223372036854775808',
            'small': 42,
            'neg': '-9223372036854775809',
        }

    def test_bigint_default_is_int(self):
        assert decode_json('{"big": 9223372036854775808}') == {'big': 9223372036854775808}

    @pytest.mark.parametrize('text', ['{"a":', '', '{a: 1}', b'\x80abc'])
    def test_malformed(self, text):
        with pytest.raises(MalformedJson):
            decode_json(text)

    def test_invalid_type(self):
        with pytest.raises(InvalidInput):
            decode_json(42)

    def test_ms_dates_replaced(self):
        text = '{"when": "\\/Date(1425556377427)\\/", "items": ["/Date(1425556377427+0100)/"]}'
        assert decode_json(text, ms_date=MsDateFormat()) == {
            'when': '2015-03-05 11:52:57',
            'items': ['2015-03-05 12:52:57'],
        }

    def test_ms_dates_kept_without_format(self):
        assert decode_json('{"when": "/Date(1425556377427)/"}') == {'when': '/Date(1425556377427)/'}


class TestIsValidJson:
    def test_valid(self):
        assert is_valid_json('{}')
        assert is_valid_json('[1, 2]')

    @pytest.mark.parametrize('text', ['{', '', None, 42])
    def test_invalid(self, text):
        assert not is_valid_json(text)


class TestMsDates:
    def test_parse_utc(self):
        assert parse_ms_date('/Date(1425556377427)/') == '2015-03-05 11:52:57'

    def test_parse_with_offset(self):
        assert parse_ms_date('/Date(1425556377427+0100)/') == '2015-03-05 12:52:57'
        assert parse_ms_date('/Date(1425556377427-0230)/') == '2015-03-05 09:22:57'

    def test_parse_custom_format(self):
        assert parse_ms_date('/Date(1425556377427)/', MsDateFormat(timeformat='%d/%m/%Y')) == '05/03/2015'

    def test_parse_empty(self):
        assert parse_ms_date('') == ''

    def test_parse_invalid(self):
        with pytest.raises(InvalidInput):
            parse_ms_date('yesterday')

    def test_to_ms_date_datetime(self):
        moment = datetime.datetime(2015, 3, 5, 11, 52, 57, 427000, tzinfo=datetime.timezone.utc)
        assert to_ms_date(moment) == '/Date(1425556377427)/'

    def test_to_ms_date_naive_is_utc(self):
        assert to_ms_date(datetime.datetime(1970, 1, 1, 0, 0, 1)) == '/Date(1000)/'

    def test_to_ms_date_date(self):
        assert to_ms_date(datetime.date(1970, 1, 2)) == '/Date(86400000)/'

    def test_to_ms_date_iso_string(self):
        assert to_ms_date('1970-01-01T00:00:01') == '/Date(1000)/'

    def test_to_ms_date_now(self):
        result = to_ms_date()
        assert result.startswith('/Date(') and result.endswith(')/')

    def test_to_ms_date_invalid(self):
        with pytest.raises(InvalidInput):
            to_ms_date(42)

    def test_round_trip(self):
        moment = datetime.datetime(2020, 6, 1, 8, 0, 0)
        assert parse_ms_date(to_ms_date(moment)) == '2020-06-01 08:00:00'
