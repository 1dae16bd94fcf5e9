# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for the functional API and value <-> XML round trips."""

import json

import pytest

from genro_xmlcodec import (
    InvalidElementName,
    MalformedJson,
    MsDateFormat,
    from_xml,
    is_valid_xml,
    json_to_xml,
    to_xml,
    xml_to_json,
)


class TestToXml:
    def test_returns_string(self, cars_data, cars_xml):
        assert to_xml('root', cars_data, singularize_words=True) == cars_xml

    def test_writes_file(self, tmp_path, cars_data, cars_xml):
        target = tmp_path / 'cars.xml'

        result = to_xml('root', cars_data, filename=str(target), singularize_words=True)

        assert result is None
        assert target.read_text(encoding='utf-8') == cars_xml


class TestFromXml:
    def test_from_xml(self, cars_xml, cars_data):
        assert from_xml(cars_xml, singularize_words=True) == cars_data

    def test_object_view(self, cars_xml):
        result = from_xml(cars_xml, singularize_words=True, as_object=True)
        assert result.cars[1].manufacturer == 'Škoda'


class TestIsValidXml:
    def test_valid(self, cars_xml):
        assert is_valid_xml(cars_xml)
        assert is_valid_xml(cars_xml.encode())

    @pytest.mark.parametrize('source', ['<root>', '', None, 42, '<a></b>'])
    def test_invalid(self, source):
        assert not is_valid_xml(source)


class TestJsonChain:
    def test_xml_to_json(self, cars_xml, cars_data):
        assert json.loads(xml_to_json(cars_xml, singularize_words=True)) == cars_data

    def test_xml_to_json_pretty(self):
        assert xml_to_json('<root><a>1</a></root>', pretty=True) == '{\n  "a": "1"\n}'

    def test_json_to_xml(self, cars_data, cars_xml):
        assert json_to_xml('root', json.dumps(cars_data), singularize_words=True) == cars_xml

    def test_json_to_xml_ms_dates(self):
        xml = json_to_xml('root', '{"when": "/Date(1425556377427)/"}', ms_date=MsDateFormat())
        assert '<when>2015-03-05 11:52:57</when>' in xml

    def test_json_to_xml_malformed(self):
        with pytest.raises(MalformedJson):
            json_to_xml('root', '{"a":')

    def test_json_array_rejected(self):
        with pytest.raises(InvalidElementName):
            json_to_xml('root', '["a", "b"]')


class TestRoundTrip:
    """Documents that survive encode -> decode unchanged."""

    def test_singularized(self, cars_data):
        xml = to_xml('root', cars_data, singularize_words=True)
        assert from_xml(xml, singularize_words=True) == cars_data

    def test_promoted_without_singularize(self, cars_data):
        assert from_xml(to_xml('root', cars_data)) == cars_data

    def test_decoded_document_encodes_back(self, annotated_xml):
        options = {
            'strip_comments': False,
            'strip_attributes': False,
            'strip_namespaces': False,
            'strip_root': False,
        }
        decoded = from_xml(annotated_xml, **options)

        xml = to_xml('catalog', decoded['catalog'], nil_on_null=True)

        assert 'xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance"' in xml
        assert '<discount xsi:nil="true"/>' in xml
        assert from_xml(xml, **options) == decoded

    def test_excluded_words_both_sides(self):
        data = {'images': {'image': ['a.png', 'b.png']}}
        options = {'singularize_words': True, 'exclude_words': ['images']}
        assert from_xml(to_xml('root', data, **options), **options) == data

    def test_typed_values(self):
        from decimal import Decimal

        data = {'count': 42, 'amount': Decimal('123.45'), 'name': 'x'}
        xml = to_xml('root', data, typed_values=True)
        assert from_xml(xml, typed_values=True) == data

    def test_typed_values_string_with_type_suffix(self):
        data = {'a': 'x::L', 'count': 7}
        xml = to_xml('root', data, typed_values=True)
        assert from_xml(xml, typed_values=True) == data
