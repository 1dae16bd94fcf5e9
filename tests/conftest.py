# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Pytest configuration and fixtures."""

import pytest


@pytest.fixture
def cars_data():
    """Shop document with a list of cars."""
    return {
        'shop': 'supercars.com',
        'cars': [
            {'manufacturer': 'VW', 'model': 'Golf', 'engine': '1.9'},
            {'manufacturer': 'Škoda', 'model': 'Rapid', 'engine': '1.6'},
        ],
    }


@pytest.fixture
def cars_xml():
    """The shop document as written with singularize_words=True."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<root>\n'
        ' <shop>supercars.com</shop>\n'
        ' <cars>\n'
        '  <car>\n'
        '   <manufacturer>VW</manufacturer>\n'
        '   <model>Golf</model>\n'
        '   <engine>1.9</engine>\n'
        '  </car>\n'
        '  <car>\n'
        '   <manufacturer>Škoda</manufacturer>\n'
        '   <model>Rapid</model>\n'
        '   <engine>1.6</engine>\n'
        '  </car>\n'
        ' </cars>\n'
        '</root>\n'
    )


@pytest.fixture
def annotated_xml():
    """Document with namespaces, attributes, comments and xsi:nil."""
    return (
        '<?xml version="1.0" encoding="UTF-8"?>\n'
        '<!--catalog export-->\n'
        '<catalog xmlns:xsi="http://www.w3.org/2001/XMLSchema-instance">\n'
        '  <product id="1" lang="en">\n'
        '    <!--best seller-->\n'
        '    <name>Lamp</name>\n'
        '    <price currency="EUR">10.50</price>\n'
        '    <discount xsi:nil="true"/>\n'
        '  </product>\n'
        '  <product id="2">\n'
        '    <name>Chair</name>\n'
        '    <price currency="EUR">45</price>\n'
        '    <discount>5</discount>\n'
        '  </product>\n'
        '</catalog>\n'
    )


@pytest.fixture
def nested_xml():
    """Builder of documents with `levels` nested elements (root included)."""

    def build(levels):
        opening = ''.join(f'<l{i}>' for i in range(1, levels + 1))
        closing = ''.join(f'</l{i}>' for i in range(levels, 0, -1))
        return opening + 'x' + closing

    return build
