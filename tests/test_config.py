# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Tests for EncoderConfig and DecoderConfig."""

import dataclasses

import pytest

from genro_xmlcodec import DecoderConfig, EncoderConfig, InvalidInput


class TestDefaults:
    def test_encoder_defaults(self):
        config = EncoderConfig()
        assert config.singularize_words is False
        assert config.nil_on_null is False
        assert config.document_version == '1.0'
        assert config.indent_string == ' '
        assert config.exclude_words == frozenset()
        assert dict(config.include_words) == {}

    def test_decoder_defaults(self):
        config = DecoderConfig()
        assert config.strip_comments
        assert config.strip_attributes
        assert config.strip_namespaces
        assert config.strip_root
        assert config.max_recursion_depth == 500


class TestFromOptions:
    def test_mapping_and_kwargs_merge(self):
        config = DecoderConfig.from_options({'strip_root': False, 'strip_comments': False}, strip_comments=True)
        assert config.strip_root is False
        assert config.strip_comments is True

    def test_unknown_option(self):
        with pytest.raises(InvalidInput, match='nil_on_null'):
            DecoderConfig.from_options(nil_on_null=True)

    def test_replace(self):
        config = EncoderConfig(singularize_words=True)
        changed = config.replace(nil_on_null=True)
        assert changed.singularize_words and changed.nil_on_null
        assert not config.nil_on_null

    def test_replace_unknown_option(self):
        with pytest.raises(InvalidInput):
            EncoderConfig().replace(strip_root=False)


class TestNormalization:
    def test_words_lowercased(self):
        config = EncoderConfig(exclude_words=['Images', ' NEWS '], include_words={'People': 'person'})
        assert config.exclude_words == frozenset({'images', 'news'})
        assert dict(config.include_words) == {'people': 'person'}

    def test_exclude_words_string_rejected(self):
        with pytest.raises(InvalidInput):
            EncoderConfig(exclude_words='images')

    def test_caller_tables_not_aliased(self):
        include = {'people': 'person'}
        config = DecoderConfig(include_words=include)
        include['mice'] = 'mouse'
        assert 'mice' not in config.include_words

    def test_include_words_read_only(self):
        config = DecoderConfig(include_words={'people': 'person'})
        with pytest.raises(TypeError):
            config.include_words['mice'] = 'mouse'

    def test_frozen(self):
        config = EncoderConfig()
        with pytest.raises(dataclasses.FrozenInstanceError):
            config.nil_on_null = True


class TestRecursionDepth:
    @pytest.mark.parametrize('depth', [0, -1, True, 1.5, '10'])
    def test_invalid_depth(self, depth):
        with pytest.raises(InvalidInput):
            DecoderConfig(max_recursion_depth=depth)

    def test_valid_depth(self):
        assert DecoderConfig(max_recursion_depth=1).max_recursion_depth == 1
