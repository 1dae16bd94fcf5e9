# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""Configuration objects for one encode or decode call.

Both configs are frozen dataclasses. Callers build them directly or via
from_options(), which merges a plain mapping and keyword overrides over
the defaults:

    >>> config = DecoderConfig.from_options({'strip_root': False}, singularize_words=True)
    >>> config.strip_root, config.singularize_words
    (False, True)

The word override tables are copied into read-only containers, so a
config can be shared between threads and never aliases caller data.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, TypeVar

from .errors import InvalidInput

_C = TypeVar('_C', bound='CodecConfig')


def _normalize_word(word: str) -> str:
    return str(word).strip().lower()


def _check_option_names(cls: type, names: Iterable[str]) -> None:
    known = {f.name for f in dataclasses.fields(cls)}
    unknown = sorted(set(names) - known)
    if unknown:
        raise InvalidInput(f"Unknown {cls.__name__} option(s): {', '.join(unknown)}")


@dataclass(frozen=True)
class CodecConfig:
    """Options shared by encoder and decoder.

    Attributes:
        singularize_words: Enable plural/singular handling of repeated elements.
        exclude_words: Words never singularized.
        include_words: Explicit plural -> singular mapping, checked after exclude_words.
        typed_values: Keep scalar types across XML using TYTX `value::TYPE` text.
    """

    singularize_words: bool = False
    exclude_words: Iterable[str] = frozenset()
    include_words: Mapping[str, str] = field(default_factory=dict)
    typed_values: bool = False

    def __post_init__(self) -> None:
        if isinstance(self.exclude_words, str):
            raise InvalidInput('exclude_words must be a collection of words, not a string')
        object.__setattr__(
            self, 'exclude_words', frozenset(_normalize_word(w) for w in self.exclude_words)
        )
        object.__setattr__(
            self,
            'include_words',
            MappingProxyType({_normalize_word(k): v for k, v in dict(self.include_words).items()}),
        )

    @classmethod
    def from_options(cls: type[_C], options: Mapping[str, Any] | None = None, **kwargs: Any) -> _C:
        """Build a config from a mapping plus keyword overrides.

        Raises:
            InvalidInput: on unknown option names.
        """
        merged = dict(options or {})
        merged.update(kwargs)
        _check_option_names(cls, merged)
        return cls(**merged)

    def replace(self: _C, **changes: Any) -> _C:
        """Return a copy with some options changed.

        Raises:
            InvalidInput: on unknown option names.
        """
        _check_option_names(type(self), changes)
        return dataclasses.replace(self, **changes)


@dataclass(frozen=True)
class EncoderConfig(CodecConfig):
    """Encoder options.

    Attributes:
        nil_on_null: Write None as `<name xsi:nil="true"/>` instead of an empty element.
        document_version: Version written in the XML declaration.
        indent_string: String repeated once per nesting level.
    """

    nil_on_null: bool = False
    document_version: str = '1.0'
    indent_string: str = ' '


@dataclass(frozen=True)
class DecoderConfig(CodecConfig):
    """Decoder options.

    Attributes:
        strip_comments: Drop comments instead of reporting them under @comment.
        strip_attributes: Drop attributes instead of reporting them under @attributes.
        strip_namespaces: Drop root namespace declarations.
        strip_root: Return the root element content instead of {root: content}.
        max_recursion_depth: Deepest element nesting accepted (root is level 1).
    """

    strip_comments: bool = True
    strip_attributes: bool = True
    strip_namespaces: bool = True
    strip_root: bool = True
    max_recursion_depth: int = 500

    def __post_init__(self) -> None:
        super().__post_init__()
        depth = self.max_recursion_depth
        if isinstance(depth, bool) or not isinstance(depth, int) or depth < 1:
            raise InvalidInput(f'max_recursion_depth must be a positive int, got {depth!r}')
