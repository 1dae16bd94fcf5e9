# Copyright 2025 Softwell S.r.l. - SPDX-License-Identifier: Apache-2.0
"""English plural -> singular heuristic.

Used by the encoder to expand a list into repeated singular elements
(`cars: [...]` -> `<cars><car/><car/></cars>`) and by the decoder to
flatten such groups back into a list.

This is a heuristic, not a dictionary. It is lossy (the word is
lower-cased and trimmed first, so case does not survive) and ambiguous
("news" -> "new", "headaches" -> "headach"). Fix wrong guesses with
exclude_words / include_words; use the same tables on both sides.

Rules, first match wins:
    1. word in exclude_words         -> unchanged
    2. word in include_words         -> mapped value
    3. ends in "us"                  -> unchanged (status, virus)
    4. ends in [sxz]es, or in "hes"
       not preceded by [aeioudgkprt] -> drop "es" (buses, boxes, watches)
    5. ends in consonant + "ies"     -> "y" (categories)
    6. ends in "s" but not "ss"      -> drop "s" (cars)
    7. otherwise                     -> unchanged
"""

from __future__ import annotations

import re

from .config import CodecConfig

_LATIN_US = re.compile(r'us$')
_SIBILANT_ES = re.compile(r'[sxz]es$')
_H_ES = re.compile(r'[^aeioudgkprt]hes$')
_CONSONANT_IES = re.compile(r'[^aeiou]ies$')


def to_singular(word: str, config: CodecConfig) -> str:
    """Return the singular form of word, or word itself when disabled."""
    if not config.singularize_words:
        return word

    word = word.strip().lower()

    if word in config.exclude_words:
        return word
    if word in config.include_words:
        return config.include_words[word]
    if _LATIN_US.search(word):
        return word
    if _SIBILANT_ES.search(word) or _H_ES.search(word):
        return word[:-2]
    if _CONSONANT_IES.search(word):
        return word[:-3] + 'y'
    if word.endswith('s') and not word.endswith('ss'):
        return word[:-1]
    return word
