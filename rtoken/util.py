#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Resources for tokenization, in particular per-language lists of non-breaking prefixes,
i.e. abbreviations such as 'Dr' or 'Nr' whose period does not end a sentence.
"""
# -*- encoding: utf-8 -*-
import logging as log
from pathlib import Path
import re
from typing import Dict, FrozenSet, Iterable, List, Optional, Tuple

DEFAULT_LANG_CODE = 'en'


def default_data_dir() -> Path:
    return Path(__file__).parent / "data"


class NonbreakingPrefixSet:
    """Two disjoint sets of abbreviation prefixes (without their period):
    text_prefixes are non-breaking before any token, e.g. 'Mr' in 'Mr. Smith';
    numeric_prefixes are non-breaking only before a number, e.g. 'No' in 'No. 5'.
    Prefix sets are loaded once per language and data directory, and are never modified afterwards."""
    re_empty_or_comment = re.compile(r'^\uFEFF?(?:#.*|\s*)$')
    re_numeric_only = re.compile(r'^\uFEFF?(.+?)\s+#NUMERIC_ONLY#\s*$')
    loaded_prefix_sets: Dict[Tuple[str, str], 'NonbreakingPrefixSet'] = {}

    def __init__(self, text_prefixes: Iterable[str] = (), numeric_prefixes: Iterable[str] = (),
                 lang_code: Optional[str] = None):
        self.text_prefixes: FrozenSet[str] = frozenset(text_prefixes)
        self.numeric_prefixes: FrozenSet[str] = frozenset(numeric_prefixes)
        self.lang_code = lang_code    # language of the data actually loaded, e.g. 'en' for a fallback

    def is_nonbreaking_prefix(self, prefix: str) -> bool:
        return prefix in self.text_prefixes

    def is_numeric_nonbreaking_prefix(self, prefix: str) -> bool:
        return prefix in self.numeric_prefixes

    def __len__(self) -> int:
        return len(self.text_prefixes) + len(self.numeric_prefixes)

    def __repr__(self) -> str:
        return f'<NonbreakingPrefixSet {self.lang_code} text:{len(self.text_prefixes)} ' \
               f'numeric:{len(self.numeric_prefixes)}>'

    @classmethod
    def from_lines(cls, lines: Iterable[str], lang_code: Optional[str] = None) -> 'NonbreakingPrefixSet':
        """Lines are bare prefixes ('Dr'), or prefixes followed by #NUMERIC_ONLY# ('No #NUMERIC_ONLY#').
        Empty lines and lines starting with # are ignored."""
        text_prefixes = set()
        numeric_prefixes = set()
        for line in lines:
            line = line.rstrip('\r\n')
            if cls.re_empty_or_comment.match(line):
                continue
            if m := cls.re_numeric_only.match(line):
                numeric_prefixes.add(m.group(1).strip())
            else:
                text_prefixes.add(line.strip().lstrip('\ufeff'))
        return cls(text_prefixes, numeric_prefixes, lang_code=lang_code)

    @classmethod
    def load(cls, filename: Path, lang_code: Optional[str] = None, verbose: bool = False) -> 'NonbreakingPrefixSet':
        """Example input file: data/nonbreaking_prefix.en.txt"""
        with open(filename, encoding='utf-8') as f_in:
            prefix_set = cls.from_lines(f_in, lang_code=lang_code)
        if verbose:
            log.info(f'Loaded {len(prefix_set.text_prefixes)} text prefixes and '
                     f'{len(prefix_set.numeric_prefixes)} numeric-only prefixes from {filename}')
        return prefix_set

    @classmethod
    def get(cls, lang_code: Optional[str], data_dir: Optional[Path] = None,
            verbose: bool = False) -> 'NonbreakingPrefixSet':
        """Returns the (shared) prefix set for a language, loading it on first use.
        Languages without their own prefix file fall back to English."""
        if data_dir is None:
            data_dir = default_data_dir()
        key = (str(data_dir), lang_code or '')
        if (prefix_set := cls.loaded_prefix_sets.get(key)) is None:
            prefix_set = cls.load_for_language(lang_code, data_dir, verbose=verbose)
            cls.loaded_prefix_sets[key] = prefix_set
        return prefix_set

    @classmethod
    def load_for_language(cls, lang_code: Optional[str], data_dir: Path,
                          verbose: bool = False) -> 'NonbreakingPrefixSet':
        filename = prefix_filename(data_dir, lang_code) if lang_code else None
        if filename and filename.is_file():
            try:
                return cls.load(filename, lang_code=lang_code, verbose=verbose)
            except OSError:
                log.warning(f"Could not read non-breaking prefix file for language '{lang_code}' ({filename})")
        if lang_code == DEFAULT_LANG_CODE:
            log.warning(f'No non-breaking prefix file for default language {DEFAULT_LANG_CODE} in {data_dir}')
            return cls(lang_code=None)
        if verbose:
            log.info(f"No non-breaking prefixes available for language '{lang_code}', "
                     f"using '{DEFAULT_LANG_CODE}' instead")
        return cls.get(DEFAULT_LANG_CODE, data_dir, verbose=verbose)


re_lang_code = re.compile(r'[a-zA-Z][-_a-zA-Z0-9]*$')


def prefix_filename(data_dir: Path, lang_code: str) -> Optional[Path]:
    """Data file for a language code, or None if the language code is not well-formed (e.g. contains a '/')."""
    if re_lang_code.match(lang_code):
        return data_dir / f'nonbreaking_prefix.{lang_code}.txt'
    return None


re_prefix_filename = re.compile(r'nonbreaking_prefix\.(.+)\.txt$')


def supported_languages(data_dir: Optional[Path] = None) -> List[str]:
    """Language codes with their own non-breaking prefix file, e.g. ['ca', 'cs', 'de', ...]"""
    if data_dir is None:
        data_dir = default_data_dir()
    lang_codes = []
    for filename in data_dir.glob('nonbreaking_prefix.*.txt'):
        if m := re_prefix_filename.match(filename.name):
            lang_codes.append(m.group(1))
    return sorted(lang_codes)


def reg_plural(s: str, n: int) -> str:
    """Form regular English plural form, e.g. 'position' -> 'positions' 'bush' -> 'bushes'"""
    if n == 1:
        return s
    elif re.match('.*(?:[sx]|[sc]h)$', s):
        return s + 'es'
    else:
        return s + 's'
