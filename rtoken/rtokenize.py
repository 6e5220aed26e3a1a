#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Rule-based word tokenizer for MT and other NLP pipelines.
A line is tokenized by an ordered sequence of regex rewrite steps, some of them language-specific,
followed by a pass that decides for each word-final period whether it is an abbreviation period
(e.g. 'Dr.', 'U.S.') or a sentence-final period to be split off.
When using STDIN and/or STDOUT, it might be necessary, particularly for older versions of Python, to do
'export PYTHONIOENCODING=UTF-8' before calling this Python script to ensure UTF-8 encoding.
"""
# -*- encoding: utf-8 -*-
import argparse
import datetime
from enum import Enum
import functools
import logging as log
from pathlib import Path
import re
import regex
import sys
from typing import Callable, List, NamedTuple, Optional, TextIO
from . import __version__, last_mod_date
from . import util
from .regex_ops import Chain, Loop, Noop, Replace, Search

log.basicConfig(level=log.INFO)

# Option bits
AGGRESSIVE = 1  # split hyphens between alphanumeric characters: 'X-ray' -> 'X @-@ ray'
NO_ESCAPE = 2   # do not escape &|<>'"[] as XML entities

# Character classes (to be used inside [...])
ALNUM = r'\p{Alphabetic}\p{M}\p{Nd}'
ALPHA = r'\p{Alphabetic}'
NUMBER = r'\p{N}'

deduplicate_space = Replace(r'\s+', ' ')

remove_ascii_junk = Replace(r'[\x00-\x1F]', '')

pad_non_alphanumeric = Replace(r'([^' + ALNUM + r"\s.'`,-])", r' \1 ')

fi_sv_pad_non_alphanumeric = Chain(
    # In Finnish and Swedish, a colon can be used inside words: USA:n, 20:een, EU:ssa, S:t
    Replace(r'([^' + ALNUM + r"\s.:'`,-])", r' \1 '),
    # A colon not followed by a lower-case letter is separated anyway.
    Replace(r'(:)(?=$|[^\p{Ll}])', r' \1 '))

ca_pad_non_alphanumeric = Chain(
    # In Catalan, a middle dot can be used inside words: il·lusió
    Replace(r'([^' + ALNUM + r"\s.·'`,-])", r' \1 '),
    Replace(r'(·)(?=$|[^\p{Ll}])', r' \1 '))

aggressive_hyphen_split = Replace(r'([' + ALNUM + r'])-(?=[' + ALNUM + r'])', r'\1 @-@ ')

# Multi-dots such as '...' are protected as DOTMULTI, DOTDOTMULTI etc. so that they survive period splitting.
# Example: 'Wait...' -> 'Wait DOTMULTI..' -> 'Wait DOTDOTMULTI.' -> 'Wait DOTDOTDOTMULTI'
replace_multidot = Loop(
    Replace(r'\.(\.+)', r' DOTMULTI\1'),
    Search(r'DOTMULTI\.'),
    Chain(
        Replace(r'DOTMULTI\.([^.])', r'DOTDOTMULTI \1'),
        Replace(r'DOTMULTI\.', 'DOTDOTMULTI')),
    Noop())

restore_multidot = Loop(
    Noop(),
    Search('DOTDOTMULTI'),
    Replace('DOTDOTMULTI', 'DOTMULTI.'),
    Replace('DOTMULTI', '.'))

separate_comma = Chain(
    # Separate out commas, except between digits (5,300). Steps may add extra spaces, removed later.
    Replace(r'([^' + NUMBER + r']),', r'\1 , '),
    Replace(r',([^' + NUMBER + r'])', r' , \1'),
    # comma after a number at the end of the line
    Replace(r'([' + NUMBER + r']),$', r'\1 , '))

en_apostrophe = Chain(
    # Attach apostrophe to the right: "don't" -> "don 't"
    Replace(r"([^" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([^" + ALPHA + NUMBER + r"])'([" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([" + ALPHA + r"])'([" + ALPHA + r"])", r"\1 '\2"),
    # 1990's
    Replace(r"([" + NUMBER + r"])'(s)", r"\1 '\2"))

fr_it_ga_ca_apostrophe = Chain(
    # Attach apostrophe to the left: "l'amour" -> "l' amour"
    Replace(r"([^" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([^" + ALPHA + r"])'([" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([" + ALPHA + r"])'([" + ALPHA + r"])", r"\1' \2"))

so_apostrophe = Chain(
    # Apostrophes between letters are glottal stops and stay inside the word.
    Replace(r"([^" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([^" + ALPHA + r"])'([" + ALPHA + r"])", r"\1 ' \2"),
    Replace(r"([" + ALPHA + r"])'([^" + ALPHA + r"])", r"\1 ' \2"))

generic_apostrophe = Replace("'", " ' ")

# Sentence-final period followed by apostrophe: "... the end.'" -> "... the end . '"
trailing_dot_apostrophe = Replace(r"\.' ?$", " . ' ")

escape_special_chars = Chain(
    Replace('&', '&amp;'),     # first, as the other replacements introduce ampersands
    Replace(r'\|', '&#124;'),  # factor separator
    Replace('<', '&lt;'),
    Replace('>', '&gt;'),
    Replace("'", '&apos;'),
    Replace('"', '&quot;'),
    Replace(r'\[', '&#91;'),   # syntax non-terminal
    Replace(r'\]', '&#93;'))


class PadRule(Enum):
    DEFAULT = 'default'
    FI_SV = 'fi-sv'   # colon inside words
    CA = 'ca'         # middle dot inside words


class ApostropheRule(Enum):
    GENERIC = 'generic'
    EN = 'en'
    FR_IT_GA_CA = 'fr-it-ga-ca'
    SO = 'so'


pad_rule_ops = {PadRule.DEFAULT: pad_non_alphanumeric,
                PadRule.FI_SV: fi_sv_pad_non_alphanumeric,
                PadRule.CA: ca_pad_non_alphanumeric}

apostrophe_rule_ops = {ApostropheRule.GENERIC: generic_apostrophe,
                       ApostropheRule.EN: en_apostrophe,
                       ApostropheRule.FR_IT_GA_CA: fr_it_ga_ca_apostrophe,
                       ApostropheRule.SO: so_apostrophe}


class LanguageProfile(NamedTuple):
    """Language-specific rule variants. Languages not listed below get the default variants."""
    pad_rule: PadRule
    apostrophe_rule: ApostropheRule
    lang_code: Optional[str]

    pad_rule_by_lang_code = {'fi': PadRule.FI_SV, 'sv': PadRule.FI_SV,
                             'ca': PadRule.CA}
    apostrophe_rule_by_lang_code = {'en': ApostropheRule.EN,
                                    'fr': ApostropheRule.FR_IT_GA_CA, 'it': ApostropheRule.FR_IT_GA_CA,
                                    'ga': ApostropheRule.FR_IT_GA_CA, 'ca': ApostropheRule.FR_IT_GA_CA,
                                    'so': ApostropheRule.SO}

    @classmethod
    def for_language(cls, lang_code: Optional[str]) -> 'LanguageProfile':
        return cls(cls.pad_rule_by_lang_code.get(lang_code, PadRule.DEFAULT),
                   cls.apostrophe_rule_by_lang_code.get(lang_code, ApostropheRule.GENERIC),
                   lang_code)


class Tokenizer:
    AGGRESSIVE = AGGRESSIVE
    NO_ESCAPE = NO_ESCAPE

    def __init__(self, lang_code: Optional[str] = util.DEFAULT_LANG_CODE, options: int = 0,
                 data_dir: Optional[Path] = None, verbose: Optional[bool] = False,
                 aggressive: bool = False, no_escape: bool = False):
        if aggressive:
            options |= AGGRESSIVE
        if no_escape:
            options |= NO_ESCAPE
        self.options: int = options
        self.lang_code: Optional[str] = lang_code
        self.verbose: bool = verbose
        self.progress_p: bool = False  # print a dot to STDERR for every 1000 lines
        self.n_lines_tokenized = 0
        self.number_of_lines = 0
        if data_dir is None:
            data_dir = self.default_data_dir()
        self.profile = LanguageProfile.for_language(lang_code)
        self.prefix_set = util.NonbreakingPrefixSet.get(lang_code, data_dir, verbose=self.verbose)
        if self.verbose:
            log.info(f'Tokenizer for {lang_code}: {self.profile.pad_rule.value} padding, '
                     f'{self.profile.apostrophe_rule.value} apostrophes, '
                     f'non-breaking prefixes of {self.prefix_set.lang_code}')
        # Ordered list of tokenization steps
        self.tok_step_functions: List[Callable[[str], str]] = [deduplicate_space,
                                                               remove_ascii_junk,
                                                               str.strip,
                                                               pad_rule_ops[self.profile.pad_rule]]
        if self.aggressive:
            self.tok_step_functions.append(aggressive_hyphen_split)
        self.tok_step_functions.extend([replace_multidot,
                                        separate_comma,
                                        apostrophe_rule_ops[self.profile.apostrophe_rule],
                                        self.handle_nonbreaking_prefixes,
                                        deduplicate_space,
                                        str.strip,
                                        trailing_dot_apostrophe,
                                        restore_multidot])
        if not self.no_escape:
            self.tok_step_functions.append(escape_special_chars)

    @staticmethod
    def default_data_dir() -> Path:
        return util.default_data_dir()

    @property
    def aggressive(self) -> bool:
        return bool(self.options & AGGRESSIVE)

    @property
    def no_escape(self) -> bool:
        return bool(self.options & NO_ESCAPE)

    re_contains_alpha = regex.compile(r'\p{Alphabetic}')
    re_starts_w_lower_case = regex.compile(r'\p{Ll}')
    re_starts_w_digit = regex.compile(r'\p{Nd}')

    def period_is_split_off(self, prefix: str, next_token: Optional[str]) -> bool:
        """Decides whether the period after prefix is a separate token. next_token is None at the end of the line."""
        if next_token is None:
            # last word of a line: period is most likely sentence-final
            return True
        if '.' in prefix and self.re_contains_alpha.search(prefix):
            return False  # e.g. U.S.
        if self.prefix_set.is_nonbreaking_prefix(prefix):
            return False
        if self.re_starts_w_lower_case.match(next_token):
            return False
        if self.re_starts_w_digit.match(next_token) and self.prefix_set.is_numeric_nonbreaking_prefix(prefix):
            return False
        return True

    def handle_nonbreaking_prefixes(self, s: str) -> str:
        """Splits off word-final periods, except for abbreviations such as 'Mr.' or 'No. 5'.
        Tokens are separated by single spaces; each output token is followed by a space."""
        tokens = s.split(' ')
        n_tokens = len(tokens)
        result = []
        for i, token in enumerate(tokens):
            if len(token) >= 2 and token[-1] == '.' and token[-2] not in ' \t':
                prefix = token[:-1]
                next_token = tokens[i+1] if i+1 < n_tokens else None
                if self.period_is_split_off(prefix, next_token):
                    token = prefix + ' .'
            result.append(token + ' ')
        return ''.join(result)

    def tokenize_string(self, s: str) -> str:
        for tok_step_function in self.tok_step_functions:
            s = tok_step_function(s)
        self.n_lines_tokenized += 1
        if self.progress_p and (self.n_lines_tokenized % 1000 == 0):
            sys.stderr.write('+' if self.n_lines_tokenized % 10000 == 0 else '.')
        return s

    def tokenize_bytes(self, b: bytes) -> bytes:
        """UTF-8 in, UTF-8 out."""
        return self.tokenize_string(b.decode('utf-8')).encode('utf-8')

    def tokenize_lines(self, input_file: TextIO, output_file: TextIO) -> int:
        """Tokenize a file (or STDIN/STDOUT), line by line. Returns the number of lines."""
        line_number = 0
        for line in input_file:
            line_number += 1
            output_file.write(self.tokenize_string(line.rstrip("\n")) + "\n")
        self.number_of_lines += line_number
        return line_number


@functools.lru_cache(maxsize=None)
def get_tokenizer(lang_code: Optional[str] = util.DEFAULT_LANG_CODE, options: int = 0) -> Tokenizer:
    return Tokenizer(lang_code=lang_code, options=options)


def tokenize(s: str, lang_code: Optional[str] = util.DEFAULT_LANG_CODE,
             aggressive: bool = False, no_escape: bool = False) -> str:
    """Tokenize a single line with a cached tokenizer, e.g. tokenize("Hello, world!") -> 'Hello , world !'"""
    options = (AGGRESSIVE if aggressive else 0) | (NO_ESCAPE if no_escape else 0)
    return get_tokenizer(lang_code, options).tokenize_string(s)


class ArgumentParser(argparse.ArgumentParser):
    """Exits with code 1 (rather than argparse's 2) on usage errors."""
    def error(self, message: str):
        self.print_usage(sys.stderr)
        log.error(message)
        sys.exit(1)


def build_argument_parser() -> ArgumentParser:
    parser = ArgumentParser(description='Tokenizes a given text, line by line', add_help=False,
                            allow_abbrev=False)
    parser.add_argument('files', nargs='*', metavar='INPUT-FILENAME', help="(default: STDIN; '-' for STDIN)")
    parser.add_argument('-l', '--lc', dest='lang_code', type=str, default=util.DEFAULT_LANG_CODE,
                        metavar='LANGUAGE-CODE', help="ISO 639-1, e.g. 'fr' for French (default: en)")
    parser.add_argument('-o', '--output', type=str, default='-', metavar='OUTPUT-FILENAME',
                        help='(default: STDOUT)')
    parser.add_argument('-a', '--aggressive', action='store_true', help="aggressive hyphen splitting: 'X @-@ ray'")
    parser.add_argument('-no-escape', '--no_escape', dest='no_escape', action='store_true',
                        help='do not escape special characters such as & and <')
    parser.add_argument('-d', '--data_directory', type=str, default=None, help='(default: standard data directory)')
    parser.add_argument('-v', '--verbose', action='count', default=0, help='write change log etc. to STDERR')
    parser.add_argument('-h', '--help', action='store_true', help='show this help message and exit')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    # Legacy options, accepted and ignored
    parser.add_argument('-b', dest='unbuffered', action='store_true', help='(ignored; output is line-buffered)')
    parser.add_argument('-q', dest='quiet', action='store_true', help='(ignored)')
    parser.add_argument('-x', dest='skip_xml', action='store_true', help='(ignored)')
    parser.add_argument('-time', dest='time', action='store_true', help='(ignored; see --verbose)')
    parser.add_argument('-threads', dest='threads', type=int, default=None, metavar='N', help='(ignored)')
    parser.add_argument('-lines', dest='lines', type=int, default=None, metavar='N', help='(ignored)')
    # Legacy options, not implemented
    parser.add_argument('-protected', dest='protected', action='store_true', help='(not implemented)')
    parser.add_argument('-penn', dest='penn', action='store_true', help='(not implemented)')
    return parser


def stream_is_utf8(stream) -> bool:
    return bool(re.search('utf-?8', getattr(stream, 'encoding', None) or '', re.IGNORECASE))


def main(argv: Optional[List[str]] = None) -> int:
    """Wrapper around tokenization that takes care of argument parsing and prints stats to STDERR."""
    parser = build_argument_parser()
    args = parser.parse_args(argv)
    if args.help:
        parser.print_help(sys.stderr)
        return 1
    for legacy_option in ('protected', 'penn'):
        if getattr(args, legacy_option):
            log.error(f'-{legacy_option} not implemented')
            return 1
    if args.verbose and (args.threads or args.lines):
        log.info('Options -threads and -lines are ignored; lines are tokenized sequentially.')
    lang_code = args.lang_code
    options = (AGGRESSIVE if args.aggressive else 0) | (NO_ESCAPE if args.no_escape else 0)
    data_dir = Path(args.data_directory) if args.data_directory else None
    tok = Tokenizer(lang_code=lang_code, options=options, data_dir=data_dir, verbose=bool(args.verbose))
    tok.progress_p = not args.verbose

    filenames = args.files or ['-']
    # Make sure utf-8 encoding is properly set (in older Python3 versions).
    if '-' in filenames and not stream_is_utf8(sys.stdin):
        log.error(f"Bad STDIN encoding '{sys.stdin.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use an INPUT-FILENAME argument")
    if args.output == '-' and not stream_is_utf8(sys.stdout):
        log.error(f"Error: Bad STDOUT encoding '{sys.stdout.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use '-o OUTPUT-FILENAME' option")

    start_time = datetime.datetime.now()
    if args.verbose:
        log_info = f'Start: {start_time}  Script: rtokenize.py'
        log_info += f"  Input: {', '.join(filenames)}"
        if args.output != '-':
            log_info += f'  Output: {args.output}'
        if tok.aggressive:
            log_info += '  Aggressive hyphen splitting'
        if tok.no_escape:
            log_info += '  No escaping'
        log_info += f'  Language code: {lang_code}'
        log.info(log_info)
    try:
        output_file = sys.stdout if args.output == '-' \
            else open(args.output, 'w', encoding='utf-8', errors='ignore')
    except OSError as error:
        log.error(f'Could not open output file {args.output}: {error}')
        return 1
    try:
        for filename in filenames:
            if filename == '-':
                tok.tokenize_lines(sys.stdin, output_file)
            else:
                try:
                    with open(filename, encoding='utf-8', errors='surrogateescape') as input_file:
                        tok.tokenize_lines(input_file, output_file)
                except OSError as error:
                    log.error(f'Could not read input file {filename}: {error}')
                    return 1
    finally:
        if output_file is not sys.stdout:
            output_file.close()
    if tok.progress_p and (tok.n_lines_tokenized >= 1000):
        sys.stderr.write('\n')
    end_time = datetime.datetime.now()
    elapsed_time = end_time - start_time
    number_of_lines = tok.number_of_lines
    lines = util.reg_plural('line', number_of_lines)
    if args.verbose:
        log.info(f'End: {end_time}  Elapsed time: {elapsed_time}  Processed {str(number_of_lines)} {lines}')
    elif elapsed_time.seconds >= 10:
        log.info(f'Elapsed time: {elapsed_time.seconds} seconds for {number_of_lines:,} {lines}')
    return 0


if __name__ == "__main__":
    sys.exit(main())
