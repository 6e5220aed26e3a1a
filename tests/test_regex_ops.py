"""
Tests for rtoken/regex_ops.py

Tests Search/Replace and the Chain/Loop combinators.
"""

import pytest
import regex
from rtoken.regex_ops import Chain, Loop, Noop, Replace, Search


class TestReplace:
    """Test global regex substitution."""

    def test_replaces_all_matches(self):
        assert Replace(r'(\d)', r'<\1>')('a1b2c3') == 'a<1>b<2>c<3>'

    def test_unmatched_group_expands_to_empty_string(self):
        assert Replace(r'(a)|(b)', r'[\1\2]')('ab') == '[a][b]'

    def test_non_overlapping_leftmost_matches(self):
        assert Replace('aa', 'b')('aaaaa') == 'bba'

    def test_no_match_leaves_string_unchanged(self):
        op = Replace(r'\d+', 'NUM')
        assert op('no digits here') == 'no digits here'
        assert op(op('no digits here')) == 'no digits here'

    def test_unicode_categories(self):
        """Property classes apply to all scripts, not just ASCII."""
        assert Replace(r'\p{Ll}', 'x')('Aé Ωω Жж') == 'Ax Ωx Жx'
        assert Replace(r'[^\p{Alphabetic}\s]', '#')('Привет, мир!') == 'Привет# мир#'

    def test_malformed_pattern_raises(self):
        with pytest.raises(regex.error):
            Replace('(unclosed', 'x')

    def test_unknown_property_raises(self):
        with pytest.raises(regex.error):
            Search(r'\p{NoSuchProperty}')


class TestSearch:
    """Test pattern search anywhere in a string."""

    def test_search_anywhere(self):
        op = Search(r'DOTMULTI\.')
        assert op('a DOTMULTI. b')
        assert not op('a DOTMULTI b')

    def test_empty_string(self):
        assert not Search('x')('')


class TestCombinators:
    """Test Noop, Chain and Loop."""

    def test_noop(self):
        assert Noop()('unchanged') == 'unchanged'

    def test_chain_applies_in_order(self):
        assert Chain(Replace('a', 'b'), Replace('b', 'c'))('a') == 'c'
        assert Chain(Replace('b', 'c'), Replace('a', 'b'))('a') == 'b'

    def test_empty_chain(self):
        assert Chain()('text') == 'text'

    def test_loop_until_condition_fails(self):
        op = Loop(Noop(), Search('aa'), Replace('aa', 'a'), Noop())
        assert op('aaaaaaa') == 'a'

    def test_loop_initial_and_finalize(self):
        op = Loop(Replace('x', 'aaaa'), Search('aa'), Replace('aa', 'a'), Replace('a', 'b'))
        assert op('x-x') == 'b-b'

    def test_loop_condition_false_from_start(self):
        op = Loop(Noop(), Search('z'), Replace('a', 'b'), Noop())
        assert op('aaa') == 'aaa'

    def test_loop_max_iterations(self):
        """An operation that never falsifies the condition is stopped."""
        op = Loop(Noop(), Search('a'), Noop(), Noop(), max_iterations=3)
        assert op('a') == 'a'
