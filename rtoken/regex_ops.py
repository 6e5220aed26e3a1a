#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small building blocks for regex-based string rewriting.
Search and Replace wrap compiled regex patterns, which may use Unicode property classes such as \\p{Ll}.
Chain and Loop combine such operations into larger rewrite steps.
"""
# -*- encoding: utf-8 -*-
import logging as log
import regex
from typing import Callable, Optional

StringOp = Callable[[str], str]


def compile_pattern(pattern: str, flags: int = 0):
    try:
        return regex.compile(pattern, flags=flags)
    except regex.error:
        log.error(f'Could not compile regular expression: {pattern}')
        raise


class Search:
    """Tests whether a pattern occurs anywhere in a string."""
    def __init__(self, pattern: str, flags: int = 0):
        self.pattern = pattern
        self.re = compile_pattern(pattern, flags)

    def __call__(self, s: str) -> bool:
        return self.re.search(s) is not None

    def __repr__(self) -> str:
        return f'Search({self.pattern!r})'


class Replace:
    """Replaces all non-overlapping matches of a pattern, e.g. Replace(r'(\\d),$', r'\\1 , ')
    Back-references to groups that did not participate in a match expand to the empty string."""
    def __init__(self, pattern: str, replacement: str, flags: int = 0):
        self.pattern = pattern
        self.replacement = replacement
        self.re = compile_pattern(pattern, flags)

    def __call__(self, s: str) -> str:
        return self.re.sub(self.replacement, s)

    def __repr__(self) -> str:
        return f'Replace({self.pattern!r}, {self.replacement!r})'


class Noop:
    def __call__(self, s: str) -> str:
        return s

    def __repr__(self) -> str:
        return 'Noop()'


class Chain:
    """Applies operations in sequence, each to the result of the previous one."""
    def __init__(self, *ops: StringOp):
        self.ops = ops

    def __call__(self, s: str) -> str:
        for op in self.ops:
            s = op(s)
        return s

    def __repr__(self) -> str:
        return 'Chain(' + ', '.join(map(repr, self.ops)) + ')'


class Loop:
    """Applies 'initial' once, then 'operation' as long as 'condition' holds, then 'finalize' once.
    Each application of 'operation' must bring the string closer to failing 'condition'.
    max_iterations (if set) is a hard stop against operations that violate this."""
    def __init__(self, initial: StringOp, condition: Callable[[str], bool], operation: StringOp,
                 finalize: StringOp, max_iterations: Optional[int] = None):
        self.initial = initial
        self.condition = condition
        self.operation = operation
        self.finalize = finalize
        self.max_iterations = max_iterations

    def __call__(self, s: str) -> str:
        s = self.initial(s)
        n_iterations = 0
        while self.condition(s):
            if self.max_iterations is not None and n_iterations >= self.max_iterations:
                log.warning(f'Loop stopped after {n_iterations} iterations: {self.operation!r}')
                break
            s = self.operation(s)
            n_iterations += 1
        return self.finalize(s)

    def __repr__(self) -> str:
        return f'Loop({self.initial!r}, {self.condition!r}, {self.operation!r}, {self.finalize!r})'
