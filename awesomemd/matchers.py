"""
# Awesome-Markdown: matchers.py

Licensed under "MIT No Attribution" (MIT-0), see LICENSE.

Block matching helpers shared by the components.

Every component is a rewrite of the form «compiled pattern» --> «transform function»,
applied left to right over the whole document, so that an unmatched region is left as written.
"""

import re
from typing import Callable, Iterable, NamedTuple

from awesomemd.placeholders import PlaceholderLedger


BLOCK_PATTERN_FLAGS = re.MULTILINE | re.DOTALL | re.VERBOSE

MatchTransform = Callable[[re.Match], str]


class PatternTransform(NamedTuple):
    pattern: re.Pattern
    transform: MatchTransform


def compile_block_pattern(regex: str) -> re.Pattern:
    return re.compile(pattern=regex, flags=BLOCK_PATTERN_FLAGS)


def apply_many(string: str, pattern_transforms: Iterable[PatternTransform]) -> str:
    """
    Apply several «pattern» --> «transform» rewrites in sequence.

    Each rewrite sees the output of the previous one.
    A transform may return `match.group()` to decline a match.
    """
    for pattern, transform in pattern_transforms:
        string = re.sub(pattern=pattern, repl=transform, string=string)

    return string


def apply_dual(string: str, primary_pattern: re.Pattern, alternative_pattern: re.Pattern,
               transform: MatchTransform) -> str:
    """
    Apply the primary syntax pass and then the alternative syntax pass with a shared transform.
    """
    return apply_many(
        string,
        [
            PatternTransform(primary_pattern, transform),
            PatternTransform(alternative_pattern, transform),
        ],
    )


def apply_with_protection(string: str, protected_patterns: Iterable[re.Pattern],
                          rewrite: Callable[[str], str]) -> str:
    """
    Run a rewrite with the regions matched by the protected patterns left untouched.
    """
    placeholder_ledger = PlaceholderLedger()
    string = placeholder_ledger.protect_markers(string)
    for protected_pattern in protected_patterns:
        string = placeholder_ledger.protect_matches(string, protected_pattern)

    string = rewrite(string)

    return placeholder_ledger.restore(string)
