#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Small helpers shared by the twokenize modules.
"""
# -*- encoding: utf-8 -*-
import logging as log
import re
import sys
from typing import List, Optional, Tuple
from . import __version__, last_mod_date


def join_tokens(tokens: List[str]) -> str:
    """Join tokens with space, ignoring empty tokens"""
    return ' '.join([token for token in tokens if token != ''])


# space and all C0 control characters (U+0000 to U+0020)
trim_chars = ''.join(map(chr, range(0x21)))


def trim(s: str) -> str:
    """Strips leading and trailing characters up to U+0020, e.g. '\\x00 a\\x01' -> 'a'. Unlike str.strip(),
    it keeps non-ASCII whitespace such as U+00A0."""
    return s.strip(trim_chars)


def align_tokens(tokens: List[str], s: str) -> List[Optional[Tuple[int, int]]]:
    """Maps tokens back to (start, end) character offsets in s, the string they were derived from.
    Tokens must be substrings of s in left-to-right order. Tokens that can't be found get None."""
    alignments = []
    position = 0
    for token in tokens:
        start = s.find(token, position)
        if start < 0:
            log.warning(f'Could not align token {token!r} at position {position} in {s!r}')
            alignments.append(None)
            continue
        position = start + len(token)
        alignments.append((start, position))
    return alignments


def increment_dict_count(ht: dict, key: str, increment=1) -> int:
    """For example ht['NUMBER-OF-LINES']"""
    ht[key] = ht.get(key, 0) + increment
    return ht[key]


def reg_plural(s: str, n: int) -> str:
    """Form regular English plural form, e.g. 'position' -> 'positions' 'bush' -> 'bushes'"""
    if n == 1:
        return s
    elif re.match(r'.*(?:[sx]|[sc]h)$', s):
        return s + 'es'
    else:
        return s + 's'


if __name__ == "__main__":
    sys.stderr.write(f'util.py {__version__} last modified: {last_mod_date}\n')
