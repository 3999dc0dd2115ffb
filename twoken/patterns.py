#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Pattern library for twokenize: the fixed taxonomy of "do-not-split" lexical classes
(emoticons, URLs, entities, numbers, abbreviations etc.), composed into one ordered alternation,
plus the matchers for edge punctuation, whitespace and contractions.
All patterns are compiled once at import time and are only ever read afterwards.
Character classes (\w, \d, \s, \b) are ASCII-only (regex.ASCII), so non-ASCII letters, digits and
spaces such as U+00A0 are treated as ordinary non-word, non-space characters.
"""
# -*- encoding: utf-8 -*-
import regex
import sys
from typing import NamedTuple, Pattern, Tuple
from . import __version__, last_mod_date


def regex_or(*items: str) -> str:
    """regex_or('a', 'b') -> '(?:a|b)'"""
    return '(?:' + '|'.join(items) + ')'


def pos_lookahead(r: str) -> str:
    return '(?=' + r + ')'


def optional(r: str) -> str:
    return '(?:' + r + ')?'


# Punctuation and HTML entities
punct_chars = r'''['“".?!,:;]'''
punct_seq = punct_chars + '+'
entity = r'&(?:amp|lt|gt|quot);'

# Emoticons
normal_eyes = r'[:=]'
wink = r'[;]'
nose_area = r'(?:|o|O|-)'          # rather tight precision, \S might be reasonable...
happy_mouths = r'[D\)\]]'
sad_mouths = r'[\(\[]'
tongue = r'[pP]'
other_mouths = r'[doO/\\]'         # remove forward slash if http://'s aren't cleaned
emoticon = regex_or(normal_eyes, wink) + nose_area + regex_or(tongue, other_mouths, sad_mouths, happy_mouths)

# URLs
url_start1 = regex_or(r'https?://', r'www\.')
common_tlds = regex_or('com', r'co\.uk', 'org', 'net', 'info', 'ca', 'ly')
url_start2 = r'[A-Za-z0-9.-]+?\.' + common_tlds + pos_lookahead(r'[/ \W]')
url_body = r'[^ \t\r\n<>]*?'       # lazy: in "go to bla.com." the final period is not part of the URL
url_extra_crap_before_end = regex_or(punct_chars, entity) + '+?'
url_end = regex_or(r'\.\.+', r'[<>]', r'\s', '$')
url = r'\b' + regex_or(url_start1, url_start2) + url_body \
    + pos_lookahead(optional(url_extra_crap_before_end) + url_end)

# Numeric
time_like = r'\d+:\d+'
num_num = r'\d+\.\d+'
number_with_commas = r'(?:\d+,)+?\d{3}' + pos_lookahead(regex_or('[^,]', '$'))

# Abbreviations such as U.N.K.L.E., Mr.
boundary_not_dot = regex_or('$', r'\s', r'[“"?!,:;]', entity)
aa1 = r'(?:[A-Za-z]\.){2,}' + pos_lookahead(boundary_not_dot)
aa2 = r'[^A-Za-z](?:[A-Za-z]\.)+[A-Za-z]' + pos_lookahead(boundary_not_dot)  # includes left context char
standard_abbreviations = r'\b' + regex_or('[Mm]r', '[Mm]rs', '[Mm]s', '[Dd]r', '[Ss]r', '[Jj]r',
                                          '[Rr]ep', '[Ss]en', '[Ss]t') + r'\.'
arbitrary_abbrev = regex_or(aa1, aa2, standard_abbreviations)

separators = regex_or('--+', '―')
decorations = '[♫]+'
things_that_split_words = r'[^\s.,]'
embedded_apostrophe = things_that_split_words + "+'" + things_that_split_words + '+'


class ProtectedPattern(NamedTuple):
    """A named lexical class whose matches are emitted verbatim as a single token."""
    name: str           # also the name of its group in re_protected
    token_type: str     # e.g. URL (for annotation output)
    regex_s: str
    re: Pattern[str]


def protected_pattern(name: str, token_type: str, regex_s: str) -> ProtectedPattern:
    return ProtectedPattern(name, token_type, regex_s, regex.compile(regex_s, flags=regex.ASCII))


# Ordered by priority: at the same start position, an earlier class wins.
PROTECTED_PATTERNS: Tuple[ProtectedPattern, ...] = (
    protected_pattern('emoticon', 'EMOTICON', emoticon),
    protected_pattern('url', 'URL', url),
    protected_pattern('entity', 'XML-ENTITY', entity),
    protected_pattern('time_like', 'TIME', time_like),
    protected_pattern('num_num', 'DECIMAL', num_num),
    protected_pattern('number_with_commas', 'NUMBER-W-COMMAS', number_with_commas),
    protected_pattern('punct_seq', 'PUNCT', punct_seq),
    protected_pattern('arbitrary_abbrev', 'ABBREVIATION', arbitrary_abbrev),
    protected_pattern('separators', 'SEPARATOR', separators),
    protected_pattern('decorations', 'DECORATION', decorations),
    protected_pattern('embedded_apostrophe', 'EMBEDDED-APOSTROPHE', embedded_apostrophe),
)
protected_token_type_dict = {pattern.name: pattern.token_type for pattern in PROTECTED_PATTERNS}

# One group per lexical class, so that match.lastgroup names the class that matched.
# All groups inside the class patterns are non-capturing.
re_protected = regex.compile('|'.join(f'(?P<{pattern.name}>{pattern.regex_s})' for pattern in PROTECTED_PATTERNS),
                             flags=regex.ASCII)

# 'Smart Quotes' (http://en.wikipedia.org/wiki/Smart_quotes)
edge_punct_chars = r'''['"“”‘’<>«»{}()\[\]]'''
edge_punct = edge_punct_chars + '+'
not_edge_punct = r'[a-zA-Z0-9]'
re_edge_punct_left = regex.compile(r'(\s|^)(' + edge_punct + ')(' + not_edge_punct + ')', flags=regex.ASCII)
re_edge_punct_right = regex.compile('(' + not_edge_punct + ')(' + edge_punct + r')(\s|$)', flags=regex.ASCII)

re_whitespace = regex.compile(r'\s+', flags=regex.ASCII)
re_contraction = regex.compile(r"(\w+)(n't|'ve|'ll|'d|'re|'s|'m)", flags=regex.IGNORECASE | regex.ASCII)


if __name__ == "__main__":
    sys.stderr.write(f'patterns.py {__version__} last modified: {last_mod_date}\n')
    for protected in PROTECTED_PATTERNS:
        sys.stderr.write(f'{protected.name:<20} {protected.token_type:<20} {protected.regex_s}\n')
