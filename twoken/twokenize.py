#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Tokenizer for noisy social-media text such as tweets.
Multi-character idioms such as URLs, emoticons, U.N.K.L.E. or 12:53 are protected as single tokens;
everything else is split on whitespace, after spacing off edge punctuation, with contractions split off at the end.
When using STDIN and/or STDOUT, if might be necessary, particularly for older versions of Python, to do
'export PYTHONIOENCODING=UTF-8' before calling this Python script to ensure UTF-8 encoding.
"""
# -*- encoding: utf-8 -*-
import argparse
import cProfile
import datetime
import json
import logging as log
import pstats
import re
import regex
import sys
from typing import List, Optional, TextIO, Tuple
from . import __version__, last_mod_date
from . import patterns
from . import util

log.basicConfig(level=log.INFO)


class Span:
    """Half-open span [start, end) of character offsets, e.g. 0-1 for the first character.
    Spans of protected matches also record the token type of the lexical class that matched."""
    def __init__(self, start: int, end: int, token_type: Optional[str] = None):
        self.start = start
        self.end = end
        self.token_type = token_type

    def __eq__(self, other) -> bool:
        return isinstance(other, Span) and (self.start, self.end) == (other.start, other.end)

    def __repr__(self) -> str:
        return f'Span({self.start}, {self.end})'

    def print_span(self) -> str:
        return f'{self.start}-{self.end}'


class Segment:
    """A protected segment is emitted verbatim as exactly one token.
    A free segment (between or around protected segments) is split on whitespace."""
    def __init__(self, surf: str, span: Span, protected: bool = False):
        self.surf = surf
        self.span = span
        self.protected = protected

    def __repr__(self) -> str:
        return f"Segment({self.surf!r}, {self.span.print_span()}{', protected' if self.protected else ''})"


class Token:
    """An output token with its type and its span in the original (untokenized) line."""
    def __init__(self, surf: str, snt_id: str, creator: str, span: Optional[Span]):
        self.surf = surf
        self.snt_id = snt_id
        self.span = span
        self.creator = creator or "TOKEN"

    def print_span(self) -> str:
        return self.span.print_span() if self.span else '?'

    def print_short(self) -> str:
        return f'{self.print_span()}:{self.creator} {self.surf}'


class Chart:
    def __init__(self, s: str, snt_id: str):
        """A chart is the list of tokens of a sentence, annotated with types and spans."""
        self.orig_s = s     # original sentence
        self.snt_id = snt_id
        self.tokens: List[Token] = []

    def register_token(self, token: Token) -> None:
        self.tokens.append(token)

    def print_short(self) -> str:
        return f'Chart {self.snt_id}: ' + ' '.join(map(Token.print_short, self.tokens))

    def print_to_file(self, annotation_file: TextIO) -> None:
        annotation_file.write(f'::line {self.snt_id} ::s {self.orig_s}\n')
        for token in self.tokens:
            annotation_file.write(f'::span {token.print_span()} ::type {token.creator} ::surf {token.surf}\n')

    def build_json_snt_annotation_object(self) -> dict:
        chart_elems = []
        for token in self.tokens:
            chart_elems.append({'span': token.print_span(), 'type': token.creator, 'surf': token.surf})
        return {'ID': self.snt_id, 'snt': self.orig_s, 'chart': chart_elems}


class Tokenizer:
    def __init__(self, split_contractions: bool = True, verbose: Optional[bool] = False):
        # All regular expressions live in the process-wide, read-only pattern library.
        # Methods tokenize() and typed_tokens() don't modify the tokenizer,
        # so a single instance can be shared across threads.
        self.split_contractions_p: bool = split_contractions
        self.chart_p: bool = False
        self.first_token_is_line_id_p: bool = False
        self.verbose: bool = verbose
        self.n_lines_tokenized = 0
        self.annotation_json_elements: List[str] = []

    @staticmethod
    def normalize_whitespace(s: str) -> str:
        """'foo   bar ' -> 'foo bar'"""
        return util.trim(patterns.re_whitespace.sub(' ', s))

    @staticmethod
    def split_edge_punct(s: str) -> str:
        """Spaces off quotes and brackets at word edges: 'foo' -> ' foo ' (left edge first, then right edge)"""
        s = patterns.re_edge_punct_left.sub(r'\1\2 \3', s)
        return patterns.re_edge_punct_right.sub(r'\1 \2\3', s)

    @staticmethod
    def protected_spans(s: str) -> List[Span]:
        """Non-overlapping, non-empty spans of subsequences that must not be split, e.g. URLs, 1.0, U.N.K.L.E., 12:53"""
        spans = []
        for m in patterns.re_protected.finditer(s):
            if m.start() != m.end():
                spans.append(Span(m.start(), m.end(), patterns.protected_token_type_dict[m.lastgroup]))
        return spans

    def segments(self, s: str) -> List[Segment]:
        """Walks the boundaries 0, span1.start, span1.end, ..., len(s), alternating free and protected segments.
        There is always exactly one more free segment than protected segments; free segments may be empty."""
        segments = []
        position = 0
        for span in self.protected_spans(s):
            segments.append(Segment(s[position:span.start], Span(position, span.start)))
            segments.append(Segment(s[span.start:span.end], span, protected=True))
            position = span.end
        segments.append(Segment(s[position:], Span(position, len(s))))
        return segments

    def split_contraction(self, token: str) -> List[str]:
        """Splits off a clitic suffix, e.g. don't -> do n't; I'm -> I 'm; returns [token] if there is none."""
        if self.split_contractions_p and (m2 := patterns.re_contraction.fullmatch(token)):
            return [util.trim(m2.group(1)), util.trim(m2.group(2))]
        return [util.trim(token)]

    re_contains_letter = regex.compile(r'.*\pL')
    re_contains_number = regex.compile(r'.*\pN')
    re_contains_symbol = regex.compile(r'(?V1).*[\p{S}--[-=*+<>^|`]]')
    re_contains_punct = regex.compile(r'(?V1).*[\p{P}||[-=*+<>^|`]]')

    def basic_token_type(self, s: str) -> str:
        """Type of a token that was split off by whitespace (for annotation output)"""
        if self.re_contains_letter.match(s):
            return 'WORD-B'
        if self.re_contains_number.match(s):
            return 'NUMBER-B'
        if self.re_contains_symbol.match(s):
            return 'SYMBOL-B'
        if self.re_contains_punct.match(s):
            return 'PUNCT-B'
        else:
            return 'MISC-B'

    def simple_typed_tokens(self, s: str) -> List[Tuple[str, str]]:
        """Tokenizes a whitespace-normalized string into (token, token-type) pairs."""
        result = []
        for segment in self.segments(self.split_edge_punct(s)):
            if segment.protected:
                typed_surfs = [(segment.surf, segment.span.token_type)]
            else:
                typed_surfs = [(surf, None) for surf in util.trim(segment.surf).split(' ') if surf != '']
            for surf, token_type in typed_surfs:
                sub_tokens = [sub_token for sub_token in self.split_contraction(surf) if sub_token != '']
                if len(sub_tokens) > 1:
                    result.extend((sub_token, 'DECONTRACTION') for sub_token in sub_tokens)
                else:
                    result.extend((sub_token, token_type or self.basic_token_type(sub_token))
                                  for sub_token in sub_tokens)
        return result

    def simple_tokenize(self, s: str) -> List[str]:
        """simple_tokenize expects a string that has already been normalized by normalize_whitespace."""
        return [token for token, _token_type in self.simple_typed_tokens(s)]

    def typed_tokens(self, s: str) -> List[Tuple[str, str]]:
        return self.simple_typed_tokens(self.normalize_whitespace(s))

    def tokenize(self, s: str) -> List[str]:
        """Main entry point: 'I'm   happy :)' -> ['I', "'m", 'happy', ':)']"""
        return self.simple_tokenize(self.normalize_whitespace(s))

    def build_chart(self, s: str, typed_tokens: List[Tuple[str, str]], line_id: Optional[str]) -> Chart:
        chart = Chart(s, line_id)
        surfs = [surf for surf, _token_type in typed_tokens]
        for (surf, token_type), alignment in zip(typed_tokens, util.align_tokens(surfs, s)):
            span = Span(*alignment) if alignment else None
            chart.register_token(Token(surf, str(line_id), token_type, span))
        return chart

    def tokenize_string(self, s: str, line_id: Optional[str] = None,
                        annotation_file: Optional[TextIO] = None, annotation_format: Optional[str] = None) -> str:
        """Tokenizes a line and returns tokens joined by space. Optionally records an annotation chart."""
        typed_tokens = self.typed_tokens(s)
        self.n_lines_tokenized += 1
        if self.chart_p:
            chart = self.build_chart(s, typed_tokens, line_id)
            if self.verbose:
                log.info(chart.print_short())  # Will print short version of chart to STDERR.
            if annotation_file:
                if annotation_format == 'json':
                    self.annotation_json_elements.append(json.dumps(chart.build_json_snt_annotation_object(),
                                                                    ensure_ascii=False))
                else:
                    chart.print_to_file(annotation_file)
        if (not self.verbose) and (log.INFO >= log.root.level) and (self.n_lines_tokenized % 1000 == 0):
            sys.stderr.write('+' if self.n_lines_tokenized % 10000 == 0 else '.')
        return util.join_tokens([surf for surf, _token_type in typed_tokens])

    re_id_snt = re.compile(r'(\S+)(\s+)(\S|\S.*\S)\s*$')

    def tokenize_lines(self, ht: dict, input_file: TextIO, output_file: TextIO,
                       annotation_file: Optional[TextIO] = None, annotation_format: Optional[str] = None) -> None:
        """Apply tokenization to a file (or STDIN/STDOUT), one line at a time."""
        line_number = 0
        for line in input_file:
            line_number = util.increment_dict_count(ht, 'NUMBER-OF-LINES')
            if self.first_token_is_line_id_p:
                if m := self.re_id_snt.match(line):
                    line_id, line_id_sep, core_line = m.group(1, 2, 3)
                    output_file.write(line_id + line_id_sep
                                      + self.tokenize_string(core_line, line_id, annotation_file, annotation_format)
                                      + "\n")
                else:
                    # line ID only (or empty line): nothing to tokenize
                    output_file.write(line.strip() + "\n")
            else:
                line_id = str(line_number)
                output_file.write(self.tokenize_string(line.rstrip("\n"), line_id, annotation_file,
                                                       annotation_format)
                                  + "\n")
        self.write_json_annotation(annotation_file, annotation_format)

    def write_json_annotation(self, annotation_file: Optional[TextIO], annotation_format: Optional[str]) -> None:
        if annotation_file and annotation_format == 'json':
            annotation_file.write('[' + ',\n'.join(self.annotation_json_elements) + ']\n')

    def interactive_loop(self, input_file: TextIO, output_file: TextIO, prompt: str = '> ',
                         annotation_file: Optional[TextIO] = None, annotation_format: Optional[str] = None) -> int:
        """Read-tokenize-print loop. Stops at an empty line or at end of input. Returns number of lines tokenized."""
        n_lines = 0
        while True:
            output_file.write(prompt)
            output_file.flush()
            line = input_file.readline()
            if line == '':  # end of input
                output_file.write('\n')
                break
            line = line.rstrip('\n')
            if line == '':
                break
            n_lines += 1
            output_file.write(self.tokenize_string(line, str(n_lines), annotation_file, annotation_format) + '\n')
        self.write_json_annotation(annotation_file, annotation_format)
        return n_lines


# Process-wide default tokenizer for the module-level functions below.
default_tokenizer = Tokenizer()
normalize_whitespace = Tokenizer.normalize_whitespace
split_edge_punct = Tokenizer.split_edge_punct
protected_spans = Tokenizer.protected_spans


def split_contraction(token: str) -> List[str]:
    return default_tokenizer.split_contraction(token)


def tokenize(text: str) -> List[str]:
    """tokenize("Check http://example.com/page now") -> ['Check', 'http://example.com/page', 'now']"""
    return default_tokenizer.tokenize(text)


def main(argv: Optional[List[str]] = None):
    """Wrapper around tokenization that takes care of argument parsing and prints stats to STDERR."""
    # parse arguments
    parser = argparse.ArgumentParser(description='Tokenizes social-media text such as tweets')
    parser.add_argument('-i', '--input', type=argparse.FileType('r', encoding='utf-8', errors='surrogateescape'),
                        default=sys.stdin, metavar='INPUT-FILENAME', help='(default: STDIN)')
    parser.add_argument('-o', '--output', type=argparse.FileType('w', encoding='utf-8', errors='ignore'),
                        default=sys.stdout, metavar='OUTPUT-FILENAME', help='(default: STDOUT)')
    parser.add_argument('-a', '--annotation_file', type=argparse.FileType('w', encoding='utf-8', errors='ignore'),
                        default=None, metavar='ANNOTATION-FILENAME', help='(optional output)')
    parser.add_argument('--annotation_format', type=str, default='json', choices=['json', 'double-colon'],
                        help="(default: 'json'; alternative: 'double-colon')")
    parser.add_argument('-p', '--profile', type=argparse.FileType('w', encoding='utf-8', errors='ignore'),
                        default=None, metavar='PROFILE-FILENAME', help='(optional output for performance analysis)')
    parser.add_argument('-f', '--first_token_is_line_id', action='count', default=0,
                        help='First token is line ID (and will be exempt from any tokenization)')
    parser.add_argument('-c', '--chart', action='count', default=0,
                        help='build annotation chart, even without annotation output')
    parser.add_argument('--no_contractions', action='count', default=0,
                        help="don't split contractions such as don't -> do n't")
    parser.add_argument('--interactive', action='count', default=0,
                        help="prompt for lines to tokenize until an empty line is entered")
    parser.add_argument('-v', '--verbose', action='count', default=0, help='write charts etc. to STDERR')
    parser.add_argument('--version', action='version',
                        version=f'%(prog)s {__version__} last modified: {last_mod_date}')
    args = parser.parse_args(argv)
    tok = Tokenizer(split_contractions=not args.no_contractions, verbose=bool(args.verbose))
    tok.chart_p = bool(args.annotation_file) or bool(args.chart)
    tok.first_token_is_line_id_p = bool(args.first_token_is_line_id)
    profile = None
    if args.profile:
        profile = cProfile.Profile()
        profile.enable()

    # Make sure utf-8 encoding is properly set (in older Python3 versions).
    if args.input is sys.stdin and not re.search('utf-8', str(sys.stdin.encoding), re.IGNORECASE):
        log.error(f"Bad STDIN encoding '{sys.stdin.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use '--input FILENAME' option")
    if args.output is sys.stdout and not re.search('utf-8', str(sys.stdout.encoding), re.IGNORECASE):
        log.error(f"Error: Bad STDIN/STDOUT encoding '{sys.stdout.encoding}' as opposed to 'utf-8'. \
                    Suggestion: 'export PYTHONIOENCODING=UTF-8' or use use '--output FILENAME' option")

    ht = {}
    start_time = datetime.datetime.now()
    if args.verbose:
        log_info = f'Start: {start_time}  Script: twokenize.py'
        if args.input is not sys.stdin:
            log_info += f'  Input: {args.input.name}'
        if args.output is not sys.stdout:
            log_info += f'  Output: {args.output.name}'
        if args.annotation_file:
            log_info += f'  Annotation: {args.annotation_file.name} ({args.annotation_format})'
        if tok.chart_p:
            log_info += f'  Chart to be built: {tok.chart_p}'
        if not tok.split_contractions_p:
            log_info += '  Contractions kept intact'
        log.info(log_info)
    if args.interactive:
        ht['NUMBER-OF-LINES'] = tok.interactive_loop(args.input, args.output, annotation_file=args.annotation_file,
                                                     annotation_format=args.annotation_format)
    else:
        tok.tokenize_lines(ht, input_file=args.input, output_file=args.output,
                           annotation_file=args.annotation_file, annotation_format=args.annotation_format)
    if (not args.verbose) and (log.INFO >= log.root.level) and (tok.n_lines_tokenized >= 1000):
        sys.stderr.write('\n')
    if profile:
        profile.disable()
        ps = pstats.Stats(profile, stream=args.profile).sort_stats(pstats.SortKey.TIME)
        ps.print_stats()
    end_time = datetime.datetime.now()
    elapsed_time = end_time - start_time
    number_of_lines = ht.get('NUMBER-OF-LINES', 0)
    lines = util.reg_plural('line', number_of_lines)
    if args.verbose:
        log.info(f'End: {end_time}  Elapsed time: {elapsed_time}  Processed {str(number_of_lines)} {lines}')
    elif elapsed_time.seconds >= 10:
        log.info(f'Elapsed time: {elapsed_time.seconds} seconds for {number_of_lines:,} {lines}')
    for f in (args.input, args.output, args.annotation_file, args.profile):
        if f and f not in (sys.stdin, sys.stdout):
            f.close()


if __name__ == "__main__":
    main()
