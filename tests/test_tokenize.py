"""End-to-end tokenization: worked scenarios, segment interleaving and output properties."""

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from twoken import util
from twoken.twokenize import (Tokenizer, normalize_whitespace, protected_spans, split_contraction,
                              split_edge_punct, tokenize)

CORPUS = [
    "don't",
    "Check http://example.com/page now",
    "I'm   happy :)",
    "U.N.K.L.E. rocks",
    "'hello'",
    "Yay!!! :D :D see you at 12:53 pm",
    "RT <http://example.com> &amp; (see the show), 1,000,000 views...",
    "Mr. Smith -- the U.S. rep -- said \"no\" ♫♫",
    "rock'n'roll   forever\t\tand ever\n",
    "AT&amp;T isn't cheap; pi is 3.14, roughly",
    "“Smart quotes” and ‘single ones’ :-P",
]


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("don't", ["do", "n't"], id="contraction"),
        pytest.param("Check http://example.com/page now", ["Check", "http://example.com/page", "now"], id="url"),
        pytest.param("I'm   happy :)", ["I", "'m", "happy", ":)"], id="emoticon-contraction-whitespace"),
        pytest.param("U.N.K.L.E. rocks", ["U.N.K.L.E.", "rocks"], id="abbreviation"),
        pytest.param("'hello'", ["'", "hello", "'"], id="edge-punct"),
        pytest.param("", [], id="empty"),
    ],
)
def test_worked_scenarios(text: str, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("   ", [], id="only-whitespace"),
        pytest.param("Hello!!!", ["Hello", "!!!"], id="punct-run"),
        pytest.param("Visit www.google.com.", ["Visit", "www.google.com", "."], id="url-trailing-period"),
        pytest.param("read this http://bit.ly/xyz...", ["read", "this", "http://bit.ly/xyz", "..."],
                     id="url-trailing-ellipsis"),
        pytest.param("see http://t.co/abc?x=1&y=2 now", ["see", "http://t.co/abc?x=1&y=2", "now"],
                     id="url-query"),
        pytest.param("<http://example.com>", ["<", "http://example.com", ">"], id="url-angle-brackets"),
        pytest.param("at 12:53 pm", ["at", "12:53", "pm"], id="time"),
        pytest.param("pi is 3.14, roughly", ["pi", "is", "3.14", ",", "roughly"], id="decimal"),
        pytest.param("Price: 1,000,000 dollars", ["Price", ":", "1,000,000", "dollars"], id="number-with-commas"),
        pytest.param("wait -- what", ["wait", "--", "what"], id="separator"),
        pytest.param("♫♫ la la", ["♫♫", "la", "la"], id="decoration"),
        pytest.param("Mr. Smith", ["Mr.", "Smith"], id="title"),
        pytest.param("in U.S today", ["in", "U.S", "today"], id="abbrev-left-context-trimmed"),
        pytest.param("the U.S.", ["the", "U.S."], id="abbrev-final-period"),
        pytest.param("I love &amp; hate", ["I", "love", "&amp;", "hate"], id="entity"),
        pytest.param("AT&amp;T", ["AT", "&amp;", "T"], id="entity-inside-word"),
        pytest.param("isn't.", ["is", "n't", "."], id="contraction-before-period"),
        pytest.param("(see the show)", ["(", "see", "the", "show", ")"], id="parentheses"),
        pytest.param("rock'n'roll forever", ["rock'n'roll", "forever"], id="embedded-apostrophes"),
        pytest.param("Yay!!! :D :D", ["Yay", "!!!", ":D", ":D"], id="emoticons"),
        pytest.param("Don't   stop\tme now!", ["Do", "n't", "stop", "me", "now", "!"], id="sentence"),
    ],
)
def test_tokenize(text: str, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("&amp;&lt;", ["&amp;", "&lt;"], id="touching-entities"),
        pytest.param(":):(", [":)", ":("], id="touching-emoticons"),
        pytest.param(":) hi", [":)", "hi"], id="leading-protected"),
        pytest.param("hi :)", ["hi", ":)"], id="trailing-protected"),
        pytest.param("just plain words", ["just", "plain", "words"], id="no-protected"),
    ],
)
def test_interleaving(text: str, expected):
    assert tokenize(text) == expected


def _segment_summary(s: str):
    return [(segment.surf, segment.protected) for segment in Tokenizer().segments(s)]


def test_segments_alternate_free_and_protected():
    assert _segment_summary("a :) b") == [("a ", False), (":)", True), (" b", False)]
    assert _segment_summary(":)") == [("", False), (":)", True), ("", False)]
    assert _segment_summary("&amp;&lt;") == [("", False), ("&amp;", True), ("", False), ("&lt;", True), ("", False)]
    assert _segment_summary("no protected here") == [("no protected here", False)]
    assert _segment_summary("") == [("", False)]


@pytest.mark.parametrize("text", CORPUS)
def test_segments_cover_text_in_order(text: str):
    s = split_edge_punct(normalize_whitespace(text))
    segments = Tokenizer().segments(s)
    assert ''.join(segment.surf for segment in segments) == s
    assert [segment.protected for segment in segments][::2] == [False] * ((len(segments) + 1) // 2)
    assert len([segment for segment in segments if not segment.protected]) \
        == len([segment for segment in segments if segment.protected]) + 1
    for segment in segments:
        assert s[segment.span.start:segment.span.end] == segment.surf


@pytest.mark.parametrize("text", CORPUS + ["\n\n", "''''", "((((", "http://", ":::::", "a'b'c'd", "…", "\x00"])
def test_tokens_are_non_empty_and_in_source_order(text: str):
    tokens = tokenize(text)
    assert all(token != '' for token in tokens)
    assert all(not any(c.isspace() for c in token) for token in tokens)
    alignments = util.align_tokens(tokens, text)
    assert None not in alignments
    for (_start1, end1), (start2, _end2) in zip(alignments, alignments[1:]):
        assert end1 <= start2


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("a\u00a0b", ["a\u00a0b"], id="non-breaking-space-is-not-a-separator"),
        pytest.param("café's", ["café's"], id="non-ascii-stem-not-decontracted"),
        pytest.param("١٢:٣٤", ["١٢", ":", "٣٤"], id="non-ascii-digits-are-not-a-time"),
        pytest.param("Über.com/x", ["Ü", "ber.com/x"], id="url-word-boundary-is-ascii"),
    ],
)
def test_character_classes_are_ascii(text: str, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    ("text", "expected"),
    [
        pytest.param("\x00", [], id="nul-only"),
        pytest.param("a \x01", ["a"], id="trailing-control-character"),
        pytest.param("a \x01 b", ["a", "b"], id="control-character-between-spaces"),
        pytest.param("\x1fhi\x7f", ["hi\x7f"], id="delete-is-not-trimmed"),
    ],
)
def test_control_characters_are_trimmed(text: str, expected):
    assert tokenize(text) == expected


@pytest.mark.parametrize(
    "text",
    [pytest.param("1," * 140, id="comma-digits"), pytest.param("a-" * 140, id="hyphenated"),
     pytest.param("a" * 280, id="one-long-word"), pytest.param("x.com" * 56, id="repeated-domains")],
)
def test_tweet_length_input_without_whitespace_is_fast(text: str):
    start = time.perf_counter()
    tokens = tokenize(text)
    assert time.perf_counter() - start < 1.0
    assert ''.join(tokens) == text


@pytest.mark.parametrize("text", CORPUS)
def test_protected_spans_survive_as_tokens(text: str):
    s = split_edge_punct(normalize_whitespace(text))
    tokens = tokenize(text)
    for span in protected_spans(s):
        for sub_token in split_contraction(s[span.start:span.end]):
            assert sub_token in tokens


def test_typed_tokens():
    tok = Tokenizer()
    assert tok.typed_tokens("I'm happy :) http://x.com") == [
        ("I", "DECONTRACTION"), ("'m", "DECONTRACTION"), ("happy", "WORD-B"),
        (":)", "EMOTICON"), ("http://x.com", "URL")]
    assert tok.typed_tokens("12:53 -- ok?") == [
        ("12:53", "TIME"), ("--", "SEPARATOR"), ("ok", "WORD-B"), ("?", "PUNCT")]


@pytest.mark.parametrize(
    ("token", "expected"),
    [("hello", "WORD-B"), ("42", "NUMBER-B"), ("$", "SYMBOL-B"), ("(", "PUNCT-B"), ("+", "PUNCT-B"),
     ("\u200b", "MISC-B")],
)
def test_basic_token_type(token: str, expected: str):
    assert Tokenizer().basic_token_type(token) == expected


def test_tokenize_string_joins_tokens():
    assert Tokenizer().tokenize_string("I'm   happy :)") == "I 'm happy :)"


def test_concurrent_calls_share_one_tokenizer():
    texts = CORPUS * 20
    expected = [tokenize(text) for text in texts]
    with ThreadPoolExecutor(max_workers=8) as executor:
        assert list(executor.map(tokenize, texts)) == expected
