"""
Pytest tests for the escape-sequence (SGR) to HTML converter (ansi_html.py).

Run from the repo root:
    pytest cypress_log_format/test_ansi_html.py -v
"""

import sys
from pathlib import Path

import pytest

# Set up path for imports
parent_dir = Path(__file__).parent.parent
if str(parent_dir) not in sys.path:
    sys.path.insert(0, str(parent_dir))

from cypress_log_format.ansi_html import (
    PLAIN,
    AttributeState,
    Bold,
    Color,
    Reset,
    Underline,
    apply_sequence,
    contains_escape,
    convert,
    decode_sgr,
    parse_params,
    transition_markup,
)


# ============================================================================
# Decoding
# ============================================================================

@pytest.mark.parametrize(
    "code, attr",
    [
        (0, Reset()),
        (1, Bold(True)),
        (22, Bold(False)),
        (4, Underline(True)),
        (24, Underline(False)),
        (39, Color(None)),
        (30, Color("gray")),
        (31, Color("red")),
        (32, Color("green")),
        (37, Color("white")),
        (90, Color("gray")),
        (92, Color("green")),
        (97, Color("white")),
    ],
)
def test_decode_supported_codes(code, attr):
    assert decode_sgr(code) == attr


@pytest.mark.parametrize("code", [2, 3, 5, 7, 38, 40, 49, 98, 107, 255])
def test_decode_unsupported_codes_are_ignored(code):
    assert decode_sgr(code) is None


def test_parse_params():
    assert parse_params("") == [0]
    assert parse_params(None) == [0]
    assert parse_params("1;32") == [1, 32]
    assert parse_params("0") == [0]


def test_attribute_state_transitions():
    s = PLAIN.apply(Bold(True)).apply(Color("green"))
    assert s == AttributeState(color="green", bold=True)
    assert s.css_classes() == ["ansi-green", "bold"]
    assert s.apply(Color(None)) == AttributeState(bold=True)
    assert s.apply(Reset()).is_plain


def test_transition_markup():
    red = AttributeState(color="red")
    assert transition_markup(PLAIN, PLAIN) == ("", PLAIN)
    assert transition_markup(PLAIN, red) == ('<span class="ansi-red">', red)
    assert transition_markup(red, red) == ("", red)
    assert transition_markup(red, PLAIN) == ("</span>", PLAIN)


def test_contains_escape():
    assert contains_escape("a\x1b[0mb")
    assert not contains_escape("a\x1bb")
    assert not contains_escape("")


# ============================================================================
# convert()
# ============================================================================

def test_no_sequences_means_escaped_text_and_zero_spans():
    out = convert("a < b & c\n✓ passed")
    assert out == "a &lt; b &amp; c\n✓ passed"
    assert "<span" not in out


def test_bold_then_green_yields_one_span():
    """Back-to-back sequences with no text between them open a single span."""
    assert convert("\x1b[1m\x1b[32mOK\x1b[0m") == '<span class="ansi-green bold">OK</span>'


def test_reset_closes_span_and_plain_text_follows():
    assert convert("\x1b[31mred\x1b[0m plain") == '<span class="ansi-red">red</span> plain'


def test_unterminated_span_is_closed_at_end_of_stream():
    out = convert("\x1b[4mlink")
    assert out == '<span class="underline">link</span>'
    assert out.count("<span") == out.count("</span>")


def test_default_color_and_bold_off_are_independent():
    assert convert("\x1b[1;31mA\x1b[39mB\x1b[22mC") == (
        '<span class="ansi-red bold">A</span><span class="bold">B</span>C'
    )


def test_empty_params_are_a_reset():
    assert convert("\x1b[32mA\x1b[mB") == '<span class="ansi-green">A</span>B'


def test_identical_states_coalesce():
    assert convert("\x1b[31mA\x1b[31mB") == '<span class="ansi-red">AB</span>'


def test_unknown_codes_are_ignored():
    assert convert("\x1b[5;32mA") == '<span class="ansi-green">A</span>'
    assert convert("\x1b[38;5;196mX") == "X"


def test_extended_color_arguments_are_not_read_as_codes():
    # The 32 and 1 here are palette indexes / RGB components, not green or bold.
    assert convert("\x1b[38;5;32mX") == "X"
    assert convert("\x1b[48;2;1;32;4mX") == "X"
    assert convert("\x1b[1;38;2;0;128;0mX") == '<span class="bold">X</span>'
    assert convert("\x1b[38;5;1;31mX") == '<span class="ansi-red">X</span>'
    assert apply_sequence(PLAIN, "38") == PLAIN


def test_bright_and_black_colors():
    assert convert("\x1b[92mA\x1b[90mB\x1b[30mC\x1b[0m") == (
        '<span class="ansi-green">A</span><span class="ansi-gray">BC</span>'
    )


def test_non_sgr_sequences_stay_literal():
    assert convert("\x1b[2Kdone") == "\x1b[2Kdone"


def test_text_inside_spans_is_escaped():
    assert convert("\x1b[31m<b>&\x1b[0m") == '<span class="ansi-red">&lt;b&gt;&amp;</span>'


def test_state_carries_across_lines():
    assert convert("\x1b[33mline1\nline2\x1b[0m\nline3") == (
        '<span class="ansi-yellow">line1\nline2</span>\nline3'
    )
