import time

import pytest

from htmlstorage.core.buffer import TextBuffer
from htmlstorage.core.ranges import TextRange
from htmlstorage.core.styles import FONT, FOREGROUND_COLOR
from htmlstorage.core.syntax import SPAN_COMMENT, SPAN_QUOTED, SPAN_TAG, HTMLColorizer


def _buffer(text):
    buf = TextBuffer()
    buf.set_text(text)
    return buf


def _color_at(buf, offset):
    return buf.attributes_at(offset)[0].get(FOREGROUND_COLOR)


def _colors(buf):
    return [_color_at(buf, i) for i in range(len(buf))]


def test_tags_are_colored_and_content_is_not():
    buf = _buffer("<p>hello</p>")

    attrs, effective = buf.attributes_at(0)
    assert attrs[FOREGROUND_COLOR] == buf.tag_color
    assert effective == TextRange(0, 3)

    attrs, effective = buf.attributes_at(3)
    assert FOREGROUND_COLOR not in attrs
    assert effective == TextRange(3, 5)

    attrs, effective = buf.attributes_at(8)
    assert attrs[FOREGROUND_COLOR] == buf.tag_color
    assert effective == TextRange(8, 4)


def test_quoted_values_override_tag_color():
    buf = _buffer('<img src="x.png">')

    attrs, effective = buf.attributes_at(9)
    assert attrs[FOREGROUND_COLOR] == buf.quoted_color
    assert effective == TextRange(9, 7)
    assert buf.attributes_at(0)[1] == TextRange(0, 9)
    assert _color_at(buf, 0) == buf.tag_color
    assert _color_at(buf, 16) == buf.tag_color


def test_comment_wins_over_tags_inside_it():
    text = "<!-- <b> -->"
    buf = _buffer(text)

    attrs, effective = buf.attributes_at(0)
    assert attrs[FOREGROUND_COLOR] == buf.comment_color
    assert effective == TextRange(0, len(text))


def test_comment_between_tags():
    buf = _buffer('<i>a</i><!-- "q" --><i>')
    assert _color_at(buf, 0) == buf.tag_color
    assert _color_at(buf, 3) is None
    assert _color_at(buf, 8) == buf.comment_color
    assert _color_at(buf, 14) == buf.comment_color
    assert _color_at(buf, len(buf) - 1) == buf.tag_color


def test_plain_text_has_no_color():
    buf = _buffer("plain text, no markup")
    assert all(color is None for color in _colors(buf))
    assert buf.attributes_at(0) == ({FONT: buf.font}, TextRange(0, len(buf)))


def test_quotes_outside_tags_are_not_colored():
    buf = _buffer('say "hi" <b>')
    assert _color_at(buf, 4) is None
    assert _color_at(buf, 9) == buf.tag_color


def test_unterminated_tag_gets_no_color():
    buf = _buffer("<div")
    assert all(color is None for color in _colors(buf))


def test_unterminated_comment_is_treated_as_tag_text():
    buf = _buffer("<!-- <b>")
    assert all(color == buf.tag_color for color in _colors(buf))


def test_multiline_comment():
    buf = _buffer("<!--\n<p>\n-->\n<p>")
    assert all(_color_at(buf, i) == buf.comment_color for i in range(12))
    assert _color_at(buf, 12) is None
    assert _color_at(buf, 13) == buf.tag_color


def test_replacing_a_tag_with_plain_text_clears_its_color():
    buf = _buffer("<b>bold</b>")
    assert _color_at(buf, 0) == buf.tag_color

    buf.replace_characters(TextRange(0, 3), "xx")
    assert buf.text == "xxbold</b>"
    assert _color_at(buf, 0) is None
    assert _color_at(buf, 1) is None


def test_editing_creates_tags_incrementally():
    buf = TextBuffer()
    for i, char in enumerate("<a>"):
        buf.insert(i, char)
    assert all(color == buf.tag_color for color in _colors(buf))

    buf.delete(TextRange(2, 1))
    assert all(color is None for color in _colors(buf))


@pytest.mark.parametrize("text", [
    "",
    "<p>hello</p>",
    '<a href="x" title="y">link</a>',
    "<!-- <b> --> <i>",
    "<<>>\"<\"'>",
    "<!-- open <b",
])
def test_colorization_is_idempotent(text):
    buf = _buffer(text)
    before = buf.runs()

    buf.recolorize()
    assert buf.runs() == before

    buf.colorizer.colorize(buf)
    assert buf.runs() == before


def test_every_offset_carries_the_base_font():
    buf = _buffer('<p class="x">t</p><!-- c -->')
    assert all(buf.attributes_at(i)[0][FONT] == buf.font for i in range(len(buf)))


def test_classify_orders_spans_by_layer():
    spans = HTMLColorizer().classify('<a x="1"><!-- c -->')
    assert spans == [
        (TextRange(0, 9), SPAN_TAG),
        (TextRange(5, 3), SPAN_QUOTED),
        (TextRange(9, 10), SPAN_TAG),
        (TextRange(9, 10), SPAN_COMMENT),
    ]


def test_custom_colors_take_effect_on_next_edit():
    buf = _buffer("<b>")
    buf.tag_color = "#112233"
    buf.comment_color = "#445566"
    buf.append("<!--x-->")

    assert _color_at(buf, 0) == "#112233"
    assert _color_at(buf, 3) == "#445566"


def test_malformed_markup_never_raises():
    buf = TextBuffer()
    for text in ["<", ">", '"', "<!--", "-->", "<a \"b>", "\x00<\n>", "<!--->"]:
        buf.set_text(text)
        assert buf.text == text


def _pass_seconds(repeat):
    buf = _buffer('<a x="1">t</a><!-- c -->' * repeat)
    best = None
    for _ in range(3):
        start = time.perf_counter()
        buf.recolorize()
        elapsed = time.perf_counter() - start
        best = elapsed if best is None else min(best, elapsed)
    return best


def test_pass_time_grows_linearly_with_text():
    small = _pass_seconds(250)
    large = _pass_seconds(2000)

    # 8x the text; a quadratic pass would take ~64x as long
    assert large / small < 24
