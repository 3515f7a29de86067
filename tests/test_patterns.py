from htmlstorage.core.patterns import COMMENT_MATCHER, QUOTED_MATCHER, TAG_MATCHER
from htmlstorage.core.ranges import TextRange


def test_tag_matcher_finds_each_tag():
    text = "<p>hello</p>"
    assert TAG_MATCHER.find_all(text) == [TextRange(0, 3), TextRange(8, 4)]


def test_tag_matcher_ignores_unterminated_tag():
    assert TAG_MATCHER.find_all("<div") == []
    assert TAG_MATCHER.find_all("a < b") == []


def test_quoted_matcher_is_non_greedy():
    text = '<a x="1" y="2">'
    assert QUOTED_MATCHER.find_all(text) == [TextRange(5, 3), TextRange(11, 3)]


def test_search_range_limits_matches():
    text = '"out" <a href="in">'
    tag = TAG_MATCHER.find_all(text)[0]
    assert QUOTED_MATCHER.find_all(text, tag) == [TextRange(14, 4)]


def test_search_range_past_end_is_clamped():
    assert TAG_MATCHER.find_all("<b>", TextRange(0, 50)) == [TextRange(0, 3)]


def test_comment_matcher_spans_markup_and_lines():
    text = "x <!-- <b>\nbold</b> --> y"
    assert COMMENT_MATCHER.find_all(text) == [TextRange(2, len(text) - 4)]


def test_comment_matcher_needs_terminator():
    assert COMMENT_MATCHER.find_all("<!-- open") == []
    assert COMMENT_MATCHER.find_all("<!---->") == []


def test_comment_matcher_stops_at_first_terminator():
    text = "<!-- a --> b <!-- c -->"
    assert COMMENT_MATCHER.find_all(text) == [TextRange(0, 10), TextRange(13, 10)]
