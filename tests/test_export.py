from pygments.formatters import HtmlFormatter
from pygments.token import Comment, Name, String, Text

from htmlstorage.core.buffer import TextBuffer
from htmlstorage.utils.export import build_style, highlight, iter_tokens, to_html, to_terminal


def _buffer(text):
    buf = TextBuffer()
    buf.set_text(text)
    return buf


def test_tokens_follow_layer_precedence():
    tokens = list(iter_tokens(_buffer('<img src="x.png"> <!-- <b> -->')))
    assert tokens == [
        (Name.Tag, "<img src="),
        (String, '"x.png"'),
        (Name.Tag, ">"),
        (Text, " "),
        (Comment, "<!-- <b> -->"),
    ]


def test_tokens_cover_the_whole_text():
    buf = _buffer("a <p>b</p> c")
    assert "".join(value for _, value in iter_tokens(buf)) == buf.text


def test_style_uses_buffer_colors():
    buf = TextBuffer()
    buf.tag_color = "#123456"
    style = build_style(buf)

    assert style.style_for_token(Name.Tag)["color"].lower() == "123456"
    assert style.style_for_token(Comment)["color"].lower() == buf.comment_color[1:].lower()


def test_html_export_wraps_tags():
    html = to_html(_buffer("<p>hi</p><!-- <b> -->"))

    assert '<span class="nt">&lt;p&gt;</span>' in html
    assert '<span class="c">&lt;!-- &lt;b&gt; --&gt;</span>' in html
    assert "hi" in html


def test_full_html_document_embeds_css():
    html = to_html(_buffer("<p>hi</p>"), full=True)
    assert "<html" in html
    assert ".nt" in html


def test_terminal_export_emits_escapes():
    output = to_terminal(_buffer("<p>hello</p>"))
    assert "\x1b[" in output
    assert "hello" in output


def test_highlight_with_custom_formatter():
    output = highlight(_buffer("<b>"), HtmlFormatter(nowrap=True))
    assert output.startswith('<span class="nt">&lt;b&gt;</span>')
