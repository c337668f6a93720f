from orydevkit.markdown_render import render_markdown


def test_render_markdown_bold():
    assert render_markdown(b"**foo**").strip() == "<strong>foo</strong><br>"


def test_render_markdown_accepts_text():
    assert render_markdown("**foo**").strip() == "<strong>foo</strong><br>"


def test_render_markdown_two_paragraphs():
    assert render_markdown("one\n\ntwo").strip() == "one<br>\ntwo<br>"


def test_render_markdown_absolute_link_opens_blank():
    assert (
        render_markdown("[a](https://example.com)").strip()
        == '<a href="https://example.com" target="_blank">a</a><br>'
    )


def test_render_markdown_relative_link_has_no_target():
    assert render_markdown("[a](/x)").strip() == '<a href="/x">a</a><br>'


def test_render_markdown_anchor_link_has_no_target():
    assert render_markdown("[a](#top)").strip() == '<a href="#top">a</a><br>'


def test_render_markdown_strikethrough():
    assert render_markdown("~~gone~~").strip() == "<del>gone</del><br>"


def test_render_markdown_table():
    html = render_markdown("| a | b |\n|---|---|\n| 1 | 2 |\n")
    assert "<table>" in html
    assert "<td>1</td>" in html
    assert "<p>" not in html


def test_render_markdown_heading_unchanged():
    assert render_markdown("# Title").strip() == "<h1>Title</h1>"